"""Declarative renderer for the wallpaper widget.

Architectural role:
    Turns a `StateSnapshot` plus `WallpaperConfig` into a small element tree the
    host display layer can mount, and serializes that tree to HTML for hosts
    that consume markup (see `api.http_api`).

Visual adjustments:
    - Monochrome: `grayscale(100%) brightness(0.6) contrast(1.1)`.
    - Color: `brightness(0.7)`.
    - Optional `blur(Npx)` with N clamped to [0, 10].
    - Wrapper opacity taken from configuration.

Determinism:
    Pure function of its inputs; no I/O and no shared state.
"""

import html
import math
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional


MAX_BLUR = 10
MIN_BLUR = 0

WRAPPER_CLASS = "gemini-wallpaper-wrapper"
IMAGE_CLASS = "gemini-wallpaper-image fade-in"
DEBUG_PREFIX = "DEBUG PROMPT: "

MONOCHROME_FILTER = "grayscale(100%) brightness(0.6) contrast(1.1)"
COLOR_FILTER = "brightness(0.7)"

DEBUG_BOX_STYLE = {
    "position": "absolute",
    "bottom": "20px",
    "left": "20px",
    "right": "20px",
    "color": "lime",
    "background-color": "rgba(0,0,0,0.8)",
    "padding": "10px",
    "font-family": "monospace",
    "font-size": "12px",
    "z-index": "9999",
    "pointer-events": "auto",
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass
class Element:
    """Minimal DOM-like node."""

    tag: str
    class_name: str = ""
    style: Dict[str, str] = field(default_factory=dict)
    attrs: Dict[str, str] = field(default_factory=dict)
    text: Optional[str] = None
    children: List["Element"] = field(default_factory=list)

    def find(self, tag: str) -> Optional["Element"]:
        """Depth-first search for the first descendant with `tag`."""
        for child in self.children:
            if child.tag == tag:
                return child
            found = child.find(tag)
            if found is not None:
                return found
        return None

    def to_html(self) -> str:
        attrs = dict(self.attrs)
        if self.class_name:
            attrs["class"] = self.class_name
        if self.style:
            attrs["style"] = "; ".join(f"{k}: {v}" for k, v in self.style.items())

        rendered_attrs = "".join(
            f' {name}="{html.escape(str(value), quote=True)}"'
            for name, value in attrs.items()
        )

        if self.tag == "img":
            return f"<img{rendered_attrs}>"

        inner = html.escape(self.text) if self.text else ""
        inner += "".join(child.to_html() for child in self.children)
        return f"<{self.tag}{rendered_attrs}>{inner}</{self.tag}>"


def parse_blur(value) -> int:
    """Read a blur setting the way a lenient integer parse would.

    Integers pass through, floats truncate, strings use their leading integer
    (`"5px"` -> 5). NaN, infinities and anything unparseable read as 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


def clamp_blur(value) -> int:
    return max(MIN_BLUR, min(MAX_BLUR, parse_blur(value)))


def build_filter_string(color: bool, blur=0) -> str:
    """Compose the CSS `filter` value for the wallpaper image."""
    filters = [COLOR_FILTER if color else MONOCHROME_FILTER]

    amount = clamp_blur(blur)
    if amount > 0:
        filters.append(f"blur({amount}px)")

    return " ".join(filters).strip()


def render(state, config) -> Element:
    """Build the widget element tree.

    Args:
        state: `StateSnapshot` (or anything exposing `image_url`/`debug_text`).
        config: `WallpaperConfig`.

    Returns:
        Wrapper `Element` with an optional `img` and optional debug overlay.
    """
    wrapper = Element(
        tag="div",
        class_name=WRAPPER_CLASS,
        style={"opacity": str(config.opacity)},
    )

    if state.image_url:
        wrapper.children.append(
            Element(
                tag="img",
                class_name=IMAGE_CLASS,
                style={"filter": build_filter_string(config.color, config.blur)},
                attrs={"src": state.image_url},
            )
        )

    if state.debug_text and getattr(config, "show_prompt", True):
        wrapper.children.append(
            Element(
                tag="div",
                style=dict(DEBUG_BOX_STYLE),
                text=DEBUG_PREFIX + state.debug_text,
            )
        )

    return wrapper
