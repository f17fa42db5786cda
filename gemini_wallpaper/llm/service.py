"""Context-selection step of the wallpaper cycle.

Architectural role:
    Bridges prompt construction (`gemini_wallpaper.prompting`) to transport
    (`gemini_wallpaper.llm.client`) and turns the raw response into an explicit
    `ContextResult`.

Model call flow:
    config -> `build_context_prompt` -> payload -> `client.send_request(...)` ->
    `extract_context`.

Fallback policy:
    A response without `candidates[0].content.parts[0].text` (or with an empty
    text) is not an error. The fixed `FALLBACK_CONTEXT` is substituted and the
    result is flagged with `used_fallback=True`.

Determinism:
    Payload construction and extraction are deterministic for fixed inputs.
    Generated output remains non-deterministic because inference runs remotely.
"""

import logging
from dataclasses import dataclass

from gemini_wallpaper.llm.client import build_payload, send_request
from gemini_wallpaper.llm.provider_config import TEXT_MODEL_NAME
from gemini_wallpaper.prompting.prompt_builder import (
    CONTEXT_OUTPUT_SUFFIX,
    build_context_prompt,
)


logger = logging.getLogger(__name__)

FALLBACK_CONTEXT = "Sports stadium atmosphere"


@dataclass(frozen=True)
class ContextResult:
    """Scene description chosen for one cycle.

    Attributes:
        text: Description forwarded into the image prompt.
        used_fallback: True when `text` is `FALLBACK_CONTEXT` because the
            response carried no usable text.
    """

    text: str
    used_fallback: bool = False

    @classmethod
    def fallback(cls) -> "ContextResult":
        return cls(text=FALLBACK_CONTEXT, used_fallback=True)


def _first_text(data) -> str | None:
    """Return `candidates[0].content.parts[0].text` or `None`."""
    if not isinstance(data, dict):
        return None

    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None

    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    if not isinstance(content, dict):
        return None

    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None

    text = parts[0].get("text")
    if not isinstance(text, str) or not text:
        return None
    return text


def extract_context(data) -> ContextResult:
    """Map a text-generation response to a `ContextResult`."""
    text = _first_text(data)
    if text is None:
        return ContextResult.fallback()
    return ContextResult(text=text)


def generate_context(config, model: str = TEXT_MODEL_NAME) -> ContextResult:
    """Ask the text model for a sports scene matching the configured preferences.

    Args:
        config: `WallpaperConfig` carrying key, teams, leagues and injection.
        model: Text model name.

    Returns:
        `ContextResult`; never `None`.

    Raises:
        TextRequestError: transport failures propagate to the cycle runner.
    """
    prompt = build_context_prompt(
        teams=config.teams,
        leagues=config.leagues,
        injection=config.prompt_injection,
    )
    payload = build_payload(f"{prompt}{CONTEXT_OUTPUT_SUFFIX}")

    data = send_request(model, payload, config.api_key)
    result = extract_context(data)

    if result.used_fallback:
        logger.warning("Text response had no usable context; using %r", FALLBACK_CONTEXT)
    return result
