"""Prompt assembly helpers used by the wallpaper cycle.

This module only builds prompt strings from configured preferences. Model
invocation, response parsing and fallback handling happen outside this module.

Design constraints:
    - Deterministic construction for identical inputs.
    - Fixed ordering of prompt components.
    - No hidden side effects (no I/O, no global state mutation).

Prompt safety model:
    - `injection` is user-owned configuration and is interpolated as a raw string.
    - Negative constraints for the image (no text/logos/watermarks) are
      instruction-led, not enforced.
"""

from typing import Iterable


ANY_TEAM = "Any major team"
ANY_LEAGUE = "Any major league"

# Appended to the context prompt when it is sent to the text model.
CONTEXT_OUTPUT_SUFFIX = " Return ONLY the subject and description. No markdown."

COLOR_STYLE = "vibrant, dynamic colors, cinematic lighting, hyper-realistic"
MONOCHROME_STYLE = (
    "black and white, noir aesthetic, high contrast, dramatic shadows, minimalist"
)

PORTRAIT_ORIENTATION = "vertical portrait orientation"
LANDSCAPE_ORIENTATION = "horizontal landscape orientation"


def _join_or_default(items: Iterable[str], default: str) -> str:
    cleaned = [str(item).strip() for item in items or [] if str(item).strip()]
    if not cleaned:
        return default
    return ", ".join(cleaned)


# =========================================================
# CONTEXT PROMPT
# =========================================================
# Component order:
#   1) Sport/day selection
#   2) Team selection constrained to the configured lists
#   3) Player and scene requirements
#   4) Optional "Additional instructions" line
#   5) Output contract

def build_context_prompt(teams=(), leagues=(), injection: str = "") -> str:
    """Build the text-model prompt that picks today's team, players and scene.

    Args:
        teams: Preferred team names. Empty -> `ANY_TEAM`.
        leagues: Preferred league names. Empty -> `ANY_LEAGUE`.
        injection: Free-text instruction appended verbatim when non-empty.

    Returns:
        Prompt string without the output-format suffix.
    """
    teams_list = _join_or_default(teams, ANY_TEAM)
    leagues_list = _join_or_default(leagues, ANY_LEAGUE)

    lines = [
        "Identify a major global sport today.",
        "Team selection : Includes only one of the teams from this teams list "
        f"(Randomly) : [{teams_list}] OR one team from this leagues list "
        f"(Randomly): [{leagues_list}].",
        "Player Selection : It must contain one or more major player from this "
        "team selection.",
        "Scene : Actual Team Sports stadium atmosphere, realistic to the sport "
        "(Number of players, players position on the field, camera angles, "
        "quantity of objects (balls, puck, sticks, etc...))",
    ]

    if injection and injection.strip():
        lines.append(f"Additional instructions: {injection.strip()}")

    lines.append(
        "Output : Return the team name, the player(s) name and a description of "
        "them in an realistic intense action scene. This output will be used to "
        "send back to gemini to generate an image."
    )
    return "\n".join(lines)


# =========================================================
# IMAGE PROMPT
# =========================================================

def style_descriptor(color: bool) -> str:
    return COLOR_STYLE if color else MONOCHROME_STYLE


def orientation_descriptor(orientation: str) -> str:
    # Anything other than "portrait" renders as landscape.
    if orientation == "portrait":
        return PORTRAIT_ORIENTATION
    return LANDSCAPE_ORIENTATION


def build_image_prompt(
    context: str,
    color: bool = False,
    aspect_ratio: str = "16:9",
    orientation: str = "landscape",
) -> str:
    """Build the image-model prompt for one wallpaper.

    Args:
        context: Scene description from the context step (or its fallback).
        color: Color rendering when true, black and white otherwise.
        aspect_ratio: Free-form ratio string such as `16:9`.
        orientation: `portrait` or `landscape`.

    Returns:
        Prompt string; also stored as the cycle's diagnostic text.
    """
    return (
        f"A {style_descriptor(color)} 4k wallpaper of {context}.\n"
        f"Format: {aspect_ratio}, {orientation_descriptor(orientation)}.\n"
        "Style: Photorealistic, cinematic, clean background suitable for a UI overlay.\n"
        "NO TEXT, NO LOGOS, NO WATERMARKS."
    )
