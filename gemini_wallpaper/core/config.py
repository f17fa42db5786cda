"""Widget configuration model and loader.

Architectural role:
    Defines the immutable `WallpaperConfig` consumed by the cycle runner, the
    prompt builders and the renderer, plus `load_config` which merges defaults,
    an optional JSON file and caller overrides.

Key naming:
    Hosts supply camelCase keys (`apiKey`, `updateInterval`, ...). Python callers
    may use the snake_case attribute names. Both are accepted.

API key resolution order:
    1. Explicit `apiKey` in file or overrides.
    2. `llm.provider_config.load_key()` (`GEMINI_API_KEY` env, then
       `config/gemini.key`).
    An unresolved key is left empty; the module refuses to start on it.

Failure behavior:
    Invalid values raise `pydantic.ValidationError` (a `ValueError`). A missing
    or malformed JSON file raises `OSError` / `json.JSONDecodeError`.
"""

import json
import os
from typing import Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from gemini_wallpaper.llm.provider_config import DEFAULT_IMAGE_MODEL, load_key


CONFIG_PATH_ENV = "WALLPAPER_CONFIG"

DEFAULT_UPDATE_INTERVAL_MS = 4 * 60 * 60 * 1000


class WallpaperConfig(BaseModel):
    """User preferences for one wallpaper widget instance."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    api_key: str = Field("", alias="apiKey")
    model: str = DEFAULT_IMAGE_MODEL
    update_interval: int = Field(DEFAULT_UPDATE_INTERVAL_MS, alias="updateInterval", gt=0)
    opacity: float = Field(0.5, ge=0.0, le=1.0)

    # Visual options
    color: bool = False
    # Kept as supplied; clamped to [0, 10] at render time.
    blur: Union[int, float, str] = 0
    aspect_ratio: str = Field("16:9", alias="aspectRatio")
    orientation: Literal["landscape", "portrait"] = "landscape"

    # Content preferences
    leagues: Tuple[str, ...] = ()
    teams: Tuple[str, ...] = ()
    prompt_injection: str = Field("", alias="promptInjection")

    show_prompt: bool = Field(True, alias="showPrompt")

    @property
    def update_interval_seconds(self) -> float:
        return self.update_interval / 1000.0


def _alias_map() -> dict:
    mapping = {}
    for name, field in WallpaperConfig.model_fields.items():
        mapping[name] = field.alias or name
    return mapping


def _normalize_keys(raw: dict) -> dict:
    """Rewrite snake_case keys to their camelCase aliases."""
    mapping = _alias_map()
    return {mapping.get(key, key): value for key, value in raw.items()}


def read_config_file(path) -> dict:
    """Read a JSON object from `path`.

    Raises:
        ValueError: when the file holds something other than a JSON object.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    return data


def load_config(path=None, **overrides) -> WallpaperConfig:
    """Build a `WallpaperConfig` from file, environment and overrides.

    Args:
        path: JSON config file. Defaults to the `WALLPAPER_CONFIG` environment
            variable; no file is read when neither is set.
        **overrides: Individual settings, camelCase or snake_case.

    Returns:
        Validated, frozen configuration.
    """
    data = {}

    path = path or os.getenv(CONFIG_PATH_ENV)
    if path:
        data.update(_normalize_keys(read_config_file(path)))

    data.update(_normalize_keys(overrides))

    if not data.get("apiKey"):
        data["apiKey"] = load_key() or ""

    return WallpaperConfig.model_validate(data)
