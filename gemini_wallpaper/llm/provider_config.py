"""Provider/runtime configuration for the Gemini transport layer.

Architectural role:
    Centralizes endpoint selection, model names and credential lookup for
    `gemini_wallpaper.llm.client` and `gemini_wallpaper.image.client`.

Model call flow integration:
    - `llm.service.generate_context` consumes `TEXT_MODEL_NAME`.
    - `image.service.generate_image` receives the image model from the widget
      configuration and formats it into `GEMINI_URL_TEMPLATE`.
    - Both clients consume `REQUEST_TIMEOUT` and `PROVIDER_LABEL`.

Determinism:
    Deterministic for a fixed process environment and key files. Values are
    resolved at import time (plus runtime key-file reads in `load_key`).

Failure behavior:
    Missing key material is represented as `None`; the widget treats it as a
    fatal startup condition.
"""

import os
from dotenv import load_dotenv

load_dotenv()

PROVIDER_LABEL = "gemini"

# Base endpoint; overridable for proxies and local test doubles.
GEMINI_BASE_URL = os.getenv(
    "GEMINI_BASE_URL",
    "https://generativelanguage.googleapis.com/v1beta/models",
).rstrip("/")

GEMINI_URL_TEMPLATE = GEMINI_BASE_URL + "/{model}:generateContent"

# Context selection always runs on the text model; the image model is part of
# the widget configuration.
TEXT_MODEL_NAME = os.getenv("GEMINI_TEXT_MODEL", "gemini-2.5-flash")
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"

REQUEST_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT", "120"))

DEFAULT_KEY_FILE = "config/gemini.key"


def build_generate_url(model: str) -> str:
    """Return the `generateContent` endpoint for `model`."""
    return GEMINI_URL_TEMPLATE.format(model=model)


def load_key(path=DEFAULT_KEY_FILE):
    """Load API key from environment override or key file.

    Resolution order:
        1. Environment variable inferred from file stem (for example
           `config/gemini.key` -> `GEMINI_API_KEY`).
        2. Raw file contents at `path`.

    Args:
        path: Configured key file path or `None`.

    Returns:
        Key string or `None` when not available.

    Edge cases:
        - `None` path returns `None`.
        - Missing file returns `None`.
        - Empty file returns `None`.
    """
    if not path:
        return None
    key_name = os.path.splitext(os.path.basename(path))[0].upper() + "_API_KEY"
    env_value = os.getenv(key_name)
    if env_value:
        return env_value
    if not os.path.exists(path):
        return None
    with open(path, "r") as f:
        return f.read().strip() or None
