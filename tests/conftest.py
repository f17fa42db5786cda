"""
Shared test fixtures for the gemini-wallpaper test suite.

HTTP is never touched: `fake_gemini` replaces `requests.post` and routes each
call to a canned text or image response based on the model in the URL.
"""

import pytest
import requests
from unittest.mock import Mock

from gemini_wallpaper.core.config import WallpaperConfig
from gemini_wallpaper.core.engine import WallpaperModule
from gemini_wallpaper.llm.provider_config import TEXT_MODEL_NAME


API_KEY = "secret-test-key"


# ---------------------------------------------------------------------------
# Response factories
# ---------------------------------------------------------------------------

def make_response(payload=None, status_code=200):
    """Mock `requests.Response` with `json()` and `raise_for_status()`."""
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Client Error for url: https://example.test/?key={API_KEY}",
            response=response,
        )
    else:
        response.raise_for_status.return_value = None
    return response


def text_payload(text="Montreal Canadiens: Nick Suzuki splits the defence."):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def image_payload(mime_type="image/png", data="AAA="):
    return {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"text": "Here is your wallpaper."},
                        {"inlineData": {"mimeType": mime_type, "data": data}},
                    ]
                }
            }
        ]
    }


class FakeGemini:
    """Callable standing in for `requests.post`.

    `text` and `image` may be a response mock or an exception instance to raise.
    """

    def __init__(self, text=None, image=None):
        self.text = text if text is not None else make_response(text_payload())
        self.image = image if image is not None else make_response(image_payload())
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if url.endswith(f"/{TEXT_MODEL_NAME}:generateContent"):
            result = self.text
        else:
            result = self.image
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def text_calls(self):
        return [c for c in self.calls if c[0].endswith(f"/{TEXT_MODEL_NAME}:generateContent")]

    @property
    def image_calls(self):
        return [c for c in self.calls if not c[0].endswith(f"/{TEXT_MODEL_NAME}:generateContent")]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_gemini(monkeypatch):
    """Install a default `FakeGemini` (text + PNG image) over `requests.post`."""
    fake = FakeGemini()
    monkeypatch.setattr("gemini_wallpaper.llm.client.requests.post", fake)
    return fake


@pytest.fixture
def config():
    """Configured instance with a key and stock preferences."""
    return WallpaperConfig(api_key=API_KEY)


@pytest.fixture
def module(config):
    mod = WallpaperModule(config)
    yield mod
    mod.stop()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No key in the environment and no `config/gemini.key` in cwd."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("WALLPAPER_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
