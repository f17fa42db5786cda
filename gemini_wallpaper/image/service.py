"""Image step of the wallpaper cycle.

Role in pipeline:
    - Receives the finished image prompt from the cycle runner.
    - Sends it to the configured image model.
    - Searches the response for the first inline-data part and exposes it as an
      `InlineImage`, or `None` when the response carries no image.

Base64:
    - The payload is kept as the provider's Base64 string; `InlineImage.data_uri`
      embeds it unchanged. `InlineImage.decode()` is only used by host surfaces
      that need raw bytes.

Error handling strategy:
    - Exceptions from `image.client` are propagated to the cycle runner.
    - A response without inline data is not an error; it yields `None`.
"""

import base64
import binascii
from dataclasses import dataclass

from gemini_wallpaper.image.client import send_image_request
from gemini_wallpaper.llm.client import build_payload


DEFAULT_MIME_TYPE = "image/png"


@dataclass(frozen=True)
class InlineImage:
    """Base64 image payload embedded in a `generateContent` response."""

    mime_type: str
    data: str

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"

    def decode(self) -> bytes:
        return base64.b64decode(self.data)


def find_inline_image(data) -> InlineImage | None:
    """Return the first part of `candidates[0].content.parts` with inline data.

    Parts are matched on the presence of an `inlineData` object, empty or not;
    a matching part without `data` yields `None` rather than continuing the scan.
    A missing `mimeType` falls back to `DEFAULT_MIME_TYPE`.
    """
    if not isinstance(data, dict):
        return None

    candidates = data.get("candidates") or []
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None

    content = candidates[0].get("content") or {}
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return None

    part = next(
        (p for p in parts if isinstance(p, dict) and isinstance(p.get("inlineData"), dict)),
        None,
    )
    if part is None:
        return None

    inline = part["inlineData"]
    if not isinstance(inline, dict) or not inline.get("data"):
        return None

    return InlineImage(
        mime_type=inline.get("mimeType") or DEFAULT_MIME_TYPE,
        data=inline["data"],
    )


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a `data:<mime>;base64,<payload>` URI into mime type and bytes.

    Raises:
        ValueError: when `uri` is not a Base64 data URI.
    """
    if not uri or not uri.startswith("data:") or ";base64," not in uri:
        raise ValueError("Not a base64 data URI")

    header, payload = uri[len("data:"):].split(";base64,", 1)
    try:
        return header or DEFAULT_MIME_TYPE, base64.b64decode(payload, validate=True)
    except binascii.Error as err:
        raise ValueError(f"Invalid base64 payload: {err}") from err


def generate_image(prompt: str, model: str, api_key: str) -> InlineImage | None:
    """Generate a wallpaper image for `prompt`.

    Args:
        prompt: Full image prompt.
        model: Image model name from the widget configuration.
        api_key: Gemini API key.

    Returns:
        `InlineImage` for the first inline-data part, or `None`.
    """
    response = send_image_request(model, build_payload(prompt), api_key)
    return find_inline_image(response)
