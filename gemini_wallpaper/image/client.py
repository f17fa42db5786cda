"""Gemini image-generation HTTP client.

Processing flow:
    1. Format the model endpoint from `llm.provider_config`.
    2. Submit the JSON payload with the API key as a query parameter.
    3. Return the parsed JSON response or raise on non-200 status.

Base64:
    - This module does not decode Base64 content; extraction lives in
      `image.service`.

Error handling strategy:
    - Empty API key -> `ImageRequestError` before any network call.
    - Transport failures and non-200 responses -> `ImageRequestError` with a
      sanitized message (the request URL, and so the key, is never included).
"""

import requests

from gemini_wallpaper.llm.client import (
    GeminiRequestError,
    _build_sanitized_http_error,
    post_generate_content,
)
from gemini_wallpaper.llm.provider_config import PROVIDER_LABEL


class ImageRequestError(GeminiRequestError):
    """Image-generation request failed."""


def send_image_request(model: str, payload: dict, api_key: str) -> dict:
    """Send an image-generation request to the configured image model.

    Args:
        model: Image-capable Gemini model (for example `gemini-2.5-flash-image`).
        payload: `contents/parts` request body.
        api_key: API key forwarded as the `key` query parameter.

    Returns:
        Parsed JSON response from the provider.

    Error handling:
        - Missing/empty API key -> `ImageRequestError`
        - Connection errors and timeouts -> `ImageRequestError`
        - Non-200 HTTP response -> `ImageRequestError` carrying `status_code`
    """
    if not api_key:
        raise ImageRequestError("Image API key missing or empty")

    try:
        response = post_generate_content(model, payload, api_key)
    except requests.exceptions.RequestException as err:
        raise ImageRequestError(_build_sanitized_http_error(PROVIDER_LABEL, err)) from None

    if response.status_code != 200:
        raise ImageRequestError(
            f"Image request failed with status {response.status_code}",
            status_code=response.status_code,
        )

    try:
        return response.json()
    except ValueError:
        raise ImageRequestError(
            "Image response was not valid JSON",
            status_code=response.status_code,
        ) from None
