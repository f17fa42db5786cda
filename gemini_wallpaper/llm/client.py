"""Gemini transport client for text-generation requests.

Architectural role:
    Executes `generateContent` HTTP requests and converts transport failures into
    sanitized, provider-labeled exceptions.

Model invocation flow:
    `service.generate_context` -> `send_request(model, payload, api_key)` ->
    parsed JSON response dict.

Retry behavior:
    No retry loop is implemented. Each HTTP call is attempted once with the
    configured timeout (`REQUEST_TIMEOUT`, 120s by default).

Failure handling model:
    The API key travels in the `key` query parameter, so raw `requests` errors
    embed it in their message. Transport failures and unparseable bodies are
    re-raised as `TextRequestError` with the original exception suppressed.
    HTTP status errors are logged (sanitized) and the JSON error body is
    returned, leaving the fallback decision to `service.extract_context`.
"""

import logging

import requests

from gemini_wallpaper.llm.provider_config import (
    PROVIDER_LABEL,
    REQUEST_TIMEOUT,
    build_generate_url,
)


logger = logging.getLogger(__name__)


class GeminiRequestError(RuntimeError):
    """Sanitized transport failure against the Gemini API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TextRequestError(GeminiRequestError):
    """Text-generation request failed."""


def _build_sanitized_http_error(provider_name: str, err: requests.exceptions.RequestException) -> str:
    """Build provider-labeled HTTP error text without exposing raw internals.

    Args:
        provider_name: Active provider label.
        err: Request exception instance.

    Returns:
        Sanitized error string with optional status code.
    """
    status_code = None
    if getattr(err, "response", None) is not None:
        status_code = getattr(err.response, "status_code", None)

    label = str(provider_name or "provider").upper()
    if status_code:
        return f"{label} HTTP ERROR ({status_code})"
    return f"{label} HTTP ERROR ({type(err).__name__})"


def build_payload(text: str) -> dict:
    """Wrap prompt text in the `contents/parts` request envelope."""
    return {
        "contents": [
            {
                "parts": [
                    {"text": text}
                ]
            }
        ]
    }


def post_generate_content(model: str, payload: dict, api_key: str) -> requests.Response:
    """POST one `generateContent` request and return the raw response.

    The response status is not checked here; callers decide how to map it.
    """
    return requests.post(
        build_generate_url(model),
        params={"key": api_key},
        headers={"Content-Type": "application/json"},
        json=payload,
        timeout=REQUEST_TIMEOUT,
    )


def send_request(model: str, payload: dict, api_key: str) -> dict:
    """Send one text-generation request and return the decoded JSON body.

    Args:
        model: Gemini model name (for example `gemini-2.5-flash`).
        payload: Request body, normally produced by `build_payload`.
        api_key: API key forwarded as the `key` query parameter.

    Returns:
        Parsed JSON response.

    Non-2xx responses with a JSON body are logged and returned as-is; they
    have no `candidates`, so the context step falls back.

    Raises:
        TextRequestError: on connection failures, timeouts and bodies that are
            not valid JSON.
    """
    try:
        response = post_generate_content(model, payload, api_key)
    except requests.exceptions.RequestException as err:
        raise TextRequestError(_build_sanitized_http_error(PROVIDER_LABEL, err)) from None

    try:
        data = response.json()
    except ValueError:
        raise TextRequestError(
            f"{PROVIDER_LABEL.upper()} INVALID JSON RESPONSE",
            status_code=response.status_code,
        ) from None

    # Error bodies carry no candidates; the caller substitutes its fallback.
    try:
        response.raise_for_status()
    except requests.exceptions.HTTPError as err:
        logger.warning(
            "%s; continuing with error body",
            _build_sanitized_http_error(PROVIDER_LABEL, err),
        )

    return data
