"""Text-generation access package.

Architectural role:
    Provides endpoint configuration, request-payload construction, and the
    transport adapter used by the wallpaper cycle to pick a sports context.

Module split:
    - `provider_config`: environment-driven endpoint, model and key resolution.
    - `service`: prompt-to-context adapter with fallback policy.
    - `client`: Gemini HTTP transport and sanitized error mapping.
"""
