"""Core orchestration package.

Architectural role:
    Exposes the widget layer that sits between host entrypoints (HTTP/CLI) and
    lower-level subsystems (prompting, text and image adapters, rendering).

Composition:
    - `config`: immutable widget configuration and its loader.
    - `state`: per-instance cycle state with locked snapshots.
    - `engine`: scheduler, update cycle and render entrypoint.
"""
