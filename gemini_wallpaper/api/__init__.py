"""Host adapter package.

Architectural role:
- Defines the external interaction boundary for HTTP and CLI hosts.
- Performs transport-level validation and response shaping.
- Delegates scheduling, generation and rendering to the core layer.
"""
