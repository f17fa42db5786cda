"""Per-module cycle state.

`CycleState` holds the only mutable data of a widget instance: the image
currently on display and the last image prompt. The cycle runner writes it and
the renderer reads it; both go through the instance lock.
"""

import threading
from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class StateSnapshot:
    """Immutable view of `CycleState` handed to renderers and host surfaces."""

    image_url: str | None = None
    debug_text: str | None = None
    context: str | None = None
    used_fallback: bool = False
    loaded: bool = False
    updated_at: float | None = None


@dataclass
class CycleState:
    """Mutable state owned by one `WallpaperModule`."""

    _snapshot: StateSnapshot = field(default_factory=StateSnapshot)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def snapshot(self) -> StateSnapshot:
        with self._lock:
            return self._snapshot

    def update(self, **changes) -> StateSnapshot:
        """Replace the named fields and return the new snapshot."""
        with self._lock:
            self._snapshot = replace(self._snapshot, **changes)
            return self._snapshot

    @property
    def image_url(self) -> str | None:
        return self.snapshot().image_url

    @property
    def debug_text(self) -> str | None:
        return self.snapshot().debug_text
