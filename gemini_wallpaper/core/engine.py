"""Wallpaper module: scheduling, update cycle and render entrypoint.

Architectural role:
    Owns one widget instance: its immutable `WallpaperConfig`, its `CycleState`,
    the background scheduler thread and the listeners notified when the image
    changes. Host surfaces (`api.http_api`, `api.cli`) drive it.

Control-flow model (one cycle):
    1. `llm.service.generate_context` picks team/players/scene (fallback-aware).
    2. `prompting.build_image_prompt` builds the image prompt; it is stored as
       diagnostic text before the image call.
    3. `image.service.generate_image` returns the first inline image or `None`.
    4. On an image, the state is swapped and listeners receive the 2000 ms
       transition speed. On `None`, the previous wallpaper stays.

Scheduling:
    A daemon thread runs a cycle at start and then at a fixed rate of
    `update_interval`. Cycles never overlap: `update_wallpaper` holds a
    non-blocking cycle lock, a call arriving while a cycle is running is skipped,
    and scheduler ticks missed by a long cycle are dropped.

Error handling strategy:
    - Startup: empty API key is logged once; nothing is scheduled.
    - Per cycle: every exception is caught at the top of the cycle, logged and
      ignored. The next tick is the only retry.
"""

import logging
import threading
import time
from typing import Callable, List

from gemini_wallpaper.core.state import CycleState, StateSnapshot
from gemini_wallpaper.display.renderer import Element, render
from gemini_wallpaper.image.service import generate_image
from gemini_wallpaper.llm.service import generate_context
from gemini_wallpaper.prompting.prompt_builder import build_image_prompt


logger = logging.getLogger(__name__)

MODULE_NAME = "gemini-wallpaper"
TRANSITION_SPEED_MS = 2000
STOP_JOIN_TIMEOUT = 5.0

UpdateListener = Callable[[int], None]


class WallpaperModule:
    """One wallpaper widget instance."""

    def __init__(self, config, state: CycleState | None = None):
        self.config = config
        self.state = state or CycleState()
        self._listeners: List[UpdateListener] = []
        self._cycle_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    # -----------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def cycle_in_progress(self) -> bool:
        return self._cycle_lock.locked()

    def start(self) -> bool:
        """Validate configuration and start the scheduler thread.

        Returns:
            False when the API key is missing (module stays inert), True otherwise.
        """
        logger.info("Starting module: %s", MODULE_NAME)

        if not self.config.api_key:
            logger.error("%s: API Key is missing!", MODULE_NAME)
            return False

        if self.running:
            return True

        # Each scheduler owns its event so a thread outliving stop() still exits.
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run_schedule,
            args=(self._stop_event,),
            name=f"{MODULE_NAME}-scheduler",
            daemon=True,
        )
        self._thread.start()
        return True

    def stop(self, timeout: float = STOP_JOIN_TIMEOUT) -> None:
        """Cancel future ticks. A cycle already in flight runs to completion."""
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None

    def _run_schedule(self, stop_event: threading.Event) -> None:
        interval = self.config.update_interval_seconds
        next_run = time.monotonic()

        while not stop_event.is_set():
            self.update_wallpaper()

            next_run += interval
            now = time.monotonic()
            if now > next_run:
                missed = int((now - next_run) // interval) + 1
                logger.warning("Update cycle overran %d scheduled tick(s); skipping them", missed)
                next_run += missed * interval

            if stop_event.wait(max(0.0, next_run - now)):
                break

    # -----------------------------------------------------
    # Listeners
    # -----------------------------------------------------

    def add_listener(self, listener: UpdateListener) -> None:
        """Register `listener(speed_ms)`; called after every image swap."""
        self._listeners.append(listener)

    def remove_listener(self, listener: UpdateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, speed: int) -> None:
        for listener in list(self._listeners):
            try:
                listener(speed)
            except Exception:
                logger.exception("Update listener %r failed", listener)

    # -----------------------------------------------------
    # Update cycle
    # -----------------------------------------------------

    def update_wallpaper(self) -> bool:
        """Run one cycle.

        Returns:
            True when a new image was swapped in; False when the cycle was
            skipped, produced no image, or failed.
        """
        if not self._cycle_lock.acquire(blocking=False):
            logger.warning("%s: update cycle already running; skipping", MODULE_NAME)
            return False

        try:
            return self._run_cycle()
        except Exception as err:
            logger.error("%s Error: %s", MODULE_NAME, err)
            logger.debug("Update cycle failure details", exc_info=True)
            return False
        finally:
            self._cycle_lock.release()

    def _run_cycle(self) -> bool:
        config = self.config

        context = generate_context(config)

        prompt = build_image_prompt(
            context.text,
            color=config.color,
            aspect_ratio=config.aspect_ratio,
            orientation=config.orientation,
        )
        self.state.update(
            debug_text=prompt,
            context=context.text,
            used_fallback=context.used_fallback,
        )

        image = generate_image(prompt, config.model, config.api_key)
        if image is None:
            logger.warning("Image response contained no inline data; keeping current wallpaper")
            return False

        self.state.update(
            image_url=image.data_uri,
            loaded=True,
            updated_at=time.time(),
        )
        logger.info("Wallpaper updated (%s, %d base64 chars)", image.mime_type, len(image.data))
        self._notify(TRANSITION_SPEED_MS)
        return True

    # -----------------------------------------------------
    # Render
    # -----------------------------------------------------

    def snapshot(self) -> StateSnapshot:
        return self.state.snapshot()

    def render(self) -> Element:
        return render(self.state.snapshot(), self.config)
