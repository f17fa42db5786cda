"""
HTTP adapter exposing a wallpaper module to display hosts.

Architectural role:
- Own one `WallpaperModule` per application instance.
- Serve the rendered element tree as HTML for browser-based hosts.
- Expose a JSON state snapshot, the raw image bytes and a manual refresh hook.

Endpoint responsibilities:
- `GET /`: rendered widget markup.
- `GET /state`: JSON snapshot (image presence, prompt, context, timestamps).
- `GET /image`: decoded current image with its mime type; 404 when none.
- `POST /refresh`: queue one update cycle; 409 when the API key is missing.

Lifecycle:
- With `autostart=True`, the module scheduler starts with the application and
  stops on shutdown.

Side effects:
- Loads environment variables at import time via `load_dotenv()`.
- Runs refresh cycles on FastAPI's background task executor.

Run with: `uvicorn gemini_wallpaper.api.http_api:app`.
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from contextlib import asynccontextmanager

from fastapi import BackgroundTasks, FastAPI
from fastapi.responses import HTMLResponse, JSONResponse, Response

from gemini_wallpaper.core.config import load_config
from gemini_wallpaper.core.engine import MODULE_NAME, WallpaperModule
from gemini_wallpaper.image.service import decode_data_uri


logger = logging.getLogger(__name__)

PAGE_TEMPLATE = (
    "<!DOCTYPE html>\n"
    "<html><head><meta charset=\"utf-8\"><title>{title}</title></head>"
    "<body style=\"margin: 0; background: black\">{body}</body></html>"
)


def create_app(module: WallpaperModule | None = None, autostart: bool = True) -> FastAPI:
    """Build the FastAPI application around `module`.

    A module is created from `load_config()` when none is given.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.module is None:
            app.state.module = WallpaperModule(load_config())
        if autostart:
            app.state.module.start()
        try:
            yield
        finally:
            if autostart:
                app.state.module.stop()

    app = FastAPI(title=MODULE_NAME, lifespan=lifespan)
    app.state.module = module

    def current_module() -> WallpaperModule:
        if app.state.module is None:
            app.state.module = WallpaperModule(load_config())
        return app.state.module

    # ============================================================
    # Rendered widget
    # ============================================================

    @app.get("/", response_class=HTMLResponse)
    def index():
        """Return the widget wrapped in a minimal page."""
        body = current_module().render().to_html()
        return HTMLResponse(PAGE_TEMPLATE.format(title=MODULE_NAME, body=body))

    # ============================================================
    # State snapshot
    # ============================================================

    @app.get("/state")
    def state():
        """
        Return the current cycle state.

        The image itself is not inlined; use `GET /image`.
        """
        mod = current_module()
        snap = mod.snapshot()
        return {
            "module": MODULE_NAME,
            "running": mod.running,
            "cycle_in_progress": mod.cycle_in_progress,
            "loaded": snap.loaded,
            "has_image": snap.image_url is not None,
            "debug_text": snap.debug_text,
            "context": snap.context,
            "used_fallback": snap.used_fallback,
            "updated_at": snap.updated_at,
        }

    @app.get("/image")
    def image():
        """Return the current wallpaper as raw bytes."""
        snap = current_module().snapshot()
        if not snap.image_url:
            return JSONResponse(status_code=404, content={"error": "No image generated yet"})

        try:
            mime_type, payload = decode_data_uri(snap.image_url)
        except ValueError:
            logger.exception("Stored image URI could not be decoded")
            return JSONResponse(status_code=500, content={"error": "Stored image is invalid"})

        return Response(content=payload, media_type=mime_type)

    # ============================================================
    # Manual refresh
    # ============================================================

    @app.post("/refresh", status_code=202)
    def refresh(background_tasks: BackgroundTasks):
        """Queue one update cycle."""
        mod = current_module()
        if not mod.config.api_key:
            return JSONResponse(status_code=409, content={"error": "API key is missing"})

        background_tasks.add_task(mod.update_wallpaper)
        return {"status": "queued", "cycle_in_progress": mod.cycle_in_progress}

    return app


app = create_app()
