import asyncio
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, Response

from shot_api import archive
from shot_api.batch import capture_all
from shot_api.browser import capture
from shot_api.config import Config, get_config
from shot_api.console import console
from shot_api.exceptions import RenderError, ValidationError
from shot_api.validation import parse_batch_request, parse_screenshot_request

API_PREFIXES = ("screenshot", "batch-screenshot")
FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def log_abandoned(task: asyncio.Task) -> None:
    """Retrieve the outcome of a capture whose request was cancelled."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        console.log(f"Abandoned capture failed: {error!r} caused by {error.__cause__!r}")


async def shielded(coro):
    """Await ``coro`` so that cancelling the caller does not cancel it."""
    task = asyncio.ensure_future(coro)
    try:
        return await asyncio.shield(task)
    except asyncio.CancelledError:
        task.add_done_callback(log_abandoned)
        raise


def not_found() -> JSONResponse:
    return JSONResponse({"error": "Not found."}, status_code=404)


def static_fallback(static_dir: Path, path: str):
    """Serve a file from ``static_dir``, or its index.html for client routes."""
    root = static_dir.resolve()
    candidate = (root / path).resolve()
    if candidate.is_relative_to(root) and candidate.is_file():
        return FileResponse(candidate)

    index = root / "index.html"
    if path.startswith(API_PREFIXES) or not index.is_file():
        return not_found()
    return FileResponse(index)


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Build the screenshot API around an explicit config."""
    config = config or get_config()
    app = FastAPI(title="shot-api")
    app.state.config = config

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Allows all origins
        allow_methods=["*"],  # Allows all methods
        allow_headers=["*"],  # Allows all headers
    )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse({"error": exc.message}, status_code=400)

    @app.exception_handler(RenderError)
    async def render_error_handler(request: Request, exc: RenderError):
        console.log(f"{exc.message} {request.url}: {exc.__cause__!r}")
        return JSONResponse({"error": exc.message}, status_code=500)

    @app.get("/screenshot")
    async def get_screenshot(request: Request):
        shot = parse_screenshot_request(request.query_params)
        # keep rendering (and browser cleanup) going if the client goes away
        image = await shielded(capture(shot, config))
        return Response(
            content=image,
            media_type="image/png",
            headers={
                "Content-Disposition": 'inline; filename="screenshot.png"',
                "Cache-Control": "no-store",
            },
        )

    @app.get("/batch-screenshot")
    async def get_batch_screenshot(request: Request):
        batch = parse_batch_request(request.query_params)
        results = await shielded(capture_all(batch.urls, config))
        return Response(
            content=archive.pack(archive.build_entries(results)),
            media_type="application/zip",
            headers={
                "Content-Disposition": 'attachment; filename="screenshots.zip"',
                "Cache-Control": "no-store",
            },
        )

    @app.api_route("/{path:path}", methods=FALLBACK_METHODS, include_in_schema=False)
    async def fallback(request: Request, path: str):
        if config.fallback == "static" and request.method in ("GET", "HEAD"):
            return static_fallback(Path(config.static_dir), path)
        return not_found()

    return app
