import asyncio
from pathlib import Path
from typing import Optional

import typer

from shot_api import archive
from shot_api.batch import capture_all
from shot_api.browser import capture
from shot_api.cli.common import verbose_callback
from shot_api.config import get_config
from shot_api.exceptions import RenderError, ShotApiError
from shot_api.validation import parse_batch_request, parse_screenshot_request

shot_app = typer.Typer()


@shot_app.callback()
def shot(
    verbose: bool = typer.Option(
        False,
        callback=verbose_callback,
        help="show the log messages",
    ),
):
    "take screenshots without the api server"


def fail(error: ShotApiError) -> None:
    typer.echo(error.message, err=True)
    if isinstance(error, RenderError) and error.__cause__ is not None:
        typer.echo(f"  caused by: {error.__cause__!r}", err=True)
    raise typer.Exit(1)


@shot_app.command("capture")
def capture_command(
    url: str,
    output: Path = Path("screenshot.png"),
    delay: Optional[int] = typer.Option(None, help="milliseconds to wait after load"),
    width: Optional[int] = None,
    height: Optional[int] = None,
    full_page: bool = typer.Option(True, "--full-page/--no-full-page"),
):
    """
    Capture a single URL to a PNG file, the same way GET /screenshot does.
    """
    params = {"url": url, "fullPage": "true" if full_page else "false"}
    for name, value in (("delay", delay), ("width", width), ("height", height)):
        if value is not None:
            params[name] = str(value)

    try:
        request = parse_screenshot_request(params)
        image = asyncio.run(capture(request, get_config()))
    except ShotApiError as e:
        fail(e)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(image)
    typer.echo(f"Saved screenshot: {output}")


@shot_app.command("batch")
def batch_command(
    urls: list[str],
    output: Path = Path("screenshots.zip"),
):
    """
    Capture several URLs into one zip, the same way GET /batch-screenshot does.
    Invalid URLs are skipped.
    """
    try:
        request = parse_batch_request({"urls": ",".join(urls)})
        results = asyncio.run(capture_all(request.urls, get_config()))
    except ShotApiError as e:
        fail(e)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(archive.pack(archive.build_entries(results)))
    typer.echo(f"Saved {len(results)} screenshots: {output}")
