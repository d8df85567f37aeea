import asyncio
import time
from contextlib import asynccontextmanager

from pyppeteer import launch

from shot_api.config import Config
from shot_api.console import console
from shot_api.exceptions import RenderError
from shot_api.models import ScreenshotRequest, Viewport


@asynccontextmanager
async def open_browser(config: Config):
    """Launch a headless browser and close it when the block exits."""
    browser = await launch(
        headless=config.headless,
        args=config.browser_args,
        # uvicorn owns the process signals
        handleSIGINT=False,
        handleSIGTERM=False,
        handleSIGHUP=False,
    )
    try:
        yield browser
    finally:
        try:
            await browser.close()
        except Exception as e:
            console.log(f"Failed to close browser: {e}")


async def capture_page(
    browser,
    url: str,
    *,
    viewport: Viewport,
    full_page: bool,
    delay_ms: int,
    config: Config,
) -> bytes:
    """Render ``url`` on a fresh page of ``browser`` and return PNG bytes."""
    page = await browser.newPage()
    try:
        await page.setViewport(viewport.to_options())

        start_time = time.monotonic()
        await page.goto(
            url,
            {"waitUntil": config.wait_until, "timeout": config.navigation_timeout_ms},
        )
        load_time = time.monotonic() - start_time

        if delay_ms > 0:
            await asyncio.sleep(delay_ms / 1000)

        image = await page.screenshot({"type": "png", "fullPage": full_page})
        screenshot_time = time.monotonic() - start_time - load_time
        console.log(
            f"Captured {url} (Load time: {load_time:.2f}s, Screenshot time: {screenshot_time:.2f}s)"
        )
        return image
    finally:
        try:
            await page.close()
        except Exception as e:
            console.log(f"Failed to close page for {url}: {e}")


async def capture(request: ScreenshotRequest, config: Config) -> bytes:
    """Take a single screenshot in its own browser."""
    try:
        async with open_browser(config) as browser:
            return await capture_page(
                browser,
                request.url,
                viewport=request.viewport,
                full_page=request.full_page,
                delay_ms=request.delay_ms,
                config=config,
            )
    except Exception as e:
        raise RenderError() from e
