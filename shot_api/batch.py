import asyncio
import time
from typing import Sequence

from shot_api.browser import capture_page, open_browser
from shot_api.config import Config
from shot_api.console import console
from shot_api.exceptions import BatchRenderError
from shot_api.models import DESKTOP_VIEWPORT, CaptureResult


async def capture_all(urls: Sequence[str], config: Config) -> list[CaptureResult]:
    """Capture every URL concurrently in one shared browser.

    Every capture is a full-page PNG at the desktop viewport. Results come
    back in the order of ``urls``. A single failure cancels the remaining
    captures and fails the whole batch.
    """
    semaphore = asyncio.Semaphore(config.batch_concurrency)

    async def sem_task(browser, index: int, url: str) -> CaptureResult:
        """Ensures tasks run within concurrency limits."""
        async with semaphore:
            image = await capture_page(
                browser,
                url,
                viewport=DESKTOP_VIEWPORT,
                full_page=True,
                delay_ms=0,
                config=config,
            )
        return CaptureResult(source_url=url, original_index=index, image_bytes=image)

    start_time = time.monotonic()
    try:
        async with open_browser(config) as browser:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(sem_task(browser, index, url))
                    for index, url in enumerate(urls)
                ]
    except ExceptionGroup as e:
        raise BatchRenderError() from e.exceptions[0]
    except Exception as e:
        raise BatchRenderError() from e

    results = sorted((task.result() for task in tasks), key=lambda r: r.original_index)
    console.log(f"Batch completed: {len(results)} URLs, {time.monotonic() - start_time:.2f}s")
    return results
