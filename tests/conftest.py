"""
Shared fixtures: a config that never touches the environment's .env and an
in-memory stand-in for the pyppeteer browser.
"""

import asyncio
import time
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from pyppeteer.errors import TimeoutError as NavigationTimeout

from shot_api.api.app import create_app
from shot_api.config import Config

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class FakePage:
    def __init__(self, browser: "FakeBrowser"):
        self.browser = browser
        self.viewport = None
        self.url = None
        self.goto_options = None
        self.screenshot_options = None
        self.loaded_at = None
        self.captured_at = None
        self.closed = False

    async def setViewport(self, viewport):
        self.viewport = viewport

    async def goto(self, url, options=None):
        self.url = url
        self.goto_options = options
        load_time = self.browser.load_times.get(url, 0)
        if load_time:
            await asyncio.sleep(load_time)
        if url in self.browser.failing:
            raise NavigationTimeout(f"Navigation Timeout Exceeded: {url}")
        self.loaded_at = time.monotonic()

    async def screenshot(self, options=None):
        self.screenshot_options = options
        self.captured_at = time.monotonic()
        self.browser.completed.append(self.url)
        return PNG_SIGNATURE + self.url.encode()

    async def close(self):
        self.closed = True
        if self.browser.page_close_error is not None:
            raise self.browser.page_close_error


class FakeBrowser:
    def __init__(self):
        self.pages: list[FakePage] = []
        self.load_times: dict[str, float] = {}
        self.failing: set[str] = set()
        self.completed: list[str] = []
        self.page_close_error: Exception | None = None
        self.closed = False

    async def newPage(self):
        page = FakePage(self)
        self.pages.append(page)
        return page

    async def close(self):
        self.closed = True


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(_env_file=None, static_dir=str(tmp_path / "public"))


@pytest.fixture
def browser() -> FakeBrowser:
    return FakeBrowser()


@pytest.fixture
def launch(browser):
    """Patch pyppeteer's launch so every launch hands out ``browser``."""
    with patch("shot_api.browser.launch", new=AsyncMock(return_value=browser)) as mock:
        yield mock


@pytest.fixture
def client(config, launch):
    with TestClient(create_app(config)) as client:
        yield client
