# File: tests/conftest.py
import asyncio
from collections.abc import AsyncIterator
from typing import Dict, List, Optional, Union

import pytest
from aiohttp import web

from privacy_scout.config import ScoutConfig
from privacy_scout.crawler.fetcher import FetchError
from privacy_scout.store import InMemoryEntryStore


class StubFetcher:
    """
    In-memory stand-in for Fetcher.

    *pages* maps URL -> HTML, or -> an exception instance to raise.
    Unknown URLs fail with FetchError(404). Every requested URL is recorded.
    """

    def __init__(self, pages: Dict[str, Union[str, BaseException]], delay: float = 0.0) -> None:
        self.pages = pages
        self.delay = delay
        self.calls: List[str] = []

    async def fetch_text(self, url: str, deadline: Optional[float] = None) -> str:
        self.calls.append(url)
        if self.delay:
            try:
                async with asyncio.timeout_at(deadline):
                    await asyncio.sleep(self.delay)
            except asyncio.TimeoutError as exc:
                raise FetchError(f"Timed out fetching {url}", url=url) from exc
        page = self.pages.get(url)
        if page is None:
            raise FetchError(f"HTTP 404 for {url}", url=url, status=404)
        if isinstance(page, BaseException):
            raise page
        return page


@pytest.fixture()
def config() -> ScoutConfig:
    """
    Return a ScoutConfig with short timeouts for tests.
    """
    return ScoutConfig(timeout=5.0, concurrency=5, user_agent="TestAgent/1.0")


@pytest.fixture()
def store() -> InMemoryEntryStore:
    return InMemoryEntryStore()


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()
