# privacy_scout/crawler/fetcher.py
"""
Fetcher module: a single bounded-time HTTP GET returning page text.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from privacy_scout.config import ScoutConfig
from privacy_scout.logger import logger


class FetchError(Exception):
    """The page is unavailable: non-2xx status, network error or timeout."""

    def __init__(self, message: str, *, url: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


def build_session(config: ScoutConfig) -> ClientSession:
    """Create the shared session carrying the fixed identity headers."""
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers={"User-Agent": config.user_agent, "Accept": config.accept},
        raise_for_status=False,
    )


class Fetcher:
    """Fetches pages as text through an existing session."""

    def __init__(self, session: ClientSession, config: ScoutConfig) -> None:
        self.session = session
        self.config = config

    async def fetch_text(self, url: str, deadline: Optional[float] = None) -> str:
        """
        GET *url* following redirects and return the decoded body.

        *deadline* is an absolute event-loop time shared by every fetch of one
        discovery attempt; an in-flight request is aborted when it passes.
        Raises FetchError on any failure.
        """
        try:
            async with asyncio.timeout_at(deadline):
                async with self.session.get(url, allow_redirects=True) as resp:
                    if not 200 <= resp.status < 300:
                        raise FetchError(f"HTTP {resp.status} for {url}", url=url, status=resp.status)
                    return await resp.text(errors="replace")
        except asyncio.TimeoutError as exc:
            logger.debug("Timed out fetching %s", url)
            raise FetchError(f"Timed out fetching {url}", url=url) from exc
        except (ClientError, ValueError) as exc:
            # aiohttp.InvalidURL is both a ClientError and a ValueError
            logger.debug("Failed %s: %s", url, exc)
            raise FetchError(f"Failed to fetch {url}: {exc}", url=url) from exc


__all__ = ["Fetcher", "FetchError", "build_session"]
