# File: privacy_scout/engine.py
"""privacy_scout.engine: discovery of a privacy page and contact emails for one origin."""

from __future__ import annotations

import asyncio
from typing import Optional, Protocol, Set

from aiohttp import ClientSession

from privacy_scout.config import ScoutConfig
from privacy_scout.crawler.fetcher import Fetcher, FetchError, build_session
from privacy_scout.logger import logger
from privacy_scout.models import DiscoveryResult
from privacy_scout.parser.html_parser import build_privacy_candidates, collect_emails, find_privacy_link
from privacy_scout.utils import has_subdomain, normalize_origin, widen_to_parent_domain

__all__ = ["Discoverer", "TextFetcher", "discover_one"]


class TextFetcher(Protocol):
    async def fetch_text(self, url: str, deadline: Optional[float] = None) -> str: ...


class Discoverer:
    """Runs discovery for origins; one instance (and one HTTP session) can serve a whole batch.

    Used as an async context manager when it owns its session::

        async with Discoverer(config) as discoverer:
            result = await discoverer.discover_with_fallback("https://us.example.com/login")

    Tests and callers with their own transport pass *fetcher* instead.
    """

    def __init__(self, config: Optional[ScoutConfig] = None, fetcher: Optional[TextFetcher] = None) -> None:
        self.config = config or ScoutConfig()
        self.fetcher = fetcher
        self.session: Optional[ClientSession] = None

    async def __aenter__(self) -> Discoverer:
        if self.fetcher is None:
            self.session = build_session(self.config)
            self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()
            self.session = None
            self.fetcher = None

    async def _try_fetch(self, url: str, deadline: Optional[float]) -> Optional[str]:
        if self.fetcher is None:
            raise RuntimeError("Discoverer used outside its context and without a fetcher")
        try:
            return await self.fetcher.fetch_text(url, deadline)
        except FetchError as exc:
            logger.debug("Unavailable: %s", exc)
            return None

    async def discover(self, origin: str, deadline: Optional[float] = None) -> DiscoveryResult:
        """Homepage first, then its privacy link or the first common privacy path that responds."""
        emails: Set[str] = set()
        privacy_url: Optional[str] = None

        homepage_html = await self._try_fetch(origin, deadline)
        if homepage_html:
            privacy_url = find_privacy_link(homepage_html, origin)
            collect_emails(homepage_html, emails)

        if privacy_url is None:
            for candidate in build_privacy_candidates(origin):
                html = await self._try_fetch(candidate, deadline)
                if html is None:
                    continue
                privacy_url = candidate
                collect_emails(html, emails)
                break
        else:
            html = await self._try_fetch(privacy_url, deadline)
            # a dead privacy link is still worth reporting
            if html is not None:
                collect_emails(html, emails)

        return DiscoveryResult.from_set(privacy_url, emails)

    async def _attempt(self, origin: str) -> DiscoveryResult:
        """One discovery under a fresh deadline; never raises (except on cancellation)."""
        deadline = asyncio.get_running_loop().time() + self.config.timeout
        try:
            return await self.discover(origin, deadline)
        except Exception as exc:
            logger.warning("Discovery of %s failed: %s", origin, exc)
            return DiscoveryResult()

    async def discover_with_fallback(self, raw_url: str) -> DiscoveryResult:
        """Discover *raw_url*'s origin; if nothing turns up on a subdomain, retry on the parent domain.

        Organisations often keep legal pages on the apex domain while products
        live on subdomains.
        """
        origin = normalize_origin(raw_url)
        result = await self._attempt(origin)

        if result.is_empty and self.config.widen_subdomains and has_subdomain(origin):
            parent = widen_to_parent_domain(origin)
            if parent is not None:
                logger.info("Nothing found on %s, trying %s", origin, parent)
                result = result.merge(await self._attempt(parent))

        logger.info(
            "Discovered %s: privacy=%s, %d email(s)",
            origin,
            result.privacy_url or "-",
            len(result.emails),
        )
        return result


async def discover_one(url: str, config: Optional[ScoutConfig] = None) -> DiscoveryResult:
    """Discover a single origin with a short-lived session."""
    async with Discoverer(config) as discoverer:
        return await discoverer.discover_with_fallback(url)
