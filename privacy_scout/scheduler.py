# === FILE: privacy_scout/scheduler.py ===
"""Batch discovery over many entries with a fixed concurrency ceiling.

Progress is recorded only in the entries' status; callers poll
:meth:`privacy_scout.models.ScrapeProgress.from_entries` (or the store's
aggregate) to see a batch advance.
"""
from __future__ import annotations

import asyncio
import time
from typing import List, Optional, Protocol, Sequence, Set, Tuple

from privacy_scout.logger import logger
from privacy_scout.models import SCRAPE_CANDIDATE_STATUSES, DiscoveryResult, Entry, EntryStatus
from privacy_scout.store import EntryNotFoundError, EntryStore
from privacy_scout.utils import truncate_message

__all__ = ["BatchScheduler", "DEFAULT_CONCURRENCY"]

DEFAULT_CONCURRENCY = 25


class _Discovers(Protocol):
    async def discover_with_fallback(self, raw_url: str) -> DiscoveryResult: ...


class BatchScheduler:
    """Drives discovery for entry ids through a pool of asyncio workers."""

    def __init__(
        self,
        store: EntryStore,
        discoverer: _Discovers,
        concurrency: int = DEFAULT_CONCURRENCY,
        max_error_length: int = 500,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.store = store
        self.discoverer = discoverer
        self.concurrency = concurrency
        self.max_error_length = max_error_length
        self.in_flight = 0
        self.peak_in_flight = 0
        self._background: Set[asyncio.Task[None]] = set()

    async def process_one(self, entry_id: int) -> Entry:
        """Discover one entry and record the outcome in its status.

        Raises EntryNotFoundError for an unknown id; discovery failures end up
        as ``status=error`` and are not re-raised.
        """
        entry = await self.store.get_entry(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)

        await self.store.update_status(entry_id, EntryStatus.IN_PROGRESS, error_message=None)
        try:
            result = await self.discoverer.discover_with_fallback(entry.url)
            if result.is_empty:
                await self.store.update_status(entry_id, EntryStatus.NO_RESULTS)
            else:
                await self.store.update_status(
                    entry_id,
                    EntryStatus.DONE,
                    privacy_url=result.privacy_url,
                    scraped_emails=list(result.emails),
                    error_message=None,
                )
        except Exception as exc:
            logger.warning("Entry %s (%s) failed: %s", entry_id, entry.url, exc)
            await self.store.update_status(
                entry_id,
                EntryStatus.ERROR,
                error_message=truncate_message(exc, self.max_error_length),
            )

        updated = await self.store.get_entry(entry_id)
        if updated is None:
            raise EntryNotFoundError(entry_id)
        return updated

    async def run(self, entry_ids: Sequence[int]) -> None:
        """Process *entry_ids* in FIFO order, at most ``concurrency`` at a time; returns when all are done."""
        if not entry_ids:
            return
        logger.info("Batch started: %d entries, concurrency %d", len(entry_ids), self.concurrency)
        start = time.monotonic()

        queue: asyncio.Queue[int] = asyncio.Queue()
        for entry_id in entry_ids:
            queue.put_nowait(entry_id)

        workers = [
            asyncio.create_task(self._worker(queue))
            for _ in range(min(self.concurrency, len(entry_ids)))
        ]
        try:
            await queue.join()
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

        logger.info("Batch finished: %d entries in %.2f s", len(entry_ids), time.monotonic() - start)

    async def _worker(self, queue: asyncio.Queue[int]) -> None:
        while True:
            entry_id = await queue.get()
            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
            try:
                await self.process_one(entry_id)
            except EntryNotFoundError:
                logger.warning("Entry %s disappeared before processing, skipped", entry_id)
            except Exception:
                logger.exception("Unexpected failure while processing entry %s", entry_id)
            finally:
                self.in_flight -= 1
                queue.task_done()

    def start_batch(self, entry_ids: Sequence[int]) -> asyncio.Task[None]:
        """Schedule :meth:`run` in the background and return its task without waiting."""
        task = asyncio.create_task(self.run(list(entry_ids)))
        self._background.add(task)
        task.add_done_callback(self._on_batch_done)
        return task

    def _on_batch_done(self, task: asyncio.Task[None]) -> None:
        self._background.discard(task)
        if task.cancelled():
            logger.warning("Batch cancelled")
        elif task.exception() is not None:
            logger.error("Batch error: %s", task.exception())

    async def start_pending_batch(self) -> Tuple[asyncio.Task[None], int]:
        """Start a batch over every pending or errored entry, oldest first."""
        entries: List[Entry] = await self.store.list_entries(status_in=SCRAPE_CANDIDATE_STATUSES)
        entry_ids = [e.id for e in entries]
        return self.start_batch(entry_ids), len(entry_ids)

    async def wait(self, timeout: Optional[float] = None) -> None:
        """Wait for every background batch started by this scheduler."""
        if self._background:
            await asyncio.wait(set(self._background), timeout=timeout)
