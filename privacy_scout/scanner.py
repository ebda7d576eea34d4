# === FILE: privacy_scout/scanner.py ===
"""
Модуль-обёртка для пакетного запуска: импорт, фоновый пакет, опрос прогресса.
"""
import asyncio
from typing import Any, Iterable, Mapping

from privacy_scout.aggregator import DiscoveryReport, aggregate_results
from privacy_scout.config import ScoutConfig
from privacy_scout.engine import Discoverer
from privacy_scout.logger import logger
from privacy_scout.models import TERMINAL_STATUSES
from privacy_scout.scheduler import BatchScheduler
from privacy_scout.store import InMemoryEntryStore, import_entries


async def run_batch(cfg: ScoutConfig, items: Iterable[Mapping[str, Any]]) -> DiscoveryReport:
    """
    Импортирует записи в хранилище в памяти, запускает пакет и ждёт его,
    периодически логируя прогресс.

    Parameters
    ----------
    cfg : ScoutConfig
        Конфигурация поиска.
    items : Iterable[Mapping]
        Записи для импорта (ключи name, url, username, sourceEmail).

    Returns
    -------
    DiscoveryReport
        Итоговые записи, прогресс и результат импорта.
    """
    store = InMemoryEntryStore()
    summary = await import_entries(store, items)

    async with Discoverer(cfg) as discoverer:
        scheduler = BatchScheduler(
            store, discoverer, concurrency=cfg.concurrency, max_error_length=cfg.max_error_length
        )
        task, started = await scheduler.start_pending_batch()
        logger.info("Запущен пакет из %d записей", started)
        while not task.done():
            await asyncio.wait({task}, timeout=cfg.poll_interval)
            progress = await store.progress()
            logger.info(
                "Прогресс: %d/%d готово, в работе %d, ошибок %d, без результата %d",
                progress.done,
                progress.total,
                progress.in_progress,
                progress.error,
                progress.no_results,
            )
        await task

    entries = await store.list_entries()
    progress = await store.progress()
    if progress.finished:
        logger.info("Пакет завершён: %d/%d готово", progress.done, progress.total)
    else:
        stuck = [e.id for e in entries if e.status not in TERMINAL_STATUSES]
        logger.warning("Пакет завершён, но записи не обработаны: %s", stuck)

    return aggregate_results(entries, imported=summary)


__all__ = ["run_batch"]
