# File: privacy_scout/aggregator.py
"""privacy_scout.aggregator: сводный отчёт по пакету (записи, прогресс, итоги импорта)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from privacy_scout.models import Entry, ScrapeProgress
from privacy_scout.store import ImportSummary


@dataclass(slots=True)
class DiscoveryReport:
    """Результаты пакетного поиска: записи со статусами и агрегированный прогресс."""

    entries: List[Dict[str, Any]] = field(default_factory=list)
    progress: ScrapeProgress = field(default_factory=ScrapeProgress)
    imported: Optional[ImportSummary] = None

    def to_dict(self) -> Dict[str, Any]:
        output: Dict[str, Any] = {
            "progress": self.progress.to_dict(),
            "entries": self.entries,
        }
        if self.imported is not None:
            output["import"] = self.imported.to_dict()
        return output

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(entries: Iterable[Entry], imported: Optional[ImportSummary] = None) -> DiscoveryReport:
    """Собирает все части отчёта в DiscoveryReport."""
    entries = list(entries)
    return DiscoveryReport(
        entries=[e.to_dict() for e in entries],
        progress=ScrapeProgress.from_entries(entries),
        imported=imported,
    )


__all__ = ["DiscoveryReport", "aggregate_results"]
