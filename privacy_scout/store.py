# File: privacy_scout/store.py
"""privacy_scout.store: the entry store interface and an in-memory implementation.

The scheduler only needs :class:`EntryStore`; :class:`InMemoryEntryStore`
backs the CLI and the tests. A database-backed store must make each
per-entry read/update atomic if it is shared with other writers.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from itertools import count
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from privacy_scout.logger import logger
from privacy_scout.models import Entry, EntryStatus, ScrapeProgress, utcnow
from privacy_scout.utils import parse_origin

__all__ = [
    "EntryStore",
    "InMemoryEntryStore",
    "EntryNotFoundError",
    "DuplicateEntryError",
    "ImportSummary",
    "import_entries",
]

_STATUS_FIELDS = frozenset({"privacy_url", "scraped_emails", "error_message"})
_EDITABLE_FIELDS = frozenset({"privacy_url", "scraped_emails", "site_name"})


class EntryNotFoundError(LookupError):
    """No entry with the given id."""

    def __init__(self, entry_id: int) -> None:
        super().__init__(f"Entry {entry_id} not found")
        self.entry_id = entry_id


class DuplicateEntryError(ValueError):
    """An entry with the same (url, username) already exists."""


class EntryStore(Protocol):
    async def get_entry(self, entry_id: int) -> Optional[Entry]: ...

    async def update_status(self, entry_id: int, status: EntryStatus, **fields: Any) -> Entry: ...

    async def list_entries(self, status_in: Optional[Iterable[EntryStatus]] = None) -> List[Entry]: ...


class InMemoryEntryStore:
    """Dict-backed store. Returned entries are copies; mutate through the methods."""

    def __init__(self) -> None:
        self._rows: Dict[int, Entry] = {}
        self._ids = count(1)

    @staticmethod
    def _copy(entry: Entry) -> Entry:
        return replace(entry, scraped_emails=list(entry.scraped_emails))

    def _row(self, entry_id: int) -> Entry:
        row = self._rows.get(entry_id)
        if row is None:
            raise EntryNotFoundError(entry_id)
        return row

    async def create_entry(
        self,
        url: str,
        site_name: Optional[str] = None,
        username: Optional[str] = None,
        source_email: Optional[str] = None,
    ) -> Entry:
        if await self.find_entry(url, username) is not None:
            raise DuplicateEntryError(f"Entry for {url} / {username!r} already exists")
        entry = Entry(
            id=next(self._ids),
            url=url,
            site_name=site_name,
            username=username,
            source_email=source_email,
        )
        self._rows[entry.id] = entry
        return self._copy(entry)

    async def get_entry(self, entry_id: int) -> Optional[Entry]:
        row = self._rows.get(entry_id)
        return None if row is None else self._copy(row)

    async def find_entry(self, url: str, username: Optional[str] = None) -> Optional[Entry]:
        for row in self._rows.values():
            if row.url == url and row.username == username:
                return self._copy(row)
        return None

    async def list_entries(self, status_in: Optional[Iterable[EntryStatus]] = None) -> List[Entry]:
        """Entries ordered by creation time, oldest first, optionally filtered by status."""
        wanted = None if status_in is None else set(status_in)
        rows = [r for r in self._rows.values() if wanted is None or r.status in wanted]
        rows.sort(key=lambda r: (r.created_at, r.id))
        return [self._copy(r) for r in rows]

    async def update_status(self, entry_id: int, status: EntryStatus, **fields: Any) -> Entry:
        """Set *status* and any of privacy_url / scraped_emails / error_message; others stay as they are."""
        unknown = set(fields) - _STATUS_FIELDS
        if unknown:
            raise TypeError(f"Unsupported entry fields: {sorted(unknown)}")
        row = self._row(entry_id)
        row.status = EntryStatus(status)
        self._apply(row, fields)
        return self._copy(row)

    async def update_fields(self, entry_id: int, **fields: Any) -> Entry:
        """Manual edit of privacy_url, scraped_emails or site_name."""
        unknown = set(fields) - _EDITABLE_FIELDS
        if unknown:
            raise TypeError(f"Unsupported entry fields: {sorted(unknown)}")
        row = self._row(entry_id)
        self._apply(row, fields)
        return self._copy(row)

    @staticmethod
    def _apply(row: Entry, fields: Mapping[str, Any]) -> None:
        for name, value in fields.items():
            if name == "scraped_emails":
                value = list(value)
            setattr(row, name, value)
        row.updated_at = utcnow()

    async def delete_entry(self, entry_id: int) -> None:
        self._row(entry_id)
        del self._rows[entry_id]

    async def delete_entries(self, entry_ids: Iterable[int]) -> int:
        deleted = 0
        for entry_id in set(entry_ids):
            if self._rows.pop(entry_id, None) is not None:
                deleted += 1
        return deleted

    async def progress(self) -> ScrapeProgress:
        return ScrapeProgress.from_entries(self._rows.values())


@dataclass(slots=True)
class ImportSummary:
    imported: int = 0
    duplicates: int = 0
    invalid: int = 0
    total: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "imported": self.imported,
            "duplicates": self.duplicates,
            "invalid": self.invalid,
            "total": self.total,
        }


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _import_key(item: Mapping[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    raw = _clean(item.get("url"))
    origin = parse_origin(raw) if raw else None
    return origin, _clean(item.get("username"))


async def import_entries(store: InMemoryEntryStore, items: Iterable[Mapping[str, Any]]) -> ImportSummary:
    """Create entries from mappings with ``name``, ``url``, ``username`` and ``sourceEmail``.

    URLs are reduced to their origin; an existing (origin, username) pair
    counts as a duplicate and a missing or unparsable URL as invalid.
    """
    summary = ImportSummary()
    for item in items:
        summary.total += 1
        origin, username = _import_key(item)
        if origin is None:
            summary.invalid += 1
            continue
        try:
            await store.create_entry(
                origin,
                site_name=_clean(item.get("name")),
                username=username,
                source_email=_clean(item.get("sourceEmail")),
            )
        except DuplicateEntryError:
            summary.duplicates += 1
            continue
        summary.imported += 1

    logger.info(
        "Imported %d of %d entries (%d duplicates, %d invalid)",
        summary.imported,
        summary.total,
        summary.duplicates,
        summary.invalid,
    )
    return summary
