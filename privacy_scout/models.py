# privacy_scout/models.py
"""
Data models shared by the discovery engine, the scheduler and the entry store.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple


class EntryStatus(str, Enum):
    """Lifecycle of an entry with respect to discovery."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    ERROR = "error"
    NO_RESULTS = "no_results"


TERMINAL_STATUSES: FrozenSet[EntryStatus] = frozenset(
    {EntryStatus.DONE, EntryStatus.ERROR, EntryStatus.NO_RESULTS}
)
#: statuses picked up by a pending batch, in this order of preference
SCRAPE_CANDIDATE_STATUSES: Tuple[EntryStatus, ...] = (EntryStatus.PENDING, EntryStatus.ERROR)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class Entry:
    """One site to discover contacts for, as kept by the entry store."""

    id: int
    url: str
    site_name: Optional[str] = None
    username: Optional[str] = None
    source_email: Optional[str] = None
    status: EntryStatus = EntryStatus.PENDING
    privacy_url: Optional[str] = None
    scraped_emails: List[str] = field(default_factory=list)
    error_message: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "siteName": self.site_name,
            "url": self.url,
            "username": self.username,
            "sourceEmail": self.source_email,
            "scrapedEmails": list(self.scraped_emails),
            "privacyUrl": self.privacy_url,
            "status": self.status.value,
            "errorMessage": self.error_message,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass(slots=True)
class DiscoveryResult:
    """Outcome of discovering one origin: a privacy page and the contact emails found."""

    privacy_url: Optional[str] = None
    emails: List[str] = field(default_factory=list)

    @classmethod
    def from_set(cls, privacy_url: Optional[str], emails: Iterable[str]) -> DiscoveryResult:
        return cls(privacy_url=privacy_url, emails=sorted(set(emails)))

    @property
    def is_empty(self) -> bool:
        return self.privacy_url is None and not self.emails

    def merge(self, other: DiscoveryResult) -> DiscoveryResult:
        """Combine with a fallback attempt: own privacy URL wins, emails are unioned."""
        return DiscoveryResult.from_set(
            self.privacy_url if self.privacy_url is not None else other.privacy_url,
            [*self.emails, *other.emails],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"privacyUrl": self.privacy_url, "emails": list(self.emails)}


@dataclass(slots=True)
class ScrapeProgress:
    """Per-status counts, always recomputed from the current entries."""

    total: int = 0
    pending: int = 0
    in_progress: int = 0
    done: int = 0
    error: int = 0
    no_results: int = 0

    @classmethod
    def from_entries(cls, entries: Iterable[Entry]) -> ScrapeProgress:
        progress = cls()
        for entry in entries:
            progress.total += 1
            if entry.status is EntryStatus.PENDING:
                progress.pending += 1
            elif entry.status is EntryStatus.IN_PROGRESS:
                progress.in_progress += 1
            elif entry.status is EntryStatus.DONE:
                progress.done += 1
            elif entry.status is EntryStatus.ERROR:
                progress.error += 1
            elif entry.status is EntryStatus.NO_RESULTS:
                progress.no_results += 1
        return progress

    @property
    def finished(self) -> bool:
        return self.pending == 0 and self.in_progress == 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "pending": self.pending,
            "inProgress": self.in_progress,
            "done": self.done,
            "error": self.error,
            "noResults": self.no_results,
        }


__all__ = [
    "EntryStatus",
    "TERMINAL_STATUSES",
    "SCRAPE_CANDIDATE_STATUSES",
    "Entry",
    "DiscoveryResult",
    "ScrapeProgress",
    "utcnow",
]
