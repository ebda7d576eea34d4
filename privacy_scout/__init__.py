# privacy_scout/__init__.py
"""
PrivacyScout package initializer.
Defines package version and exposes the discovery API.
"""
__version__ = "0.1.0"

from privacy_scout.engine import Discoverer, discover_one
from privacy_scout.models import DiscoveryResult, Entry, EntryStatus, ScrapeProgress
from privacy_scout.scheduler import BatchScheduler

__all__ = [
    "__version__",
    "BatchScheduler",
    "Discoverer",
    "DiscoveryResult",
    "Entry",
    "EntryStatus",
    "ScrapeProgress",
    "discover_one",
]
