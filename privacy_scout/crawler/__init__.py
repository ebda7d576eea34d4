# File: privacy_scout/crawler/__init__.py
"""privacy_scout.crawler: HTTP access for discovery."""

from .fetcher import Fetcher, FetchError, build_session

__all__ = ["Fetcher", "FetchError", "build_session"]
