# File: privacy_scout/parser/__init__.py
"""privacy_scout.parser: privacy-link and email extraction from HTML."""

from .emails import ASSET_EXTENSIONS, EMAIL_RE, is_likely_email
from .html_parser import PRIVACY_PATHS, build_privacy_candidates, collect_emails, find_privacy_link

__all__ = [
    "ASSET_EXTENSIONS",
    "EMAIL_RE",
    "PRIVACY_PATHS",
    "build_privacy_candidates",
    "collect_emails",
    "find_privacy_link",
    "is_likely_email",
]
