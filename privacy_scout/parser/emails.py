# File: privacy_scout/parser/emails.py
"""privacy_scout.parser.emails: email pattern and the asset-filename filter."""

from __future__ import annotations

import re
from typing import FrozenSet

__all__ = ["EMAIL_RE", "ASSET_EXTENSIONS", "is_likely_email"]

EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)

#: filenames such as ``icon@3x.png`` match EMAIL_RE but end in one of these
ASSET_EXTENSIONS: FrozenSet[str] = frozenset(
    {
        "png",
        "jpg",
        "jpeg",
        "gif",
        "svg",
        "webp",
        "ico",
        "bmp",
        "tiff",
        "avif",
        "pdf",
        "woff",
        "woff2",
        "ttf",
        "eot",
        "otf",
        "mp4",
        "webm",
        "mp3",
        "wav",
    }
)


def is_likely_email(candidate: str) -> bool:
    """Reject candidates without ``@`` or whose domain ends in a static-asset extension."""
    lowered = candidate.strip().lower()
    if "@" not in lowered:
        return False
    domain = lowered.rsplit("@", 1)[1]
    return domain.rsplit(".", 1)[-1] not in ASSET_EXTENSIONS
