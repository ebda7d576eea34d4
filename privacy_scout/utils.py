# File: privacy_scout/utils.py
"""privacy_scout.utils: Origin normalization, subdomain widening and small text helpers."""

from __future__ import annotations

import ipaddress
from typing import List, Optional, Sequence, Union
from urllib.parse import urlparse

from privacy_scout.logger import logger

__all__: Sequence[str] = (
    "normalize_origin",
    "parse_origin",
    "has_subdomain",
    "widen_to_parent_domain",
    "truncate_message",
)

_DEFAULT_PORTS = {"http": 80, "https": 443}


def parse_origin(raw_url: str) -> Optional[str]:
    """Return ``scheme://host[:port]`` for an http(s) URL, or None if it has no usable origin."""
    try:
        parsed = urlparse(raw_url.strip())
        port = parsed.port
    except ValueError:
        return None

    scheme = parsed.scheme.lower()
    host = parsed.hostname
    if scheme not in _DEFAULT_PORTS or not host:
        return None

    if ":" in host:
        host = f"[{host}]"
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        return f"{scheme}://{host}:{port}"
    return f"{scheme}://{host}"


def normalize_origin(raw_url: str) -> str:
    """Reduce *raw_url* to its origin; unparsable input is passed through unchanged."""
    origin = parse_origin(raw_url)
    if origin is None:
        logger.debug("Cannot derive origin from %r, using it as is", raw_url)
        return raw_url
    return origin


def _host_labels(origin: str) -> Optional[List[str]]:
    """Dot-separated hostname labels, or None for IP literals and unparsable input."""
    try:
        host = urlparse(origin).hostname
    except ValueError:
        return None
    if not host:
        return None
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return host.rstrip(".").split(".")
    return None


def has_subdomain(origin: str) -> bool:
    """True when the hostname has more than two labels (``us.example.com``)."""
    labels = _host_labels(origin)
    return labels is not None and len(labels) > 2


def widen_to_parent_domain(origin: str) -> Optional[str]:
    """Drop the leftmost hostname label, keeping the scheme.

    ``https://us.example.com`` -> ``https://example.com``.

    This is a plain label heuristic with no public-suffix list: hosts under
    multi-label TLDs widen too far (``https://b.co.uk`` -> ``https://co.uk``).
    Changing that is a product decision, not a bug fix. The port is dropped.
    """
    labels = _host_labels(origin)
    if labels is None or len(labels) <= 2:
        return None
    scheme = urlparse(origin).scheme
    parent = f"{scheme}://{'.'.join(labels[1:])}"
    logger.debug("Widened %s -> %s", origin, parent)
    return parent


def truncate_message(error: Union[BaseException, str], limit: int = 500) -> str:
    """Error text suitable for persisting: at most *limit* characters, never empty."""
    text = str(error)
    if not text and isinstance(error, BaseException):
        text = type(error).__name__
    return text[:limit]
