# === FILE: privacy_scout/parser/html_parser.py ===
"""HTML heuristics used by discovery.

* :func:`find_privacy_link` – first anchor that looks like a privacy policy.
* :func:`collect_emails` – contact addresses from ``mailto:`` links and the
  visible text of a page.
* :func:`build_privacy_candidates` – well-known privacy-policy paths to try
  when the homepage does not link to one.

Both HTML helpers parse with BeautifulSoup's built-in ``html.parser`` so no
compiled parser is required.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import List, Optional, Set
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from privacy_scout.parser.emails import EMAIL_RE, is_likely_email

__all__: Sequence[str] = (
    "PRIVACY_PATHS",
    "find_privacy_link",
    "collect_emails",
    "visible_text",
    "build_privacy_candidates",
)

PRIVACY_PATHS: Sequence[str] = (
    "/privacy",
    "/privacy-policy",
    "/privacy_policy",
    "/legal/privacy",
    "/policies/privacy",
)

_INVISIBLE_TAGS = ["script", "style", "noscript", "template"]


def _anchors(soup: BeautifulSoup) -> List[Tag]:
    return [tag for tag in soup.find_all("a", href=True) if isinstance(tag, Tag)]


def _href(tag: Tag) -> str:
    href = tag.get("href")
    return href if isinstance(href, str) else ""


def _resolve(origin: str, href: str) -> Optional[str]:
    try:
        return urljoin(origin, href.strip())
    except ValueError:
        # e.g. an unterminated IPv6 host: "http://[oops/privacy"
        return None


def find_privacy_link(html: str, origin: str) -> Optional[str]:
    """Return the first resolvable anchor whose text or href mentions "privacy", made absolute against *origin*."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in _anchors(soup):
        href = _href(tag)
        text = tag.get_text().lower()
        if "privacy" not in text and "privacy" not in href.lower():
            continue
        resolved = _resolve(origin, href)
        if resolved is not None:
            return resolved
    return None


def visible_text(soup: BeautifulSoup) -> str:
    """Rendered text of the page. Mutates *soup*: invisible elements are removed."""
    for element in soup(_INVISIBLE_TAGS):
        element.decompose()
    return soup.get_text(" ")


def collect_emails(html: str, into: Set[str]) -> Set[str]:
    """Add plausible contact emails found in *html* to *into* and return it."""
    soup = BeautifulSoup(html, "html.parser")

    for tag in _anchors(soup):
        href = _href(tag)
        if not href.lower().startswith("mailto:"):
            continue
        # mail clients put subject/body after "?"
        email = href[len("mailto:"):].split("?", 1)[0].strip()
        if email and is_likely_email(email):
            into.add(email)

    for match in EMAIL_RE.findall(visible_text(soup)):
        if is_likely_email(match):
            into.add(match)

    return into


def build_privacy_candidates(origin: str) -> List[str]:
    """Common privacy-policy URLs for *origin*, most likely first."""
    base = origin.rstrip("/")
    return [base + path for path in PRIVACY_PATHS]
