# audit_scout/crawler/link_extractor.py
"""
Link extraction and URL normalization utilities for AuditScout.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from audit_scout.crawler.policy import should_skip_url

_DEFAULT_PORTS: Dict[str, int] = {"http": 80, "https": 443}
_IGNORED_PREFIXES = ("#", "javascript:", "mailto:", "tel:")
_LINKEDIN_RE = re.compile(r"^https?://(?:www\.)?linkedin\.com/company/[^\"'\s]+", re.IGNORECASE)


def origin_of(url: str) -> str:
    """
    Return ``scheme://host[:port]`` with a lowercased scheme and host and the
    default port dropped. Raises ValueError for URLs without a host.
    """
    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if not scheme or not host:
        raise ValueError(f"URL has no origin: {url!r}")
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is None or _DEFAULT_PORTS.get(scheme) == port:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def normalize_url(url: str) -> str:
    """
    Reduce *url* to origin + path: query, fragment and credentials are
    dropped and trailing slashes stripped, so the root becomes bare origin.
    Idempotent.
    """
    path = urlsplit(url.strip()).path.rstrip("/")
    return origin_of(url) + path


def same_origin(url: str, other: str) -> bool:
    try:
        return origin_of(url) == origin_of(other)
    except ValueError:
        return False


def _hrefs(soup: BeautifulSoup) -> List[str]:
    values: List[str] = []
    for tag in soup.find_all(["a", "area"], href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if isinstance(href_val, str) and href_val.strip():
            values.append(href_val.strip())
    return values


def extract_links(html: str, page_url: str) -> List[str]:
    """
    Extract same-origin page links from *html*, normalized and deduplicated
    in document order.

    Ignores fragments, javascript:, mailto:, tel:, other origins and URLs
    matching the skip patterns.
    """
    soup = BeautifulSoup(html, "html.parser")
    base_origin = origin_of(page_url)
    links: Dict[str, None] = {}
    for raw in _hrefs(soup):
        if raw.lower().startswith(_IGNORED_PREFIXES):
            continue
        try:
            absolute = urljoin(page_url, raw)
            if urlsplit(absolute).scheme.lower() not in _DEFAULT_PORTS:
                continue
            if origin_of(absolute) != base_origin:
                continue
            normalized = normalize_url(absolute)
        except ValueError:
            continue
        if should_skip_url(normalized):
            continue
        links.setdefault(normalized, None)
    return list(links)


def find_linkedin(html: str) -> Optional[str]:
    """First link to a LinkedIn company page, if any."""
    soup = BeautifulSoup(html, "html.parser")
    for href in _hrefs(soup):
        match = _LINKEDIN_RE.match(href)
        if match:
            return match.group(0)
    return None


__all__ = ["origin_of", "normalize_url", "same_origin", "extract_links", "find_linkedin"]
