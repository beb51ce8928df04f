# === FILE: audit_scout/parser/html_parser.py ===
"""HTML content extraction for AuditScout.

Every helper here is a pure function of the raw markup: it parses its own
:class:`~bs4.BeautifulSoup` tree, so callers can hand the same HTML string to
several of them without worrying about shared, mutated state.

Exposed signals:

* text      — visible text without scripts, styles and page chrome.
* title     — ``<title>``, else first ``<h1>``, else ``"Untitled"``.
* h1        — the page's main headline, skipping navigation-like headings.
* meta      — description and Open-Graph title/description.
* og:site_name and footer text — inputs for company-name inference.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from audit_scout.crawler.models import PageMeta

__all__: Sequence[str] = (
    "UNTITLED",
    "collapse_whitespace",
    "extract_text",
    "extract_title",
    "extract_h1",
    "extract_meta",
    "extract_og_site_name",
    "extract_footer_text",
)

UNTITLED = "Untitled"

_BOILERPLATE_TAGS = ("script", "style", "nav", "header", "footer")
_CHROME_TAGS = ("header", "nav", "footer")
_NAV_WORDS = (
    "about", "home", "contact", "blog", "news",
    "careers", "login", "sign up", "menu", "navigation",
)
_FOOTER_MAX_CHARS = 2000
_COPYRIGHT_RE = re.compile(r"©\s*\d{4}.{0,200}", re.DOTALL)
_WS_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _drop(soup: BeautifulSoup, names: Iterable[str]) -> BeautifulSoup:
    for element in soup.find_all(list(names)):
        element.decompose()
    return soup


def _tag_text(tag: Tag) -> str:
    return collapse_whitespace(tag.get_text(" "))


# ---------------------------------------------------------------------------
# Public functions
# ---------------------------------------------------------------------------


def extract_text(html: str) -> str:
    """Visible text with scripts, styles, nav, header and footer removed."""
    soup = _drop(_soup(html), _BOILERPLATE_TAGS)
    return collapse_whitespace(soup.get_text(" "))


def extract_title(html: str) -> str:
    soup = _soup(html)
    for tag in (soup.find("title"), soup.find("h1")):
        if isinstance(tag, Tag):
            text = _tag_text(tag)
            if text:
                return text
    return UNTITLED


def _h1_candidates(soup: BeautifulSoup) -> list[str]:
    return [text for text in (_tag_text(h) for h in soup.find_all("h1")) if text]


def _looks_like_nav(headline: str) -> bool:
    lower = headline.lower()
    return len(headline) < 20 and any(word in lower for word in _NAV_WORDS)


def extract_h1(html: str) -> Optional[str]:
    """
    Main headline of the page.

    ``<h1>`` elements outside header/nav/footer are preferred; short
    navigation-like headlines are skipped. If every candidate is filtered out
    the longest one is returned; ``None`` when the page has no ``<h1>``.
    """
    candidates = _h1_candidates(_drop(_soup(html), _CHROME_TAGS))
    if not candidates:
        candidates = _h1_candidates(_soup(html))
    if not candidates:
        return None

    for headline in candidates:
        if len(headline) > 5 and not _looks_like_nav(headline):
            return headline
    return max(candidates, key=len)


def _meta_content(soup: BeautifulSoup, attr: str, value: str) -> Optional[str]:
    for tag in soup.find_all("meta"):
        if not isinstance(tag, Tag):
            continue
        key = tag.get(attr)
        if isinstance(key, str) and key.strip().lower() == value:
            content = tag.get("content")
            if isinstance(content, str) and content.strip():
                return content.strip()
    return None


def extract_meta(html: str) -> PageMeta:
    soup = _soup(html)
    return PageMeta(
        description=_meta_content(soup, "name", "description"),
        og_title=_meta_content(soup, "property", "og:title"),
        og_description=_meta_content(soup, "property", "og:description"),
    )


def extract_og_site_name(html: str) -> Optional[str]:
    return _meta_content(_soup(html), "property", "og:site_name")


def extract_footer_text(html: str) -> Optional[str]:
    """
    Text of the first ``<footer>``; if there is none (or it is empty or
    oversized) the first copyright notice found anywhere in the page.
    """
    soup = _soup(html)
    footer = soup.find("footer")
    if isinstance(footer, Tag):
        for element in footer.find_all(["script", "style"]):
            element.decompose()
        text = _tag_text(footer)
        if 0 < len(text) < _FOOTER_MAX_CHARS:
            return text

    for chunk in soup.stripped_strings:
        match = _COPYRIGHT_RE.search(chunk)
        if match:
            return collapse_whitespace(match.group(0))
    return None
