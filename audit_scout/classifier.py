# File: audit_scout/classifier.py
"""audit_scout.classifier: heuristics layered on the extracted page signals.

Each classifier is an ordered table of ``(predicate, outcome)`` rules so the
tie-break order is visible in one place:

* SPA detection — is the homepage rendered by client-side script?
* error-page detection — is this a 404/placeholder page we should drop?
* company-name inference — best guess from og:site_name, title, footer.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Sequence, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from audit_scout.parser.html_parser import collapse_whitespace

__all__: Sequence[str] = (
    "SpaDetection",
    "CompanySignals",
    "detect_spa",
    "is_error_page",
    "infer_company_name",
    "SPA_RULES",
    "ERROR_TITLE_PATTERNS",
    "ERROR_PHRASES",
)

# --------------------------------------------------------------------------- #
# SPA detection                                                               #
# --------------------------------------------------------------------------- #

FRAMEWORK = "framework"
MINIMAL = "minimal"
HINT = "hint"

MIN_VISIBLE_CHARS = 200
_APP_ROOT_IDS = ("app", "root", "__next")
_ANGULAR_RE = re.compile(r"angular[.\-]", re.IGNORECASE)


@dataclass(slots=True, frozen=True)
class SpaDetection:
    is_spa: bool
    indicators: Tuple[str, ...]


def _has_nextjs(html: str, soup: BeautifulSoup) -> bool:
    return "__NEXT_DATA__" in html or "_next/static" in html


def _has_angular(html: str, soup: BeautifulSoup) -> bool:
    return "ng-app" in html or "ng-controller" in html or bool(_ANGULAR_RE.search(html))


def _has_react(html: str, soup: BeautifulSoup) -> bool:
    return "data-reactroot" in html or "__REACT_DEVTOOLS" in html


def _has_vue(html: str, soup: BeautifulSoup) -> bool:
    return "data-v-" in html or "__VUE__" in html


def _has_ember(html: str, soup: BeautifulSoup) -> bool:
    return "ember-view" in html or "EmberENV" in html


def _visible_body_text(soup: BeautifulSoup) -> Optional[str]:
    body = soup.body
    if not isinstance(body, Tag):
        return None
    for element in body.find_all(["script", "style", "link", "meta"]):
        element.decompose()
    return collapse_whitespace(body.get_text(" "))


def _has_minimal_body(html: str, soup: BeautifulSoup) -> bool:
    text = _visible_body_text(soup)
    return text is not None and len(text) < MIN_VISIBLE_CHARS


def _requires_javascript(html: str, soup: BeautifulSoup) -> bool:
    return "<noscript" in html and "javascript" in html.lower()


def _has_empty_app_root(html: str, soup: BeautifulSoup) -> bool:
    for div in soup.find_all("div", id=list(_APP_ROOT_IDS)):
        if isinstance(div, Tag) and not div.find(True) and not div.get_text().strip():
            return True
    return False


SpaPredicate = Callable[[str, BeautifulSoup], bool]

SPA_RULES: Tuple[Tuple[SpaPredicate, str, str], ...] = (
    (_has_nextjs, "Next.js detected (may be SSR - checking content)", HINT),
    (_has_angular, "Angular detected", FRAMEWORK),
    (_has_react, "React SPA detected", FRAMEWORK),
    (_has_vue, "Vue.js detected", FRAMEWORK),
    (_has_ember, "Ember detected", FRAMEWORK),
    (_has_minimal_body, "Very little visible content without JavaScript", MINIMAL),
    (_requires_javascript, "Site requires JavaScript to display content", HINT),
    (_has_empty_app_root, "Empty app container (content rendered by JavaScript)", MINIMAL),
)


def detect_spa(html: str) -> SpaDetection:
    """
    Collect client-rendering indicators for *html*.

    A page is an SPA when a minimal-content indicator fires, or when a
    framework marker fires together with at least one other indicator.
    Server-rendered pages that merely ship a client framework stay unflagged.
    """
    fired: List[Tuple[str, str]] = []
    for predicate, label, kind in SPA_RULES:
        # each predicate gets a fresh tree because some of them prune it
        if predicate(html, BeautifulSoup(html, "html.parser")):
            fired.append((label, kind))

    kinds = [kind for _, kind in fired]
    is_spa = MINIMAL in kinds or (FRAMEWORK in kinds and len(fired) >= 2)
    return SpaDetection(is_spa=is_spa, indicators=tuple(label for label, _ in fired))


# --------------------------------------------------------------------------- #
# Error pages                                                                 #
# --------------------------------------------------------------------------- #

ERROR_PHRASE_MAX_CHARS = 2000

ERROR_TITLE_PATTERNS: Tuple[Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"404",
        r"not found",
        r"error",
        r"sorry",
        r"page.*not.*found",
        r"cannot.*find",
        r"doesn.*exist",
        r"unavailable",
    )
)

ERROR_PHRASES: Tuple[str, ...] = (
    "page not found",
    "page you requested",
    "page cannot be found",
    "404 error",
    "we couldn't find",
    "we can't find",
    "doesn't exist",
    "does not exist",
    "sorry, we can't",
    "sorry, something went wrong",
    "this page isn't available",
    "oops!",
    "the page you're looking for",
    "no longer available",
    "has been removed",
    "has been moved",
    "broken link",
)


def _title_says_error(text: str, title: str) -> bool:
    return any(p.search(title) for p in ERROR_TITLE_PATTERNS)


def _short_content_says_error(text: str, title: str) -> bool:
    if len(text) >= ERROR_PHRASE_MAX_CHARS:
        return False
    lower = text.lower()
    return any(phrase in lower for phrase in ERROR_PHRASES)


ERROR_PAGE_RULES: Tuple[Callable[[str, str], bool], ...] = (
    _title_says_error,
    _short_content_says_error,
)


def is_error_page(text: str, title: str) -> bool:
    """True when *title* or short *text* looks like a 404/error placeholder."""
    return any(rule(text, title) for rule in ERROR_PAGE_RULES)


# --------------------------------------------------------------------------- #
# Company name                                                                #
# --------------------------------------------------------------------------- #

_TITLE_SEPARATORS_RE = re.compile(r"[|\-–—]")
_TITLE_STOPWORDS = ("home", "welcome")
_COPYRIGHT_NAME_RE = re.compile(
    r"©\s*\d{4}\s+([A-Z][A-Za-z0-9\s&]+?)(?:\.|,|All|Inc|LLC|Ltd|Corp)",
    re.IGNORECASE,
)


@dataclass(slots=True, frozen=True)
class CompanySignals:
    og_site_name: Optional[str] = None
    title: Optional[str] = None
    footer_text: Optional[str] = None


def _from_og_site_name(signals: CompanySignals) -> Optional[str]:
    name = (signals.og_site_name or "").strip()
    return name if 1 < len(name) < 100 else None


def _from_title(signals: CompanySignals) -> Optional[str]:
    if not signals.title:
        return None
    head = _TITLE_SEPARATORS_RE.split(signals.title)[0].strip()
    lower = head.lower()
    if any(word in lower for word in _TITLE_STOPWORDS):
        return None
    return head if 1 < len(head) < 50 else None


def _from_copyright(signals: CompanySignals) -> Optional[str]:
    if not signals.footer_text:
        return None
    match = _COPYRIGHT_NAME_RE.search(signals.footer_text)
    if not match:
        return None
    name = match.group(1).strip()
    return name if 1 < len(name) < 50 else None


COMPANY_NAME_RULES: Tuple[Callable[[CompanySignals], Optional[str]], ...] = (
    _from_og_site_name,
    _from_title,
    _from_copyright,
)


def infer_company_name(signals: CompanySignals) -> Optional[str]:
    """First non-empty answer of og:site_name, cleaned title, footer copyright."""
    for rule in COMPANY_NAME_RULES:
        name = rule(signals)
        if name:
            return name
    return None
