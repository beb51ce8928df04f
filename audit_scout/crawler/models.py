# audit_scout/crawler/models.py
"""
Data models for the AuditScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(slots=True, frozen=True)
class PageMeta:
    """Description and Open-Graph fields taken from ``<meta>`` tags."""

    description: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None


@dataclass(slots=True, frozen=True)
class CrawledPage:
    """One accepted page: normalized URL plus the signals extracted from it."""

    url: str
    title: str
    text_content: str
    primary_headline: Optional[str] = None
    outbound_links: Tuple[str, ...] = ()
    meta: PageMeta = field(default_factory=PageMeta)


@dataclass(slots=True, frozen=True)
class SpaWarning:
    """Attached to a result when the homepage looks client-rendered."""

    is_spa: bool
    indicators: Tuple[str, ...]
    message: str


@dataclass(slots=True)
class CrawlResult:
    """Accumulated outcome of a crawl, filled in by the scheduler."""

    pages: List[CrawledPage] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    linkedin_url: Optional[str] = None
    spa_warning: Optional[SpaWarning] = None
    company_name: Optional[str] = None


@dataclass(slots=True, frozen=True)
class RenderMetadata:
    """Metadata the render service scrapes from the rendered DOM."""

    title: Optional[str] = None
    og_site_name: Optional[str] = None
    og_title: Optional[str] = None
    description: Optional[str] = None
    h1: Optional[str] = None
    footer_text: Optional[str] = None


@dataclass(slots=True, frozen=True)
class RenderedPage:
    """Successful response of the render service."""

    html: str
    metadata: RenderMetadata = field(default_factory=RenderMetadata)
    elapsed: Optional[float] = None


__all__ = [
    "PageMeta",
    "CrawledPage",
    "SpaWarning",
    "CrawlResult",
    "RenderMetadata",
    "RenderedPage",
]
