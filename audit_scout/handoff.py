# === FILE: audit_scout/handoff.py ===
"""
Hand-off of a CrawlResult to the downstream content-analysis collaborator.
"""
from __future__ import annotations

from typing import Any, Dict, List

from audit_scout.crawler.models import CrawlResult

#: page text is cut to this many characters to keep analysis prompts bounded
DEFAULT_MAX_CHARS = 3000


def analysis_pages(result: CrawlResult, max_chars: int = DEFAULT_MAX_CHARS) -> List[Dict[str, Any]]:
    """One entry per crawled page: url, title, truncated content and meta."""
    pages: List[Dict[str, Any]] = []
    for page in result.pages:
        meta = {
            "description": page.meta.description,
            "og_title": page.meta.og_title,
            "og_description": page.meta.og_description,
        }
        pages.append(
            {
                "url": page.url,
                "title": page.title,
                "content": page.text_content[:max_chars],
                "meta": {k: v for k, v in meta.items() if v is not None},
            }
        )
    return pages


def analysis_payload(site_url: str, result: CrawlResult, max_chars: int = DEFAULT_MAX_CHARS) -> Dict[str, Any]:
    """Everything the analysis step needs in one JSON-ready mapping."""
    warning = result.spa_warning
    return {
        "site_url": site_url,
        "company_name": result.company_name,
        "linkedin_url": result.linkedin_url,
        "pages": analysis_pages(result, max_chars),
        "spa_warning": (
            {"is_spa": warning.is_spa, "indicators": list(warning.indicators), "message": warning.message}
            if warning
            else None
        ),
    }


__all__ = ["DEFAULT_MAX_CHARS", "analysis_pages", "analysis_payload"]
