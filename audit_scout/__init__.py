"""
AuditScout package initializer.
Defines package version and exposes the crawl entry points.
"""
__version__ = "0.1.0"

from audit_scout.crawler.crawler import crawl_website, fetch_linkedin_preview  # noqa: E402
from audit_scout.crawler.models import CrawledPage, CrawlResult, PageMeta, SpaWarning  # noqa: E402

__all__ = [
    "__version__",
    "crawl_website",
    "fetch_linkedin_preview",
    "CrawledPage",
    "CrawlResult",
    "PageMeta",
    "SpaWarning",
]
