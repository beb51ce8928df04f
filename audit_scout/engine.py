# File: audit_scout/engine.py
"""audit_scout.engine: synchronous facade that runs a crawl with an optional deadline."""

from __future__ import annotations

import asyncio
from typing import Optional

from audit_scout.config import CrawlerConfig, load_config
from audit_scout.crawler.crawler import ProgressCallback, SiteCrawler, fetch_linkedin_preview
from audit_scout.crawler.models import CrawlResult
from audit_scout.logger import logger

__all__ = ["Engine"]


class Engine:
    """Facade for the CLI and tests: config loading and one-call crawling."""

    @staticmethod
    def load_config(path: Optional[str]) -> CrawlerConfig:
        """Load settings from YAML/JSON, or defaults when no path is given."""
        return load_config(path)

    def __init__(self, config: Optional[CrawlerConfig] = None) -> None:
        self.config = config or CrawlerConfig()

    async def crawl(
        self,
        url: str,
        max_pages: Optional[int] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> CrawlResult:
        async with SiteCrawler(self.config) as crawler:
            return await crawler.crawl(url, max_pages, on_progress)

    def start_crawl(
        self,
        url: str,
        max_pages: Optional[int] = None,
        on_progress: Optional[ProgressCallback] = None,
        deadline: Optional[float] = None,
    ) -> CrawlResult:
        """
        Run a crawl to completion. The core only bounds single requests; pass
        *deadline* (seconds) to bound the whole crawl.
        """
        coro = self.crawl(url, max_pages, on_progress)
        try:
            if deadline:
                return asyncio.run(asyncio.wait_for(coro, timeout=deadline))
            return asyncio.run(coro)
        except asyncio.TimeoutError:
            logger.error("Crawl did not finish within %s seconds", deadline)
            raise

    def linkedin_preview(self, url: str) -> Optional[str]:
        return asyncio.run(fetch_linkedin_preview(url, config=self.config))
