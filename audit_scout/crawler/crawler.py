# === FILE: audit_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Deque, Optional, Protocol, Sequence, Set, Union

from aiohttp import ClientSession

from audit_scout.classifier import CompanySignals, detect_spa, infer_company_name, is_error_page
from audit_scout.config import CrawlerConfig
from audit_scout.crawler.fetcher import BlockedUrlError, Fetcher, FetchError
from audit_scout.crawler.guard import is_private_url
from audit_scout.crawler.link_extractor import extract_links, find_linkedin, normalize_url, origin_of
from audit_scout.crawler.models import CrawledPage, CrawlResult, RenderedPage, SpaWarning
from audit_scout.crawler.policy import PRIORITY_PATHS, should_skip_url
from audit_scout.crawler.render import RenderServiceClient
from audit_scout.logger import LOGGER_NAME
from audit_scout.parser.html_parser import (
    UNTITLED,
    extract_footer_text,
    extract_h1,
    extract_meta,
    extract_og_site_name,
    extract_text,
    extract_title,
)

__all__ = (
    "SiteCrawler",
    "TraversalContext",
    "ProgressCallback",
    "crawl_website",
    "fetch_linkedin_preview",
    "PRIVATE_START_ERROR",
)

PRIVATE_START_ERROR = "Cannot crawl private/internal URLs"
SPA_RENDERED_MESSAGE = (
    "This site uses JavaScript rendering. We used a headless browser "
    "but some content may still be incomplete."
)
SPA_UNRENDERED_MESSAGE = (
    "This site appears to use JavaScript rendering. Some content may not be "
    "captured in the analysis. Results may be incomplete."
)

ProgressCallback = Callable[[int, int, str], Union[None, Awaitable[None]]]


class PageSource(Protocol):
    async def fetch(self, url: str) -> str: ...


class PageRenderer(Protocol):
    async def render(self, url: str) -> Optional[RenderedPage]: ...


@dataclass
class TraversalContext:
    """Mutable state of one crawl: work queue, visited set and the result."""

    start_url: str
    max_pages: int
    queue: Deque[str] = field(default_factory=deque)
    visited: Set[str] = field(default_factory=set)
    result: CrawlResult = field(default_factory=CrawlResult)
    # priority paths no crawled page has linked to yet
    speculative: Set[str] = field(default_factory=set)
    homepage_checked: bool = False

    @classmethod
    def seeded(
        cls,
        start_url: str,
        max_pages: int,
        priority_paths: Sequence[str] = PRIORITY_PATHS,
    ) -> TraversalContext:
        """Queue the normalized start URL followed by the priority paths."""
        start = normalize_url(start_url)
        ctx = cls(start_url=start, max_pages=max(0, max_pages))
        ctx.queue.append(start)
        origin = origin_of(start)
        for path in priority_paths:
            candidate = f"{origin}{path}"
            if candidate not in ctx.queue:
                ctx.queue.append(candidate)
                ctx.speculative.add(candidate)
        return ctx

    @property
    def budget_left(self) -> bool:
        return len(self.result.pages) < self.max_pages

    def enqueue(self, url: str) -> bool:
        if url in self.visited or url in self.queue:
            return False
        self.queue.append(url)
        return True


class SiteCrawler:
    """Sequential breadth-first crawler bounded by a page budget."""

    def __init__(
        self,
        config: Optional[CrawlerConfig] = None,
        *,
        fetcher: Optional[PageSource] = None,
        renderer: Optional[PageRenderer] = None,
    ) -> None:
        self.config = config or CrawlerConfig()
        self.fetcher = fetcher
        self.renderer = renderer
        self.session: Optional[ClientSession] = None
        self.logger = logging.getLogger(LOGGER_NAME)

    async def __aenter__(self) -> SiteCrawler:
        if self.fetcher is None or self.renderer is None:
            self.session = ClientSession(raise_for_status=False)
            if self.fetcher is None:
                self.fetcher = Fetcher(self.session, self.config)
            if self.renderer is None:
                self.renderer = RenderServiceClient(self.config.render, self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(
        self,
        start_url: str,
        max_pages: Optional[int] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> CrawlResult:
        if is_private_url(start_url):
            self.logger.error("Rejected private URL: %s", start_url)
            return CrawlResult(errors=[PRIVATE_START_ERROR])
        if self.fetcher is None or self.renderer is None:
            raise RuntimeError("SiteCrawler must be used as an async context manager")

        budget = self.config.max_pages if max_pages is None else max_pages
        ctx = TraversalContext.seeded(start_url, budget)
        self.logger.info("Crawl started: %s (max %d pages)", ctx.start_url, ctx.max_pages)
        started = time.monotonic()

        while ctx.queue and ctx.budget_left:
            await self._step(ctx, on_progress)

        self.logger.info(
            "Crawl finished: %d pages, %d errors in %.2f s",
            len(ctx.result.pages),
            len(ctx.result.errors),
            time.monotonic() - started,
        )
        return ctx.result

    async def _step(self, ctx: TraversalContext, on_progress: Optional[ProgressCallback]) -> None:
        """Take one candidate off the queue and carry it to its final state."""
        candidate = ctx.queue.popleft()
        try:
            url = normalize_url(candidate)
        except ValueError:
            return
        if url in ctx.visited or should_skip_url(url):
            return
        ctx.visited.add(url)

        await self._report(on_progress, len(ctx.result.pages), len(ctx.queue) + len(ctx.visited), url)

        try:
            html = await self.fetcher.fetch(url)  # type: ignore[union-attr]
        except BlockedUrlError:
            ctx.result.errors.append(f"Blocked private URL: {url}")
            await self._pause()
            return
        except FetchError as exc:
            if url in ctx.speculative:
                self.logger.debug("Priority path not available: %s (%s)", url, exc.reason)
            else:
                self.logger.warning("Failed to fetch %s: %s", url, exc.reason)
                ctx.result.errors.append(f"Failed to fetch: {url} ({exc.reason})")
            await self._pause()
            return

        if not ctx.homepage_checked:
            ctx.homepage_checked = True
            html = await self._inspect_homepage(ctx, url, html)

        self._accept(ctx, url, html)
        await self._pause()

    def _accept(self, ctx: TraversalContext, url: str, html: str) -> None:
        title = extract_title(html)
        text = extract_text(html)
        if is_error_page(text, title):
            self.logger.info("Skipping error page: %s", url)
            return

        links = extract_links(html, url)
        ctx.result.pages.append(
            CrawledPage(
                url=url,
                title=title,
                text_content=text,
                primary_headline=extract_h1(html),
                outbound_links=tuple(links),
                meta=extract_meta(html),
            )
        )
        if ctx.result.linkedin_url is None:
            ctx.result.linkedin_url = find_linkedin(html)
        for link in links:
            ctx.speculative.discard(link)
            ctx.enqueue(link)

    async def _inspect_homepage(self, ctx: TraversalContext, url: str, html: str) -> str:
        """
        SPA check on the first fetched document. Returns the HTML to extract
        from: the rendered snapshot when the render service succeeded.
        """
        result = ctx.result
        detection = detect_spa(html)
        if not detection.is_spa:
            title = extract_title(html)
            result.company_name = infer_company_name(
                CompanySignals(
                    og_site_name=extract_og_site_name(html),
                    title=None if title == UNTITLED else title,
                    footer_text=extract_footer_text(html),
                )
            )
            if result.company_name:
                self.logger.info("Extracted company name: %s", result.company_name)
            return html

        self.logger.info("SPA detected for %s: %s", url, ", ".join(detection.indicators))
        rendered = await self.renderer.render(url)  # type: ignore[union-attr]
        if rendered is None:
            result.spa_warning = SpaWarning(True, detection.indicators, SPA_UNRENDERED_MESSAGE)
            return html

        meta = rendered.metadata
        result.company_name = infer_company_name(
            CompanySignals(og_site_name=meta.og_site_name, title=meta.title, footer_text=meta.footer_text)
        )
        if result.company_name:
            self.logger.info("Extracted company name: %s", result.company_name)

        recheck = detect_spa(rendered.html)
        if recheck.is_spa:
            result.spa_warning = SpaWarning(True, recheck.indicators, SPA_RENDERED_MESSAGE)
        else:
            self.logger.info("Render service resolved SPA issues for %s", url)
        return rendered.html

    async def _report(self, on_progress: Optional[ProgressCallback], *args: Any) -> None:
        if on_progress is None:
            return
        outcome = on_progress(*args)
        if inspect.isawaitable(outcome):
            await outcome

    async def _pause(self) -> None:
        if self.config.politeness_delay > 0:
            await asyncio.sleep(self.config.politeness_delay)


async def crawl_website(
    start_url: str,
    max_pages: int = 25,
    on_progress: Optional[ProgressCallback] = None,
    *,
    config: Optional[CrawlerConfig] = None,
) -> CrawlResult:
    """
    Crawl *start_url* and return the accumulated result.

    A private or internal start URL is rejected before any network activity.
    Per-page failures end up in ``CrawlResult.errors``; nothing is raised.
    """
    if is_private_url(start_url):
        logging.getLogger(LOGGER_NAME).error("Rejected private URL: %s", start_url)
        return CrawlResult(errors=[PRIVATE_START_ERROR])
    async with SiteCrawler(config) as crawler:
        return await crawler.crawl(start_url, max_pages, on_progress)


async def fetch_linkedin_preview(
    url: str,
    *,
    config: Optional[CrawlerConfig] = None,
    is_private: Callable[[str], bool] = is_private_url,
) -> Optional[str]:
    """Text of a (public) LinkedIn page, or None when it cannot be fetched."""
    config = config or CrawlerConfig()
    async with ClientSession() as session:
        try:
            html = await Fetcher(session, config, is_private=is_private).fetch(url)
        except FetchError as exc:
            logging.getLogger(LOGGER_NAME).info("LinkedIn preview unavailable: %s", exc)
            return None
    return extract_text(html)
