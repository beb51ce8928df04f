# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Dict, List, Optional, Set

import pytest
from aiohttp import web

from audit_scout.config import CrawlerConfig
from audit_scout.crawler.fetcher import BlockedUrlError, FetchError
from audit_scout.crawler.models import RenderedPage
from audit_scout.logger import configure

LONG_PARAGRAPH = (
    "We design and build reliable industrial automation systems for mid-sized "
    "manufacturers, combining controls engineering, custom software and "
    "on-site commissioning so production lines run faster with less downtime. "
) * 3


def html_page(
    title: str = "Acme Widgets",
    body: str = "",
    head: str = "",
    paragraph: str = LONG_PARAGRAPH,
) -> str:
    """Small but content-rich page that is neither an SPA nor an error page."""
    return (
        f"<html><head><title>{title}</title>{head}</head>"
        f"<body><main><p>{paragraph}</p>{body}</main></body></html>"
    )


class FakeFetcher:
    """Serves canned HTML by normalized URL; anything unknown is a 404."""

    def __init__(self, pages: Dict[str, str], blocked: Optional[Set[str]] = None) -> None:
        self.pages = pages
        self.blocked = blocked or set()
        self.calls: List[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url in self.blocked:
            raise BlockedUrlError(url)
        if url not in self.pages:
            raise FetchError(url, "HTTP 404")
        return self.pages[url]


class FakeRenderer:
    def __init__(self, rendered: Optional[RenderedPage] = None) -> None:
        self.rendered = rendered
        self.calls: List[str] = []

    async def render(self, url: str) -> Optional[RenderedPage]:
        self.calls.append(url)
        return self.rendered


@pytest.fixture(autouse=True)
def _restore_logging():
    """CLI tests rebind the log handler to CliRunner streams; rebind to stderr afterwards."""
    yield
    configure()


@pytest.fixture()
def fast_config() -> CrawlerConfig:
    """Default config without politeness pauses so tests run instantly."""
    return CrawlerConfig(politeness_delay=0, page_timeout=2.0)


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()
