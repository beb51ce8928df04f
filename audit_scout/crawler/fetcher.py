# audit_scout/crawler/fetcher.py
"""
Fetcher module: guarded HTML requests with a per-request timeout.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, FrozenSet
from urllib.parse import urljoin

from aiohttp import ClientError, ClientSession, ClientTimeout

from audit_scout.config import CrawlerConfig
from audit_scout.crawler.guard import is_private_url
from audit_scout.logger import LOGGER_NAME

HTML_MIME_TYPES: FrozenSet[str] = frozenset({"text/html", "application/xhtml+xml"})
ACCEPT_HEADER = "text/html,application/xhtml+xml"
REDIRECT_STATUS: FrozenSet[int] = frozenset({301, 302, 303, 307, 308})

logger = logging.getLogger(f"{LOGGER_NAME}.fetcher")


class FetchError(Exception):
    """A page could not be retrieved as HTML."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class BlockedUrlError(FetchError):
    """The guard refused to request a private or internal address."""

    def __init__(self, url: str) -> None:
        super().__init__(url, "private or internal address")


def default_headers(config: CrawlerConfig) -> dict[str, str]:
    return {"User-Agent": config.user_agent, "Accept": ACCEPT_HEADER}


class Fetcher:
    """Fetches one HTML document at a time; every hop passes the SSRF guard."""

    def __init__(
        self,
        session: ClientSession,
        config: CrawlerConfig,
        is_private: Callable[[str], bool] = is_private_url,
    ) -> None:
        self.session = session
        self.config = config
        self._is_private = is_private

    async def fetch(self, url: str) -> str:
        """
        Return the HTML body of *url*.

        Redirects are followed by hand (up to ``config.max_redirects``) so each
        target is checked by the guard before it is requested. ``page_timeout``
        bounds the whole redirect chain, not each hop.
        Raises BlockedUrlError or FetchError; never retries.
        """
        current = url
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.config.page_timeout
        for _ in range(self.config.max_redirects + 1):
            if self._is_private(current):
                logger.warning("Blocked private URL: %s", current)
                raise BlockedUrlError(current)
            remaining = deadline - loop.time()
            if remaining <= 0:
                raise FetchError(url, f"timed out after {self.config.page_timeout:g}s")
            try:
                async with self.session.get(
                    current,
                    headers=default_headers(self.config),
                    timeout=ClientTimeout(total=remaining),
                    allow_redirects=False,
                ) as resp:
                    location = resp.headers.get("Location")
                    if resp.status in REDIRECT_STATUS and location:
                        current = urljoin(str(resp.url), location)
                        logger.debug("Redirect %s -> %s", url, current)
                        continue
                    if not 200 <= resp.status < 300:
                        raise FetchError(url, f"HTTP {resp.status}")
                    mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                    if mime not in HTML_MIME_TYPES:
                        raise FetchError(url, f"non-HTML content ({mime or 'unknown'})")
                    return await resp.text(errors="replace")
            except asyncio.TimeoutError:
                raise FetchError(url, f"timed out after {self.config.page_timeout:g}s") from None
            except ClientError as exc:
                raise FetchError(url, str(exc) or type(exc).__name__) from exc
        raise FetchError(url, f"more than {self.config.max_redirects} redirects")


__all__ = ["Fetcher", "FetchError", "BlockedUrlError", "HTML_MIME_TYPES", "default_headers"]
