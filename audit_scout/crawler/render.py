# audit_scout/crawler/render.py
"""
Client for the external headless-rendering service used when the homepage
turns out to be rendered by client-side JavaScript.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from audit_scout.config import RenderServiceConfig
from audit_scout.crawler.models import RenderedPage, RenderMetadata
from audit_scout.logger import LOGGER_NAME

logger = logging.getLogger(f"{LOGGER_NAME}.render")


class _RenderMetadataModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: Optional[str] = None
    og_site_name: Optional[str] = Field(None, alias="ogSiteName")
    og_title: Optional[str] = Field(None, alias="ogTitle")
    description: Optional[str] = None
    h1: Optional[str] = None
    footer_text: Optional[str] = Field(None, alias="footerText")


class RenderResponse(BaseModel):
    """Wire format of ``POST /render`` responses."""
    model_config = ConfigDict(extra="ignore")

    success: bool
    html: Optional[str] = None
    metadata: Optional[_RenderMetadataModel] = None
    elapsed: Optional[float] = None


class RenderServiceClient:
    """One-shot rendering calls; every failure collapses to ``None``."""

    def __init__(self, config: RenderServiceConfig, session: ClientSession) -> None:
        self.config = config
        self.session = session

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def _payload(self, url: str) -> dict[str, Any]:
        return {
            "url": url,
            "waitFor": self.config.wait_for_ms,
            "timeout": int(self.config.timeout * 1000),
        }

    async def render(self, url: str) -> Optional[RenderedPage]:
        if not self.enabled:
            logger.info("Render service not configured, skipping JS rendering")
            return None

        try:
            async with self.session.post(
                self.config.render_url,
                json=self._payload(url),
                headers={"X-API-Key": self.config.api_key or "", "Accept": "application/json"},
                timeout=ClientTimeout(total=self.config.timeout),
            ) as resp:
                if not 200 <= resp.status < 300:
                    logger.warning("Render service error: HTTP %s", resp.status)
                    return None
                body = await resp.json(content_type=None)
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            logger.warning("Render service request failed for %s: %s", url, exc)
            return None

        try:
            parsed = RenderResponse.model_validate(body)
        except ValidationError as exc:
            logger.warning("Render service returned malformed payload: %s", exc)
            return None
        if not parsed.success or not parsed.html:
            logger.warning("Render service could not render %s", url)
            return None

        logger.info("Rendered %s via headless browser in %sms", url, parsed.elapsed)
        meta = parsed.metadata or _RenderMetadataModel()
        return RenderedPage(
            html=parsed.html,
            metadata=RenderMetadata(**meta.model_dump()),
            elapsed=parsed.elapsed,
        )


__all__ = ["RenderServiceClient", "RenderResponse"]
