# === FILE: audit_scout/config.py ===
"""
Loading and validation of AuditScout crawler settings.
Pydantic describes the schema; YAML or JSON files and a couple of
environment variables feed it.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; AuditScoutBot/1.0)"

RENDER_URL_ENV = "RENDER_SERVICE_URL"
RENDER_KEY_ENV = "RENDER_SERVICE_API_KEY"


class RenderServiceConfig(BaseModel):
    """Connection settings for the headless rendering service."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    endpoint: Optional[HttpUrl] = Field(None, description="Base URL of the render service.")
    api_key: Optional[str] = Field(None, repr=False, description="Value of the X-API-Key header.")
    wait_for_ms: int = Field(3000, ge=0, description="How long the browser waits after load.")
    timeout: float = Field(30.0, gt=0, description="Overall render timeout (seconds).")

    @field_validator("api_key", mode="before")
    def _blank_key_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def enabled(self) -> bool:
        return self.endpoint is not None and bool(self.api_key)

    @property
    def render_url(self) -> str:
        if self.endpoint is None:
            raise ValueError("render service endpoint is not configured")
        return f"{str(self.endpoint).rstrip('/')}/render"


class CrawlerConfig(BaseModel):
    """Settings for one crawl."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_pages: int = Field(25, ge=0, description="Budget of accepted pages per crawl.")
    page_timeout: float = Field(5.0, gt=0, description="Timeout per page request (seconds).")
    politeness_delay: float = Field(0.1, ge=0, description="Pause between fetches (seconds).")
    max_redirects: int = Field(5, ge=0, description="Redirect hops followed per page.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent header.")
    render: RenderServiceConfig = Field(default_factory=RenderServiceConfig)

    def masked(self) -> dict[str, Any]:
        """JSON-ready dump with the render API key hidden."""
        data = self.model_dump(mode="json")
        if data["render"].get("api_key"):
            data["render"]["api_key"] = "***"
        return data


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def _apply_env(data: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """Overlay render-service credentials from the environment."""
    overrides = {}
    if environ.get(RENDER_URL_ENV):
        overrides["endpoint"] = environ[RENDER_URL_ENV]
    if environ.get(RENDER_KEY_ENV):
        overrides["api_key"] = environ[RENDER_KEY_ENV]
    if not overrides:
        return data
    render = dict(data.get("render") or {})
    render.update(overrides)
    return {**data, "render": render}


def load_config(
    path: Union[str, Path, None] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CrawlerConfig:
    """
    Read YAML or JSON and return a validated CrawlerConfig.

    With ``path=None`` the project default ``configs/default.yaml`` is used if it
    exists, otherwise built-in defaults. An explicit path that does not exist
    raises FileNotFoundError.
    """
    environ = os.environ if environ is None else environ

    if path is None:
        data = _read_yaml(_DEFAULT_CFG) if _DEFAULT_CFG.is_file() else {}
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

        suffix = path_obj.suffix.lower()
        if suffix in (".yaml", ".yml"):
            data = _read_yaml(path_obj)
        elif suffix == ".json":
            data = _read_json(path_obj)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    return CrawlerConfig(**_apply_env(data, environ))


__all__ = [
    "CrawlerConfig",
    "RenderServiceConfig",
    "DEFAULT_USER_AGENT",
    "load_config",
]
