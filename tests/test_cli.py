# File: tests/test_cli.py
"""Tests for the click CLI (`audit_scout.cli`) via click.testing.CliRunner.
Cover `crawl`, `linkedin`, `config`, `--version` and error handling.
"""
import asyncio
import json

import pytest
from click.testing import CliRunner

from audit_scout.cli import cli, with_scheme
from audit_scout.crawler.models import CrawledPage, CrawlResult, PageMeta
from audit_scout.engine import Engine


@pytest.fixture()
def crawl_calls(monkeypatch):
    """Replace Engine.crawl so no network is touched; record the arguments."""
    calls = []

    async def fake_crawl(self, url, max_pages=None, on_progress=None):
        calls.append({"url": url, "max_pages": max_pages, "config": self.config})
        page = CrawledPage(
            url="https://example.com",
            title="Example",
            text_content="Hello " * 1000,
            outbound_links=("https://example.com/about",),
            meta=PageMeta(description="Demo"),
        )
        return CrawlResult(pages=[page], company_name="Example")

    monkeypatch.setattr(Engine, "crawl", fake_crawl)
    return calls


@pytest.fixture()
def config_file(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("max_pages: 7\npoliteness_delay: 0\nuser_agent: Agent/1.0\n", encoding="utf-8")
    return cfg


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "AuditScout" in result.output


def test_with_scheme():
    assert with_scheme("example.com") == "https://example.com"
    assert with_scheme(" http://example.com ") == "http://example.com"


def test_show_config_masks_api_key(config_file, monkeypatch):
    monkeypatch.setenv("RENDER_SERVICE_URL", "https://render.example.com")
    monkeypatch.setenv("RENDER_SERVICE_API_KEY", "super-secret")
    result = CliRunner().invoke(cli, ["--config", str(config_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["max_pages"] == 7
    assert data["user_agent"] == "Agent/1.0"
    assert data["render"]["api_key"] == "***"
    assert "super-secret" not in result.output


def test_crawl_stdout(crawl_calls, config_file):
    result = CliRunner().invoke(cli, ["--config", str(config_file), "crawl", "example.com", "--max-pages", "3"])
    assert result.exit_code == 0, result.output
    output = json.loads(result.output)
    assert output["pages"][0]["url"] == "https://example.com"
    assert output["pages"][0]["outbound_links"] == ["https://example.com/about"]
    assert output["company_name"] == "Example"
    assert crawl_calls[0]["url"] == "https://example.com"
    assert crawl_calls[0]["max_pages"] == 3
    assert crawl_calls[0]["config"].max_pages == 7


def test_crawl_json_file(crawl_calls, config_file, tmp_path):
    out = tmp_path / "reports" / "out.json"
    result = CliRunner().invoke(
        cli, ["--config", str(config_file), "crawl", "https://example.com", "--json", str(out), "--pretty"]
    )
    assert result.exit_code == 0, result.output
    assert "JSON report" in result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["pages"][0]["title"] == "Example"


def test_crawl_analysis_payload(crawl_calls, config_file):
    result = CliRunner().invoke(cli, ["--config", str(config_file), "crawl", "https://example.com", "--analysis"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["site_url"] == "https://example.com"
    assert len(payload["pages"][0]["content"]) == 3000
    assert payload["pages"][0]["meta"] == {"description": "Demo"}


def test_crawl_deadline(monkeypatch, config_file):
    async def slow(self, url, max_pages=None, on_progress=None):
        await asyncio.sleep(2)
        return CrawlResult()

    monkeypatch.setattr(Engine, "crawl", slow)
    result = CliRunner().invoke(cli, ["--config", str(config_file), "crawl", "example.com", "--deadline", "0.2"])
    assert result.exit_code == 1
    assert "did not finish" in result.output


def test_crawl_of_private_url_exits_with_error(config_file):
    result = CliRunner().invoke(cli, ["--config", str(config_file), "crawl", "http://127.0.0.1:8080"])
    assert result.exit_code == 1
    assert "Cannot crawl private/internal URLs" in result.output


def test_invalid_config_is_reported(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("max_pages: -1\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(bad), "config"])
    assert result.exit_code == 1
    assert "Failed to load configuration" in result.output


def test_linkedin_preview(monkeypatch, config_file):
    monkeypatch.setattr(Engine, "linkedin_preview", lambda self, url: f"preview of {url}")
    result = CliRunner().invoke(cli, ["--config", str(config_file), "linkedin", "linkedin.com/company/acme"])
    assert result.exit_code == 0
    assert "preview of https://linkedin.com/company/acme" in result.output


def test_linkedin_preview_unavailable(monkeypatch, config_file):
    monkeypatch.setattr(Engine, "linkedin_preview", lambda self, url: None)
    result = CliRunner().invoke(cli, ["--config", str(config_file), "linkedin", "https://linkedin.com/company/x"])
    assert result.exit_code == 1
    assert "No preview available" in result.output
