# === FILE: audit_scout/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for the AuditScout crawler.

Commands:
  crawl     Crawl a site and print or save the result as JSON
  linkedin  Print the text preview of a LinkedIn company page
  config    Show the effective configuration

Common options:
  --config PATH       YAML/JSON config (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only when omitted)
  --log-format FORMAT Logging format string

crawl options:
  --max-pages INT     Page budget (overrides max_pages)
  --json PATH         Save the JSON result to a file
  --pretty            Indent JSON output
  --deadline SEC      Wall-clock limit for the whole crawl
  --analysis          Emit the analysis hand-off payload instead of the raw result

Example:
  audit-scout crawl example.com --max-pages 10 --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from audit_scout import __version__
from audit_scout.config import load_config
from audit_scout.engine import Engine
from audit_scout.handoff import analysis_payload
from audit_scout.logger import init_logging
from audit_scout.report.json_report import render_json, result_to_dict

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg="red", err=True)
    sys.exit(1)


def with_scheme(url: str) -> str:
    url = url.strip()
    return url if "://" in url else f"https://{url}"


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", "-v", message="AuditScout, version %(version)s")
@click.option(
    "--config", "-c", "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a YAML or JSON config file.",
)
@click.option(
    "--log-level", "log_level",
    default="INFO", show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Logging level",
)
@click.option(
    "--log-file", "log_file",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Log file path (stderr only if omitted)",
)
@click.option(
    "--log-format", "log_format",
    default="%(asctime)s %(levelname)s %(message)s",
    show_default=True,
    help="Format string for log records",
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """AuditScout command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f"Failed to load configuration: {e}")
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@cli.command("crawl", context_settings=CONTEXT_SETTINGS)
@click.argument("url")
@click.option("--max-pages", "-n", "max_pages", type=click.IntRange(min=0), default=None,
              help="Page budget (overrides max_pages from config)")
@click.option("--json", "-j", "json_output", default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help="Save the JSON result to a file")
@click.option("--pretty", is_flag=True, help="Indent JSON output (2 spaces)")
@click.option("--deadline", "deadline", type=click.FloatRange(min=0, min_open=True), default=None,
              help="Wall-clock limit for the whole crawl (seconds)")
@click.option("--analysis", is_flag=True, help="Emit the analysis hand-off payload")
@click.pass_context
def crawl(ctx, url, max_pages, json_output, pretty, deadline, analysis):
    """Crawl URL and output the collected pages."""
    cfg = ctx.obj["config"]
    url = with_scheme(url)
    engine = Engine(cfg)

    def progress(crawled, discovered, current):
        click.echo(f"[{crawled}/{discovered}] {current}", err=True)

    try:
        result = engine.start_crawl(url, max_pages=max_pages, on_progress=progress, deadline=deadline)
    except asyncio.TimeoutError:
        print_error(f"Crawl did not finish within {deadline} seconds")
    except Exception as e:
        print_error(f"Crawl failed: {e}")

    data = analysis_payload(url, result) if analysis else result_to_dict(result)

    if json_output:
        try:
            saved = render_json(data, json_output, pretty=pretty)
        except OSError as e:
            print_error(f"Failed to save JSON: {e}")
        click.echo(f"JSON report: {saved}")
    else:
        click.echo(json.dumps(data, ensure_ascii=False, indent=2 if pretty else None))

    if not result.pages and result.errors:
        sys.exit(1)


@cli.command("linkedin", context_settings=CONTEXT_SETTINGS)
@click.argument("url")
@click.pass_context
def linkedin(ctx, url):
    """Print the public text of a LinkedIn page."""
    text = Engine(ctx.obj["config"]).linkedin_preview(with_scheme(url))
    if text is None:
        print_error(f"No preview available for {url}")
    click.echo(text)


@cli.command("config", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj["config"]
    click.echo(json.dumps(cfg.masked(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
