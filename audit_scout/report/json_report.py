# audit_scout/report/json_report.py

"""
JSON serialization of a CrawlResult.

The dict layout is what the analysis collaborator and the CLI consume.
"""
from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Union

from audit_scout.crawler.models import CrawlResult


def result_to_dict(result: CrawlResult) -> dict[str, Any]:
    """Plain-dict view of *result*; tuples become lists."""
    data = asdict(result)
    for page in data["pages"]:
        page["outbound_links"] = list(page["outbound_links"])
    if data["spa_warning"] is not None:
        data["spa_warning"]["indicators"] = list(data["spa_warning"]["indicators"])
    return data


def render_json(result: Any, output_path: Union[Path, str], *, pretty: bool = True) -> Path:
    """
    Save *result* as JSON at *output_path*.

    :param result: a CrawlResult or any JSON-serializable payload
    :param output_path: path to the JSON file
    :return: Path of the saved file

    Example:
    ```python
    from audit_scout.report.json_report import render_json
    report_path = render_json(result, 'reports/crawl.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = result_to_dict(result) if isinstance(result, CrawlResult) else result

    with output.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2 if pretty else None)

    return output


__all__ = ["result_to_dict", "render_json"]
