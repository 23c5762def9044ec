from __future__ import annotations

import html as html_lib
import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .models import RunResult

LATEST_RUN_ID = "latest"

_RECOMMENDATIONS = (
    "Run this check regularly (weekly recommended)",
    "Monitor external links as they may change over time",
    "Run the link check in CI before each deployment",
)


def run_id(now: float | None = None) -> str:
    """Filesystem-safe UTC run identifier, e.g. ``2024-05-01T10-20-30-123Z``."""
    now = time.time() if now is None else now
    millis = int((now % 1) * 1000)
    return time.strftime("%Y-%m-%dT%H-%M-%S", time.gmtime(now)) + f"-{millis:03d}Z"


def success_rate(valid: int, total: int) -> str:
    if total <= 0:
        return "N/A"
    return f"{valid / total * 100:.2f}%"


def build_report(
    result: RunResult,
    *,
    generated_at: str,
    base_url: str | None = None,
    site_root: Path | None = None,
) -> dict[str, Any]:
    return {
        "timestamp": generated_at,
        "base_url": base_url,
        "site_root": str(site_root) if site_root is not None else None,
        "summary": {
            "total": result.total,
            "valid": result.valid,
            "broken": result.broken,
            "warnings": result.warnings,
            "success_rate": success_rate(result.valid, result.total),
            "files_checked": result.files_checked,
        },
        "file_errors": [err.to_dict() for err in result.file_errors],
        "links": [link.to_dict() for link in result.links],
    }


_STYLE = """
body { font-family: Arial, sans-serif; margin: 20px; background: #f5f5f5; }
.container { max-width: 1200px; margin: 0 auto; background: white; padding: 20px; border-radius: 8px; }
.summary { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 20px; margin-bottom: 30px; }
.stat-card { background: #f8f9fa; padding: 20px; border-radius: 8px; text-align: center; border-left: 4px solid #007bff; }
.stat-card.success { border-left-color: #28a745; }
.stat-card.error { border-left-color: #dc3545; }
.stat-card.warning { border-left-color: #ffc107; }
.stat-number { font-size: 2em; font-weight: bold; }
.stat-label { color: #666; }
table { width: 100%; border-collapse: collapse; margin-top: 15px; }
th, td { padding: 12px; text-align: left; border-bottom: 1px solid #ddd; }
th { background-color: #f8f9fa; }
.url-cell { max-width: 300px; word-break: break-all; }
.error-cell { max-width: 200px; font-size: 0.9em; color: #666; }
""".strip()


def _esc(value: object) -> str:
    return html_lib.escape(str(value))


def _stat_card(value: object, label: str, css: str = "") -> str:
    cls = f"stat-card {css}".strip()
    return (
        f'<div class="{cls}"><div class="stat-number">{_esc(value)}</div>'
        f'<div class="stat-label">{_esc(label)}</div></div>'
    )


def _links_table(title: str, links: list[dict[str, Any]]) -> list[str]:
    if not links:
        return []
    lines = [
        '<div class="section">',
        f"<h2>{_esc(title)} ({len(links)})</h2>",
        "<table>",
        "<thead><tr><th>URL</th><th>Source File</th><th>Type</th>"
        "<th>Status Code</th><th>Error</th></tr></thead>",
        "<tbody>",
    ]
    for link in links:
        code = link.get("status_code")
        lines.append(
            "<tr>"
            f'<td class="url-cell">{_esc(link.get("url", ""))}</td>'
            f'<td>{_esc(link.get("source_file", ""))}</td>'
            f'<td>{_esc(link.get("kind", ""))}</td>'
            f"<td>{_esc(code if code is not None else 'N/A')}</td>"
            f'<td class="error-cell">{_esc(link.get("error") or "N/A")}</td>'
            "</tr>"
        )
    lines.extend(["</tbody>", "</table>", "</div>"])
    return lines


def render_html_report(report: dict[str, Any]) -> str:
    summary = report.get("summary") or {}
    links = report.get("links") or []
    broken = [lk for lk in links if lk.get("status") in {"broken", "error"}]
    warnings = [lk for lk in links if lk.get("status") == "warning"]
    file_errors = report.get("file_errors") or []

    lines = [
        "<!doctype html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
        "<title>Link Check Report</title>",
        f"<style>\n{_STYLE}\n</style>",
        "</head>",
        "<body>",
        '<div class="container">',
        '<div class="header">',
        "<h1>Link Check Report</h1>",
        f"<p>Generated on: {_esc(report.get('timestamp', ''))}</p>",
    ]
    if report.get("base_url"):
        lines.append(f"<p>Site: {_esc(report['base_url'])}</p>")
    lines.extend(
        [
            "</div>",
            '<div class="summary">',
            _stat_card(summary.get("total", 0), "Total Links"),
            _stat_card(summary.get("valid", 0), "Valid Links", "success"),
            _stat_card(summary.get("broken", 0), "Broken Links", "error"),
            _stat_card(summary.get("warnings", 0), "Warnings", "warning"),
            "</div>",
            '<div class="section">',
            f"<h2>Success Rate: {_esc(summary.get('success_rate', 'N/A'))}</h2>",
            "</div>",
        ]
    )
    lines.extend(_links_table("Broken Links", broken))
    lines.extend(_links_table("Warnings", warnings))

    if file_errors:
        lines.extend(
            [
                '<div class="section">',
                f"<h2>Unreadable Files ({len(file_errors)})</h2>",
                "<table>",
                "<thead><tr><th>Source File</th><th>Error</th></tr></thead>",
                "<tbody>",
            ]
        )
        for err in file_errors:
            lines.append(
                f"<tr><td>{_esc(err.get('source_file', ''))}</td>"
                f'<td class="error-cell">{_esc(err.get("error", ""))}</td></tr>'
            )
        lines.extend(["</tbody>", "</table>", "</div>"])

    recommendations: list[str] = []
    if broken:
        recommendations.append("Fix broken links identified in the report above")
    if warnings:
        recommendations.append("Review warning links for potential issues")
    recommendations.extend(_RECOMMENDATIONS)
    lines.extend(['<div class="section">', "<h2>Recommendations</h2>", "<ul>"])
    lines.extend(f"<li>{_esc(r)}</li>" for r in recommendations)
    lines.extend(["</ul>", "</div>", "</div>", "</body>", "</html>", ""])
    return "\n".join(lines)


@dataclass(frozen=True)
class ReportPaths:
    json_path: Path
    html_path: Path
    latest_json_path: Path
    latest_html_path: Path


@dataclass
class ReportWriter:
    reports_dir: Path
    prefix: str = "link-check"

    def _path(self, rid: str, ext: str) -> Path:
        return self.reports_dir / f"{self.prefix}-{rid}.{ext}"

    def write(self, report: dict[str, Any], *, rid: str) -> ReportPaths:
        """Write the run's JSON + HTML artifacts and refresh the latest alias.

        ``OSError`` propagates: a run whose report cannot be written failed.
        """

        self.reports_dir.mkdir(parents=True, exist_ok=True)
        json_text = json.dumps(report, indent=2, ensure_ascii=False) + "\n"
        html_text = render_html_report(report)

        paths = ReportPaths(
            json_path=self._path(rid, "json"),
            html_path=self._path(rid, "html"),
            latest_json_path=self._path(LATEST_RUN_ID, "json"),
            latest_html_path=self._path(LATEST_RUN_ID, "html"),
        )
        for path, text in (
            (paths.json_path, json_text),
            (paths.html_path, html_text),
            (paths.latest_json_path, json_text),
            (paths.latest_html_path, html_text),
        ):
            path.write_text(text, encoding="utf-8", newline="\n")
        return paths


def format_summary(result: RunResult) -> str:
    return "\n".join(
        [
            "Link Check Results:",
            f"  Files checked: {result.files_checked}",
            f"  Valid links:   {result.valid}",
            f"  Broken links:  {result.broken}",
            f"  Warnings:      {result.warnings}",
            f"  Success rate:  {success_rate(result.valid, result.total)}",
        ]
    )


def format_broken_listing(result: RunResult) -> str:
    broken = result.broken_links()
    if not broken:
        return ""
    lines = ["Broken Links Found:"]
    lines.extend(f"  {link.url} (in {link.source_file})" for link in broken)
    return "\n".join(lines)
