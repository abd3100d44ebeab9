"""
Build Report — Generates build reports in multiple formats.

Supports JSON (for CI/CD parsing) and Markdown (human-readable, also fine
as a PR comment). Missing translations are the main content: they are the
actionable part of a locale build.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import structlog

from ..assets.runner import BuildResult

logger = structlog.get_logger()

_REPORT_EXT_MAP: dict[str, str] = {
    ".json": "json",
    ".md": "markdown",
    ".markdown": "markdown",
}


@dataclass
class BuildReport:
    """Complete data of a build report.

    Built from a BuildResult by `from_result` and passed to the
    ReportGenerator for formatting.
    """

    locale: str
    catalog: str | None
    status: str  # "success" | "warnings"
    duration_seconds: float
    assets_total: int
    assets_rewritten: int
    assets_skipped: int
    nuggets_found: int
    nuggets_translated: int
    rewritten: list[dict[str, Any]] = field(default_factory=list)
    missing: list[dict[str, str]] = field(default_factory=list)

    @classmethod
    def from_result(cls, result: BuildResult) -> "BuildReport":
        warnings = result.warnings
        return cls(
            locale=result.locale,
            catalog=result.catalog,
            status="warnings" if warnings else "success",
            duration_seconds=round(result.duration_seconds, 3),
            assets_total=len(result.assets),
            assets_rewritten=len(result.rewritten),
            assets_skipped=sum(1 for a in result.assets if a.status == "skipped"),
            nuggets_found=result.nugget_count,
            nuggets_translated=result.translated_count,
            rewritten=[
                {"asset": a.name, "nuggets": a.nuggets, "translated": a.translated}
                for a in result.rewritten
            ],
            missing=[
                {"asset": w.asset, "key": w.key, "locale": w.locale}
                for w in warnings
            ],
        )


class ReportGenerator:
    """Generates reports in multiple formats from a BuildReport."""

    def __init__(self, report: BuildReport):
        self.report = report

    def to_json(self) -> str:
        """Report in JSON format (for CI/CD parsing).

        Returns:
            Indented JSON string.
        """
        return json.dumps(asdict(self.report), indent=2, default=str, ensure_ascii=False)

    def to_markdown(self) -> str:
        """Human-readable Markdown report.

        Returns:
            String with the report formatted in Markdown.
        """
        r = self.report
        status_icon = {"success": "OK", "warnings": "WARN"}.get(r.status, "?")

        lines = [
            "# Build Report",
            "",
            "## Summary",
            "| Field | Value |",
            "|-------|-------|",
            f"| Locale | {r.locale} |",
            f"| Catalog | {r.catalog or '(default locale pass)'} |",
            f"| Status | {status_icon} {r.status} |",
            f"| Duration | {r.duration_seconds:.1f}s |",
            f"| Assets | {r.assets_rewritten} rewritten / {r.assets_total} total "
            f"({r.assets_skipped} skipped) |",
            f"| Nuggets | {r.nuggets_translated} translated / {r.nuggets_found} found |",
            "",
        ]

        if r.rewritten:
            lines.append("## Assets Rewritten")
            lines.append("| Asset | Nuggets | Translated |")
            lines.append("|-------|---------|------------|")
            for a in r.rewritten:
                lines.append(f"| `{a['asset']}` | {a['nuggets']} | {a['translated']} |")
            lines.append("")

        if r.missing:
            lines.append("## Missing Translations")
            for m in r.missing:
                key = m["key"].replace("\n", "\\n")
                lines.append(f"- `{m['asset']}`: '{key}' ({m['locale']})")
            lines.append("")

        return "\n".join(lines)

    def render(self, fmt: str) -> str:
        """Render in `fmt` ("json" or "markdown")."""
        if fmt == "json":
            return self.to_json()
        return self.to_markdown()


def infer_report_format(report_file: str) -> str:
    """Infer the report format from the file extension.

    Returns:
        'json' or 'markdown'. Default: 'markdown'.
    """
    ext = Path(report_file).suffix.lower()
    return _REPORT_EXT_MAP.get(ext, "markdown")


def write_report(report: BuildReport, report_file: str) -> Path:
    """Write the report, creating parent directories if needed.

    Raises:
        OSError: If the file cannot be written.
    """
    target = Path(report_file)
    content = ReportGenerator(report).render(infer_report_format(report_file))
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    logger.info("report.written", path=str(target))
    return target
