"""
Features de easyi18n — módulos post-core.

Reports de build (JSON / Markdown).
"""

from .report import BuildReport, ReportGenerator, infer_report_format, write_report

__all__ = [
    "BuildReport",
    "ReportGenerator",
    "infer_report_format",
    "write_report",
]
