"""
Reporting layer
---------------

Bundles the analyses into `ReportResults` and renders them as a Markdown
narrative.
"""

from .results import ReportResults, compute_report_results  # noqa: F401
from .markdown_report import (  # noqa: F401
    REPORT_MD_NAME,
    markdown_table,
    render_markdown_report,
)

__all__ = [
    "ReportResults",
    "compute_report_results",
    "REPORT_MD_NAME",
    "markdown_table",
    "render_markdown_report",
]
