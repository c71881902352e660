"""Output formats for audit and batch reports."""

from __future__ import annotations

from typing import Optional, Union

from rich.console import Console

from axaudit.constants import PASS_THRESHOLD
from axaudit.protocols import AuditReport, BatchAuditReport

from .html import render_batch_html, render_html
from .json import render_json
from .terminal import render_batch_terminal, render_terminal

FORMATS = ("terminal", "json", "html")


def render(
    audit_report: Union[AuditReport, BatchAuditReport],
    fmt: str,
    pass_threshold: int = PASS_THRESHOLD,
) -> str:
    """Render a report to text in a non-interactive format (`json` or `html`)."""
    if fmt == "json":
        return render_json(audit_report)
    if fmt == "html":
        if isinstance(audit_report, BatchAuditReport):
            return render_batch_html(audit_report, pass_threshold)
        return render_html(audit_report)
    raise ValueError(f"Format {fmt!r} cannot be rendered to text. Expected one of: json, html")


def report(
    audit_report: Union[AuditReport, BatchAuditReport],
    fmt: str = "terminal",
    console: Optional[Console] = None,
    pass_threshold: int = PASS_THRESHOLD,
) -> None:
    """Write a report to the console in the requested format."""
    console = console or Console()
    if fmt == "terminal":
        if isinstance(audit_report, BatchAuditReport):
            render_batch_terminal(audit_report, console, pass_threshold)
        else:
            render_terminal(audit_report, console)
        return
    # JSON and HTML go out verbatim.
    console.print(
        render(audit_report, fmt, pass_threshold), markup=False, emoji=False, highlight=False, soft_wrap=True
    )


__all__ = [
    "FORMATS",
    "render",
    "render_batch_html",
    "render_batch_terminal",
    "render_html",
    "render_json",
    "render_terminal",
    "report",
]
