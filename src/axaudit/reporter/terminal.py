"""Rich console rendering of audit reports."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from axaudit.constants import PASS_THRESHOLD
from axaudit.protocols import AuditReport, BatchAuditReport, FindingStatus, Grade
from axaudit.scorer import get_grade

BAR_WIDTH = 40

GRADE_STYLES = {
    "green": "green",
    "yellow": "yellow",
    "orange": "dark_orange",
    "red": "red",
}

STATUS_TAGS = {
    FindingStatus.PASS: Text("  PASS ", style="green"),
    FindingStatus.WARN: Text("  WARN ", style="yellow"),
    FindingStatus.FAIL: Text("  FAIL ", style="red"),
}


def grade_style(grade: Grade) -> str:
    return GRADE_STYLES.get(grade.color, "red")


def score_bar(score: int, grade: Grade, suffix: str = "") -> Text:
    filled = round(score / 100 * BAR_WIDTH)
    style = grade_style(grade)
    bar = Text("  ")
    bar.append("█" * filled, style=style)
    bar.append("░" * (BAR_WIDTH - filled), style="grey50")
    bar.append(f"  {score}/100", style=f"bold {style}")
    if suffix:
        bar.append(suffix)
    bar.append(f"  {grade.label}", style=style)
    return bar


def render_terminal(report: AuditReport, console: Optional[Console] = None) -> None:
    console = console or Console()

    console.print()
    console.print(Text("  AX Audit Report", style="bold"))
    console.print(Text(f"  {report.url}", style="dim"))
    console.print(Text(f"  {report.timestamp}  ({report.duration}ms)", style="dim"))
    console.print()
    console.print(score_bar(report.overall_score, report.grade))
    console.print()

    for result in report.results:
        heading = Text(f"  {result.name}", style="bold")
        heading.append(f" ({result.score}/100)", style="dim")
        console.print(heading)
        for finding in result.findings:
            line = STATUS_TAGS[finding.status].copy()
            line.append(f" {finding.message}")
            console.print(line)
            if finding.detail:
                console.print(Text(f"         {finding.detail}", style="dim"))
            if finding.hint:
                console.print(Text(f"         Hint: {finding.hint}", style="dim italic"))
        console.print()

    console.print(Text("  Powered by ax-audit: Lighthouse for AI Agents", style="dim"))
    console.print()


def render_batch_terminal(
    batch: BatchAuditReport,
    console: Optional[Console] = None,
    pass_threshold: int = PASS_THRESHOLD,
) -> None:
    console = console or Console()
    for report in batch.reports:
        render_terminal(report, console)

    summary = batch.summary
    table = Table(title="Batch Summary", title_style="bold", show_edge=False)
    table.add_column("URL", overflow="ellipsis", max_width=60)
    table.add_column("Score", justify="right")
    table.add_column("Grade", justify="right")
    table.add_column("Status", justify="center")
    for report in batch.reports:
        grade = get_grade(report.overall_score)
        style = grade_style(grade)
        passed = report.overall_score >= pass_threshold
        table.add_row(
            report.url,
            Text(f"{report.overall_score}/100", style=f"bold {style}"),
            Text(grade.label, style=style),
            Text("PASS", style="green") if passed else Text("FAIL", style="red"),
        )
    console.print(table)
    console.print()

    counts = Text(f"  {summary.total} URLs audited: ")
    counts.append(f"{summary.passed} passed", style="green")
    if summary.failed:
        counts.append(", ")
        counts.append(f"{summary.failed} failed", style="red")
    console.print(counts)
    console.print(score_bar(summary.average_score, summary.grade, suffix=" avg"))
    console.print(Text(f"  Total duration: {batch.duration}ms", style="dim"))
    console.print()
