"""Command-line interface for ax-audit."""

from __future__ import annotations

import asyncio
import io
import sys
from pathlib import Path
from typing import List, Optional, Union

import click
import structlog
import yaml
from pydantic import ValidationError
from rich.console import Console

from axaudit import __version__
from axaudit.batch import batch_audit
from axaudit.checks import default_checks, ensure_known_checks
from axaudit.config.config import Config, load_config
from axaudit.exceptions import InvalidURLError, UnknownCheckError
from axaudit.observability.logging import configure_logging
from axaudit.orchestrator import audit, validate_url
from axaudit.protocols import AuditReport, BatchAuditReport
from axaudit.reporter import FORMATS, render, report
from axaudit.utils.atomic import atomic_write_text

console = Console()
err_console = Console(stderr=True)
logger = structlog.get_logger(__name__)

AnyReport = Union[AuditReport, BatchAuditReport]


def parse_checks(value: Optional[str]) -> Optional[List[str]]:
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def render_to_text(result: AnyReport, fmt: str, pass_threshold: int) -> str:
    """Render for a file. Terminal output is captured without colour."""
    if fmt != "terminal":
        return render(result, fmt, pass_threshold)
    buffer = io.StringIO()
    report(result, "terminal", Console(file=buffer, width=100, color_system=None), pass_threshold)
    return buffer.getvalue()


def score_of(result: AnyReport) -> int:
    if isinstance(result, BatchAuditReport):
        return result.summary.average_score
    return result.overall_score


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-v", "--version", prog_name="ax-audit")
@click.argument("urls", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Output results as JSON (same as --output json)")
@click.option("--output", "output_format", type=click.Choice(FORMATS), default=None, help="Output format")
@click.option("--checks", "checks_option", help="Comma-separated list of check ids to run")
@click.option("--timeout", type=click.IntRange(min=1), default=None, help="Per-request timeout in milliseconds")
@click.option("--output-file", type=click.Path(dir_okay=False), default=None, help="Write the report to a file")
@click.option(
    "--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="Configuration file path"
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level",
)
def cli(
    urls: tuple[str, ...],
    as_json: bool,
    output_format: Optional[str],
    checks_option: Optional[str],
    timeout: Optional[int],
    output_file: Optional[str],
    config_path: Optional[str],
    log_level: Optional[str],
) -> None:
    """Audit websites for AI Agent Experience (AX) readiness. Lighthouse for AI Agents."""
    try:
        config = load_config(Path(config_path) if config_path else None)
    except (ValidationError, yaml.YAMLError) as e:
        err_console.print(
            f"Error: Invalid configuration: {e}", style="red", markup=False, highlight=False, soft_wrap=True
        )
        sys.exit(2)

    monitoring = config.monitoring
    if log_level:
        monitoring = monitoring.model_copy(update={"log_level": log_level.upper()})
    configure_logging(monitoring)

    for url in urls:
        try:
            validate_url(url)
        except InvalidURLError as e:
            err_console.print(f"Error: {e}", markup=False, highlight=False, soft_wrap=True)
            sys.exit(1)

    checks = parse_checks(checks_option) if checks_option is not None else config.audit.checks
    if checks is not None:
        try:
            ensure_known_checks(checks, default_checks())
        except UnknownCheckError as e:
            err_console.print(f"Error: {e}", markup=False, highlight=False, soft_wrap=True)
            sys.exit(1)

    fmt = "json" if as_json else (output_format or "terminal")
    timeout_ms = timeout or config.fetcher.timeout_ms
    threshold = config.audit.pass_threshold

    try:
        result = asyncio.run(run_audit(list(urls), checks, timeout_ms, config))

        if output_file:
            path = atomic_write_text(output_file, render_to_text(result, fmt, threshold))
            err_console.print(f"Report written to {path}", markup=False, highlight=False, soft_wrap=True)
        else:
            report(result, fmt, console, threshold)
    except Exception as e:
        logger.error("Audit failed", error=str(e), exc_info=True)
        err_console.print(f"Fatal: {e}", markup=False, highlight=False, soft_wrap=True)
        sys.exit(2)

    sys.exit(0 if score_of(result) >= threshold else 1)


async def run_audit(urls: List[str], checks: Optional[List[str]], timeout_ms: int, config: Config) -> AnyReport:
    if len(urls) == 1:
        return await audit(urls[0], checks=checks, timeout=timeout_ms, fetcher_config=config.fetcher)
    return await batch_audit(
        urls,
        checks=checks,
        timeout=timeout_ms,
        pass_threshold=config.audit.pass_threshold,
        max_concurrency=config.audit.max_concurrency,
        fetcher_config=config.fetcher,
    )


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
