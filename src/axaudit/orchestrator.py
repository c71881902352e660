"""
Runs the active checks against one site and assembles the audit report.
"""

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timezone
from typing import List, Optional, Sequence
from urllib.parse import urlsplit

import structlog
from structlog.contextvars import bound_contextvars

from axaudit.checks import default_checks
from axaudit.config.config import FetcherConfig
from axaudit.constants import DEFAULT_TIMEOUT_MS
from axaudit.exceptions import InvalidURLError
from axaudit.fetcher.http_client import Fetcher
from axaudit.observability.metrics import METRICS
from axaudit.protocols import AuditReport, Check, CheckContext, CheckResult, Finding, FindingStatus
from axaudit.scorer import calculate_overall_score, get_grade

logger = structlog.get_logger(__name__)


def validate_url(url: str) -> None:
    """Raise InvalidURLError unless `url` is an absolute http(s) URL."""
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidURLError(f'Invalid URL "{url}". Provide a full URL like https://example.com') from e
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise InvalidURLError(f'Invalid URL "{url}". Provide a full URL like https://example.com')


def base_url(url: str) -> str:
    """Strip a single trailing slash so checks can append absolute paths."""
    return url[:-1] if url.endswith("/") else url


def select_checks(registry: Sequence[Check], checks: Optional[Sequence[str]]) -> List[Check]:
    if checks is None:
        return list(registry)
    wanted = set(checks)
    return [check for check in registry if check.meta.id in wanted]


def crashed_result(check: Check, error: BaseException) -> CheckResult:
    reason = str(error) or type(error).__name__
    return CheckResult(
        id=check.meta.id,
        name=check.meta.name,
        description=check.meta.description,
        score=0,
        findings=[Finding(status=FindingStatus.FAIL, message=f"Check crashed: {reason}")],
        duration=0,
    )


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def audit(
    url: str,
    *,
    checks: Optional[Sequence[str]] = None,
    timeout: int = DEFAULT_TIMEOUT_MS,
    registry: Optional[Sequence[Check]] = None,
    fetcher_config: Optional[FetcherConfig] = None,
) -> AuditReport:
    """
    Audit a single site.

    The homepage is fetched once and shared with every check through the
    context; every other resource goes through the same caching fetcher. A
    check that raises is reported as a zero-score result so the audit always
    completes.

    Args:
        url: Absolute http(s) URL of the site.
        checks: Optional subset of check ids to run, in registry order.
        timeout: Per-request timeout in milliseconds.
        registry: Checks to choose from. Defaults to the built-in checks.
        fetcher_config: Optional User-Agent/Accept overrides.

    Raises:
        InvalidURLError: If `url` is not an absolute http(s) URL.
    """
    validate_url(url)
    start = time.perf_counter()
    active = select_checks(default_checks() if registry is None else registry, checks)

    with bound_contextvars(audit_url=url):
        logger.debug("Starting audit", checks=[check.meta.id for check in active], timeout_ms=timeout)

        async with Fetcher(fetcher_config, timeout_ms=timeout) as fetcher:
            homepage = await fetcher.fetch(url)
            if not homepage.ok:
                logger.warning("Homepage unavailable", status=homepage.status, error=homepage.error)

            ctx = CheckContext(
                url=base_url(url),
                fetch=fetcher.fetch,
                html=homepage.body,
                headers=homepage.headers,
            )

            outcomes = await asyncio.gather(*(check.run(ctx) for check in active), return_exceptions=True)
            logger.debug("Checks settled", **fetcher.get_stats())

        # A CancelledError outcome comes from inside a check unless this task is being cancelled.
        task = asyncio.current_task()
        cancelling = task is not None and task.cancelling() > 0
        results: List[CheckResult] = []
        for check, outcome in zip(active, outcomes):
            if isinstance(outcome, Exception) or (isinstance(outcome, asyncio.CancelledError) and not cancelling):
                logger.error("Check crashed", check=check.meta.id, error=str(outcome), exc_info=outcome)
                METRICS["check_crashes_total"].labels(check=check.meta.id).inc()
                results.append(crashed_result(check, outcome))
            elif isinstance(outcome, BaseException):
                # Interpreter exits and cancellation of the audit itself are not check failures.
                raise outcome
            else:
                METRICS["check_duration_seconds"].labels(check=check.meta.id).observe(outcome.duration / 1000)
                results.append(outcome)

        overall = calculate_overall_score(results, [check.meta for check in active])
        grade = get_grade(overall)
        METRICS["audit_score"].observe(overall)

        report = AuditReport(
            url=url,
            timestamp=utc_timestamp(),
            overall_score=overall,
            grade=grade,
            results=results,
            duration=round((time.perf_counter() - start) * 1000),
        )
        logger.info("Audit complete", score=overall, grade=grade.label, duration_ms=report.duration)
        return report
