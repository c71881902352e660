"""
Concurrent audits of several sites with an aggregate summary.
"""

from __future__ import annotations

import asyncio
import time
from typing import List, Optional, Sequence

import structlog

from axaudit.config.config import FetcherConfig
from axaudit.constants import DEFAULT_TIMEOUT_MS, PASS_THRESHOLD
from axaudit.orchestrator import audit, validate_url
from axaudit.protocols import AuditReport, BatchAuditReport, BatchSummary, Check
from axaudit.scorer import get_grade, round_half_up

logger = structlog.get_logger(__name__)


def summarize(reports: Sequence[AuditReport], pass_threshold: int = PASS_THRESHOLD) -> BatchSummary:
    """Fold reports into counts, a rounded mean score and its grade. An empty batch averages 0."""
    total = len(reports)
    passed = sum(1 for report in reports if report.overall_score >= pass_threshold)
    average = round_half_up(sum(report.overall_score for report in reports) / total) if total else 0
    return BatchSummary(
        total=total,
        passed=passed,
        failed=total - passed,
        average_score=average,
        grade=get_grade(average),
    )


async def batch_audit(
    urls: Sequence[str],
    *,
    checks: Optional[Sequence[str]] = None,
    timeout: int = DEFAULT_TIMEOUT_MS,
    registry: Optional[Sequence[Check]] = None,
    pass_threshold: int = PASS_THRESHOLD,
    max_concurrency: Optional[int] = None,
    fetcher_config: Optional[FetcherConfig] = None,
) -> BatchAuditReport:
    """
    Audit every URL concurrently, each with its own fetcher and cache.

    Reports keep the input order. All URLs are validated before any audit
    starts, so an InvalidURLError means nothing was fetched.
    """
    for url in urls:
        validate_url(url)

    start = time.perf_counter()
    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None
    logger.info("Starting batch audit", urls=len(urls), max_concurrency=max_concurrency)

    async def run_one(url: str) -> AuditReport:
        if semaphore is None:
            return await audit(
                url, checks=checks, timeout=timeout, registry=registry, fetcher_config=fetcher_config
            )
        async with semaphore:
            return await audit(
                url, checks=checks, timeout=timeout, registry=registry, fetcher_config=fetcher_config
            )

    reports: List[AuditReport] = list(await asyncio.gather(*(run_one(url) for url in urls)))
    summary = summarize(reports, pass_threshold)

    batch = BatchAuditReport(
        reports=reports,
        summary=summary,
        duration=round((time.perf_counter() - start) * 1000),
    )
    logger.info(
        "Batch audit complete",
        total=summary.total,
        passed=summary.passed,
        average_score=summary.average_score,
        duration_ms=batch.duration,
    )
    return batch
