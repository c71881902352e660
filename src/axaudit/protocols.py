"""
Core contracts and dataclasses for the ax-audit engine.

Every check receives a shared CheckContext and returns a CheckResult. The
orchestrator assembles results into an AuditReport, and the batch runner folds
several reports into a BatchAuditReport. Report types serialise to plain
dictionaries with the camelCase keys used by the JSON output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Protocol

# ============================================================================
# Enums
# ============================================================================


class FindingStatus(Enum):
    """Severity of a single rubric observation."""

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


# ============================================================================
# Fetching
# ============================================================================


@dataclass(frozen=True)
class FetchResponse:
    """
    Normalised outcome of one resource fetch.

    A status of 0 signals a transport-level failure (timeout, DNS, refused
    connection); `error` then carries the reason.
    """

    status: int
    headers: Dict[str, str]
    body: str
    ok: bool
    url: str
    error: Optional[str] = None

    @classmethod
    def failure(cls, url: str, error: str) -> FetchResponse:
        return cls(status=0, headers={}, body="", ok=False, url=url, error=error)


FetchFn = Callable[[str], Awaitable[FetchResponse]]


# ============================================================================
# Checks
# ============================================================================


@dataclass(frozen=True)
class CheckContext:
    """Read-only view shared by every check of one audit."""

    url: str
    fetch: FetchFn
    html: str
    headers: Mapping[str, str]


@dataclass
class Finding:
    """One human-readable rubric observation."""

    status: FindingStatus
    message: str
    detail: Optional[str] = None
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"status": self.status.value, "message": self.message}
        if self.detail is not None:
            data["detail"] = self.detail
        if self.hint is not None:
            data["hint"] = self.hint
        return data


@dataclass(frozen=True)
class CheckMeta:
    """Static declaration of a check. `weight` is only used by the scorer."""

    id: str
    name: str
    description: str
    weight: Optional[int] = None

    def __post_init__(self) -> None:
        if self.weight is not None and self.weight <= 0:
            raise ValueError(f"Check weight must be positive, got {self.weight} for {self.id!r}")


@dataclass
class CheckResult:
    """Verdict of one check. `duration` is in milliseconds."""

    id: str
    name: str
    description: str
    score: int
    findings: List[Finding] = field(default_factory=list)
    duration: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "score": self.score,
            "findings": [finding.to_dict() for finding in self.findings],
            "duration": self.duration,
        }


class Check(Protocol):
    """Contract satisfied by every pluggable check."""

    meta: CheckMeta

    async def run(self, ctx: CheckContext) -> CheckResult:
        """
        Evaluate one compliance dimension against the shared context.

        Implementations must not raise for content problems: parse errors are
        reported as `fail` findings with a reduced score, and the returned
        score is already clamped to [0, 100].
        """
        ...


# ============================================================================
# Reports
# ============================================================================


@dataclass(frozen=True)
class Grade:
    """Qualitative band for scores at or above `min`."""

    min: int
    label: str
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return {"min": self.min, "label": self.label, "color": self.color}


@dataclass(frozen=True)
class SecurityHeader:
    name: str
    label: str
    critical: bool


@dataclass
class AuditReport:
    """Complete output of one single-URL audit."""

    url: str
    timestamp: str
    overall_score: int
    grade: Grade
    results: List[CheckResult]
    duration: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "timestamp": self.timestamp,
            "overallScore": self.overall_score,
            "grade": self.grade.to_dict(),
            "results": [result.to_dict() for result in self.results],
            "duration": self.duration,
        }


@dataclass
class BatchSummary:
    total: int
    passed: int
    failed: int
    average_score: int
    grade: Grade

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "averageScore": self.average_score,
            "grade": self.grade.to_dict(),
        }


@dataclass
class BatchAuditReport:
    """Reports for several URLs (input order) plus their summary."""

    reports: List[AuditReport]
    summary: BatchSummary
    duration: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reports": [report.to_dict() for report in self.reports],
            "summary": self.summary.to_dict(),
            "duration": self.duration,
        }
