"""
ax-audit - Lighthouse for AI Agents.

Audits how ready a website is for AI agents and returns a scored report.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .batch import batch_audit
from .checks import default_checks
from .config import Config
from .exceptions import InvalidURLError, UnknownCheckError
from .orchestrator import audit
from .protocols import (
    AuditReport,
    BatchAuditReport,
    BatchSummary,
    Check,
    CheckContext,
    CheckMeta,
    CheckResult,
    FetchResponse,
    Finding,
    FindingStatus,
    Grade,
)
from .scorer import calculate_overall_score, get_grade

__all__ = [
    "__version__",
    "AuditReport",
    "BatchAuditReport",
    "BatchSummary",
    "Check",
    "CheckContext",
    "CheckMeta",
    "CheckResult",
    "Config",
    "FetchResponse",
    "Finding",
    "FindingStatus",
    "Grade",
    "InvalidURLError",
    "UnknownCheckError",
    "audit",
    "batch_audit",
    "calculate_overall_score",
    "default_checks",
    "get_grade",
]
