"""
Shared helpers for check implementations.
"""

from __future__ import annotations

import json
import time
from typing import Any, List, Optional, Tuple

from axaudit.protocols import CheckMeta, CheckResult, FetchResponse, Finding, FindingStatus

PASS = FindingStatus.PASS
WARN = FindingStatus.WARN
FAIL = FindingStatus.FAIL


def clamp_score(score: float) -> int:
    return int(max(0, min(100, round(score))))


def build_result(meta: CheckMeta, score: float, findings: List[Finding], start: float) -> CheckResult:
    """Build a result record for `meta`; `start` is a time.perf_counter() value."""
    return CheckResult(
        id=meta.id,
        name=meta.name,
        description=meta.description,
        score=clamp_score(score),
        findings=findings,
        duration=round((time.perf_counter() - start) * 1000),
    )


def http_detail(res: FetchResponse) -> str:
    return f"HTTP {res.status or 'network error'}"


def parse_json_object(body: str) -> Tuple[Optional[dict[str, Any]], bool]:
    """
    Decode a JSON document.

    Returns (data, valid). Documents that are valid JSON but not an object
    yield an empty mapping so field lookups simply miss.
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, TypeError, ValueError):
        return None, False
    if not isinstance(data, dict):
        return {}, True
    return data, True


class BaseCheck:
    """Convenience base giving checks a readable repr and shared finding helpers."""

    meta: CheckMeta

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.meta.id!r}>"

    @staticmethod
    def passed(message: str, detail: Optional[str] = None) -> Finding:
        return Finding(status=PASS, message=message, detail=detail)

    @staticmethod
    def warned(message: str, detail: Optional[str] = None, hint: Optional[str] = None) -> Finding:
        return Finding(status=WARN, message=message, detail=detail, hint=hint)

    @staticmethod
    def failed(message: str, detail: Optional[str] = None, hint: Optional[str] = None) -> Finding:
        return Finding(status=FAIL, message=message, detail=detail, hint=hint)
