"""
Built-in check registry.

`default_checks()` returns fresh instances in report order; callers may pass
their own list to the orchestrator instead.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from axaudit.checks.agent_json import AgentJsonCheck
from axaudit.checks.http_headers import HttpHeadersCheck
from axaudit.checks.llms_txt import LlmsTxtCheck
from axaudit.checks.mcp import McpCheck
from axaudit.checks.meta_tags import MetaTagsCheck
from axaudit.checks.openapi import OpenApiCheck
from axaudit.checks.robots_txt import RobotsTxtCheck
from axaudit.checks.security_txt import SecurityTxtCheck
from axaudit.checks.structured_data import StructuredDataCheck
from axaudit.exceptions import UnknownCheckError
from axaudit.protocols import Check

CHECK_CLASSES = (
    LlmsTxtCheck,
    RobotsTxtCheck,
    AgentJsonCheck,
    McpCheck,
    SecurityTxtCheck,
    StructuredDataCheck,
    MetaTagsCheck,
    OpenApiCheck,
    HttpHeadersCheck,
)


def default_checks() -> List[Check]:
    return [cls() for cls in CHECK_CLASSES]


def check_ids(registry: Sequence[Check]) -> List[str]:
    return [check.meta.id for check in registry]


def unknown_check_ids(ids: Iterable[str], registry: Sequence[Check]) -> List[str]:
    """Return the requested ids that no check in `registry` declares, in request order."""
    known = set(check_ids(registry))
    return [check_id for check_id in ids if check_id not in known]


def ensure_known_checks(ids: Iterable[str], registry: Sequence[Check]) -> None:
    unknown = unknown_check_ids(ids, registry)
    if unknown:
        raise UnknownCheckError(unknown, check_ids(registry))


__all__ = [
    "AgentJsonCheck",
    "CHECK_CLASSES",
    "HttpHeadersCheck",
    "LlmsTxtCheck",
    "McpCheck",
    "MetaTagsCheck",
    "OpenApiCheck",
    "RobotsTxtCheck",
    "SecurityTxtCheck",
    "StructuredDataCheck",
    "check_ids",
    "default_checks",
    "ensure_known_checks",
    "unknown_check_ids",
]
