"""JSON rendering of audit reports."""

from __future__ import annotations

import json
from typing import Union

from axaudit.protocols import AuditReport, BatchAuditReport


def render_json(report: Union[AuditReport, BatchAuditReport]) -> str:
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
