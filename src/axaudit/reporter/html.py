"""
Self-contained HTML rendering of audit reports.

The page is rendered from a packaged Jinja2 template with autoescaping on,
so URLs and finding text coming from audited sites cannot inject markup.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Any, Dict

from jinja2 import Environment, PackageLoader

from axaudit.constants import PASS_THRESHOLD
from axaudit.protocols import AuditReport, BatchAuditReport, Grade
from axaudit.scorer import get_grade

GAUGE_RADIUS = 54

HSL_COLORS = {
    "green": "hsl(140, 70%, 45%)",
    "yellow": "hsl(45, 90%, 48%)",
    "orange": "hsl(25, 90%, 50%)",
    "red": "hsl(0, 80%, 50%)",
}

STATUS_ICONS = {
    "pass": "&#10003;",
    "warn": "&#9888;",
    "fail": "&#10007;",
}


def hsl_for(grade: Grade) -> str:
    return HSL_COLORS.get(grade.color, HSL_COLORS["red"])


def color_for(score: int) -> str:
    return hsl_for(get_grade(score))


def gauge_for(score: int) -> Dict[str, Any]:
    grade = get_grade(score)
    circumference = 2 * math.pi * GAUGE_RADIUS
    return {
        "color": hsl_for(grade),
        "label": grade.label,
        "circumference": f"{circumference:.2f}",
        "offset": f"{circumference - score / 100 * circumference:.2f}",
    }


@lru_cache(maxsize=1)
def _environment() -> Environment:
    env = Environment(loader=PackageLoader("axaudit.reporter", "templates"), autoescape=True)
    env.globals.update(gauge_for=gauge_for, color_for=color_for, icons=STATUS_ICONS)
    return env


def render_html(report: AuditReport) -> str:
    template = _environment().get_template("report.html.j2")
    return template.render(title=f"AX Audit: {report.url}", reports=[report], batch=None)


def render_batch_html(batch: BatchAuditReport, pass_threshold: int = PASS_THRESHOLD) -> str:
    template = _environment().get_template("report.html.j2")
    return template.render(
        title=f"AX Audit: Batch Report ({batch.summary.total} URLs)",
        reports=batch.reports,
        batch=batch,
        pass_threshold=pass_threshold,
    )
