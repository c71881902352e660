"""
Weighted aggregation of check scores into an overall score and grade.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from axaudit.constants import CHECK_WEIGHTS, DEFAULT_CHECK_WEIGHT, GRADES
from axaudit.protocols import CheckMeta, CheckResult, Grade


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (`round` uses banker's rounding)."""
    return int(math.floor(value + 0.5))


def clamp(value: int, lower: int = 0, upper: int = 100) -> int:
    return max(lower, min(upper, value))


def weight_for(meta: CheckMeta) -> int:
    if meta.weight is not None:
        return meta.weight
    return CHECK_WEIGHTS.get(meta.id, DEFAULT_CHECK_WEIGHT)


def calculate_overall_score(results: Iterable[CheckResult], metas: Sequence[CheckMeta]) -> int:
    """
    Weighted mean of check scores, normalised over the supplied metas only.

    Results whose id has no matching meta are ignored. Returns 0 when the
    total weight is zero (no active checks).
    """
    weights = {meta.id: weight_for(meta) for meta in metas}
    total_weight = sum(weights.values())
    if total_weight <= 0:
        return 0

    weighted = 0.0
    for result in results:
        weight = weights.get(result.id)
        if weight is None:
            continue
        weighted += (result.score / 100) * weight

    return clamp(round_half_up(weighted / total_weight * 100))


def validate_grades(grades: Sequence[Grade]) -> None:
    """
    Ensure grade bands are usable: non-empty, strictly descending minimums
    inside [0, 100], with the last band starting at 0.
    """
    if not grades:
        raise ValueError("At least one grade band is required")

    previous = None
    for grade in grades:
        if not 0 <= grade.min <= 100:
            raise ValueError(f"Grade {grade.label!r} minimum {grade.min} is outside [0, 100]")
        if previous is not None and grade.min >= previous.min:
            raise ValueError(
                f"Grade bands must be in strictly descending order: {previous.label!r} ({previous.min}) "
                f"precedes {grade.label!r} ({grade.min})"
            )
        previous = grade

    if grades[-1].min != 0:
        raise ValueError(f"Lowest grade band must start at 0, got {grades[-1].min}")


def get_grade(score: float, grades: Sequence[Grade] = GRADES) -> Grade:
    """
    First band whose minimum the score reaches; the lowest band otherwise.

    Custom bands are validated first, so misordered bands raise ValueError
    instead of returning a wrong grade.
    """
    if grades is not GRADES:
        validate_grades(grades)
    for grade in grades:
        if score >= grade.min:
            return grade
    return grades[-1]


validate_grades(GRADES)
