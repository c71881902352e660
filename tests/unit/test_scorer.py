"""
Tests for weighted scoring and grade bands, including property-based checks
of score bounds and grade totality.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from axaudit.constants import GRADES
from axaudit.protocols import CheckMeta, CheckResult, Grade
from axaudit.scorer import calculate_overall_score, get_grade, round_half_up, validate_grades, weight_for


def meta(check_id: str, weight=None) -> CheckMeta:
    return CheckMeta(id=check_id, name=check_id, description=check_id, weight=weight)


def result(check_id: str, score: int) -> CheckResult:
    return CheckResult(id=check_id, name=check_id, description=check_id, score=score)


@pytest.mark.unit
class TestCalculateOverallScore:
    def test_weighted_mean(self):
        metas = [meta("a", 75), meta("b", 25)]

        assert calculate_overall_score([result("a", 100), result("b", 0)], metas) == 75

    def test_single_check_renormalises(self):
        for weight in (1, 8, 15, 1000):
            assert calculate_overall_score([result("a", 100)], [meta("a", weight)]) == 100

    def test_subset_ignores_unlisted_results(self):
        metas = [meta("a", 10)]

        assert calculate_overall_score([result("a", 40), result("b", 100)], metas) == 40

    def test_missing_result_counts_as_zero(self):
        metas = [meta("a", 10), meta("b", 10)]

        assert calculate_overall_score([result("a", 100)], metas) == 50

    def test_no_checks_scores_zero(self):
        assert calculate_overall_score([], []) == 0

    def test_rounds_half_up(self):
        # (44 + 45) / 2 = 44.5; banker's rounding would give 44
        metas = [meta("a", 1), meta("b", 1)]

        assert calculate_overall_score([result("a", 44), result("b", 45)], metas) == 45

    def test_weight_fallbacks(self):
        assert weight_for(meta("llms-txt")) == 15
        assert weight_for(meta("custom-check")) == 10
        assert weight_for(meta("llms-txt", 3)) == 3

    @given(st.lists(st.tuples(st.integers(-1000, 1000), st.integers(1, 50)), max_size=12))
    def test_score_is_always_bounded(self, entries):
        metas = [meta(f"c{i}", weight) for i, (_, weight) in enumerate(entries)]
        results = [result(f"c{i}", score) for i, (score, _) in enumerate(entries)]

        overall = calculate_overall_score(results, metas)

        assert 0 <= overall <= 100
        assert isinstance(overall, int)

    def test_out_of_range_scores_are_clamped(self):
        assert calculate_overall_score([result("a", 250)], [meta("a", 10)]) == 100
        assert calculate_overall_score([result("a", -40)], [meta("a", 10)]) == 0


@pytest.mark.unit
class TestRoundHalfUp:
    def test_half_goes_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(59.5) == 60

    def test_below_half_goes_down(self):
        assert round_half_up(2.49) == 2


@pytest.mark.unit
class TestGetGrade:
    @pytest.mark.parametrize(
        "score,label",
        [(100, "Excellent"), (90, "Excellent"), (89, "Good"), (70, "Good"), (69, "Fair"), (50, "Fair"), (49, "Poor"), (0, "Poor")],
    )
    def test_boundaries(self, score, label):
        assert get_grade(score).label == label

    def test_custom_bands(self):
        grades = [Grade(min=60, label="Pass", color="green"), Grade(min=0, label="Fail", color="red")]

        assert get_grade(75, grades).label == "Pass"
        assert get_grade(59, grades).label == "Fail"

    def test_unordered_custom_bands_are_rejected(self):
        grades = [Grade(50, "Fair", "orange"), Grade(90, "Excellent", "green"), Grade(0, "Poor", "red")]

        with pytest.raises(ValueError, match="descending"):
            get_grade(95, grades)

    def test_custom_bands_must_reach_zero(self):
        grades = [Grade(min=50, label="Pass", color="green"), Grade(min=10, label="Low", color="red")]

        with pytest.raises(ValueError, match="start at 0"):
            get_grade(5, grades)

    @given(st.integers(0, 100), st.integers(0, 100))
    def test_total_and_monotonic(self, a, b):
        low, high = sorted((a, b))
        order = [grade.label for grade in GRADES]

        assert get_grade(low) in GRADES
        assert order.index(get_grade(high).label) <= order.index(get_grade(low).label)


@pytest.mark.unit
class TestValidateGrades:
    def test_default_bands_are_valid(self):
        validate_grades(GRADES)

    def test_empty(self):
        with pytest.raises(ValueError, match="At least one"):
            validate_grades([])

    def test_not_descending(self):
        with pytest.raises(ValueError, match="descending"):
            validate_grades([Grade(50, "A", "green"), Grade(70, "B", "yellow"), Grade(0, "C", "red")])

    def test_lowest_band_must_start_at_zero(self):
        with pytest.raises(ValueError, match="start at 0"):
            validate_grades([Grade(90, "A", "green"), Grade(10, "B", "red")])

    def test_out_of_range(self):
        with pytest.raises(ValueError, match="outside"):
            validate_grades([Grade(120, "A", "green"), Grade(0, "B", "red")])
