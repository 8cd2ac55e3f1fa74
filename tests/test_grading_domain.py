import uuid
from datetime import datetime, timedelta, timezone

import pytest

from coursework.domain.grading.aggregator import CategoryGradeAggregator
from coursework.domain.grading.calculator import WeightedGradeCalculator
from coursework.domain.grading.entities import (
    AssignmentRecord,
    Category,
    CategoryGrade,
    CategoryGrades,
    GradeWeights,
    SubmissionRecord,
)
from coursework.domain.grading.letters import LetterGradeMapper
from coursework.domain.grading.weights import default_weights_input, validate_grade_weights
from coursework.domain.shared.errors import ValidationError
from coursework.domain.shared.numbers import percent, round_half_up

COURSE = uuid.uuid4()
MODULE = uuid.uuid4()
STUDENT = uuid.uuid4()
T0 = datetime(2026, 3, 1, tzinfo=timezone.utc)


def _assignment(category, published=True):
    return AssignmentRecord(
        id=uuid.uuid4(),
        module_id=MODULE,
        title=category.value,
        category=category,
        points=100,
        is_published=published,
    )


def _submission(assignment, score, max_score=100, at=T0):
    return SubmissionRecord(
        assignment_id=assignment.id,
        student_id=STUDENT,
        score=score,
        max_score=max_score,
        submitted_at=at,
    )


def _weights(a=40, b=30, c=30):
    return GradeWeights(course_id=COURSE, assignment_weight=a, activity_weight=b, exam_weight=c)


def _grades(assignment=None, activity=None, exam=None):
    def g(avg):
        return CategoryGrade(average=avg, submitted=1, total=1) if avg is not None else CategoryGrade()
    return CategoryGrades(assignment=g(assignment), activity=g(activity), exam=g(exam))


# ---------------------------------------------------------------------
# rounding
# ---------------------------------------------------------------------

def test_round_half_up_does_not_use_bankers_rounding():
    assert round_half_up(85.125, 2) == 85.13
    assert round_half_up(0.5, 0) == 1.0


def test_percent_of_zero_whole_is_zero():
    assert percent(5, 0) == 0.0


# ---------------------------------------------------------------------
# aggregator
# ---------------------------------------------------------------------

def test_aggregate_averages_per_category():
    a1 = _assignment(Category.ASSIGNMENT)
    a2 = _assignment(Category.ASSIGNMENT)
    act = _assignment(Category.ACTIVITY)

    grades = CategoryGradeAggregator().aggregate(
        [a1, a2, act],
        [_submission(a1, 8, 10), _submission(a2, 9, 10)],
    )

    assert grades.assignment == CategoryGrade(average=85.0, submitted=2, total=2)
    # 제출 없는 카테고리: 평균 0, total 은 유지
    assert grades.activity == CategoryGrade(average=0.0, submitted=0, total=1)
    assert grades.exam == CategoryGrade(average=0.0, submitted=0, total=0)
    assert grades.total_assignments == 3
    assert grades.total_submitted == 2


def test_aggregate_skips_unpublished_assignments():
    published = _assignment(Category.EXAM)
    hidden = _assignment(Category.EXAM, published=False)

    grades = CategoryGradeAggregator().aggregate(
        [published, hidden],
        [_submission(published, 50), _submission(hidden, 100)],
    )

    assert grades.exam.total == 1
    assert grades.exam.average == 50.0


def test_aggregate_counts_only_latest_submission_per_assignment():
    a = _assignment(Category.ASSIGNMENT)
    grades = CategoryGradeAggregator().aggregate(
        [a],
        [_submission(a, 40, at=T0), _submission(a, 90, at=T0 + timedelta(hours=1))],
    )
    assert grades.assignment.submitted == 1
    assert grades.assignment.average == 90.0
    assert grades.last_submission_at == T0 + timedelta(hours=1)


# ---------------------------------------------------------------------
# weighted calculator
# ---------------------------------------------------------------------

def test_overall_renormalizes_over_categories_with_content():
    # 시험이 없는 코스: (90×0.4 + 80×0.3) / 70 × 100
    overall = WeightedGradeCalculator().overall(_grades(90, 80, None), _weights())
    assert overall == 85.71


def test_overall_uses_raw_sum_when_all_weight_is_used():
    overall = WeightedGradeCalculator().overall(_grades(90, 80, 70), _weights())
    assert overall == 81.0


def test_overall_is_zero_without_any_content():
    assert WeightedGradeCalculator().overall(CategoryGrades.empty(), _weights()) == 0.0


def test_zero_weight_category_does_not_affect_overall():
    overall = WeightedGradeCalculator().overall(_grades(90, 80, 10), _weights(50, 50, 0))
    assert overall == 85.0


def test_single_category_overall_equals_its_average():
    overall = WeightedGradeCalculator().overall(_grades(None, None, 66.67), _weights())
    assert overall == 66.67


def test_overall_is_clamped():
    overall = WeightedGradeCalculator().overall(_grades(120, None, None), _weights())
    assert overall == 100.0


def test_summary_letter_uses_unrounded_overall():
    summary = WeightedGradeCalculator().summarize(_grades(92.996, None, None), _weights())
    assert summary.overall_grade == 93.0
    assert summary.letter_grade == "A-"


def test_summary_letter_just_below_threshold_at_full_weight():
    # 92.99×0.5 + 93.0×0.5 = 92.995, 표기는 반올림되지만 등급은 A-
    summary = WeightedGradeCalculator().summarize(_grades(92.99, None, 93.0), _weights(50, 0, 50))
    assert summary.overall_grade in (92.99, 93.0)
    assert summary.letter_grade == "A-"


# ---------------------------------------------------------------------
# letters
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "percentage,letter",
    [
        (100, "A+"),
        (97, "A+"),
        (96.99, "A"),
        (93.0, "A"),
        (92.999, "A-"),
        (90, "A-"),
        (87, "B+"),
        (85.71, "B"),
        (80, "B-"),
        (77, "C+"),
        (73, "C"),
        (70, "C-"),
        (67, "D+"),
        (63, "D"),
        (60, "D-"),
        (59.99, "F"),
        (0, "F"),
    ],
)
def test_letter_grade_boundaries(percentage, letter):
    assert LetterGradeMapper().map(percentage) == letter


# ---------------------------------------------------------------------
# weights validation
# ---------------------------------------------------------------------

def test_valid_weights_pass():
    w = validate_grade_weights({"assignment_weight": 50, "activity_weight": 25, "exam_weight": 25})
    assert (w.assignment_weight, w.activity_weight, w.exam_weight) == (50, 25, 25)


def test_weights_must_sum_to_100():
    with pytest.raises(ValidationError) as exc:
        validate_grade_weights({"assignment_weight": 40, "activity_weight": 30, "exam_weight": 20})
    assert exc.value.message == "Grade weights must sum to 100. Current sum: 90"


@pytest.mark.parametrize(
    "raw",
    [
        {"assignment_weight": -10, "activity_weight": 60, "exam_weight": 50},
        {"assignment_weight": 101, "activity_weight": 0, "exam_weight": 0},
        {"assignment_weight": True, "activity_weight": 49, "exam_weight": 50},
        {"assignment_weight": 33.5, "activity_weight": 33.5, "exam_weight": 33},
        {"assignment_weight": "abc", "activity_weight": 50, "exam_weight": 50},
        {"assignment_weight": 50, "activity_weight": 50},
    ],
)
def test_invalid_weights_are_rejected(raw):
    with pytest.raises(ValidationError) as exc:
        validate_grade_weights(raw)
    assert exc.value.errors


def test_missing_weight_field_is_named():
    with pytest.raises(ValidationError) as exc:
        validate_grade_weights({"assignment_weight": 50, "activity_weight": 50})
    assert "exam_weight is required" in exc.value.errors


def test_default_weights():
    w = default_weights_input()
    assert (w.assignment_weight, w.activity_weight, w.exam_weight) == (40, 30, 30)


def test_default_weights_from_settings_are_validated():
    with pytest.raises(ValidationError):
        default_weights_input({"assignment": 50, "activity": 50, "exam": 50})
