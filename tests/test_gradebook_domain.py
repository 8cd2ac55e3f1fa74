import uuid
from datetime import datetime, timedelta, timezone

import pytest

from coursework.domain.gradebook.entities import (
    GradebookQuery,
    GradebookRow,
    GradebookSortBy,
    SortOrder,
    SubmissionStatusFilter,
)
from coursework.domain.gradebook.query import GradebookQueryEngine, assignment_grades, validate_query
from coursework.domain.grading.entities import AssignmentRecord, Category, SubmissionRecord
from coursework.domain.shared.errors import ValidationError

T0 = datetime(2026, 3, 1, tzinfo=timezone.utc)


def _row(first, last, overall, *, section=None, submitted=3, total=3, email=None, number=None):
    return GradebookRow(
        student_id=uuid.uuid4(),
        first_name=first,
        last_name=last,
        email=email or f"{first.lower()}@example.com",
        student_number=number,
        section=section,
        overall_grade=overall,
        letter_grade="B",
        assignment_average=overall,
        activity_average=overall,
        exam_average=overall,
        total_submissions=submitted,
        total_assignments=total,
    )


@pytest.fixture
def rows():
    return [
        _row("Ana", "Park", 91.5, section="A", number="003"),
        _row("Bo", "Lee", 72.0, section="B", submitted=1, number="001"),
        _row("Chan", "Kim", 85.0, section="A", submitted=2, number="002"),
        _row("Dana", "Choi", 60.0, section="B", email="dana@school.edu", number="004"),
    ]


def test_pages_cover_filtered_set_exactly():
    engine = GradebookQueryEngine()
    data = [_row(f"S{i:02d}", "X", float(i)) for i in range(25)]

    pages = [engine.run(data, GradebookQuery(offset=o, limit=10), total_assignments=3) for o in (0, 10, 20)]

    assert [len(p.rows) for p in pages] == [10, 10, 5]
    assert sum(len(p.rows) for p in pages) == 25
    assert {r.student_id for p in pages for r in p.rows} == {r.student_id for r in data}
    assert all(p.total == 25 and p.total_pages == 3 for p in pages)
    assert [p.current_page for p in pages] == [1, 2, 3]


def test_offset_past_end_returns_empty_page(rows):
    result = GradebookQueryEngine().run(rows, GradebookQuery(offset=40, limit=10), total_assignments=3)
    assert result.rows == []
    assert result.total == 4


def test_default_sort_is_name_ascending(rows):
    result = GradebookQueryEngine().run(rows, GradebookQuery(), total_assignments=3)
    assert [r.first_name for r in result.rows] == ["Ana", "Bo", "Chan", "Dana"]


def test_sort_by_overall_grade_desc(rows):
    query = GradebookQuery(sort_by=GradebookSortBy.OVERALL_GRADE, sort_order=SortOrder.DESC)
    result = GradebookQueryEngine().run(rows, query, total_assignments=3)
    assert [r.overall_grade for r in result.rows] == [91.5, 85.0, 72.0, 60.0]


def test_sort_by_student_number(rows):
    query = GradebookQuery(sort_by=GradebookSortBy.STUDENT_NUMBER)
    result = GradebookQueryEngine().run(rows, query, total_assignments=3)
    assert [r.student_number for r in result.rows] == ["001", "002", "003", "004"]


@pytest.mark.parametrize("order", [SortOrder.ASC, SortOrder.DESC])
def test_ties_are_ordered_by_student_id(order):
    tied = [_row(f"S{i}", "X", 80.0) for i in range(5)]
    query = GradebookQuery(sort_by=GradebookSortBy.OVERALL_GRADE, sort_order=order)

    result = GradebookQueryEngine().run(tied, query, total_assignments=3)

    assert [r.student_id for r in result.rows] == sorted((r.student_id for r in tied), key=str)


def test_filters_combine(rows):
    engine = GradebookQueryEngine()

    by_section = engine.run(rows, GradebookQuery(section="A"), total_assignments=3)
    assert {r.first_name for r in by_section.rows} == {"Ana", "Chan"}

    by_score = engine.run(rows, GradebookQuery(min_score=70, max_score=90), total_assignments=3)
    assert {r.first_name for r in by_score.rows} == {"Bo", "Chan"}

    missing = engine.run(
        rows,
        GradebookQuery(submission_status=SubmissionStatusFilter.HAS_MISSING),
        total_assignments=3,
    )
    assert {r.first_name for r in missing.rows} == {"Bo", "Chan"}

    complete = engine.run(
        rows,
        GradebookQuery(submission_status=SubmissionStatusFilter.ALL_SUBMITTED),
        total_assignments=3,
    )
    assert {r.first_name for r in complete.rows} == {"Ana", "Dana"}


def test_search_is_case_insensitive_over_name_and_email(rows):
    engine = GradebookQueryEngine()
    assert [r.first_name for r in engine.run(rows, GradebookQuery(search="PARK"), total_assignments=3).rows] == ["Ana"]
    assert [r.first_name for r in engine.run(rows, GradebookQuery(search="school.edu"), total_assignments=3).rows] == ["Dana"]


def test_class_average_uses_filtered_rows_not_page(rows):
    result = GradebookQueryEngine().run(
        rows, GradebookQuery(section="B", limit=1), total_assignments=3
    )
    assert len(result.rows) == 1
    assert result.total == 2
    assert result.class_average == 66.0


def test_empty_result():
    result = GradebookQueryEngine().run([], GradebookQuery(), total_assignments=0)
    assert result.total == 0
    assert result.total_pages == 0
    assert result.class_average == 0.0


@pytest.mark.parametrize(
    "query",
    [
        GradebookQuery(offset=-1),
        GradebookQuery(limit=0),
        GradebookQuery(limit=101),
        GradebookQuery(min_score=-5),
        GradebookQuery(max_score=120),
        GradebookQuery(min_score=80, max_score=70),
    ],
)
def test_invalid_queries_are_rejected(query):
    with pytest.raises(ValidationError):
        validate_query(query)


def test_limit_of_100_is_allowed():
    assert validate_query(GradebookQuery(limit=100)).limit == 100


def test_assignment_grades_mark_missing_and_late():
    module = uuid.uuid4()
    student = uuid.uuid4()
    on_time = AssignmentRecord(
        id=uuid.uuid4(), module_id=module, title="HW1", category=Category.ASSIGNMENT,
        points=20, due_date=T0, module_title="Week 1",
    )
    late = AssignmentRecord(
        id=uuid.uuid4(), module_id=module, title="Quiz", category=Category.ACTIVITY,
        points=10, due_date=T0,
    )
    missing = AssignmentRecord(
        id=uuid.uuid4(), module_id=module, title="Midterm", category=Category.EXAM, points=100,
    )
    submissions = [
        SubmissionRecord(on_time.id, student, 15, 20, submitted_at=T0 - timedelta(hours=1)),
        SubmissionRecord(late.id, student, 10, 10, submitted_at=T0 + timedelta(hours=1)),
    ]

    grades = assignment_grades([on_time, late, missing], submissions)

    assert [(g.title, g.status, g.is_late) for g in grades] == [
        ("HW1", "submitted", False),
        ("Quiz", "submitted", True),
        ("Midterm", "not_submitted", False),
    ]
    assert grades[0].percentage == 75.0
    assert grades[0].module_title == "Week 1"
    assert grades[1].module_title == "Unknown"
    assert grades[2].score is None and grades[2].percentage is None
