import uuid

import pytest

from coursework.domain.gradebook.entities import GradebookQuery, GradebookSortBy, SortOrder
from coursework.domain.shared.errors import NotFoundError, ValidationError

pytestmark = pytest.mark.django_db


@pytest.fixture
def classroom(make_course, make_module, make_assignment, make_student, enroll, submit):
    course = make_course()
    module = make_module(course, title="Week 1")
    homework = make_assignment(module, "assignment")
    exam = make_assignment(module, "exam")

    students = {}
    for name, section, hw, ex in [
        ("Ana", "A", 100, 90),
        ("Bo", "B", 70, None),
        ("Chan", "A", 80, 80),
    ]:
        s = make_student(first_name=name, section=section)
        enroll(s, course)
        submit(s, homework, hw)
        if ex is not None:
            submit(s, exam, ex)
        students[name] = s

    dropped = make_student(first_name="Dropped")
    enroll(dropped, course, status="dropped")
    students["Dropped"] = dropped
    return {"course": course, "homework": homework, "exam": exam, "students": students}


def test_instructor_gradebook_rows(services, classroom, instructor_id):
    book = services.gradebook.get_instructor_gradebook(classroom["course"].id, instructor_id)

    assert book.total == 3
    assert book.total_assignments == 2
    assert [r.first_name for r in book.rows] == ["Ana", "Bo", "Chan"]

    ana, bo, chan = book.rows
    # 40/0/30 사용 → (100×0.4 + 90×0.3) / 70
    assert ana.overall_grade == 95.71
    assert ana.letter_grade == "A"
    assert bo.exam_average == 0.0
    assert bo.overall_grade == 40.0
    assert bo.has_missing
    assert chan.overall_grade == 80.0
    # (95.71 + 40 + 80) / 3
    assert book.class_average == 71.9


def test_instructor_gradebook_query(services, classroom, instructor_id):
    query = GradebookQuery(
        sort_by=GradebookSortBy.OVERALL_GRADE,
        sort_order=SortOrder.DESC,
        section="A",
        limit=1,
    )
    book = services.gradebook.get_instructor_gradebook(classroom["course"].id, instructor_id, query)

    assert book.total == 2
    assert book.total_pages == 2
    assert [r.first_name for r in book.rows] == ["Ana"]


def test_gradebook_rejects_bad_query(services, classroom, instructor_id):
    with pytest.raises(ValidationError):
        services.gradebook.get_instructor_gradebook(
            classroom["course"].id, instructor_id, GradebookQuery(limit=500)
        )


def test_gradebook_is_private_to_course_owner(services, classroom):
    with pytest.raises(NotFoundError):
        services.gradebook.get_instructor_gradebook(classroom["course"].id, uuid.uuid4())


def test_student_gradebook(services, classroom):
    bo = classroom["students"]["Bo"]

    book = services.gradebook.get_student_gradebook(classroom["course"].id, bo.id)

    assert book.student_id == bo.id
    # 시험 미제출은 0점으로 반영: (70×0.4 + 0×0.3) / 70
    assert book.grade_summary.overall_grade == 40.0
    statuses = {a.title: a.status for a in book.assignments}
    assert statuses[classroom["exam"].title] == "not_submitted"
    assert statuses[classroom["homework"].title] == "submitted"
    assert all(a.module_title == "Week 1" for a in book.assignments)


def test_student_gradebook_allows_past_enrollment(services, classroom):
    dropped = classroom["students"]["Dropped"]
    book = services.gradebook.get_student_gradebook(classroom["course"].id, dropped.id)
    assert book.grade_summary.overall_grade == 0.0


def test_student_gradebook_requires_enrollment(services, classroom, make_student):
    with pytest.raises(NotFoundError):
        services.gradebook.get_student_gradebook(classroom["course"].id, make_student().id)


def test_database_failure_for_one_student_gives_zero_row_only(
    services, classroom, instructor_id, monkeypatch
):
    from django.db import DatabaseError, transaction

    from coursework.adapters.db.django.repositories_grading import DjangoSubmissionRepository

    broken = classroom["students"]["Ana"]
    original = DjangoSubmissionRepository.list_for_student

    def fail_for_broken(self, student_id, assignment_ids):
        if student_id == broken.id:
            with transaction.atomic(savepoint=False):
                raise DatabaseError("connection reset")
        return original(self, student_id, assignment_ids)

    monkeypatch.setattr(DjangoSubmissionRepository, "list_for_student", fail_for_broken)

    book = services.gradebook.get_instructor_gradebook(classroom["course"].id, instructor_id)

    ana, bo, chan = book.rows
    assert (ana.overall_grade, ana.letter_grade, ana.total_submissions) == (0.0, "F", 0)
    assert bo.overall_grade == 40.0
    assert chan.overall_grade == 80.0
