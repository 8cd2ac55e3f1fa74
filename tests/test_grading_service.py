import uuid

import pytest

from coursework.domain.shared.errors import NotFoundError, ValidationError

pytestmark = pytest.mark.django_db


def test_weights_are_created_lazily_with_defaults(services, make_course):
    from apps.domains.grading.models import CourseGradeWeights

    course = make_course()
    assert not CourseGradeWeights.objects.filter(course=course).exists()

    weights = services.grading.get_course_grade_weights(course.id)

    assert (weights.assignment_weight, weights.activity_weight, weights.exam_weight) == (40, 30, 30)
    assert weights.total == 100
    again = services.grading.get_course_grade_weights(str(course.id))
    assert again.id == weights.id
    assert CourseGradeWeights.objects.filter(course=course).count() == 1


def test_owner_updates_weights(services, make_course, instructor_id):
    course = make_course()

    saved = services.grading.update_course_grade_weights(
        course.id,
        instructor_id,
        {"assignment_weight": 50, "activity_weight": 20, "exam_weight": 30},
    )

    assert (saved.assignment_weight, saved.activity_weight, saved.exam_weight) == (50, 20, 30)
    read = services.grading.get_course_grade_weights(course.id)
    assert (read.assignment_weight, read.activity_weight, read.exam_weight) == (50, 20, 30)


def test_invalid_weights_leave_previous_values(services, make_course, instructor_id):
    course = make_course()
    services.grading.update_course_grade_weights(
        course.id, instructor_id,
        {"assignment_weight": 50, "activity_weight": 25, "exam_weight": 25},
    )

    with pytest.raises(ValidationError) as exc:
        services.grading.update_course_grade_weights(
            course.id, instructor_id,
            {"assignment_weight": 50, "activity_weight": 50, "exam_weight": 50},
        )

    assert "Current sum: 150" in exc.value.message
    read = services.grading.get_course_grade_weights(course.id)
    assert (read.assignment_weight, read.activity_weight, read.exam_weight) == (50, 25, 25)


def test_non_owner_cannot_update_weights(services, make_course):
    course = make_course()
    with pytest.raises(NotFoundError):
        services.grading.update_course_grade_weights(
            course.id, uuid.uuid4(),
            {"assignment_weight": 40, "activity_weight": 30, "exam_weight": 30},
        )


def test_overall_grade_renormalizes_missing_exam(
    services, make_course, make_module, make_assignment, make_student, enroll, submit
):
    course = make_course()
    module = make_module(course)
    homework = make_assignment(module, "assignment")
    quiz = make_assignment(module, "activity")
    student = make_student()
    enroll(student, course)
    submit(student, homework, 90)
    submit(student, quiz, 8, max_score=10)

    summary = services.grading.calculate_overall_grade(course.id, student.id)

    # (90×0.4 + 80×0.3) / 70 × 100
    assert summary.overall_grade == 85.71
    assert summary.letter_grade == "B"
    assert summary.category_grades.exam.total == 0
    assert summary.grade_weights.exam_weight == 30


def test_category_grades_without_submissions_are_zero(services, course_setup):
    grades = services.grading.calculate_category_grades(
        course_setup["course"].id, course_setup["student"].id
    )
    assert grades.assignment.total == 1
    assert grades.assignment.submitted == 0
    assert grades.assignment.average == 0.0


def test_malformed_ids_are_validation_errors(services):
    with pytest.raises(ValidationError) as exc:
        services.grading.calculate_overall_grade("not-a-uuid", "also-bad")
    assert len(exc.value.errors) == 2


def test_unknown_course_is_not_found(services):
    with pytest.raises(NotFoundError):
        services.grading.calculate_overall_grade(uuid.uuid4(), uuid.uuid4())


def test_weights_update_when_row_was_created_concurrently(
    services, make_course, instructor_id, monkeypatch
):
    from django.db.models.query import QuerySet

    from apps.domains.grading.models import CourseGradeWeights

    course = make_course()
    original_get = QuerySet.get
    raced = []

    def get_after_concurrent_insert(self, *args, **kwargs):
        # 조회 직후 다른 요청의 lazy 생성이 먼저 commit 된 상황
        if self.model is CourseGradeWeights and not raced:
            raced.append(True)
            CourseGradeWeights.objects.create(course=course)
            raise CourseGradeWeights.DoesNotExist
        return original_get(self, *args, **kwargs)

    monkeypatch.setattr(QuerySet, "get", get_after_concurrent_insert)

    saved = services.grading.update_course_grade_weights(
        course.id,
        instructor_id,
        {"assignment_weight": 50, "activity_weight": 20, "exam_weight": 30},
    )

    assert raced
    assert (saved.assignment_weight, saved.activity_weight, saved.exam_weight) == (50, 20, 30)
    row = CourseGradeWeights.objects.get(course=course)
    assert (row.assignment_weight, row.activity_weight, row.exam_weight) == (50, 20, 30)
