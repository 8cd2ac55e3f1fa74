"""
공용 fixture: Django 모델 팩토리 + 조립된 서비스

DB 가 필요한 테스트만 db fixture 를 요청한다 (도메인 테스트는 순수 파이썬).
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import pytest

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def services(db):
    from coursework.container import build_services
    return build_services()


@pytest.fixture
def instructor_id():
    return uuid.uuid4()


@pytest.fixture
def make_student(db):
    from apps.domains.students.models import Student

    def _make(first_name="Kim", last_name="Minji", section=None, student_number=None):
        return Student.objects.create(
            first_name=first_name,
            last_name=last_name,
            email=f"{first_name.lower()}.{uuid.uuid4().hex[:8]}@example.com",
            section=section,
            student_number=student_number,
        )

    return _make


@pytest.fixture
def make_course(db, instructor_id):
    from apps.domains.courses.models import Course

    def _make(passing_grade=75.0, owner=None, title="Algorithms"):
        return Course.objects.create(
            title=title,
            instructor_id=owner or instructor_id,
            passing_grade=passing_grade,
        )

    return _make


@pytest.fixture
def make_module(db):
    from apps.domains.courses.models import CourseModule

    def _make(course, order_index=1, is_published=True, title=None):
        return CourseModule.objects.create(
            course=course,
            title=title or f"Module {order_index}",
            order_index=order_index,
            is_published=is_published,
        )

    return _make


@pytest.fixture
def make_lesson(db):
    from apps.domains.courses.models import Lesson

    def _make(module, order_index, is_published=True, estimated_duration=10):
        return Lesson.objects.create(
            module=module,
            title=f"Lesson {order_index}",
            order_index=order_index,
            is_published=is_published,
            estimated_duration=estimated_duration,
        )

    return _make


@pytest.fixture
def make_assignment(db):
    from apps.domains.assignments.models import Assignment

    def _make(module, assignment_type="assignment", points=100, due_date=None, is_published=True):
        return Assignment.objects.create(
            module=module,
            title=f"{assignment_type} {uuid.uuid4().hex[:4]}",
            assignment_type=assignment_type,
            points=points,
            due_date=due_date,
            is_published=is_published,
        )

    return _make


@pytest.fixture
def submit(db):
    from apps.domains.assignments.models import Submission

    def _submit(student, assignment, score, max_score=100, submitted_at=NOW):
        return Submission.objects.create(
            student=student,
            assignment=assignment,
            score=score,
            max_score=max_score,
            submitted_at=submitted_at,
        )

    return _submit


@pytest.fixture
def enroll(db):
    from apps.domains.enrollment.models import Enrollment

    def _enroll(student, course, status="active"):
        return Enrollment.objects.create(student=student, course=course, status=status)

    return _enroll


@pytest.fixture
def complete_lessons(db):
    from apps.domains.progress.models import LessonProgress

    def _complete(student, *lessons):
        for lesson in lessons:
            LessonProgress.objects.create(
                student=student,
                lesson=lesson,
                completion_percentage=100,
                is_completed=True,
                completed_at=NOW - timedelta(days=1),
                last_accessed=NOW - timedelta(days=1),
            )

    return _complete


@pytest.fixture
def course_setup(make_course, make_module, make_lesson, make_assignment, make_student, enroll):
    """
    passing_grade=75 코스
    - Module 1: Lesson 1, Lesson 2 (순차)
    - 과제 1건 (assignment 카테고리)
    - 학생 1명 active 수강
    """
    course = make_course(passing_grade=75.0)
    module = make_module(course, order_index=1)
    lesson1 = make_lesson(module, 1)
    lesson2 = make_lesson(module, 2)
    assignment = make_assignment(module, "assignment")
    student = make_student()
    enroll(student, course)
    return {
        "course": course,
        "module": module,
        "lessons": [lesson1, lesson2],
        "assignment": assignment,
        "student": student,
    }
