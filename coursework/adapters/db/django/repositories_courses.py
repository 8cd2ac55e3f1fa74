"""
Course / Module / Lesson / Student / Enrollment 조회: Django ORM 구현

.objects 접근은 이 모듈 안으로 한정. 모델 import 는 메서드 내부에서만 (lazy).
"""
from __future__ import annotations

import uuid
from typing import Iterable, Optional

from coursework.domain.courses.entities import (
    CourseRecord,
    EnrollmentRecord,
    EnrollmentStatus,
    LessonRecord,
    ModuleRecord,
    StudentRecord,
)


def _course_to_entity(m) -> Optional[CourseRecord]:
    if m is None:
        return None
    return CourseRecord(
        id=m.id,
        title=m.title,
        instructor_id=m.instructor_id,
        passing_grade=m.passing_grade,
    )


def _module_to_entity(m) -> ModuleRecord:
    return ModuleRecord(
        id=m.id,
        course_id=m.course_id,
        title=m.title,
        order_index=m.order_index,
        is_published=m.is_published,
    )


def _lesson_to_entity(m) -> LessonRecord:
    # 비공개 모듈의 레슨은 비공개로 취급
    return LessonRecord(
        id=m.id,
        module_id=m.module_id,
        course_id=m.module.course_id,
        title=m.title,
        order_index=m.order_index,
        is_published=bool(m.is_published and m.module.is_published),
        estimated_duration=m.estimated_duration,
    )


def _student_to_entity(m) -> StudentRecord:
    return StudentRecord(
        id=m.id,
        first_name=m.first_name,
        last_name=m.last_name,
        email=m.email,
        student_number=m.student_number,
        section=m.section,
    )


def _enrollment_to_entity(m) -> Optional[EnrollmentRecord]:
    if m is None:
        return None
    return EnrollmentRecord(
        student_id=m.student_id,
        course_id=m.course_id,
        status=EnrollmentStatus(m.status),
        enrolled_at=m.enrolled_at,
    )


class DjangoCourseRepository:

    def get(self, course_id: uuid.UUID) -> Optional[CourseRecord]:
        from apps.domains.courses.models import Course
        return _course_to_entity(Course.objects.filter(id=course_id).first())

    def get_owned(self, course_id: uuid.UUID, instructor_id: uuid.UUID) -> Optional[CourseRecord]:
        from apps.domains.courses.models import Course
        m = Course.objects.filter(id=course_id, instructor_id=instructor_id).first()
        return _course_to_entity(m)


class DjangoStudentRepository:

    def get(self, student_id: uuid.UUID) -> Optional[StudentRecord]:
        from apps.domains.students.models import Student
        m = Student.objects.filter(id=student_id).first()
        return _student_to_entity(m) if m else None

    def get_many(self, student_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, StudentRecord]:
        from apps.domains.students.models import Student
        qs = Student.objects.filter(id__in=list(student_ids))
        return {m.id: _student_to_entity(m) for m in qs}


class DjangoEnrollmentRepository:

    def get(self, course_id: uuid.UUID, student_id: uuid.UUID) -> Optional[EnrollmentRecord]:
        from apps.domains.enrollment.models import Enrollment
        m = Enrollment.objects.filter(course_id=course_id, student_id=student_id).first()
        return _enrollment_to_entity(m)

    def list_active(self, course_id: uuid.UUID) -> list[EnrollmentRecord]:
        from apps.domains.enrollment.models import Enrollment
        qs = Enrollment.objects.filter(
            course_id=course_id,
            status=Enrollment.Status.ACTIVE,
        ).order_by("enrolled_at", "id")
        return [_enrollment_to_entity(m) for m in qs]


class DjangoLessonRepository:

    def get(self, lesson_id: uuid.UUID) -> Optional[LessonRecord]:
        from apps.domains.courses.models import Lesson
        m = Lesson.objects.select_related("module").filter(id=lesson_id).first()
        return _lesson_to_entity(m) if m else None

    def list_module_lessons(self, module_id: uuid.UUID) -> list[LessonRecord]:
        from apps.domains.courses.models import Lesson
        qs = (
            Lesson.objects.select_related("module")
            .filter(module_id=module_id, is_published=True)
            .order_by("order_index")
        )
        return [_lesson_to_entity(m) for m in qs]

    def list_modules(self, course_id: uuid.UUID) -> list[ModuleRecord]:
        from apps.domains.courses.models import CourseModule
        qs = CourseModule.objects.filter(course_id=course_id, is_published=True).order_by(
            "order_index"
        )
        return [_module_to_entity(m) for m in qs]

    def list_course_lessons(self, course_id: uuid.UUID) -> list[LessonRecord]:
        from apps.domains.courses.models import Lesson
        qs = (
            Lesson.objects.select_related("module")
            .filter(
                module__course_id=course_id,
                module__is_published=True,
                is_published=True,
            )
            .order_by("module__order_index", "order_index")
        )
        return [_lesson_to_entity(m) for m in qs]
