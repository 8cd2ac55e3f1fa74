"""
레슨 진행 Use Case: 도메인/포트만 사용 (Django 미사용)

잠금 해제 판정은 ProgressTracker, 저장은 UoW(lesson_progress) 가 담당.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from coursework.application.ports.unit_of_work import UnitOfWork
from coursework.application.use_cases.grading import get_course_or_404
from coursework.domain.courses.entities import LessonRecord
from coursework.domain.progress.entities import (
    CompletionCounts,
    CourseProgressView,
    LessonCompletion,
    LessonProgress,
)
from coursework.domain.progress.tracker import ProgressTracker, validate_completion_percentage
from coursework.domain.shared.errors import NotFoundError
from coursework.domain.shared.ids import parse_uuids

logger = logging.getLogger(__name__)

LESSON_NOT_FOUND = "Lesson not found or student not enrolled"


class ProgressService:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        *,
        tracker: Optional[ProgressTracker] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._tracker = tracker or ProgressTracker()

    def _lesson_for_student(
        self, uow: UnitOfWork, student_id: uuid.UUID, lesson_id: uuid.UUID
    ) -> LessonRecord:
        # 레슨 없음 / 비공개 / 수강 안 함은 구분하지 않는다
        lesson = uow.lessons.get(lesson_id)
        if lesson is None or not lesson.is_published:
            raise NotFoundError(LESSON_NOT_FOUND)
        enrollment = uow.enrollments.get(lesson.course_id, student_id)
        if enrollment is None or not enrollment.is_active:
            raise NotFoundError(LESSON_NOT_FOUND)
        return lesson

    def _unlock_context(self, uow: UnitOfWork, student_id: uuid.UUID, lesson: LessonRecord):
        module_lessons = uow.lessons.list_module_lessons(lesson.module_id)
        progress = uow.lesson_progress.list_for_lessons(
            student_id, [l.id for l in module_lessons]
        )
        return module_lessons, {p.lesson_id: p for p in progress}

    def complete_lesson(
        self,
        student_id: Any,
        lesson_id: Any,
        now: Optional[datetime] = None,
    ) -> LessonCompletion:
        ids = parse_uuids({"student ID": student_id, "lesson ID": lesson_id})
        sid, lid = ids["student ID"], ids["lesson ID"]
        if now is None:
            now = datetime.now(timezone.utc)

        with self._uow_factory() as uow:
            lesson = self._lesson_for_student(uow, sid, lid)
            module_lessons, progress_by_lesson = self._unlock_context(uow, sid, lesson)
            self._tracker.ensure_unlocked(lesson, module_lessons, progress_by_lesson)

            existing = uow.lesson_progress.get_for_update(sid, lid)
            saved = uow.lesson_progress.save(
                self._tracker.complete(existing, student_id=sid, lesson_id=lid, now=now)
            )
            nxt = self._tracker.next_lesson(lesson, module_lessons)

        logger.info("[progress] lesson completed student=%s lesson=%s", sid, lid)
        return LessonCompletion(
            lesson_id=lid,
            completed=True,
            completion_percentage=saved.completion_percentage,
            next_lesson_id=nxt.id if nxt else None,
            next_lesson_unlocked=nxt is not None,
            completed_at=saved.completed_at,
        )

    def update_lesson_progress(
        self,
        student_id: Any,
        lesson_id: Any,
        percentage: Any,
        completed: bool = False,
        now: Optional[datetime] = None,
    ) -> LessonProgress:
        """
        부분 진행 기록. >= 100 이거나 completed=True 이면 완료 처리.
        잠긴 레슨은 진행 기록도 받지 않는다 (PreconditionFailed).
        """
        ids = parse_uuids({"student ID": student_id, "lesson ID": lesson_id})
        sid, lid = ids["student ID"], ids["lesson ID"]
        validate_completion_percentage(percentage)
        if now is None:
            now = datetime.now(timezone.utc)

        with self._uow_factory() as uow:
            lesson = self._lesson_for_student(uow, sid, lid)
            module_lessons, progress_by_lesson = self._unlock_context(uow, sid, lesson)
            self._tracker.ensure_unlocked(lesson, module_lessons, progress_by_lesson)

            existing = uow.lesson_progress.get_for_update(sid, lid)
            updated = self._tracker.record(
                existing,
                student_id=sid,
                lesson_id=lid,
                percentage=percentage,
                completed=completed,
                now=now,
            )
            saved = uow.lesson_progress.save(updated)

        if saved.is_completed and not (existing and existing.is_completed):
            logger.info("[progress] lesson completed student=%s lesson=%s", sid, lid)
        return saved

    def course_view_in(
        self, uow: UnitOfWork, course_id: uuid.UUID, student_id: uuid.UUID
    ) -> CourseProgressView:
        course = get_course_or_404(uow, course_id)
        enrollment = uow.enrollments.get(course.id, student_id)

        lessons = uow.lessons.list_course_lessons(course.id)
        assignments = uow.assignments.list_published(course.id)
        return self._tracker.build_course_view(
            course=course,
            modules=uow.lessons.list_modules(course.id),
            lessons=lessons,
            assignments=assignments,
            progress=uow.lesson_progress.list_for_lessons(student_id, [l.id for l in lessons]),
            submissions=uow.submissions.list_for_student(student_id, [a.id for a in assignments]),
            enrolled_at=enrollment.enrolled_at if enrollment else None,
        )

    def completion_counts_in(
        self, uow: UnitOfWork, course_id: uuid.UUID, student_id: uuid.UUID
    ) -> CompletionCounts:
        return self.course_view_in(uow, course_id, student_id).completion_counts()

    def get_student_course_progress(self, student_id: Any, course_id: Any) -> CourseProgressView:
        ids = parse_uuids({"student ID": student_id, "course ID": course_id})
        sid, cid = ids["student ID"], ids["course ID"]

        with self._uow_factory() as uow:
            enrollment = uow.enrollments.get(cid, sid)
            if enrollment is None or not enrollment.is_active:
                raise NotFoundError("Course not found or student not enrolled")
            return self.course_view_in(uow, cid, sid)
