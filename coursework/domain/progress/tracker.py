"""
레슨 진행 상태 계산기 (순차 잠금 해제)

상태: locked / unlocked_incomplete / completed
- 모듈 내 첫 레슨(이전 order_index 레슨이 없음)은 항상 unlocked
- order_index = k+1 레슨은 k 레슨이 is_completed 일 때만 unlocked
- 잠금 해제는 저장하지 않고 매번 계산한다
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Sequence

from coursework.domain.courses.entities import CourseRecord, LessonRecord, ModuleRecord
from coursework.domain.grading.entities import AssignmentRecord, SubmissionRecord
from coursework.domain.progress.entities import (
    AssignmentProgressRow,
    CourseProgressView,
    LessonProgress,
    LessonProgressRow,
    LessonState,
    ModuleProgressView,
)
from coursework.domain.shared.errors import PreconditionFailedError, ValidationError
from coursework.domain.shared.numbers import round_half_up, whole_percent

PREVIOUS_LESSON_INCOMPLETE = "Previous lesson must be completed first"


def validate_completion_percentage(value: Any) -> float:
    """[0, 100] 숫자만 허용. 완료 판정은 이 원래 값으로 한다."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("completion_percentage must be a number between 0 and 100")
    if value != value or value < 0 or value > 100:  # NaN 포함
        raise ValidationError(
            f"completion_percentage must be between 0 and 100 (got {value})"
        )
    return float(value)


def stored_percentage(value: float) -> int:
    """저장용 정수 퍼센트. 미완료 레슨은 99 를 넘지 않는다 (100 == 완료)."""
    return min(int(round_half_up(value, 0)), 99)


class ProgressTracker:

    # ---------------------------------------------------------------------
    # ordering / unlock
    # ---------------------------------------------------------------------

    @staticmethod
    def previous_lesson(
        lesson: LessonRecord, module_lessons: Sequence[LessonRecord]
    ) -> Optional[LessonRecord]:
        for other in module_lessons:
            if other.id != lesson.id and other.order_index == lesson.order_index - 1:
                return other
        return None

    @staticmethod
    def next_lesson(
        lesson: LessonRecord, module_lessons: Sequence[LessonRecord]
    ) -> Optional[LessonRecord]:
        for other in module_lessons:
            if other.id != lesson.id and other.order_index == lesson.order_index + 1:
                return other
        return None

    def is_unlocked(
        self,
        lesson: LessonRecord,
        module_lessons: Sequence[LessonRecord],
        progress_by_lesson: Mapping[uuid.UUID, LessonProgress],
    ) -> bool:
        previous = self.previous_lesson(lesson, module_lessons)
        if previous is None:
            return True
        p = progress_by_lesson.get(previous.id)
        return bool(p and p.is_completed)

    def state_of(
        self,
        lesson: LessonRecord,
        module_lessons: Sequence[LessonRecord],
        progress_by_lesson: Mapping[uuid.UUID, LessonProgress],
    ) -> LessonState:
        own = progress_by_lesson.get(lesson.id)
        if own is not None and own.is_completed:
            return LessonState.COMPLETED
        if self.is_unlocked(lesson, module_lessons, progress_by_lesson):
            return LessonState.UNLOCKED_INCOMPLETE
        return LessonState.LOCKED

    def ensure_unlocked(
        self,
        lesson: LessonRecord,
        module_lessons: Sequence[LessonRecord],
        progress_by_lesson: Mapping[uuid.UUID, LessonProgress],
    ) -> None:
        own = progress_by_lesson.get(lesson.id)
        if own is not None and own.is_completed:
            return
        if not self.is_unlocked(lesson, module_lessons, progress_by_lesson):
            raise PreconditionFailedError(PREVIOUS_LESSON_INCOMPLETE)

    # ---------------------------------------------------------------------
    # transitions
    # ---------------------------------------------------------------------

    @staticmethod
    def complete(
        existing: Optional[LessonProgress],
        *,
        student_id: uuid.UUID,
        lesson_id: uuid.UUID,
        now: datetime,
    ) -> LessonProgress:
        """* -> completed. 이미 완료된 레슨이면 최초 completed_at 유지 (멱등)."""
        completed_at = now
        if existing is not None and existing.is_completed and existing.completed_at:
            completed_at = existing.completed_at
        return LessonProgress(
            student_id=student_id,
            lesson_id=lesson_id,
            completion_percentage=100,
            is_completed=True,
            completed_at=completed_at,
            last_accessed=now,
            id=existing.id if existing else None,
        )

    def record(
        self,
        existing: Optional[LessonProgress],
        *,
        student_id: uuid.UUID,
        lesson_id: uuid.UUID,
        percentage: Any,
        completed: bool,
        now: datetime,
    ) -> LessonProgress:
        """부분 진행 기록. >= 100 또는 completed=True 이면 자동 완료."""
        pct = validate_completion_percentage(percentage)

        if completed or pct >= 100:
            return self.complete(existing, student_id=student_id, lesson_id=lesson_id, now=now)

        # 완료 상태는 부분 진행 기록으로 되돌리지 않는다
        if existing is not None and existing.is_completed:
            return LessonProgress(
                student_id=student_id,
                lesson_id=lesson_id,
                completion_percentage=existing.completion_percentage,
                is_completed=True,
                completed_at=existing.completed_at,
                last_accessed=now,
                id=existing.id,
            )

        return LessonProgress(
            student_id=student_id,
            lesson_id=lesson_id,
            completion_percentage=stored_percentage(pct),
            is_completed=False,
            completed_at=None,
            last_accessed=now,
            id=existing.id if existing else None,
        )

    # ---------------------------------------------------------------------
    # course view
    # ---------------------------------------------------------------------

    def build_course_view(
        self,
        *,
        course: CourseRecord,
        modules: Iterable[ModuleRecord],
        lessons: Iterable[LessonRecord],
        assignments: Iterable[AssignmentRecord],
        progress: Iterable[LessonProgress],
        submissions: Iterable[SubmissionRecord],
        enrolled_at: Optional[datetime] = None,
    ) -> CourseProgressView:
        progress_by_lesson = {p.lesson_id: p for p in progress}
        submission_by_assignment = {s.assignment_id: s for s in submissions}

        lessons_by_module: dict[uuid.UUID, list[LessonRecord]] = {}
        for lesson in lessons:
            if lesson.is_published:
                lessons_by_module.setdefault(lesson.module_id, []).append(lesson)

        module_views: list[ModuleProgressView] = []
        total_lessons = completed_lessons = completed_modules = total_duration = 0

        for module in sorted(modules, key=lambda m: (m.order_index, str(m.id))):
            if not module.is_published:
                continue
            module_lessons = sorted(
                lessons_by_module.get(module.id, []),
                key=lambda l: (l.order_index, str(l.id)),
            )
            rows = []
            for lesson in module_lessons:
                p = progress_by_lesson.get(lesson.id)
                rows.append(
                    LessonProgressRow(
                        id=lesson.id,
                        title=lesson.title,
                        order_index=lesson.order_index,
                        estimated_duration=lesson.estimated_duration,
                        state=self.state_of(lesson, module_lessons, progress_by_lesson),
                        completion_percentage=p.completion_percentage if p else 0,
                        completed_at=p.completed_at if p else None,
                        last_accessed=p.last_accessed if p else None,
                    )
                )

            done = sum(1 for r in rows if r.is_completed)
            pct = whole_percent(done, len(rows))
            duration = sum(r.estimated_duration or 0 for r in rows)

            total_lessons += len(rows)
            completed_lessons += done
            total_duration += duration
            if pct == 100:
                completed_modules += 1

            module_views.append(
                ModuleProgressView(
                    id=module.id,
                    title=module.title,
                    order_index=module.order_index,
                    lessons=rows,
                    total_lessons=len(rows),
                    completed_lessons=done,
                    completion_percentage=pct,
                    total_duration=duration,
                )
            )

        assignment_rows = []
        for a in assignments:
            if not a.is_published:
                continue
            s = submission_by_assignment.get(a.id)
            assignment_rows.append(
                AssignmentProgressRow(
                    id=a.id,
                    title=a.title,
                    category=a.category.value,
                    points=a.points,
                    due_date=a.due_date,
                    is_submitted=s is not None,
                    score=s.score if s else None,
                    submitted_at=s.submitted_at if s else None,
                )
            )

        return CourseProgressView(
            course_id=course.id,
            title=course.title,
            modules=module_views,
            assignments=assignment_rows,
            total_modules=len(module_views),
            completed_modules=completed_modules,
            total_lessons=total_lessons,
            completed_lessons=completed_lessons,
            course_completion_percentage=whole_percent(completed_lessons, total_lessons),
            total_estimated_duration=total_duration,
            enrolled_at=enrolled_at,
        )
