"""
LessonProgress Repository: Django ORM 구현
"""
from __future__ import annotations

import uuid
from typing import Iterable, Optional

from coursework.domain.progress.entities import LessonProgress


def _model_to_entity(m) -> Optional[LessonProgress]:
    if m is None:
        return None
    return LessonProgress(
        student_id=m.student_id,
        lesson_id=m.lesson_id,
        completion_percentage=int(m.completion_percentage or 0),
        is_completed=bool(m.is_completed),
        completed_at=m.completed_at,
        last_accessed=m.last_accessed,
        id=m.id,
    )


class DjangoLessonProgressRepository:

    def get(self, student_id: uuid.UUID, lesson_id: uuid.UUID) -> Optional[LessonProgress]:
        from apps.domains.progress.models import LessonProgress as LessonProgressModel
        m = LessonProgressModel.objects.filter(student_id=student_id, lesson_id=lesson_id).first()
        return _model_to_entity(m)

    def get_for_update(self, student_id: uuid.UUID, lesson_id: uuid.UUID) -> Optional[LessonProgress]:
        """호출자가 이미 UoW 트랜잭션 내에 있어야 함."""
        from apps.domains.progress.models import LessonProgress as LessonProgressModel
        m = (
            LessonProgressModel.objects.select_for_update()
            .filter(student_id=student_id, lesson_id=lesson_id)
            .first()
        )
        return _model_to_entity(m)

    def list_for_lessons(
        self, student_id: uuid.UUID, lesson_ids: Iterable[uuid.UUID]
    ) -> list[LessonProgress]:
        from apps.domains.progress.models import LessonProgress as LessonProgressModel
        ids = list(lesson_ids)
        if not ids:
            return []
        qs = LessonProgressModel.objects.filter(student_id=student_id, lesson_id__in=ids)
        return [_model_to_entity(m) for m in qs]

    def save(self, progress: LessonProgress) -> LessonProgress:
        from apps.domains.progress.models import LessonProgress as LessonProgressModel
        m, _ = LessonProgressModel.objects.update_or_create(
            student_id=progress.student_id,
            lesson_id=progress.lesson_id,
            defaults={
                "completion_percentage": progress.completion_percentage,
                "is_completed": progress.is_completed,
                "completed_at": progress.completed_at,
                "last_accessed": progress.last_accessed,
            },
        )
        return _model_to_entity(m)
