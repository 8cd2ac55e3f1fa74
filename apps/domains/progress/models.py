from django.db import models

from apps.api.common.models import BaseModel
from apps.domains.courses.models import Lesson
from apps.domains.students.models import Student


class LessonProgress(BaseModel):
    """
    학생 × 레슨 진행 상태.
    완료된 레슨은 다시 미완료로 돌아가지 않는다.
    """

    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name="lesson_progress",
    )
    lesson = models.ForeignKey(
        Lesson,
        on_delete=models.CASCADE,
        related_name="progress",
    )

    completion_percentage = models.PositiveSmallIntegerField(default=0)
    is_completed = models.BooleanField(default=False)
    completed_at = models.DateTimeField(null=True, blank=True)
    last_accessed = models.DateTimeField(null=True, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["student", "lesson"],
                name="unique_progress_per_lesson",
            )
        ]

    def __str__(self):
        return f"{self.student} - {self.lesson} ({self.completion_percentage}%)"
