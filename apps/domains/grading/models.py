from django.db import models

from apps.api.common.models import BaseModel
from apps.domains.courses.models import Course


class CourseGradeWeights(BaseModel):
    """
    코스별 카테고리 가중치 (정수 %, 합계 100).
    첫 조회 시 기본값으로 생성되며, 합계 검증은 저장 전에 끝난다.
    """

    course = models.OneToOneField(
        Course,
        on_delete=models.CASCADE,
        related_name="grade_weights",
    )

    assignment_weight = models.PositiveSmallIntegerField(default=40)
    activity_weight = models.PositiveSmallIntegerField(default=30)
    exam_weight = models.PositiveSmallIntegerField(default=30)

    class Meta:
        verbose_name_plural = "course grade weights"

    def __str__(self):
        return (
            f"{self.course_id}: {self.assignment_weight}/"
            f"{self.activity_weight}/{self.exam_weight}"
        )
