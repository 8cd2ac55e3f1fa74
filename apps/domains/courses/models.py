from django.db import models

from apps.api.common.models import BaseModel


# ========================================================
# Course
# ========================================================

class Course(BaseModel):
    """
    코스 정의. CRUD/승인은 외부 협력자 담당.
    instructor_id 는 인증 시스템의 사용자 UUID (FK 아님).
    """

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    instructor_id = models.UUIDField(db_index=True)

    # 인증서 발급 기준 (0~100). null 이면 인증서 발급 불가
    passing_grade = models.FloatField(null=True, blank=True)

    def __str__(self):
        return self.title


# ========================================================
# CourseModule / Lesson
# ========================================================

class CourseModule(BaseModel):
    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="modules",
    )
    title = models.CharField(max_length=255)
    order_index = models.PositiveIntegerField(default=1)
    is_published = models.BooleanField(default=True)

    class Meta:
        ordering = ["course", "order_index"]

    def __str__(self):
        return f"{self.course.title} - {self.title}"


class Lesson(BaseModel):
    """
    모듈 내 레슨. order_index 는 모듈 안에서 1부터 시작.
    잠금 해제는 order_index 순서로 계산한다 (저장하지 않음).
    """

    module = models.ForeignKey(
        CourseModule,
        on_delete=models.CASCADE,
        related_name="lessons",
    )
    title = models.CharField(max_length=255)
    order_index = models.PositiveIntegerField(default=1)
    is_published = models.BooleanField(default=True)

    # 분 단위
    estimated_duration = models.PositiveIntegerField(null=True, blank=True)

    class Meta:
        ordering = ["module", "order_index"]
        constraints = [
            models.UniqueConstraint(
                fields=["module", "order_index"],
                name="unique_lesson_order_per_module",
            )
        ]

    def __str__(self):
        return self.title
