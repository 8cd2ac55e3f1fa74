from django.db import models

from apps.api.common.models import TimestampModel
from apps.domains.courses.models import Course
from apps.domains.students.models import Student


# ========================================================
# Enrollment (코스 단위 수강 등록)
# ========================================================

class Enrollment(TimestampModel):
    """
    학생이 특정 코스를 수강하는 행위.
    성적부/진행률/인증서 판정은 status=active 인 수강만 대상으로 한다.
    """

    class Status(models.TextChoices):
        ACTIVE = "active", "수강중"
        COMPLETED = "completed", "수료"
        DROPPED = "dropped", "중도 포기"
        SUSPENDED = "suspended", "정지"

    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name="enrollments",
    )
    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="enrollments",
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
    )

    enrolled_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["student", "course"],
                name="unique_enrollment_per_course",
            )
        ]

    def __str__(self):
        return f"{self.student} -> {self.course.title}"
