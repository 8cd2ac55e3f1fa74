from django.db import models

from apps.api.common.models import BaseModel
from apps.domains.courses.models import Course
from apps.domains.students.models import Student


class CourseCertificate(BaseModel):
    """
    수료 인증서.

    - (course, student) 당 1건 (DB 제약). 취소해도 row 는 남는다.
    - final_grade 는 발급 시점 스냅샷
    - issued_by / revoked_by 는 강사 사용자 UUID
    """

    class Status(models.TextChoices):
        ACTIVE = "active", "유효"
        REVOKED = "revoked", "취소"

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="certificates",
    )
    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name="certificates",
    )

    issued_by = models.UUIDField()
    issued_at = models.DateTimeField()
    final_grade = models.FloatField()

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True,
    )

    revoked_at = models.DateTimeField(null=True, blank=True)
    revoked_by = models.UUIDField(null=True, blank=True)
    revocation_reason = models.TextField(null=True, blank=True)

    class Meta:
        ordering = ["-issued_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["course", "student"],
                name="unique_certificate_per_course_student",
            )
        ]

    def __str__(self):
        return f"{self.student} - {self.course.title} ({self.status})"
