from django.db import models

from apps.api.common.models import BaseModel, TimestampModel
from apps.domains.courses.models import CourseModule
from apps.domains.students.models import Student


class Assignment(BaseModel):
    """
    과제. assignment_type 이 성적 카테고리를 결정한다 (assignment / activity / exam).
    """

    class AssignmentType(models.TextChoices):
        ASSIGNMENT = "assignment", "과제"
        ACTIVITY = "activity", "활동"
        EXAM = "exam", "시험"

    module = models.ForeignKey(
        CourseModule,
        on_delete=models.CASCADE,
        related_name="assignments",
    )
    title = models.CharField(max_length=255)
    assignment_type = models.CharField(
        max_length=20,
        choices=AssignmentType.choices,
        default=AssignmentType.ASSIGNMENT,
    )
    points = models.PositiveIntegerField(default=100)
    due_date = models.DateTimeField(null=True, blank=True)
    is_published = models.BooleanField(default=True)

    class Meta:
        ordering = ["module__order_index", "created_at"]

    def __str__(self):
        return self.title


class Submission(TimestampModel):
    """
    학생 제출. (student, assignment) 당 1건, 재제출은 같은 row 를 갱신.
    """

    assignment = models.ForeignKey(
        Assignment,
        on_delete=models.CASCADE,
        related_name="submissions",
    )
    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name="submissions",
    )

    score = models.FloatField(default=0)
    max_score = models.FloatField(default=0)
    submitted_at = models.DateTimeField()
    status = models.CharField(max_length=20, default="submitted")

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["student", "assignment"],
                name="unique_submission_per_assignment",
            )
        ]

    def __str__(self):
        return f"{self.student} - {self.assignment.title}"
