from django.db import models

from apps.api.common.models import BaseModel


class Student(BaseModel):
    """
    학생 프로필 (읽기 전용 스냅샷).
    계정/인증은 외부 협력자가 소유하고, 여기서는 성적부 표시에 필요한 값만 둔다.
    """

    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)

    # 학번 / 분반 (성적부 정렬·필터용)
    student_number = models.CharField(max_length=50, null=True, blank=True)
    section = models.CharField(max_length=50, null=True, blank=True)

    class Meta:
        ordering = ["last_name", "first_name"]

    def __str__(self):
        return f"{self.first_name} {self.last_name}"
