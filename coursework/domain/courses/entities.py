"""
코스 구조 / 수강 엔티티: 순수 파이썬 (Django/ORM 미사용)

Course, Module, Lesson, Student 는 외부 협력자(CRUD, 인증)가 소유한다.
여기서는 읽기 전용 스냅샷만 다룬다.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class EnrollmentStatus(str, Enum):
    """apps.domains.enrollment.models.Enrollment.Status 와 동기화."""
    ACTIVE = "active"
    COMPLETED = "completed"
    DROPPED = "dropped"
    SUSPENDED = "suspended"


@dataclass(frozen=True)
class CourseRecord:
    id: uuid.UUID
    title: str
    instructor_id: uuid.UUID
    passing_grade: Optional[float] = None

    @property
    def has_passing_grade(self) -> bool:
        return self.passing_grade is not None

    def is_owned_by(self, instructor_id: uuid.UUID) -> bool:
        return self.instructor_id == instructor_id


@dataclass(frozen=True)
class ModuleRecord:
    id: uuid.UUID
    course_id: uuid.UUID
    title: str
    order_index: int
    is_published: bool = True


@dataclass(frozen=True)
class LessonRecord:
    id: uuid.UUID
    module_id: uuid.UUID
    course_id: uuid.UUID
    title: str
    order_index: int
    is_published: bool = True
    estimated_duration: Optional[int] = None


@dataclass(frozen=True)
class StudentRecord:
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    student_number: Optional[str] = None
    section: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class EnrollmentRecord:
    student_id: uuid.UUID
    course_id: uuid.UUID
    status: EnrollmentStatus
    enrolled_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == EnrollmentStatus.ACTIVE
