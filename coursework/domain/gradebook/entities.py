"""
성적부(gradebook) 조회 타입
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from coursework.domain.courses.entities import StudentRecord
from coursework.domain.grading.entities import GradeSummary


class GradebookSortBy(str, Enum):
    NAME = "name"
    STUDENT_NUMBER = "student_number"
    EMAIL = "email"
    OVERALL_GRADE = "overall_grade"
    ASSIGNMENT_GRADE = "assignment_grade"
    ACTIVITY_GRADE = "activity_grade"
    EXAM_GRADE = "exam_grade"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SubmissionStatusFilter(str, Enum):
    ALL = "all"
    ALL_SUBMITTED = "all_submitted"
    HAS_MISSING = "has_missing"


DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True)
class GradebookQuery:
    offset: int = 0
    limit: int = DEFAULT_LIMIT
    sort_by: GradebookSortBy = GradebookSortBy.NAME
    sort_order: SortOrder = SortOrder.ASC
    min_score: Optional[float] = None
    max_score: Optional[float] = None
    submission_status: SubmissionStatusFilter = SubmissionStatusFilter.ALL
    section: Optional[str] = None
    search: Optional[str] = None


@dataclass(frozen=True)
class GradebookRow:
    student_id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    student_number: Optional[str]
    section: Optional[str]
    overall_grade: float
    letter_grade: str
    assignment_average: float
    activity_average: float
    exam_average: float
    total_submissions: int
    total_assignments: int
    last_submission: Optional[datetime] = None

    @property
    def has_missing(self) -> bool:
        return self.total_submissions < self.total_assignments

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class InstructorGradebook:
    rows: list[GradebookRow]
    total: int
    offset: int
    limit: int
    total_pages: int
    current_page: int
    class_average: float
    total_assignments: int


@dataclass(frozen=True)
class AssignmentGrade:
    id: uuid.UUID
    title: str
    category: str
    module_title: str
    max_score: int
    score: Optional[float]
    percentage: Optional[float]
    due_date: Optional[datetime]
    submitted_at: Optional[datetime]
    status: str
    is_late: bool


@dataclass(frozen=True)
class StudentGradebook:
    student: StudentRecord
    grade_summary: GradeSummary
    assignments: list[AssignmentGrade] = field(default_factory=list)

    @property
    def student_id(self) -> uuid.UUID:
        return self.student.id
