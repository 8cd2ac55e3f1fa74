"""
성적 도메인 엔티티: 순수 파이썬

GradeSummary 는 저장하지 않는다. 요청마다 원천 데이터에서 다시 계산.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Category(str, Enum):
    """과제 카테고리. Assignment.assignment_type 으로 고정된다."""
    ASSIGNMENT = "assignment"
    ACTIVITY = "activity"
    EXAM = "exam"


CATEGORIES = (Category.ASSIGNMENT, Category.ACTIVITY, Category.EXAM)


@dataclass(frozen=True)
class AssignmentRecord:
    id: uuid.UUID
    module_id: uuid.UUID
    title: str
    category: Category
    points: int
    is_published: bool = True
    due_date: Optional[datetime] = None
    module_title: str = ""
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class SubmissionRecord:
    assignment_id: uuid.UUID
    student_id: uuid.UUID
    score: float
    max_score: float
    submitted_at: Optional[datetime] = None
    status: str = "submitted"


@dataclass(frozen=True)
class CategoryGrade:
    average: float = 0.0
    submitted: int = 0
    total: int = 0

    @property
    def has_content(self) -> bool:
        return self.total > 0


@dataclass(frozen=True)
class CategoryGrades:
    assignment: CategoryGrade
    activity: CategoryGrade
    exam: CategoryGrade
    last_submission_at: Optional[datetime] = None

    def get(self, category: Category) -> CategoryGrade:
        return getattr(self, category.value)

    @property
    def total_submitted(self) -> int:
        return sum(self.get(c).submitted for c in CATEGORIES)

    @property
    def total_assignments(self) -> int:
        return sum(self.get(c).total for c in CATEGORIES)

    @classmethod
    def empty(cls) -> "CategoryGrades":
        return cls(CategoryGrade(), CategoryGrade(), CategoryGrade())


@dataclass(frozen=True)
class GradeWeights:
    course_id: uuid.UUID
    assignment_weight: int
    activity_weight: int
    exam_weight: int
    id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def weight_for(self, category: Category) -> int:
        return getattr(self, f"{category.value}_weight")

    @property
    def total(self) -> int:
        return self.assignment_weight + self.activity_weight + self.exam_weight


@dataclass(frozen=True)
class GradeSummary:
    overall_grade: float
    category_grades: CategoryGrades
    grade_weights: GradeWeights
    letter_grade: str
