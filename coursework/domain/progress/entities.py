"""
레슨 진행 엔티티: 순수 파이썬

LessonState 는 저장하지 않는다. 이전 레슨의 is_completed 로부터 계산.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class LessonState(str, Enum):
    LOCKED = "locked"
    UNLOCKED_INCOMPLETE = "unlocked_incomplete"
    COMPLETED = "completed"


@dataclass(frozen=True)
class LessonProgress:
    student_id: uuid.UUID
    lesson_id: uuid.UUID
    completion_percentage: int = 0
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    last_accessed: Optional[datetime] = None
    id: Optional[uuid.UUID] = None


@dataclass(frozen=True)
class LessonCompletion:
    """complete_lesson 결과."""
    lesson_id: uuid.UUID
    completed: bool
    completion_percentage: int
    next_lesson_id: Optional[uuid.UUID]
    next_lesson_unlocked: bool
    completed_at: Optional[datetime] = None


@dataclass(frozen=True)
class CompletionCounts:
    """인증서 판정용 진행 카운트 (레슨 + 제출한 과제)."""
    total_lessons: int
    completed_lessons: int
    total_assignments: int
    completed_assignments: int

    @property
    def total_items(self) -> int:
        return self.total_lessons + self.total_assignments

    @property
    def completed_items(self) -> int:
        return self.completed_lessons + self.completed_assignments


@dataclass(frozen=True)
class LessonProgressRow:
    id: uuid.UUID
    title: str
    order_index: int
    estimated_duration: Optional[int]
    state: LessonState
    completion_percentage: int
    completed_at: Optional[datetime]
    last_accessed: Optional[datetime]

    @property
    def is_completed(self) -> bool:
        return self.state == LessonState.COMPLETED

    @property
    def is_unlocked(self) -> bool:
        return self.state != LessonState.LOCKED


@dataclass(frozen=True)
class ModuleProgressView:
    id: uuid.UUID
    title: str
    order_index: int
    lessons: list[LessonProgressRow] = field(default_factory=list)
    total_lessons: int = 0
    completed_lessons: int = 0
    completion_percentage: int = 0
    total_duration: int = 0


@dataclass(frozen=True)
class AssignmentProgressRow:
    id: uuid.UUID
    title: str
    category: str
    points: int
    due_date: Optional[datetime]
    is_submitted: bool
    score: Optional[float]
    submitted_at: Optional[datetime]


@dataclass(frozen=True)
class CourseProgressView:
    course_id: uuid.UUID
    title: str
    modules: list[ModuleProgressView]
    assignments: list[AssignmentProgressRow]
    total_modules: int
    completed_modules: int
    total_lessons: int
    completed_lessons: int
    course_completion_percentage: int
    total_estimated_duration: int
    enrolled_at: Optional[datetime] = None

    def completion_counts(self) -> CompletionCounts:
        return CompletionCounts(
            total_lessons=self.total_lessons,
            completed_lessons=self.completed_lessons,
            total_assignments=len(self.assignments),
            completed_assignments=sum(1 for a in self.assignments if a.is_submitted),
        )
