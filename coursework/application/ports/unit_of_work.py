"""
Unit of Work 포트: 트랜잭션 경계 (Django 미사용)
"""
from __future__ import annotations

from typing import ContextManager, Protocol

from coursework.application.ports.repositories import (
    AssignmentRepository,
    CertificateRepository,
    CourseRepository,
    EnrollmentRepository,
    GradeWeightsRepository,
    LessonProgressRepository,
    LessonRepository,
    StudentRepository,
    SubmissionRepository,
)


class UnitOfWork(Protocol):
    """트랜잭션 단위. __enter__에서 시작, __exit__에서 commit/rollback."""

    @property
    def courses(self) -> CourseRepository:
        ...

    @property
    def students(self) -> StudentRepository:
        ...

    @property
    def enrollments(self) -> EnrollmentRepository:
        ...

    @property
    def lessons(self) -> LessonRepository:
        ...

    @property
    def assignments(self) -> AssignmentRepository:
        ...

    @property
    def submissions(self) -> SubmissionRepository:
        ...

    @property
    def lesson_progress(self) -> LessonProgressRepository:
        ...

    @property
    def grade_weights(self) -> GradeWeightsRepository:
        ...

    @property
    def certificates(self) -> CertificateRepository:
        ...

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...

    def savepoint(self) -> ContextManager[None]:
        """목록 계산의 학생 단위 격리. 실패해도 바깥 트랜잭션은 계속 쓸 수 있다."""
        ...
