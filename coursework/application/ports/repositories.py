"""
Repository 포트: 영속화 추상화 (Django/ORM 미사용)

모든 메서드는 도메인 dataclass 를 반환한다. select_for_update/atomic 은 어댑터에서 수행.
"""
from __future__ import annotations

import uuid
from abc import abstractmethod
from datetime import datetime
from typing import Iterable, Optional, Protocol

from coursework.domain.certificates.entities import Certificate
from coursework.domain.courses.entities import (
    CourseRecord,
    EnrollmentRecord,
    LessonRecord,
    ModuleRecord,
    StudentRecord,
)
from coursework.domain.grading.entities import AssignmentRecord, GradeWeights, SubmissionRecord
from coursework.domain.grading.weights import WeightsInput
from coursework.domain.progress.entities import LessonProgress


class CourseRepository(Protocol):

    @abstractmethod
    def get(self, course_id: uuid.UUID) -> Optional[CourseRecord]:
        ...

    @abstractmethod
    def get_owned(self, course_id: uuid.UUID, instructor_id: uuid.UUID) -> Optional[CourseRecord]:
        """instructor 소유 코스만. 없거나 소유자가 아니면 None (구분하지 않음)."""
        ...


class StudentRepository(Protocol):

    @abstractmethod
    def get(self, student_id: uuid.UUID) -> Optional[StudentRecord]:
        ...

    @abstractmethod
    def get_many(self, student_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, StudentRecord]:
        ...


class EnrollmentRepository(Protocol):

    @abstractmethod
    def get(self, course_id: uuid.UUID, student_id: uuid.UUID) -> Optional[EnrollmentRecord]:
        """상태와 무관하게 조회."""
        ...

    @abstractmethod
    def list_active(self, course_id: uuid.UUID) -> list[EnrollmentRecord]:
        ...


class LessonRepository(Protocol):

    @abstractmethod
    def get(self, lesson_id: uuid.UUID) -> Optional[LessonRecord]:
        ...

    @abstractmethod
    def list_module_lessons(self, module_id: uuid.UUID) -> list[LessonRecord]:
        """게시된 레슨만, order_index 오름차순."""
        ...

    @abstractmethod
    def list_modules(self, course_id: uuid.UUID) -> list[ModuleRecord]:
        """게시된 모듈만, order_index 오름차순."""
        ...

    @abstractmethod
    def list_course_lessons(self, course_id: uuid.UUID) -> list[LessonRecord]:
        """게시된 모듈의 게시된 레슨."""
        ...


class AssignmentRepository(Protocol):

    @abstractmethod
    def list_published(self, course_id: uuid.UUID) -> list[AssignmentRecord]:
        """코스의 게시된 과제 (module order, created_at 순)."""
        ...


class SubmissionRepository(Protocol):

    @abstractmethod
    def list_for_student(
        self, student_id: uuid.UUID, assignment_ids: Iterable[uuid.UUID]
    ) -> list[SubmissionRecord]:
        ...


class LessonProgressRepository(Protocol):

    @abstractmethod
    def get(self, student_id: uuid.UUID, lesson_id: uuid.UUID) -> Optional[LessonProgress]:
        ...

    @abstractmethod
    def get_for_update(self, student_id: uuid.UUID, lesson_id: uuid.UUID) -> Optional[LessonProgress]:
        """row lock. 호출자가 UoW 트랜잭션 안에 있어야 함."""
        ...

    @abstractmethod
    def list_for_lessons(
        self, student_id: uuid.UUID, lesson_ids: Iterable[uuid.UUID]
    ) -> list[LessonProgress]:
        ...

    @abstractmethod
    def save(self, progress: LessonProgress) -> LessonProgress:
        """(student, lesson) 기준 upsert."""
        ...


class GradeWeightsRepository(Protocol):

    @abstractmethod
    def get_or_create(self, course_id: uuid.UUID, defaults: WeightsInput) -> GradeWeights:
        """없으면 defaults 로 생성 (지연 생성)."""
        ...

    @abstractmethod
    def save(self, course_id: uuid.UUID, weights: WeightsInput) -> GradeWeights:
        """row lock 후 upsert. 검증된 값만 전달할 것."""
        ...


class CertificateRepository(Protocol):

    @abstractmethod
    def get(self, certificate_id: uuid.UUID) -> Optional[Certificate]:
        ...

    @abstractmethod
    def get_for_student(self, course_id: uuid.UUID, student_id: uuid.UUID) -> Optional[Certificate]:
        ...

    @abstractmethod
    def get_for_update(self, course_id: uuid.UUID, student_id: uuid.UUID) -> Optional[Certificate]:
        ...

    @abstractmethod
    def list_for_course(self, course_id: uuid.UUID) -> dict[uuid.UUID, Certificate]:
        """student_id -> Certificate."""
        ...

    @abstractmethod
    def list_for_student(self, student_id: uuid.UUID) -> list[Certificate]:
        """issued_at 내림차순."""
        ...

    @abstractmethod
    def create(
        self,
        *,
        course_id: uuid.UUID,
        student_id: uuid.UUID,
        issued_by: uuid.UUID,
        final_grade: float,
        issued_at: datetime,
    ) -> Certificate:
        """
        insert. (course, student) unique 위반이면 ConflictError.
        동시 발급 경합은 이 제약으로만 해결한다.
        """
        ...

    @abstractmethod
    def save(self, certificate: Certificate) -> Certificate:
        """상태 변경 저장 (취소). 삭제는 없음."""
        ...
