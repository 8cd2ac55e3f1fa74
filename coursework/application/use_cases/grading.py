"""
성적 Use Case: 도메인/포트만 사용 (Django 미사용)

- 카테고리 집계 / 가중 평균 / 등급은 매 요청 원천 데이터에서 재계산
- 가중치는 첫 조회 시 기본값(40/30/30)으로 지연 생성
- 가중치 변경: 검증 → (UoW 안에서) 소유권 확인 → row lock 후 저장
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, Mapping, Optional, Sequence

from coursework.application.ports.unit_of_work import UnitOfWork
from coursework.domain.courses.entities import CourseRecord
from coursework.domain.grading.aggregator import CategoryGradeAggregator
from coursework.domain.grading.calculator import WeightedGradeCalculator
from coursework.domain.grading.entities import (
    AssignmentRecord,
    CategoryGrades,
    GradeSummary,
    GradeWeights,
)
from coursework.domain.grading.weights import (
    WeightsInput,
    default_weights_input,
    validate_grade_weights,
)
from coursework.domain.shared.errors import NotFoundError
from coursework.domain.shared.ids import parse_uuid, parse_uuids

logger = logging.getLogger(__name__)

COURSE_NOT_FOUND = "Course not found"


def get_course_or_404(uow: UnitOfWork, course_id: uuid.UUID) -> CourseRecord:
    course = uow.courses.get(course_id)
    if course is None:
        raise NotFoundError(COURSE_NOT_FOUND)
    return course


def get_owned_course_or_404(
    uow: UnitOfWork, course_id: uuid.UUID, instructor_id: uuid.UUID
) -> CourseRecord:
    """없는 코스와 남의 코스는 같은 NotFound (존재 여부 노출 방지)."""
    course = uow.courses.get_owned(course_id, instructor_id)
    if course is None:
        raise NotFoundError(COURSE_NOT_FOUND)
    return course


class GradingService:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        *,
        aggregator: Optional[CategoryGradeAggregator] = None,
        calculator: Optional[WeightedGradeCalculator] = None,
        default_weights: Optional[Mapping[str, int]] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._aggregator = aggregator or CategoryGradeAggregator()
        self._calculator = calculator or WeightedGradeCalculator()
        self._defaults: WeightsInput = default_weights_input(default_weights)

    # ------------------------------------------------------------------
    # UoW 내부 헬퍼 (gradebook / certificates 에서 재사용)
    # ------------------------------------------------------------------

    def weights_in(self, uow: UnitOfWork, course_id: uuid.UUID) -> GradeWeights:
        return uow.grade_weights.get_or_create(course_id, self._defaults)

    def category_grades_in(
        self,
        uow: UnitOfWork,
        course_id: uuid.UUID,
        student_id: uuid.UUID,
        *,
        assignments: Optional[Sequence[AssignmentRecord]] = None,
    ) -> CategoryGrades:
        if assignments is None:
            assignments = uow.assignments.list_published(course_id)
        submissions = uow.submissions.list_for_student(
            student_id, [a.id for a in assignments]
        )
        return self._aggregator.aggregate(assignments, submissions)

    def summarize_in(
        self,
        uow: UnitOfWork,
        course_id: uuid.UUID,
        student_id: uuid.UUID,
        *,
        assignments: Optional[Sequence[AssignmentRecord]] = None,
        weights: Optional[GradeWeights] = None,
    ) -> GradeSummary:
        grades = self.category_grades_in(uow, course_id, student_id, assignments=assignments)
        if weights is None:
            weights = self.weights_in(uow, course_id)
        return self._calculator.summarize(grades, weights)

    # ------------------------------------------------------------------
    # operations
    # ------------------------------------------------------------------

    def calculate_category_grades(self, course_id: Any, student_id: Any) -> CategoryGrades:
        ids = parse_uuids({"course ID": course_id, "student ID": student_id})
        with self._uow_factory() as uow:
            course = get_course_or_404(uow, ids["course ID"])
            return self.category_grades_in(uow, course.id, ids["student ID"])

    def calculate_overall_grade(self, course_id: Any, student_id: Any) -> GradeSummary:
        ids = parse_uuids({"course ID": course_id, "student ID": student_id})
        with self._uow_factory() as uow:
            course = get_course_or_404(uow, ids["course ID"])
            return self.summarize_in(uow, course.id, ids["student ID"])

    def get_course_grade_weights(self, course_id: Any) -> GradeWeights:
        cid = parse_uuid(course_id, "course ID")
        with self._uow_factory() as uow:
            course = get_course_or_404(uow, cid)
            return self.weights_in(uow, course.id)

    def update_course_grade_weights(
        self,
        course_id: Any,
        instructor_id: Any,
        weights: Mapping[str, Any] | WeightsInput,
    ) -> GradeWeights:
        ids = parse_uuids({"course ID": course_id, "instructor ID": instructor_id})
        # 잘못된 값은 트랜잭션을 열기 전에 거절
        validated = validate_grade_weights(weights)

        with self._uow_factory() as uow:
            course = get_owned_course_or_404(uow, ids["course ID"], ids["instructor ID"])
            saved = uow.grade_weights.save(course.id, validated)

        logger.info(
            "[grading] weights updated course=%s by=%s assignment=%s activity=%s exam=%s",
            saved.course_id,
            ids["instructor ID"],
            saved.assignment_weight,
            saved.activity_weight,
            saved.exam_weight,
        )
        return saved
