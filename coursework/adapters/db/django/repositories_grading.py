"""
Assignment / Submission / CourseGradeWeights: Django ORM 구현
"""
from __future__ import annotations

import uuid
from typing import Iterable

from coursework.domain.grading.entities import (
    AssignmentRecord,
    Category,
    GradeWeights,
    SubmissionRecord,
)
from coursework.domain.grading.weights import WeightsInput


def _assignment_to_entity(m) -> AssignmentRecord:
    return AssignmentRecord(
        id=m.id,
        module_id=m.module_id,
        title=m.title,
        category=Category(m.assignment_type),
        points=m.points,
        is_published=m.is_published,
        due_date=m.due_date,
        module_title=m.module.title if m.module_id else "",
        created_at=m.created_at,
    )


def _submission_to_entity(m) -> SubmissionRecord:
    return SubmissionRecord(
        assignment_id=m.assignment_id,
        student_id=m.student_id,
        score=float(m.score or 0),
        max_score=float(m.max_score or 0),
        submitted_at=m.submitted_at,
        status=m.status,
    )


def _weights_to_entity(m) -> GradeWeights:
    return GradeWeights(
        course_id=m.course_id,
        assignment_weight=m.assignment_weight,
        activity_weight=m.activity_weight,
        exam_weight=m.exam_weight,
        id=m.id,
        created_at=m.created_at,
        updated_at=m.updated_at,
    )


class DjangoAssignmentRepository:

    def list_published(self, course_id: uuid.UUID) -> list[AssignmentRecord]:
        from apps.domains.assignments.models import Assignment
        qs = (
            Assignment.objects.select_related("module")
            .filter(module__course_id=course_id, is_published=True)
            .order_by("module__order_index", "created_at", "id")
        )
        return [_assignment_to_entity(m) for m in qs]


class DjangoSubmissionRepository:

    def list_for_student(
        self, student_id: uuid.UUID, assignment_ids: Iterable[uuid.UUID]
    ) -> list[SubmissionRecord]:
        from apps.domains.assignments.models import Submission
        ids = list(assignment_ids)
        if not ids:
            return []
        qs = Submission.objects.filter(student_id=student_id, assignment_id__in=ids)
        return [_submission_to_entity(m) for m in qs]


class DjangoGradeWeightsRepository:

    def get_or_create(self, course_id: uuid.UUID, defaults: WeightsInput) -> GradeWeights:
        from apps.domains.grading.models import CourseGradeWeights
        m, _ = CourseGradeWeights.objects.get_or_create(
            course_id=course_id,
            defaults={
                "assignment_weight": defaults.assignment_weight,
                "activity_weight": defaults.activity_weight,
                "exam_weight": defaults.exam_weight,
            },
        )
        return _weights_to_entity(m)

    def save(self, course_id: uuid.UUID, weights: WeightsInput) -> GradeWeights:
        """
        호출자가 UoW 트랜잭션 내에 있어야 함.
        update_or_create 가 select_for_update 로 row 를 잠그고,
        동시에 생성된 row 와 부딪히면 다시 조회해서 갱신한다.
        """
        from apps.domains.grading.models import CourseGradeWeights
        m, _ = CourseGradeWeights.objects.update_or_create(
            course_id=course_id,
            defaults={
                "assignment_weight": weights.assignment_weight,
                "activity_weight": weights.activity_weight,
                "exam_weight": weights.exam_weight,
            },
        )
        return _weights_to_entity(m)
