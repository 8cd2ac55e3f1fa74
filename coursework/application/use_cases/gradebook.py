"""
성적부 Use Case: 강사용 (필터/정렬/페이지) / 학생용 (과제별 상세)
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from coursework.application.ports.unit_of_work import UnitOfWork
from coursework.application.use_cases.grading import (
    GradingService,
    get_course_or_404,
    get_owned_course_or_404,
)
from coursework.domain.courses.entities import StudentRecord
from coursework.domain.gradebook.entities import (
    MAX_LIMIT,
    GradebookQuery,
    GradebookRow,
    InstructorGradebook,
    StudentGradebook,
)
from coursework.domain.gradebook.query import (
    GradebookQueryEngine,
    assignment_grades,
    validate_query,
)
from coursework.domain.grading.entities import GradeSummary
from coursework.domain.grading.letters import FAILING_LETTER
from coursework.domain.shared.errors import NotFoundError
from coursework.domain.shared.ids import parse_uuids

logger = logging.getLogger(__name__)


def _row(student: StudentRecord, summary: Optional[GradeSummary], total_assignments: int) -> GradebookRow:
    """summary=None 이면 0점 행 (학생별 계산 실패)."""
    if summary is None:
        return GradebookRow(
            student_id=student.id,
            first_name=student.first_name,
            last_name=student.last_name,
            email=student.email,
            student_number=student.student_number,
            section=student.section,
            overall_grade=0.0,
            letter_grade=FAILING_LETTER,
            assignment_average=0.0,
            activity_average=0.0,
            exam_average=0.0,
            total_submissions=0,
            total_assignments=total_assignments,
        )

    grades = summary.category_grades
    return GradebookRow(
        student_id=student.id,
        first_name=student.first_name,
        last_name=student.last_name,
        email=student.email,
        student_number=student.student_number,
        section=student.section,
        overall_grade=summary.overall_grade,
        letter_grade=summary.letter_grade,
        assignment_average=grades.assignment.average,
        activity_average=grades.activity.average,
        exam_average=grades.exam.average,
        total_submissions=grades.total_submitted,
        total_assignments=total_assignments,
        last_submission=grades.last_submission_at,
    )


class GradebookService:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        *,
        grading: GradingService,
        engine: Optional[GradebookQueryEngine] = None,
        max_limit: int = MAX_LIMIT,
    ) -> None:
        self._uow_factory = uow_factory
        self._grading = grading
        self._engine = engine or GradebookQueryEngine()
        self._max_limit = max_limit

    def get_instructor_gradebook(
        self,
        course_id: Any,
        instructor_id: Any,
        query: Optional[GradebookQuery] = None,
    ) -> InstructorGradebook:
        ids = parse_uuids({"course ID": course_id, "instructor ID": instructor_id})
        query = validate_query(query or GradebookQuery(), self._max_limit)

        with self._uow_factory() as uow:
            course = get_owned_course_or_404(uow, ids["course ID"], ids["instructor ID"])
            assignments = uow.assignments.list_published(course.id)
            weights = self._grading.weights_in(uow, course.id)
            enrollments = uow.enrollments.list_active(course.id)
            students = uow.students.get_many([e.student_id for e in enrollments])

            rows: list[GradebookRow] = []
            for enrollment in enrollments:
                student = students.get(enrollment.student_id)
                if student is None:
                    logger.warning(
                        "[gradebook] enrolled student missing course=%s student=%s",
                        course.id,
                        enrollment.student_id,
                    )
                    continue
                try:
                    with uow.savepoint():
                        summary = self._grading.summarize_in(
                            uow, course.id, student.id, assignments=assignments, weights=weights
                        )
                except Exception:
                    logger.warning(
                        "[gradebook] grade calculation failed course=%s student=%s",
                        course.id,
                        student.id,
                        exc_info=True,
                    )
                    summary = None
                rows.append(_row(student, summary, len(assignments)))

        return self._engine.run(rows, query, total_assignments=len(assignments))

    def get_student_gradebook(self, course_id: Any, student_id: Any) -> StudentGradebook:
        ids = parse_uuids({"course ID": course_id, "student ID": student_id})
        cid, sid = ids["course ID"], ids["student ID"]

        with self._uow_factory() as uow:
            course = get_course_or_404(uow, cid)
            # 상태 무관 수강 이력이 있으면 조회 가능 (수료/중도 포함)
            if uow.enrollments.get(course.id, sid) is None:
                raise NotFoundError("Course not found or student not enrolled")
            student = uow.students.get(sid)
            if student is None:
                raise NotFoundError("Student not found")

            assignments = uow.assignments.list_published(course.id)
            submissions = uow.submissions.list_for_student(sid, [a.id for a in assignments])
            summary = self._grading.summarize_in(uow, course.id, sid, assignments=assignments)

        return StudentGradebook(
            student=student,
            grade_summary=summary,
            assignments=assignment_grades(assignments, submissions),
        )
