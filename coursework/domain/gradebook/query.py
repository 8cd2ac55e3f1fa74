"""
성적부 조회 엔진: filter → sort → paginate (순수 파이썬)

- total / class_average 는 필터 결과 전체 기준 (offset/limit 와 무관)
- 정렬 키 동점은 student_id 순서로 고정
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Iterable, Sequence

from coursework.domain.gradebook.entities import (
    MAX_LIMIT,
    AssignmentGrade,
    GradebookQuery,
    GradebookRow,
    GradebookSortBy,
    InstructorGradebook,
    SortOrder,
    SubmissionStatusFilter,
)
from coursework.domain.grading.aggregator import latest_submissions
from coursework.domain.grading.entities import AssignmentRecord, SubmissionRecord
from coursework.domain.shared.errors import ValidationError
from coursework.domain.shared.numbers import percent, round_half_up

logger = logging.getLogger(__name__)

_SORT_KEYS: dict[GradebookSortBy, Callable[[GradebookRow], object]] = {
    GradebookSortBy.NAME: lambda r: r.full_name.lower(),
    GradebookSortBy.STUDENT_NUMBER: lambda r: r.student_number or "",
    GradebookSortBy.EMAIL: lambda r: (r.email or "").lower(),
    GradebookSortBy.OVERALL_GRADE: lambda r: r.overall_grade,
    GradebookSortBy.ASSIGNMENT_GRADE: lambda r: r.assignment_average,
    GradebookSortBy.ACTIVITY_GRADE: lambda r: r.activity_average,
    GradebookSortBy.EXAM_GRADE: lambda r: r.exam_average,
}


def validate_query(query: GradebookQuery, max_limit: int = MAX_LIMIT) -> GradebookQuery:
    errors: list[str] = []
    if query.offset < 0:
        errors.append("offset must be >= 0")
    if query.limit < 1 or query.limit > max_limit:
        errors.append(f"limit must be between 1 and {max_limit}")
    for name in ("min_score", "max_score"):
        value = getattr(query, name)
        if value is not None and not 0 <= value <= 100:
            errors.append(f"{name} must be between 0 and 100")
    if (
        query.min_score is not None
        and query.max_score is not None
        and query.min_score > query.max_score
    ):
        errors.append("min_score must not exceed max_score")
    if errors:
        raise ValidationError("Invalid gradebook query: " + "; ".join(errors), errors=errors)
    return query


class GradebookQueryEngine:

    def matches(self, row: GradebookRow, query: GradebookQuery) -> bool:
        if query.section and (row.section or "") != query.section:
            return False

        if query.search:
            needle = query.search.strip().lower()
            haystack = (row.first_name, row.last_name, row.email)
            if needle and not any(needle in (v or "").lower() for v in haystack):
                return False

        if query.min_score is not None and row.overall_grade < query.min_score:
            return False
        if query.max_score is not None and row.overall_grade > query.max_score:
            return False

        if query.submission_status == SubmissionStatusFilter.ALL_SUBMITTED and row.has_missing:
            return False
        if query.submission_status == SubmissionStatusFilter.HAS_MISSING and not row.has_missing:
            return False

        return True

    def sort(
        self,
        rows: Iterable[GradebookRow],
        sort_by: GradebookSortBy = GradebookSortBy.NAME,
        sort_order: SortOrder = SortOrder.ASC,
    ) -> list[GradebookRow]:
        key = _SORT_KEYS.get(sort_by, _SORT_KEYS[GradebookSortBy.NAME])
        ordered = sorted(rows, key=lambda r: str(r.student_id))
        # sort 는 stable: reverse=True 여도 동점 행은 student_id 순서 유지
        return sorted(ordered, key=key, reverse=sort_order == SortOrder.DESC)

    def run(
        self,
        rows: Sequence[GradebookRow],
        query: GradebookQuery,
        *,
        total_assignments: int,
    ) -> InstructorGradebook:
        filtered = []
        for row in rows:
            if self.matches(row, query):
                filtered.append(row)
            else:
                logger.debug("[gradebook] filtered out student=%s", row.student_id)

        ordered = self.sort(filtered, query.sort_by, query.sort_order)

        total = len(ordered)
        page = ordered[query.offset : query.offset + query.limit]
        class_average = (
            round_half_up(sum(r.overall_grade for r in ordered) / total, 2) if total else 0.0
        )

        return InstructorGradebook(
            rows=page,
            total=total,
            offset=query.offset,
            limit=query.limit,
            total_pages=math.ceil(total / query.limit) if total else 0,
            current_page=query.offset // query.limit + 1,
            class_average=class_average,
            total_assignments=total_assignments,
        )


def assignment_grades(
    assignments: Iterable[AssignmentRecord],
    submissions: Iterable[SubmissionRecord],
) -> list[AssignmentGrade]:
    """학생 성적부의 과제별 행. 미제출은 status=not_submitted."""
    by_assignment = latest_submissions(submissions)
    rows = []
    for a in assignments:
        if not a.is_published:
            continue
        s = by_assignment.get(a.id)
        is_late = bool(
            s is not None
            and a.due_date is not None
            and s.submitted_at is not None
            and s.submitted_at > a.due_date
        )
        rows.append(
            AssignmentGrade(
                id=a.id,
                title=a.title,
                category=a.category.value,
                module_title=a.module_title or "Unknown",
                max_score=a.points,
                score=s.score if s else None,
                percentage=percent(s.score, s.max_score) if s else None,
                due_date=a.due_date,
                submitted_at=s.submitted_at if s else None,
                status=s.status if s else "not_submitted",
                is_late=is_late,
            )
        )
    return rows
