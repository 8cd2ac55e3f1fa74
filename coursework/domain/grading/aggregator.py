"""
카테고리별 성적 집계 (assignment / activity / exam)

average = Σscore / Σmax_score × 100 (소수 2자리), 제출이 없으면 0.
"""
from __future__ import annotations

import uuid
from typing import Iterable

from coursework.domain.grading.entities import (
    CATEGORIES,
    AssignmentRecord,
    CategoryGrade,
    CategoryGrades,
    SubmissionRecord,
)
from coursework.domain.shared.numbers import percent


def latest_submissions(
    submissions: Iterable[SubmissionRecord],
) -> dict[uuid.UUID, SubmissionRecord]:
    """assignment_id -> 최신 제출 1건. 같은 과제에 여러 행이 와도 중복 집계하지 않는다."""
    latest: dict[uuid.UUID, SubmissionRecord] = {}
    for s in submissions:
        current = latest.get(s.assignment_id)
        if current is None:
            latest[s.assignment_id] = s
            continue
        if s.submitted_at is not None and (
            current.submitted_at is None or s.submitted_at > current.submitted_at
        ):
            latest[s.assignment_id] = s
    return latest


class CategoryGradeAggregator:
    """순수 계산기. 부수효과 없음."""

    def aggregate(
        self,
        assignments: Iterable[AssignmentRecord],
        submissions: Iterable[SubmissionRecord],
    ) -> CategoryGrades:
        by_assignment = latest_submissions(submissions)

        buckets = {
            c: {"total": 0, "submitted": 0, "score": 0.0, "max_score": 0.0}
            for c in CATEGORIES
        }
        last_submission_at = None

        for a in assignments:
            if not a.is_published:
                continue
            bucket = buckets.get(a.category)
            if bucket is None:
                continue
            bucket["total"] += 1

            s = by_assignment.get(a.id)
            if s is None:
                continue
            bucket["submitted"] += 1
            bucket["score"] += float(s.score or 0)
            bucket["max_score"] += float(s.max_score or 0)
            if s.submitted_at is not None and (
                last_submission_at is None or s.submitted_at > last_submission_at
            ):
                last_submission_at = s.submitted_at

        grades = {
            c.value: CategoryGrade(
                average=percent(b["score"], b["max_score"]),
                submitted=b["submitted"],
                total=b["total"],
            )
            for c, b in buckets.items()
        }
        return CategoryGrades(last_submission_at=last_submission_at, **grades)
