"""
인증서 발급 자격 판정: 순수 파이썬

자격 = 수강중 ∧ 합격 기준 설정 ∧ 합격 점수 이상 ∧ 진행률 100% ∧ 기존 인증서 없음

실패한 조건은 모두 사유로 남긴다 (첫 번째 실패에서 멈추지 않음).
성적/진행률 계산 자체가 실패한 경우(None)도 예외 대신 사유로 보고한다.
"""
from __future__ import annotations

from typing import Optional

from coursework.domain.certificates.entities import Certificate, Eligibility
from coursework.domain.progress.entities import CompletionCounts
from coursework.domain.shared.numbers import whole_percent

REASON_NOT_ENROLLED = "Student is not enrolled in the course"
REASON_NO_PASSING_GRADE = "Course does not have a passing grade configured"
REASON_NO_GRADES = "No grades available"
REASON_NO_CONTENT = "No course content available"
REASON_PROGRESS_UNAVAILABLE = "Unable to calculate course progress"


def course_progress(counts: CompletionCounts) -> int:
    """(완료 레슨 + 제출 과제) / (전체 레슨 + 전체 과제) × 100, 정수."""
    return whole_percent(counts.completed_items, counts.total_items)


def _format_grade(value: float) -> str:
    return f"{value:g}" if float(value).is_integer() else f"{value}"


class CertificateEligibilityEvaluator:

    def evaluate(
        self,
        *,
        is_enrolled: bool,
        passing_grade: Optional[float],
        overall_grade: Optional[float],
        completion: Optional[CompletionCounts],
        existing_certificate: Optional[Certificate] = None,
    ) -> Eligibility:
        """
        overall_grade=None : 성적 계산 실패
        completion=None    : 진행률 계산 실패
        (수강중이 아니면 두 값은 보지 않는다)
        """
        reasons: list[str] = []
        has_passing_grade = passing_grade is not None

        grade = 0.0
        progress = 0
        meets_grade = False
        completed = False

        if is_enrolled:
            if overall_grade is None:
                reasons.append(REASON_NO_GRADES)
            else:
                grade = float(overall_grade)
                if has_passing_grade:
                    meets_grade = grade >= float(passing_grade)
                    if not meets_grade:
                        reasons.append(
                            f"Grade {grade:.2f}% is below passing grade of "
                            f"{_format_grade(passing_grade)}%"
                        )

            if completion is None:
                reasons.append(REASON_PROGRESS_UNAVAILABLE)
            elif completion.total_items <= 0:
                reasons.append(REASON_NO_CONTENT)
            else:
                progress = course_progress(completion)
                completed = progress == 100
                if not completed:
                    reasons.append(f"Course completion is {progress}%, must be 100%")
        else:
            reasons.append(REASON_NOT_ENROLLED)

        if not has_passing_grade:
            reasons.append(REASON_NO_PASSING_GRADE)

        if existing_certificate is not None:
            reasons.append(
                f"Certificate already issued (status: {existing_certificate.status.value})"
            )

        eligible = (
            is_enrolled
            and has_passing_grade
            and meets_grade
            and completed
            and existing_certificate is None
        )

        return Eligibility(
            is_eligible=eligible,
            overall_grade=grade,
            passing_grade=passing_grade,
            course_progress=progress,
            is_enrolled=is_enrolled,
            has_passing_grade=has_passing_grade,
            meets_grade_requirement=meets_grade,
            is_course_completed=completed,
            ineligibility_reasons=reasons,
            existing_certificate=existing_certificate,
        )
