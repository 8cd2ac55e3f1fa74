import uuid
from datetime import datetime, timezone

import pytest

from coursework.domain.certificates.eligibility import (
    REASON_NO_CONTENT,
    REASON_NO_GRADES,
    REASON_NO_PASSING_GRADE,
    REASON_NOT_ENROLLED,
    REASON_PROGRESS_UNAVAILABLE,
    CertificateEligibilityEvaluator,
    course_progress,
)
from coursework.domain.certificates.entities import Certificate, CertificateStatus
from coursework.domain.progress.entities import CompletionCounts
from coursework.domain.shared.errors import ConflictError

T0 = datetime(2026, 3, 1, tzinfo=timezone.utc)

FULL = CompletionCounts(total_lessons=4, completed_lessons=4, total_assignments=2, completed_assignments=2)
HALF = CompletionCounts(total_lessons=2, completed_lessons=1, total_assignments=2, completed_assignments=1)
EMPTY = CompletionCounts(0, 0, 0, 0)


def _certificate(status=CertificateStatus.ACTIVE):
    return Certificate(
        id=uuid.uuid4(),
        course_id=uuid.uuid4(),
        student_id=uuid.uuid4(),
        issued_by=uuid.uuid4(),
        issued_at=T0,
        final_grade=88.0,
        status=status,
    )


def _evaluate(**overrides):
    kwargs = dict(
        is_enrolled=True,
        passing_grade=75,
        overall_grade=80.0,
        completion=FULL,
        existing_certificate=None,
    )
    kwargs.update(overrides)
    return CertificateEligibilityEvaluator().evaluate(**kwargs)


def test_eligible_when_every_condition_holds():
    result = _evaluate()
    assert result.is_eligible
    assert result.ineligibility_reasons == []
    assert result.overall_grade == 80.0
    assert result.course_progress == 100
    assert result.meets_grade_requirement
    assert result.is_course_completed


def test_grade_exactly_at_passing_grade_is_enough():
    assert _evaluate(overall_grade=75.0).is_eligible


def test_all_failing_reasons_are_reported_together():
    result = _evaluate(overall_grade=70.0, completion=HALF)
    assert not result.is_eligible
    assert result.ineligibility_reasons == [
        "Grade 70.00% is below passing grade of 75%",
        "Course completion is 50%, must be 100%",
    ]


def test_not_enrolled_and_no_passing_grade():
    result = _evaluate(is_enrolled=False, passing_grade=None)
    assert not result.is_eligible
    assert result.ineligibility_reasons == [REASON_NOT_ENROLLED, REASON_NO_PASSING_GRADE]
    assert result.overall_grade == 0.0


def test_no_passing_grade_is_reported_with_grade_and_progress():
    result = _evaluate(passing_grade=None)
    assert not result.is_eligible
    assert result.ineligibility_reasons == [REASON_NO_PASSING_GRADE]
    assert not result.has_passing_grade


def test_fractional_passing_grade_in_reason():
    result = _evaluate(passing_grade=75.5, overall_grade=75.25)
    assert "Grade 75.25% is below passing grade of 75.5%" in result.ineligibility_reasons


def test_course_without_content():
    result = _evaluate(completion=EMPTY)
    assert result.ineligibility_reasons == [REASON_NO_CONTENT]
    assert result.course_progress == 0


def test_calculation_failures_become_reasons():
    result = _evaluate(overall_grade=None, completion=None)
    assert not result.is_eligible
    assert result.ineligibility_reasons == [REASON_NO_GRADES, REASON_PROGRESS_UNAVAILABLE]


@pytest.mark.parametrize("status", [CertificateStatus.ACTIVE, CertificateStatus.REVOKED])
def test_existing_certificate_blocks_eligibility(status):
    existing = _certificate(status)
    result = _evaluate(existing_certificate=existing)
    assert not result.is_eligible
    assert result.ineligibility_reasons == [
        f"Certificate already issued (status: {status.value})"
    ]
    assert result.existing_certificate is existing


def test_course_progress_combines_lessons_and_assignments():
    assert course_progress(HALF) == 50
    assert course_progress(CompletionCounts(3, 2, 1, 1)) == 75
    assert course_progress(EMPTY) == 0


def test_revoke_sets_audit_fields():
    revoker = uuid.uuid4()
    revoked = _certificate().revoke(revoked_by=revoker, reason="Academic misconduct", now=T0)
    assert revoked.is_revoked
    assert revoked.revoked_by == revoker
    assert revoked.revoked_at == T0
    assert revoked.revocation_reason == "Academic misconduct"
    assert revoked.final_grade == 88.0


def test_revoked_certificate_cannot_be_revoked_again():
    revoked = _certificate(CertificateStatus.REVOKED)
    with pytest.raises(ConflictError):
        revoked.revoke(revoked_by=uuid.uuid4(), reason="again", now=T0)
