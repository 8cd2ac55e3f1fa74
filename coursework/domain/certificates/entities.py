"""
수료 인증서 엔티티: 순수 파이썬

불변식
- (course, student) 당 인증서 1건. 취소(revoked)해도 슬롯은 비지 않는다.
- final_grade 는 발급 시점 스냅샷. 이후 재계산하지 않는다.
- revoked 는 최종 상태.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from coursework.domain.shared.errors import ConflictError


class CertificateStatus(str, Enum):
    ACTIVE = "active"
    REVOKED = "revoked"


@dataclass(frozen=True)
class Certificate:
    id: uuid.UUID
    course_id: uuid.UUID
    student_id: uuid.UUID
    issued_by: uuid.UUID
    issued_at: datetime
    final_grade: float
    status: CertificateStatus = CertificateStatus.ACTIVE
    revoked_at: Optional[datetime] = None
    revoked_by: Optional[uuid.UUID] = None
    revocation_reason: Optional[str] = None

    @property
    def is_revoked(self) -> bool:
        return self.status == CertificateStatus.REVOKED

    def revoke(self, *, revoked_by: uuid.UUID, reason: str, now: datetime) -> "Certificate":
        """active -> revoked. 이미 revoked 면 ConflictError (revoked_at 보존)."""
        if self.is_revoked:
            raise ConflictError("Certificate is already revoked")
        return replace(
            self,
            status=CertificateStatus.REVOKED,
            revoked_at=now,
            revoked_by=revoked_by,
            revocation_reason=reason,
        )


@dataclass(frozen=True)
class Eligibility:
    is_eligible: bool
    overall_grade: float
    passing_grade: Optional[float]
    course_progress: int
    is_enrolled: bool
    has_passing_grade: bool
    meets_grade_requirement: bool
    is_course_completed: bool
    ineligibility_reasons: list[str] = field(default_factory=list)
    existing_certificate: Optional[Certificate] = None


@dataclass(frozen=True)
class EligibleStudent:
    student_id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    student_number: Optional[str]
    overall_grade: float
    course_progress: int
    has_certificate: bool
    certificate_id: Optional[uuid.UUID] = None
    certificate_issued_at: Optional[datetime] = None


@dataclass(frozen=True)
class EligibleStudentsReport:
    eligible_students: list[EligibleStudent]
    total_eligible: int
    total_enrolled: int
    passing_grade: Optional[float]
    has_passing_grade: bool
