"""
CourseCertificate Repository: Django ORM 구현

발급 insert 는 savepoint(atomic) 안에서 수행.
UniqueConstraint(course, student) 위반(IntegrityError)은 ConflictError 로 변환한다.
바깥 트랜잭션은 savepoint 롤백 후에도 계속 사용할 수 있다.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Optional

from coursework.domain.certificates.entities import Certificate, CertificateStatus
from coursework.domain.shared.errors import ConflictError

logger = logging.getLogger(__name__)


def _model_to_entity(m) -> Optional[Certificate]:
    if m is None:
        return None
    return Certificate(
        id=m.id,
        course_id=m.course_id,
        student_id=m.student_id,
        issued_by=m.issued_by,
        issued_at=m.issued_at,
        final_grade=float(m.final_grade),
        status=CertificateStatus(m.status),
        revoked_at=m.revoked_at,
        revoked_by=m.revoked_by,
        revocation_reason=m.revocation_reason,
    )


class DjangoCertificateRepository:

    def get(self, certificate_id: uuid.UUID) -> Optional[Certificate]:
        from apps.domains.certificates.models import CourseCertificate
        return _model_to_entity(CourseCertificate.objects.filter(id=certificate_id).first())

    def get_for_student(self, course_id: uuid.UUID, student_id: uuid.UUID) -> Optional[Certificate]:
        from apps.domains.certificates.models import CourseCertificate
        m = CourseCertificate.objects.filter(course_id=course_id, student_id=student_id).first()
        return _model_to_entity(m)

    def get_for_update(self, course_id: uuid.UUID, student_id: uuid.UUID) -> Optional[Certificate]:
        """호출자가 UoW 트랜잭션 내에 있어야 함 (select_for_update 락 유지)."""
        from apps.domains.certificates.models import CourseCertificate
        m = (
            CourseCertificate.objects.select_for_update()
            .filter(course_id=course_id, student_id=student_id)
            .first()
        )
        return _model_to_entity(m)

    def list_for_course(self, course_id: uuid.UUID) -> dict[uuid.UUID, Certificate]:
        from apps.domains.certificates.models import CourseCertificate
        qs = CourseCertificate.objects.filter(course_id=course_id)
        return {m.student_id: _model_to_entity(m) for m in qs}

    def list_for_student(self, student_id: uuid.UUID) -> list[Certificate]:
        from apps.domains.certificates.models import CourseCertificate
        qs = CourseCertificate.objects.filter(student_id=student_id).order_by("-issued_at")
        return [_model_to_entity(m) for m in qs]

    def create(
        self,
        *,
        course_id: uuid.UUID,
        student_id: uuid.UUID,
        issued_by: uuid.UUID,
        final_grade: float,
        issued_at: datetime,
    ) -> Certificate:
        from django.db import IntegrityError, transaction
        from apps.domains.certificates.models import CourseCertificate

        try:
            with transaction.atomic():
                m = CourseCertificate.objects.create(
                    course_id=course_id,
                    student_id=student_id,
                    issued_by=issued_by,
                    issued_at=issued_at,
                    final_grade=final_grade,
                    status=CourseCertificate.Status.ACTIVE,
                )
        except IntegrityError as e:
            logger.warning(
                "[certificates] unique constraint hit course=%s student=%s: %s",
                course_id,
                student_id,
                e,
            )
            raise ConflictError("Certificate already exists for this student") from e
        return _model_to_entity(m)

    def save(self, certificate: Certificate) -> Certificate:
        from apps.domains.certificates.models import CourseCertificate
        m = CourseCertificate.objects.get(id=certificate.id)
        m.status = certificate.status.value
        m.revoked_at = certificate.revoked_at
        m.revoked_by = certificate.revoked_by
        m.revocation_reason = certificate.revocation_reason
        m.save(update_fields=["status", "revoked_at", "revoked_by", "revocation_reason", "updated_at"])
        return _model_to_entity(m)
