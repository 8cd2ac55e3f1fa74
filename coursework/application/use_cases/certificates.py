"""
수료 인증서 Use Case: 자격 판정 / 발급 / 취소 / 조회

✅ 발급은 (course, student) 당 정확히 1회
- 사전 조회로 기존 인증서가 있으면 ConflictError
- 동시 발급 경합은 DB UniqueConstraint 가 해결 (어댑터가 IntegrityError → ConflictError)
- final_grade 는 발급 시점 스냅샷

✅ 취소는 삭제가 아님
- row lock 후 status=revoked 로만 갱신, 이미 revoked 면 ConflictError
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from coursework.application.ports.unit_of_work import UnitOfWork
from coursework.application.use_cases.grading import GradingService, get_owned_course_or_404
from coursework.application.use_cases.progress import ProgressService
from coursework.domain.certificates.eligibility import CertificateEligibilityEvaluator
from coursework.domain.certificates.entities import (
    Certificate,
    Eligibility,
    EligibleStudent,
    EligibleStudentsReport,
)
from coursework.domain.courses.entities import CourseRecord
from coursework.domain.shared.errors import ConflictError, NotFoundError, ValidationError
from coursework.domain.shared.ids import parse_uuid, parse_uuids

logger = logging.getLogger(__name__)

REVOCATION_REASON_MAX_LENGTH = 1000

CERTIFICATE_NOT_FOUND = "Certificate not found"
NOT_ELIGIBLE = "Student is not eligible for a certificate"

ROLE_STUDENT = "student"
ROLE_INSTRUCTOR = "instructor"
ROLE_ADMIN = "admin"


def validate_revocation_reason(reason: Any) -> str:
    if not isinstance(reason, str) or not reason.strip():
        raise ValidationError("Revocation reason is required")
    reason = reason.strip()
    if len(reason) > REVOCATION_REASON_MAX_LENGTH:
        raise ValidationError(
            f"Revocation reason must be at most {REVOCATION_REASON_MAX_LENGTH} characters"
        )
    return reason


class CertificateService:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        *,
        grading: GradingService,
        progress: ProgressService,
        evaluator: Optional[CertificateEligibilityEvaluator] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._grading = grading
        self._progress = progress
        self._evaluator = evaluator or CertificateEligibilityEvaluator()

    def _evaluate(
        self,
        uow: UnitOfWork,
        course: CourseRecord,
        student_id: uuid.UUID,
        *,
        existing: Optional[Certificate] = None,
    ) -> Eligibility:
        enrollment = uow.enrollments.get(course.id, student_id)
        is_enrolled = bool(enrollment and enrollment.is_active)

        overall_grade = None
        completion = None
        if is_enrolled:
            # 계산 실패는 예외 대신 사유로 보고
            try:
                with uow.savepoint():
                    summary = self._grading.summarize_in(uow, course.id, student_id)
                overall_grade = summary.overall_grade
            except Exception:
                logger.warning(
                    "[certificates] grade calculation failed course=%s student=%s",
                    course.id,
                    student_id,
                    exc_info=True,
                )
            try:
                with uow.savepoint():
                    completion = self._progress.completion_counts_in(uow, course.id, student_id)
            except Exception:
                logger.warning(
                    "[certificates] progress calculation failed course=%s student=%s",
                    course.id,
                    student_id,
                    exc_info=True,
                )

        return self._evaluator.evaluate(
            is_enrolled=is_enrolled,
            passing_grade=course.passing_grade,
            overall_grade=overall_grade,
            completion=completion,
            existing_certificate=existing,
        )

    def check_eligibility(self, course_id: Any, student_id: Any, instructor_id: Any) -> Eligibility:
        ids = parse_uuids(
            {"course ID": course_id, "student ID": student_id, "instructor ID": instructor_id}
        )
        with self._uow_factory() as uow:
            course = get_owned_course_or_404(uow, ids["course ID"], ids["instructor ID"])
            existing = uow.certificates.get_for_student(course.id, ids["student ID"])
            return self._evaluate(uow, course, ids["student ID"], existing=existing)

    def issue_certificate(
        self,
        course_id: Any,
        student_id: Any,
        instructor_id: Any,
        now: Optional[datetime] = None,
    ) -> Certificate:
        ids = parse_uuids(
            {"course ID": course_id, "student ID": student_id, "instructor ID": instructor_id}
        )
        sid, iid = ids["student ID"], ids["instructor ID"]
        if now is None:
            now = datetime.now(timezone.utc)

        try:
            with self._uow_factory() as uow:
                course = get_owned_course_or_404(uow, ids["course ID"], iid)

                existing = uow.certificates.get_for_student(course.id, sid)
                if existing is not None:
                    raise ConflictError(
                        "Certificate already exists for this student "
                        f"(status: {existing.status.value})"
                    )

                eligibility = self._evaluate(uow, course, sid)
                if not eligibility.is_eligible:
                    raise ValidationError(NOT_ELIGIBLE, errors=eligibility.ineligibility_reasons)

                certificate = uow.certificates.create(
                    course_id=course.id,
                    student_id=sid,
                    issued_by=iid,
                    final_grade=eligibility.overall_grade,
                    issued_at=now,
                )
        except ConflictError:
            logger.warning(
                "[certificates] issue conflict course=%s student=%s", ids["course ID"], sid
            )
            raise

        logger.info(
            "[certificates] issued certificate=%s course=%s student=%s grade=%s by=%s",
            certificate.id,
            certificate.course_id,
            sid,
            certificate.final_grade,
            iid,
        )
        return certificate

    def revoke_certificate(
        self,
        course_id: Any,
        student_id: Any,
        instructor_id: Any,
        reason: Any,
        now: Optional[datetime] = None,
    ) -> Certificate:
        ids = parse_uuids(
            {"course ID": course_id, "student ID": student_id, "instructor ID": instructor_id}
        )
        reason = validate_revocation_reason(reason)
        if now is None:
            now = datetime.now(timezone.utc)

        with self._uow_factory() as uow:
            course = get_owned_course_or_404(uow, ids["course ID"], ids["instructor ID"])
            certificate = uow.certificates.get_for_update(course.id, ids["student ID"])
            if certificate is None:
                raise NotFoundError(CERTIFICATE_NOT_FOUND)

            revoked = certificate.revoke(revoked_by=ids["instructor ID"], reason=reason, now=now)
            saved = uow.certificates.save(revoked)

        logger.info(
            "[certificates] revoked certificate=%s course=%s student=%s by=%s",
            saved.id,
            saved.course_id,
            saved.student_id,
            ids["instructor ID"],
        )
        return saved

    def get_certificate(self, certificate_id: Any) -> Certificate:
        cid = parse_uuid(certificate_id, "certificate ID")
        with self._uow_factory() as uow:
            certificate = uow.certificates.get(cid)
        if certificate is None:
            raise NotFoundError(CERTIFICATE_NOT_FOUND)
        return certificate

    def get_student_certificate(
        self,
        course_id: Any,
        student_id: Any,
        requester_id: Any,
        requester_role: str,
    ) -> Certificate:
        """
        student: 본인 인증서만
        instructor: 본인 소유 코스만
        admin: 제한 없음
        그 외 / 권한 없음은 NotFound
        """
        ids = parse_uuids(
            {"course ID": course_id, "student ID": student_id, "requester ID": requester_id}
        )
        cid, sid, rid = ids["course ID"], ids["student ID"], ids["requester ID"]

        with self._uow_factory() as uow:
            if requester_role == ROLE_STUDENT:
                allowed = rid == sid
            elif requester_role == ROLE_INSTRUCTOR:
                allowed = uow.courses.get_owned(cid, rid) is not None
            else:
                allowed = requester_role == ROLE_ADMIN
            if not allowed:
                raise NotFoundError(CERTIFICATE_NOT_FOUND)

            certificate = uow.certificates.get_for_student(cid, sid)

        if certificate is None:
            raise NotFoundError(CERTIFICATE_NOT_FOUND)
        return certificate

    def list_student_certificates(self, student_id: Any) -> list[Certificate]:
        sid = parse_uuid(student_id, "student ID")
        with self._uow_factory() as uow:
            return uow.certificates.list_for_student(sid)

    def get_all_eligible_students(self, course_id: Any, instructor_id: Any) -> EligibleStudentsReport:
        """
        수강중 학생 중 요건(성적/진행률)을 충족한 학생 목록.
        이미 발급된 학생도 포함하고 has_certificate 로 표시한다.
        학생별 실패는 로그 후 건너뛴다.
        """
        ids = parse_uuids({"course ID": course_id, "instructor ID": instructor_id})

        with self._uow_factory() as uow:
            course = get_owned_course_or_404(uow, ids["course ID"], ids["instructor ID"])
            enrollments = uow.enrollments.list_active(course.id)
            students = uow.students.get_many([e.student_id for e in enrollments])
            certificates = uow.certificates.list_for_course(course.id)

            eligible: list[EligibleStudent] = []
            for enrollment in enrollments:
                sid = enrollment.student_id
                try:
                    student = students.get(sid)
                    if student is None:
                        raise NotFoundError(f"Student {sid} not found")
                    with uow.savepoint():
                        result = self._evaluate(uow, course, sid)
                except Exception:
                    logger.warning(
                        "[certificates] eligibility skipped course=%s student=%s",
                        course.id,
                        sid,
                        exc_info=True,
                    )
                    continue

                if not result.is_eligible:
                    continue

                certificate = certificates.get(sid)
                eligible.append(
                    EligibleStudent(
                        student_id=sid,
                        first_name=student.first_name,
                        last_name=student.last_name,
                        email=student.email,
                        student_number=student.student_number,
                        overall_grade=result.overall_grade,
                        course_progress=result.course_progress,
                        has_certificate=certificate is not None,
                        certificate_id=certificate.id if certificate else None,
                        certificate_issued_at=certificate.issued_at if certificate else None,
                    )
                )

        return EligibleStudentsReport(
            eligible_students=eligible,
            total_eligible=len(eligible),
            total_enrolled=len(enrollments),
            passing_grade=course.passing_grade,
            has_passing_grade=course.has_passing_grade,
        )
