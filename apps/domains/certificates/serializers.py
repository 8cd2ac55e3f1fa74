# PATH: apps/domains/certificates/serializers.py
from rest_framework import serializers

from apps.api.common.exceptions import validate_or_raise
from coursework.application.use_cases.certificates import REVOCATION_REASON_MAX_LENGTH


class RevokeCertificateSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=REVOCATION_REASON_MAX_LENGTH, trim_whitespace=True)

    def to_reason(self) -> str:
        return validate_or_raise(self, "Invalid revocation request")["reason"]


class CertificateSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    course_id = serializers.UUIDField()
    student_id = serializers.UUIDField()
    issued_by = serializers.UUIDField()
    issued_at = serializers.DateTimeField()
    final_grade = serializers.FloatField()
    status = serializers.CharField(source="status.value")
    revoked_at = serializers.DateTimeField(allow_null=True)
    revoked_by = serializers.UUIDField(allow_null=True)
    revocation_reason = serializers.CharField(allow_null=True)


class EligibilitySerializer(serializers.Serializer):
    is_eligible = serializers.BooleanField()
    overall_grade = serializers.FloatField()
    passing_grade = serializers.FloatField(allow_null=True)
    course_progress = serializers.IntegerField()
    is_enrolled = serializers.BooleanField()
    has_passing_grade = serializers.BooleanField()
    meets_grade_requirement = serializers.BooleanField()
    is_course_completed = serializers.BooleanField()
    ineligibility_reasons = serializers.ListField(child=serializers.CharField())
    existing_certificate = CertificateSerializer(allow_null=True)


class EligibleStudentSerializer(serializers.Serializer):
    student_id = serializers.UUIDField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    email = serializers.CharField()
    student_number = serializers.CharField(allow_null=True)
    overall_grade = serializers.FloatField()
    course_progress = serializers.IntegerField()
    has_certificate = serializers.BooleanField()
    certificate_id = serializers.UUIDField(allow_null=True)
    certificate_issued_at = serializers.DateTimeField(allow_null=True)


class EligibleStudentsReportSerializer(serializers.Serializer):
    eligible_students = EligibleStudentSerializer(many=True)
    total_eligible = serializers.IntegerField()
    total_enrolled = serializers.IntegerField()
    passing_grade = serializers.FloatField(allow_null=True)
    has_passing_grade = serializers.BooleanField()
