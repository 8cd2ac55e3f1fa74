# PATH: apps/domains/grading/serializers.py
"""
성적 / 가중치 / 성적부 직렬화 계약

입력 serializer 는 검증 후 도메인 타입(WeightsInput, GradebookQuery)을 만든다.
출력 serializer 는 도메인 dataclass 를 그대로 읽는다 (Enum 은 .value).
"""
from django.conf import settings
from rest_framework import serializers

from apps.api.common.exceptions import validate_or_raise
from coursework.domain.gradebook.entities import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    GradebookQuery,
    GradebookSortBy,
    SortOrder,
    SubmissionStatusFilter,
)
from coursework.domain.grading.weights import WeightsInput, validate_grade_weights
from coursework.domain.shared.errors import ValidationError as DomainValidationError


# ========================================================
# Grade weights
# ========================================================

class GradeWeightsInputSerializer(serializers.Serializer):
    assignment_weight = serializers.IntegerField(min_value=0, max_value=100)
    activity_weight = serializers.IntegerField(min_value=0, max_value=100)
    exam_weight = serializers.IntegerField(min_value=0, max_value=100)

    def validate(self, attrs):
        # 합계 규칙은 도메인 검증과 동일하게 적용
        try:
            validate_grade_weights(attrs)
        except DomainValidationError as e:
            raise serializers.ValidationError(e.errors or [e.message])
        return attrs

    def to_weights(self) -> WeightsInput:
        return WeightsInput(**validate_or_raise(self, "Invalid grade weights"))


class GradeWeightsSerializer(serializers.Serializer):
    id = serializers.UUIDField(allow_null=True)
    course_id = serializers.UUIDField()
    assignment_weight = serializers.IntegerField()
    activity_weight = serializers.IntegerField()
    exam_weight = serializers.IntegerField()
    created_at = serializers.DateTimeField(allow_null=True)
    updated_at = serializers.DateTimeField(allow_null=True)


# ========================================================
# Grade summary
# ========================================================

class CategoryGradeSerializer(serializers.Serializer):
    average = serializers.FloatField()
    submitted = serializers.IntegerField()
    total = serializers.IntegerField()


class CategoryGradesSerializer(serializers.Serializer):
    assignment = CategoryGradeSerializer()
    activity = CategoryGradeSerializer()
    exam = CategoryGradeSerializer()


class GradeSummarySerializer(serializers.Serializer):
    overall_grade = serializers.FloatField()
    letter_grade = serializers.CharField()
    category_grades = CategoryGradesSerializer()
    grade_weights = GradeWeightsSerializer()


# ========================================================
# Gradebook
# ========================================================

class GradebookQuerySerializer(serializers.Serializer):
    """query params → GradebookQuery. 값 범위 오류는 400."""

    offset = serializers.IntegerField(min_value=0, required=False, default=0)
    limit = serializers.IntegerField(min_value=1, required=False)
    sort_by = serializers.ChoiceField(
        choices=[c.value for c in GradebookSortBy],
        required=False,
        default=GradebookSortBy.NAME.value,
    )
    sort_order = serializers.ChoiceField(
        choices=[c.value for c in SortOrder],
        required=False,
        default=SortOrder.ASC.value,
    )
    min_score = serializers.FloatField(min_value=0, max_value=100, required=False, allow_null=True)
    max_score = serializers.FloatField(min_value=0, max_value=100, required=False, allow_null=True)
    submission_status = serializers.ChoiceField(
        choices=[c.value for c in SubmissionStatusFilter],
        required=False,
        default=SubmissionStatusFilter.ALL.value,
    )
    section = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    search = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_limit(self, value):
        max_limit = getattr(settings, "COURSEWORK_GRADEBOOK_MAX_LIMIT", MAX_LIMIT)
        if value > max_limit:
            raise serializers.ValidationError(f"Ensure this value is less than or equal to {max_limit}.")
        return value

    def validate(self, attrs):
        low, high = attrs.get("min_score"), attrs.get("max_score")
        if low is not None and high is not None and low > high:
            raise serializers.ValidationError("min_score must not exceed max_score")
        return attrs

    def to_query(self) -> GradebookQuery:
        data = validate_or_raise(self, "Invalid gradebook query")
        return GradebookQuery(
            offset=data.get("offset", 0),
            limit=data.get("limit")
            or getattr(settings, "COURSEWORK_GRADEBOOK_DEFAULT_LIMIT", DEFAULT_LIMIT),
            sort_by=GradebookSortBy(data.get("sort_by", GradebookSortBy.NAME.value)),
            sort_order=SortOrder(data.get("sort_order", SortOrder.ASC.value)),
            min_score=data.get("min_score"),
            max_score=data.get("max_score"),
            submission_status=SubmissionStatusFilter(
                data.get("submission_status", SubmissionStatusFilter.ALL.value)
            ),
            section=data.get("section") or None,
            search=data.get("search") or None,
        )


class GradebookRowSerializer(serializers.Serializer):
    student_id = serializers.UUIDField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    email = serializers.CharField()
    student_number = serializers.CharField(allow_null=True)
    section = serializers.CharField(allow_null=True)
    overall_grade = serializers.FloatField()
    letter_grade = serializers.CharField()
    assignment_average = serializers.FloatField()
    activity_average = serializers.FloatField()
    exam_average = serializers.FloatField()
    total_submissions = serializers.IntegerField()
    total_assignments = serializers.IntegerField()
    has_missing = serializers.BooleanField()
    last_submission = serializers.DateTimeField(allow_null=True)


class InstructorGradebookSerializer(serializers.Serializer):
    rows = GradebookRowSerializer(many=True)
    total = serializers.IntegerField()
    offset = serializers.IntegerField()
    limit = serializers.IntegerField()
    total_pages = serializers.IntegerField()
    current_page = serializers.IntegerField()
    class_average = serializers.FloatField()
    total_assignments = serializers.IntegerField()


class StudentInfoSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    email = serializers.CharField()
    student_number = serializers.CharField(allow_null=True)
    section = serializers.CharField(allow_null=True)


class AssignmentGradeSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    title = serializers.CharField()
    category = serializers.CharField()
    module_title = serializers.CharField()
    max_score = serializers.IntegerField()
    score = serializers.FloatField(allow_null=True)
    percentage = serializers.FloatField(allow_null=True)
    due_date = serializers.DateTimeField(allow_null=True)
    submitted_at = serializers.DateTimeField(allow_null=True)
    status = serializers.CharField()
    is_late = serializers.BooleanField()


class StudentGradebookSerializer(serializers.Serializer):
    student = StudentInfoSerializer()
    grade_summary = GradeSummarySerializer()
    assignments = AssignmentGradeSerializer(many=True)
