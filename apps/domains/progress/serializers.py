# PATH: apps/domains/progress/serializers.py
from rest_framework import serializers

from apps.api.common.exceptions import validate_or_raise


class LessonProgressInputSerializer(serializers.Serializer):
    """
    부분 진행 기록 payload.
    범위(0~100) 검증은 ProgressTracker 에서도 다시 한다.
    """
    completion_percentage = serializers.FloatField(min_value=0, max_value=100)
    completed = serializers.BooleanField(required=False, default=False)

    def to_args(self) -> dict:
        data = validate_or_raise(self, "Invalid lesson progress")
        return {
            "percentage": data["completion_percentage"],
            "completed": data.get("completed", False),
        }


class LessonProgressSerializer(serializers.Serializer):
    id = serializers.UUIDField(allow_null=True)
    student_id = serializers.UUIDField()
    lesson_id = serializers.UUIDField()
    completion_percentage = serializers.IntegerField()
    is_completed = serializers.BooleanField()
    completed_at = serializers.DateTimeField(allow_null=True)
    last_accessed = serializers.DateTimeField(allow_null=True)


class LessonCompletionSerializer(serializers.Serializer):
    lesson_id = serializers.UUIDField()
    completed = serializers.BooleanField()
    completion_percentage = serializers.IntegerField()
    next_lesson_id = serializers.UUIDField(allow_null=True)
    next_lesson_unlocked = serializers.BooleanField()
    completed_at = serializers.DateTimeField(allow_null=True)


class LessonProgressRowSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    title = serializers.CharField()
    order_index = serializers.IntegerField()
    estimated_duration = serializers.IntegerField(allow_null=True)
    state = serializers.CharField(source="state.value")
    is_completed = serializers.BooleanField()
    is_unlocked = serializers.BooleanField()
    completion_percentage = serializers.IntegerField()
    completed_at = serializers.DateTimeField(allow_null=True)
    last_accessed = serializers.DateTimeField(allow_null=True)


class ModuleProgressSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    title = serializers.CharField()
    order_index = serializers.IntegerField()
    lessons = LessonProgressRowSerializer(many=True)
    total_lessons = serializers.IntegerField()
    completed_lessons = serializers.IntegerField()
    completion_percentage = serializers.IntegerField()
    total_duration = serializers.IntegerField()


class AssignmentProgressSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    title = serializers.CharField()
    category = serializers.CharField()
    points = serializers.IntegerField()
    due_date = serializers.DateTimeField(allow_null=True)
    is_submitted = serializers.BooleanField()
    score = serializers.FloatField(allow_null=True)
    submitted_at = serializers.DateTimeField(allow_null=True)


class CourseProgressSerializer(serializers.Serializer):
    course_id = serializers.UUIDField()
    title = serializers.CharField()
    modules = ModuleProgressSerializer(many=True)
    assignments = AssignmentProgressSerializer(many=True)
    total_modules = serializers.IntegerField()
    completed_modules = serializers.IntegerField()
    total_lessons = serializers.IntegerField()
    completed_lessons = serializers.IntegerField()
    course_completion_percentage = serializers.IntegerField()
    total_estimated_duration = serializers.IntegerField()
    enrolled_at = serializers.DateTimeField(allow_null=True)
