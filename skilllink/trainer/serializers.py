"""
Trainer app serializers - courses, lessons, quizzes
"""
from rest_framework import serializers

from admin.models import UserProfile
from .models import Course, Lesson, Quiz, QuizQuestion


class TrainerSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = UserProfile
        fields = ['id', 'name', 'email']


class LessonSerializer(serializers.ModelSerializer):
    course_id = serializers.PrimaryKeyRelatedField(source='course', queryset=Course.objects.all())
    file = serializers.FileField(write_only=True, required=False)
    # '' and 0 mean unlimited
    duration = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    class Meta:
        model = Lesson
        fields = [
            'id', 'course_id', 'title', 'content', 'file_path', 'file',
            'order', 'duration', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'file_path', 'created_at', 'updated_at']

    def validate_duration(self, value):
        if value in (None, ''):
            return None
        try:
            minutes = int(value)
        except (TypeError, ValueError):
            raise serializers.ValidationError('The duration must be an integer.')
        if minutes < 0:
            raise serializers.ValidationError('The duration must be at least 0.')
        return minutes or None

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['duration'] = instance.duration
        return data


class CourseSerializer(serializers.ModelSerializer):
    trainer = TrainerSummarySerializer(read_only=True)
    trainer_id = serializers.UUIDField(read_only=True)
    approved_by = serializers.UUIDField(source='approved_by_id', read_only=True)
    enrollment_limit = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    enrollment_count = serializers.SerializerMethodField()
    is_full = serializers.SerializerMethodField()

    class Meta:
        model = Course
        fields = [
            'id', 'trainer_id', 'trainer', 'title', 'description', 'category',
            'status', 'approved_by', 'approved_at', 'enrollment_limit',
            'enrollment_count', 'is_full', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'status', 'approved_at', 'created_at', 'updated_at']

    def validate_enrollment_limit(self, value):
        if value in (None, ''):
            return None
        try:
            limit = int(value)
        except (TypeError, ValueError):
            raise serializers.ValidationError('The enrollment limit must be an integer.')
        if limit < 0:
            raise serializers.ValidationError('The enrollment limit must be at least 1.')
        return limit or None

    def get_enrollment_count(self, obj):
        count = getattr(obj, 'enrollment_count', None)
        if count is None:
            count = obj.enrollments.count()
        return count

    def get_is_full(self, obj):
        if not obj.enrollment_limit:
            return False
        return self.get_enrollment_count(obj) >= obj.enrollment_limit

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['enrollment_limit'] = instance.enrollment_limit
        return data


class CourseDetailSerializer(CourseSerializer):
    lessons = LessonSerializer(many=True, read_only=True)

    class Meta(CourseSerializer.Meta):
        fields = CourseSerializer.Meta.fields + ['lessons']


class QuizQuestionSerializer(serializers.ModelSerializer):
    options = serializers.ListField(child=serializers.CharField(), min_length=2)
    correct_answer = serializers.IntegerField(min_value=0)
    points = serializers.IntegerField(min_value=1, required=False, default=1)
    order = serializers.IntegerField(min_value=0, required=False)

    class Meta:
        model = QuizQuestion
        fields = ['id', 'question', 'options', 'correct_answer', 'points', 'order']
        read_only_fields = ['id']

    def validate(self, attrs):
        # partial quiz updates still submit complete questions
        missing = [name for name in ('question', 'options', 'correct_answer') if name not in attrs]
        if missing:
            raise serializers.ValidationError({name: ['This field is required.'] for name in missing})
        if attrs['correct_answer'] >= len(attrs['options']):
            raise serializers.ValidationError({
                'correct_answer': ['The correct answer must point at one of the options.']
            })
        return attrs


class QuizSerializer(serializers.ModelSerializer):
    course_id = serializers.PrimaryKeyRelatedField(source='course', queryset=Course.objects.all())
    trainer_id = serializers.UUIDField(read_only=True)
    course_title = serializers.CharField(source='course.title', read_only=True)
    time_limit = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    passing_score = serializers.IntegerField(min_value=0, max_value=100, required=False)
    questions = QuizQuestionSerializer(many=True, required=False)

    class Meta:
        model = Quiz
        fields = [
            'id', 'course_id', 'course_title', 'trainer_id', 'title', 'description',
            'time_limit', 'passing_score', 'is_active', 'questions',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate(self, attrs):
        if self.instance is None and not attrs.get('questions'):
            raise serializers.ValidationError({'questions': ['A quiz needs at least one question.']})
        if self.instance is not None and 'questions' in attrs and not attrs['questions']:
            raise serializers.ValidationError({'questions': ['A quiz needs at least one question.']})
        return attrs


class QuizFilterSerializer(serializers.Serializer):
    course_id = serializers.UUIDField(required=False)
