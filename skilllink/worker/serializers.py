"""
Worker app serializers - enrollments, assessments, certificates
"""
from django.conf import settings
from rest_framework import serializers

from admin.models import UserProfile
from trainer.models import Course
from .models import Assessment, Certificate, Enrollment


class PersonSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserProfile
        fields = ['id', 'name', 'email']


class CourseSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Course
        fields = ['id', 'title', 'category', 'status', 'trainer_id']


class EnrollmentSerializer(serializers.ModelSerializer):
    worker = PersonSerializer(read_only=True)
    course = CourseSummarySerializer(read_only=True)

    class Meta:
        model = Enrollment
        fields = [
            'id', 'worker_id', 'course_id', 'worker', 'course', 'status',
            'progress_percentage', 'completed_at', 'created_at', 'updated_at'
        ]


class EnrollRequestSerializer(serializers.Serializer):
    course_id = serializers.UUIDField()


class AssessmentSerializer(serializers.ModelSerializer):
    worker = PersonSerializer(read_only=True)
    course = CourseSummarySerializer(read_only=True)
    result = serializers.CharField(read_only=True)

    class Meta:
        model = Assessment
        fields = [
            'id', 'worker_id', 'course_id', 'worker', 'course', 'score', 'result',
            'remarks', 'completed_at', 'created_at', 'updated_at'
        ]


class AssessmentSubmitSerializer(serializers.Serializer):
    score = serializers.IntegerField(min_value=0, max_value=100)
    remarks = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class AssessmentCreateSerializer(AssessmentSubmitSerializer):
    course_id = serializers.UUIDField()


class AssessmentUpdateSerializer(serializers.ModelSerializer):
    score = serializers.IntegerField(min_value=0, max_value=100, required=False)

    class Meta:
        model = Assessment
        fields = ['score', 'remarks', 'completed_at']


class CertificateSerializer(serializers.ModelSerializer):
    worker = PersonSerializer(read_only=True)
    course = CourseSummarySerializer(read_only=True)
    file = serializers.SerializerMethodField()

    class Meta:
        model = Certificate
        fields = [
            'id', 'worker_id', 'course_id', 'worker', 'course',
            'certificate_path', 'file', 'issued_at', 'created_at'
        ]

    def get_file(self, obj):
        return f"{settings.MEDIA_URL}{obj.certificate_path}"


class CertificateRequestSerializer(serializers.Serializer):
    course_id = serializers.UUIDField()
