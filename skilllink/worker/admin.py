from django.contrib import admin
from .models import Assessment, Certificate, Enrollment


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'worker', 'course', 'status', 'progress_percentage', 'created_at')
    list_filter = ('status',)


@admin.register(Assessment)
class AssessmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'worker', 'course', 'score', 'completed_at')


@admin.register(Certificate)
class CertificateAdmin(admin.ModelAdmin):
    list_display = ('id', 'worker', 'course', 'certificate_path', 'issued_at')
    readonly_fields = ('certificate_path', 'issued_at')
