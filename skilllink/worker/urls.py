"""
Worker app URL configuration - enrollments, progress, assessments, certificates
"""
from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import (
    AssessmentViewSet, EnrollmentViewSet, certificate_detail, certificate_generate,
    certificate_list, enroll_legacy, enrollment_progress
)

router = SimpleRouter()
router.register(r'enrollments', EnrollmentViewSet, basename='enrollment')
router.register(r'assessments', AssessmentViewSet, basename='assessment')

urlpatterns = [
    path('', include(router.urls)),
    path('enroll/', enroll_legacy, name='enroll'),
    path('progress/', enrollment_progress, name='enrollment-progress'),
    path('certificates/', certificate_list, name='certificate-list'),
    path('certificates/generate/', certificate_generate, name='certificate-generate'),
    path('certificates/<str:worker_id>/<str:course_id>/', certificate_detail, name='certificate-detail'),
]
