import datetime
import logging

from django.db.models import Case, Count, IntegerField, Value, When
from django.utils import timezone
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.generics import get_object_or_404
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from trainer.models import Course
from trainer.permissions import IsAdminRole, IsTrainerOrAdmin
from trainer.policy import get_actor
from worker.models import Certificate, Enrollment
from worker.serializers import EnrollmentSerializer
from worker.services.enrollment import approve_enrollment
from .models import ApprovalStatus, Role, UserProfile
from .serializers import (
    AccountWriteSerializer, ProfileUpdateSerializer, TrainerSerializer,
    UserProfileSerializer, WorkerSerializer
)
from .services import reports

logger = logging.getLogger(__name__)

INACTIVE_AFTER_DAYS = 30
LOW_COMPLETION_RATIO = 0.2
LOW_ENROLLMENT_COUNT = 5


class _AccountViewSet(mixins.ListModelMixin, mixins.CreateModelMixin, mixins.UpdateModelMixin,
                      mixins.DestroyModelMixin, viewsets.GenericViewSet):
    """Admin management of the accounts of one role."""
    permission_classes = [IsAdminRole]
    role = None
    label = None

    def get_queryset(self):
        return UserProfile.objects.filter(role=self.role)

    def create(self, request, *args, **kwargs):
        serializer = AccountWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        # admin-created accounts skip the approval gate
        profile = serializer.save(role=self.role, status=ApprovalStatus.APPROVED)
        logger.info(f"Admin {request.user.id} created {self.role} account {profile.email}")
        return Response({
            'message': f'{self.label} created successfully',
            self.role.value: UserProfileSerializer(profile).data,
        }, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        profile = self.get_object()
        serializer = AccountWriteSerializer(profile, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        profile = serializer.save()
        logger.info(f"Admin {request.user.id} updated {self.role} account {profile.id}")
        return Response({
            'message': f'{self.label} updated successfully',
            self.role.value: UserProfileSerializer(profile).data,
        })

    def destroy(self, request, *args, **kwargs):
        profile = self.get_object()
        profile_id = profile.id
        profile.delete()
        logger.info(f"Admin {request.user.id} deleted {self.role} account {profile_id}")
        return Response({'message': f'{self.label} deleted successfully'})


class TrainerAccountViewSet(_AccountViewSet):
    """Trainers, pending first then newest, with their course counts"""
    serializer_class = TrainerSerializer
    role = Role.TRAINER
    label = 'Trainer'

    def get_queryset(self):
        return (
            super().get_queryset()
            .annotate(
                courses_count=Count('courses', distinct=True),
                pending_first=Case(
                    When(status=ApprovalStatus.PENDING, then=Value(0)),
                    default=Value(1),
                    output_field=IntegerField(),
                ),
            )
            .order_by('pending_first', '-created_at')
        )

    def _set_status(self, request, new_status, verb):
        trainer = self.get_object()
        trainer.status = new_status
        trainer.save(update_fields=['status', 'updated_at'])
        logger.info(f"Admin {request.user.id} {verb} trainer {trainer.id}")
        return Response({
            'message': f'Trainer {verb} successfully',
            'trainer': UserProfileSerializer(trainer).data,
        })

    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        return self._set_status(request, ApprovalStatus.APPROVED, 'approved')

    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        return self._set_status(request, ApprovalStatus.REJECTED, 'rejected')


class WorkerAccountViewSet(_AccountViewSet):
    """Workers with enrollment, certificate and assessment counts"""
    serializer_class = WorkerSerializer
    role = Role.WORKER
    label = 'Worker'

    def get_queryset(self):
        return super().get_queryset().annotate(
            enrollments_count=Count('enrollments', distinct=True),
            certificates_count=Count('certificates', distinct=True),
            assessments_count=Count('assessments', distinct=True),
        )


class AdminAccountViewSet(mixins.CreateModelMixin, viewsets.GenericViewSet):
    serializer_class = UserProfileSerializer
    permission_classes = [IsAdminRole]

    def create(self, request, *args, **kwargs):
        serializer = AccountWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile = serializer.save(role=Role.ADMIN, status=ApprovalStatus.APPROVED)
        logger.info(f"Admin {request.user.id} created admin account {profile.email}")
        return Response({
            'message': 'Admin created successfully',
            'admin': UserProfileSerializer(profile).data,
        }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAdminRole])
def enrollment_approve(request, pk):
    enrollment = get_object_or_404(Enrollment.objects.select_related('worker', 'course'), pk=pk)
    enrollment = approve_enrollment(get_actor(request), enrollment)
    return Response({
        'message': 'Enrollment approved successfully',
        'enrollment': EnrollmentSerializer(enrollment).data,
    })


def _low_performing_courses():
    courses = Course.objects.annotate(
        enrollments_total=Count('enrollments', distinct=True),
        certificates_total=Count('certificates', distinct=True),
    ).values_list('enrollments_total', 'certificates_total')

    total = 0
    for enrolled, certified in courses:
        if enrolled and (certified / enrolled < LOW_COMPLETION_RATIO or enrolled < LOW_ENROLLMENT_COUNT):
            total += 1
    return total


@api_view(['GET'])
@permission_classes([IsAdminRole])
def metrics(request):
    """Platform counters for the admin dashboard"""
    since = timezone.now() - datetime.timedelta(days=INACTIVE_AFTER_DAYS)
    workers = UserProfile.objects.filter(role=Role.WORKER)
    trainers = UserProfile.objects.filter(role=Role.TRAINER)

    return Response({
        'total_users': UserProfile.objects.count(),
        'total_workers': workers.count(),
        'total_trainers': trainers.count(),
        'pending_trainers': trainers.filter(status=ApprovalStatus.PENDING).count(),
        'total_courses': Course.objects.count(),
        'pending_courses': Course.objects.filter(status=ApprovalStatus.PENDING).count(),
        'approved_courses': Course.objects.filter(status=ApprovalStatus.APPROVED).count(),
        'total_enrollments': Enrollment.objects.count(),
        'pending_enrollments': Enrollment.objects.filter(status=Enrollment.Status.PENDING).count(),
        'total_certificates': Certificate.objects.count(),
        'inactive_users': workers.exclude(
            id__in=Enrollment.objects.filter(created_at__gte=since).values('worker_id')
        ).count(),
        'low_performing_courses': _low_performing_courses(),
    })


@api_view(['GET'])
@permission_classes([IsTrainerOrAdmin])
def activities_report(request):
    return Response(reports.activity_report(get_actor(request)))


@api_view(['GET'])
@permission_classes([IsTrainerOrAdmin])
def performance_report(request):
    return Response(reports.performance_report(get_actor(request)))


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def user_profile(request):
    """Read or edit the authenticated account; a new password needs current_password."""
    profile = request.user
    if request.method == 'GET':
        return Response(UserProfileSerializer(profile).data)

    serializer = ProfileUpdateSerializer(profile, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    profile = serializer.save()
    logger.info(f"User {profile.id} updated their profile")
    return Response({
        'message': 'Profile updated successfully',
        'user': UserProfileSerializer(profile).data,
    })
