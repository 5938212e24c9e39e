"""
Worker app views - enrollments, progress, assessments and certificates
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from admin.models import Role
from trainer.permissions import IsWorkerRole
from trainer.policy import assessment_visibility, can_manage_course, get_actor
from .models import Assessment, Certificate
from .serializers import (
    AssessmentCreateSerializer, AssessmentSerializer, AssessmentSubmitSerializer,
    AssessmentUpdateSerializer, CertificateRequestSerializer, CertificateSerializer,
    EnrollmentSerializer, EnrollRequestSerializer
)
from .services import certificates
from .services.assessments import submit_assessment
from .services.enrollment import enroll, list_enrollments, progress

logger = logging.getLogger(__name__)


class EnrollmentViewSet(mixins.ListModelMixin, mixins.CreateModelMixin, viewsets.GenericViewSet):
    """
    GET: workers get their enrollment summary, trainers and admins every row.
    POST: a worker enrolls into an approved course with free capacity.
    """
    serializer_class = EnrollmentSerializer
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.action == 'create':
            return [IsWorkerRole()]
        return super().get_permissions()

    def list(self, request, *args, **kwargs):
        actor = get_actor(request)
        rows = list_enrollments(actor)
        if actor.role == Role.WORKER:
            return Response(rows)
        return Response(self.get_serializer(rows, many=True).data)

    def create(self, request, *args, **kwargs):
        serializer = EnrollRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        enrollment = enroll(get_actor(request), serializer.validated_data['course_id'])
        return Response(self.get_serializer(enrollment).data, status=status.HTTP_201_CREATED)


enroll_legacy = EnrollmentViewSet.as_view({'post': 'create'})


@api_view(['GET'])
@permission_classes([IsWorkerRole])
def enrollment_progress(request):
    """Completed vs total lessons for each enrolled course"""
    return Response(progress(get_actor(request)))


class AssessmentViewSet(viewsets.ModelViewSet):
    """
    Assessments. Workers read their own, trainers those of their courses.
    POST and the submit action upsert the worker's score; PUT/DELETE are for
    admins and the trainer owning the course.
    """
    serializer_class = AssessmentSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        queryset = Assessment.objects.select_related('worker', 'course')
        if self.action in ('list', 'retrieve'):
            queryset = queryset.filter(assessment_visibility(get_actor(self.request)))
        return queryset

    def get_permissions(self):
        if self.action in ('create', 'submit'):
            return [IsWorkerRole()]
        return super().get_permissions()

    def _upsert(self, request, course_id, data):
        extra = {'remarks': data['remarks']} if 'remarks' in data else {}
        return submit_assessment(get_actor(request), course_id, data['score'], **extra)

    def create(self, request, *args, **kwargs):
        serializer = AssessmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        assessment, _, created = self._upsert(request, serializer.validated_data['course_id'], serializer.validated_data)
        code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
        return Response(AssessmentSerializer(assessment).data, status=code)

    @action(detail=True, methods=['post'])
    def submit(self, request, pk=None):
        """``pk`` is the course id"""
        serializer = AssessmentSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        _, result, _ = self._upsert(request, pk, serializer.validated_data)
        return Response({
            'message': 'Assessment submitted successfully',
            'result': result,
        })

    def _ensure_can_manage(self, actor, assessment):
        if not can_manage_course(actor, assessment.course):
            raise PermissionDenied('Forbidden: You can only manage assessments of your own courses')

    def update(self, request, *args, **kwargs):
        actor = get_actor(request)
        assessment = self.get_object()
        self._ensure_can_manage(actor, assessment)
        serializer = AssessmentUpdateSerializer(assessment, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        assessment = serializer.save()
        logger.info(f"Assessment {assessment.id} edited by {actor.role} {actor.id}")
        return Response(AssessmentSerializer(assessment).data)

    def destroy(self, request, *args, **kwargs):
        actor = get_actor(request)
        assessment = self.get_object()
        self._ensure_can_manage(actor, assessment)
        assessment_id = assessment.id
        assessment.delete()
        logger.info(f"Assessment {assessment_id} deleted by {actor.role} {actor.id}")
        return Response({'message': 'Assessment deleted successfully'})


def _certificate_payload(message, certificate):
    data = CertificateSerializer(certificate).data
    return {
        'message': message,
        'file': data['file'],
        'certificate': data,
    }


@api_view(['GET'])
def certificate_list(request):
    actor = get_actor(request)
    queryset = Certificate.objects.select_related('worker', 'course')
    if actor.role == Role.WORKER:
        queryset = queryset.filter(worker_id=actor.id)
    return Response(CertificateSerializer(queryset, many=True).data)


@api_view(['POST'])
@permission_classes([IsWorkerRole])
def certificate_generate(request):
    """A worker who passed the course's assessment requests their certificate"""
    serializer = CertificateRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    certificate, created = certificates.request_certificate(
        get_actor(request), serializer.validated_data['course_id']
    )
    message = 'Certificate generated successfully' if created else 'Certificate already exists'
    return Response(_certificate_payload(message, certificate))


@api_view(['GET', 'POST'])
def certificate_detail(request, worker_id, course_id):
    """
    GET: the certificate of one worker on one course (workers only their own).
    POST: admins and trainers issue it once the worker passed the assessment.
    """
    actor = get_actor(request)

    if request.method == 'POST':
        certificate, created = certificates.issue_certificate(actor, worker_id, course_id)
        message = 'Certificate generated successfully' if created else 'Certificate already exists'
        return Response(_certificate_payload(message, certificate))

    if actor.role == Role.WORKER and str(actor.id) != str(worker_id):
        raise PermissionDenied('Forbidden: You can only view your own certificates')

    try:
        certificate = Certificate.objects.select_related('worker', 'course').get(
            worker_id=worker_id, course_id=course_id
        )
    except (Certificate.DoesNotExist, DjangoValidationError):
        raise NotFound('Certificate not found')

    data = CertificateSerializer(certificate).data
    return Response({'certificate': data, 'file': data['file']})
