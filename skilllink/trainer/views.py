"""
Trainer app views - courses, lessons and quizzes
"""
import logging
import time

from django.conf import settings
from django.core.files.storage import default_storage
from django.db.models import Count
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from admin.models import Role
from .models import Course, Lesson, Quiz
from .permissions import IsAdminRole
from .policy import (
    can_manage_quiz, can_view_course, course_visibility, ensure_can_manage_course, get_actor, quiz_visibility
)
from .serializers import (
    CourseDetailSerializer, CourseSerializer, LessonSerializer, QuizFilterSerializer, QuizSerializer
)
from .services import course_lifecycle, quizzes

logger = logging.getLogger(__name__)


class CourseViewSet(viewsets.ModelViewSet):
    """
    Courses. Listings are filtered by role and hide courses whose trainer
    account was deleted; approve/reject are admin transitions.
    """
    serializer_class = CourseSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        queryset = Course.objects.select_related('trainer').annotate(enrollment_count=Count('enrollments'))
        if self.action == 'list':
            actor = get_actor(self.request)
            queryset = queryset.listed().filter(course_visibility(actor))
        return queryset

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return CourseDetailSerializer
        return CourseSerializer

    def get_permissions(self):
        if self.action in ('approve', 'reject'):
            return [IsAdminRole()]
        return super().get_permissions()

    def _course_response(self, course, status_code=status.HTTP_200_OK):
        course = self.get_queryset().get(pk=course.pk)
        return Response(CourseSerializer(course).data, status=status_code)

    def retrieve(self, request, *args, **kwargs):
        actor = get_actor(request)
        course = self.get_object()
        if not can_view_course(actor, course):
            raise PermissionDenied('Forbidden: You can only access your own courses or approved courses')
        return Response(self.get_serializer(course).data)

    def create(self, request, *args, **kwargs):
        actor = get_actor(request)
        if actor.role != Role.TRAINER:
            raise PermissionDenied('Forbidden: trainers only')
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        course = course_lifecycle.create_course(actor, serializer.validated_data)
        return self._course_response(course, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        actor = get_actor(request)
        course = self.get_object()
        ensure_can_manage_course(actor, course, message='Forbidden')
        serializer = self.get_serializer(course, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        course = course_lifecycle.update_course(actor, course, serializer.validated_data)
        return self._course_response(course)

    def destroy(self, request, *args, **kwargs):
        actor = get_actor(request)
        course = self.get_object()
        ensure_can_manage_course(actor, course, message='Forbidden')
        course_lifecycle.delete_course(actor, course)
        return Response({'message': 'Course deleted successfully'})

    @action(detail=True, methods=['get', 'post'])
    def approve(self, request, pk=None):
        course = course_lifecycle.approve_course(get_actor(request), self.get_object())
        return Response({
            'message': 'Course approved successfully',
            'course': CourseSerializer(self.get_queryset().get(pk=course.pk)).data,
        })

    @action(detail=True, methods=['get', 'post'])
    def reject(self, request, pk=None):
        course = course_lifecycle.reject_course(get_actor(request), self.get_object())
        return Response({
            'message': 'Course rejected',
            'course': CourseSerializer(self.get_queryset().get(pk=course.pk)).data,
        })

    @action(detail=True, methods=['get'])
    def lessons(self, request, pk=None):
        """Lessons of one course, ordered, once the actor may read the course"""
        actor = get_actor(request)
        course = self.get_object()

        if not can_view_course(actor, course):
            if actor.role == Role.WORKER:
                raise PermissionDenied('Forbidden: Course not approved')
            raise PermissionDenied('Forbidden: You can only access your own courses or approved courses')

        return Response({
            'course': CourseSerializer(course).data,
            'lessons': LessonSerializer(course.lessons.all(), many=True).data,
        })


def _store_lesson_file(upload):
    name = default_storage.save(f"lessons/{int(time.time())}_{upload.name}", upload)
    return f"{settings.MEDIA_URL}{name}"


class LessonViewSet(viewsets.ModelViewSet):
    """Lessons. Mutations need ownership of the course (admins bypass)."""
    serializer_class = LessonSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        queryset = Lesson.objects.select_related('course')
        if self.action in ('list', 'retrieve'):
            actor = get_actor(self.request)
            queryset = queryset.filter(course_visibility(actor, prefix='course__'))
        return queryset

    def _ensure_can_edit(self, actor, course, verb):
        if actor.role not in (Role.TRAINER, Role.ADMIN):
            raise PermissionDenied(f'Forbidden: Only trainers and admins can {verb} lessons')
        preposition = 'to' if verb == 'create' else 'in'
        ensure_can_manage_course(
            actor, course,
            message=f'Forbidden: You can only {verb} lessons {preposition} your own courses'
        )

    def create(self, request, *args, **kwargs):
        actor = get_actor(request)
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        self._ensure_can_edit(actor, data['course'], 'create')

        upload = data.pop('file', None)
        if upload is not None:
            data['file_path'] = _store_lesson_file(upload)
        lesson = Lesson.objects.create(**data)
        logger.info(f"Lesson {lesson.id} created in course {lesson.course_id} by {actor.role} {actor.id}")
        return Response(self.get_serializer(lesson).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        actor = get_actor(request)
        lesson = self.get_object()
        self._ensure_can_edit(actor, lesson.course, 'update')

        serializer = self.get_serializer(lesson, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        # lessons never move between courses
        data.pop('course', None)
        upload = data.pop('file', None)
        if upload is not None:
            data['file_path'] = _store_lesson_file(upload)

        for field, value in data.items():
            setattr(lesson, field, value)
        lesson.save()
        logger.info(f"Lesson {lesson.id} updated by {actor.role} {actor.id}")
        return Response(self.get_serializer(lesson).data)

    def destroy(self, request, *args, **kwargs):
        actor = get_actor(request)
        lesson = self.get_object()
        self._ensure_can_edit(actor, lesson.course, 'delete')
        lesson_id = lesson.id
        lesson.delete()
        logger.info(f"Lesson {lesson_id} deleted by {actor.role} {actor.id}")
        return Response({'message': 'Lesson deleted'})


class QuizViewSet(viewsets.ModelViewSet):
    """Quizzes with their questions. ``?course_id=`` narrows the listing."""
    serializer_class = QuizSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        queryset = Quiz.objects.select_related('course').prefetch_related('questions')
        if self.action in ('list', 'retrieve'):
            actor = get_actor(self.request)
            queryset = queryset.filter(quiz_visibility(actor))
            if self.action == 'list':
                filters = QuizFilterSerializer(data=self.request.query_params)
                filters.is_valid(raise_exception=True)
                course_id = filters.validated_data.get('course_id')
                if course_id:
                    queryset = queryset.filter(course_id=course_id)
        return queryset

    def create(self, request, *args, **kwargs):
        actor = get_actor(request)
        if actor.role != Role.TRAINER:
            raise PermissionDenied('Forbidden: trainers only')
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        course = data.pop('course')
        questions = data.pop('questions')
        quiz = quizzes.create_quiz(actor, course, data, questions)
        return Response(self.get_serializer(self.get_queryset().get(pk=quiz.pk)).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        actor = get_actor(request)
        quiz = self.get_object()
        if not can_manage_quiz(actor, quiz):
            raise PermissionDenied('Forbidden: You can only update your own quizzes')
        serializer = self.get_serializer(quiz, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        data.pop('course', None)
        questions = data.pop('questions', None)
        quiz = quizzes.update_quiz(actor, quiz, data, questions)
        return Response(self.get_serializer(self.get_queryset().get(pk=quiz.pk)).data)

    def destroy(self, request, *args, **kwargs):
        quizzes.delete_quiz(get_actor(request), self.get_object())
        return Response({'message': 'Quiz deleted successfully'})
