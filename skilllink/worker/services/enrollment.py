"""
Enrollment workflow.

A worker enrolls into a course inside one transaction that locks the course
row, so two concurrent requests can never both take the last seat. On
SQLite, which has no row locks, the request that loses the race is retried
and then sees the course as full. Checks run in a fixed order: course
exists, capacity, duplicate, approval.
"""
import logging
import random
import time
from decimal import ROUND_HALF_UP, Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, OperationalError, transaction
from django.db.models import Count
from rest_framework.exceptions import NotFound

from admin.models import ApprovalStatus, Role
from skilllink.exceptions import AlreadyEnrolled, CourseFull, CourseNotApproved, InvalidRole
from trainer.models import Course
from trainer.policy import require_role
from worker.models import Enrollment

logger = logging.getLogger(__name__)

LOCK_RETRIES = 5


def round_half_up(value):
    return int(Decimal(value).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def format_progress(percentage):
    """50.00 -> '50%', 12.50 -> '12.5%'"""
    text = f"{Decimal(percentage or 0):.2f}".rstrip('0').rstrip('.')
    return f"{text}%"


def _seats_taken(course):
    return course.enrollments.count()


def _enroll_once(actor, course_id):
    with transaction.atomic():
        try:
            course = Course.objects.select_for_update().get(pk=course_id)
        except (Course.DoesNotExist, DjangoValidationError):
            raise NotFound('Course not found')

        if course.enrollment_limit and _seats_taken(course) >= course.enrollment_limit:
            raise CourseFull()

        if Enrollment.objects.filter(worker_id=actor.id, course=course).exists():
            raise AlreadyEnrolled()

        if course.status != ApprovalStatus.APPROVED:
            raise CourseNotApproved()

        try:
            with transaction.atomic():
                enrollment = Enrollment.objects.create(
                    worker_id=actor.id,
                    course=course,
                    status=Enrollment.Status.APPROVED,
                )
        except IntegrityError:
            raise AlreadyEnrolled()
    return enrollment


def enroll(actor, course_id):
    require_role(actor, Role.WORKER)

    # SQLite ignores select_for_update; a competing writer shows up as a
    # locked database and the transaction is replayed after a short pause.
    for attempt in range(1, LOCK_RETRIES + 1):
        try:
            enrollment = _enroll_once(actor, course_id)
            break
        except OperationalError as e:
            if ('locked' not in str(e) or attempt == LOCK_RETRIES
                    or transaction.get_connection().in_atomic_block):
                raise
            logger.warning(f"Enrollment of worker {actor.id} in course {course_id} hit a locked table, retrying")
            time.sleep(random.uniform(0.05, 0.15) * attempt)

    logger.info(f"Worker {actor.id} enrolled in course {enrollment.course_id}")
    return enrollment


def _shape_worker_enrollment(enrollment):
    course = enrollment.course
    return {
        'id': str(enrollment.id),
        'course_id': str(course.id),
        'course': course.title,
        'course_title': course.title,
        'progress': format_progress(enrollment.progress_percentage),
        'status': enrollment.status or Enrollment.Status.PENDING,
        'course_status': course.status,
        'enrollment_limit': course.enrollment_limit,
        'enrollment_count': course.enrollment_count,
    }


def list_enrollments(actor):
    """
    Workers get a flat summary of their own enrollments (courses without a
    trainer are skipped); trainers and admins get every Enrollment row.
    """
    if actor.role == Role.WORKER:
        enrollments = list(
            Enrollment.objects
            .filter(worker_id=actor.id, course__trainer__isnull=False)
            .select_related('course')
        )
        counts = dict(
            Enrollment.objects
            .filter(course_id__in=[e.course_id for e in enrollments])
            .order_by()
            .values('course_id')
            .annotate(total=Count('id'))
            .values_list('course_id', 'total')
        )
        rows = []
        for enrollment in enrollments:
            enrollment.course.enrollment_count = counts.get(enrollment.course_id, 0)
            rows.append(_shape_worker_enrollment(enrollment))
        return rows
    elif actor.role in (Role.TRAINER, Role.ADMIN):
        return Enrollment.objects.select_related('worker', 'course')
    raise InvalidRole()


def progress(actor):
    require_role(actor, Role.WORKER)
    enrollments = (
        Enrollment.objects
        .filter(worker_id=actor.id, course__trainer__isnull=False)
        .select_related('course')
        .annotate(total_lessons=Count('course__lessons'))
    )

    rows = []
    for enrollment in enrollments:
        total = enrollment.total_lessons
        if total:
            completed = round_half_up(Decimal(enrollment.progress_percentage or 0) / 100 * total)
        else:
            completed = 0
        rows.append({
            'course_id': str(enrollment.course_id),
            'course_title': enrollment.course.title,
            'completed_lessons': completed,
            'total_lessons': total,
        })
    return rows


def approve_enrollment(actor, enrollment):
    require_role(actor, Role.ADMIN)
    enrollment.status = Enrollment.Status.APPROVED
    enrollment.save(update_fields=['status', 'updated_at'])
    logger.info(f"Enrollment {enrollment.id} approved by admin {actor.id}")
    return enrollment
