"""
Assessment submission. One assessment per (worker, course); resubmitting
overwrites the score in place. Passing never issues a certificate by itself.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone
from rest_framework.exceptions import NotFound

from admin.models import Role
from skilllink.exceptions import NotEnrolled
from trainer.models import Course
from trainer.policy import require_role
from worker.models import Assessment, Enrollment

logger = logging.getLogger(__name__)

_UNSET = object()


def submit_assessment(actor, course_id, score, remarks=_UNSET):
    """
    Record ``score`` for the actor on ``course_id``.

    Returns ``(assessment, result, created)`` where result is 'passed' or
    'failed'.
    """
    require_role(actor, Role.WORKER)

    try:
        course = Course.objects.get(pk=course_id)
    except (Course.DoesNotExist, DjangoValidationError):
        raise NotFound('Course not found')

    if not Enrollment.objects.filter(worker_id=actor.id, course=course).exists():
        raise NotEnrolled()

    defaults = {'score': score, 'completed_at': timezone.now()}
    if remarks is not _UNSET:
        defaults['remarks'] = remarks

    # update_or_create locks the existing row inside its own transaction
    assessment, created = Assessment.objects.update_or_create(
        worker_id=actor.id,
        course=course,
        defaults=defaults,
    )

    logger.info(
        f"Assessment {'created' if created else 'updated'} for worker {actor.id} "
        f"on course {course.id}: score {score} ({assessment.result})"
    )
    return assessment, assessment.result, created
