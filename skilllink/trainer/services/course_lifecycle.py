"""
Course lifecycle

pending -> approved | rejected, approved -> rejected, rejected -> approved.
Transitions are admin-only and permissive; each one re-stamps approved_by
and approved_at. Field edits never touch status or the approval stamps.
"""
import logging

from django.utils import timezone

from admin.models import ApprovalStatus, Role
from trainer.models import Course
from trainer.policy import ensure_can_manage_course, require_role

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('title', 'description', 'category', 'enrollment_limit')


def _clean_limit(value):
    if value in ('', 0, '0', None):
        return None
    return int(value)


def create_course(actor, data):
    require_role(actor, Role.TRAINER, message='Forbidden: Only trainers can create courses')
    course = Course.objects.create(
        trainer_id=actor.id,
        title=data['title'],
        description=data.get('description'),
        category=data.get('category'),
        enrollment_limit=_clean_limit(data.get('enrollment_limit')),
        status=ApprovalStatus.PENDING,
    )
    logger.info(f"Course {course.id} created by trainer {actor.id}")
    return course


def _transition(actor, course, new_status):
    require_role(actor, Role.ADMIN)
    old_status = course.status
    course.status = new_status
    course.approved_by_id = actor.id
    course.approved_at = timezone.now()
    course.save(update_fields=['status', 'approved_by', 'approved_at', 'updated_at'])
    logger.info(f"Course {course.id} {old_status} -> {new_status} by admin {actor.id}")
    return course


def approve_course(actor, course):
    return _transition(actor, course, ApprovalStatus.APPROVED)


def reject_course(actor, course):
    return _transition(actor, course, ApprovalStatus.REJECTED)


def update_course(actor, course, data):
    """Write only the editable fields present in ``data``."""
    ensure_can_manage_course(actor, course)
    changed = []
    for field in EDITABLE_FIELDS:
        if field not in data:
            continue
        value = data[field]
        if field == 'enrollment_limit':
            value = _clean_limit(value)
        setattr(course, field, value)
        changed.append(field)

    if changed:
        course.save(update_fields=changed + ['updated_at'])
        logger.info(f"Course {course.id} updated by {actor.role} {actor.id}: {', '.join(changed)}")
    return course


def delete_course(actor, course):
    ensure_can_manage_course(actor, course)
    course_id = course.id
    course.delete()
    logger.info(f"Course {course_id} deleted by {actor.role} {actor.id}")
