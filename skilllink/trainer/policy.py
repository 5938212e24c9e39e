"""
Authorization policy

Every workflow function receives an Actor built from the authenticated
request user and asks this module who may see or change what. Role
branches are exhaustive: anything outside Role raises InvalidRole.
"""
from dataclasses import dataclass
from uuid import UUID

from django.db.models import Q
from rest_framework.exceptions import NotAuthenticated, PermissionDenied

from admin.models import ApprovalStatus, Role
from skilllink.exceptions import InvalidRole


@dataclass(frozen=True)
class Actor:
    id: UUID
    role: Role

    @classmethod
    def from_user(cls, user):
        if user is None or not getattr(user, 'is_authenticated', False):
            raise NotAuthenticated()
        try:
            role = Role(user.role)
        except (AttributeError, ValueError):
            raise InvalidRole()
        return cls(id=user.id, role=role)

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    @property
    def is_trainer(self):
        return self.role == Role.TRAINER

    @property
    def is_worker(self):
        return self.role == Role.WORKER


def get_actor(request):
    return Actor.from_user(getattr(request, 'user', None))


def require_role(actor, *roles, message=None):
    """Raise PermissionDenied unless the actor holds one of ``roles``."""
    if actor.role not in roles:
        if message is None:
            names = ' or '.join(f"{Role(r).value}s" for r in roles)
            message = f"Forbidden: {names} only"
        raise PermissionDenied(message)


def can_manage_course(actor, course):
    """Admins manage every course, trainers only their own, workers none."""
    if actor.role == Role.ADMIN:
        return True
    elif actor.role == Role.TRAINER:
        return course.trainer_id is not None and course.trainer_id == actor.id
    elif actor.role == Role.WORKER:
        return False
    raise InvalidRole()


def ensure_can_manage_course(actor, course, message='Forbidden: You can only manage your own courses'):
    if not can_manage_course(actor, course):
        raise PermissionDenied(message)


def can_view_course(actor, course):
    if actor.role == Role.ADMIN:
        return True
    elif actor.role == Role.TRAINER:
        return course.trainer_id == actor.id or course.status == ApprovalStatus.APPROVED
    elif actor.role == Role.WORKER:
        return course.status == ApprovalStatus.APPROVED
    raise InvalidRole()


def course_visibility(actor, prefix=''):
    """
    Q filter of courses the actor may read. ``prefix`` points at the course
    from a related model, e.g. ``course__`` for lessons.
    """
    if actor.role == Role.ADMIN:
        return Q()
    elif actor.role == Role.TRAINER:
        return Q(**{f'{prefix}trainer_id': actor.id}) | Q(**{f'{prefix}status': ApprovalStatus.APPROVED})
    elif actor.role == Role.WORKER:
        return Q(**{f'{prefix}status': ApprovalStatus.APPROVED})
    raise InvalidRole()


def quiz_visibility(actor):
    """Trainers see their own quizzes plus every quiz of an approved course."""
    if actor.role == Role.ADMIN:
        return Q()
    elif actor.role == Role.TRAINER:
        return Q(trainer_id=actor.id) | Q(course__status=ApprovalStatus.APPROVED)
    elif actor.role == Role.WORKER:
        return Q(course__status=ApprovalStatus.APPROVED)
    raise InvalidRole()


def can_manage_quiz(actor, quiz):
    if actor.role == Role.ADMIN:
        return True
    elif actor.role == Role.TRAINER:
        return quiz.trainer_id == actor.id
    elif actor.role == Role.WORKER:
        return False
    raise InvalidRole()


def assessment_visibility(actor):
    """Workers see their own assessments, trainers those of their courses."""
    if actor.role == Role.ADMIN:
        return Q()
    elif actor.role == Role.TRAINER:
        return Q(course__trainer_id=actor.id)
    elif actor.role == Role.WORKER:
        return Q(worker_id=actor.id)
    raise InvalidRole()
