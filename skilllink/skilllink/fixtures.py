"""
Object builders shared by the app test modules
"""
import itertools

from admin.models import ApprovalStatus, Role, UserProfile
from trainer.models import Course, Lesson

_counter = itertools.count(1)

DEFAULT_PASSWORD = 'password123'


def make_user(role=Role.WORKER, name=None, email=None, status=ApprovalStatus.APPROVED, password=DEFAULT_PASSWORD):
    n = next(_counter)
    profile = UserProfile(
        name=name or f"{str(role).title()} {n}",
        email=email or f"{role}{n}@example.com",
        role=role,
        status=status,
    )
    profile.set_password(password)
    profile.save()
    return profile


def make_course(trainer, title=None, status=ApprovalStatus.APPROVED, enrollment_limit=None, **extra):
    return Course.objects.create(
        trainer=trainer,
        title=title or f"Course {next(_counter)}",
        status=status,
        enrollment_limit=enrollment_limit,
        **extra
    )


def make_lessons(course, count):
    return [
        Lesson.objects.create(course=course, title=f"Lesson {i + 1}", order=i)
        for i in range(count)
    ]
