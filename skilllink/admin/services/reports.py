"""
Reporting read models for admins and trainers.

activity_report: latest activity per (worker, course) pair across
enrollments, assessments and certificates.
performance_report: certificates earned and average assessment score per
worker account.
"""
from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Avg, Count
from django.utils import timezone

from admin.models import Role, UserProfile
from trainer.policy import require_role
from worker.models import Assessment, Certificate, Enrollment

ACTIVITY_DATE_FORMAT = '%Y-%m-%d %H:%M'


def _activity_events():
    """Yield ``(worker, course, when)`` for every recorded activity."""
    for enrollment in Enrollment.objects.select_related('worker', 'course'):
        yield enrollment.worker, enrollment.course, enrollment.created_at

    for assessment in Assessment.objects.select_related('worker', 'course'):
        yield assessment.worker, assessment.course, assessment.completed_at or assessment.created_at

    for certificate in Certificate.objects.select_related('worker', 'course'):
        yield certificate.worker, certificate.course, certificate.issued_at


def activity_report(actor):
    require_role(actor, Role.ADMIN, Role.TRAINER, message='Forbidden: admins and trainers only')

    latest = {}
    for worker, course, when in _activity_events():
        if worker is None or course is None or when is None:
            continue
        key = (worker.id, course.id)
        if key not in latest or when > latest[key][2]:
            latest[key] = (worker.name, course.title, when)

    rows = sorted(latest.values(), key=lambda row: row[2], reverse=True)
    return [
        {
            'worker': worker_name,
            'course': course_title,
            'last_activity': timezone.localtime(when).strftime(ACTIVITY_DATE_FORMAT),
        }
        for worker_name, course_title, when in rows
    ]


def performance_report(actor):
    require_role(actor, Role.ADMIN, Role.TRAINER, message='Forbidden: admins and trainers only')

    averages = dict(
        Assessment.objects.order_by().values('worker_id').annotate(avg=Avg('score')).values_list('worker_id', 'avg')
    )
    completed = dict(
        Certificate.objects.order_by().values('worker_id').annotate(total=Count('id')).values_list('worker_id', 'total')
    )

    rows = []
    for worker in UserProfile.objects.filter(role=Role.WORKER):
        average = averages.get(worker.id)
        if average is None:
            average_score = 0
        else:
            average_score = int(Decimal(str(average)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))
        rows.append({
            'worker': worker.name,
            'completed_courses': completed.get(worker.id, 0),
            'average_score': average_score,
        })

    rows.sort(key=lambda row: (row['average_score'], row['completed_courses']), reverse=True)
    return rows
