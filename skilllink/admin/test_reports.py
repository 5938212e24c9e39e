"""
Activity and performance report tests
"""
import datetime

from rest_framework.test import APITestCase

from skilllink.fixtures import make_course, make_user
from worker.models import Assessment, Certificate, Enrollment
from .models import Role


def _at(day, hour=9, minute=0):
    return datetime.datetime(2024, 3, day, hour, minute, tzinfo=datetime.timezone.utc)


class ActivityReportTests(APITestCase):

    def setUp(self):
        self.admin = make_user(Role.ADMIN)
        self.trainer = make_user(Role.TRAINER)
        self.alice = make_user(Role.WORKER, name='Alice')
        self.bob = make_user(Role.WORKER, name='Bob')
        self.course = make_course(self.trainer, title='Welding')

        alice_enrollment = Enrollment.objects.create(worker=self.alice, course=self.course)
        bob_enrollment = Enrollment.objects.create(worker=self.bob, course=self.course)
        Enrollment.objects.filter(pk=alice_enrollment.pk).update(created_at=_at(1))
        Enrollment.objects.filter(pk=bob_enrollment.pk).update(created_at=_at(2, 14, 5))
        Assessment.objects.create(worker=self.alice, course=self.course, score=80, completed_at=_at(5, 16, 45))

    def test_latest_activity_per_pair_newest_first(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get('/api/reports/activities/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, [
            {'worker': 'Alice', 'course': 'Welding', 'last_activity': '2024-03-05 16:45'},
            {'worker': 'Bob', 'course': 'Welding', 'last_activity': '2024-03-02 14:05'},
        ])

    def test_certificate_counts_as_activity(self):
        Certificate.objects.create(
            worker=self.bob, course=self.course, certificate_path='certificates/bob.pdf', issued_at=_at(9, 8, 0)
        )
        self.client.force_authenticate(user=self.trainer)
        response = self.client.get('/api/reports/activities/')
        self.assertEqual(response.data[0], {'worker': 'Bob', 'course': 'Welding', 'last_activity': '2024-03-09 08:00'})

    def test_workers_are_forbidden(self):
        self.client.force_authenticate(user=self.alice)
        response = self.client.get('/api/reports/activities/')
        self.assertEqual(response.status_code, 403)


class PerformanceReportTests(APITestCase):

    def setUp(self):
        self.admin = make_user(Role.ADMIN)
        trainer = make_user(Role.TRAINER)
        first, second = make_course(trainer), make_course(trainer)

        self.ann = make_user(Role.WORKER, name='Ann')
        self.ben = make_user(Role.WORKER, name='Ben')
        self.cat = make_user(Role.WORKER, name='Cat')

        # Ann averages 77.5 which rounds half up to 78
        Assessment.objects.create(worker=self.ann, course=first, score=70)
        Assessment.objects.create(worker=self.ann, course=second, score=85)
        # Ben ties on 78 but holds a certificate
        Assessment.objects.create(worker=self.ben, course=first, score=78)
        Certificate.objects.create(
            worker=self.ben, course=first, certificate_path='certificates/ben.pdf', issued_at=_at(1)
        )

    def test_rows_are_ranked_by_average_then_completions(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get('/api/reports/performance/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, [
            {'worker': 'Ben', 'completed_courses': 1, 'average_score': 78},
            {'worker': 'Ann', 'completed_courses': 0, 'average_score': 78},
            {'worker': 'Cat', 'completed_courses': 0, 'average_score': 0},
        ])

    def test_workers_are_forbidden(self):
        self.client.force_authenticate(user=self.cat)
        response = self.client.get('/api/reports/performance/')
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data['message'], 'Forbidden: trainers or admins only')
