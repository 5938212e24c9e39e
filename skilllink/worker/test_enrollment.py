"""
Enrollment workflow tests
"""
import threading
from decimal import Decimal
from unittest import mock

from django.db import connections
from django.test import SimpleTestCase, TransactionTestCase
from rest_framework.test import APITestCase

from admin.models import Role
from skilllink.exceptions import CourseFull
from skilllink.fixtures import make_course, make_lessons, make_user
from trainer.policy import Actor
from .models import Enrollment
from .services import enrollment as enrollment_service
from .services.enrollment import format_progress, round_half_up


class FormattingTests(SimpleTestCase):

    def test_progress_drops_trailing_zeros(self):
        self.assertEqual(format_progress(Decimal('50.00')), '50%')
        self.assertEqual(format_progress(Decimal('12.50')), '12.5%')
        self.assertEqual(format_progress(Decimal('100.00')), '100%')
        self.assertEqual(format_progress(None), '0%')

    def test_round_half_up(self):
        self.assertEqual(round_half_up(Decimal('1.5')), 2)
        self.assertEqual(round_half_up(Decimal('2.5')), 3)
        self.assertEqual(round_half_up(Decimal('2.49')), 2)


class EnrollTests(APITestCase):

    def setUp(self):
        self.trainer = make_user(Role.TRAINER)
        self.worker = make_user(Role.WORKER)
        self.course = make_course(self.trainer, status='approved')

    def _enroll(self, user, course_id, url='/api/enrollments/'):
        self.client.force_authenticate(user=user)
        return self.client.post(url, {'course_id': str(course_id)})

    def test_worker_enrolls_in_approved_course(self):
        response = self._enroll(self.worker, self.course.id)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['status'], 'approved')
        enrollment = Enrollment.objects.get(worker=self.worker, course=self.course)
        self.assertEqual(enrollment.progress_percentage, Decimal('0'))

    def test_legacy_enroll_route(self):
        response = self._enroll(self.worker, self.course.id, url='/api/enroll/')
        self.assertEqual(response.status_code, 201)
        self.assertTrue(Enrollment.objects.filter(worker=self.worker, course=self.course).exists())

    def test_duplicate_enrollment_is_rejected(self):
        self._enroll(self.worker, self.course.id)
        response = self._enroll(self.worker, self.course.id)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Already enrolled in this course')
        self.assertEqual(Enrollment.objects.filter(worker=self.worker).count(), 1)

    def test_unapproved_course_is_not_available(self):
        pending = make_course(self.trainer, status='pending')
        response = self._enroll(self.worker, pending.id)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Course is not available for enrollment')

    def test_unknown_course_is_not_found(self):
        response = self._enroll(self.worker, '00000000-0000-0000-0000-000000000000')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data['message'], 'Course not found')

    def test_malformed_course_id_is_a_validation_error(self):
        response = self._enroll(self.worker, 'not-a-uuid')
        self.assertEqual(response.status_code, 422)
        self.assertIn('course_id', response.data['errors'])

    def test_only_workers_enroll(self):
        for user in (self.trainer, make_user(Role.ADMIN)):
            response = self._enroll(user, self.course.id)
            self.assertEqual(response.status_code, 403)
            self.assertEqual(response.data['message'], 'Forbidden: workers only')
        self.assertFalse(Enrollment.objects.exists())

    def test_capacity_is_enforced_at_the_limit(self):
        course = make_course(self.trainer, status='approved', enrollment_limit=2)
        first, second, third = make_user(), make_user(), make_user()

        self.assertEqual(self._enroll(first, course.id).status_code, 201)
        self.assertEqual(self._enroll(second, course.id).status_code, 201)

        response = self._enroll(third, course.id)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Course is full')
        self.assertEqual(course.enrollments.count(), 2)

    def test_full_check_comes_before_duplicate_check(self):
        course = make_course(self.trainer, status='approved', enrollment_limit=1)
        self._enroll(self.worker, course.id)
        response = self._enroll(self.worker, course.id)
        self.assertEqual(response.data['message'], 'Course is full')

    def test_duplicate_check_comes_before_approval_check(self):
        Enrollment.objects.create(worker=self.worker, course=self.course)
        self.course.status = 'rejected'
        self.course.save()
        response = self._enroll(self.worker, self.course.id)
        self.assertEqual(response.data['message'], 'Already enrolled in this course')

    def test_full_check_comes_before_approval_check(self):
        course = make_course(self.trainer, status='pending', enrollment_limit=1)
        Enrollment.objects.create(worker=make_user(), course=course)
        response = self._enroll(self.worker, course.id)
        self.assertEqual(response.data['message'], 'Course is full')


class ConcurrentEnrollTests(TransactionTestCase):

    def setUp(self):
        self.course = make_course(make_user(Role.TRAINER), status='approved', enrollment_limit=1)
        self.workers = [make_user(Role.WORKER), make_user(Role.WORKER)]

    def test_two_workers_race_for_the_last_seat(self):
        barrier = threading.Barrier(2)
        seats_taken = enrollment_service._seats_taken
        waited = threading.local()
        outcomes = []

        def seats_taken_together(course):
            # both requests have read the seat count before either writes
            taken = seats_taken(course)
            if not getattr(waited, 'done', False):
                waited.done = True
                try:
                    barrier.wait(timeout=2)
                except threading.BrokenBarrierError:
                    pass
            return taken

        def attempt(worker):
            try:
                enrollment_service.enroll(Actor.from_user(worker), self.course.id)
                outcomes.append('enrolled')
            except CourseFull:
                outcomes.append('full')
            except Exception as e:
                outcomes.append(type(e).__name__)
            finally:
                connections.close_all()

        with mock.patch.object(enrollment_service, '_seats_taken', side_effect=seats_taken_together):
            threads = [threading.Thread(target=attempt, args=(worker,)) for worker in self.workers]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        self.assertEqual(sorted(outcomes), ['enrolled', 'full'])
        self.assertEqual(Enrollment.objects.filter(course=self.course).count(), 1)


class EnrollmentListTests(APITestCase):

    def setUp(self):
        self.trainer = make_user(Role.TRAINER)
        self.worker = make_user(Role.WORKER)
        self.course = make_course(self.trainer, title='Ladder Safety', status='approved', enrollment_limit=10)
        self.enrollment = Enrollment.objects.create(
            worker=self.worker, course=self.course, progress_percentage=Decimal('50.00')
        )
        Enrollment.objects.create(worker=make_user(), course=self.course)

    def test_worker_gets_a_summary_of_their_enrollments(self):
        self.client.force_authenticate(user=self.worker)
        response = self.client.get('/api/enrollments/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), 1)
        row = response.data[0]
        self.assertEqual(row['id'], str(self.enrollment.id))
        self.assertEqual(row['course_id'], str(self.course.id))
        self.assertEqual(row['course'], 'Ladder Safety')
        self.assertEqual(row['course_title'], 'Ladder Safety')
        self.assertEqual(row['progress'], '50%')
        self.assertEqual(row['status'], 'approved')
        self.assertEqual(row['course_status'], 'approved')
        self.assertEqual(row['enrollment_limit'], 10)
        self.assertEqual(row['enrollment_count'], 2)

    def test_enrollments_of_trainerless_courses_are_hidden(self):
        self.trainer.delete()
        self.client.force_authenticate(user=self.worker)
        response = self.client.get('/api/enrollments/')
        self.assertEqual(response.data, [])

    def test_trainer_sees_every_enrollment_row(self):
        self.client.force_authenticate(user=self.trainer)
        response = self.client.get('/api/enrollments/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), 2)
        self.assertIn('worker', response.data[0])
        self.assertIn('progress_percentage', response.data[0])


class ProgressTests(APITestCase):

    def setUp(self):
        self.trainer = make_user(Role.TRAINER)
        self.worker = make_user(Role.WORKER)

    def test_completed_lessons_round_half_up(self):
        course = make_course(self.trainer, title='Three lessons')
        make_lessons(course, 3)
        Enrollment.objects.create(worker=self.worker, course=course, progress_percentage=Decimal('50.00'))

        empty = make_course(self.trainer, title='No lessons')
        Enrollment.objects.create(worker=self.worker, course=empty, progress_percentage=Decimal('80.00'))

        self.client.force_authenticate(user=self.worker)
        response = self.client.get('/api/progress/')
        self.assertEqual(response.status_code, 200)
        rows = {row['course_title']: row for row in response.data}
        self.assertEqual(rows['Three lessons']['completed_lessons'], 2)
        self.assertEqual(rows['Three lessons']['total_lessons'], 3)
        self.assertEqual(rows['No lessons']['completed_lessons'], 0)
        self.assertEqual(rows['No lessons']['total_lessons'], 0)

    def test_progress_is_for_workers_only(self):
        self.client.force_authenticate(user=self.trainer)
        response = self.client.get('/api/progress/')
        self.assertEqual(response.status_code, 403)
