"""
Course lifecycle and visibility tests
"""
from rest_framework.test import APITestCase

from admin.models import Role
from skilllink.fixtures import make_course, make_lessons, make_user
from worker.models import Enrollment
from .models import Course


class CourseVisibilityTests(APITestCase):
    """Listings are filtered per role and hide trainer-less courses"""

    def setUp(self):
        self.trainer = make_user(Role.TRAINER)
        self.other_trainer = make_user(Role.TRAINER)
        self.worker = make_user(Role.WORKER)
        self.admin = make_user(Role.ADMIN)

        self.own_pending = make_course(self.trainer, title='Own pending', status='pending')
        self.own_rejected = make_course(self.trainer, title='Own rejected', status='rejected')
        self.other_approved = make_course(self.other_trainer, title='Other approved', status='approved')
        self.other_pending = make_course(self.other_trainer, title='Other pending', status='pending')
        self.orphan = make_course(None, title='Orphan', status='approved')

    def _titles(self, user):
        self.client.force_authenticate(user=user)
        response = self.client.get('/api/courses/')
        self.assertEqual(response.status_code, 200)
        return {row['title'] for row in response.data}

    def test_worker_sees_only_approved_courses(self):
        self.assertEqual(self._titles(self.worker), {'Other approved'})

    def test_trainer_sees_own_and_approved_courses(self):
        self.assertEqual(self._titles(self.trainer), {'Own pending', 'Own rejected', 'Other approved'})

    def test_admin_sees_everything_with_a_trainer(self):
        self.assertEqual(
            self._titles(self.admin),
            {'Own pending', 'Own rejected', 'Other approved', 'Other pending'}
        )

    def test_unauthenticated_request_is_rejected(self):
        response = self.client.get('/api/courses/')
        self.assertEqual(response.status_code, 401)
        self.assertIn('message', response.data)

    def test_invalid_role_is_forbidden(self):
        self.client.force_authenticate(user=make_user('manager'))
        response = self.client.get('/api/courses/')
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data['message'], 'Invalid user role')

    def test_listing_reports_capacity(self):
        course = make_course(self.trainer, title='Small', status='approved', enrollment_limit=1)
        Enrollment.objects.create(worker=self.worker, course=course)

        self.client.force_authenticate(user=self.worker)
        response = self.client.get('/api/courses/')
        row = next(r for r in response.data if r['title'] == 'Small')
        self.assertEqual(row['enrollment_count'], 1)
        self.assertTrue(row['is_full'])
        self.assertEqual(row['enrollment_limit'], 1)

    def test_retrieve_includes_lessons_in_order(self):
        make_lessons(self.other_approved, 3)
        self.client.force_authenticate(user=self.worker)
        response = self.client.get(f'/api/courses/{self.other_approved.id}/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual([l['title'] for l in response.data['lessons']], ['Lesson 1', 'Lesson 2', 'Lesson 3'])

    def test_retrieve_hidden_course_is_forbidden(self):
        self.client.force_authenticate(user=self.worker)
        response = self.client.get(f'/api/courses/{self.other_pending.id}/')
        self.assertEqual(response.status_code, 403)


class CourseLessonsEndpointTests(APITestCase):

    def setUp(self):
        self.trainer = make_user(Role.TRAINER)
        self.other_trainer = make_user(Role.TRAINER)
        self.worker = make_user(Role.WORKER)
        self.pending = make_course(self.trainer, status='pending')

    def test_worker_cannot_read_lessons_of_unapproved_course(self):
        self.client.force_authenticate(user=self.worker)
        response = self.client.get(f'/api/courses/{self.pending.id}/lessons/')
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data['message'], 'Forbidden: Course not approved')

    def test_other_trainer_cannot_read_lessons_of_unapproved_course(self):
        self.client.force_authenticate(user=self.other_trainer)
        response = self.client.get(f'/api/courses/{self.pending.id}/lessons/')
        self.assertEqual(response.status_code, 403)
        self.assertEqual(
            response.data['message'],
            'Forbidden: You can only access your own courses or approved courses'
        )

    def test_owner_reads_lessons_ordered_with_nulls_last(self):
        from .models import Lesson
        Lesson.objects.create(course=self.pending, title='Unordered', order=None)
        Lesson.objects.create(course=self.pending, title='Second', order=2)
        Lesson.objects.create(course=self.pending, title='First', order=1)

        self.client.force_authenticate(user=self.trainer)
        response = self.client.get(f'/api/courses/{self.pending.id}/lessons/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['course']['id'], str(self.pending.id))
        self.assertEqual([l['title'] for l in response.data['lessons']], ['First', 'Second', 'Unordered'])

    def test_missing_course_is_not_found(self):
        self.client.force_authenticate(user=self.worker)
        response = self.client.get('/api/courses/00000000-0000-0000-0000-000000000000/lessons/')
        self.assertEqual(response.status_code, 404)


class CourseLifecycleTests(APITestCase):

    def setUp(self):
        self.trainer = make_user(Role.TRAINER)
        self.other_trainer = make_user(Role.TRAINER)
        self.worker = make_user(Role.WORKER)
        self.admin = make_user(Role.ADMIN)

    def test_trainer_creates_pending_course(self):
        self.client.force_authenticate(user=self.trainer)
        response = self.client.post('/api/courses/', {
            'title': 'Forklift Safety',
            'description': 'Basics',
            'category': 'Safety',
            'status': 'approved',
        })
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['status'], 'pending')
        course = Course.objects.get(pk=response.data['id'])
        self.assertEqual(course.trainer_id, self.trainer.id)
        self.assertEqual(course.status, 'pending')

    def test_worker_and_admin_cannot_create_courses(self):
        for user in (self.worker, self.admin):
            self.client.force_authenticate(user=user)
            response = self.client.post('/api/courses/', {'title': 'Nope'})
            self.assertEqual(response.status_code, 403)
            self.assertEqual(response.data['message'], 'Forbidden: trainers only')

    def test_missing_title_is_a_validation_error(self):
        self.client.force_authenticate(user=self.trainer)
        response = self.client.post('/api/courses/', {'description': 'no title'})
        self.assertEqual(response.status_code, 422)
        self.assertIn('title', response.data['errors'])

    def test_admin_approves_and_rejects(self):
        course = make_course(self.trainer, status='pending')
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(f'/api/courses/{course.id}/approve/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Course approved successfully')
        course.refresh_from_db()
        self.assertEqual(course.status, 'approved')
        self.assertEqual(course.approved_by_id, self.admin.id)
        first_stamp = course.approved_at
        self.assertIsNotNone(first_stamp)

        # approved -> rejected is allowed and re-stamps
        response = self.client.get(f'/api/courses/{course.id}/reject/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Course rejected')
        course.refresh_from_db()
        self.assertEqual(course.status, 'rejected')
        self.assertGreaterEqual(course.approved_at, first_stamp)

        # rejected -> approved
        response = self.client.post(f'/api/courses/{course.id}/approve/')
        course.refresh_from_db()
        self.assertEqual(course.status, 'approved')

    def test_non_admin_cannot_approve(self):
        course = make_course(self.trainer, status='pending')
        self.client.force_authenticate(user=self.trainer)
        response = self.client.post(f'/api/courses/{course.id}/approve/')
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data['message'], 'Forbidden: admins only')
        course.refresh_from_db()
        self.assertEqual(course.status, 'pending')

    def test_editing_approved_course_keeps_it_approved(self):
        course = make_course(self.trainer, title='Old', status='approved')
        course.approved_by = self.admin
        course.save()

        self.client.force_authenticate(user=self.trainer)
        response = self.client.put(f'/api/courses/{course.id}/', {'title': 'New', 'status': 'pending'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['title'], 'New')
        self.assertEqual(response.data['status'], 'approved')

        course.refresh_from_db()
        self.assertEqual(course.title, 'New')
        self.assertEqual(course.status, 'approved')
        self.assertEqual(course.approved_by_id, self.admin.id)

    def test_blank_or_zero_enrollment_limit_clears_it(self):
        course = make_course(self.trainer, enrollment_limit=10)
        self.client.force_authenticate(user=self.trainer)

        self.client.patch(f'/api/courses/{course.id}/', {'enrollment_limit': ''})
        course.refresh_from_db()
        self.assertIsNone(course.enrollment_limit)

        self.client.patch(f'/api/courses/{course.id}/', {'enrollment_limit': 5})
        course.refresh_from_db()
        self.assertEqual(course.enrollment_limit, 5)

        self.client.patch(f'/api/courses/{course.id}/', {'enrollment_limit': 0})
        course.refresh_from_db()
        self.assertIsNone(course.enrollment_limit)

    def test_other_trainer_cannot_edit_or_delete(self):
        course = make_course(self.trainer)
        self.client.force_authenticate(user=self.other_trainer)
        self.assertEqual(self.client.put(f'/api/courses/{course.id}/', {'title': 'X'}).status_code, 403)
        self.assertEqual(self.client.delete(f'/api/courses/{course.id}/').status_code, 403)
        self.assertTrue(Course.objects.filter(pk=course.id).exists())

    def test_owner_deletes_course_with_cascade(self):
        course = make_course(self.trainer)
        make_lessons(course, 2)
        Enrollment.objects.create(worker=self.worker, course=course)

        self.client.force_authenticate(user=self.trainer)
        response = self.client.delete(f'/api/courses/{course.id}/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Course deleted successfully')
        self.assertFalse(Course.objects.filter(pk=course.id).exists())
        self.assertFalse(Enrollment.objects.filter(course_id=course.id).exists())

    def test_admin_deletes_any_course(self):
        course = make_course(self.trainer, status='approved')
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete(f'/api/courses/{course.id}/')
        self.assertEqual(response.status_code, 200)

    def test_deleting_trainer_hides_their_courses(self):
        course = make_course(self.trainer, title='Soon orphaned', status='approved')
        self.trainer.delete()
        course.refresh_from_db()
        self.assertIsNone(course.trainer_id)

        self.client.force_authenticate(user=self.worker)
        response = self.client.get('/api/courses/')
        self.assertNotIn('Soon orphaned', [row['title'] for row in response.data])
