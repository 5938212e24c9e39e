"""
Health endpoints and media frame-options middleware
"""
from unittest import mock

from django.test import TestCase

from .health_check import HealthCheckService


class HealthCheckTests(TestCase):

    def test_liveness_is_public(self):
        response = self.client.get('/api/health/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'healthy')

    def test_database_probe(self):
        response = self.client.get('/api/health/database/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['database'], 'connected')

    def test_database_probe_reports_outage(self):
        down = {'status': 'unhealthy', 'database': 'disconnected', 'error': 'connection refused'}
        with mock.patch.object(HealthCheckService, 'check_database', return_value=down):
            response = self.client.get('/api/health/database/')
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()['database'], 'disconnected')


class MediaFrameOptionsTests(TestCase):

    def test_media_responses_are_frameable(self):
        response = self.client.get('/media/certificates/missing.pdf')
        self.assertNotIn('X-Frame-Options', response)

    def test_other_responses_keep_the_header(self):
        response = self.client.get('/api/health/')
        self.assertIn('X-Frame-Options', response)
