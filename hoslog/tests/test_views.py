"""
Tests for HOS Logbook API Views.
"""

import pytest
from django.test import TestCase
from rest_framework.test import APIClient
from rest_framework import status


class TestHealthCheckEndpoint(TestCase):
    """Test health check endpoint."""

    def setUp(self):
        self.client = APIClient()

    def test_health_check_returns_200(self):
        """Test that health check returns 200 OK."""
        response = self.client.get('/api/health/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'healthy'
        assert 'version' in response.data
        assert 'timestamp' in response.data


class TestApiRootEndpoint(TestCase):
    """Test API root endpoint."""

    def setUp(self):
        self.client = APIClient()

    def test_api_root_returns_endpoints(self):
        """Test that API root lists available endpoints."""
        response = self.client.get('/api/')

        assert response.status_code == status.HTTP_200_OK
        assert 'endpoints' in response.data
        assert 'health' in response.data['endpoints']
        assert 'schedule' in response.data['endpoints']


class TestTimelineEndpoint(TestCase):
    """Test timeline endpoint."""

    def setUp(self):
        self.client = APIClient()

    def test_build_timeline(self):
        payload = {
            'entries': [
                {'start_time': '08:00', 'end_time': '14:00', 'status': 'driving', 'location': 'Route'},
                {'start_time': '16:00', 'end_time': '18:00', 'status': 'on_duty'},
            ]
        }
        response = self.client.post('/api/logs/timeline/', payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['timeline']) == 96
        assert response.data['timeline'][32] == 'driving'
        assert response.data['timeline'][56] == 'off_duty'
        assert response.data['totals']['driving_hours'] == 6.0
        assert response.data['issues'] == ['Gap of 120 minutes between 14:00 and 16:00']

    def test_empty_entries(self):
        response = self.client.post('/api/logs/timeline/', {'entries': []}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['totals']['off_duty_hours'] == 24.0

    def test_invalid_time_rejected(self):
        payload = {'entries': [{'start_time': '25:00', 'end_time': '26:00', 'status': 'driving'}]}
        response = self.client.post('/api/logs/timeline/', payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Validation failed'

    def test_unknown_status_rejected(self):
        payload = {'entries': [{'start_time': '08:00', 'end_time': '09:00', 'status': 'napping'}]}
        response = self.client.post('/api/logs/timeline/', payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'details' in response.data


class TestComplianceEndpoint(TestCase):
    """Test compliance endpoint."""

    def setUp(self):
        self.client = APIClient()

    def test_violation_reported(self):
        payload = {
            'daily_logs': [{
                'date': '2024-01-01',
                'entries': [],
                'totals': {
                    'driving_hours': 12,
                    'on_duty_hours': 12,
                    'off_duty_hours': 12,
                    'sleeper_berth_hours': 0
                }
            }]
        }
        response = self.client.post('/api/logs/compliance/', payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['isCompliant'] is False
        assert response.data['violations'] == ['Day 1: Exceeded 11-hour driving limit (12.0 hours)']

    def test_totals_computed_from_entries(self):
        """Test a log without totals is checked against its timeline."""
        payload = {
            'daily_logs': [{
                'date': '2024-01-01',
                'entries': [
                    {'start_time': '00:00', 'end_time': '12:00', 'status': 'driving'},
                    {'start_time': '12:00', 'end_time': '24:00', 'status': 'off_duty'},
                ]
            }]
        }
        response = self.client.post('/api/logs/compliance/', payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['isCompliant'] is False
        assert 'Exceeded 11-hour driving limit' in response.data['violations'][0]

    def test_missing_logs(self):
        response = self.client.post('/api/logs/compliance/', {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestLogSheetEndpoint(TestCase):
    """Test log sheet rendering endpoint."""

    def setUp(self):
        self.client = APIClient()

    def test_render_logs(self):
        payload = {
            'daily_logs': [{
                'date': '2024-01-15',
                'entries': [{'start_time': '08:00', 'end_time': '14:00', 'status': 'driving'}]
            }]
        }
        response = self.client.post('/api/logs/render/', payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_days'] == 1
        sheet = response.data['daily_logs'][0]
        assert sheet['day_of_week'] == 'Monday'
        assert sheet['summary']['total_hours'] == 24.0


class TestScheduleEndpoint(TestCase):
    """Test schedule generation endpoint."""

    def setUp(self):
        self.client = APIClient()
        self.valid_payload = {
            'total_distance_miles': 2200,
            'total_duration_hours': 40,
            'start_time': '08:00',
            'start_date': '2024-01-15'
        }

    def test_generate_schedule(self):
        response = self.client.post('/api/schedule/', self.valid_payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['summary']['total_days'] == 4
        assert response.data['compliance']['isCompliant'] is True
        assert response.data['daily_logs'][0]['date'] == '2024-01-15'
        for log in response.data['daily_logs']:
            assert log['totals']['driving_hours'] <= 11
            assert log['totals']['off_duty_hours'] >= 10

    def test_duration_in_seconds(self):
        payload = {'total_distance_miles': 220, 'duration_seconds': 14400, 'start_date': '2024-01-15'}
        response = self.client.post('/api/schedule/', payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['daily_logs']) == 1
        assert response.data['daily_logs'][0]['totals']['driving_hours'] == pytest.approx(4.0)

    def test_zero_duration(self):
        payload = {**self.valid_payload, 'total_duration_hours': 0}
        response = self.client.post('/api/schedule/', payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['daily_logs'] == []
        assert response.data['compliance']['isCompliant'] is True

    def test_missing_duration(self):
        payload = {'total_distance_miles': 100, 'start_time': '08:00'}
        response = self.client.post('/api/schedule/', payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'total_duration_hours' in response.data['details']

    def test_invalid_start_time(self):
        payload = {**self.valid_payload, 'start_time': '8 AM'}
        response = self.client.post('/api/schedule/', payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'start_time' in response.data['details']

    def test_negative_duration_rejected(self):
        payload = {**self.valid_payload, 'total_duration_hours': -3}
        response = self.client.post('/api/schedule/', payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_duration_over_one_year_rejected(self):
        payload = {**self.valid_payload, 'total_duration_hours': 1e9}
        response = self.client.post('/api/schedule/', payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'total_duration_hours' in response.data['details']

    def test_duration_seconds_over_one_year_rejected(self):
        payload = {'total_distance_miles': 100, 'duration_seconds': 1e12, 'start_date': '2024-01-15'}
        response = self.client.post('/api/schedule/', payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'duration_seconds' in response.data['details']

    def test_end_of_day_start_time_rejected(self):
        payload = {**self.valid_payload, 'start_time': '24:00'}
        response = self.client.post('/api/schedule/', payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'start_time' in response.data['details']


class TestHOSConfigEndpoint(TestCase):
    """Test HOS configuration endpoint."""

    def setUp(self):
        self.client = APIClient()

    def test_get_config(self):
        response = self.client.get('/api/config/hos')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['daily_limits']['max_driving_hours'] == 11.0
        assert response.data['rest']['off_duty_reset_hours'] == 10.0
