"""
HOS Logbook API Views.

REST API consumed by the trip-planner frontend:
- Health check
- Timeline normalization for a day's entries
- Compliance evaluation of daily logs
- Log sheet rendering data
- HOS schedule generation for a route
- HOS configuration
"""

import logging
from datetime import datetime
from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.decorators import api_view

from .serializers import (
    DailyLogSetSerializer,
    HealthCheckSerializer,
    ScheduleInputSerializer,
    TimelineInputSerializer,
)
from .services import ELDLogService, HOSConfig, HOSService

logger = logging.getLogger(__name__)

API_VERSION = '1.0.0'


def _validation_error(serializer):
    return Response(
        {'error': 'Validation failed', 'details': serializer.errors},
        status=status.HTTP_400_BAD_REQUEST
    )


class HealthCheckView(APIView):
    """
    Health check endpoint for monitoring and load balancers.

    GET /api/health/
    """

    def get(self, request):
        """Return health status of the API."""
        data = {
            'status': 'healthy',
            'message': 'HOS Logbook API is running',
            'version': API_VERSION,
            'timestamp': datetime.now()
        }
        serializer = HealthCheckSerializer(data)
        return Response(serializer.data, status=status.HTTP_200_OK)


# =============================================================================
# Timeline - POST /api/logs/timeline/
# =============================================================================

class TimelineView(APIView):
    """
    POST /api/logs/timeline/
    Normalize one day's entries into the 96-slot timeline.
    """

    def post(self, request):
        """
        Request:
        {
            "entries": [
                {"start_time": "08:00", "end_time": "14:00", "status": "driving"},
                {"start_time": "14:00", "end_time": "24:00", "status": "off_duty"}
            ]
        }

        Response:
        {
            "timeline": ["off_duty", ..., "driving", ...],
            "totals": {"driving_hours": 6.0, ...},
            "issues": [],
            "duty_bars": [...]
        }
        """
        serializer = TimelineInputSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_error(serializer)

        entries = serializer.to_entries()
        result = ELDLogService().render_entries(entries)

        logger.info(
            f"Built timeline from {len(entries)} entries "
            f"({len(result['issues'])} issues)"
        )
        return Response(result, status=status.HTTP_200_OK)


# =============================================================================
# Compliance - POST /api/logs/compliance/
# =============================================================================

class ComplianceView(APIView):
    """
    POST /api/logs/compliance/
    Check consecutive daily logs against the HOS limits.
    """

    def post(self, request):
        serializer = DailyLogSetSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_error(serializer)

        try:
            daily_logs = serializer.to_daily_logs()
            report = HOSService(HOSConfig.from_settings()).evaluate_compliance(daily_logs)
            return Response(report.to_dict(), status=status.HTTP_200_OK)

        except Exception as e:
            logger.exception(f"Compliance evaluation failed: {e}")
            return Response(
                {'error': 'Compliance evaluation failed', 'details': str(e)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )


# =============================================================================
# Log Sheets - POST /api/logs/render/
# =============================================================================

class LogSheetView(APIView):
    """
    POST /api/logs/render/
    Prepare daily logs for drawing on the log grid.
    """

    def post(self, request):
        serializer = DailyLogSetSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_error(serializer)

        try:
            daily_logs = serializer.to_daily_logs()
            sheets = ELDLogService().generate_logs_json(daily_logs)
            return Response({
                'daily_logs': sheets,
                'total_days': len(sheets)
            }, status=status.HTTP_200_OK)

        except Exception as e:
            logger.exception(f"Log sheet generation failed: {e}")
            return Response(
                {'error': 'Log sheet generation failed', 'details': str(e)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )


# =============================================================================
# Schedule - POST /api/schedule/
# =============================================================================

class ScheduleView(APIView):
    """
    POST /api/schedule/
    Generate HOS-compliant daily logs for a route.
    """

    def post(self, request):
        """
        Request:
        {
            "total_distance_miles": 1200,
            "total_duration_hours": 20.5,
            "start_time": "08:00",
            "start_date": "2024-01-15"
        }

        Response:
        {
            "route": {...},
            "daily_logs": [...],
            "compliance": {"isCompliant": true, "violations": [], "warnings": [...]},
            "statistics": {...},
            "summary": {...}
        }
        """
        serializer = ScheduleInputSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_error(serializer)

        validated_data = serializer.validated_data

        try:
            route = serializer.to_route()
            logger.info(
                f"Planning schedule: {route.total_distance_miles:.1f} miles, "
                f"{route.total_duration_hours:.1f}h driving"
            )

            hos_service = HOSService(HOSConfig.from_settings())
            plan = hos_service.plan_trip(
                route,
                start_time=validated_data.get('start_time'),
                start_date=validated_data.get('start_date')
            )
            return Response(plan.to_dict(), status=status.HTTP_200_OK)

        except Exception as e:
            logger.exception(f"Schedule generation failed: {e}")
            return Response(
                {'error': 'Schedule generation failed', 'details': str(e)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )


# =============================================================================
# HOS Configuration
# =============================================================================

class HOSConfigView(APIView):
    """
    GET /api/config/hos - Get current HOS rules/assumptions
    """

    def get(self, request):
        """Get current HOS configuration and assumptions."""
        config = HOSConfig.from_settings()

        return Response({
            'daily_limits': {
                'max_driving_hours': config.max_driving_hours,
                'max_on_duty_hours': config.max_on_duty_hours,
                'high_driving_warning_hours': config.high_driving_warning_hours,
                'description': '11 hours driving, 14 hours on duty per day'
            },
            'rest': {
                'off_duty_reset_hours': config.off_duty_reset_hours,
                'break_duration_hours': config.break_duration_hours,
                'description': '10 hours off duty or sleeper berth per day'
            },
            'schedule': {
                'default_start_time': config.default_start_time,
                'hours_per_day': config.hours_per_day
            },
            'estimates': {
                'fuel_cost_per_mile': config.fuel_cost_per_mile,
                'toll_cost_per_mile': config.toll_cost_per_mile
            },
            'assumptions': [
                'Property-carrying driver (not passenger)',
                'Limits checked per day; no 60/70-hour rolling cycle',
                'No 34-hour restart',
                'No adverse driving conditions or short-haul exceptions',
                'Unaccounted time on a log counts as off duty'
            ]
        }, status=status.HTTP_200_OK)


@api_view(['GET'])
def api_root(request):
    """
    GET /api/
    API documentation and endpoint listing.
    """
    return Response({
        'name': 'HOS Logbook API',
        'version': API_VERSION,
        'description': 'Hours of Service timelines, compliance checks and schedules for truck drivers',
        'endpoints': {
            'health': {
                'GET /api/health/': 'Health check'
            },
            'logs': {
                'POST /api/logs/timeline/': 'Build a day timeline from entries',
                'POST /api/logs/compliance/': 'Check daily logs against HOS limits',
                'POST /api/logs/render/': 'Prepare daily logs for the log grid'
            },
            'schedule': {
                'POST /api/schedule/': 'Generate HOS-compliant daily logs for a route'
            },
            'config': {
                'GET /api/config/hos': 'Get HOS rules and assumptions'
            }
        }
    })
