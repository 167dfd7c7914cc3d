"""
Serializers for the HOS Logbook API.

Handles validation of log entries, daily logs and schedule requests, and
converts them into the service dataclasses.
"""

from rest_framework import serializers

from .services.hos_service import DailyLog, DailyTotals, DutyStatus, LogEntry
from .services.route_service import RouteSummary, SECONDS_TO_HOURS
from .services.slot_codec import TimeFormatError, parse_time_slot
from .services.timeline_service import aggregate_timeline, build_timeline


class TimeOfDayField(serializers.CharField):
    """HH:MM time of day, or 24:00 for end of day."""

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        try:
            parse_time_slot(value)
        except TimeFormatError as e:
            raise serializers.ValidationError(str(e))
        return value


class DutyStatusField(serializers.CharField):
    """Duty status, normalized to a DutyStatus member."""

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        try:
            return DutyStatus.parse(value)
        except ValueError as e:
            raise serializers.ValidationError(str(e))

    def to_representation(self, value):
        return value.value if isinstance(value, DutyStatus) else str(value)


class LogEntrySerializer(serializers.Serializer):
    """
    Serializer for a single duty-status entry.
    """
    start_time = TimeOfDayField(help_text="Start time in HH:MM format")
    end_time = TimeOfDayField(help_text="End time in HH:MM format (24:00 for end of day)")
    status = DutyStatusField(help_text="off_duty, sleeper_berth, driving or on_duty")
    location = serializers.CharField(required=False, allow_blank=True, default="")
    duration_hours = serializers.FloatField(required=False, min_value=0, default=0.0)

    def to_entry(self, data=None) -> LogEntry:
        data = data if data is not None else self.validated_data
        return LogEntry(
            start_time=data['start_time'],
            end_time=data['end_time'],
            status=data['status'],
            location=data.get('location', ''),
            duration_hours=data.get('duration_hours', 0.0)
        )


class TimelineInputSerializer(serializers.Serializer):
    """
    Input serializer for building one day's timeline.
    """
    entries = LogEntrySerializer(many=True, allow_empty=True)

    def to_entries(self):
        child = LogEntrySerializer()
        return [child.to_entry(e) for e in self.validated_data['entries']]


class DailyTotalsSerializer(serializers.Serializer):
    """
    Serializer for a day's hour totals.
    """
    driving_hours = serializers.FloatField(min_value=0, default=0.0)
    on_duty_hours = serializers.FloatField(min_value=0, default=0.0)
    off_duty_hours = serializers.FloatField(min_value=0, default=0.0)
    sleeper_berth_hours = serializers.FloatField(min_value=0, default=0.0)


class DailyLogSerializer(serializers.Serializer):
    """
    Serializer for a daily log sheet.

    When totals are omitted they are computed from the entries' timeline.
    """
    date = serializers.DateField(required=False, allow_null=True, default=None)
    entries = LogEntrySerializer(many=True, allow_empty=True, required=False, default=list)
    totals = DailyTotalsSerializer(required=False, allow_null=True, default=None)

    def to_daily_log(self, data=None) -> DailyLog:
        data = data if data is not None else self.validated_data
        child = LogEntrySerializer()
        entries = [child.to_entry(e) for e in data.get('entries') or []]

        if data.get('totals') is not None:
            totals = DailyTotals(**data['totals'])
        else:
            totals = aggregate_timeline(build_timeline(entries))

        log_date = data.get('date')
        return DailyLog(
            date=log_date.isoformat() if log_date else '',
            entries=entries,
            totals=totals
        )


class DailyLogSetSerializer(serializers.Serializer):
    """
    Input serializer for a sequence of consecutive daily logs.
    """
    daily_logs = DailyLogSerializer(many=True, allow_empty=True)

    def to_daily_logs(self):
        child = DailyLogSerializer()
        return [child.to_daily_log(d) for d in self.validated_data['daily_logs']]


# One year of driving
MAX_SCHEDULE_HOURS = 24 * 366


class ScheduleInputSerializer(serializers.Serializer):
    """
    Input serializer for schedule generation.

    The route comes from the routing service; either the duration in hours
    or the raw duration in seconds must be given.
    """
    total_distance_miles = serializers.FloatField(min_value=0, default=0.0)
    total_duration_hours = serializers.FloatField(
        required=False, min_value=0, max_value=MAX_SCHEDULE_HOURS
    )
    duration_seconds = serializers.FloatField(
        required=False, min_value=0, max_value=MAX_SCHEDULE_HOURS * 3600
    )
    start_time = TimeOfDayField(required=False, help_text="Departure time in HH:MM format")
    start_date = serializers.DateField(required=False, help_text="Departure date (YYYY-MM-DD)")

    def validate(self, data):
        """Require a route duration."""
        if 'total_duration_hours' not in data and 'duration_seconds' not in data:
            raise serializers.ValidationError({
                'total_duration_hours': 'Provide total_duration_hours or duration_seconds.'
            })
        if data.get('start_time') == '24:00':
            raise serializers.ValidationError({
                'start_time': 'Departure must be between 00:00 and 23:59.'
            })
        return data

    def to_route(self) -> RouteSummary:
        data = self.validated_data
        if 'total_duration_hours' in data:
            hours = data['total_duration_hours']
        else:
            hours = data['duration_seconds'] * SECONDS_TO_HOURS
        return RouteSummary(
            total_distance_miles=data['total_distance_miles'],
            total_duration_hours=hours
        )


class HealthCheckSerializer(serializers.Serializer):
    """
    Serializer for health check response.
    """
    status = serializers.CharField()
    message = serializers.CharField()
    version = serializers.CharField()
    timestamp = serializers.DateTimeField()
