"""
FMCSA Hours of Service (HOS) Calculation Service.

Implements the Federal Motor Carrier Safety Administration limits for
property-carrying drivers that the daily log sheets are checked against.

FMCSA HOS Rules Implemented:
============================
1. 11-Hour Driving Limit: Max 11 hours driving per day
2. 14-Hour On-Duty Limit: Max 14 hours on duty (not driving) per day
3. 10-Hour Off-Duty: At least 10 hours off duty or in the sleeper berth
4. 30-Minute Break: Taken between the two driving segments of a day

Rules NOT Implemented:
======================
- 60/70-hour rolling cycle and the 34-hour restart
- Adverse driving conditions and short-haul exceptions

Note on the 14-hour check: the day's on-duty (not driving) total is compared
on its own against the 14-hour ceiling. The regulation counts a 14-hour window
from first coming on duty, including driving time.

References:
- https://www.fmcsa.dot.gov/regulations/hours-of-service
"""

import logging
import math
from dataclasses import dataclass, field, fields
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, List, Optional, Union

from .route_service import RouteSummary, RouteStatistics, calculate_route_statistics
from .slot_codec import END_OF_DAY, TimeFormatError, parse_time_slot

logger = logging.getLogger(__name__)


class DutyStatus(Enum):
    """Driver duty status as defined by FMCSA."""
    OFF_DUTY = "off_duty"
    SLEEPER_BERTH = "sleeper_berth"
    DRIVING = "driving"
    ON_DUTY = "on_duty"

    @classmethod
    def parse(cls, value) -> 'DutyStatus':
        """
        Normalize an incoming status value.

        Accepts a DutyStatus, its value ("on_duty"), its name ("ON_DUTY")
        or the long form "on_duty_not_driving".

        Raises:
            ValueError: If the status is not recognized
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in STATUS_ALIASES:
                return STATUS_ALIASES[key]
            for status in cls:
                if status.value == key:
                    return status
        raise ValueError(f"Unknown duty status: {value!r}")


STATUS_ALIASES = {
    'on_duty_not_driving': DutyStatus.ON_DUTY,
}

DUTY_STATUS_DISPLAY = {
    DutyStatus.OFF_DUTY: 'Off Duty',
    DutyStatus.SLEEPER_BERTH: 'Sleeper Berth',
    DutyStatus.DRIVING: 'Driving',
    DutyStatus.ON_DUTY: 'On Duty (Not Driving)',
}


@dataclass
class HOSConfig:
    """
    Configuration for HOS rules.
    All values can be adjusted for different regulations or testing.
    """
    # Daily limits
    max_driving_hours: float = 11.0
    max_on_duty_hours: float = 14.0
    high_driving_warning_hours: float = 10.0

    # Rest requirements
    off_duty_reset_hours: float = 10.0
    hours_per_day: float = 24.0

    # Break between driving segments
    break_duration_hours: float = 0.5

    # Schedule defaults
    default_start_time: str = "08:00"

    # Trip cost estimates
    fuel_cost_per_mile: float = 0.15
    toll_cost_per_mile: float = 0.05

    @classmethod
    def from_settings(cls) -> 'HOSConfig':
        """Build a config from the HOS_RULES Django setting."""
        from django.conf import settings

        overrides = getattr(settings, 'HOS_RULES', {}) or {}
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in overrides.items():
            if key not in known:
                logger.warning(f"Ignoring unknown HOS_RULES key: {key}")
                continue
            values[key] = value
        return cls(**values)

    def to_dict(self) -> Dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class LogEntry:
    """A period of a single duty status within one day."""
    start_time: str      # HH:MM, or 24:00 for end of day
    end_time: str        # HH:MM, or 24:00 for end of day
    status: DutyStatus
    location: str = ""
    duration_hours: float = 0.0

    def to_dict(self) -> Dict:
        return {
            'start_time': self.start_time,
            'end_time': self.end_time,
            'status': self.status.value,
            'location': self.location,
            'duration_hours': self.duration_hours,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'LogEntry':
        duration = data.get('duration_hours', data.get('duration', 0.0))
        return cls(
            start_time=data['start_time'],
            end_time=data['end_time'],
            status=DutyStatus.parse(data['status']),
            location=data.get('location') or "",
            duration_hours=float(duration or 0.0)
        )


@dataclass
class DailyTotals:
    """Hours per duty status for one day."""
    driving_hours: float = 0.0
    on_duty_hours: float = 0.0
    off_duty_hours: float = 0.0
    sleeper_berth_hours: float = 0.0

    @property
    def total_hours(self) -> float:
        return self.driving_hours + self.on_duty_hours + self.off_duty_hours + self.sleeper_berth_hours

    @property
    def rest_hours(self) -> float:
        return self.off_duty_hours + self.sleeper_berth_hours

    def hours_for(self, status: DutyStatus) -> float:
        return getattr(self, TOTALS_FIELDS[status])

    def add(self, status: DutyStatus, hours: float) -> None:
        attr = TOTALS_FIELDS[status]
        setattr(self, attr, getattr(self, attr) + hours)

    def to_dict(self) -> Dict:
        return {
            'driving_hours': self.driving_hours,
            'on_duty_hours': self.on_duty_hours,
            'off_duty_hours': self.off_duty_hours,
            'sleeper_berth_hours': self.sleeper_berth_hours,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'DailyTotals':
        return cls(**{
            name: float(data.get(name) or 0.0)
            for name in TOTALS_FIELDS.values()
        })


TOTALS_FIELDS = {
    DutyStatus.OFF_DUTY: 'off_duty_hours',
    DutyStatus.SLEEPER_BERTH: 'sleeper_berth_hours',
    DutyStatus.DRIVING: 'driving_hours',
    DutyStatus.ON_DUTY: 'on_duty_hours',
}


@dataclass
class DailyLog:
    """Log sheet for a single day."""
    date: str            # YYYY-MM-DD
    entries: List[LogEntry] = field(default_factory=list)
    totals: DailyTotals = field(default_factory=DailyTotals)

    def to_dict(self) -> Dict:
        return {
            'date': self.date,
            'entries': [e.to_dict() for e in self.entries],
            'totals': self.totals.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'DailyLog':
        return cls(
            date=str(data.get('date', '')),
            entries=[LogEntry.from_dict(e) for e in data.get('entries', [])],
            totals=DailyTotals.from_dict(data.get('totals', {}))
        )


@dataclass
class ComplianceReport:
    """Result of checking a set of daily logs against the HOS limits."""
    is_compliant: bool
    violations: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'isCompliant': self.is_compliant,
            'violations': list(self.violations),
            'warnings': list(self.warnings),
        }


@dataclass
class TripPlan:
    """Generated schedule for a route with its compliance check."""
    route: RouteSummary
    daily_logs: List[DailyLog]
    compliance: ComplianceReport
    statistics: RouteStatistics

    @property
    def total_days(self) -> int:
        return len(self.daily_logs)

    @property
    def total_driving_hours(self) -> float:
        return sum(log.totals.driving_hours for log in self.daily_logs)

    @property
    def total_on_duty_hours(self) -> float:
        return sum(log.totals.on_duty_hours for log in self.daily_logs)

    @property
    def total_off_duty_hours(self) -> float:
        return sum(log.totals.off_duty_hours for log in self.daily_logs)

    def to_dict(self) -> Dict:
        return {
            'route': self.route.to_dict(),
            'daily_logs': [log.to_dict() for log in self.daily_logs],
            'compliance': self.compliance.to_dict(),
            'statistics': self.statistics.to_dict(),
            'summary': {
                'total_days': self.total_days,
                'total_driving_hours': round(self.total_driving_hours, 2),
                'total_on_duty_hours': round(self.total_on_duty_hours, 2),
                'total_off_duty_hours': round(self.total_off_duty_hours, 2),
            },
        }


class HOSService:
    """
    Service for FMCSA Hours of Service checks and schedules.

    This service:
    - Validates daily logs against the per-day HOS limits
    - Generates a multi-day HOS-compliant schedule for a route
    """

    def __init__(self, config: Optional[HOSConfig] = None):
        self.config = config or HOSConfig()

    def evaluate_compliance(self, daily_logs: List[DailyLog]) -> ComplianceReport:
        """
        Validate daily logs against HOS limits.

        Each day is checked on its own; there is no rolling multi-day
        window.

        Args:
            daily_logs: One log per consecutive day

        Returns:
            ComplianceReport with violations and warnings
        """
        violations = []
        warnings = []

        for day_number, log in enumerate(daily_logs, start=1):
            totals = log.totals

            if totals.driving_hours > self.config.max_driving_hours:
                violations.append(
                    f"Day {day_number}: Exceeded {self.config.max_driving_hours:g}-hour driving limit "
                    f"({totals.driving_hours:.1f} hours)"
                )

            if totals.on_duty_hours > self.config.max_on_duty_hours:
                violations.append(
                    f"Day {day_number}: Exceeded {self.config.max_on_duty_hours:g}-hour on-duty limit "
                    f"({totals.on_duty_hours:.1f} hours)"
                )

            rest_hours = totals.rest_hours
            if rest_hours < self.config.off_duty_reset_hours:
                violations.append(
                    f"Day {day_number}: Insufficient rest period ({rest_hours:.1f} hours, "
                    f"minimum {self.config.off_duty_reset_hours:g} required)"
                )

            if totals.driving_hours > self.config.high_driving_warning_hours:
                warnings.append(
                    f"Day {day_number}: High driving hours ({totals.driving_hours:.1f} hours)"
                )

        report = ComplianceReport(
            is_compliant=len(violations) == 0,
            violations=violations,
            warnings=warnings
        )

        logger.info(
            f"Evaluated {len(daily_logs)} daily logs: "
            f"{'COMPLIANT' if report.is_compliant else 'NON-COMPLIANT'} "
            f"({len(violations)} violations, {len(warnings)} warnings)"
        )
        return report

    def generate_schedule(
        self,
        route: Union[RouteSummary, float],
        start_time: Optional[str] = None,
        start_date: Union[date, str, None] = None
    ) -> List[DailyLog]:
        """
        Generate HOS-compliant daily logs covering a route's driving time.

        Each day drives up to the daily limit in at most two segments
        separated by a 30-minute on-duty break, then rests for the rest of
        the 24 hours (never less than the off-duty reset).

        Args:
            route: RouteSummary, or the total driving hours
            start_time: Departure time of day (HH:MM), defaults to config
            start_date: Departure date (date or YYYY-MM-DD), defaults to today

        Returns:
            List of DailyLog objects, one per day

        Raises:
            TimeFormatError: If start_time is not a valid HH:MM departure time
        """
        if isinstance(route, RouteSummary):
            total_duration = route.total_duration_hours
        else:
            total_duration = float(route)

        if not (math.isfinite(total_duration) and total_duration > 0):
            logger.info(f"No driving time to schedule ({total_duration}h)")
            return []

        current_time = self._departure(start_time or self.config.default_start_time, start_date)
        remaining_driving_hours = total_duration
        max_driving = self.config.max_driving_hours

        daily_logs: List[DailyLog] = []
        day_number = 1

        logger.info(
            f"Generating schedule: {total_duration:.2f}h driving from "
            f"{current_time.isoformat(timespec='minutes')}"
        )

        while remaining_driving_hours > 0:
            day_start_time = current_time
            entries: List[LogEntry] = []
            day_driving_hours = 0.0
            day_on_duty_hours = 0.0

            # Morning driving segment
            morning_hours = min(remaining_driving_hours, max_driving)
            entry, current_time = self._entry(
                current_time, morning_hours, DutyStatus.DRIVING, f"Route Segment {day_number}"
            )
            entries.append(entry)
            day_driving_hours += morning_hours
            day_on_duty_hours += morning_hours
            remaining_driving_hours -= morning_hours

            if remaining_driving_hours > 0:
                # Break before the afternoon segment
                break_hours = self.config.break_duration_hours
                entry, current_time = self._entry(
                    current_time, break_hours, DutyStatus.ON_DUTY, "Break Location"
                )
                entries.append(entry)
                day_on_duty_hours += break_hours

                afternoon_hours = min(remaining_driving_hours, max_driving - day_driving_hours)
                if afternoon_hours > 0:
                    entry, current_time = self._entry(
                        current_time, afternoon_hours, DutyStatus.DRIVING,
                        f"Route Segment {day_number} (continued)"
                    )
                    entries.append(entry)
                    day_driving_hours += afternoon_hours
                    day_on_duty_hours += afternoon_hours
                    remaining_driving_hours -= afternoon_hours

            off_duty_hours = max(
                self.config.off_duty_reset_hours,
                self.config.hours_per_day - day_on_duty_hours
            )
            entry, current_time = self._entry(
                current_time, off_duty_hours, DutyStatus.OFF_DUTY, "Rest Area"
            )
            entries.append(entry)

            daily_logs.append(DailyLog(
                date=day_start_time.date().isoformat(),
                entries=entries,
                totals=DailyTotals(
                    driving_hours=day_driving_hours,
                    on_duty_hours=day_on_duty_hours,
                    off_duty_hours=off_duty_hours,
                    sleeper_berth_hours=0.0
                )
            ))

            logger.debug(
                f"Day {day_number}: {day_driving_hours:.2f}h driving, "
                f"{day_on_duty_hours:.2f}h on duty, {off_duty_hours:.2f}h off duty, "
                f"{remaining_driving_hours:.2f}h remaining"
            )
            day_number += 1

        logger.info(f"Generated {len(daily_logs)} daily logs")
        return daily_logs

    def plan_trip(
        self,
        route: RouteSummary,
        start_time: Optional[str] = None,
        start_date: Union[date, str, None] = None
    ) -> TripPlan:
        """Generate the schedule for a route and check it."""
        daily_logs = self.generate_schedule(route, start_time, start_date)
        return TripPlan(
            route=route,
            daily_logs=daily_logs,
            compliance=self.evaluate_compliance(daily_logs),
            statistics=calculate_route_statistics(
                route,
                fuel_cost_per_mile=self.config.fuel_cost_per_mile,
                toll_cost_per_mile=self.config.toll_cost_per_mile,
                max_driving_hours=self.config.max_driving_hours
            )
        )

    def _departure(self, start_time: str, start_date: Union[date, str, None]) -> datetime:
        """Combine the departure date and time of day."""
        if start_time == END_OF_DAY:
            raise TimeFormatError(f"Departure must be between 00:00 and 23:59: {start_time!r}")
        parse_time_slot(start_time)
        hours, minutes = (int(part) for part in start_time.split(':'))

        if start_date is None:
            day = date.today()
        elif isinstance(start_date, datetime):
            day = start_date.date()
        elif isinstance(start_date, date):
            day = start_date
        else:
            day = date.fromisoformat(str(start_date))

        return datetime.combine(day, datetime.min.time()) + timedelta(hours=hours, minutes=minutes)

    def _entry(
        self,
        start: datetime,
        hours: float,
        status: DutyStatus,
        location: str
    ):
        """Create an entry starting at `start`; returns it with its end time."""
        end = start + timedelta(hours=hours)
        entry = LogEntry(
            start_time=start.strftime('%H:%M'),
            end_time=end.strftime('%H:%M'),
            status=status,
            location=location,
            duration_hours=hours
        )
        return entry, end
