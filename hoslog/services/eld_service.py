"""
ELD (Electronic Logging Device) Log Sheet Service.

Prepares daily logs for rendering on the FMCSA log grid. Outputs structured
JSON for the frontend; drawing and PDF export happen there.

ELD Log Format:
==============
Each day's log contains a 24-hour timeline divided into 15-minute increments.
The grid has four rows:
- 1: Off Duty
- 2: Sleeper Berth
- 3: Driving
- 4: On Duty (Not Driving)

Hour totals on the right of the sheet are recomputed from the timeline
rather than trusted from the incoming log, so they always add up to 24.
"""

import logging
from dataclasses import dataclass, asdict
from datetime import date
from typing import Dict, List, Optional, Sequence

from .hos_service import DailyLog, DUTY_STATUS_DISPLAY, DutyStatus, LogEntry
from .slot_codec import SLOT_HOURS, SLOTS_PER_HOUR, time_to_slot_index
from .timeline_service import aggregate_timeline, build_timeline, validate_entries

logger = logging.getLogger(__name__)

# Line colors used on the log grid
DUTY_STATUS_COLORS = {
    'off_duty': '#000000',
    'sleeper_berth': '#000000',
    'driving': '#FF0000',
    'on_duty': '#00FF00',
}
DEFAULT_COLOR = '#000000'


@dataclass
class DutyBar:
    """A status bar spanning whole slots of the grid."""
    start_slot: int
    duration: int        # in slots
    status: str
    color: str

    def to_dict(self) -> Dict:
        return asdict(self)


def create_duty_bar(start_time: str, end_time: str, status) -> DutyBar:
    """Create the grid bar for a time period."""
    status_str = status.value if isinstance(status, DutyStatus) else str(status)
    start_slot = time_to_slot_index(start_time)
    end_slot = time_to_slot_index(end_time)
    return DutyBar(
        start_slot=start_slot,
        duration=end_slot - start_slot,
        status=status_str,
        color=DUTY_STATUS_COLORS.get(status_str, DEFAULT_COLOR)
    )


@dataclass
class ELDDailyLog:
    """
    Render-ready log sheet for a single day.

    Contains the normalized timeline and summary information.
    """
    date: str           # YYYY-MM-DD format
    day_number: int
    day_of_week: str    # Monday, Tuesday, etc.
    entries: List[LogEntry]
    timeline: List[DutyStatus]
    summary: Dict[str, float]
    issues: List[str]
    duty_bars: List[DutyBar]
    grid_data: Dict

    def to_dict(self) -> Dict:
        return {
            'date': self.date,
            'day_number': self.day_number,
            'day_of_week': self.day_of_week,
            'entries': [e.to_dict() for e in self.entries],
            'timeline': [s.value for s in self.timeline],
            'summary': self.summary,
            'issues': self.issues,
            'duty_bars': [b.to_dict() for b in self.duty_bars],
            'grid_data': self.grid_data,
        }


class ELDLogService:
    """
    Service for preparing daily log sheets.

    Takes daily logs (entered by the driver or generated by HOSService) and
    builds the data the frontend needs to draw them.
    """

    # Grid row mapping for duty statuses
    GRID_ROWS = {
        DutyStatus.OFF_DUTY: 1,
        DutyStatus.SLEEPER_BERTH: 2,
        DutyStatus.DRIVING: 3,
        DutyStatus.ON_DUTY: 4,
    }

    ROW_SHORT_LABELS = {
        DutyStatus.OFF_DUTY: 'OFF',
        DutyStatus.SLEEPER_BERTH: 'SB',
        DutyStatus.DRIVING: 'D',
        DutyStatus.ON_DUTY: 'ON',
    }

    def render_entries(self, entries: Sequence[LogEntry]) -> Dict:
        """
        Build timeline, totals and issues for one day's entries.

        Used when the driver edits a day by hand and no date is attached.
        """
        timeline = build_timeline(entries)
        return {
            'timeline': [s.value for s in timeline],
            'totals': aggregate_timeline(timeline).to_dict(),
            'issues': validate_entries(entries),
            'duty_bars': [
                create_duty_bar(e.start_time, e.end_time, e.status).to_dict()
                for e in entries
            ],
        }

    def generate_logs(self, daily_logs: Sequence[DailyLog]) -> List[ELDDailyLog]:
        """
        Prepare log sheets for a sequence of days.

        Args:
            daily_logs: One log per consecutive day

        Returns:
            List of ELDDailyLog objects, one per day
        """
        sheets = [
            self._generate_daily_log(log, day_number)
            for day_number, log in enumerate(daily_logs, start=1)
        ]
        logger.info(f"Generated {len(sheets)} daily log sheets")
        return sheets

    def generate_logs_json(self, daily_logs: Sequence[DailyLog]) -> List[Dict]:
        """
        Prepare log sheets and return them as JSON-serializable dictionaries.

        This is the main method for API responses.
        """
        return [sheet.to_dict() for sheet in self.generate_logs(daily_logs)]

    def _generate_daily_log(self, log: DailyLog, day_number: int) -> ELDDailyLog:
        """Generate the log sheet for a single day."""
        timeline = build_timeline(log.entries)
        totals = aggregate_timeline(timeline)
        issues = validate_entries(log.entries)

        if issues:
            logger.debug(f"Day {day_number} ({log.date}): {'; '.join(issues)}")

        return ELDDailyLog(
            date=log.date,
            day_number=day_number,
            day_of_week=self._day_of_week(log.date),
            entries=sorted(log.entries, key=lambda e: time_to_slot_index(e.start_time)),
            timeline=timeline,
            summary={**totals.to_dict(), 'total_hours': totals.total_hours},
            issues=issues,
            duty_bars=[
                create_duty_bar(e.start_time, e.end_time, e.status)
                for e in log.entries
            ],
            grid_data=self._generate_grid_data(timeline)
        )

    def _day_of_week(self, log_date: str) -> str:
        try:
            return date.fromisoformat(log_date).strftime('%A')
        except ValueError:
            return ''

    def _generate_grid_data(self, timeline: List[DutyStatus]) -> Dict:
        """
        Generate grid data for frontend rendering.

        Creates a structure optimized for drawing the log grid with
        horizontal lines for each run of a status and vertical lines at
        status changes.

        The grid has:
        - X-axis: 24 hours (0-24), in hours
        - Y-axis: 4 rows (Off Duty, Sleeper Berth, Driving, On Duty Not Driving)
        """
        segments = []
        for start_slot, end_slot, status in self._runs(timeline):
            segments.append({
                'row': self.GRID_ROWS[status],
                'start_x': start_slot / SLOTS_PER_HOUR,
                'end_x': end_slot / SLOTS_PER_HOUR,
                'status': status.value,
                'status_display': DUTY_STATUS_DISPLAY[status],
                'duration': (end_slot - start_slot) * SLOT_HOURS,
            })

        transitions = []
        for current, next_segment in zip(segments, segments[1:]):
            transitions.append({
                'x': current['end_x'],
                'from_row': current['row'],
                'to_row': next_segment['row'],
                'from_status': current['status'],
                'to_status': next_segment['status'],
            })

        return {
            'segments': segments,
            'transitions': transitions,
            'hours': list(range(25)),  # 0 to 24 for grid lines
            'rows': [
                {'id': row, 'label': DUTY_STATUS_DISPLAY[status], 'short': self.ROW_SHORT_LABELS[status]}
                for status, row in self.GRID_ROWS.items()
            ],
        }

    def _runs(self, timeline: List[DutyStatus]):
        """Yield (start_slot, end_slot, status) for each run of equal slots."""
        run_start: Optional[int] = None
        for slot, status in enumerate(timeline):
            if run_start is None:
                run_start = slot
            elif status != timeline[run_start]:
                yield run_start, slot, timeline[run_start]
                run_start = slot
        if run_start is not None:
            yield run_start, len(timeline), timeline[run_start]
