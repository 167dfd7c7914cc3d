"""
Duty Status Timeline Service.

Normalizes a day's log entries into the continuous 96-slot timeline drawn on
the log grid, sums the timeline into hour totals, and reports gaps and
overlaps between entries.

Unaccounted time counts as off duty, so every slot of a built timeline
holds a status.
"""

import logging
from typing import List, Optional, Sequence

from .hos_service import DailyTotals, DutyStatus, LogEntry
from .slot_codec import (
    SLOT_HOURS,
    SLOT_MINUTES,
    SLOTS_PER_DAY,
    START_OF_DAY,
    time_to_slot_index,
)

logger = logging.getLogger(__name__)


def _sort_by_start(entries: Sequence[LogEntry]) -> List[LogEntry]:
    return sorted(entries, key=lambda e: time_to_slot_index(e.start_time))


def build_timeline(entries: Sequence[LogEntry]) -> List[DutyStatus]:
    """
    Build a continuous timeline from one day's entries.

    Entries may arrive unsorted, with gaps or overlapping. They are filled in
    order of start time, so on overlap the later-starting entry wins. An
    entry that ends at or before its start runs past midnight and is cut at
    the end of the day.

    Args:
        entries: Log entries for a single day

    Returns:
        List of 96 duty statuses, one per 15-minute slot
    """
    timeline: List[Optional[DutyStatus]] = [None] * SLOTS_PER_DAY

    for entry in _sort_by_start(entries):
        start_slot = time_to_slot_index(entry.start_time)
        end_slot = time_to_slot_index(entry.end_time)

        if entry.end_time == START_OF_DAY and entry.start_time != START_OF_DAY:
            end_slot = SLOTS_PER_DAY
        elif end_slot <= start_slot and entry.end_time != START_OF_DAY:
            # Crosses midnight; the next day's log carries the remainder
            end_slot += SLOTS_PER_DAY

        for slot in range(start_slot, min(end_slot, SLOTS_PER_DAY)):
            timeline[slot] = entry.status

    return [status or DutyStatus.OFF_DUTY for status in timeline]


def aggregate_timeline(timeline: Sequence[Optional[DutyStatus]]) -> DailyTotals:
    """
    Sum a timeline into hours per duty status.

    Slots without a recognized status add nothing.
    """
    totals = DailyTotals()
    for status in timeline:
        if isinstance(status, DutyStatus):
            totals.add(status, SLOT_HOURS)
    return totals


def validate_entries(entries: Sequence[LogEntry]) -> List[str]:
    """
    Check entry continuity.

    Returns:
        Human-readable descriptions of gaps and overlaps between
        consecutive entries (advisory only)
    """
    issues = []
    sorted_entries = _sort_by_start(entries)

    for current, next_entry in zip(sorted_entries, sorted_entries[1:]):
        current_end_slot = time_to_slot_index(current.end_time)
        next_start_slot = time_to_slot_index(next_entry.start_time)

        if current_end_slot < next_start_slot:
            gap_minutes = (next_start_slot - current_end_slot) * SLOT_MINUTES
            issues.append(
                f"Gap of {gap_minutes} minutes between {current.end_time} and {next_entry.start_time}"
            )
        elif current_end_slot > next_start_slot:
            overlap_minutes = (current_end_slot - next_start_slot) * SLOT_MINUTES
            issues.append(
                f"Overlap of {overlap_minutes} minutes between {current.end_time} and {next_entry.start_time}"
            )

    if issues:
        logger.debug(f"Found {len(issues)} continuity issues in {len(sorted_entries)} entries")
    return issues
