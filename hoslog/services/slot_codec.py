"""
Slot Index Codec.

Converts between wall-clock times of day and the fixed 15-minute slots
of a daily log grid.

Slot Layout:
============
A day is divided into 96 slots of 15 minutes each:
- Slot 0 starts at 00:00
- Slot 95 starts at 23:45
- Slot 96 is the end-of-day boundary, written as "24:00"

Times that are not on a quarter-hour boundary floor down to the slot
that contains them (08:14 -> slot 32, same as 08:00).
"""

import logging
from dataclasses import dataclass
from typing import List

logger = logging.getLogger(__name__)

SLOT_MINUTES = 15
SLOTS_PER_HOUR = 60 // SLOT_MINUTES
SLOTS_PER_DAY = 24 * SLOTS_PER_HOUR
SLOT_HOURS = SLOT_MINUTES / 60

START_OF_DAY = "00:00"
END_OF_DAY = "24:00"


class TimeFormatError(ValueError):
    """Raised when a time string is not a valid HH:MM time of day."""
    pass


@dataclass
class TimeSlot:
    """A labelled slot of the log grid."""
    time: str           # HH:MM
    hour: int
    quarter: int        # 0-3 within the hour
    display_hour: str   # Mid-night, 1 AM, ..., Noon, 1 PM, ...


def parse_time_slot(time_str: str) -> int:
    """
    Strictly convert a time string to a slot index.

    Args:
        time_str: Time in HH:MM 24-hour form, or "24:00" for end of day

    Returns:
        Slot index between 0 and 96

    Raises:
        TimeFormatError: If the string is not a valid time of day
    """
    if time_str == END_OF_DAY:
        return SLOTS_PER_DAY
    if time_str == START_OF_DAY:
        return 0

    if not isinstance(time_str, str):
        raise TimeFormatError(f"Invalid time format: {time_str!r}")

    parts = time_str.strip().split(':')
    if len(parts) != 2:
        raise TimeFormatError(f"Invalid time format: {time_str!r}")

    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        raise TimeFormatError(f"Invalid time format: {time_str!r}")

    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise TimeFormatError(f"Time out of range: {time_str!r}")

    return hours * SLOTS_PER_HOUR + minutes // SLOT_MINUTES


def time_to_slot_index(time_str: str) -> int:
    """
    Convert a time string to a slot index, falling back to slot 0.

    Invalid input is logged and mapped to the start of the day. Callers
    that need to tell "00:00" apart from garbage should use
    parse_time_slot() instead.
    """
    try:
        return parse_time_slot(time_str)
    except TimeFormatError as e:
        logger.warning(f"{e}, using slot 0")
        return 0


def is_valid_time(time_str: str) -> bool:
    """Check whether a string is a valid HH:MM time or "24:00"."""
    try:
        parse_time_slot(time_str)
    except TimeFormatError:
        return False
    return True


def slot_index_to_time(slot_index: int) -> str:
    """Convert a slot index back to HH:MM, clamped to 00:00-24:00."""
    if slot_index >= SLOTS_PER_DAY:
        return END_OF_DAY
    if slot_index < 0:
        return START_OF_DAY

    hours = slot_index // SLOTS_PER_HOUR
    minutes = (slot_index % SLOTS_PER_HOUR) * SLOT_MINUTES
    return f"{hours:02d}:{minutes:02d}"


def _display_hour(hour: int) -> str:
    if hour == 0:
        return 'Mid-night'
    if hour == 12:
        return 'Noon'
    if hour > 12:
        return f"{hour - 12} PM"
    return f"{hour} AM"


def generate_time_slots() -> List[TimeSlot]:
    """Generate the 96 labelled slots of a 24-hour log grid."""
    return [
        TimeSlot(
            time=slot_index_to_time(hour * SLOTS_PER_HOUR + quarter),
            hour=hour,
            quarter=quarter,
            display_hour=_display_hour(hour)
        )
        for hour in range(24)
        for quarter in range(SLOTS_PER_HOUR)
    ]
