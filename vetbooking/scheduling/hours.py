"""Parsing of ``"HH:MM-HH:MM"`` hour ranges into same-day minute offsets.

Nothing here raises on malformed text: a bad clock or range comes back as
None and the caller decides to skip it.
"""

import logging

logger = logging.getLogger(__name__)

MINUTES_PER_HOUR = 60


def parse_clock(text: str) -> int | None:
    parts = text.strip().split(':')
    if len(parts) not in (2, 3):
        return None

    try:
        hour, minute = int(parts[0]), int(parts[1])
        if len(parts) == 3:
            int(parts[2])
    except ValueError:
        return None

    if not 0 <= hour <= 23 or not 0 <= minute <= 59:
        return None

    return hour * MINUTES_PER_HOUR + minute


def parse_range(text: str) -> tuple[int, int] | None:
    if text.count('-') != 1:
        return None

    start_text, end_text = (part.strip() for part in text.split('-'))
    if ':' not in start_text or ':' not in end_text:
        return None

    start = parse_clock(start_text)
    end = parse_clock(end_text)
    if start is None or end is None:
        return None

    return start, end


def split_ranges(hours: str) -> list[str]:
    return [part.strip() for part in hours.split(',') if part.strip()]


def parse_ranges(hours: str) -> list[tuple[int, int]]:
    """Parse every well-formed range of an hours string, skipping the rest."""
    ranges: list[tuple[int, int]] = []
    for raw_range in split_ranges(hours):
        parsed = parse_range(raw_range)
        if parsed is None:
            logger.warning('Skipping malformed hours range %r', raw_range)
            continue
        ranges.append(parsed)
    return ranges


def format_clock(minutes: int, seconds: bool = True) -> str:
    hour, minute = divmod(minutes, MINUTES_PER_HOUR)
    if seconds:
        return f'{hour:02d}:{minute:02d}:00'
    return f'{hour:02d}:{minute:02d}'
