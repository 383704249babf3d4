# touchfish/engine.py
"""
Timestamp generation engine.

Responsibilities:
- Pick a random timestamp inside the configured daily window
- Keep the result strictly after the last existing commit
- Avoid back-dating below the current time when there is no prior commit

This module does NOT:
- call git
- load configuration files
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Tuple
import random

from touchfish.validation import TimeWindow, validate_window


class EngineError(RuntimeError):
    pass


class ClockReadError(EngineError):
    pass


class RandomSourceError(EngineError):
    pass


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def generate_timestamp(
    window: TimeWindow,
    reference: Optional[datetime],
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> datetime:
    """
    Generate the timestamp for the next commit.

    Args:
        window: daily time-of-day window, start < end
        reference: timestamp of the most recent commit, or None
        now: current time, read from the local clock when omitted
        rng: random source, a freshly seeded random.Random when omitted

    Returns:
        timezone-aware datetime inside the window of some day on or after
        the anchor date, strictly later than reference when one is given.
    """
    window = validate_window(window.start, window.end)

    # Without an explicit zone, every wall time is localised on its own
    # date so the offset follows daylight saving changes.
    tz = now.tzinfo if now is not None else None
    if now is None:
        now = _read_clock()

    now_aware = now.astimezone() if now.tzinfo is None else now
    if reference is not None:
        reference = _in_zone(reference, tz)

    base_day = _anchor_date(_in_zone(now_aware, tz), reference)
    window_start, window_end = _window_bounds(base_day, window)

    span = int((window_end - window_start).total_seconds())
    wall = window_start + timedelta(seconds=_draw_offset(rng, span))
    candidate = _localise(wall, tz)

    if reference is not None:
        if candidate <= reference:
            candidate = _localise(_next_day(wall), tz)

        # Single shift only. The anchor date guarantees the shifted value
        # lands on a later calendar day than the reference.
        if candidate <= reference:
            raise EngineError(
                f"Generated timestamp {candidate.isoformat()} is not after "
                f"the last commit {reference.isoformat()}"
            )
    elif candidate < now_aware:
        candidate = _localise(_next_day(wall), tz)

    return candidate


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def _read_clock() -> datetime:
    """
    Current local wall time, naive.
    """
    try:
        return datetime.now()
    except (OSError, OverflowError, ValueError) as e:
        raise ClockReadError("Failed to read the current local time") from e


def _localise(wall: datetime, tz: Optional[tzinfo]) -> datetime:
    """
    Attach a zone to a naive wall time. tz=None means the system local zone,
    resolved for that wall time's own date.
    """
    if tz is None:
        return wall.astimezone()
    return wall.replace(tzinfo=tz)


def _in_zone(dt: datetime, tz: Optional[tzinfo]) -> datetime:
    """
    Express dt in tz (local zone when None). Naive values are taken as local time.
    """
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.astimezone(tz)


def _anchor_date(now: datetime, reference: Optional[datetime]) -> date:
    day = now.date()
    if reference is not None and reference.date() > day:
        day = reference.date()
    return day


def _window_bounds(day: date, window: TimeWindow) -> Tuple[datetime, datetime]:
    """
    Naive wall-time bounds of the window on day.
    """
    start_dt = datetime.combine(day, window.start)
    end_dt = datetime.combine(day, window.end)
    return start_dt, end_dt


def _draw_offset(rng: Optional[random.Random], span: int) -> int:
    if span <= 0:
        raise EngineError(f"Invalid window span: {span} seconds")

    try:
        if rng is None:
            rng = random.Random()
        return rng.randint(0, span)
    except (OSError, NotImplementedError) as e:
        raise RandomSourceError("Failed to draw from the random source") from e


def _next_day(wall: datetime) -> datetime:
    return wall + timedelta(days=1)
