# touchfish/validation.py
"""
Time window parsing and validation.

Responsibilities:
- Parse HH:MM strings into typed times
- Enforce start < end for the daily window
- Produce actionable errors with field context

This module does NOT:
- read or write configuration files
- interact with git
- compute timestamps
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
import re


_TIME_RE = re.compile(r"^(\d{2}):(\d{2})$")


class ValidationError(RuntimeError):
    """
    Raised when a time string or window is invalid.

    Attributes:
        path: name of the failing field, for example start_time
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


class MalformedTimeError(ValidationError):
    pass


class InvalidWindowError(ValidationError):
    pass


@dataclass(frozen=True)
class TimeWindow:
    start: time
    end: time


DEFAULT_WINDOW = TimeWindow(start=time(0, 0), end=time(2, 0))


def parse_time(path: str, value: str) -> time:
    """
    Parse a 24-hour HH:MM string.
    """
    if not isinstance(value, str):
        raise MalformedTimeError(path, "time must be a string in HH:MM format")

    m = _TIME_RE.match(value.strip())
    if not m:
        raise MalformedTimeError(
            path,
            f"invalid time: {value!r}. Use HH:MM format (for example 09:00)",
        )

    h = int(m.group(1))
    minute = int(m.group(2))

    if not (0 <= h <= 23):
        raise MalformedTimeError(path, f"hour out of range in {value!r}: {h}")

    if not (0 <= minute <= 59):
        raise MalformedTimeError(path, f"minute out of range in {value!r}: {minute}")

    return time(hour=h, minute=minute)


def validate_window(start: time, end: time) -> TimeWindow:
    if start >= end:
        raise InvalidWindowError(
            "window",
            f"start ({format_time(start)}) must be earlier than end ({format_time(end)})",
        )
    return TimeWindow(start=start, end=end)


def parse_window(start_raw: str, end_raw: str) -> TimeWindow:
    """
    Parse and validate a start/end pair as given on the command line
    or stored in the config file.
    """
    start = parse_time("start_time", start_raw)
    end = parse_time("end_time", end_raw)
    return validate_window(start, end)


def format_time(t: time) -> str:
    return f"{t.hour:02d}:{t.minute:02d}"


def format_window(window: TimeWindow) -> str:
    return f"{format_time(window.start)} - {format_time(window.end)}"
