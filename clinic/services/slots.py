"""
Availability windows and the hourly slots derived from them.

A doctor declares availability as ``"HH:MM-HH:MM"`` strings. Every
appointment lasts one hour, so a window yields one slot per hour from its
start up to one hour before its end.
"""

from dataclasses import dataclass
from datetime import datetime, time
from enum import Enum
from typing import Iterable, Iterator, List, Optional

SLOT_MINUTES = 60
NOON = time(12, 0)


class WindowParseError(ValueError):
    """Raised when an availability window string is malformed."""


def _parse_clock(token: str) -> time:
    try:
        return datetime.strptime(token.strip(), "%H:%M").time()
    except ValueError as exc:
        raise WindowParseError(f"Invalid time '{token.strip()}'") from exc


def _minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def format_slot(value: time) -> str:
    return value.strftime("%H:%M")


@dataclass(frozen=True)
class TimeWindow:
    start: time
    end: time

    @classmethod
    def parse(cls, text: str) -> "TimeWindow":
        """Parse ``"HH:MM-HH:MM"``; raises WindowParseError on bad input."""
        if not isinstance(text, str):
            raise WindowParseError(f"Window must be a string, got {type(text).__name__}")
        parts = text.split("-")
        if len(parts) != 2:
            raise WindowParseError(f"Window '{text}' must look like HH:MM-HH:MM")
        return cls(_parse_clock(parts[0]), _parse_clock(parts[1]))

    def hourly_slots(self) -> Iterator[time]:
        current = _minutes(self.start)
        last_start = _minutes(self.end) - SLOT_MINUTES
        while current <= last_start:
            yield time(current // 60, current % 60)
            current += SLOT_MINUTES

    def contains(self, moment: time) -> bool:
        """Inclusive on both ends."""
        return self.start <= moment <= self.end

    def in_period(self, period: "Period") -> bool:
        if period is Period.AM:
            return self.start < NOON
        return self.end > NOON

    def __str__(self) -> str:
        return f"{format_slot(self.start)}-{format_slot(self.end)}"


class Period(str, Enum):
    AM = "AM"
    PM = "PM"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Period"]:
        if value is None:
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


def parse_windows(raw_windows: Optional[Iterable[str]]) -> List[TimeWindow]:
    """Parse every well-formed window, skipping the rest."""
    windows = []
    for raw in raw_windows or ():
        try:
            windows.append(TimeWindow.parse(raw))
        except WindowParseError:
            continue
    return windows


def any_window_in_period(raw_windows: Optional[Iterable[str]], period: Optional[Period]) -> bool:
    if period is None:
        return False
    return any(window.in_period(period) for window in parse_windows(raw_windows))


def truncate_to_hour(value: time) -> time:
    return value.replace(minute=0, second=0, microsecond=0)


def to_local_naive(value: datetime) -> datetime:
    """Appointment times are stored as naive local time."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)
