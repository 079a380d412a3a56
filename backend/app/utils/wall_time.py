"""Wall-clock time helpers for meeting start and end times.

Meetings are stored as ``TIME`` columns with no date or time zone attached.
:class:`WallTime` parses the ``HH:MM[:SS[.mmm]]`` strings the API accepts
(and the ``datetime.time`` values the database returns), compares them, and
renders them in the ``h:mm AM/PM`` form shown to users.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import time

TIME_PATTERN = re.compile(
    r"^(?P<hour>[01]\d|2[0-3]):(?P<minute>[0-5]\d)"
    r"(?::(?P<second>[0-5]\d)(?:\.(?P<millisecond>\d{3}))?)?$"
)
DISPLAY_TIME_PATTERN = re.compile(
    r"^(?P<hour>1[0-2]|0?[1-9]):(?P<minute>[0-5]\d)\s*(?P<period>AM|PM)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class WallTime:
    hour: int
    minute: int
    second: int = 0
    millisecond: int = 0

    @classmethod
    def parse(cls, value: str) -> WallTime:
        """Parse a 24-hour ``HH:MM[:SS[.mmm]]`` timestamp.

        Raises ``ValueError`` for anything else; a malformed time must never be
        compared as if it were valid.
        """
        match = TIME_PATTERN.match(value.strip()) if isinstance(value, str) else None
        if match is None:
            raise ValueError(f"Invalid timestamp format: {value!r}")
        return cls(
            hour=int(match.group("hour")),
            minute=int(match.group("minute")),
            second=int(match.group("second") or 0),
            millisecond=int(match.group("millisecond") or 0),
        )

    @classmethod
    def from_time(cls, value: time) -> WallTime:
        return cls(
            hour=value.hour,
            minute=value.minute,
            second=value.second,
            millisecond=value.microsecond // 1000,
        )

    @classmethod
    def coerce(cls, value: WallTime | time | str) -> WallTime:
        if isinstance(value, WallTime):
            return value
        if isinstance(value, time):
            return cls.from_time(value)
        return cls.parse(value)

    def to_time(self) -> time:
        return time(self.hour, self.minute, self.second, self.millisecond * 1000)

    @property
    def ms_since_midnight(self) -> int:
        return ((self.hour * 60 + self.minute) * 60 + self.second) * 1000 + self.millisecond

    @property
    def minutes_since_midnight(self) -> int:
        return self.hour * 60 + self.minute

    def is_same_as(self, other: WallTime) -> bool:
        return self.ms_since_midnight == other.ms_since_midnight

    def is_before(self, other: WallTime) -> bool:
        return self.ms_since_midnight < other.ms_since_midnight

    def is_after(self, other: WallTime) -> bool:
        return self.ms_since_midnight > other.ms_since_midnight

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}.{self.millisecond:03d}"

    def to_request_string(self) -> str:
        # Milliseconds are written only when nonzero.
        base = f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        return f"{base}.{self.millisecond:03d}" if self.millisecond else base

    def to_hhmm(self) -> str:
        return f"{self.hour:02d}{self.minute:02d}"

    @property
    def display_time(self) -> str:
        period = "AM" if self.hour < 12 else "PM"
        hour = self.hour % 12 or 12
        return f"{hour}:{self.minute:02d} {period}"


def to_display_time(value: str | time) -> str:
    """``"13:30:00"`` -> ``"1:30 PM"``. Already-12-hour input only loses its leading zero."""
    if isinstance(value, str) and DISPLAY_TIME_PATTERN.match(value.strip()):
        hour_part, rest = value.strip().split(":", 1)
        return f"{int(hour_part)}:{rest.upper()}"
    return WallTime.coerce(value).display_time


def parse_display_time(value: str) -> WallTime:
    match = DISPLAY_TIME_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid 12-hour time: {value!r}")
    hour = int(match.group("hour")) % 12
    if match.group("period").upper() == "PM":
        hour += 12
    return WallTime(hour=hour, minute=int(match.group("minute")))


def to_24_hour_time(value: str) -> str:
    """``"1:30 PM"`` -> ``"13:30"``, ``"12:00 AM"`` -> ``"00:00"``."""
    parsed = parse_display_time(value)
    return f"{parsed.hour:02d}:{parsed.minute:02d}"
