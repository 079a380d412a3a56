"""Checks a meeting request must pass before it becomes a ``Meeting`` row.

Each check returns ``Ok`` or ``ValidationFailure`` instead of raising, so the
caller decides how a failure reaches the user.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

from app.models.meeting import Day
from app.utils.wall_time import WallTime

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class ValidationFailure:
    errors: list[str] = field(default_factory=list)


ValidationResult = Union[Ok[T], ValidationFailure]


@dataclass(frozen=True)
class ValidatedMeeting:
    id: str | None
    day: Day
    start_time: WallTime
    end_time: WallTime
    room_id: str | None


def validate_time_range(start_time: str, end_time: str) -> ValidationResult[tuple[WallTime, WallTime]]:
    errors: list[str] = []
    parsed: dict[str, WallTime] = {}
    for label, value in (("startTime", start_time), ("endTime", end_time)):
        try:
            parsed[label] = WallTime.parse(value)
        except ValueError:
            errors.append(f"{label} must be in HH:MM[:SS[.mmm]] 24-hour format")
    if errors:
        return ValidationFailure(errors)

    start, end = parsed["startTime"], parsed["endTime"]
    if not start.is_before(end):
        return ValidationFailure(["startTime must occur before endTime"])
    return Ok((start, end))


def validate_meeting(
    *,
    meeting_id: str | None,
    day: Day | str,
    start_time: str,
    end_time: str,
    room_id: str | None,
) -> ValidationResult[ValidatedMeeting]:
    errors: list[str] = []
    try:
        parsed_day = Day(day)
    except ValueError:
        parsed_day = None
        errors.append(f"day must be one of {', '.join(item.value for item in Day)}")

    times = validate_time_range(start_time, end_time)
    if isinstance(times, ValidationFailure):
        errors.extend(times.errors)

    if errors:
        return ValidationFailure(errors)

    start, end = times.value
    return Ok(
        ValidatedMeeting(
            id=meeting_id or None,
            day=parsed_day,
            start_time=start,
            end_time=end,
            room_id=(room_id or "").strip() or None,
        )
    )
