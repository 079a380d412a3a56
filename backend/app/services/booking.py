from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from app.core.exceptions import MeetingValidationError
from app.models.meeting import Day
from app.models.semester import Term
from app.utils.wall_time import WallTime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Booking:
    """One meeting occupying a room, as read from the booking index."""

    room_id: str | None
    room_name: str | None
    calendar_year: int | None
    term: Term | None
    day: Day
    start_time: WallTime
    end_time: WallTime
    meeting_title: str | None
    parent_id: str


@dataclass(frozen=True)
class ProposedMeeting:
    day: Day
    start_time: WallTime
    end_time: WallTime
    room_id: str | None
    calendar_year: int
    term: Term


def ranges_overlap(start1: WallTime, end1: WallTime, start2: WallTime, end2: WallTime) -> bool:
    # Half-open ranges: a meeting ending at 11:45 does not collide with one starting at 11:45.
    return start1.is_before(end2) and start2.is_before(end1)


def check_conflict(proposed: ProposedMeeting, existing_bookings: Iterable[Booking]) -> list[Booking]:
    """Return every existing booking that collides with ``proposed``.

    A meeting without a room never conflicts. Bookings only collide when they
    share the room, calendar year, term and day and their time ranges overlap.
    The result keeps the order of ``existing_bookings``; an empty list means the
    room is free.
    """
    if not proposed.room_id:
        return []
    if not proposed.start_time.is_before(proposed.end_time):
        raise MeetingValidationError(
            "Meeting start time must be before its end time",
            details={
                "startTime": proposed.start_time.to_request_string(),
                "endTime": proposed.end_time.to_request_string(),
            },
        )

    conflicts = [
        booking
        for booking in existing_bookings
        if booking.room_id == proposed.room_id
        and booking.calendar_year == proposed.calendar_year
        and booking.term == proposed.term
        and booking.day == proposed.day
        and ranges_overlap(proposed.start_time, proposed.end_time, booking.start_time, booking.end_time)
    ]
    if conflicts:
        logger.info(
            "Room %s has %d conflicting booking(s) on %s %s-%s",
            proposed.room_id,
            len(conflicts),
            proposed.day.value,
            proposed.start_time.to_request_string(),
            proposed.end_time.to_request_string(),
        )
    return conflicts


def format_conflict_message(
    room_name: str,
    day: Day,
    start_time: WallTime,
    end_time: WallTime,
    conflicts: Iterable[Booking],
) -> str:
    titles = ", ".join(booking.meeting_title or "Untitled meeting" for booking in conflicts)
    return (
        f"{room_name} is not available on {day.display_name} between "
        f"{start_time.display_time} - {end_time.display_time}. CONFLICTS WITH: {titles}"
    )
