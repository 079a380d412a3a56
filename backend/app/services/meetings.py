from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from sqlalchemy import or_, select
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import MeetingValidationError, ResourceNotFoundError, RoomConflictError
from app.models.course import CourseInstance
from app.models.meeting import Meeting
from app.models.non_class_event import NonClassEvent
from app.models.room import Building, Room
from app.models.semester import Semester
from app.schemas.meeting import MeetingRequest
from app.services.booking import Booking, ProposedMeeting, check_conflict, format_conflict_message
from app.services.meeting_validation import ValidatedMeeting, ValidationFailure, validate_meeting
from app.services.room_bookings import load_bookings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CourseInstanceOwner:
    course_instance: CourseInstance

    @property
    def parent_id(self) -> str:
        return self.course_instance.id

    @property
    def semester(self) -> Semester:
        return self.course_instance.semester

    @property
    def title(self) -> str:
        return self.course_instance.course.catalog_number

    def replace_meetings(self, meetings: list[Meeting]) -> None:
        self.course_instance.meetings = meetings


@dataclass(frozen=True)
class NonClassEventOwner:
    non_class_event: NonClassEvent

    @property
    def parent_id(self) -> str:
        return self.non_class_event.id

    @property
    def semester(self) -> Semester:
        return self.non_class_event.semester

    @property
    def title(self) -> str:
        return self.non_class_event.parent.title

    def replace_meetings(self, meetings: list[Meeting]) -> None:
        self.non_class_event.meetings = meetings


MeetingOwner = Union[CourseInstanceOwner, NonClassEventOwner]


def find_meeting_owner(db: Session, parent_id: str) -> MeetingOwner:
    course_instance = db.get(CourseInstance, parent_id)
    if course_instance is not None:
        return CourseInstanceOwner(course_instance)
    non_class_event = db.get(NonClassEvent, parent_id)
    if non_class_event is not None:
        return NonClassEventOwner(non_class_event)
    raise ResourceNotFoundError("Course instance or non-class event", parent_id)


def _owned_meetings(owner: MeetingOwner) -> list[Meeting]:
    if isinstance(owner, CourseInstanceOwner):
        return list(owner.course_instance.meetings)
    return list(owner.non_class_event.meetings)


def _validated(requests: list[MeetingRequest]) -> list[ValidatedMeeting]:
    validated: list[ValidatedMeeting] = []
    for index, request in enumerate(requests):
        result = validate_meeting(
            meeting_id=request.id,
            day=request.day,
            start_time=request.startTime,
            end_time=request.endTime,
            room_id=request.roomId,
        )
        if isinstance(result, ValidationFailure):
            raise MeetingValidationError(
                "; ".join(result.errors),
                details={"index": index, "errors": result.errors},
            )
        validated.append(result.value)
    return validated


def _assign_room(
    db: Session,
    owner: MeetingOwner,
    meeting: ValidatedMeeting,
    requested: list[Booking],
) -> Room | None:
    """Resolve the meeting's room and make sure it is free.

    ``requested`` holds the bookings of meetings earlier in the same request;
    they are checked alongside the stored bookings of other owners.
    """
    # Room-less meetings are allowed and never conflict with anything.
    if meeting.room_id is None:
        return None
    room = db.get(Room, meeting.room_id)
    if room is None:
        raise ResourceNotFoundError("Room", meeting.room_id)

    semester = owner.semester
    bookings = load_bookings(
        db,
        room.id,
        semester.calendar_year,
        semester.term,
        exclude_parent_id=owner.parent_id,
    )
    conflicts = check_conflict(
        ProposedMeeting(
            day=meeting.day,
            start_time=meeting.start_time,
            end_time=meeting.end_time,
            room_id=room.id,
            calendar_year=semester.calendar_year,
            term=semester.term,
        ),
        [*requested, *bookings],
    )
    if conflicts:
        raise RoomConflictError(
            format_conflict_message(room.display_name, meeting.day, meeting.start_time, meeting.end_time, conflicts),
            conflicts=[booking.meeting_title for booking in conflicts if booking.meeting_title],
        )
    requested.append(
        Booking(
            room_id=room.id,
            room_name=room.display_name,
            calendar_year=semester.calendar_year,
            term=semester.term,
            day=meeting.day,
            start_time=meeting.start_time,
            end_time=meeting.end_time,
            meeting_title=owner.title,
            parent_id=owner.parent_id,
        )
    )
    return room


def save_meetings(db: Session, parent_id: str, requests: list[MeetingRequest]) -> list[Meeting]:
    """Replace the meeting list of a course instance or non-class event.

    Meetings missing from ``requests`` are deleted. Nothing is written unless
    every meeting validates and every requested room is free.
    """
    owner = find_meeting_owner(db, parent_id)
    validated = _validated(requests)
    existing = {meeting.id: meeting for meeting in _owned_meetings(owner)}

    saved: list[Meeting] = []
    requested: list[Booking] = []
    for meeting in validated:
        room = _assign_room(db, owner, meeting, requested)
        if meeting.id is not None:
            record = existing.get(meeting.id)
            if record is None:
                raise ResourceNotFoundError("Meeting", meeting.id)
        else:
            record = Meeting()
        record.day = meeting.day
        record.start_time = meeting.start_time.to_time()
        record.end_time = meeting.end_time.to_time()
        record.room = room
        saved.append(record)

    owner.replace_meetings(saved)
    db.commit()
    logger.info("Saved %d meeting(s) for %s", len(saved), parent_id)
    return list_meetings(db, parent_id)


def list_meetings(db: Session, parent_id: str) -> list[Meeting]:
    meetings = db.execute(
        select(Meeting)
        .where(or_(Meeting.course_instance_id == parent_id, Meeting.non_class_event_id == parent_id))
        .options(selectinload(Meeting.room).selectinload(Room.building).selectinload(Building.campus))
    ).scalars()
    return sorted(meetings, key=lambda item: (item.day.sort_index, item.start_time, item.end_time))
