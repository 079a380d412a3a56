from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import Select, case, func, select
from sqlalchemy.orm import Session

from app.models.course import Course, CourseInstance
from app.models.meeting import Day, Meeting
from app.models.non_class_event import NonClassEvent, NonClassParent
from app.models.room import Building, Campus, Room
from app.models.semester import Semester, Term
from app.services.booking import Booking, ranges_overlap
from app.utils.wall_time import WallTime


@dataclass
class RoomAvailability:
    id: str
    campus: str
    name: str
    capacity: int | None
    meeting_titles: list[str] = field(default_factory=list)


def booking_index_query() -> Select:
    """Every meeting with its room, semester and a human readable title.

    Outer joins keep room-less meetings in the result; callers filter on the
    room id when they only care about rooms.
    """
    semester_id = func.coalesce(CourseInstance.semester_id, NonClassEvent.semester_id)
    meeting_title = case(
        (Meeting.course_instance_id.is_not(None), Course.prefix + " " + Course.number),
        (Meeting.non_class_event_id.is_not(None), NonClassParent.title),
    )
    return (
        select(
            Room.id.label("room_id"),
            (Building.name + " " + Room.name).label("room_name"),
            Semester.calendar_year.label("calendar_year"),
            Semester.term.label("term"),
            Meeting.day.label("day"),
            Meeting.start_time.label("start_time"),
            Meeting.end_time.label("end_time"),
            func.coalesce(Meeting.course_instance_id, Meeting.non_class_event_id).label("parent_id"),
            meeting_title.label("meeting_title"),
        )
        .select_from(Meeting)
        .outerjoin(Room, Room.id == Meeting.room_id)
        .outerjoin(Building, Building.id == Room.building_id)
        .outerjoin(CourseInstance, CourseInstance.id == Meeting.course_instance_id)
        .outerjoin(Course, Course.id == CourseInstance.course_id)
        .outerjoin(NonClassEvent, NonClassEvent.id == Meeting.non_class_event_id)
        .outerjoin(NonClassParent, NonClassParent.id == NonClassEvent.non_class_parent_id)
        .outerjoin(Semester, Semester.id == semester_id)
    )


def _to_booking(row) -> Booking:
    return Booking(
        room_id=row.room_id,
        room_name=row.room_name,
        calendar_year=row.calendar_year,
        term=row.term,
        day=row.day,
        start_time=WallTime.from_time(row.start_time),
        end_time=WallTime.from_time(row.end_time),
        meeting_title=row.meeting_title,
        parent_id=row.parent_id,
    )


def load_bookings(
    db: Session,
    room_id: str,
    calendar_year: int,
    term: Term,
    *,
    exclude_parent_id: str | None = None,
) -> list[Booking]:
    query = booking_index_query().where(
        Room.id == room_id,
        Semester.calendar_year == calendar_year,
        Semester.term == term,
    )
    if exclude_parent_id:
        query = query.where(
            func.coalesce(Meeting.course_instance_id, Meeting.non_class_event_id) != exclude_parent_id
        )
    query = query.order_by(Meeting.day, Meeting.start_time, Meeting.end_time)
    return [_to_booking(row) for row in db.execute(query)]


def get_room_availability(
    db: Session,
    *,
    calendar_year: int,
    term: Term,
    day: Day,
    start_time: WallTime,
    end_time: WallTime,
    exclude_parent_id: str | None = None,
) -> list[RoomAvailability]:
    """List every room with the titles of bookings overlapping the requested window.

    ``exclude_parent_id`` hides the meetings of the course instance or event
    being edited, so moving one of its meetings back to its old room does not
    show the meeting as a conflict with itself.
    """
    rooms = db.execute(
        select(Room.id, Room.name, Room.capacity, Building.name.label("building"), Campus.name.label("campus"))
        .join(Building, Building.id == Room.building_id)
        .join(Campus, Campus.id == Building.campus_id)
        .order_by(Campus.name, Building.name, Room.name)
    ).all()

    query = booking_index_query().where(
        Room.id.is_not(None),
        Semester.calendar_year == calendar_year,
        Semester.term == term,
        Meeting.day == day,
    )
    if exclude_parent_id:
        query = query.where(
            func.coalesce(Meeting.course_instance_id, Meeting.non_class_event_id) != exclude_parent_id
        )
    query = query.order_by(Meeting.start_time, Meeting.end_time)

    titles_by_room: dict[str, list[str]] = {}
    for booking in (_to_booking(row) for row in db.execute(query)):
        if ranges_overlap(start_time, end_time, booking.start_time, booking.end_time) and booking.meeting_title:
            titles_by_room.setdefault(booking.room_id, []).append(booking.meeting_title)

    return [
        RoomAvailability(
            id=row.id,
            campus=row.campus,
            name=f"{row.building} {row.name}",
            capacity=row.capacity,
            meeting_titles=titles_by_room.get(row.id, []),
        )
        for row in rooms
    ]
