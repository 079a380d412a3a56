from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.models.course import Course, CourseInstance, IsSEAS
from app.models.faculty import FacultyCourseInstance
from app.models.meeting import Day, Meeting
from app.models.room import Building, Campus, Room
from app.models.semester import Semester, Term
from app.utils.wall_time import WallTime


@dataclass(frozen=True)
class MeetingWithContext:
    instance_id: str
    course_prefix: str
    course_number: str
    weekday: Day
    start_hour: int
    start_minute: int
    end_hour: int
    end_minute: int
    room: str | None
    campus: str | None
    is_undergraduate: bool
    term: Term
    calendar_year: int

    @property
    def duration(self) -> int:
        return (self.end_hour * 60 + self.end_minute) - (self.start_hour * 60 + self.start_minute)


@dataclass
class ScheduleEntry:
    id: str
    course_number: str
    room: str | None
    campus: str | None
    is_undergraduate: bool


@dataclass
class ScheduleBlock:
    id: str
    course_prefix: str
    weekday: Day
    start_hour: int
    start_minute: int
    end_hour: int
    end_minute: int
    duration: int
    courses: list[ScheduleEntry] = field(default_factory=list)


@dataclass
class RoomScheduleInstructor:
    id: str
    display_name: str
    notes: str | None
    instructor_order: int


@dataclass
class RoomScheduleBlock:
    id: str
    catalog_number: str
    title: str
    is_undergraduate: bool
    weekday: Day
    start_hour: int
    start_minute: int
    end_hour: int
    end_minute: int
    duration: int
    instructors: list[RoomScheduleInstructor] = field(default_factory=list)


def schedule_block_id(
    prefix: str,
    weekday: Day,
    start: WallTime,
    end: WallTime,
    term: Term,
    calendar_year: int,
) -> str:
    return f"{prefix}{weekday.value}{start.to_hhmm()}{end.to_hhmm()}{term.value}{calendar_year}"


def _block_sort_key(meeting: MeetingWithContext) -> tuple:
    # Course numbers compare as plain strings, so "109A" sorts before "22A".
    return (
        meeting.weekday.sort_index,
        meeting.start_hour,
        meeting.start_minute,
        meeting.duration,
        meeting.course_prefix,
        meeting.course_number,
    )


def build_schedule_blocks(meetings: Iterable[MeetingWithContext]) -> list[ScheduleBlock]:
    """Merge meetings of the same prefix that share a day and time into calendar blocks.

    Blocks come out ordered by weekday, start time, duration and prefix. Each
    block lists its course sessions in course-number order. Start/end values
    and the duration stay in raw hours and minutes.
    """
    blocks: dict[tuple, ScheduleBlock] = {}
    for meeting in sorted(meetings, key=_block_sort_key):
        key = (
            meeting.course_prefix,
            meeting.weekday,
            meeting.start_hour,
            meeting.start_minute,
            meeting.end_hour,
            meeting.end_minute,
        )
        block = blocks.get(key)
        if block is None:
            block = ScheduleBlock(
                id=schedule_block_id(
                    meeting.course_prefix,
                    meeting.weekday,
                    WallTime(meeting.start_hour, meeting.start_minute),
                    WallTime(meeting.end_hour, meeting.end_minute),
                    meeting.term,
                    meeting.calendar_year,
                ),
                course_prefix=meeting.course_prefix,
                weekday=meeting.weekday,
                start_hour=meeting.start_hour,
                start_minute=meeting.start_minute,
                end_hour=meeting.end_hour,
                end_minute=meeting.end_minute,
                duration=meeting.duration,
            )
            blocks[key] = block
        block.courses.append(
            ScheduleEntry(
                id=meeting.instance_id,
                course_number=meeting.course_number,
                room=meeting.room,
                campus=meeting.campus,
                is_undergraduate=meeting.is_undergraduate,
            )
        )
    return list(blocks.values())


def load_schedule_meetings(db: Session, term: Term, calendar_year: int) -> list[MeetingWithContext]:
    """Course meetings of one semester, restricted to SEAS courses."""
    query = (
        select(
            CourseInstance.id.label("instance_id"),
            Course.prefix,
            Course.number,
            Course.is_undergraduate,
            Meeting.day,
            Meeting.start_time,
            Meeting.end_time,
            (Building.name + " " + Room.name).label("room"),
            Campus.name.label("campus"),
        )
        .select_from(Meeting)
        .join(CourseInstance, CourseInstance.id == Meeting.course_instance_id)
        .join(Course, Course.id == CourseInstance.course_id)
        .join(Semester, Semester.id == CourseInstance.semester_id)
        .outerjoin(Room, Room.id == Meeting.room_id)
        .outerjoin(Building, Building.id == Room.building_id)
        .outerjoin(Campus, Campus.id == Building.campus_id)
        .where(
            Semester.term == term,
            Semester.calendar_year == calendar_year,
            Course.is_seas != IsSEAS.N,
        )
        .order_by(Course.prefix, Course.number)
    )
    meetings: list[MeetingWithContext] = []
    for row in db.execute(query):
        start = WallTime.from_time(row.start_time)
        end = WallTime.from_time(row.end_time)
        meetings.append(
            MeetingWithContext(
                instance_id=row.instance_id,
                course_prefix=row.prefix,
                course_number=row.number,
                weekday=row.day,
                start_hour=start.hour,
                start_minute=start.minute,
                end_hour=end.hour,
                end_minute=end.minute,
                room=row.room,
                campus=row.campus,
                is_undergraduate=row.is_undergraduate,
                term=term,
                calendar_year=calendar_year,
            )
        )
    return meetings


def get_course_schedule(db: Session, term: Term, calendar_year: int) -> list[ScheduleBlock]:
    return build_schedule_blocks(load_schedule_meetings(db, term, calendar_year))


def get_room_schedule(db: Session, room_id: str, term: Term, calendar_year: int) -> list[RoomScheduleBlock]:
    """Course meetings held in one room during a semester, with their instructors."""
    meetings = db.execute(
        select(Meeting)
        .join(CourseInstance, CourseInstance.id == Meeting.course_instance_id)
        .join(Course, Course.id == CourseInstance.course_id)
        .join(Semester, Semester.id == CourseInstance.semester_id)
        .where(
            Meeting.room_id == room_id,
            Semester.term == term,
            Semester.calendar_year == calendar_year,
            Course.is_seas != IsSEAS.N,
        )
        .options(
            selectinload(Meeting.course_instance).selectinload(CourseInstance.course),
            selectinload(Meeting.course_instance)
            .selectinload(CourseInstance.instructors)
            .selectinload(FacultyCourseInstance.faculty),
        )
    ).scalars()

    blocks: list[RoomScheduleBlock] = []
    for meeting in meetings:
        course = meeting.course_instance.course
        start = WallTime.from_time(meeting.start_time)
        end = WallTime.from_time(meeting.end_time)
        blocks.append(
            RoomScheduleBlock(
                id=schedule_block_id(f"{course.prefix}{course.number}", meeting.day, start, end, term, calendar_year),
                catalog_number=course.catalog_number,
                title=course.title,
                is_undergraduate=course.is_undergraduate,
                weekday=meeting.day,
                start_hour=start.hour,
                start_minute=start.minute,
                end_hour=end.hour,
                end_minute=end.minute,
                duration=end.minutes_since_midnight - start.minutes_since_midnight,
                instructors=[
                    RoomScheduleInstructor(
                        id=assignment.faculty.id,
                        display_name=assignment.faculty.display_name,
                        notes=assignment.faculty.notes,
                        instructor_order=assignment.instructor_order,
                    )
                    for assignment in meeting.course_instance.instructors
                ],
            )
        )
    blocks.sort(
        key=lambda block: (
            block.weekday.sort_index,
            block.start_hour,
            block.start_minute,
            block.duration,
            block.catalog_number,
        )
    )
    return blocks
