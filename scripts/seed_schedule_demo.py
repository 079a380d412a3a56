"""Seed a demo semester of courses, rooms, faculty and meetings.

Run:
  PYTHONPATH=backend python scripts/seed_schedule_demo.py

Re-running is safe: records are matched on their natural keys and meeting
lists are replaced, so room conflicts are checked the same way the API does.
"""

from __future__ import annotations

import os

from sqlalchemy import func, select

from app.core.exceptions import AppError
from app.db.bootstrap import ensure_runtime_schema_compatibility
from app.db.session import SessionLocal
from app.models.course import Course, CourseInstance, IsSEAS
from app.models.faculty import Faculty, FacultyCourseInstance
from app.models.meeting import Meeting
from app.models.non_class_event import NonClassEvent, NonClassParent
from app.models.room import Building, Campus, Room
from app.models.semester import Semester, Term
from app.schemas.meeting import MeetingRequest
from app.services.meetings import save_meetings

CALENDAR_YEAR = int(os.getenv("SEED_CALENDAR_YEAR", "2026"))
TERM = Term(os.getenv("SEED_TERM", "FALL").strip().upper() or "FALL")

ROOMS = {
    "Cambridge": {
        "Maxwell Dworkin": [("G115", 60), ("G125", 40), ("119", 20)],
        "Pierce Hall": [("209", 45), ("301", 30)],
    },
    "Allston": {
        "SEC": [("1.321", 120), ("1.413", 60), ("LL2.224", 24)],
    },
}

COURSES = [
    # prefix, number, title, undergraduate, SEAS flag
    ("CS", "50", "Introduction to Computer Science", True, IsSEAS.Y),
    ("CS", "51", "Abstraction and Design in Computation", True, IsSEAS.Y),
    ("CS", "109A", "Data Science 1", True, IsSEAS.Y),
    ("CS", "2420", "Computing at Scale", False, IsSEAS.Y),
    ("ES", "100HFA", "Engineering Design Projects", True, IsSEAS.Y),
    ("AM", "21A", "Mathematical Methods in the Sciences", True, IsSEAS.EPS),
    ("EC", "10A", "Principles of Economics", True, IsSEAS.N),
]

FACULTY = [
    # huid, first, last, courses taught
    ("10000001", "David", "Malan", ["CS 50"]),
    ("10000002", "Stephen", "Chong", ["CS 51"]),
    ("10000003", "Pavlos", "Protopapas", ["CS 109A"]),
    ("10000004", "H.T.", "Kung", ["CS 2420"]),
    ("10000005", None, "Staff", ["ES 100HFA", "AM 21A"]),
]

MEETINGS = {
    # catalog number -> (day, start, end, building, room)
    "CS 50": [("MON", "10:30", "11:45", "SEC", "1.321"), ("WED", "10:30", "11:45", "SEC", "1.321")],
    "CS 51": [("TUE", "10:30", "11:45", "SEC", "1.413"), ("THU", "10:30", "11:45", "SEC", "1.413")],
    "CS 109A": [("MON", "09:00", "10:15", "Maxwell Dworkin", "G115"), ("WED", "09:00", "10:15", "Maxwell Dworkin", "G115")],
    "CS 2420": [("MON", "09:00", "10:15", "Pierce Hall", "209")],
    "ES 100HFA": [("FRI", "13:30", "16:15", "SEC", "LL2.224")],
    "AM 21A": [("TUE", "09:00", "10:15", None, None)],
}

EVENTS = [
    # title, contact, meetings
    ("SEAS Faculty Meeting", "Dean's Office", [("TUE", "16:00", "17:30", "Maxwell Dworkin", "G115")]),
    ("Qualifying Exams", "Graduate Office", [("FRI", "09:00", "12:00", "Pierce Hall", "301")]),
]


def upsert_semester(session) -> Semester:
    semester = session.execute(
        select(Semester).where(Semester.calendar_year == CALENDAR_YEAR, Semester.term == TERM)
    ).scalar_one_or_none()
    if semester is None:
        semester = Semester(calendar_year=CALENDAR_YEAR, term=TERM)
        session.add(semester)
    return semester


def upsert_rooms(session) -> dict[tuple[str, str], Room]:
    rooms: dict[tuple[str, str], Room] = {}
    for campus_name, buildings in ROOMS.items():
        campus = session.execute(select(Campus).where(Campus.name == campus_name)).scalar_one_or_none()
        if campus is None:
            campus = Campus(name=campus_name)
            session.add(campus)
        for building_name, room_specs in buildings.items():
            building = session.execute(
                select(Building).where(Building.name == building_name)
            ).scalar_one_or_none()
            if building is None:
                building = Building(name=building_name, campus=campus)
                session.add(building)
            for room_name, capacity in room_specs:
                room = None
                if building.id is not None:
                    room = session.execute(
                        select(Room).where(Room.building_id == building.id, Room.name == room_name)
                    ).scalar_one_or_none()
                if room is None:
                    room = Room(name=room_name, building=building)
                    session.add(room)
                room.capacity = capacity
                rooms[(building_name, room_name)] = room
    return rooms


def upsert_course_instances(session, semester: Semester) -> dict[str, CourseInstance]:
    instances: dict[str, CourseInstance] = {}
    for prefix, number, title, undergraduate, seas in COURSES:
        course = session.execute(
            select(Course).where(Course.prefix == prefix, Course.number == number)
        ).scalar_one_or_none()
        if course is None:
            course = Course(prefix=prefix, number=number)
            session.add(course)
        course.title = title
        course.is_undergraduate = undergraduate
        course.is_seas = seas

        instance = next((item for item in course.instances if item.semester is semester), None)
        if instance is None:
            instance = CourseInstance(course=course, semester=semester)
            session.add(instance)
        instances[course.catalog_number] = instance
    return instances


def upsert_faculty(session, instances: dict[str, CourseInstance]) -> None:
    for huid, first_name, last_name, catalog_numbers in FACULTY:
        member = session.execute(select(Faculty).where(Faculty.huid == huid)).scalar_one_or_none()
        if member is None:
            member = Faculty(huid=huid, last_name=last_name)
            session.add(member)
        member.first_name = first_name
        member.last_name = last_name

        for catalog_number in catalog_numbers:
            instance = instances[catalog_number]
            if any(item.faculty is member for item in instance.instructors):
                continue
            instance.instructors.append(
                FacultyCourseInstance(faculty=member, instructor_order=len(instance.instructors))
            )


def upsert_events(session, semester: Semester) -> dict[str, NonClassEvent]:
    events: dict[str, NonClassEvent] = {}
    for title, contact_name, _ in EVENTS:
        parent = session.execute(select(NonClassParent).where(NonClassParent.title == title)).scalar_one_or_none()
        if parent is None:
            parent = NonClassParent(title=title)
            session.add(parent)
        parent.contact_name = contact_name

        event = next((item for item in parent.events if item.semester is semester), None)
        if event is None:
            event = NonClassEvent(parent=parent, semester=semester)
            session.add(event)
        events[title] = event
    return events


def meeting_requests(specs, rooms: dict[tuple[str, str], Room]) -> list[MeetingRequest]:
    return [
        MeetingRequest(
            day=day,
            startTime=start,
            endTime=end,
            roomId=rooms[(building, room)].id if building else None,
        )
        for day, start, end, building, room in specs
    ]


def main() -> None:
    ensure_runtime_schema_compatibility()
    failures: list[str] = []
    with SessionLocal() as session:
        semester = upsert_semester(session)
        rooms = upsert_rooms(session)
        instances = upsert_course_instances(session, semester)
        upsert_faculty(session, instances)
        events = upsert_events(session, semester)
        session.commit()

        for catalog_number, specs in MEETINGS.items():
            try:
                save_meetings(session, instances[catalog_number].id, meeting_requests(specs, rooms))
            except AppError as exc:
                session.rollback()
                failures.append(f"{catalog_number}: {exc.message}")
        for title, _, specs in EVENTS:
            try:
                save_meetings(session, events[title].id, meeting_requests(specs, rooms))
            except AppError as exc:
                session.rollback()
                failures.append(f"{title}: {exc.message}")

        room_count = session.execute(select(func.count(Room.id))).scalar_one()
        course_count = session.execute(select(func.count(CourseInstance.id))).scalar_one()
        meeting_count = session.execute(select(func.count(Meeting.id))).scalar_one()

    print("Schedule demo data seeded successfully.")
    print("")
    print(f"Semester: {TERM.value} {CALENDAR_YEAR}")
    print(f"Rooms: {room_count}")
    print(f"Course offerings: {course_count}")
    print(f"Meetings: {meeting_count}")
    for failure in failures:
        print(f"  Skipped {failure}")


if __name__ == "__main__":
    main()
