import os
from datetime import time
from types import SimpleNamespace

# The app builds its engine at import time; point it at an in-memory database first.
os.environ["DATABASE_URL"] = "sqlite+pysqlite://"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.api.deps import get_db  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.main import app  # noqa: E402
from app.models.course import Course, CourseInstance, IsSEAS  # noqa: E402
from app.models.faculty import Faculty, FacultyCourseInstance  # noqa: E402
from app.models.meeting import Day, Meeting  # noqa: E402
from app.models.non_class_event import NonClassEvent, NonClassParent  # noqa: E402
from app.models.room import Building, Campus, Room  # noqa: E402
from app.models.semester import Semester, Term  # noqa: E402


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def seeded(db_session):
    """A small fall 2026 catalogue: two campuses, three rooms, SEAS and non-SEAS courses."""
    cambridge = Campus(name="Cambridge")
    allston = Campus(name="Allston")
    maxwell = Building(name="Maxwell Dworkin", campus=cambridge)
    sec = Building(name="SEC", campus=allston)
    md_g115 = Room(name="G115", capacity=60, building=maxwell)
    md_119 = Room(name="119", capacity=20, building=maxwell)
    sec_1321 = Room(name="1.321", capacity=120, building=sec)

    fall = Semester(calendar_year=2026, term=Term.FALL)
    spring = Semester(calendar_year=2027, term=Term.SPRING)

    cs50 = Course(prefix="CS", number="50", title="Introduction to Computer Science", is_undergraduate=True)
    cs109a = Course(prefix="CS", number="109A", title="Data Science 1", is_undergraduate=True)
    cs22a = Course(prefix="CS", number="22A", title="Discrete Mathematics", is_undergraduate=True)
    am21 = Course(prefix="AM", number="21", title="Mathematical Methods", is_seas=IsSEAS.EPS)
    ec10 = Course(prefix="EC", number="10", title="Principles of Economics", is_seas=IsSEAS.N)

    instances = {
        "cs50": CourseInstance(course=cs50, semester=fall),
        "cs109a": CourseInstance(course=cs109a, semester=fall),
        "cs22a": CourseInstance(course=cs22a, semester=fall),
        "am21": CourseInstance(course=am21, semester=fall),
        "ec10": CourseInstance(course=ec10, semester=fall),
        "cs50_spring": CourseInstance(course=cs50, semester=spring),
    }

    malan = Faculty(first_name="David", last_name="Malan", huid="10000001", notes="Prefers Mondays")
    protopapas = Faculty(first_name="Pavlos", last_name="Protopapas", huid="10000002")

    faculty_meeting = NonClassParent(title="Faculty Meeting", contact_name="Dean's Office")
    faculty_meeting_fall = NonClassEvent(parent=faculty_meeting, semester=fall)

    db_session.add_all(
        [md_g115, md_119, sec_1321, *instances.values(), malan, protopapas, faculty_meeting_fall]
    )
    db_session.commit()

    return SimpleNamespace(
        rooms=SimpleNamespace(md_g115=md_g115.id, md_119=md_119.id, sec_1321=sec_1321.id),
        semesters=SimpleNamespace(fall=fall.id, spring=spring.id),
        instances=SimpleNamespace(**{key: value.id for key, value in instances.items()}),
        faculty=SimpleNamespace(malan=malan.id, protopapas=protopapas.id),
        events=SimpleNamespace(faculty_meeting=faculty_meeting_fall.id),
        non_class_parents=SimpleNamespace(faculty_meeting=faculty_meeting.id),
    )


@pytest.fixture()
def add_meeting(db_session):
    """Insert a meeting directly, bypassing conflict checks."""

    def _add(
        *,
        day: Day,
        start: time,
        end: time,
        room_id: str | None = None,
        course_instance_id: str | None = None,
        non_class_event_id: str | None = None,
    ) -> str:
        meeting = Meeting(
            day=day,
            start_time=start,
            end_time=end,
            room_id=room_id,
            course_instance_id=course_instance_id,
            non_class_event_id=non_class_event_id,
        )
        db_session.add(meeting)
        db_session.commit()
        return meeting.id

    return _add


@pytest.fixture()
def assign_instructor(db_session):
    def _assign(course_instance_id: str, faculty_id: str, order: int = 0) -> None:
        db_session.add(
            FacultyCourseInstance(
                course_instance_id=course_instance_id,
                faculty_id=faculty_id,
                instructor_order=order,
            )
        )
        db_session.commit()

    return _assign
