from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session, selectinload

from app.api.deps import get_db, parse_term
from app.api.routes.meetings import to_meeting_response
from app.models.course import Course, CourseInstance
from app.models.faculty import Faculty, FacultyCourseInstance
from app.models.meeting import Meeting
from app.models.room import Building, Room
from app.models.semester import Semester, Term
from app.schemas.course import CourseOfferingsOut, InstructorListRequest, InstructorOut, OfferingOut
from app.schemas.schedule import ScheduleBlockOut, ScheduleEntryOut
from app.services.schedule import get_course_schedule

router = APIRouter()


def _to_instructor_out(assignment: FacultyCourseInstance) -> InstructorOut:
    return InstructorOut(
        id=assignment.faculty.id,
        displayName=assignment.faculty.display_name,
        notes=assignment.faculty.notes,
        instructorOrder=assignment.instructor_order,
    )


def _to_offering_out(instance: CourseInstance) -> OfferingOut:
    meetings = sorted(instance.meetings, key=lambda item: (item.day.sort_index, item.start_time, item.end_time))
    return OfferingOut(
        id=instance.id,
        calendarYear=instance.semester.calendar_year,
        term=instance.semester.term,
        instructors=[_to_instructor_out(assignment) for assignment in instance.instructors],
        meetings=[to_meeting_response(meeting) for meeting in meetings],
    )


@router.get("/", response_model=list[CourseOfferingsOut])
def list_course_instances(
    acadYear: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[CourseOfferingsOut]:
    """List every course offered in an academic year with its fall and spring offerings.

    Academic year ``N`` runs from fall of ``N - 1`` to spring of ``N``. A missing,
    malformed or unknown year yields an empty list.
    """
    try:
        academic_year = int(acadYear) if acadYear else None
    except ValueError:
        return []
    known_years = set(db.execute(select(Semester.calendar_year).distinct()).scalars())
    if academic_year is None or academic_year not in known_years:
        return []

    instances = db.execute(
        select(CourseInstance)
        .join(Semester, Semester.id == CourseInstance.semester_id)
        .join(Course, Course.id == CourseInstance.course_id)
        .where(
            or_(
                and_(Semester.calendar_year == academic_year - 1, Semester.term == Term.FALL),
                and_(Semester.calendar_year == academic_year, Semester.term == Term.SPRING),
            )
        )
        .options(
            selectinload(CourseInstance.course),
            selectinload(CourseInstance.semester),
            selectinload(CourseInstance.instructors).selectinload(FacultyCourseInstance.faculty),
            selectinload(CourseInstance.meetings)
            .selectinload(Meeting.room)
            .selectinload(Room.building)
            .selectinload(Building.campus),
        )
        .order_by(Course.prefix, Course.number)
    ).scalars()

    courses: dict[str, CourseOfferingsOut] = {}
    for instance in instances:
        course = instance.course
        entry = courses.get(course.id)
        if entry is None:
            entry = CourseOfferingsOut(
                id=course.id,
                catalogNumber=course.catalog_number,
                title=course.title,
                isUndergraduate=course.is_undergraduate,
                isSEAS=course.is_seas,
            )
            courses[course.id] = entry
        if instance.semester.term == Term.FALL:
            entry.fall = _to_offering_out(instance)
        else:
            entry.spring = _to_offering_out(instance)
    return list(courses.values())


@router.get("/schedule", response_model=list[ScheduleBlockOut])
def get_schedule(
    term: str = Query(...),
    year: int = Query(...),
    db: Session = Depends(get_db),
) -> list[ScheduleBlockOut]:
    requested_term = parse_term(term)
    semester = db.execute(
        select(Semester).where(Semester.calendar_year == year, Semester.term == requested_term)
    ).scalar_one_or_none()
    if semester is None:
        return []

    return [
        ScheduleBlockOut(
            id=block.id,
            coursePrefix=block.course_prefix,
            weekday=block.weekday,
            startHour=block.start_hour,
            startMinute=block.start_minute,
            endHour=block.end_hour,
            endMinute=block.end_minute,
            duration=block.duration,
            courses=[
                ScheduleEntryOut(
                    id=entry.id,
                    courseNumber=entry.course_number,
                    room=entry.room,
                    campus=entry.campus,
                    isUndergraduate=entry.is_undergraduate,
                )
                for entry in block.courses
            ],
        )
        for block in get_course_schedule(db, semester.term, semester.calendar_year)
    ]


@router.put("/{instance_id}/instructors", response_model=list[InstructorOut])
def update_instructors(
    instance_id: str,
    payload: InstructorListRequest,
    db: Session = Depends(get_db),
) -> list[InstructorOut]:
    instance = db.get(CourseInstance, instance_id)
    if instance is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course instance not found")

    requested_ids = [item.id for item in payload.instructors]
    if len(set(requested_ids)) != len(requested_ids):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Instructors must be unique")
    faculty = {
        member.id: member
        for member in db.execute(select(Faculty).where(Faculty.id.in_(requested_ids))).scalars()
    }
    missing = [faculty_id for faculty_id in requested_ids if faculty_id not in faculty]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Faculty not found: {', '.join(missing)}",
        )

    # Existing rows are reused so the (faculty, instance) unique key is never inserted twice.
    current = {assignment.faculty_id: assignment for assignment in instance.instructors}
    assignments: list[FacultyCourseInstance] = []
    for order, faculty_id in enumerate(requested_ids):
        assignment = current.get(faculty_id) or FacultyCourseInstance(faculty=faculty[faculty_id])
        assignment.instructor_order = order
        assignments.append(assignment)
    instance.instructors = assignments
    db.commit()
    db.refresh(instance)
    return [_to_instructor_out(assignment) for assignment in instance.instructors]


@router.delete("/{instance_id}")
def delete_course_instance(instance_id: str, db: Session = Depends(get_db)) -> dict:
    instance = db.get(CourseInstance, instance_id)
    if instance is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course instance not found")
    db.delete(instance)
    db.commit()
    return {"success": True}
