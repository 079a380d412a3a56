from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.models.course import Course, CourseInstance
from app.models.semester import Semester
from app.schemas.course import CourseCreate, CourseInstanceCreate, CourseInstanceOut, CourseOut, CourseUpdate

router = APIRouter()


@router.get("/", response_model=list[CourseOut])
def list_courses(db: Session = Depends(get_db)) -> list[CourseOut]:
    return list(db.execute(select(Course).order_by(Course.prefix, Course.number)).scalars())


@router.post("/", response_model=CourseOut, status_code=status.HTTP_201_CREATED)
def create_course(payload: CourseCreate, db: Session = Depends(get_db)) -> CourseOut:
    existing = db.execute(
        select(Course).where(Course.prefix == payload.prefix, Course.number == payload.number)
    ).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Course catalog number already exists")
    course = Course(**payload.model_dump())
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


@router.put("/{course_id}", response_model=CourseOut)
def update_course(course_id: str, payload: CourseUpdate, db: Session = Depends(get_db)) -> CourseOut:
    course = db.get(Course, course_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")

    # Columns are not nullable, so an explicit null leaves the value unchanged.
    data = {key: value for key, value in payload.model_dump(exclude_unset=True).items() if value is not None}
    prefix = data.get("prefix", course.prefix)
    number = data.get("number", course.number)
    existing = db.execute(
        select(Course).where(Course.prefix == prefix, Course.number == number, Course.id != course_id)
    ).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Course catalog number already exists")

    for key, value in data.items():
        setattr(course, key, value)
    db.commit()
    db.refresh(course)
    return course


@router.post("/{course_id}/instances", response_model=CourseInstanceOut, status_code=status.HTTP_201_CREATED)
def create_course_instance(
    course_id: str,
    payload: CourseInstanceCreate,
    db: Session = Depends(get_db),
) -> CourseInstanceOut:
    course = db.get(Course, course_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    semester = db.get(Semester, payload.semester_id)
    if semester is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Semester not found")
    existing = db.execute(
        select(CourseInstance).where(
            CourseInstance.course_id == course.id,
            CourseInstance.semester_id == semester.id,
        )
    ).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Course is already offered in this semester")
    instance = CourseInstance(course=course, semester=semester)
    db.add(instance)
    db.commit()
    db.refresh(instance)
    return instance
