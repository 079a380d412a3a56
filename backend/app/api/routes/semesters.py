from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.models.semester import Semester
from app.schemas.semester import SemesterCreate, SemesterOut

router = APIRouter()


@router.get("/", response_model=list[SemesterOut])
def list_semesters(db: Session = Depends(get_db)) -> list[SemesterOut]:
    return list(db.execute(select(Semester).order_by(Semester.calendar_year, Semester.term)).scalars())


@router.get("/years", response_model=list[int])
def list_years(db: Session = Depends(get_db)) -> list[int]:
    return list(db.execute(select(Semester.calendar_year).distinct().order_by(Semester.calendar_year)).scalars())


@router.post("/", response_model=SemesterOut, status_code=status.HTTP_201_CREATED)
def create_semester(payload: SemesterCreate, db: Session = Depends(get_db)) -> SemesterOut:
    existing = db.execute(
        select(Semester).where(Semester.calendar_year == payload.calendar_year, Semester.term == payload.term)
    ).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Semester already exists")
    semester = Semester(**payload.model_dump())
    db.add(semester)
    db.commit()
    db.refresh(semester)
    return semester
