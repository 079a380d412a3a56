from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.models.meeting import DAY_ORDER
from app.models.room import Campus
from app.models.semester import Semester, Term
from app.schemas.metadata import DayOut, MetadataOut

router = APIRouter()


@router.get("/", response_model=MetadataOut)
def get_metadata(db: Session = Depends(get_db)) -> MetadataOut:
    semesters = db.execute(select(Semester).order_by(Semester.calendar_year, Semester.term)).scalars()
    campuses = db.execute(select(Campus).order_by(Campus.name)).scalars()
    return MetadataOut(
        days=[DayOut(value=day.value, label=day.display_name) for day in DAY_ORDER],
        terms=[term.value for term in Term],
        semesters=list(semesters),
        campuses=list(campuses),
    )
