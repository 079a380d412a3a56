from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.models.faculty import Faculty
from app.schemas.faculty import FacultyCreate, FacultyOut

router = APIRouter()


@router.get("/", response_model=list[FacultyOut])
def list_faculty(db: Session = Depends(get_db)) -> list[FacultyOut]:
    return list(db.execute(select(Faculty).order_by(Faculty.last_name, Faculty.first_name)).scalars())


@router.post("/", response_model=FacultyOut, status_code=status.HTTP_201_CREATED)
def create_faculty(payload: FacultyCreate, db: Session = Depends(get_db)) -> FacultyOut:
    existing = db.execute(select(Faculty).where(Faculty.huid == payload.huid)).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Faculty HUID already exists")
    member = Faculty(**payload.model_dump())
    db.add(member)
    db.commit()
    db.refresh(member)
    return member
