from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.api.deps import get_db
from app.models.non_class_event import NonClassEvent, NonClassParent
from app.models.semester import Semester
from app.schemas.non_class_event import (
    NonClassEventCreate,
    NonClassEventOut,
    NonClassParentCreate,
    NonClassParentOut,
)

router = APIRouter()


@router.get("/", response_model=list[NonClassParentOut])
def list_non_class_parents(
    acadYear: int | None = Query(default=None, ge=1900, le=3000),
    db: Session = Depends(get_db),
) -> list[NonClassParentOut]:
    """List non-class parents with their events.

    With ``acadYear`` only events from fall of the previous calendar year and
    spring of ``acadYear`` are kept, and parents left without events are dropped.
    """
    parents = db.execute(
        select(NonClassParent)
        .options(selectinload(NonClassParent.events).selectinload(NonClassEvent.semester))
        .order_by(NonClassParent.title)
    ).scalars()
    if acadYear is None:
        return list(parents)

    listed: list[NonClassParentOut] = []
    for parent in parents:
        events = [event for event in parent.events if event.semester.academic_year == acadYear]
        if not events:
            continue
        payload = NonClassParentOut.model_validate(parent)
        payload.events = [NonClassEventOut.model_validate(event) for event in events]
        listed.append(payload)
    return listed


@router.post("/", response_model=NonClassParentOut, status_code=status.HTTP_201_CREATED)
def create_non_class_parent(payload: NonClassParentCreate, db: Session = Depends(get_db)) -> NonClassParentOut:
    parent = NonClassParent(**payload.model_dump())
    db.add(parent)
    db.commit()
    db.refresh(parent)
    return parent


@router.post("/{parent_id}/events", response_model=NonClassEventOut, status_code=status.HTTP_201_CREATED)
def create_non_class_event(
    parent_id: str,
    payload: NonClassEventCreate,
    db: Session = Depends(get_db),
) -> NonClassEventOut:
    parent = db.get(NonClassParent, parent_id)
    if parent is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Non-class parent not found")
    semester = db.get(Semester, payload.semester_id)
    if semester is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Semester not found")
    event = NonClassEvent(parent=parent, semester=semester)
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


@router.delete("/{parent_id}")
def delete_non_class_parent(parent_id: str, db: Session = Depends(get_db)) -> dict:
    parent = db.get(NonClassParent, parent_id)
    if parent is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Non-class parent not found")
    db.delete(parent)
    db.commit()
    return {"success": True}
