import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from app.api.deps import get_db, parse_term
from app.models.meeting import Day
from app.models.room import Building, Campus, Room
from app.models.semester import Term
from app.schemas.room import (
    BuildingOut,
    CampusOut,
    RoomAdminOut,
    RoomAvailabilityOut,
    RoomCreate,
    RoomOut,
    RoomUpdate,
)
from app.schemas.schedule import RoomScheduleBlockOut, RoomScheduleInstructorOut
from app.services.meeting_validation import ValidationFailure, validate_time_range
from app.services.room_bookings import get_room_availability
from app.services.schedule import get_room_schedule

logger = logging.getLogger(__name__)

router = APIRouter()


def _rooms_query():
    return (
        select(Room)
        .join(Building, Building.id == Room.building_id)
        .join(Campus, Campus.id == Building.campus_id)
        .options(selectinload(Room.building).selectinload(Building.campus))
        .order_by(Campus.name, Building.name, Room.name)
    )


@router.get("/", response_model=list[RoomOut])
def list_rooms(db: Session = Depends(get_db)) -> list[RoomOut]:
    return [
        RoomOut(id=room.id, name=room.display_name, campus=room.campus_name, capacity=room.capacity)
        for room in db.execute(_rooms_query()).scalars()
    ]


def _to_admin_out(room: Room) -> RoomAdminOut:
    return RoomAdminOut(
        id=room.id,
        name=room.name,
        capacity=room.capacity,
        building=BuildingOut.model_validate(room.building),
        campus=CampusOut.model_validate(room.building.campus),
    )


@router.get("/admin", response_model=list[RoomAdminOut])
def list_rooms_admin(db: Session = Depends(get_db)) -> list[RoomAdminOut]:
    return [_to_admin_out(room) for room in db.execute(_rooms_query()).scalars()]


@router.get("/availability", response_model=list[RoomAvailabilityOut])
def room_availability(
    calendarYear: int = Query(..., ge=1900, le=3000),
    term: Term = Query(...),
    day: Day = Query(...),
    startTime: str = Query(...),
    endTime: str = Query(...),
    excludeParent: str | None = Query(default=None, max_length=36),
    db: Session = Depends(get_db),
) -> list[RoomAvailabilityOut]:
    times = validate_time_range(startTime, endTime)
    if isinstance(times, ValidationFailure):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="; ".join(times.errors))
    start, end = times.value
    return [
        RoomAvailabilityOut(
            id=room.id,
            campus=room.campus,
            name=room.name,
            capacity=room.capacity,
            meetingTitles=room.meeting_titles,
        )
        for room in get_room_availability(
            db,
            calendar_year=calendarYear,
            term=term,
            day=day,
            start_time=start,
            end_time=end,
            exclude_parent_id=excludeParent,
        )
    ]


@router.post("/", response_model=RoomAdminOut, status_code=status.HTTP_201_CREATED)
def create_room(payload: RoomCreate, db: Session = Depends(get_db)) -> RoomAdminOut:
    campus = db.execute(select(Campus).where(Campus.name == payload.campus)).scalar_one_or_none()
    if campus is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f'Unable to find a campus called "{payload.campus}".',
        )

    # A building belongs to exactly one campus.
    building = db.execute(
        select(Building).where(func.lower(Building.name) == payload.building.lower())
    ).scalar_one_or_none()
    if building is not None and building.campus_id != campus.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{payload.building} already exists within another campus.",
        )
    if building is None:
        building = Building(name=payload.building, campus=campus)
        db.add(building)
    else:
        duplicate = db.execute(
            select(Room).where(Room.building_id == building.id, func.lower(Room.name) == payload.name.lower())
        ).scalar_one_or_none()
        if duplicate:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"The room {payload.name} already exists in {building.name}.",
            )

    room = Room(name=payload.name, capacity=payload.capacity, building=building)
    db.add(room)
    db.commit()
    db.refresh(room)
    logger.info("Created room %s", room.display_name)
    return _to_admin_out(room)


@router.put("/{room_id}", response_model=RoomAdminOut)
def update_room(room_id: str, payload: RoomUpdate, db: Session = Depends(get_db)) -> RoomAdminOut:
    room = db.get(Room, room_id)
    if room is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")

    data = payload.model_dump(exclude_unset=True)
    # A room is always named; an explicit null name leaves it unchanged.
    if data.get("name") is None:
        data.pop("name", None)
    if "name" in data:
        duplicate = db.execute(
            select(Room).where(
                Room.building_id == room.building_id,
                func.lower(Room.name) == data["name"].lower(),
                Room.id != room_id,
            )
        ).scalar_one_or_none()
        if duplicate:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"The room {data['name']} already exists in {room.building.name}.",
            )

    for key, value in data.items():
        setattr(room, key, value)
    db.commit()
    db.refresh(room)
    logger.info("Updated room %s", room.display_name)
    return _to_admin_out(room)


@router.get("/{room_id}/schedule", response_model=list[RoomScheduleBlockOut])
def room_schedule(
    room_id: str,
    term: str = Query(...),
    calendarYear: int = Query(...),
    db: Session = Depends(get_db),
) -> list[RoomScheduleBlockOut]:
    requested_term = parse_term(term)
    if db.get(Room, room_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    return [
        RoomScheduleBlockOut(
            id=block.id,
            catalogNumber=block.catalog_number,
            title=block.title,
            isUndergraduate=block.is_undergraduate,
            weekday=block.weekday,
            startHour=block.start_hour,
            startMinute=block.start_minute,
            endHour=block.end_hour,
            endMinute=block.end_minute,
            duration=block.duration,
            instructors=[
                RoomScheduleInstructorOut(
                    id=instructor.id,
                    displayName=instructor.display_name,
                    notes=instructor.notes,
                    instructorOrder=instructor.instructor_order,
                )
                for instructor in block.instructors
            ],
        )
        for block in get_room_schedule(db, room_id, requested_term, calendarYear)
    ]
