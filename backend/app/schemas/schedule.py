from pydantic import BaseModel, Field

from app.models.meeting import Day


class ScheduleEntryOut(BaseModel):
    id: str
    courseNumber: str
    room: str | None = None
    campus: str | None = None
    isUndergraduate: bool


class ScheduleBlockOut(BaseModel):
    id: str
    coursePrefix: str
    weekday: Day
    startHour: int
    startMinute: int
    endHour: int
    endMinute: int
    duration: int
    courses: list[ScheduleEntryOut] = Field(default_factory=list)


class RoomScheduleInstructorOut(BaseModel):
    id: str
    displayName: str
    notes: str | None = None
    instructorOrder: int


class RoomScheduleBlockOut(BaseModel):
    id: str
    catalogNumber: str
    title: str
    isUndergraduate: bool
    weekday: Day
    startHour: int
    startMinute: int
    endHour: int
    endMinute: int
    duration: int
    instructors: list[RoomScheduleInstructorOut] = Field(default_factory=list)
