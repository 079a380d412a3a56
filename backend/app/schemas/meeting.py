from pydantic import BaseModel, Field, field_validator

from app.models.meeting import Day
from app.utils.wall_time import WallTime

MAX_MEETINGS_PER_PARENT = 50


class MeetingRequest(BaseModel):
    id: str | None = Field(default=None, max_length=36)
    day: Day
    startTime: str
    endTime: str
    roomId: str | None = Field(default=None, max_length=36)

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        return WallTime.parse(value).to_request_string()


class MeetingListRequest(BaseModel):
    meetings: list[MeetingRequest] = Field(default_factory=list, max_length=MAX_MEETINGS_PER_PARENT)


class MeetingRoom(BaseModel):
    id: str
    name: str
    campus: str


class MeetingResponse(BaseModel):
    id: str
    day: Day
    startTime: str
    endTime: str
    room: MeetingRoom | None = None
