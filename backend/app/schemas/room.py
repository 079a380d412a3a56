from pydantic import BaseModel, Field, field_validator


class RoomCreate(BaseModel):
    campus: str = Field(min_length=1, max_length=100)
    building: str = Field(min_length=1, max_length=200)
    name: str = Field(min_length=1, max_length=100)
    capacity: int | None = Field(default=None, ge=0, le=5000)

    @field_validator("campus", "building", "name")
    @classmethod
    def strip_names(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Value must not be blank")
        return stripped


class RoomUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    capacity: int | None = Field(default=None, ge=0, le=5000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str | None) -> str | None:
        if value is None:
            return value
        stripped = value.strip()
        if not stripped:
            raise ValueError("Value must not be blank")
        return stripped


class RoomOut(BaseModel):
    id: str
    name: str
    campus: str
    capacity: int | None = None


class BuildingOut(BaseModel):
    id: str
    name: str

    model_config = {"from_attributes": True}


class CampusOut(BaseModel):
    id: str
    name: str

    model_config = {"from_attributes": True}


class RoomAdminOut(BaseModel):
    id: str
    name: str
    capacity: int | None = None
    building: BuildingOut
    campus: CampusOut


class RoomAvailabilityOut(BaseModel):
    id: str
    campus: str
    name: str
    capacity: int | None = None
    meetingTitles: list[str] = Field(default_factory=list)
