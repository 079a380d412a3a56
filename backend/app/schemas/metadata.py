from pydantic import BaseModel, Field

from app.schemas.room import CampusOut
from app.schemas.semester import SemesterOut


class DayOut(BaseModel):
    value: str
    label: str


class MetadataOut(BaseModel):
    days: list[DayOut] = Field(default_factory=list)
    terms: list[str] = Field(default_factory=list)
    semesters: list[SemesterOut] = Field(default_factory=list)
    campuses: list[CampusOut] = Field(default_factory=list)
