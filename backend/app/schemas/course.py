from pydantic import BaseModel, Field, field_validator

from app.models.course import IsSEAS
from app.models.semester import Term
from app.schemas.meeting import MeetingResponse
from app.schemas.semester import SemesterOut


class CourseBase(BaseModel):
    prefix: str = Field(min_length=1, max_length=20)
    number: str = Field(min_length=1, max_length=20)
    title: str = Field(min_length=1, max_length=300)
    is_undergraduate: bool = False
    is_seas: IsSEAS = IsSEAS.Y

    @field_validator("prefix", "number")
    @classmethod
    def strip_catalog_parts(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Value must not be blank")
        return stripped


class CourseCreate(CourseBase):
    pass


class CourseUpdate(BaseModel):
    prefix: str | None = Field(default=None, min_length=1, max_length=20)
    number: str | None = Field(default=None, min_length=1, max_length=20)
    title: str | None = Field(default=None, min_length=1, max_length=300)
    is_undergraduate: bool | None = None
    is_seas: IsSEAS | None = None

    @field_validator("prefix", "number")
    @classmethod
    def strip_catalog_parts(cls, value: str | None) -> str | None:
        if value is None:
            return value
        stripped = value.strip()
        if not stripped:
            raise ValueError("Value must not be blank")
        return stripped


class CourseOut(CourseBase):
    id: str
    catalog_number: str

    model_config = {"from_attributes": True}


class CourseInstanceCreate(BaseModel):
    semester_id: str = Field(min_length=1, max_length=36)


class CourseInstanceOut(BaseModel):
    id: str
    course_id: str
    semester: SemesterOut

    model_config = {"from_attributes": True}


class InstructorRequest(BaseModel):
    id: str = Field(min_length=1, max_length=36)


class InstructorListRequest(BaseModel):
    instructors: list[InstructorRequest] = Field(default_factory=list, max_length=20)


class InstructorOut(BaseModel):
    id: str
    displayName: str
    notes: str | None = None
    instructorOrder: int


class OfferingOut(BaseModel):
    id: str
    calendarYear: int
    term: Term
    instructors: list[InstructorOut] = Field(default_factory=list)
    meetings: list[MeetingResponse] = Field(default_factory=list)


class CourseOfferingsOut(BaseModel):
    """One course with its fall and spring offerings of an academic year."""

    id: str
    catalogNumber: str
    title: str
    isUndergraduate: bool
    isSEAS: IsSEAS
    fall: OfferingOut | None = None
    spring: OfferingOut | None = None
