from pydantic import BaseModel, Field

from app.schemas.semester import SemesterOut


class NonClassParentCreate(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    contact_name: str | None = Field(default=None, max_length=200)
    notes: str | None = Field(default=None, max_length=2000)


class NonClassEventCreate(BaseModel):
    semester_id: str = Field(min_length=1, max_length=36)


class NonClassEventOut(BaseModel):
    id: str
    non_class_parent_id: str
    semester: SemesterOut

    model_config = {"from_attributes": True}


class NonClassParentOut(NonClassParentCreate):
    id: str
    events: list[NonClassEventOut] = Field(default_factory=list)

    model_config = {"from_attributes": True}
