from pydantic import BaseModel, Field

from app.models.semester import Term


class SemesterCreate(BaseModel):
    calendar_year: int = Field(ge=1900, le=3000)
    term: Term


class SemesterOut(SemesterCreate):
    id: str

    model_config = {"from_attributes": True}
