from pydantic import BaseModel, Field


class FacultyCreate(BaseModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    huid: str = Field(min_length=1, max_length=20)
    notes: str | None = Field(default=None, max_length=2000)


class FacultyOut(FacultyCreate):
    id: str
    display_name: str

    model_config = {"from_attributes": True}
