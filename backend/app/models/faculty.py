import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.db.base import Base


class Faculty(Base):
    __tablename__ = "faculty"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    huid: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())

    @property
    def display_name(self) -> str:
        if self.first_name:
            return f"{self.last_name}, {self.first_name}"
        return self.last_name


class FacultyCourseInstance(Base):
    __tablename__ = "faculty_course_instances"
    __table_args__ = (
        UniqueConstraint("faculty_id", "course_instance_id", name="uq_faculty_course_instances_pair"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    faculty_id: Mapped[str] = mapped_column(ForeignKey("faculty.id", ondelete="CASCADE"), nullable=False)
    course_instance_id: Mapped[str] = mapped_column(
        ForeignKey("course_instances.id", ondelete="CASCADE"), nullable=False
    )
    instructor_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    faculty: Mapped[Faculty] = relationship()
    course_instance: Mapped["CourseInstance"] = relationship(back_populates="instructors")  # noqa: F821
