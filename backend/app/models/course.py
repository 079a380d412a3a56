import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, Enum as SAEnum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.db.base import Base
from app.models.semester import Semester


class IsSEAS(str, Enum):
    Y = "Y"
    N = "N"
    EPS = "EPS"


class Course(Base):
    __tablename__ = "courses"
    __table_args__ = (
        UniqueConstraint("prefix", "number", name="uq_courses_prefix_number"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    prefix: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    number: Mapped[str] = mapped_column(String(20), nullable=False)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    is_undergraduate: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_seas: Mapped[IsSEAS] = mapped_column(SAEnum(IsSEAS, name="is_seas"), nullable=False, default=IsSEAS.Y)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())

    instances: Mapped[list["CourseInstance"]] = relationship(
        back_populates="course",
        cascade="all, delete-orphan",
    )

    @property
    def catalog_number(self) -> str:
        return f"{self.prefix} {self.number}"


class CourseInstance(Base):
    __tablename__ = "course_instances"
    __table_args__ = (
        UniqueConstraint("course_id", "semester_id", name="uq_course_instances_course_semester"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    course_id: Mapped[str] = mapped_column(ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    semester_id: Mapped[str] = mapped_column(ForeignKey("semesters.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    course: Mapped[Course] = relationship(back_populates="instances")
    semester: Mapped[Semester] = relationship()
    meetings: Mapped[list["Meeting"]] = relationship(  # noqa: F821
        back_populates="course_instance",
        cascade="all, delete-orphan",
    )
    instructors: Mapped[list["FacultyCourseInstance"]] = relationship(  # noqa: F821
        back_populates="course_instance",
        cascade="all, delete-orphan",
        order_by="FacultyCourseInstance.instructor_order",
    )
