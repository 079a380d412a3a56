import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.db.base import Base
from app.models.semester import Semester


class NonClassParent(Base):
    __tablename__ = "non_class_parents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    contact_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    events: Mapped[list["NonClassEvent"]] = relationship(
        back_populates="parent",
        cascade="all, delete-orphan",
    )


class NonClassEvent(Base):
    __tablename__ = "non_class_events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    non_class_parent_id: Mapped[str] = mapped_column(
        ForeignKey("non_class_parents.id", ondelete="CASCADE"), nullable=False
    )
    semester_id: Mapped[str] = mapped_column(ForeignKey("semesters.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    parent: Mapped[NonClassParent] = relationship(back_populates="events")
    semester: Mapped[Semester] = relationship()
    meetings: Mapped[list["Meeting"]] = relationship(  # noqa: F821
        back_populates="non_class_event",
        cascade="all, delete-orphan",
    )
