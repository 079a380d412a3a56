import uuid
from datetime import datetime, time
from enum import Enum

from sqlalchemy import CheckConstraint, DateTime, Enum as SAEnum, ForeignKey, String, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.db.base import Base
from app.models.course import CourseInstance
from app.models.non_class_event import NonClassEvent
from app.models.room import Room


class Day(str, Enum):
    MON = "MON"
    TUE = "TUE"
    WED = "WED"
    THU = "THU"
    FRI = "FRI"

    @property
    def display_name(self) -> str:
        return DAY_DISPLAY_NAMES[self]

    @property
    def sort_index(self) -> int:
        return DAY_ORDER.index(self)


DAY_ORDER = list(Day)
DAY_DISPLAY_NAMES = {
    Day.MON: "Monday",
    Day.TUE: "Tuesday",
    Day.WED: "Wednesday",
    Day.THU: "Thursday",
    Day.FRI: "Friday",
}


class Meeting(Base):
    __tablename__ = "meetings"
    __table_args__ = (
        CheckConstraint(
            "(course_instance_id IS NULL) <> (non_class_event_id IS NULL)",
            name="ck_meetings_single_owner",
        ),
        CheckConstraint("start_time < end_time", name="ck_meetings_start_before_end"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    day: Mapped[Day] = mapped_column(SAEnum(Day, name="day"), nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    room_id: Mapped[str | None] = mapped_column(
        ForeignKey("rooms.id", ondelete="SET NULL"), nullable=True, index=True
    )
    course_instance_id: Mapped[str | None] = mapped_column(
        ForeignKey("course_instances.id", ondelete="CASCADE"), nullable=True, index=True
    )
    non_class_event_id: Mapped[str | None] = mapped_column(
        ForeignKey("non_class_events.id", ondelete="CASCADE"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())

    room: Mapped[Room | None] = relationship()
    course_instance: Mapped[CourseInstance | None] = relationship(back_populates="meetings")
    non_class_event: Mapped[NonClassEvent | None] = relationship(back_populates="meetings")
