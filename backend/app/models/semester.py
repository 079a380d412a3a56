import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.db.base import Base


class Term(str, Enum):
    FALL = "FALL"
    SPRING = "SPRING"


class Semester(Base):
    __tablename__ = "semesters"
    __table_args__ = (
        UniqueConstraint("calendar_year", "term", name="uq_semesters_year_term"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    calendar_year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    term: Mapped[Term] = mapped_column(SAEnum(Term, name="term"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    @property
    def academic_year(self) -> int:
        # The academic year starts in the fall and is named after the spring.
        return self.calendar_year + 1 if self.term == Term.FALL else self.calendar_year
