from collections.abc import Generator

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.models.semester import Term


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def parse_term(value: str) -> Term:
    valid_terms = [item.value for item in Term]
    if value not in valid_terms:
        joined = '" or "'.join(valid_terms)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f'"term" must be "{joined}"')
    return Term(value)
