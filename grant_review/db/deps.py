# grant_review/db/deps.py
from typing import Generator

from grant_review.db.session import SessionLocal


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
