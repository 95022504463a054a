# grant_review/models/submission.py
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from grant_review.db.base import Base


class Submission(Base):
    """A funding request sent by an applicant organisation."""

    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True, index=True)
    reference = Column(String(50), unique=True, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    organisation_name = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
