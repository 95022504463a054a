# grant_review/models/evaluation_session.py
from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from grant_review.db.base import Base


class EvaluationSession(Base):
    __tablename__ = "evaluation_sessions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    # the rubric every evaluation of this session is scored against
    rubric_version_id = Column(Integer, ForeignKey("rubric_versions.id"), nullable=False)

    opens_at = Column(DateTime(timezone=True), nullable=True)
    closes_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    rubric_version = relationship("RubricVersion")


class SessionSubmission(Base):
    """A submission entered in a session, shown to evaluators by its anonymous code."""

    __tablename__ = "session_submissions"
    __table_args__ = (
        UniqueConstraint("session_id", "submission_id", name="uq_session_submission"),
    )

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("evaluation_sessions.id"), nullable=False, index=True)
    submission_id = Column(Integer, ForeignKey("submissions.id"), nullable=False)
    anonymous_code = Column(String(50), nullable=False)
