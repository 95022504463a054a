# grant_review/models/evaluation.py
from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from grant_review.db.base import Base


class Evaluation(Base):
    __tablename__ = "evaluations"
    __table_args__ = (
        UniqueConstraint(
            "session_id", "submission_id", "evaluator_id", name="uq_evaluation_triple"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("evaluation_sessions.id"), nullable=False, index=True)
    submission_id = Column(Integer, ForeignKey("submissions.id"), nullable=False, index=True)
    evaluator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # rubric of the session at the last save, not at creation
    rubric_version_id = Column(Integer, ForeignKey("rubric_versions.id"), nullable=False)

    # BROUILLON / SOUMISE
    status = Column(String(20), nullable=False, default="BROUILLON", index=True)
    comment = Column(Text, nullable=True)
    submitted_at = Column(DateTime(timezone=True), nullable=True)

    # weighted average of the notes, 0-100; NULL when nothing is scorable
    score_pct = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    notes = relationship("NoteEvaluation", order_by="NoteEvaluation.criterion_id")


class NoteEvaluation(Base):
    __tablename__ = "note_evaluations"

    id = Column(Integer, primary_key=True, index=True)
    evaluation_id = Column(Integer, ForeignKey("evaluations.id"), nullable=False, index=True)
    criterion_id = Column(Integer, ForeignKey("criteria.id"), nullable=False)
    value_pct = Column(Float, nullable=False)
