# grant_review/models/affectation.py
from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.sql import func

from grant_review.db.base import Base


class Affectation(Base):
    __tablename__ = "affectations"
    __table_args__ = (
        UniqueConstraint(
            "session_id", "submission_id", "evaluator_id", name="uq_affectation_triple"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("evaluation_sessions.id"), nullable=False, index=True)
    submission_id = Column(Integer, ForeignKey("submissions.id"), nullable=False)
    evaluator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # EN_ATTENTE / EN_COURS / TERMINEE
    status = Column(String(20), nullable=False, default="EN_COURS")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
