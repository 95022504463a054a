# grant_review/models/availability.py
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


class Availability(Base):
    __tablename__ = "availabilities"
    __table_args__ = (
        UniqueConstraint("session_id", "evaluator_id", name="uq_availability_pair"),
    )

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("evaluation_sessions.id"), nullable=False, index=True)
    evaluator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # EN_ATTENTE / OUI / NON
    status = Column(String(20), nullable=False, default="EN_ATTENTE")
    responded_at = Column(DateTime(timezone=True), server_default=func.now())
