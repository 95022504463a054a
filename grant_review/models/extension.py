# grant_review/models/extension.py
from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    UniqueConstraint,
)

from grant_review.db.base import Base


class Extension(Base):
    """Extra time granted to one evaluator in one session; at most one per pair."""

    __tablename__ = "extensions"
    __table_args__ = (
        UniqueConstraint("session_id", "evaluator_id", name="uq_extension_pair"),
    )

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("evaluation_sessions.id"), nullable=False, index=True)
    evaluator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    minutes = Column(Integer, nullable=False, default=60)
    granted_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    granted_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
