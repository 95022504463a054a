# grant_review/models/action_log.py
from sqlalchemy import JSON, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from grant_review.db.base import Base


class ActionLog(Base):
    __tablename__ = "action_logs"

    id = Column(Integer, primary_key=True, index=True)

    # user id as text, or the "system" sentinel
    actor_id = Column(String(64), nullable=False, index=True)
    action_type = Column(String(50), nullable=False, index=True)
    target_type = Column(String(50), nullable=True)
    target_id = Column(String(64), nullable=True)
    description = Column(Text, nullable=True)
    details = Column(JSON, nullable=True)
    result = Column(String(20), nullable=False, default="REUSSI")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
