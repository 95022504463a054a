# grant_review/schemas/availability.py
from datetime import datetime

from pydantic import BaseModel

from grant_review.models.enums import AvailabilityStatus


class AvailabilityRespond(BaseModel):
    # the evaluator is always the authenticated caller, never part of the body
    session_id: int
    status: AvailabilityStatus


class AvailabilityPublic(BaseModel):
    id: int
    session_id: int
    evaluator_id: int
    status: AvailabilityStatus
    responded_at: datetime | None = None

    model_config = {"from_attributes": True}
