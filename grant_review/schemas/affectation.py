# grant_review/schemas/affectation.py
from datetime import datetime

from pydantic import BaseModel, Field

from grant_review.models.enums import AffectationStatus


class AssignmentItem(BaseModel):
    submission_id: int
    evaluator_id: int


class AffectationCreate(BaseModel):
    session_id: int
    assignments: list[AssignmentItem] = Field(min_length=1)


class AffectationPublic(BaseModel):
    id: int
    session_id: int
    submission_id: int
    evaluator_id: int
    status: AffectationStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class SessionSubmissionForEvaluator(BaseModel):
    """A session's submission as an evaluator sees it: anonymised."""
    submission_id: int
    anonymous_code: str
    affectation_status: AffectationStatus
