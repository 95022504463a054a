# grant_review/schemas/evaluation.py
from datetime import datetime

from pydantic import BaseModel, Field

from grant_review.models.enums import EvaluationStatus


class NoteIn(BaseModel):
    criterion_id: int
    # out-of-range values are clamped by the service, not rejected here
    value_pct: float = Field(allow_inf_nan=False)


class EvaluationSubmit(BaseModel):
    session_id: int
    submission_id: int
    comment: str | None = None
    notes: list[NoteIn] = []
    finalize: bool = False


class NotePublic(BaseModel):
    criterion_id: int
    value_pct: float

    model_config = {"from_attributes": True}


class EvaluationPublic(BaseModel):
    id: int
    session_id: int
    submission_id: int
    evaluator_id: int
    rubric_version_id: int
    status: EvaluationStatus
    comment: str | None = None
    submitted_at: datetime | None = None
    score_pct: int | None = None
    notes: list[NotePublic] = []

    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
