# grant_review/schemas/user.py
from datetime import datetime

from pydantic import BaseModel, EmailStr


class UserPublic(BaseModel):
    id: int
    email: EmailStr
    first_name: str
    last_name: str
    role: str  # ADMINISTRATEUR / EVALUATEUR / DEMANDEUR
    is_active: bool
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class EvaluatorCreate(BaseModel):
    email: str
    first_name: str | None = None
    last_name: str | None = None


class EvaluatorCreated(UserPublic):
    """Returned once at creation; the portal forwards the password to the evaluator."""
    initial_password: str
