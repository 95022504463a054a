# grant_review/schemas/extension.py
from datetime import datetime

from pydantic import BaseModel


class ExtensionGrant(BaseModel):
    session_id: int
    evaluator_id: int
    minutes: int | None = None  # defaults to DEFAULT_EXTENSION_MINUTES
    expires_at: datetime | None = None  # defaults to now + minutes


class ExtensionPublic(BaseModel):
    id: int
    session_id: int
    evaluator_id: int
    minutes: int
    granted_by_id: int
    granted_at: datetime
    expires_at: datetime

    model_config = {"from_attributes": True}
