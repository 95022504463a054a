# grant_review/services/audit_service.py
"""
Audit journal of administrative and evaluator actions.

Writing the journal is best effort: a failed write is rolled back and logged,
never raised, so callers must invoke it only after their own work has been
committed.
"""
import logging
from typing import Any

from sqlalchemy.orm import Session

from grant_review.core.config import settings
from grant_review.models.action_log import ActionLog
from grant_review.models.enums import ActionResult, ActionType

logger = logging.getLogger(__name__)


def log_action(
    db: Session,
    actor_id: int | str | None,
    action_type: ActionType,
    *,
    target_type: str | None = None,
    target_id: int | str | None = None,
    description: str | None = None,
    details: dict[str, Any] | None = None,
    result: ActionResult = ActionResult.SUCCESS,
) -> None:
    try:
        entry = ActionLog(
            actor_id=str(actor_id) if actor_id is not None else settings.AUDIT_SYSTEM_ACTOR,
            action_type=ActionType(action_type).value,
            target_type=target_type,
            target_id=str(target_id) if target_id is not None else None,
            description=description,
            details=details,
            result=ActionResult(result).value,
        )
        db.add(entry)
        db.commit()
    except Exception:
        db.rollback()
        logger.warning("could not write audit entry %s", action_type, exc_info=True)
