# grant_review/services/extension_service.py
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from grant_review.core.config import settings
from grant_review.core.errors import PersistenceError
from grant_review.db.upsert import upsert
from grant_review.models.enums import ActionType
from grant_review.models.extension import Extension
from grant_review.services.audit_service import log_action

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def grant_extension(
    db: Session,
    *,
    granted_by_id: int,
    session_id: int,
    evaluator_id: int,
    minutes: int | None = None,
    expires_at: datetime | None = None,
) -> Extension:
    """
    Grant extra time to an evaluator for a session.

    A new grant replaces the previous one for the same pair; minutes are
    never added up. ``minutes`` is not checked for sign.
    """
    if minutes is None:
        minutes = settings.DEFAULT_EXTENSION_MINUTES
    now = _utcnow()
    if expires_at is None:
        expires_at = now + timedelta(minutes=minutes)

    try:
        extension = upsert(
            db,
            Extension,
            keys={"session_id": session_id, "evaluator_id": evaluator_id},
            values={
                "minutes": minutes,
                "granted_by_id": granted_by_id,
                "granted_at": now,
                "expires_at": expires_at,
            },
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError(
            f"could not grant extension in session {session_id}"
        ) from exc
    db.refresh(extension)

    logger.info(
        "Extension of %s min granted to evaluator %s in session %s",
        minutes, evaluator_id, session_id,
    )
    log_action(
        db,
        granted_by_id,
        ActionType.EXTENSION_GRANT,
        target_type="EXTENSION",
        target_id=extension.id,
        description=f"Extension granted (+{minutes} min)",
        details={"session_id": session_id, "evaluator_id": evaluator_id},
    )
    return extension
