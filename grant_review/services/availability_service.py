# grant_review/services/availability_service.py
import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from grant_review.core.errors import PersistenceError, ValidationFailure
from grant_review.db.upsert import upsert
from grant_review.models.availability import Availability
from grant_review.models.enums import ActionType, AvailabilityStatus
from grant_review.services.audit_service import log_action

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def respond_availability(
    db: Session,
    *,
    session_id: int,
    evaluator_id: int,
    status: AvailabilityStatus,
) -> Availability:
    """
    Record an evaluator's answer for a session. Answering again overwrites
    the status and the response time; there is one row per pair.

    ``evaluator_id`` must come from the authenticated caller.
    """
    try:
        status = AvailabilityStatus(status)
    except ValueError:
        raise ValidationFailure(f"invalid availability status {status!r}")

    try:
        availability = upsert(
            db,
            Availability,
            keys={"session_id": session_id, "evaluator_id": evaluator_id},
            values={"status": status.value, "responded_at": _utcnow()},
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError(
            f"could not record availability for session {session_id}"
        ) from exc
    db.refresh(availability)

    logger.info(
        "Evaluator %s availability for session %s: %s",
        evaluator_id, session_id, status.value,
    )
    log_action(
        db,
        evaluator_id,
        ActionType.AVAILABILITY_RESPOND,
        target_type="SESSION",
        target_id=session_id,
        description=f"Availability: {status.value}",
        details={"session_id": session_id},
    )
    return availability
