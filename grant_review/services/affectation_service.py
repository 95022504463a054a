# grant_review/services/affectation_service.py
import logging
from typing import Iterable, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from grant_review.core.errors import NotFoundError, PersistenceError
from grant_review.db.upsert import upsert
from grant_review.models.affectation import Affectation
from grant_review.models.evaluation_session import EvaluationSession, SessionSubmission
from grant_review.models.enums import ActionType, AffectationStatus
from grant_review.schemas.affectation import SessionSubmissionForEvaluator
from grant_review.services.audit_service import log_action

logger = logging.getLogger(__name__)


def assign_evaluators(
    db: Session,
    *,
    actor_id: int | None,
    session_id: int,
    pairs: Iterable[tuple[int, int]],
) -> List[Affectation]:
    """
    Assign evaluators to submissions of a session.

    ``pairs`` are (submission_id, evaluator_id). An existing triple is put
    back to EN_COURS instead of failing. The batch is one transaction: if any
    row fails, nothing is kept and PersistenceError is raised.
    """
    affectations: List[Affectation] = []
    try:
        for submission_id, evaluator_id in pairs:
            affectation = upsert(
                db,
                Affectation,
                keys={
                    "session_id": session_id,
                    "submission_id": submission_id,
                    "evaluator_id": evaluator_id,
                },
                values={"status": AffectationStatus.IN_PROGRESS.value},
            )
            affectations.append(affectation)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Assignment batch for session %s rolled back: %s", session_id, exc)
        raise PersistenceError(f"could not assign evaluators in session {session_id}") from exc

    for affectation in affectations:
        db.refresh(affectation)

    logger.info("Assigned %d affectation(s) in session %s", len(affectations), session_id)
    log_action(
        db,
        actor_id,
        ActionType.EVALUATOR_ASSIGN,
        target_type="SESSION",
        target_id=session_id,
        description=f"Affectations created ({len(affectations)})",
        details={"session_id": session_id},
    )
    return affectations


def unassign_evaluator(
    db: Session,
    *,
    actor_id: int | None,
    session_id: int,
    submission_id: int,
    evaluator_id: int,
) -> Affectation:
    """
    Remove one affectation. Evaluations already written by the evaluator
    are left in place.
    """
    affectation = (
        db.query(Affectation)
        .filter(
            Affectation.session_id == session_id,
            Affectation.submission_id == submission_id,
            Affectation.evaluator_id == evaluator_id,
        )
        .first()
    )
    if affectation is None:
        raise NotFoundError(
            f"no affectation for session {session_id}, submission {submission_id}, "
            f"evaluator {evaluator_id}"
        )

    affectation_id = affectation.id
    try:
        db.delete(affectation)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError("could not remove affectation") from exc

    logger.info(
        "Unassigned evaluator %s from submission %s in session %s",
        evaluator_id, submission_id, session_id,
    )
    log_action(
        db,
        actor_id,
        ActionType.EVALUATOR_UNASSIGN,
        target_type="AFFECTATION",
        target_id=affectation_id,
        description="Affectation removed",
        details={
            "session_id": session_id,
            "submission_id": submission_id,
            "evaluator_id": evaluator_id,
        },
    )
    return affectation


def list_session_submissions_for_evaluator(
    db: Session,
    *,
    session_id: int,
    evaluator_id: int,
) -> List[SessionSubmissionForEvaluator]:
    """
    Every submission of the session with its anonymous code and the
    evaluator's affectation status (EN_ATTENTE when not assigned).
    """
    if db.get(EvaluationSession, session_id) is None:
        raise NotFoundError(f"evaluation session {session_id} not found")

    entries = (
        db.query(SessionSubmission)
        .filter(SessionSubmission.session_id == session_id)
        .order_by(SessionSubmission.anonymous_code.asc())
        .all()
    )
    statuses = dict(
        db.query(Affectation.submission_id, Affectation.status)
        .filter(
            Affectation.session_id == session_id,
            Affectation.evaluator_id == evaluator_id,
        )
        .all()
    )
    return [
        SessionSubmissionForEvaluator(
            submission_id=entry.submission_id,
            anonymous_code=entry.anonymous_code,
            affectation_status=statuses.get(
                entry.submission_id, AffectationStatus.PENDING.value
            ),
        )
        for entry in entries
    ]
