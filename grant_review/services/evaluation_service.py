# grant_review/services/evaluation_service.py
"""
Evaluation recorder: an evaluator's scores for one submission of a session.

submit_evaluation runs as a single transaction:
  1. load the session and its rubric version
  2. upsert the Evaluation (BROUILLON / SOUMISE), re-bound to the session's
     current rubric version
  3. if notes were sent, replace all existing notes with them
  4. recompute score_pct from the stored notes
  5. write score_pct back
Two saves of the same evaluation race freely: the last one wins.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from grant_review.core.config import settings
from grant_review.core.errors import NotAssignedError, NotFoundError, PersistenceError
from grant_review.db.upsert import upsert
from grant_review.models.affectation import Affectation
from grant_review.models.enums import ActionType, EvaluationStatus
from grant_review.models.evaluation import Evaluation, NoteEvaluation
from grant_review.models.submission import Submission
from grant_review.schemas.evaluation import NoteIn
from grant_review.services.audit_service import log_action
from grant_review.services.rubric_service import get_session_with_rubric, scorable_weights
from grant_review.services.scoring_service import clamp_pct, compute_score_pct

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _ensure_assigned(
    db: Session,
    session_id: int,
    submission_id: int,
    evaluator_id: int,
) -> None:
    affectation = (
        db.query(Affectation.id)
        .filter(
            Affectation.session_id == session_id,
            Affectation.submission_id == submission_id,
            Affectation.evaluator_id == evaluator_id,
        )
        .first()
    )
    if affectation is None:
        raise NotAssignedError(
            f"evaluator {evaluator_id} is not assigned to submission {submission_id} "
            f"in session {session_id}"
        )


def _replace_notes(db: Session, evaluation_id: int, notes: Sequence[NoteIn]) -> None:
    # one row per criterion: a repeated criterion keeps its last value
    values = {note.criterion_id: clamp_pct(note.value_pct) for note in notes}

    db.query(NoteEvaluation).filter(
        NoteEvaluation.evaluation_id == evaluation_id
    ).delete(synchronize_session="fetch")
    db.add_all(
        NoteEvaluation(evaluation_id=evaluation_id, criterion_id=criterion_id, value_pct=value)
        for criterion_id, value in values.items()
    )
    db.flush()


def _stored_values(db: Session, evaluation_id: int) -> dict[int, float]:
    rows = (
        db.query(NoteEvaluation.criterion_id, NoteEvaluation.value_pct)
        .filter(NoteEvaluation.evaluation_id == evaluation_id)
        .all()
    )
    return {criterion_id: value for criterion_id, value in rows}


def submit_evaluation(
    db: Session,
    *,
    session_id: int,
    submission_id: int,
    evaluator_id: int,
    notes: Sequence[NoteIn],
    comment: Optional[str] = None,
    finalize: bool = False,
) -> Evaluation:
    """
    Save (finalize=False) or submit (finalize=True) an evaluation.

    - an empty ``notes`` list keeps the stored notes and only rescores
    - note values are clamped to [0, 100], never rejected
    - submitting again as a draft reverts SOUMISE to BROUILLON
    """
    session = get_session_with_rubric(db, session_id)
    if db.get(Submission, submission_id) is None:
        raise NotFoundError(f"submission {submission_id} not found")
    if settings.EVALUATION_REQUIRES_AFFECTATION:
        _ensure_assigned(db, session_id, submission_id, evaluator_id)

    status = EvaluationStatus.SUBMITTED if finalize else EvaluationStatus.DRAFT
    now = _utcnow()

    try:
        evaluation = upsert(
            db,
            Evaluation,
            keys={
                "session_id": session_id,
                "submission_id": submission_id,
                "evaluator_id": evaluator_id,
            },
            values={
                "status": status.value,
                "comment": comment,
                "submitted_at": now if finalize else None,
                "rubric_version_id": session.rubric_version_id,
                "updated_at": now,
            },
        )

        if notes:
            _replace_notes(db, evaluation.id, notes)

        evaluation.score_pct = compute_score_pct(
            scorable_weights(session.rubric_version),
            _stored_values(db, evaluation.id),
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(
            "Evaluation save failed (session=%s submission=%s evaluator=%s): %s",
            session_id, submission_id, evaluator_id, exc,
        )
        raise PersistenceError("could not save evaluation") from exc
    db.refresh(evaluation)

    logger.info(
        "Evaluation %s saved as %s with score %s",
        evaluation.id, evaluation.status, evaluation.score_pct,
    )
    log_action(
        db,
        evaluator_id,
        ActionType.EVALUATION_SUBMIT if finalize else ActionType.EVALUATION_DRAFT,
        target_type="EVALUATION",
        target_id=evaluation.id,
        description="Evaluation submitted" if finalize else "Evaluation saved as draft",
        details={"score_pct": evaluation.score_pct},
    )
    return evaluation


def get_evaluation(
    db: Session,
    *,
    session_id: int,
    submission_id: int,
    evaluator_id: int,
) -> Evaluation:
    evaluation = (
        db.query(Evaluation)
        .filter(
            Evaluation.session_id == session_id,
            Evaluation.submission_id == submission_id,
            Evaluation.evaluator_id == evaluator_id,
        )
        .first()
    )
    if evaluation is None:
        raise NotFoundError("evaluation not found")
    return evaluation


def list_evaluations_for_submission(
    db: Session,
    *,
    session_id: int,
    submission_id: int,
) -> List[Evaluation]:
    """
    All evaluators' evaluations of one submission, submitted ones first.
    """
    return (
        db.query(Evaluation)
        .filter(
            Evaluation.session_id == session_id,
            Evaluation.submission_id == submission_id,
        )
        .order_by(Evaluation.status.desc(), Evaluation.evaluator_id.asc())
        .all()
    )
