# grant_review/services/rubric_service.py
from sqlalchemy.orm import Session, selectinload

from grant_review.core.errors import NotFoundError
from grant_review.models.evaluation_session import EvaluationSession
from grant_review.models.rubric import RubricSection, RubricVersion


def get_session_with_rubric(db: Session, session_id: int) -> EvaluationSession:
    """
    Load a session with its bound rubric version, sections and criteria.
    Always read from the store; rubrics are never cached between calls.
    """
    session = (
        db.query(EvaluationSession)
        .options(
            selectinload(EvaluationSession.rubric_version)
            .selectinload(RubricVersion.sections)
            .selectinload(RubricSection.criteria)
        )
        .filter(EvaluationSession.id == session_id)
        .first()
    )
    if session is None:
        raise NotFoundError(f"evaluation session {session_id} not found")
    return session


def scorable_weights(rubric_version: RubricVersion) -> dict[int, float]:
    """criterion id -> weight, for every criterion that counts in the score."""
    return {
        criterion.id: criterion.weight
        for section in rubric_version.sections
        for criterion in section.criteria
        if criterion.weight > 0
    }
