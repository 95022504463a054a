# grant_review/services/evaluator_service.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from grant_review.core.config import settings
from grant_review.core.errors import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationFailure,
)
from grant_review.core.security import generate_password, get_password_hash
from grant_review.models.action_log import ActionLog
from grant_review.models.affectation import Affectation
from grant_review.models.availability import Availability
from grant_review.models.enums import ActionType, UserRole
from grant_review.models.evaluation import Evaluation, NoteEvaluation
from grant_review.models.extension import Extension
from grant_review.models.user import User
from grant_review.schemas.user import EvaluatorCreate
from grant_review.services.audit_service import log_action

logger = logging.getLogger(__name__)


def create_evaluator(
    db: Session,
    *,
    admin_id: int,
    obj_in: EvaluatorCreate,
) -> Tuple[User, str]:
    """
    Create an evaluator account with a generated password.

    Returns the user and the plaintext password; only its hash is stored,
    so this is the one chance to hand it over.
    """
    email = (obj_in.email or "").strip().lower()
    if not email:
        raise ValidationFailure("email is required")

    if db.query(User.id).filter(User.email == email).first() is not None:
        raise ConflictError(f"a user with email {email} already exists")

    password = generate_password(settings.GENERATED_PASSWORD_LENGTH)
    evaluator = User(
        email=email,
        password_hash=get_password_hash(password),
        first_name=(obj_in.first_name or "").strip(),
        last_name=(obj_in.last_name or "").strip(),
        role=UserRole.EVALUATOR.value,
        is_active=True,
    )
    try:
        db.add(evaluator)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError("could not create evaluator") from exc
    db.refresh(evaluator)

    logger.info("Evaluator %s created by admin %s", evaluator.id, admin_id)
    log_action(
        db,
        admin_id,
        ActionType.EVALUATOR_CREATE,
        target_type="USER",
        target_id=evaluator.id,
        description=f"Evaluator created {evaluator.email}",
    )
    return evaluator, password


def get_evaluator(db: Session, evaluator_id: int) -> Optional[User]:
    return (
        db.query(User)
        .filter(User.id == evaluator_id, User.role == UserRole.EVALUATOR.value)
        .first()
    )


def list_evaluators(
    db: Session,
    *,
    active: Optional[bool] = None,
    q: Optional[str] = None,
) -> List[User]:
    query = db.query(User).filter(User.role == UserRole.EVALUATOR.value)
    if active is not None:
        query = query.filter(User.is_active == active)
    if q and q.strip():
        pattern = f"%{q.strip()}%"
        query = query.filter(
            or_(
                User.email.ilike(pattern),
                User.last_name.ilike(pattern),
                User.first_name.ilike(pattern),
            )
        )
    return query.order_by(User.is_active.desc(), User.last_name.asc()).all()


def _set_active(
    db: Session,
    admin_id: int,
    evaluator_id: int,
    active: bool,
) -> User:
    evaluator = get_evaluator(db, evaluator_id)
    if evaluator is None:
        raise NotFoundError(f"evaluator {evaluator_id} not found")

    evaluator.is_active = active
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError("could not update evaluator") from exc
    db.refresh(evaluator)

    action = ActionType.EVALUATOR_REACTIVATE if active else ActionType.EVALUATOR_SUSPEND
    log_action(
        db,
        admin_id,
        action,
        target_type="USER",
        target_id=evaluator_id,
        description=f"{'Reactivated' if active else 'Suspended'} evaluator {evaluator.email}",
    )
    return evaluator


def suspend_evaluator(db: Session, *, admin_id: int, evaluator_id: int) -> User:
    return _set_active(db, admin_id, evaluator_id, False)


def reactivate_evaluator(db: Session, *, admin_id: int, evaluator_id: int) -> User:
    return _set_active(db, admin_id, evaluator_id, True)


def delete_evaluator(db: Session, *, admin_id: int, evaluator_id: int) -> None:
    """
    Delete an evaluator and everything attached to them: notes, evaluations,
    affectations, availabilities, extensions (received and granted) and
    their own audit entries. All or nothing.
    """
    user = db.get(User, evaluator_id)
    if user is None:
        raise NotFoundError(f"evaluator {evaluator_id} not found")
    if user.role != UserRole.EVALUATOR.value:
        raise ValidationFailure(f"user {evaluator_id} is not an evaluator")
    email = user.email

    evaluation_ids = select(Evaluation.id).where(Evaluation.evaluator_id == evaluator_id)
    try:
        db.query(NoteEvaluation).filter(
            NoteEvaluation.evaluation_id.in_(evaluation_ids)
        ).delete(synchronize_session=False)
        db.query(Evaluation).filter(
            Evaluation.evaluator_id == evaluator_id
        ).delete(synchronize_session=False)
        db.query(Affectation).filter(
            Affectation.evaluator_id == evaluator_id
        ).delete(synchronize_session=False)
        db.query(Availability).filter(
            Availability.evaluator_id == evaluator_id
        ).delete(synchronize_session=False)
        db.query(Extension).filter(
            or_(
                Extension.evaluator_id == evaluator_id,
                Extension.granted_by_id == evaluator_id,
            )
        ).delete(synchronize_session=False)
        db.query(ActionLog).filter(
            ActionLog.actor_id == str(evaluator_id)
        ).delete(synchronize_session=False)
        db.delete(user)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError(f"could not delete evaluator {evaluator_id}") from exc

    logger.info("Evaluator %s deleted by admin %s", evaluator_id, admin_id)
    log_action(
        db,
        admin_id,
        ActionType.EVALUATOR_DELETE,
        target_type="USER",
        target_id=evaluator_id,
        description=f"Evaluator deleted {email}",
    )
