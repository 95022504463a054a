# grant_review/api/v1/endpoints/evaluators.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from grant_review.core.security import (
    get_current_admin,
    get_current_evaluator,
    get_current_user,
)
from grant_review.db.deps import get_db
from grant_review.models.user import User
from grant_review.schemas.affectation import (
    AffectationCreate,
    AffectationPublic,
    SessionSubmissionForEvaluator,
)
from grant_review.schemas.availability import AvailabilityPublic, AvailabilityRespond
from grant_review.schemas.evaluation import EvaluationPublic, EvaluationSubmit
from grant_review.schemas.extension import ExtensionGrant, ExtensionPublic
from grant_review.schemas.user import EvaluatorCreate, EvaluatorCreated, UserPublic
from grant_review.services import (
    affectation_service,
    availability_service,
    evaluation_service,
    evaluator_service,
    extension_service,
)

router = APIRouter(prefix="/evaluators", tags=["evaluators"])


# ----------------------------- admin: accounts -----------------------------

@router.post("/", response_model=EvaluatorCreated, status_code=status.HTTP_201_CREATED)
def create_evaluator(
    obj_in: EvaluatorCreate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    evaluator, password = evaluator_service.create_evaluator(
        db, admin_id=current_admin.id, obj_in=obj_in
    )
    return EvaluatorCreated(
        **UserPublic.model_validate(evaluator).model_dump(),
        initial_password=password,
    )


@router.get("/", response_model=List[UserPublic])
def list_evaluators(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    active: Optional[bool] = None,
    q: Optional[str] = None,
):
    return evaluator_service.list_evaluators(db, active=active, q=q)


@router.patch("/{evaluator_id}/suspend", response_model=UserPublic)
def suspend_evaluator(
    evaluator_id: int,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    return evaluator_service.suspend_evaluator(
        db, admin_id=current_admin.id, evaluator_id=evaluator_id
    )


@router.patch("/{evaluator_id}/reactivate", response_model=UserPublic)
def reactivate_evaluator(
    evaluator_id: int,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    return evaluator_service.reactivate_evaluator(
        db, admin_id=current_admin.id, evaluator_id=evaluator_id
    )


@router.delete("/{evaluator_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_evaluator(
    evaluator_id: int,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    evaluator_service.delete_evaluator(
        db, admin_id=current_admin.id, evaluator_id=evaluator_id
    )
    return None


# ------------------------ admin: affectations, time ------------------------

@router.post(
    "/assignments",
    response_model=List[AffectationPublic],
    status_code=status.HTTP_201_CREATED,
)
def assign_evaluators(
    obj_in: AffectationCreate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    return affectation_service.assign_evaluators(
        db,
        actor_id=current_admin.id,
        session_id=obj_in.session_id,
        pairs=[(item.submission_id, item.evaluator_id) for item in obj_in.assignments],
    )


@router.delete(
    "/assignments/{session_id}/{submission_id}/{evaluator_id}",
    response_model=AffectationPublic,
)
def unassign_evaluator(
    session_id: int,
    submission_id: int,
    evaluator_id: int,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    return affectation_service.unassign_evaluator(
        db,
        actor_id=current_admin.id,
        session_id=session_id,
        submission_id=submission_id,
        evaluator_id=evaluator_id,
    )


@router.post("/extensions", response_model=ExtensionPublic)
def grant_extension(
    obj_in: ExtensionGrant,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    return extension_service.grant_extension(
        db,
        granted_by_id=current_admin.id,
        session_id=obj_in.session_id,
        evaluator_id=obj_in.evaluator_id,
        minutes=obj_in.minutes,
        expires_at=obj_in.expires_at,
    )


@router.get(
    "/sessions/{session_id}/submissions/{submission_id}/evaluations",
    response_model=List[EvaluationPublic],
)
def list_submission_evaluations(
    session_id: int,
    submission_id: int,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    return evaluation_service.list_evaluations_for_submission(
        db, session_id=session_id, submission_id=submission_id
    )


# ------------------- evaluator: own work (bound to caller) -------------------

@router.get(
    "/sessions/{session_id}/submissions",
    response_model=List[SessionSubmissionForEvaluator],
)
def list_my_session_submissions(
    session_id: int,
    db: Session = Depends(get_db),
    current_evaluator: User = Depends(get_current_evaluator),
):
    return affectation_service.list_session_submissions_for_evaluator(
        db, session_id=session_id, evaluator_id=current_evaluator.id
    )


@router.post("/availability", response_model=AvailabilityPublic)
def respond_availability(
    obj_in: AvailabilityRespond,
    db: Session = Depends(get_db),
    current_evaluator: User = Depends(get_current_evaluator),
):
    return availability_service.respond_availability(
        db,
        session_id=obj_in.session_id,
        evaluator_id=current_evaluator.id,
        status=obj_in.status,
    )


@router.post(
    "/evaluations",
    response_model=EvaluationPublic,
    status_code=status.HTTP_201_CREATED,
)
def submit_evaluation(
    obj_in: EvaluationSubmit,
    db: Session = Depends(get_db),
    current_evaluator: User = Depends(get_current_evaluator),
):
    """
    Save or submit the caller's evaluation of a submission.
    """
    return evaluation_service.submit_evaluation(
        db,
        session_id=obj_in.session_id,
        submission_id=obj_in.submission_id,
        evaluator_id=current_evaluator.id,
        notes=obj_in.notes,
        comment=obj_in.comment,
        finalize=obj_in.finalize,
    )


@router.get(
    "/sessions/{session_id}/submissions/{submission_id}/evaluation",
    response_model=EvaluationPublic,
)
def get_my_evaluation(
    session_id: int,
    submission_id: int,
    db: Session = Depends(get_db),
    current_evaluator: User = Depends(get_current_evaluator),
):
    return evaluation_service.get_evaluation(
        db,
        session_id=session_id,
        submission_id=submission_id,
        evaluator_id=current_evaluator.id,
    )
