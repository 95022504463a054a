import pytest

from grant_review.core.errors import NotFoundError, PersistenceError
from grant_review.models.action_log import ActionLog
from grant_review.models.affectation import Affectation
from grant_review.services.affectation_service import (
    assign_evaluators,
    list_session_submissions_for_evaluator,
    unassign_evaluator,
)


class TestAssign:

    def test_assign_creates_in_progress_rows(
        self, db_session, admin, eval_session, submissions, evaluator, other_evaluator
    ):
        first, second = submissions
        rows = assign_evaluators(
            db_session,
            actor_id=admin.id,
            session_id=eval_session.id,
            pairs=[(first.id, evaluator.id), (second.id, other_evaluator.id)],
        )
        assert len(rows) == 2
        assert {r.status for r in rows} == {"EN_COURS"}
        assert db_session.query(Affectation).count() == 2

    def test_assigning_again_reactivates(
        self, db_session, admin, eval_session, submission, evaluator, assigned
    ):
        assigned.status = "TERMINEE"
        db_session.commit()

        rows = assign_evaluators(
            db_session,
            actor_id=admin.id,
            session_id=eval_session.id,
            pairs=[(submission.id, evaluator.id)],
        )
        assert rows[0].id == assigned.id
        assert rows[0].status == "EN_COURS"
        assert db_session.query(Affectation).count() == 1

    def test_batch_is_all_or_nothing(
        self, db_session, admin, eval_session, submissions, evaluator, other_evaluator
    ):
        first, second = submissions
        with pytest.raises(PersistenceError):
            assign_evaluators(
                db_session,
                actor_id=admin.id,
                session_id=eval_session.id,
                pairs=[
                    (first.id, evaluator.id),
                    (second.id, other_evaluator.id),
                    (first.id, 999999),  # no such evaluator
                ],
            )
        assert db_session.query(Affectation).count() == 0
        assert db_session.query(ActionLog).count() == 0

    def test_assign_is_audited(
        self, db_session, admin, eval_session, submission, evaluator
    ):
        assign_evaluators(
            db_session,
            actor_id=admin.id,
            session_id=eval_session.id,
            pairs=[(submission.id, evaluator.id)],
        )
        entry = db_session.query(ActionLog).one()
        assert entry.action_type == "EVALUATEUR_AFFECTER"
        assert entry.actor_id == str(admin.id)
        assert entry.details == {"session_id": eval_session.id}


class TestUnassign:

    def test_unassign_deletes_row(
        self, db_session, admin, eval_session, submission, evaluator, assigned
    ):
        removed = unassign_evaluator(
            db_session,
            actor_id=admin.id,
            session_id=eval_session.id,
            submission_id=submission.id,
            evaluator_id=evaluator.id,
        )
        assert removed.evaluator_id == evaluator.id
        assert db_session.query(Affectation).count() == 0
        entry = db_session.query(ActionLog).one()
        assert entry.action_type == "EVALUATEUR_DESAFFECTER"

    def test_unassign_missing_triple(
        self, db_session, admin, eval_session, submission, evaluator
    ):
        with pytest.raises(NotFoundError):
            unassign_evaluator(
                db_session,
                actor_id=admin.id,
                session_id=eval_session.id,
                submission_id=submission.id,
                evaluator_id=evaluator.id,
            )


class TestSessionSubmissions:

    def test_status_defaults_to_pending(
        self, db_session, eval_session, submissions, evaluator, assigned
    ):
        first, second = submissions
        listing = list_session_submissions_for_evaluator(
            db_session, session_id=eval_session.id, evaluator_id=evaluator.id
        )
        assert [(e.anonymous_code, e.submission_id, e.affectation_status.value) for e in listing] == [
            ("P-001", first.id, "EN_COURS"),
            ("P-002", second.id, "EN_ATTENTE"),
        ]

    def test_other_evaluator_sees_nothing_assigned(
        self, db_session, eval_session, submissions, other_evaluator, assigned
    ):
        listing = list_session_submissions_for_evaluator(
            db_session, session_id=eval_session.id, evaluator_id=other_evaluator.id
        )
        assert {e.affectation_status.value for e in listing} == {"EN_ATTENTE"}

    def test_unknown_session(self, db_session, evaluator):
        with pytest.raises(NotFoundError):
            list_session_submissions_for_evaluator(
                db_session, session_id=9999, evaluator_id=evaluator.id
            )
