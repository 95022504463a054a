import pytest

from grant_review.core.errors import ConflictError, NotFoundError, ValidationFailure
from grant_review.core.security import generate_password, verify_password
from grant_review.models.action_log import ActionLog
from grant_review.models.affectation import Affectation
from grant_review.models.evaluation import Evaluation, NoteEvaluation
from grant_review.models.extension import Extension
from grant_review.models.user import User
from grant_review.schemas.evaluation import NoteIn
from grant_review.schemas.user import EvaluatorCreate
from grant_review.services import evaluator_service
from grant_review.services.evaluation_service import submit_evaluation
from grant_review.services.extension_service import grant_extension


class TestGeneratePassword:

    def test_character_classes(self):
        for _ in range(20):
            password = generate_password(12)
            assert len(password) == 12
            assert any(ch.isupper() for ch in password)
            assert any(ch.islower() for ch in password)
            assert any(ch.isdigit() for ch in password)
            assert any(ch in "@#$%&*" for ch in password)


class TestCreate:

    def test_create_evaluator(self, db_session, admin):
        evaluator, password = evaluator_service.create_evaluator(
            db_session,
            admin_id=admin.id,
            obj_in=EvaluatorCreate(email="  Marie.Nze@FPBG.ga ", first_name=" Marie", last_name="Nze"),
        )
        assert evaluator.email == "marie.nze@fpbg.ga"
        assert evaluator.first_name == "Marie"
        assert evaluator.role == "EVALUATEUR"
        assert evaluator.is_active is True
        assert evaluator.password_hash != password
        assert verify_password(password, evaluator.password_hash)

        entry = db_session.query(ActionLog).one()
        assert entry.action_type == "EVALUATEUR_CREER"
        assert entry.target_id == str(evaluator.id)

    def test_duplicate_email(self, db_session, admin, evaluator):
        with pytest.raises(ConflictError):
            evaluator_service.create_evaluator(
                db_session, admin_id=admin.id, obj_in=EvaluatorCreate(email="EVA@fpbg.ga")
            )

    def test_email_required(self, db_session, admin):
        with pytest.raises(ValidationFailure):
            evaluator_service.create_evaluator(
                db_session, admin_id=admin.id, obj_in=EvaluatorCreate(email="   ")
            )


class TestList:

    def test_only_evaluators_active_first(self, db_session, admin, evaluator, other_evaluator):
        evaluator_service.suspend_evaluator(
            db_session, admin_id=admin.id, evaluator_id=other_evaluator.id
        )
        listed = evaluator_service.list_evaluators(db_session)
        assert [u.id for u in listed] == [evaluator.id, other_evaluator.id]

    def test_active_filter(self, db_session, admin, evaluator, other_evaluator):
        evaluator_service.suspend_evaluator(
            db_session, admin_id=admin.id, evaluator_id=evaluator.id
        )
        listed = evaluator_service.list_evaluators(db_session, active=True)
        assert [u.id for u in listed] == [other_evaluator.id]

    def test_search(self, db_session, evaluator, other_evaluator):
        assert [u.id for u in evaluator_service.list_evaluators(db_session, q="ott")] == [
            other_evaluator.id
        ]
        assert [u.id for u in evaluator_service.list_evaluators(db_session, q="LUATOR")] == [
            evaluator.id
        ]


class TestSuspendReactivate:

    def test_round_trip(self, db_session, admin, evaluator):
        user = evaluator_service.suspend_evaluator(
            db_session, admin_id=admin.id, evaluator_id=evaluator.id
        )
        assert user.is_active is False
        user = evaluator_service.reactivate_evaluator(
            db_session, admin_id=admin.id, evaluator_id=evaluator.id
        )
        assert user.is_active is True
        actions = [e.action_type for e in db_session.query(ActionLog).order_by(ActionLog.id)]
        assert actions == ["EVALUATEUR_SUSPENDRE", "EVALUATEUR_REACTIVER"]

    def test_unknown_evaluator(self, db_session, admin):
        with pytest.raises(NotFoundError):
            evaluator_service.suspend_evaluator(db_session, admin_id=admin.id, evaluator_id=9999)

    def test_admin_is_not_an_evaluator(self, db_session, admin):
        with pytest.raises(NotFoundError):
            evaluator_service.suspend_evaluator(db_session, admin_id=admin.id, evaluator_id=admin.id)


class TestDelete:

    def test_delete_removes_related_rows(
        self, db_session, admin, eval_session, submission, evaluator, assigned, criteria
    ):
        a, _, _ = criteria
        submit_evaluation(
            db_session,
            session_id=eval_session.id,
            submission_id=submission.id,
            evaluator_id=evaluator.id,
            notes=[NoteIn(criterion_id=a.id, value_pct=70)],
        )
        grant_extension(
            db_session, granted_by_id=admin.id, session_id=eval_session.id,
            evaluator_id=evaluator.id,
        )
        evaluator_id = evaluator.id

        evaluator_service.delete_evaluator(db_session, admin_id=admin.id, evaluator_id=evaluator_id)

        assert db_session.get(User, evaluator_id) is None
        assert db_session.query(Evaluation).count() == 0
        assert db_session.query(NoteEvaluation).count() == 0
        assert db_session.query(Affectation).count() == 0
        assert db_session.query(Extension).count() == 0
        assert db_session.query(ActionLog).filter_by(actor_id=str(evaluator_id)).count() == 0
        assert db_session.query(ActionLog).filter_by(action_type="EVALUATEUR_SUPPRIMER").count() == 1

    def test_delete_unknown(self, db_session, admin):
        with pytest.raises(NotFoundError):
            evaluator_service.delete_evaluator(db_session, admin_id=admin.id, evaluator_id=9999)

    def test_delete_non_evaluator(self, db_session, admin):
        with pytest.raises(ValidationFailure):
            evaluator_service.delete_evaluator(db_session, admin_id=admin.id, evaluator_id=admin.id)
        assert db_session.get(User, admin.id) is not None
