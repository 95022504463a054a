"""
Shared fixtures: an in-memory SQLite database per test, seeded with users,
a weighted rubric, an evaluation session and two submissions.
"""
import os

# the application engine must never point at a real database during tests
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from grant_review import models  # noqa
import grant_review.db.session  # noqa  (turns SQLite foreign keys on)
from grant_review.db.base import Base
from grant_review.models.affectation import Affectation
from grant_review.models.evaluation_session import EvaluationSession, SessionSubmission
from grant_review.models.rubric import Criterion, RubricSection, RubricVersion
from grant_review.models.submission import Submission
from grant_review.models.user import User

TEST_DATABASE_URL = "sqlite://"


@pytest.fixture(scope="function")
def db_session():
    """Create a test database session."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def _add(db, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@pytest.fixture
def admin(db_session):
    return _add(db_session, User(
        email="admin@fpbg.ga",
        # Pre-hashed password to avoid running bcrypt in tests
        password_hash="$2b$12$hashed_password_001",
        first_name="Ada",
        last_name="Admin",
        role="ADMINISTRATEUR",
    ))


@pytest.fixture
def evaluator(db_session):
    return _add(db_session, User(
        email="eva@fpbg.ga",
        password_hash="$2b$12$hashed_password_002",
        first_name="Eva",
        last_name="Luator",
        role="EVALUATEUR",
    ))


@pytest.fixture
def other_evaluator(db_session):
    return _add(db_session, User(
        email="otto@fpbg.ga",
        password_hash="$2b$12$hashed_password_003",
        first_name="Otto",
        last_name="Berger",
        role="EVALUATEUR",
    ))


@pytest.fixture
def rubric(db_session):
    """
    Weights: A=2, B=0 (display only), C=3.
    A and B live in the first section, C in the second.
    """
    version = _add(db_session, RubricVersion(name="Biodiversity call 2026", version=1))
    relevance = _add(db_session, RubricSection(
        rubric_version_id=version.id, title="Relevance", position=1
    ))
    feasibility = _add(db_session, RubricSection(
        rubric_version_id=version.id, title="Feasibility", position=2
    ))
    _add(db_session, Criterion(
        section_id=relevance.id, label="Conservation impact", weight=2, position=1
    ))
    _add(db_session, Criterion(
        section_id=relevance.id, label="Presentation", weight=0, position=2
    ))
    _add(db_session, Criterion(
        section_id=feasibility.id, label="Budget realism", weight=3, position=1
    ))
    db_session.refresh(version)
    return version


@pytest.fixture
def criteria(rubric):
    """(A, B, C) criteria of the default rubric."""
    first, second = rubric.sections
    return first.criteria[0], first.criteria[1], second.criteria[0]


@pytest.fixture
def eval_session(db_session, rubric):
    return _add(db_session, EvaluationSession(
        name="Session 1 - 2026", rubric_version_id=rubric.id
    ))


@pytest.fixture
def submissions(db_session, eval_session):
    first = _add(db_session, Submission(
        reference="DS-2026-001",
        title="Mangrove restoration in Akanda",
        organisation_name="Akanda Nature",
    ))
    second = _add(db_session, Submission(
        reference="DS-2026-002",
        title="Forest elephant corridor survey",
        organisation_name="Ivindo Conservation",
    ))
    _add(db_session, SessionSubmission(
        session_id=eval_session.id, submission_id=first.id, anonymous_code="P-001"
    ))
    _add(db_session, SessionSubmission(
        session_id=eval_session.id, submission_id=second.id, anonymous_code="P-002"
    ))
    return first, second


@pytest.fixture
def submission(submissions):
    return submissions[0]


@pytest.fixture
def assigned(db_session, eval_session, submission, evaluator):
    """The evaluator is assigned to the first submission."""
    return _add(db_session, Affectation(
        session_id=eval_session.id,
        submission_id=submission.id,
        evaluator_id=evaluator.id,
        status="EN_COURS",
    ))
