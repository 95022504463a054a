# grant_review/models/__init__.py
# Importing the package registers every table on Base.metadata
from grant_review.models.user import User  # noqa
from grant_review.models.submission import Submission  # noqa
from grant_review.models.rubric import RubricVersion, RubricSection, Criterion  # noqa
from grant_review.models.evaluation_session import EvaluationSession, SessionSubmission  # noqa
from grant_review.models.affectation import Affectation  # noqa
from grant_review.models.availability import Availability  # noqa
from grant_review.models.extension import Extension  # noqa
from grant_review.models.evaluation import Evaluation, NoteEvaluation  # noqa
from grant_review.models.action_log import ActionLog  # noqa
