# grant_review/models/enums.py
"""
Status values stored as plain strings in the database.

The stored codes are the ones the portal front-end already understands.
"""
from enum import Enum


class UserRole(str, Enum):
    ADMIN = "ADMINISTRATEUR"
    EVALUATOR = "EVALUATEUR"
    APPLICANT = "DEMANDEUR"


class AffectationStatus(str, Enum):
    PENDING = "EN_ATTENTE"
    IN_PROGRESS = "EN_COURS"
    DONE = "TERMINEE"


class AvailabilityStatus(str, Enum):
    PENDING = "EN_ATTENTE"
    YES = "OUI"
    NO = "NON"


class EvaluationStatus(str, Enum):
    DRAFT = "BROUILLON"
    SUBMITTED = "SOUMISE"


class ActionType(str, Enum):
    EVALUATOR_CREATE = "EVALUATEUR_CREER"
    EVALUATOR_SUSPEND = "EVALUATEUR_SUSPENDRE"
    EVALUATOR_REACTIVATE = "EVALUATEUR_REACTIVER"
    EVALUATOR_DELETE = "EVALUATEUR_SUPPRIMER"
    EVALUATOR_ASSIGN = "EVALUATEUR_AFFECTER"
    EVALUATOR_UNASSIGN = "EVALUATEUR_DESAFFECTER"
    AVAILABILITY_RESPOND = "DISPONIBILITE_REPONDRE"
    EXTENSION_GRANT = "EXTENSION_ACCORDER"
    EVALUATION_DRAFT = "EVALUATION_BROUILLON"
    EVALUATION_SUBMIT = "EVALUATION_SOUMETTRE"


class ActionResult(str, Enum):
    SUCCESS = "REUSSI"
    FAILURE = "ECHEC"
