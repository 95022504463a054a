# grant_review/core/errors.py
"""
Typed service errors.

Services raise these; the HTTP layer turns them into responses using
``status_code`` so the services themselves never import FastAPI.
"""


class ServiceError(Exception):
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    status_code = 409


class NotAssignedError(ServiceError):
    """Evaluator tried to score a submission they are not assigned to."""

    status_code = 403


class ValidationFailure(ServiceError):
    status_code = 400


class PersistenceError(ServiceError):
    """A write failed in the store; the transaction has been rolled back."""

    status_code = 500
