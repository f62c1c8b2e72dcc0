"""Error kinds raised by the scoring service.

Route handlers never build responses for these by hand; ``main.py``
registers a handler that renders any :class:`ScoringError` as the usual
``{"code", "message"}`` body with the matching status code.
"""


class ScoringError(Exception):
    """Base class for failures reported by the scoring service."""

    code = "scoring_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ScoringError):
    """Referenced quiz or video does not exist."""

    code = "quiz_not_found"
    status_code = 404


class ConflictError(ScoringError):
    """The attempt was already recorded (unique constraint violation)."""

    code = "attempt_already_recorded"
    status_code = 409


class ValidationError(ScoringError):
    """Malformed submission such as a missing quiz id."""

    code = "invalid_submission"
    status_code = 400


class InternalError(ScoringError):
    """Unexpected failure in a storage collaborator."""

    code = "internal_error"
    status_code = 500
