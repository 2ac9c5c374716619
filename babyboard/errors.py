"""Error taxonomy shared by the services and the HTTP layer.

Services raise these exceptions; :mod:`babyboard.api.app` renders them as
``{"error": message}`` with the attached ``status_code``.
"""

from __future__ import annotations


class BabyboardError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BabyboardError):
    """A field is missing, too long or malformed."""

    status_code = 400
    default_message = "Invalid request"


class Unauthorized(BabyboardError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(BabyboardError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(BabyboardError):
    status_code = 404
    default_message = "Not found"
