"""
Error taxonomy shared by services and routers.

Services raise these; the exception handlers in ``main`` turn them into
``{"message": ...}`` responses with the matching status code.
"""


class LedgerError(Exception):
    """Base class for failures that map to a client-visible response."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(LedgerError):
    """Missing field, out-of-domain enum value or non-positive amount."""

    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(LedgerError):
    """Missing, malformed or expired credentials."""

    status_code = 401
    default_message = "Invalid credentials"


class NotFoundError(LedgerError):
    """Entity is absent or owned by another user (reported identically)."""

    status_code = 404
    default_message = "Not found"


class ConflictError(LedgerError):
    """Duplicate category name, or delete of a category still in use."""

    status_code = 409
    default_message = "Conflict"


class UpstreamError(LedgerError):
    """Store or rendering engine failure. The message never carries detail."""

    status_code = 500
    default_message = "Server error"
