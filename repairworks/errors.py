"""
Application error taxonomy.

Every failure a route can report is one of these. They are raised by services,
repositories and the access gate, and translated into JSON responses by the
handlers registered in create_app(). StoreError carries no internal detail to
the client; the cause is logged server-side.
"""

from __future__ import annotations


class RepairWorksError(Exception):
    """Base error with an HTTP status and a client-safe message."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(RepairWorksError):
    """Missing or invalid input. Nothing was written."""

    status_code = 400
    default_message = "Invalid input"


class AuthenticationError(RepairWorksError):
    """No principal in the session."""

    status_code = 401
    default_message = "Authentication required"
    login_url = "/login.html"

    def to_dict(self) -> dict:
        return {"error": self.message, "login_url": self.login_url}


class AuthorizationError(RepairWorksError):
    """Authenticated, but not allowed."""

    status_code = 403
    default_message = "Forbidden"


class NotFoundError(RepairWorksError):
    status_code = 404
    default_message = "Not found"


class StoreError(RepairWorksError):
    """Persistence failure. Not retried."""

    status_code = 500
    default_message = "Internal server error"
