"""Domain error taxonomy. Each error carries the HTTP status the route layer returns."""


class MindfulMeError(Exception):
    """Base class for errors that map to a JSON `{message}` response."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(MindfulMeError):
    """Malformed or missing input."""

    status_code = 400


class UnauthorizedError(MindfulMeError):
    """Missing, expired or invalid credentials or token."""

    status_code = 401


class ForbiddenError(MindfulMeError):
    """Authenticated, but the role or ownership does not allow the action."""

    status_code = 403


class NotFoundError(MindfulMeError):
    """Requested resource does not exist (or is not visible to the caller)."""

    status_code = 404


class ConflictError(MindfulMeError):
    """Duplicate unique key."""

    status_code = 409


class InternalError(MindfulMeError):
    """Unexpected failure surfaced deliberately by the application."""

    status_code = 500
