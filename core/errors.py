"""Error taxonomy shared by the vote service, the store and the HTTP layer."""


class AppError(Exception):
    """Base error carrying the envelope kind and HTTP status."""

    kind = "Internal"
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(AppError):
    """Property, user, vote, vote option or category does not exist."""

    kind = "NotFound"
    status_code = 404

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


class InvalidArgumentError(AppError):
    """Malformed request or a vote option outside the property's category."""

    kind = "InvalidArgument"
    status_code = 400

    def __init__(self, message: str = "Invalid argument"):
        super().__init__(message)


class ConflictError(AppError):
    """Lost an insert race on the one-vote-per-user-per-property constraint."""

    kind = "Conflict"
    status_code = 409

    def __init__(self, message: str = "Concurrent vote conflict"):
        super().__init__(message)


class UnavailableError(AppError):
    """Database unreachable or the transaction timed out. Safe to retry."""

    kind = "Unavailable"
    status_code = 503

    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__(message)


class AuthError(AppError):
    kind = "Unauthorized"
    status_code = 401

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message)
