"""Domain errors raised by the services and rendered by the API layer."""


class AppError(Exception):
    """Base class for expected, typed failures returned to callers."""

    code = "INTERNAL_SERVER_ERROR"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    code = "NOT_FOUND"
    status_code = 404


class ValidationError(AppError):
    code = "VALIDATION_ERROR"
    status_code = 400


class UnauthorizedError(AppError):
    code = "UNAUTHORIZED"
    status_code = 401


class ForbiddenError(AppError):
    code = "FORBIDDEN"
    status_code = 403


class ProviderUnavailableError(AppError):
    """The external metadata provider failed, timed out or is not configured."""

    code = "PROVIDER_UNAVAILABLE"
    status_code = 503


class IdentityConflictError(AppError):
    """
    A user create lost a uniqueness race but the winning row cannot be found.

    Indicates storage inconsistency; never retried further.
    """
