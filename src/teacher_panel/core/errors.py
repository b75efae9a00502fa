"""
Service Errors

Typed errors raised by the workflow layer. Each carries a stable
error_code and the HTTP status the routers translate it to.
"""


class ApplicationServiceError(Exception):
    """Base exception for workflow errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class UnauthenticatedError(ApplicationServiceError):
    """Raised when no verified identity is attached to the request."""

    def __init__(self, message: str = "You must be signed in."):
        super().__init__(
            message=message,
            error_code="UNAUTHENTICATED",
            status_code=401,
        )


class PermissionDeniedError(ApplicationServiceError):
    """Raised when the caller is verified but not an administrator."""

    def __init__(self, message: str = "Not authorized."):
        super().__init__(
            message=message,
            error_code="PERMISSION_DENIED",
            status_code=403,
        )


class InvalidArgumentError(ApplicationServiceError):
    """Raised when a request payload fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(
            message=message,
            error_code="INVALID_ARGUMENT",
            status_code=400,
        )


class NotFoundError(ApplicationServiceError):
    """Raised when a requested record does not exist."""

    def __init__(self, message: str = "Application not found."):
        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=404,
        )


class FailedPreconditionError(ApplicationServiceError):
    """Raised when the record is not in a state that allows the operation."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="FAILED_PRECONDITION",
            status_code=409,
        )


class InternalError(ApplicationServiceError):
    """Raised when a collaborator fails unexpectedly."""

    def __init__(self, message: str = "An unexpected error occurred."):
        super().__init__(
            message=message,
            error_code="INTERNAL",
            status_code=500,
        )
