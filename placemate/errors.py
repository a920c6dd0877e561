"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    default_code = "APP_ERROR"

    def __init__(self, message, status_code=400, code=None):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code or self.default_code


class ValidationError(AppError):
    """Raised when user input fails validation."""

    default_code = "VALIDATION_ERROR"

    def __init__(self, message="Validation failed.", code=None):
        """Initialize the error."""
        super().__init__(message, 400, code)


class UnauthorizedError(AppError):
    """Raised when a request carries no valid identity."""

    default_code = "UNAUTHORIZED"

    def __init__(self, message="Authentication required.", code=None):
        """Initialize the error."""
        super().__init__(message, 401, code)


class ForbiddenError(AppError):
    """Raised when the caller lacks authority for an operation."""

    default_code = "NO_PERMISSION"

    def __init__(self, message="You do not have permission to do that.", code=None):
        """Initialize the error."""
        super().__init__(message, 403, code)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    default_code = "NOT_FOUND"

    def __init__(self, message="Resource not found.", code=None):
        """Initialize the error."""
        super().__init__(message, 404, code)


class ConflictError(AppError):
    """Raised when a resource is in a state that forbids the operation."""

    default_code = "CONFLICT"

    def __init__(self, message="Resource state conflict.", code=None):
        """Initialize the error."""
        super().__init__(message, 409, code)


class StoreUnavailableError(AppError):
    """Raised when the document store is temporarily unreachable."""

    default_code = "STORE_UNAVAILABLE"

    def __init__(self, message="The data store is unavailable. Try again.", code=None):
        """Initialize the error."""
        super().__init__(message, 503, code)
