"""
Domain errors raised by the services.

These are not HTTP exceptions. The handlers registered in ``app.main``
turn them into the ``{success: false, message}`` envelope using
``status_code``.
"""


class AppError(Exception):
    status_code = 500
    default_message = "Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Bad or missing input, duplicate unique fields."""
    status_code = 400
    default_message = "Validation failed"


class AuthError(AppError):
    """Bad credentials or a missing / invalid / expired token."""
    status_code = 401
    default_message = "Not authorized"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found"


class StorageError(AppError):
    """The asset store rejected or failed an upload."""
    status_code = 500
    default_message = "Image storage failed"


class UnexpectedError(AppError):
    status_code = 500
    default_message = "Server Error"
