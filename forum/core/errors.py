# forum/core/errors.py
"""
Error taxonomy shared by the services, the engine and the HTTP layer.

Every error carries a stable `error_code`, the HTTP status it maps to and a
human readable message. The global handlers registered in `create_app`
render them as `{"error_code": ..., "message": ...}`.
"""


class ForumError(Exception):
    """Base class for every error the forum core raises on purpose."""
    error_code = "FORUM_ERROR"
    status_code = 500

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code

    def to_dict(self) -> dict:
        return {"error_code": self.error_code, "message": self.message}


class NotFound(ForumError):
    error_code = "NOT_FOUND"
    status_code = 404


class InvalidReference(ForumError):
    error_code = "INVALID_REFERENCE"
    status_code = 400


class Unauthenticated(ForumError):
    error_code = "UNAUTHENTICATED"
    status_code = 401


class Conflict(ForumError):
    error_code = "CONFLICT"
    status_code = 409


class ValidationFailure(ForumError):
    error_code = "VALIDATION_FAILED"
    status_code = 400


class StoreError(ForumError):
    """Failure reported by the document store adapter."""
    error_code = "STORE_ERROR"
    status_code = 500


class TransientStoreError(StoreError):
    """The store did not answer within the deadline or is unavailable. Never retried here."""
    error_code = "STORE_UNAVAILABLE"
    status_code = 503


class Forbidden(ForumError):
    error_code = "FORBIDDEN"
    status_code = 403
