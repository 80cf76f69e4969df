"""Error taxonomy for timer operations.

Every error carries the HTTP status it maps to and a message that is safe to
return to the caller. Storage causes stay in the logs.
"""


class TimerError(Exception):
    """Base class for failures detected while handling a timer request."""

    status_code: int = 500
    default_message: str = "Timer request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MalformedInputError(TimerError):
    """Request body cannot be decoded into a timer."""
    status_code = 400
    default_message = "Failed to parse request body! Please verify json inputs type!"


class InvalidParametersError(TimerError):
    """Body decodes but required fields are missing or inconsistent."""
    status_code = 400
    default_message = "Invalid request parameters!"


class DuplicateIdentifierError(TimerError):
    status_code = 400
    default_message = "The timer ID must be unique!"


class UnauthorizedError(TimerError):
    """Replace tried to change the immutable deleteAfter field."""
    status_code = 401
    default_message = (
        "Unauthorized: Modifying deleteAfter field of the last entry is not allowed. "
        "Please retry without it!"
    )


class NotFoundError(TimerError):
    status_code = 404
    default_message = "Timer not found. Please verify the timer ID or create a new one!"


class StorageFailureError(TimerError):
    status_code = 500
    default_message = "Failed to read from db!"


class DuplicateKeyViolation(Exception):
    """Raised by a storage gateway when its unique index on timerid rejects a write."""
