"""Timer registry: create, list and replace timer descriptions in a document store."""
from .controller import TimerController
from .errors import (
    TimerError,
    MalformedInputError,
    InvalidParametersError,
    DuplicateIdentifierError,
    UnauthorizedError,
    NotFoundError,
    StorageFailureError,
)
from .models import Timer

__version__ = "0.1.0"

__all__ = [
    "Timer",
    "TimerController",
    "TimerError",
    "MalformedInputError",
    "InvalidParametersError",
    "DuplicateIdentifierError",
    "UnauthorizedError",
    "NotFoundError",
    "StorageFailureError",
]
