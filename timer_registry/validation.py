"""Validation of inbound timer representations."""
import json

from loguru import logger
from pydantic import ValidationError

from .completion import run_blocking
from .errors import (
    DuplicateIdentifierError,
    InvalidParametersError,
    MalformedInputError,
    StorageFailureError,
)
from .models import Timer
from .store import StorageGateway

logger = logger.bind(module="validation")


def validate_shape(raw: bytes | str) -> Timer:
    """Decode a request body into a Timer.

    Raises:
        MalformedInputError: body is not a JSON object or a field has the wrong type
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.debug(f"Undecodable body: {e}")
        raise MalformedInputError() from e
    if not isinstance(data, dict):
        raise MalformedInputError()
    try:
        return Timer.model_validate(data)
    except ValidationError as e:
        logger.debug(f"Body does not match timer shape: {e.error_count()} errors")
        raise MalformedInputError() from e


def validate_required(timer: Timer) -> None:
    """Raises InvalidParametersError when the identifier is missing or empty."""
    if not timer.timer_id:
        raise InvalidParametersError()


async def validate_unique(
    gateway: StorageGateway,
    timer_id: str,
    timeout: float | None = None,
) -> None:
    """Reject an identifier that already has a stored entry.

    This is a fast-path check only; it is not atomic with the insert that
    follows. The store's unique index on timerid settles concurrent creates.

    Raises:
        DuplicateIdentifierError: an entry with ``timer_id`` exists
        StorageFailureError: the count could not be obtained
    """
    try:
        count = await run_blocking(
            gateway.count_documents, {"timerid": timer_id}, timeout=timeout
        )
    except Exception as e:
        logger.error(f"Uniqueness check for {timer_id!r} failed: {e!r}")
        raise StorageFailureError() from e
    if count > 0:
        raise DuplicateIdentifierError()
