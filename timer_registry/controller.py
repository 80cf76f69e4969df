"""Timer lifecycle controller: create, list and replace timer resources.

Every storage call goes through ``run_blocking``: one worker-thread call per
operation, awaited once by the request coroutine. Nothing is cached between
requests; each read is a fresh fetch from the gateway.
"""
from contextlib import closing

from loguru import logger
from pydantic import ValidationError

from .completion import run_blocking
from .errors import (
    DuplicateIdentifierError,
    DuplicateKeyViolation,
    InvalidParametersError,
    NotFoundError,
    StorageFailureError,
    UnauthorizedError,
)
from .models import Timer
from .store import Document, StorageGateway
from .validation import validate_required, validate_shape, validate_unique

logger = logger.bind(module="controller")


class TimerController:
    """Enforces timer invariants on top of a storage gateway.

    - timerid is unique across all timers (checked before every insert)
    - deleteAfter never changes after create
    - replace only touches an entry that already exists
    """

    def __init__(self, gateway: StorageGateway, store_timeout: float | None = None):
        """
        Args:
            gateway: Storage gateway owning the persisted timers
            store_timeout: Seconds to wait on each storage call, None waits forever
        """
        self.gateway = gateway
        self.store_timeout = store_timeout

    async def _call(self, func, *args):
        return await run_blocking(func, *args, timeout=self.store_timeout)

    # ============== Create ==============

    async def create(self, raw: bytes | str) -> Timer:
        """Register a new timer from a request body.

        Raises:
            MalformedInputError, InvalidParametersError, DuplicateIdentifierError,
            StorageFailureError
        """
        timer = validate_shape(raw)
        validate_required(timer)
        await validate_unique(self.gateway, timer.timer_id, self.store_timeout)

        try:
            await self._call(self.gateway.insert_one, timer.to_document())
        except DuplicateKeyViolation as e:
            # Lost the race against a concurrent create of the same id
            logger.warning(f"Store rejected duplicate timer {timer.timer_id!r}")
            raise DuplicateIdentifierError() from e
        except Exception as e:
            logger.error(f"Insert of timer {timer.timer_id!r} failed: {e!r}")
            raise StorageFailureError("Failed to insert a new timer to db!") from e

        logger.info(f"Created timer {timer.timer_id}")
        return timer

    # ============== List ==============

    def _fetch_all(self) -> list[Timer]:
        # Runs on the worker thread so cursor iteration never blocks the loop
        with closing(self.gateway.find({})) as documents:
            return [Timer.from_document(doc) for doc in documents]

    async def list_timers(self) -> list[Timer]:
        """Return every stored timer.

        Raises:
            NotFoundError: the store holds no timers
            StorageFailureError: the read failed or a stored document is corrupt
        """
        try:
            timers = await self._call(self._fetch_all)
        except Exception as e:
            logger.error(f"Listing timers failed: {e!r}")
            raise StorageFailureError("Failed to read from db!") from e

        if not timers:
            raise NotFoundError("No timers found")
        return timers

    # ============== Replace ==============

    async def _fetch(self, timer_id: str) -> Document | None:
        try:
            return await self._call(self.gateway.find_one, {"timerid": timer_id})
        except Exception as e:
            logger.error(f"Lookup of timer {timer_id!r} failed: {e!r}")
            raise StorageFailureError("Failed to find requested item inside db!") from e

    async def replace(self, timer_id: str, raw: bytes | str) -> Timer:
        """Replace the mutable fields of an existing timer.

        The stored deleteAfter must be echoed back unchanged; it is never
        written by a replace.

        Raises:
            NotFoundError: no timer with ``timer_id``
            MalformedInputError, InvalidParametersError: bad body
            UnauthorizedError: deleteAfter differs from the stored value
            StorageFailureError: the fetch or update failed
        """
        existing = await self._fetch(timer_id)
        if existing is None:
            raise NotFoundError()

        timer = validate_shape(raw)
        validate_required(timer)
        if timer.timer_id != timer_id:
            logger.warning(f"Replace of {timer_id!r} tried to rename it to {timer.timer_id!r}")
            raise InvalidParametersError()

        if timer.delete_after != existing.get("deleteAfter", 0):
            logger.warning(f"Rejected deleteAfter change on timer {timer_id!r}")
            raise UnauthorizedError()

        try:
            updated = await self._call(
                self.gateway.find_one_and_update,
                {"timerid": timer_id},
                {"$set": timer.mutable_fields()},
            )
        except Exception as e:
            logger.error(f"Update of timer {timer_id!r} failed: {e!r}")
            raise StorageFailureError("Failed to update timer in db!") from e

        # Removed between the fetch and the update
        if updated is None:
            raise NotFoundError()

        try:
            result = Timer.from_document(updated)
        except ValidationError as e:
            logger.error(f"Updated timer {timer_id!r} is not decodable: {e}")
            raise StorageFailureError("Failed to update timer in db!") from e

        logger.info(f"Updated timer {timer_id}")
        return result
