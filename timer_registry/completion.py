"""Run a blocking storage call off the event loop and wait for its one result.

Each call is submitted to the loop's default executor as a single unit of
work. The returned future resolves exactly once, with either the call's
return value or the exception it raised, and the caller awaits it exactly
once.
"""
import asyncio
import functools
from typing import Any, Callable, TypeVar

T = TypeVar("T")


async def run_blocking(
    func: Callable[..., T],
    *args: Any,
    timeout: float | None = None,
    **kwargs: Any,
) -> T:
    """Execute ``func(*args, **kwargs)`` on a worker thread and await it.

    Args:
        func: Blocking callable, usually a storage gateway method
        timeout: Seconds to wait before giving up, None waits forever

    Returns:
        Whatever ``func`` returned

    Raises:
        asyncio.TimeoutError: the deadline passed first; the worker thread
            is left to finish on its own
        Exception: anything ``func`` raised, re-raised in the caller
    """
    loop = asyncio.get_running_loop()
    future = loop.run_in_executor(None, functools.partial(func, *args, **kwargs))
    if timeout is None:
        return await future
    return await asyncio.wait_for(future, timeout)
