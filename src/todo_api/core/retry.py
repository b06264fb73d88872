"""Bounded retry with a fixed delay between attempts."""

import asyncio
import functools
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from src.todo_api.core.logging import get_logger

logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


class RetryError(Exception):
    """All attempts failed. The last failure is chained as ``__cause__``."""

    def __init__(self, attempts: int, last_error: BaseException) -> None:
        super().__init__(f"Gave up after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error


def retry(
    attempts: int,
    delay: float,
    exceptions: tuple[type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Retry an async callable up to ``attempts`` times, sleeping ``delay`` seconds between tries.

    Only exceptions listed in ``exceptions`` trigger a retry; anything else propagates
    immediately. When every attempt fails, ``RetryError`` is raised.

    Example:
        @retry(attempts=5, delay=5.0, exceptions=(OSError,))
        async def connect() -> None: ...
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            for attempt in range(1, attempts + 1):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    if attempt == attempts:
                        raise RetryError(attempts, e) from e
                    logger.warning(
                        "Attempt failed, retrying",
                        operation=func.__name__,
                        attempt=attempt,
                        max_attempts=attempts,
                        delay=delay,
                        error=str(e),
                    )
                    await sleep(delay)
            raise AssertionError("unreachable")

        return wrapper

    return decorator
