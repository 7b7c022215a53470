"""
Synchronize local documentation files with a ReadMe category.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, TypeVar

T = TypeVar("T")

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_PARALLEL = 8


class Limiter:
    """
    Runs blocking functions in a thread pool without blocking the event loop.

    At most `max_parallel` functions run at the same time. The semaphore is created lazily such that it binds to
    the event loop that first awaits it.
    """

    max_parallel: int
    _semaphore: asyncio.Semaphore | None

    def __init__(self, max_parallel: int = DEFAULT_MAX_PARALLEL) -> None:
        if max_parallel < 1:
            raise ValueError(f"expected: positive degree of parallelism; got: {max_parallel}")

        self.max_parallel = max_parallel
        self._semaphore = None

    async def run(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        Runs a synchronous function in a worker thread, bounded by the concurrency limit.

        :param func: Synchronous function to call.
        :returns: Result of `func(*args, **kwargs)`.
        """

        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self.max_parallel)
        async with self._semaphore:
            return await asyncio.to_thread(func, *args, **kwargs)


async def gather_all(aws: Iterable[Awaitable[T]]) -> list[T]:
    """
    Runs awaitables concurrently, waits for all of them, and raises the first failure.

    Unlike `asyncio.gather` with default arguments, no awaitable is left running when this function returns:
    siblings of a failed awaitable run to completion, and their results are discarded.

    :param aws: Coroutines or futures to run.
    :returns: Results in the same order as the input.
    :raises: The exception of the first failed awaitable in input order.
    """

    results = await asyncio.gather(*aws, return_exceptions=True)

    errors = [r for r in results if isinstance(r, BaseException)]
    if errors:
        if len(errors) > 1:
            LOGGER.debug("%d of %d concurrent operations failed", len(errors), len(results))
        raise errors[0]

    return results  # type: ignore[return-value]
