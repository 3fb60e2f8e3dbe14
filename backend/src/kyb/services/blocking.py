"""
Worker pool for blocking gateway calls.

Blocking I/O is never run on the event loop thread. Calls are dispatched to
a bounded ThreadPoolExecutor and awaited from the loop, so one slow call
holds a worker thread instead of stalling every concurrent validation.
"""

import asyncio
import functools
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

WORKERS_PER_CPU = 10


def default_pool_size() -> int:
    """Default worker count: 10 threads per available CPU."""
    return WORKERS_PER_CPU * (os.cpu_count() or 1)


class BlockingExecutor:
    """
    Bounded thread pool shared by all validations in the process.

    Example:
        executor = BlockingExecutor(max_workers=8)
        rating = await executor.run(gateway.get_state_data_credito, company)
        executor.shutdown()
    """

    THREAD_NAME_PREFIX = "kyb-blocking"

    def __init__(self, max_workers: int | None = None) -> None:
        """
        Initialize the pool.

        Args:
            max_workers: Worker thread count (defaults to default_pool_size())
        """
        self.max_workers = max_workers or default_pool_size()
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        self._pool = ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix=self.THREAD_NAME_PREFIX,
        )
        logger.info(f"Blocking executor started with {self.max_workers} workers")

    async def run(self, func: Callable[..., T], *args: Any) -> T:
        """Run ``func(*args)`` on a worker thread and await its result."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._pool, functools.partial(func, *args))

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work and release the worker threads."""
        logger.info("Shutting down blocking executor")
        self._pool.shutdown(wait=wait)

    def __enter__(self) -> "BlockingExecutor":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()
