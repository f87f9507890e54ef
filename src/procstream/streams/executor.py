"""Background execution for stream consumers and processors.

Every entry point here returns without blocking the caller:

- ``consume_async`` / ``get_results_async`` hand back a
  ``concurrent.futures.Future``. With an executor the work is submitted to
  it; without one a dedicated daemon thread runs the drain. Either way a
  failed drain is delivered through the future, never lost on a detached
  thread.
- ``aconsume`` / ``aprocess`` are awaitables that run the drain in an anyio
  worker thread. Cancelling or timing out the awaiting side abandons the
  worker: the caller stops waiting, the drain itself keeps going until the
  stream ends.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future
from typing import TYPE_CHECKING, TypeVar

import anyio.to_thread

if TYPE_CHECKING:
    from .consumer import StreamConsumer
    from .processor import StreamProcessor

__all__ = [
    "spawn",
    "consume_async",
    "get_results_async",
    "aconsume",
    "aprocess",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")

_thread_ids = itertools.count(1)


def spawn(
    fn: Callable[[], T],
    executor: Executor | None = None,
    *,
    name: str | None = None,
) -> Future[T]:
    """Run ``fn`` in the background and return its future.

    Args:
        fn: Zero-argument callable to run
        executor: Optional executor to submit to (default: new thread)
        name: Thread name, only used when no executor is given

    Returns:
        Future completed with fn's return value or exception
    """
    if executor is not None:
        return executor.submit(fn)

    future: Future[T] = Future()
    thread_name = name or f"procstream-drain-{next(_thread_ids)}"

    def run() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = fn()
        except BaseException as e:
            logger.debug(f"Background drain failed thread={thread_name}: {e!r}")
            future.set_exception(e)
        else:
            future.set_result(result)
            logger.debug(f"Background drain finished thread={thread_name}")

    thread = threading.Thread(target=run, name=thread_name, daemon=True)
    thread.start()
    logger.debug(f"Started background drain thread={thread_name}")
    return future


def consume_async(
    consumer: StreamConsumer,
    executor: Executor | None = None,
) -> Future[None]:
    """Drain ``consumer`` in the background."""
    return spawn(consumer.drain, executor)


def get_results_async(
    processor: StreamProcessor[T],
    executor: Executor | None = None,
) -> Future[T]:
    """Compute ``processor``'s result in the background.

    The future resolves to exactly what ``processor.process()`` returns,
    so for a memoizing processor every future sees the same cached object.
    """
    return spawn(processor.process, executor)


async def aconsume(consumer: StreamConsumer) -> None:
    """Await a drain running in a worker thread."""
    await anyio.to_thread.run_sync(consumer.drain, abandon_on_cancel=True)


async def aprocess(processor: StreamProcessor[T]) -> T:
    """Await ``processor.process()`` running in a worker thread."""
    return await anyio.to_thread.run_sync(processor.process, abandon_on_cancel=True)
