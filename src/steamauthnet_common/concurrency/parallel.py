"""Wait-for-all collection of already running operations.

The collectors join a set of operations the caller has already started,
wait until every one of them has finished, and then either return their
results in input order or raise the failure of the first operation (in input
order) that did not succeed.

Nothing is ever cancelled here. When one operation fails its siblings keep
running to completion, and if the coroutine awaiting ``collect_all`` is
itself cancelled (for example by ``asyncio.wait_for``), the operations it was
waiting on carry on in the background.

Example:
    ```python
    import asyncio
    from steamauthnet_common.concurrency import collect_all

    tasks = [asyncio.create_task(fetch_badge(i)) for i in ids]
    badges = await collect_all(tasks)   # same order as ids
    ```

Thread-pool futures use the blocking variants:

    ```python
    with ThreadPoolExecutor() as pool:
        futures = [pool.submit(load_inventory, app_id) for app_id in app_ids]
        inventories = collect_all_futures(futures)
    ```
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import inspect
import logging
import threading
from collections.abc import Awaitable, Iterable, Sequence
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _as_asyncio_futures(tasks: Iterable[Awaitable[Any]]) -> list[asyncio.Future[Any]]:
    """Wrap every operation as an asyncio future.

    The whole input is checked before anything is scheduled, so a bad
    element never leaves earlier coroutines running as orphaned tasks.
    """
    operations = list(tasks)
    for index, operation in enumerate(operations):
        if not (
            isinstance(operation, concurrent.futures.Future) or inspect.isawaitable(operation)
        ):
            raise TypeError(
                f"operation {index} is not awaitable: {type(operation).__name__}"
            )
    return [
        asyncio.wrap_future(operation)
        if isinstance(operation, concurrent.futures.Future)
        else asyncio.ensure_future(operation)
        for operation in operations
    ]


def _wait_for_all(futures: Sequence[concurrent.futures.Future[Any]]) -> None:
    """Block until every future is done, cancelled ones included.

    ``concurrent.futures.wait`` never returns for a future cancelled before
    its executor picked it up, but done callbacks fire on ``cancel()``.
    """
    remaining = len(futures)
    lock = threading.Lock()
    all_done = threading.Event()

    def on_done(_future: concurrent.futures.Future[Any]) -> None:
        nonlocal remaining
        with lock:
            remaining -= 1
            if remaining == 0:
                all_done.set()

    for future in futures:
        future.add_done_callback(on_done)
    all_done.wait()


def _ordered_results(futures: Sequence[Any], kind: str) -> list[Any]:
    """Return results in input order or raise the first failure.

    Every future must already be done. Exceptions of the later failures are
    read (and logged) so they are not reported as never retrieved.
    """
    failed = [
        index
        for index, future in enumerate(futures)
        if future.cancelled() or future.exception() is not None
    ]
    if failed:
        logger.debug(
            "%s: %d of %d operation(s) failed; raising failure of operation %d",
            kind,
            len(failed),
            len(futures),
            failed[0],
        )
        for index in failed[1:]:
            future = futures[index]
            logger.debug(
                "%s: operation %d also failed: %s",
                kind,
                index,
                "cancelled" if future.cancelled() else repr(future.exception()),
            )
        # result() re-raises the stored exception, or CancelledError
        futures[failed[0]].result()

    return [future.result() for future in futures]


async def collect_all(tasks: Iterable[Awaitable[T]] | None) -> list[T] | None:
    """Wait for every operation and return their results in input order.

    Args:
        tasks: Running ``asyncio`` tasks or futures (bare coroutines are
            scheduled as tasks, ``concurrent.futures.Future`` objects are
            wrapped). ``None`` returns ``None`` immediately.

    Returns:
        Results index-for-index with ``tasks``, or ``None`` when ``tasks``
        is ``None``.

    Raises:
        TypeError: If an element is not awaitable. Nothing is scheduled.
        Exception: The exception of the first failed operation in input
            order, raised only after all operations have finished.
        asyncio.CancelledError: If that first failed operation was
            cancelled.
    """
    if tasks is None:
        return None

    futures = _as_asyncio_futures(tasks)
    if not futures:
        return []

    # asyncio.wait never cancels what it waits on, even if this coroutine is
    # cancelled while suspended here.
    await asyncio.wait(futures)
    return _ordered_results(futures, "collect_all")


async def await_all(tasks: Iterable[Awaitable[Any]] | None) -> None:
    """Wait for every operation, discarding results.

    Same waiting and failure semantics as ``collect_all``.

    Args:
        tasks: Running tasks or futures. ``None`` returns immediately.
    """
    if tasks is None:
        return

    futures = _as_asyncio_futures(tasks)
    if not futures:
        return

    await asyncio.wait(futures)
    _ordered_results(futures, "await_all")


def collect_all_futures(
    futures: Iterable[concurrent.futures.Future[T]] | None,
) -> list[T] | None:
    """Block until every future is done and return results in input order.

    Args:
        futures: Futures from a ``concurrent.futures`` executor. ``None``
            returns ``None`` immediately.

    Returns:
        Results index-for-index with ``futures``, or ``None`` when
        ``futures`` is ``None``.

    Raises:
        Exception: The exception of the first failed future in input order,
            raised only after all futures have finished.
        concurrent.futures.CancelledError: If that first failed future was
            cancelled.
    """
    if futures is None:
        return None

    pending = list(futures)
    if not pending:
        return []

    _wait_for_all(pending)
    return _ordered_results(pending, "collect_all_futures")


def await_all_futures(futures: Iterable[concurrent.futures.Future[Any]] | None) -> None:
    """Block until every future is done, discarding results.

    Args:
        futures: Futures from a ``concurrent.futures`` executor. ``None``
            returns immediately.
    """
    if futures is None:
        return

    pending = list(futures)
    if not pending:
        return

    _wait_for_all(pending)
    _ordered_results(pending, "await_all_futures")
