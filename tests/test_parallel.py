"""Tests for wait-for-all parallel collection."""

import asyncio
import concurrent.futures
import logging
import threading
import time

import pytest

from steamauthnet_common.concurrency import (
    await_all,
    await_all_futures,
    collect_all,
    collect_all_futures,
)

PARALLEL_LOGGER = "steamauthnet_common.concurrency.parallel"


async def _value_after(value, delay):
    await asyncio.sleep(delay)
    return value


async def _fail_after(error, delay):
    await asyncio.sleep(delay)
    raise error


# ---------------------------------------------------------------------------
# asyncio collectors
# ---------------------------------------------------------------------------


class TestCollectAll:
    """Test collect_all with asyncio tasks."""

    async def test_preserves_input_order(self):
        """Test results follow input order, not completion order."""
        tasks = [
            asyncio.create_task(_value_after(3, 0.06)),
            asyncio.create_task(_value_after(1, 0.0)),
            asyncio.create_task(_value_after(2, 0.03)),
        ]
        assert await collect_all(tasks) == [3, 1, 2]

    async def test_none_returns_none(self):
        """Test that an absent collection is a no-op."""
        assert await collect_all(None) is None

    async def test_empty_returns_empty_list(self):
        """Test that an empty collection yields no results."""
        assert await collect_all([]) == []

    async def test_accepts_generator(self):
        """Test that any iterable of tasks is accepted."""
        tasks = [asyncio.create_task(_value_after(i, 0.0)) for i in range(5)]
        assert await collect_all(task for task in tasks) == [0, 1, 2, 3, 4]

    async def test_accepts_coroutines(self):
        """Test that bare coroutines are scheduled and collected."""
        assert await collect_all([_value_after("a", 0.01), _value_after("b", 0.0)]) == ["a", "b"]

    async def test_accepts_thread_futures(self):
        """Test that concurrent.futures futures are awaited too."""
        with concurrent.futures.ThreadPoolExecutor(max_workers=2) as pool:
            futures = [pool.submit(time.sleep, 0.02), pool.submit(lambda: "x")]
            assert await collect_all(futures) == [None, "x"]

    async def test_failure_surfaces_after_all_complete(self):
        """Test the failing operation's error is raised and siblings finish."""
        error = ValueError("second failed")
        first = asyncio.create_task(_value_after(1, 0.05))
        second = asyncio.create_task(_fail_after(error, 0.0))
        third = asyncio.create_task(_value_after(3, 0.1))

        with pytest.raises(ValueError) as exc_info:
            await collect_all([first, second, third])

        assert exc_info.value is error
        assert first.done() and not first.cancelled()
        assert third.done() and not third.cancelled()
        assert first.result() == 1
        assert third.result() == 3

    async def test_first_failure_in_input_order(self):
        """Test that the earliest failing position wins, not the earliest in time."""
        tasks = [
            asyncio.create_task(_value_after(0, 0.0)),
            asyncio.create_task(_fail_after(KeyError("slow"), 0.05)),
            asyncio.create_task(_fail_after(RuntimeError("fast"), 0.0)),
        ]
        with pytest.raises(KeyError):
            await collect_all(tasks)

    async def test_other_failures_logged(self, caplog):
        """Test that failures after the first are logged, not lost."""
        tasks = [
            asyncio.create_task(_fail_after(KeyError("a"), 0.0)),
            asyncio.create_task(_fail_after(RuntimeError("b"), 0.0)),
        ]
        with caplog.at_level(logging.DEBUG, logger=PARALLEL_LOGGER):
            with pytest.raises(KeyError):
                await collect_all(tasks)

        assert "operation 1 also failed" in caplog.text
        assert "RuntimeError" in caplog.text

    async def test_cancelled_operation_raises_cancelled(self):
        """Test that a cancelled operation counts as a failure."""
        done = asyncio.create_task(_value_after(1, 0.0))
        cancelled = asyncio.create_task(asyncio.sleep(10))
        await asyncio.sleep(0)
        cancelled.cancel()

        with pytest.raises(asyncio.CancelledError):
            await collect_all([done, cancelled])

    async def test_non_awaitable_rejected_before_scheduling(self):
        """Test that a bad element raises before any coroutine starts."""
        started = []

        async def record():
            started.append(True)

        pending = record()
        try:
            with pytest.raises(TypeError, match="operation 1"):
                await collect_all([pending, 42])
            await asyncio.sleep(0.01)
            assert started == []
        finally:
            pending.close()

    async def test_caller_cancellation_leaves_tasks_running(self):
        """Test that timing out the collector does not cancel the operations."""
        slow = asyncio.create_task(_value_after("done", 0.1))

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(collect_all([slow]), timeout=0.01)

        assert not slow.cancelled()
        assert await slow == "done"


class TestAwaitAll:
    """Test await_all with asyncio tasks."""

    async def test_waits_for_all(self):
        """Test that every operation is finished on return."""
        tasks = [asyncio.create_task(_value_after(i, 0.01 * i)) for i in range(3)]
        assert await await_all(tasks) is None
        assert all(task.done() for task in tasks)

    async def test_none_is_noop(self):
        """Test that an absent collection completes immediately."""
        assert await await_all(None) is None

    async def test_empty_is_noop(self):
        """Test that an empty collection completes immediately."""
        assert await await_all([]) is None

    async def test_failure_propagates(self):
        """Test that the first failure is raised after all complete."""
        slow = asyncio.create_task(_value_after(1, 0.05))
        failing = asyncio.create_task(_fail_after(RuntimeError("boom"), 0.0))

        with pytest.raises(RuntimeError, match="boom"):
            await await_all([failing, slow])
        assert slow.done() and slow.result() == 1


# ---------------------------------------------------------------------------
# concurrent.futures collectors
# ---------------------------------------------------------------------------


def _sleep_then(value, delay):
    time.sleep(delay)
    return value


def _sleep_then_raise(error, delay):
    time.sleep(delay)
    raise error


class TestCollectAllFutures:
    """Test collect_all_futures with thread-pool futures."""

    def test_preserves_input_order(self):
        """Test results follow input order, not completion order."""
        with concurrent.futures.ThreadPoolExecutor(max_workers=3) as pool:
            futures = [
                pool.submit(_sleep_then, 3, 0.06),
                pool.submit(_sleep_then, 1, 0.0),
                pool.submit(_sleep_then, 2, 0.03),
            ]
            assert collect_all_futures(futures) == [3, 1, 2]

    def test_none_returns_none(self):
        """Test that an absent collection is a no-op."""
        assert collect_all_futures(None) is None

    def test_empty_returns_empty_list(self):
        """Test that an empty collection yields no results."""
        assert collect_all_futures([]) == []

    def test_failure_surfaces_after_all_complete(self):
        """Test the failing future's error is raised and siblings finish."""
        error = ValueError("second failed")
        with concurrent.futures.ThreadPoolExecutor(max_workers=3) as pool:
            first = pool.submit(_sleep_then, 1, 0.05)
            second = pool.submit(_sleep_then_raise, error, 0.0)
            third = pool.submit(_sleep_then, 3, 0.1)

            with pytest.raises(ValueError) as exc_info:
                collect_all_futures([first, second, third])

            assert exc_info.value is error
            assert first.done() and not first.cancelled()
            assert third.done() and not third.cancelled()
            assert third.result() == 3

    def test_cancelled_future_raises_cancelled(self):
        """Test that a cancelled future counts as a failure."""
        cancelled = concurrent.futures.Future()
        cancelled.cancel()
        finished = concurrent.futures.Future()
        finished.set_result(1)

        with pytest.raises(concurrent.futures.CancelledError):
            collect_all_futures([finished, cancelled])

    def test_cancelled_by_executor_shutdown(self):
        """Test that queued futures cancelled by shutdown are reported."""
        release = threading.Event()
        pool = concurrent.futures.ThreadPoolExecutor(max_workers=1)
        busy = pool.submit(release.wait, 5.0)
        queued = pool.submit(_sleep_then, "never", 0.0)
        pool.shutdown(wait=False, cancel_futures=True)
        assert queued.cancelled()
        threading.Timer(0.05, release.set).start()

        with pytest.raises(concurrent.futures.CancelledError):
            collect_all_futures([busy, queued])
        assert busy.result() is True

    def test_cancelled_while_waiting(self):
        """Test that a future cancelled mid-wait releases the collector."""
        pending = concurrent.futures.Future()
        threading.Timer(0.05, pending.cancel).start()

        with pytest.raises(concurrent.futures.CancelledError):
            await_all_futures([pending])

    def test_blocks_until_all_done(self):
        """Test that the call blocks until the slowest future finishes."""
        release = threading.Event()
        with concurrent.futures.ThreadPoolExecutor(max_workers=2) as pool:
            fast = pool.submit(_sleep_then_raise, RuntimeError("fast"), 0.0)
            slow = pool.submit(release.wait, 5.0)
            threading.Timer(0.05, release.set).start()

            with pytest.raises(RuntimeError, match="fast"):
                collect_all_futures([fast, slow])
            assert slow.done()


class TestAwaitAllFutures:
    """Test await_all_futures with thread-pool futures."""

    def test_waits_for_all(self):
        """Test that every future is finished on return."""
        with concurrent.futures.ThreadPoolExecutor(max_workers=3) as pool:
            futures = [pool.submit(_sleep_then, i, 0.01 * i) for i in range(3)]
            assert await_all_futures(futures) is None
            assert all(future.done() for future in futures)

    def test_none_is_noop(self):
        """Test that an absent collection completes immediately."""
        assert await_all_futures(None) is None

    def test_failure_propagates(self):
        """Test that the first failure is raised."""
        with concurrent.futures.ThreadPoolExecutor(max_workers=2) as pool:
            futures = [
                pool.submit(_sleep_then, 0, 0.02),
                pool.submit(_sleep_then_raise, KeyError("missing"), 0.0),
            ]
            with pytest.raises(KeyError):
                await_all_futures(futures)
