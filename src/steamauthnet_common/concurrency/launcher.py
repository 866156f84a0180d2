"""Fire-and-forget background execution.

``BackgroundLauncher.launch`` hands a zero-argument callable to a worker
thread and returns immediately. The caller gets no handle, no result and
**no exceptions**: anything the work raises is caught at the worker's error
boundary, logged, and discarded.

Warning:
    Work launched here must handle or log its own failures. The launcher's
    log line is the only trace an unhandled error leaves, and nothing is
    retried. Use ``collect_all_futures`` with an executor of your own when
    the outcome matters.

Example:
    ```python
    from steamauthnet_common.concurrency import create_background_launcher

    launcher = create_background_launcher({"max_workers": 4})

    launcher.launch(refresh_session)
    launcher.launch(poll_confirmations, long_running=True)

    launcher.close()
    ```
"""

from __future__ import annotations

import asyncio
import contextvars
import logging
import threading
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import fields
from typing import Any

from steamauthnet_common.exceptions import ConcurrencyError, ConfigurationError

from .types import LONG_RUNNING_JOIN_TIMEOUT, LauncherConfig

logger = logging.getLogger(__name__)


class BackgroundLauncher:
    """Submits detached work to a shared pool or to dedicated threads.

    Features:
    - Pooled execution on a ``ThreadPoolExecutor``
    - ``long_running`` hint that moves work onto its own daemon thread so
      it cannot starve the pool
    - Each job runs in a fresh ``contextvars.Context``, isolated from the
      submitter
    - Coroutine functions are driven to completion with ``asyncio.run``
      on the worker thread

    Limitations:
    - No completion signal, result, or error is ever returned to the caller
    - No cancellation; jobs run until they return or raise

    Example:
        ```python
        with BackgroundLauncher(LauncherConfig(max_workers=2)) as launcher:
            launcher.launch(send_heartbeat)
        ```
    """

    def __init__(self, config: LauncherConfig | None = None) -> None:
        """Initialize the launcher.

        Args:
            config: Launcher configuration. Defaults to ``LauncherConfig()``.
        """
        self._config = config or LauncherConfig()
        self._executor = ThreadPoolExecutor(
            max_workers=self._config.max_workers,
            thread_name_prefix=self._config.thread_name_prefix,
        )
        self._lock = threading.Lock()
        self._dedicated: set[threading.Thread] = set()
        self._active = 0
        self._launched = 0
        self._closed = False

    @property
    def config(self) -> LauncherConfig:
        """The configuration this launcher was built with."""
        return self._config

    @property
    def active_count(self) -> int:
        """Number of launched jobs that have not finished yet."""
        with self._lock:
            return self._active

    @property
    def closed(self) -> bool:
        """Whether ``close`` has been called."""
        return self._closed

    def launch(self, work: Callable[[], Any] | None, long_running: bool = False) -> None:
        """Start ``work`` in the background and return immediately.

        Args:
            work: Zero-argument callable. Its return value is discarded. If
                it is ``None`` nothing happens.
            long_running: Hint that the work runs for a long time. With
                ``dedicated_long_running`` enabled it gets its own thread
                rather than a pooled worker.

        Raises:
            ConcurrencyError: If the launcher has been closed.
        """
        if work is None:
            logger.debug("launch() called without work; ignoring")
            return

        context = contextvars.Context()
        dedicated = long_running and self._config.dedicated_long_running

        with self._lock:
            if self._closed:
                raise ConcurrencyError(
                    "Cannot launch work on a closed launcher",
                    context={"work": _describe(work), "long_running": long_running},
                )
            self._launched += 1
            job_id = self._launched
            if dedicated:
                thread = threading.Thread(
                    target=self._run_dedicated,
                    args=(context, work, job_id),
                    name=f"{self._config.thread_name_prefix}-long-{job_id}",
                    daemon=True,
                )
                thread.start()
                self._dedicated.add(thread)
            else:
                self._executor.submit(context.run, self._run_detached, work, job_id)
            # Workers decrement under this lock, so the count never goes negative.
            self._active += 1

        logger.debug(
            "Launched background job %d (%s, %s)",
            job_id,
            _describe(work),
            "dedicated" if dedicated else "pooled",
        )

    def _run_dedicated(
        self, context: contextvars.Context, work: Callable[[], Any], job_id: int
    ) -> None:
        try:
            context.run(self._run_detached, work, job_id)
        finally:
            with self._lock:
                self._dedicated.discard(threading.current_thread())

    def _run_detached(self, work: Callable[[], Any], job_id: int) -> None:
        """Run one job behind the error boundary.

        Exceptions are logged at the configured level and dropped here;
        this is the fire-and-forget contract. ``BaseException`` is caught
        as well, so a ``CancelledError`` escaping coroutine work or a
        ``SystemExit`` raised by the work is logged like any other failure.
        """
        try:
            result = work()
            if asyncio.iscoroutine(result):
                asyncio.run(result)
        except BaseException:
            logger.log(
                self._config.failure_log_level,
                "Background job %d (%s) failed",
                job_id,
                _describe(work),
                exc_info=True,
            )
        else:
            logger.debug("Background job %d finished", job_id)
        finally:
            with self._lock:
                self._active -= 1

    def close(self, wait: bool = True, timeout: float | None = LONG_RUNNING_JOIN_TIMEOUT) -> None:
        """Stop accepting work and release the worker pool.

        Pooled jobs already submitted still run. Dedicated threads are
        daemons; when ``wait`` is True each is joined for at most
        ``timeout`` seconds in total and any still alive are reported.

        Args:
            wait: Block until pooled jobs finish and dedicated threads are
                joined.
            timeout: Upper bound in seconds for joining dedicated threads.
                ``None`` waits indefinitely.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            dedicated = list(self._dedicated)

        self._executor.shutdown(wait=wait)

        if wait and dedicated:
            deadline = None if timeout is None else time.monotonic() + timeout
            for thread in dedicated:
                remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
                thread.join(remaining)
            alive = [t.name for t in dedicated if t.is_alive()]
            if alive:
                logger.warning(
                    "%d long-running background job(s) still running after %.1fs: %s",
                    len(alive),
                    timeout,
                    ", ".join(alive),
                )

        logger.info("Background launcher closed after %d job(s)", self._launched)

    def __enter__(self) -> BackgroundLauncher:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _describe(work: Callable[..., Any]) -> str:
    return getattr(work, "__qualname__", None) or repr(work)


def _parse_config(config: dict[str, Any]) -> LauncherConfig:
    """Parse a config dict into a LauncherConfig.

    Args:
        config: Configuration dictionary.

    Returns:
        Parsed LauncherConfig.

    Raises:
        ConfigurationError: On unknown keys or invalid values.
    """
    allowed = {f.name for f in fields(LauncherConfig)}
    unknown = sorted(set(config) - allowed)
    if unknown:
        raise ConfigurationError(
            f"Unknown launcher config key(s): {', '.join(unknown)}",
            context={"unknown": unknown, "allowed": sorted(allowed)},
        )

    max_workers = config.get("max_workers")
    if max_workers is not None and (
        isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1
    ):
        raise ConfigurationError(
            "max_workers must be a positive integer",
            context={"max_workers": max_workers},
        )

    prefix = config.get("thread_name_prefix", LauncherConfig.thread_name_prefix)
    if not isinstance(prefix, str) or not prefix:
        raise ConfigurationError(
            "thread_name_prefix must be a non-empty string",
            context={"thread_name_prefix": prefix},
        )

    level = config.get("failure_log_level", LauncherConfig.failure_log_level)
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ConfigurationError(
                f"Unknown log level: {level}",
                context={"failure_log_level": level},
            )
        level = resolved
    elif isinstance(level, bool) or not isinstance(level, int):
        raise ConfigurationError(
            "failure_log_level must be a level name or number",
            context={"failure_log_level": level},
        )

    return LauncherConfig(
        max_workers=max_workers,
        thread_name_prefix=prefix,
        dedicated_long_running=bool(
            config.get("dedicated_long_running", LauncherConfig.dedicated_long_running)
        ),
        failure_log_level=level,
    )


def create_background_launcher(config: dict[str, Any] | None = None) -> BackgroundLauncher:
    """Create a background launcher from configuration.

    Args:
        config: Configuration dict, or ``None`` for defaults.

    Returns:
        BackgroundLauncher instance.

    Raises:
        ConfigurationError: If the config has unknown keys or bad values.

    Config keys:
        max_workers: Positive pool size (default: ThreadPoolExecutor's).
        thread_name_prefix: Worker thread name prefix.
        dedicated_long_running: Honor the ``long_running`` hint (default True).
        failure_log_level: Level name (``"ERROR"``) or number used to log
            failed background jobs (default ``WARNING``).

    Example:
        ```python
        launcher = create_background_launcher({
            "max_workers": 8,
            "failure_log_level": "ERROR",
        })
        ```
    """
    return BackgroundLauncher(_parse_config(config or {}))
