"""Concurrency configuration types."""

from __future__ import annotations

import logging
from dataclasses import dataclass

LONG_RUNNING_JOIN_TIMEOUT = 60.0
"""Seconds ``BackgroundLauncher.close`` waits for dedicated long-running workers."""


@dataclass(frozen=True)
class LauncherConfig:
    """Configuration for a ``BackgroundLauncher``.

    Attributes:
        max_workers: Size of the shared worker pool. ``None`` lets
            ``ThreadPoolExecutor`` pick its default.
        thread_name_prefix: Prefix for pooled and dedicated worker thread
            names.
        dedicated_long_running: When True, work launched with
            ``long_running=True`` gets its own daemon thread instead of a
            pooled worker. When False the hint is ignored.
        failure_log_level: Logging level used when a background job raises.

    Example:
        ```python
        config = LauncherConfig(max_workers=4, thread_name_prefix="auth-bg")
        launcher = BackgroundLauncher(config)
        ```
    """

    max_workers: int | None = None
    thread_name_prefix: str = "steamauthnet-bg"
    dedicated_long_running: bool = True
    failure_log_level: int = logging.WARNING
