"""Concurrency primitives shared across the application.

Three independent building blocks:
- SharedRandom: one lock-guarded random source, constructed once and
  passed to whoever needs randomness
- BackgroundLauncher: fire-and-forget execution of zero-argument callables
  (failures are logged, never raised to the caller)
- collect_all / await_all and their ``_futures`` variants: wait for a set of
  running operations, return ordered results or raise the first failure

Example:
    ```python
    from steamauthnet_common.concurrency import (
        SharedRandom,
        collect_all,
        create_background_launcher,
    )

    rng = SharedRandom()
    launcher = create_background_launcher({"max_workers": 4})

    launcher.launch(lambda: refresh_cache(rng.next(30, 90)))
    results = await collect_all(running_tasks)
    ```
"""

from __future__ import annotations

from .launcher import BackgroundLauncher, create_background_launcher
from .parallel import await_all, await_all_futures, collect_all, collect_all_futures
from .rng import SharedRandom
from .types import LONG_RUNNING_JOIN_TIMEOUT, LauncherConfig

__all__ = [
    # Random
    "SharedRandom",
    # Background execution
    "BackgroundLauncher",
    "LauncherConfig",
    "LONG_RUNNING_JOIN_TIMEOUT",
    "create_background_launcher",
    # Parallel collection
    "collect_all",
    "await_all",
    "collect_all_futures",
    "await_all_futures",
]
