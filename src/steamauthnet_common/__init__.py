"""Shared utilities for the SteamAuthNet application.

This package provides functionality used across the application:

- **Concurrency**: a lock-guarded shared random source, fire-and-forget
  background launching, and wait-for-all parallel collection
- **Exceptions**: Unified exception hierarchy with context support
- **Helpers**: command text parsing, format validators, HTML query helpers,
  directory cleanup and cookie lookup

Example:
    ```python
    from steamauthnet_common import SharedRandom, collect_all, create_background_launcher

    rng = SharedRandom()
    launcher = create_background_launcher({"max_workers": 4})

    launcher.launch(send_heartbeat)
    results = await collect_all(tasks)
    delay = rng.next(1000, 5000)
    ```
"""

from steamauthnet_common import dom_utils, file_utils, requests_utils, text_utils, validation
from steamauthnet_common.concurrency import (
    LONG_RUNNING_JOIN_TIMEOUT,
    BackgroundLauncher,
    LauncherConfig,
    SharedRandom,
    await_all,
    await_all_futures,
    collect_all,
    collect_all_futures,
    create_background_launcher,
)
from steamauthnet_common.exceptions import (
    ConcurrencyError,
    ConfigurationError,
    OperationError,
    OutOfRangeError,
    SteamAuthNetError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Concurrency
    "SharedRandom",
    "BackgroundLauncher",
    "LauncherConfig",
    "LONG_RUNNING_JOIN_TIMEOUT",
    "create_background_launcher",
    "collect_all",
    "await_all",
    "collect_all_futures",
    "await_all_futures",
    # Exceptions
    "SteamAuthNetError",
    "ValidationError",
    "OutOfRangeError",
    "ConfigurationError",
    "ConcurrencyError",
    "OperationError",
    # Helper modules
    "dom_utils",
    "file_utils",
    "requests_utils",
    "text_utils",
    "validation",
]
