"""Exception hierarchy for the SteamAuthNet shared utilities.

Every error raised by this package derives from ``SteamAuthNetError`` and can
carry a ``context`` dictionary with the values that caused it.

Example:
    ```python
    from steamauthnet_common.exceptions import OutOfRangeError, SteamAuthNetError

    try:
        rng.next_below(-1)
    except OutOfRangeError as e:
        logger.error("Bad bound: %s", e.context)
    except SteamAuthNetError:
        raise
    ```

Only programmer errors are raised. Failures inside work handed to
``BackgroundLauncher.launch`` are logged and discarded, never raised.
"""

from typing import Any, Dict


class SteamAuthNetError(Exception):
    """Base exception for the shared utility layer.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (argument names, values)
        details: Alternative to context (both are supported)

    Example:
        ```python
        error = SteamAuthNetError(
            "Launch failed",
            context={"launcher": "background"}
        )
        str(error)
        # 'Launch failed'
        ```
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        # Details takes precedence if both are provided
        self.context = details or context or {}
        self.details = self.context


class ValidationError(SteamAuthNetError):
    """Raised when an argument fails validation.

    These are programmer errors: the call is aborted rather than the value
    being clamped.
    """

    pass


class OutOfRangeError(ValidationError, ValueError):
    """Raised when a numeric bound lies outside its permitted range.

    Also a ``ValueError`` so callers that only know the standard library
    can still catch it.

    Example:
        ```python
        raise OutOfRangeError(
            "max_value must not be negative",
            context={"argument": "max_value", "max_value": -1},
        )
        ```
    """

    pass


class ConfigurationError(SteamAuthNetError):
    """Raised when a configuration dictionary is invalid.

    Example:
        ```python
        raise ConfigurationError(
            "Unknown launcher config key",
            context={"key": "workers", "allowed": ["max_workers"]},
        )
        ```
    """

    pass


class OperationError(SteamAuthNetError):
    """Raised when an operation is invoked in a state that cannot honor it.

    Concurrency-state errors use the ``ConcurrencyError`` subclass.
    """

    pass


class ConcurrencyError(OperationError):
    """Raised when a concurrency primitive is used in a state it cannot serve.

    Example:
        ```python
        raise ConcurrencyError(
            "Cannot launch work on a closed launcher",
            context={"work": "refresh_session", "long_running": False},
        )
        ```
    """

    pass


__all__ = [
    "SteamAuthNetError",
    "ValidationError",
    "OutOfRangeError",
    "ConfigurationError",
    "OperationError",
    "ConcurrencyError",
]
