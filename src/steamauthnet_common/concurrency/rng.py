"""Thread-safe shared random number source.

``random.Random`` instances are not safe to advance from several threads at
once, so every draw that reaches the generator is taken under a single
``threading.Lock``. Construct one ``SharedRandom`` when the application
starts and hand that instance to everything that needs randomness (backoff
jitter, request spacing, and so on).

Example:
    ```python
    from steamauthnet_common.concurrency import SharedRandom

    rng = SharedRandom()
    rng.next()          # [0, SharedRandom.MAX_VALUE)
    rng.next(10)        # [0, 10)
    rng.next(5, 15)     # [5, 15)
    ```
"""

from __future__ import annotations

import random
import threading

from steamauthnet_common.exceptions import OutOfRangeError


class SharedRandom:
    """Integer draws from one lock-guarded generator.

    The degenerate ranges (``max_value <= 1`` and adjacent or equal bounds)
    are answered without touching the generator or taking the lock.

    Args:
        seed: Optional seed for the underlying generator. Nothing in the
            package depends on the sequence being reproducible.
    """

    MAX_VALUE = 2**31 - 1
    """Exclusive upper bound of ``next()``."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)
        self._lock = threading.Lock()

    def next(self, *bounds: int) -> int:
        """Draw an integer, range-style.

        ``next()`` draws from ``[0, MAX_VALUE)``, ``next(max_value)`` from
        ``[0, max_value)`` and ``next(min_value, max_value)`` from
        ``[min_value, max_value)``.

        Raises:
            OutOfRangeError: If the bounds are invalid.
            TypeError: If more than two bounds are given.
        """
        if not bounds:
            with self._lock:
                return self._random.randrange(self.MAX_VALUE)
        if len(bounds) == 1:
            return self.next_below(bounds[0])
        if len(bounds) == 2:
            return self.next_between(bounds[0], bounds[1])
        raise TypeError(f"next() takes at most 2 bounds ({len(bounds)} given)")

    def next_below(self, max_value: int) -> int:
        """Draw an integer in ``[0, max_value)``.

        Args:
            max_value: Exclusive upper bound.

        Returns:
            The drawn integer, or ``max_value`` itself when it is 0 or 1.

        Raises:
            OutOfRangeError: If ``max_value`` is negative.
        """
        if max_value < 0:
            raise OutOfRangeError(
                f"max_value must not be negative, got {max_value}",
                context={"argument": "max_value", "max_value": max_value},
            )
        if max_value <= 1:
            return max_value
        with self._lock:
            return self._random.randrange(max_value)

    def next_between(self, min_value: int, max_value: int) -> int:
        """Draw an integer in ``[min_value, max_value)``.

        Args:
            min_value: Inclusive lower bound.
            max_value: Exclusive upper bound.

        Returns:
            The drawn integer, or ``min_value`` when the range holds at most
            one value.

        Raises:
            OutOfRangeError: If ``min_value`` is greater than ``max_value``.
        """
        if min_value > max_value:
            raise OutOfRangeError(
                f"min_value ({min_value}) must not exceed max_value ({max_value})",
                context={
                    "argument": "min_value && max_value",
                    "min_value": min_value,
                    "max_value": max_value,
                },
            )
        if min_value >= max_value - 1:
            return min_value
        with self._lock:
            return self._random.randrange(min_value, max_value)
