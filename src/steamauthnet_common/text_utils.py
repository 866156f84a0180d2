"""Command text and small value helpers.

Provides helpers for splitting chat-style command text into arguments and
a few tiny conveniences used by command handlers.
"""

import time
from collections.abc import Generator, Sequence
from typing import TypeVar

T = TypeVar("T")


def get_args_as_text(args: Sequence[str] | None, args_to_skip: int, delimiter: str) -> str | None:
    """Join command arguments after skipping the leading ones.

    Args:
        args: Parsed command arguments.
        args_to_skip: Number of leading arguments (command name, targets) to drop.
        delimiter: Separator placed between the remaining arguments.

    Returns:
        str | None: The joined text, or None if there are no arguments left
            or the delimiter is empty.
    """
    if args is None or len(args) <= args_to_skip or not delimiter:
        return None
    return delimiter.join(args[args_to_skip:])


def get_text_after_args(text: str | None, args_to_skip: int) -> str | None:
    """Return the remainder of a command line after the leading arguments.

    The text is split on runs of whitespace into at most ``args_to_skip + 1``
    pieces and the last piece is returned untouched, so whitespace inside
    the remainder is preserved.

    Args:
        text: Raw command line.
        args_to_skip: Number of leading whitespace-separated words to drop.

    Returns:
        str | None: The remainder, or None for empty text.

    Examples:
        >>> get_text_after_args("!redeem bot1 AAAA-BBBB-CCCC  extra", 2)
        'AAAA-BBBB-CCCC  extra'
    """
    if not text:
        return None
    pieces = text.split(None, args_to_skip)
    return pieces[-1] if pieces else None


def as_iterable(item: T) -> Generator[T, None, None]:
    """Yield ``item`` once."""
    yield item


def get_unix_time() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())
