"""File system helpers for cleaning up and classifying directories."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def delete_empty_directories_recursively(directory: str | Path | None) -> None:
    """Remove every empty directory below and including ``directory``.

    Subdirectories are visited first, so a tree that only contains empty
    directories is removed entirely. Directories that still hold files are
    left alone. Errors (permissions, concurrent writers) are logged at debug
    level and the directory is skipped.

    Args:
        directory: Root directory to clean. Missing or empty paths are ignored.
    """
    if not directory:
        return

    path = Path(directory)
    if not path.is_dir():
        return

    try:
        for child in path.iterdir():
            if child.is_dir() and not child.is_symlink():
                delete_empty_directories_recursively(child)

        if not any(path.iterdir()):
            path.rmdir()
    except OSError as e:
        logger.debug("Skipping cleanup of %s: %s", path, e)


def relative_directory_starts_with(directory: str | None, *prefixes: str) -> bool:
    """Check whether a relative path lies inside one of the given directories.

    A prefix only matches when it is followed by a path separator, so
    ``"config/bots"`` starts with ``"config"`` but ``"configs"`` does not.

    Args:
        directory: Relative path to test.
        *prefixes: Candidate parent directories.

    Returns:
        bool: True if any prefix is a parent directory of ``directory``.
    """
    if not directory or not prefixes:
        return False

    separators = {os.sep, os.altsep or "/"}
    return any(
        len(directory) > len(prefix)
        and directory[len(prefix)] in separators
        and directory.startswith(prefix)
        for prefix in prefixes
    )
