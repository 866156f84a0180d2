"""Format validation predicates.

All predicates return False for empty or missing input instead of raising.
"""

import re
import string
from http import HTTPStatus

CD_KEY_RE = re.compile(
    r"^[0-9A-Z]{4,7}-[0-9A-Z]{4,7}-[0-9A-Z]{4,7}(?:(?:-[0-9A-Z]{4,7})?(?:-[0-9A-Z]{4,7}))?$",
    re.IGNORECASE,
)

_HEX_DIGITS = frozenset(string.hexdigits)


def is_valid_cd_key(key: str | None) -> bool:
    """Check whether a string looks like a product (CD) key.

    Keys are three to five dash-separated groups of 4-7 ASCII letters or
    digits, e.g. ``AAAAA-BBBBB-CCCCC``. Case is ignored.

    Args:
        key: Candidate key.

    Returns:
        bool: True if the key matches the expected format.
    """
    if not key:
        return False
    return CD_KEY_RE.match(key) is not None


def is_valid_digits_text(text: str | None) -> bool:
    """True if ``text`` is non-empty and every character is a decimal digit."""
    if not text:
        return False
    return text.isdecimal()


def is_valid_hexadecimal_text(text: str | None) -> bool:
    """True if ``text`` is a non-empty, even-length run of hex digits."""
    if not text:
        return False
    return len(text) % 2 == 0 and all(ch in _HEX_DIGITS for ch in text)


def is_client_error_code(status_code: HTTPStatus | int) -> bool:
    """True for 4xx HTTP status codes."""
    return HTTPStatus.BAD_REQUEST <= status_code < HTTPStatus.INTERNAL_SERVER_ERROR
