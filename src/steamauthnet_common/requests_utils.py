"""Cookie helpers built on the requests library."""

import logging
from http.cookiejar import CookieJar

import requests
from requests.cookies import get_cookie_header

logger = logging.getLogger(__name__)


def get_cookie_value(cookie_jar: CookieJar | None, url: str | None, name: str | None) -> str | None:
    """Look up the value of a cookie the jar would send to a URL.

    Domain, path, secure and expiry rules are applied by the jar's cookie
    policy exactly as they would be for a real request, so a
    ``requests.Session().cookies`` jar can be queried directly.

    Args:
        cookie_jar: Jar to search, e.g. ``session.cookies``.
        url: Absolute URL the cookie would be sent to.
        name: Cookie name (case-sensitive).

    Returns:
        str | None: The cookie value, or None if any argument is empty, the
            URL cannot be parsed, or no matching cookie exists.
    """
    if cookie_jar is None or not url or not name:
        return None

    try:
        prepared = requests.Request("GET", url).prepare()
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.debug("Cannot look up cookie %s for %r: %s", name, url, e)
        return None

    header = get_cookie_header(cookie_jar, prepared)
    if not header:
        return None

    for pair in header.split("; "):
        cookie_name, sep, value = pair.partition("=")
        if sep and cookie_name == name:
            return value
    return None
