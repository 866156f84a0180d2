"""Query helpers for parsed HTML documents.

Thin wrappers around BeautifulSoup's CSS selector support, used by the
page scrapers to pull elements and attribute values out of responses.

Example:
    ```python
    import bs4
    from steamauthnet_common.dom_utils import get_attribute_value, select_single_node

    document = bs4.BeautifulSoup(response.text, "html.parser")
    form = select_single_node(document, "form#openidForm")
    action = get_attribute_value(form, "action")
    ```
"""

from typing import Any

import bs4


def _search_root(document: bs4.BeautifulSoup) -> bs4.Tag:
    """Return the document body, or the whole document when it has none."""
    body = document.body
    return body if body is not None else document


def get_attribute_value(node: Any, attribute_name: str | None) -> str | None:
    """Get an attribute's value from an element node.

    Args:
        node: A parsed node. Only ``bs4.Tag`` elements carry attributes.
        attribute_name: Attribute to read.

    Returns:
        str | None: The attribute value (multi-valued attributes such as
            ``class`` are joined with spaces), or None when the node is not
            an element, the name is empty, or the attribute is absent.
    """
    if node is None or not attribute_name or not isinstance(node, bs4.Tag):
        return None
    value = node.get(attribute_name)
    if isinstance(value, list):
        return " ".join(value)
    return value


def select_nodes(document: bs4.BeautifulSoup, selector: str) -> list[bs4.Tag]:
    """Select all elements under the document body matching a CSS selector."""
    return list(_search_root(document).select(selector))


def select_single_node(document: bs4.BeautifulSoup, selector: str) -> bs4.Tag | None:
    """Select the first element under the document body matching a CSS selector."""
    return _search_root(document).select_one(selector)


def select_element_nodes(element: bs4.Tag, selector: str) -> list[bs4.Tag]:
    """Select all descendants of ``element`` matching a CSS selector."""
    return list(element.select(selector))


def select_single_element_node(element: bs4.Tag, selector: str) -> bs4.Tag | None:
    """Select the first descendant of ``element`` matching a CSS selector."""
    return element.select_one(selector)
