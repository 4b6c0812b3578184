"""Small lxml helpers used across the package.

These helpers are kept independent of any class so they can be tested in
isolation and reused by host applications that work with raw lxml trees.
"""

from __future__ import annotations

from typing import List

from lxml import etree


def is_element(node: object) -> bool:
    """Check for a real element node.

    lxml exposes comments, processing instructions and entities as children
    too.  Their ``tag`` is a factory function rather than a string, which is
    what this helper tests for.

    :param node: Any object returned by lxml iteration or XPath.
    :returns: ``True`` for element nodes only.
    """
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


def local_name(elem: etree._Element) -> str:
    """Get the tag name without a namespace.

    Dispatch happens on the local name only, ``{urn:x}Menu`` and ``Menu``
    bind to the same constructor.

    :param elem: XML element.
    :returns: Tag name without the ``{namespace}`` prefix.
    """
    tag = elem.tag
    if isinstance(tag, str) and "}" in tag:
        return tag.split("}", 1)[1]
    return tag if isinstance(tag, str) else ""


def element_children(elem: etree._Element) -> List[etree._Element]:
    """Return the element children of ``elem`` in document order."""
    return [child for child in elem if is_element(child)]


def query_elements(elem: etree._Element, path: str) -> List[etree._Element]:
    """Evaluate an XPath expression and keep only element results.

    Absolute paths are evaluated against the whole document, relative paths
    against ``elem``.  Attribute values, strings and numbers produced by the
    expression are dropped.

    :param elem: Context element for the expression.
    :param path: XPath expression.
    :returns: Matching elements in document order.
    :raises lxml.etree.XPathEvalError: If ``path`` is not valid XPath.
    """
    result = elem.xpath(path)
    if not isinstance(result, list):
        return []
    return [node for node in result if is_element(node)]


def serialize(elem: etree._Element) -> str:
    """Serialize ``elem`` and its subtree to a unicode string.

    The element's tail text is not included.
    """
    return etree.tostring(elem, encoding="unicode", with_tail=False)
