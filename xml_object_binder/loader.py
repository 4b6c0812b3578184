"""Entry points that parse XML and hand back the wrapped root element.

Parse errors are not caught: a malformed or unreadable source raises before
any wrapper exists, so callers never see a partially loaded document.
"""

from __future__ import annotations

import logging

from lxml import etree

from .materializer import Materializer
from .node import LxmlNode
from .wrapper import ElementWrapper

logger = logging.getLogger(__name__)


def _parser() -> etree.XMLParser:
    return etree.XMLParser(remove_blank_text=False)


def from_element(element: etree._Element, materializer: Materializer) -> ElementWrapper:
    """Wrap an already parsed lxml element."""

    return ElementWrapper(LxmlNode(element), materializer)


def from_file(
    path: str,
    materializer: Materializer,
    parser: etree.XMLParser | None = None,
) -> ElementWrapper:
    """Parse ``path`` and wrap its root element.

    :param path: XML file on disk.
    :param materializer: Materializer the wrapper is bound to.
    :param parser: lxml parser to use, for example one with ``huge_tree``
        or ``resolve_entities=False``.  Defaults to a parser that keeps
        blank text.
    :returns: Wrapper around the document root.
    :raises OSError: If the file cannot be read.
    :raises lxml.etree.XMLSyntaxError: If the file is not well formed.
    """

    tree = etree.parse(path, parser if parser is not None else _parser())
    logger.debug("Loaded %s", path)
    return from_element(tree.getroot(), materializer)


def from_string(
    xml: str | bytes,
    materializer: Materializer,
    parser: etree.XMLParser | None = None,
) -> ElementWrapper:
    """Parse ``xml`` and wrap its root element.

    Text carrying an encoding declaration must be passed as ``bytes``, as
    lxml refuses declared encodings on unicode input.  ``parser`` behaves as
    in :func:`from_file`.

    :raises lxml.etree.XMLSyntaxError: If ``xml`` is not well formed.
    """

    root = etree.fromstring(xml, parser if parser is not None else _parser())
    return from_element(root, materializer)
