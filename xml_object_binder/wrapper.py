"""The element view handed to user constructors.

An :class:`ElementWrapper` pairs one :class:`~xml_object_binder.node.XmlNode`
with the :class:`~xml_object_binder.materializer.Materializer` that created
it.  Constructors read attributes and children through the wrapper and call
:meth:`ElementWrapper.materialize` on each child they want turned into an
object, which is how recursion stays in the hands of the constructed types.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List

from lxml import etree

from .node import LxmlNode, XmlNode

if TYPE_CHECKING:
    from .materializer import Materializer

logger = logging.getLogger(__name__)


class ElementWrapper:
    """Read-only element view bound to a materializer."""

    __slots__ = ("_node", "_materializer")

    def __init__(self, node: XmlNode, materializer: "Materializer") -> None:
        self._node = node
        self._materializer = materializer

    @property
    def node(self) -> XmlNode:
        return self._node

    @property
    def element(self) -> etree._Element:
        """The underlying lxml element.

        :raises TypeError: If the node is not lxml backed.
        """

        if not isinstance(self._node, LxmlNode):
            raise TypeError(f"{type(self._node).__name__} is not backed by lxml")
        return self._node.element

    @property
    def materializer(self) -> "Materializer":
        return self._materializer

    @property
    def name(self) -> str:
        return self._node.name()

    def attribute(self, key: str, default: str | None = None) -> str | None:
        return self._node.attributes().get(key, default)

    def attributes(self) -> Dict[str, str]:
        return self._node.attributes()

    def children(self) -> List["ElementWrapper"]:
        return [ElementWrapper(child, self._materializer) for child in self._node.children()]

    def query(self, path: str) -> List["ElementWrapper"]:
        """Run an XPath expression and wrap each matching element.

        Absolute expressions such as ``/Menu/Category`` are evaluated against
        the whole document, relative ones against this element.
        """

        return [ElementWrapper(match, self._materializer) for match in self._node.query(path)]

    def materialize(self, override_name: str | None = None, container: Any = None) -> Any:
        """Build the object for this element.

        :param override_name: Element name to bind instead of :attr:`name`.
        :param container: Opaque parent reference passed to the constructor.
        :returns: The constructed object, or whatever the missing-constructor
            policy yields.
        """

        return self._materializer.materialize(self, override_name, container)

    def to_xml_string(self) -> str:
        return self._node.serialize()

    def save_to_file(self, path: str) -> bool:
        """Write the serialized element to ``path``.

        Write failures are logged and reported through the return value so
        build scripts can decide whether to stop.

        :param path: Destination file.
        :returns: ``True`` when the file was written.
        """

        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(self.to_xml_string())
        except OSError as exc:
            logger.error("Could not save <%s> to %s: %s", self.name, path, exc)
            return False
        return True

    def __repr__(self) -> str:
        return f"ElementWrapper(<{self.name}>)"
