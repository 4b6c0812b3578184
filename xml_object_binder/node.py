"""The node capability consumed by the binder, and its lxml adapter.

The materializer never touches lxml directly.  It works against
:class:`XmlNode`, a read-only view of one element, so another parser can be
plugged in by implementing the same five methods.
"""

from __future__ import annotations

from typing import Dict, List, Protocol, runtime_checkable

from lxml import etree

from . import utils


@runtime_checkable
class XmlNode(Protocol):
    """Read-only access to one element of a parsed document."""

    def name(self) -> str:
        ...

    def attributes(self) -> Dict[str, str]:
        ...

    def children(self) -> List["XmlNode"]:
        ...

    def query(self, path: str) -> List["XmlNode"]:
        ...

    def serialize(self) -> str:
        ...


class LxmlNode:
    """:class:`XmlNode` implementation backed by an ``lxml`` element."""

    __slots__ = ("_element",)

    def __init__(self, element: etree._Element) -> None:
        if not utils.is_element(element):
            raise TypeError(f"Expected an lxml element, got {type(element).__name__}")
        self._element = element

    @property
    def element(self) -> etree._Element:
        return self._element

    def name(self) -> str:
        return utils.local_name(self._element)

    def attributes(self) -> Dict[str, str]:
        return dict(self._element.attrib)

    def children(self) -> List["LxmlNode"]:
        return [LxmlNode(child) for child in utils.element_children(self._element)]

    def query(self, path: str) -> List["LxmlNode"]:
        return [LxmlNode(match) for match in utils.query_elements(self._element, path)]

    def serialize(self) -> str:
        return utils.serialize(self._element)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LxmlNode):
            return NotImplemented
        return self._element is other._element

    def __hash__(self) -> int:
        return hash(self._element)

    def __repr__(self) -> str:
        return f"LxmlNode(<{self.name()}>)"
