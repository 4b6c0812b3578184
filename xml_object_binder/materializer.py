"""Turning XML elements into objects.

The :class:`Materializer` resolves an element name through a
:class:`~xml_object_binder.registry.BindingRegistry`, looks the resulting
identifier up in a :class:`~xml_object_binder.registry.ConstructorTable` and
calls the factory with the wrapped element.  It deliberately does not walk the
tree: each constructed type decides which children to materialize and in
what order by calling back through
:meth:`~xml_object_binder.wrapper.ElementWrapper.materialize`.

Several materializers with different registries may coexist; nothing here is
process-wide state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from types import SimpleNamespace
from typing import Any, Mapping

from lxml import etree

import config
from .errors import ConstructionCapabilityError, UnresolvedConstructorError
from .node import LxmlNode, XmlNode
from .registry import BindingRegistry, ConstructorTable, Factory, MissingConstructorPolicy
from .wrapper import ElementWrapper


class MaterializeStatus(Enum):
    """Outcome of a single dispatch."""

    CONSTRUCTED = auto()
    NOT_FOUND = auto()  # no factory for the resolved identifier
    NOT_IMPLEMENTED = auto()  # factory exists but cannot construct


@dataclass
class MaterializeResult:
    """Explicit result of :meth:`Materializer.try_materialize`.

    Keeping the status next to the value lets callers tell "constructed
    ``None``" apart from "nothing registered" without consulting the policy.
    """

    status: MaterializeStatus
    constructor_id: str
    element_name: str
    value: Any = None

    @property
    def constructed(self) -> bool:
        return self.status is MaterializeStatus.CONSTRUCTED

    def __repr__(self) -> str:
        return (
            f"MaterializeResult(status={self.status.name}, "
            f"constructor_id={self.constructor_id!r}, value={self.value!r})"
        )


class Materializer:
    """Resolve and invoke constructors for XML elements.

    The registry is frozen on construction so its bindings cannot change
    while a document is being materialized.
    """

    def __init__(
        self,
        registry: BindingRegistry | None = None,
        constructors: ConstructorTable | Mapping[str, Factory] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.registry = registry if registry is not None else BindingRegistry.from_config()
        self.registry.freeze()
        if isinstance(constructors, ConstructorTable):
            self.constructors = constructors
        else:
            self.constructors = ConstructorTable(constructors)
        if logger is None:
            logger = logging.getLogger(__name__)
            logger.setLevel(config.LOG_LEVEL.upper())
        self.logger = logger

    def set_logger(self, logger: logging.Logger) -> None:
        """Swap out the logger used for reporting."""

        self.logger = logger

    def wrap(self, node: ElementWrapper | XmlNode | etree._Element) -> ElementWrapper:
        """Return an :class:`ElementWrapper` bound to this materializer.

        Accepts a wrapper from another materializer, any :class:`XmlNode` or
        a raw lxml element.
        """

        if isinstance(node, ElementWrapper):
            if node.materializer is self:
                return node
            return ElementWrapper(node.node, self)
        if isinstance(node, etree._Element):
            return ElementWrapper(LxmlNode(node), self)
        if isinstance(node, XmlNode):
            return ElementWrapper(node, self)
        raise TypeError(f"Cannot materialize {type(node).__name__}")

    def try_materialize(
        self,
        node: ElementWrapper | XmlNode | etree._Element,
        override_name: str | None = None,
        container: Any = None,
    ) -> MaterializeResult:
        """Dispatch ``node`` to its constructor without applying the policy.

        Missing and non-constructing factories are reported through
        :attr:`MaterializeResult.status` instead of being logged or raised.
        Exceptions raised by the factory itself propagate unchanged.

        :param node: Element to build an object for.
        :param override_name: Element name to bind instead of the node's own.
        :param container: Opaque parent reference relayed to the factory.
        :returns: The dispatch outcome.
        """

        view = self.wrap(node)
        element_name = override_name or view.name
        constructor_id = self.registry.resolve(element_name)

        if constructor_id not in self.constructors:
            return MaterializeResult(MaterializeStatus.NOT_FOUND, constructor_id, element_name)
        factory = self.constructors.get(constructor_id)
        if not callable(factory):
            return MaterializeResult(MaterializeStatus.NOT_IMPLEMENTED, constructor_id, element_name)

        if container is None:
            value = factory(view)
        else:
            value = factory(view, container)

        if value is NotImplemented:
            return MaterializeResult(MaterializeStatus.NOT_IMPLEMENTED, constructor_id, element_name)
        return MaterializeResult(MaterializeStatus.CONSTRUCTED, constructor_id, element_name, value)

    def materialize(
        self,
        node: ElementWrapper | XmlNode | etree._Element,
        override_name: str | None = None,
        container: Any = None,
    ) -> Any:
        """Build the object for ``node``.

        When no constructor is registered for the resolved identifier the
        registry's :class:`MissingConstructorPolicy` decides the outcome:
        ``error`` logs a critical message and returns ``None``,
        ``exception`` raises :class:`UnresolvedConstructorError`, ``null``
        returns ``None`` and ``object`` returns an empty
        :class:`types.SimpleNamespace`.

        :param node: Element to build an object for.
        :param override_name: Element name to bind instead of the node's own.
        :param container: Opaque parent reference relayed to the factory.
        :returns: The constructed object or the policy's fallback.
        :raises UnresolvedConstructorError: Under the ``exception`` policy.
        :raises ConstructionCapabilityError: If the registered factory is not
            callable or returns ``NotImplemented``.
        """

        result = self.try_materialize(node, override_name, container)
        if result.status is MaterializeStatus.CONSTRUCTED:
            return result.value
        if result.status is MaterializeStatus.NOT_IMPLEMENTED:
            self.logger.critical(
                "Constructor '%s' for <%s> does not implement construction",
                result.constructor_id,
                result.element_name,
            )
            raise ConstructionCapabilityError(result.constructor_id)
        return self._handle_missing(result)

    def _handle_missing(self, result: MaterializeResult) -> Any:
        policy = self.registry.policy
        if policy is MissingConstructorPolicy.ERROR:
            self.logger.critical("Constructor '%s' is not defined", result.constructor_id)
            return None
        if policy is MissingConstructorPolicy.EXCEPTION:
            raise UnresolvedConstructorError(result.constructor_id, result.element_name)
        if policy is MissingConstructorPolicy.OBJECT:
            self.logger.debug(
                "No constructor '%s', using placeholder", result.constructor_id
            )
            return SimpleNamespace()
        self.logger.debug("No constructor '%s', skipping", result.constructor_id)
        return None
