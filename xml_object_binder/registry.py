"""Element name to constructor bindings.

The :class:`BindingRegistry` answers a single question for the
materializer: which constructor identifier builds the object for a given
element name.  Names without an entry map to themselves, so a document whose
element names already match the registered constructors needs no mapping at
all.  The registry also carries the policy applied when the resolved
identifier has no constructor.

:class:`ConstructorTable` is the other half of the lookup: the host
application registers one factory per identifier ahead of time.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Iterator, Mapping

import config
from .errors import RegistryFrozenError

Factory = Callable[..., Any]


class MissingConstructorPolicy(str, Enum):
    """What to do when a resolved identifier has no constructor."""

    ERROR = "error"  # log at CRITICAL and return None
    EXCEPTION = "exception"  # raise UnresolvedConstructorError
    NULL = "null"  # return None silently
    OBJECT = "object"  # return an empty placeholder object


class BindingRegistry:
    """Mapping from element names to constructor identifiers.

    The registry is configured once and then frozen.  Reconfiguring replaces
    the mapping wholesale rather than merging, which keeps the resolved
    identifiers a pure function of the last :meth:`configure` call.
    Mapping values are not validated here; a broken entry only surfaces when
    the materializer fails to find its constructor.
    """

    def __init__(
        self,
        mapping: Mapping[str, str] | None = None,
        policy: MissingConstructorPolicy | str = MissingConstructorPolicy.ERROR,
    ) -> None:
        self._mapping: Dict[str, str] = {}
        self._policy = MissingConstructorPolicy.ERROR
        self._frozen = False
        self.configure(mapping or {}, policy)

    @classmethod
    def from_config(cls) -> "BindingRegistry":
        """Build a registry from the values in :mod:`config`."""

        return cls(config.CLASS_MAP, config.MISSING_CONSTRUCTOR_POLICY)

    @property
    def policy(self) -> MissingConstructorPolicy:
        return self._policy

    @property
    def mapping(self) -> Dict[str, str]:
        """Copy of the current element name mapping."""

        return dict(self._mapping)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def configure(
        self,
        mapping: Mapping[str, str],
        policy: MissingConstructorPolicy | str | None = None,
    ) -> None:
        """Replace the mapping and optionally the missing-constructor policy.

        :param mapping: Element name to constructor identifier pairs.  Any
            previous entries are discarded.
        :param policy: New policy, or ``None`` to keep the current one.
        :raises RegistryFrozenError: If :meth:`freeze` was called.
        :raises ValueError: If ``policy`` is not a known policy name.
        """

        if self._frozen:
            raise RegistryFrozenError("Binding registry is frozen")
        if policy is not None:
            self._policy = MissingConstructorPolicy(policy)
        self._mapping = dict(mapping)

    def freeze(self) -> None:
        self._frozen = True

    def resolve(self, element_name: str) -> str:
        """Return the constructor identifier for ``element_name``.

        Unmapped names resolve to themselves.
        """

        return self._mapping.get(element_name, element_name)

    def __repr__(self) -> str:
        return (
            f"BindingRegistry(mapping={self._mapping}, "
            f"policy={self._policy.value!r}, frozen={self._frozen})"
        )


class ConstructorTable:
    """Constructor identifier to factory table supplied by the host.

    A factory is any callable accepting ``(element)`` or
    ``(element, container)`` where ``element`` is an
    :class:`~xml_object_binder.wrapper.ElementWrapper`.  Registration may be
    done directly or with the decorator form::

        table = ConstructorTable()

        @table.register("Link")
        def make_link(element, container=None):
            ...
    """

    def __init__(self, factories: Mapping[str, Factory] | None = None) -> None:
        self._factories: Dict[str, Factory] = dict(factories or {})

    def register(self, identifier: str, factory: Factory | None = None):
        """Register ``factory`` under ``identifier``.

        When ``factory`` is omitted a decorator is returned instead.  The last
        registration for an identifier wins.
        """

        if factory is None:
            def decorator(func: Factory) -> Factory:
                self._factories[identifier] = func
                return func

            return decorator
        self._factories[identifier] = factory
        return factory

    def get(self, identifier: str) -> Factory | None:
        return self._factories.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)
