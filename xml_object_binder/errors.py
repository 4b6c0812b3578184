"""Exceptions raised while binding XML elements to constructors."""

from __future__ import annotations


class BindingError(Exception):
    """Base class for all binding failures."""


class UnresolvedConstructorError(BindingError):
    """Raised when no constructor is registered for a resolved identifier.

    Only raised under the ``exception`` missing-constructor policy; the other
    policies log, return ``None`` or return a placeholder instead.
    """

    def __init__(self, constructor_id: str, element_name: str | None = None) -> None:
        self.constructor_id = constructor_id
        self.element_name = element_name
        msg = f"Constructor '{constructor_id}' is not defined"
        if element_name and element_name != constructor_id:
            msg = f"{msg} (element <{element_name}>)"
        super().__init__(msg)


class ConstructionCapabilityError(BindingError):
    """Raised when a registered constructor cannot construct objects.

    This points at a registration bug, so it is never governed by the
    missing-constructor policy.
    """

    def __init__(self, constructor_id: str) -> None:
        self.constructor_id = constructor_id
        super().__init__(
            f"Constructor '{constructor_id}' does not implement construction"
        )


class RegistryFrozenError(BindingError):
    """Raised when a frozen :class:`BindingRegistry` is reconfigured."""
