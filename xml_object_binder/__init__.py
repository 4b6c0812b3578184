"""Public entry points for :mod:`xml_object_binder`.

This module re-exports the classes a host application needs to bind element
names to constructors and materialize documents, so callers never have to
import the implementation modules directly.
"""

from .errors import (
    BindingError,
    ConstructionCapabilityError,
    RegistryFrozenError,
    UnresolvedConstructorError,
)
from .loader import from_element, from_file, from_string
from .materializer import MaterializeResult, MaterializeStatus, Materializer
from .node import LxmlNode, XmlNode
from .registry import BindingRegistry, ConstructorTable, MissingConstructorPolicy
from .validator import RoundTripValidator, ValidationReport
from .wrapper import ElementWrapper

__all__ = [
    "BindingError",
    "BindingRegistry",
    "ConstructionCapabilityError",
    "ConstructorTable",
    "ElementWrapper",
    "LxmlNode",
    "MaterializeResult",
    "MaterializeStatus",
    "Materializer",
    "MissingConstructorPolicy",
    "RegistryFrozenError",
    "RoundTripValidator",
    "UnresolvedConstructorError",
    "ValidationReport",
    "XmlNode",
    "from_element",
    "from_file",
    "from_string",
]
