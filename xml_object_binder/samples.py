"""Example types for menu documents.

A menu document looks like::

    <Menu>
      <Category phrase="Products">
        <InternalLink phrase="Overview" target="/products"/>
        <Category phrase="Hardware">...</Category>
      </Category>
      <ExternalLink phrase="Blog" target="https://example.org"/>
    </Menu>

Each type is built independently through its ``create`` classmethod and
recurses into its own children, recording itself as the container of every
child object.  ``InternalLink`` and ``ExternalLink`` share the ``Link``
constructor through :data:`SAMPLE_CLASS_MAP`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from .registry import ConstructorTable
from .wrapper import ElementWrapper

SAMPLE_CLASS_MAP = {
    "ExternalLink": "Link",
    "InternalLink": "Link",
}


def _materialize_children(element: ElementWrapper, container: Any) -> List[Any]:
    items = []
    for child in element.children():
        items.append(child.materialize(container=container))
    return items


@dataclass
class Menu:
    menu_items: List[Any] = field(default_factory=list)

    @classmethod
    def create(cls, element: ElementWrapper, container: Any = None) -> "Menu":
        menu = cls()
        menu.menu_items = _materialize_children(element, menu)
        return menu


@dataclass
class Category:
    phrase: str | None = None
    menu_items: List[Any] = field(default_factory=list)
    parent: Any = field(default=None, repr=False, compare=False)

    @classmethod
    def create(cls, element: ElementWrapper, container: Any = None) -> "Category":
        category = cls(phrase=element.attribute("phrase"), parent=container)
        category.menu_items = _materialize_children(element, category)
        return category


@dataclass
class Link:
    target: str = ""
    phrase: str | None = None
    menu_items: List[Any] = field(default_factory=list)
    parent: Any = field(default=None, repr=False, compare=False)

    @classmethod
    def create(cls, element: ElementWrapper, container: Any = None) -> "Link":
        link = cls(
            target=element.attribute("target", ""),
            phrase=element.attribute("phrase"),
            parent=container,
        )
        link.menu_items = _materialize_children(element, link)
        return link


def sample_constructors() -> ConstructorTable:
    """Return a constructor table with the menu types registered."""

    table = ConstructorTable()
    table.register("Menu", Menu.create)
    table.register("Category", Category.create)
    table.register("Link", Link.create)
    return table
