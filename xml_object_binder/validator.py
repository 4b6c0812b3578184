"""Check that serialized nodes parse back to the same structure.

The binder relies on the node collaborator for serialization.  This module
verifies that boundary: a node's XML string, once re-parsed, must describe
the same tree.  Only :mod:`lxml` is needed, and the check works on any
:class:`~xml_object_binder.node.XmlNode` implementation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from lxml import etree

from . import utils
from .node import XmlNode
from .wrapper import ElementWrapper


def _node_label(node: etree._Element) -> str:
    if isinstance(node, etree._Comment):
        return "comment()"
    if isinstance(node, etree._ProcessingInstruction):
        return "processing-instruction()"
    return utils.local_name(node)


@dataclass
class ValidationReport:
    """Simple result object for :class:`RoundTripValidator`.

    Storing the pass/fail boolean along with detail messages keeps the
    interface minimal while still letting callers see every mismatch.
    """

    passed: bool
    details: List[str]

    def __repr__(self) -> str:
        return f"ValidationReport(passed={self.passed}, details={self.details})"


class RoundTripValidator:
    """Compare a node with the re-parsed form of its own serialization.

    Tag names, attributes, text, tail text and child order must survive.
    Differences are collected into a :class:`ValidationReport` rather than
    raised so callers decide how strict to be.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def set_logger(self, logger: logging.Logger) -> None:
        self.logger = logger

    def _reparse(self, xml: str) -> etree._Element | None:
        """Parse serialized XML, logging instead of raising on failure."""

        try:
            return etree.fromstring(xml, etree.XMLParser(remove_blank_text=False))
        except etree.XMLSyntaxError as exc:
            self.logger.error("Round-trip parse error: %s", exc)
            return None

    def compare(self, original: etree._Element, reparsed: etree._Element) -> List[str]:
        """Walk both trees and describe every structural difference.

        :param original: Element the serialization was produced from.
        :param reparsed: Element parsed back from that serialization.
        :returns: Human readable mismatch messages, empty when equivalent.
        """

        errors: List[str] = []

        def walk(e1: etree._Element, e2: etree._Element, path: str = "") -> None:
            here = f"{path}/{utils.local_name(e1)}"
            if e1.tag != e2.tag:
                errors.append(f"tag mismatch at {here}")
                return
            if dict(e1.attrib) != dict(e2.attrib):
                errors.append(f"attrib mismatch at {here}")
            if (e1.text or "") != (e2.text or ""):
                errors.append(f"text mismatch at {here}")
            children1 = utils.element_children(e1)
            children2 = utils.element_children(e2)
            if len(children1) != len(children2):
                errors.append(f"child count mismatch at {here}")
            nodes1 = list(e1)
            nodes2 = list(e2)
            if len(nodes1) != len(nodes2):
                errors.append(f"node count mismatch at {here}")
            for n1, n2 in zip(nodes1, nodes2):
                if (n1.tail or "") != (n2.tail or ""):
                    errors.append(f"tail mismatch at {here}/{_node_label(n1)}")
            for c1, c2 in zip(children1, children2):
                walk(c1, c2, here)

        walk(original, reparsed)
        return errors

    def validate(self, node: ElementWrapper | XmlNode | etree._Element) -> ValidationReport:
        """Serialize ``node``, parse the result and compare the two trees.

        For nodes that are not lxml backed the original is itself obtained by
        parsing the first serialization, so the check then asserts that
        serialization is stable across a second round.

        :param node: Wrapper, node or lxml element to check.
        :returns: Object with ``passed`` boolean and message list.
        """

        if isinstance(node, ElementWrapper):
            node = node.node
        if isinstance(node, etree._Element):
            original = node
            xml = utils.serialize(node)
        else:
            xml = node.serialize()
            element = getattr(node, "element", None)
            original = element if utils.is_element(element) else self._reparse(xml)
            if original is None:
                return ValidationReport(False, ["Parse error"])
        self.logger.info("Start round-trip validate: <%s>", utils.local_name(original))

        reparsed = self._reparse(xml)
        if reparsed is None:
            return ValidationReport(False, ["Parse error"])

        errors = self.compare(original, reparsed)
        for err in errors:
            self.logger.error(err)
        self.logger.info("End round-trip validate")
        return ValidationReport(not errors, errors)
