"""Command line demo for xml-object-binder.

Loads a menu document, materializes the root with the sample types, runs an
XPath query and materializes every match.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Sequence, Tuple

from lxml import etree

import config
from . import loader
from .errors import BindingError
from .materializer import Materializer
from .registry import BindingRegistry, MissingConstructorPolicy
from .samples import SAMPLE_CLASS_MAP, sample_constructors

DEFAULT_QUERY = "/Menu/Category/Category"

logger = logging.getLogger("xml_object_binder")


class _FatalCounter(logging.Handler):
    """Count CRITICAL records so fail-loud bindings still fail the run."""

    def __init__(self) -> None:
        super().__init__(level=logging.CRITICAL)
        self.count = 0

    def emit(self, record: logging.LogRecord) -> None:
        self.count += 1


def _parse_mapping(pairs: Sequence[str]) -> Dict[str, str]:
    mapping: Dict[str, str] = {}
    for pair in pairs:
        name, sep, identifier = pair.partition("=")
        if not sep or not name or not identifier:
            raise argparse.ArgumentTypeError(f"Invalid mapping '{pair}', expected NAME=ID")
        mapping[name.strip()] = identifier.strip()
    return mapping


def _log_level(value: str) -> str:
    level = value.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise argparse.ArgumentTypeError(f"Unknown log level '{value}'")
    return level


def run(
    xml_path: str,
    mapping: Dict[str, str],
    query: str = DEFAULT_QUERY,
    policy: str = MissingConstructorPolicy.ERROR.value,
    log: logging.Logger | None = None,
) -> Tuple[Any, List[Any]]:
    """Materialize the document root and every element matching ``query``.

    :param log: Logger handed to the materializer; its level is left as is.
    :returns: ``(root_object, matched_objects)``.
    """
    registry = BindingRegistry(mapping, policy)
    materializer = Materializer(registry, sample_constructors(), logger=log)
    root = loader.from_file(xml_path, materializer)
    root_object = root.materialize()
    matches = root.query(query)
    logger.info("Query %s matched %s elements", query, len(matches))
    return root_object, [match.materialize() for match in matches]


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="xml-object-binder",
        description="Materialize XML elements into objects",
    )
    parser.add_argument("xml", help="Path to the XML document")
    parser.add_argument(
        "--map",
        action="append",
        default=[],
        metavar="NAME=ID",
        help="Bind element NAME to constructor ID (repeatable; default: sample link map)",
    )
    parser.add_argument("--query", default=DEFAULT_QUERY, help=f"XPath to materialize (default: {DEFAULT_QUERY})")
    parser.add_argument(
        "--policy",
        choices=[p.value for p in MissingConstructorPolicy],
        default=config.MISSING_CONSTRUCTOR_POLICY,
        help="Behavior for elements without a constructor",
    )
    parser.add_argument("--log-level", type=_log_level, default=config.LOG_LEVEL, help="Logging level")
    args = parser.parse_args(argv)

    try:
        mapping = _parse_mapping(args.map) if args.map else dict(SAMPLE_CLASS_MAP)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s:%(message)s"))
    fatal = _FatalCounter()
    previous_level = logger.level
    logger.setLevel(args.log_level)
    logger.addHandler(handler)
    logger.addHandler(fatal)
    try:
        root_object, matched = run(args.xml, mapping, args.query, args.policy, log=logger)
    except (OSError, etree.XMLSyntaxError) as exc:
        print(f"Error: could not load {args.xml}: {exc}", file=sys.stderr)
        return 1
    except etree.XPathError as exc:
        print(f"Error: invalid query {args.query}: {exc}", file=sys.stderr)
        return 1
    except BindingError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        logger.removeHandler(fatal)
        logger.removeHandler(handler)
        logger.setLevel(previous_level)

    if fatal.count:
        print(f"Error: {fatal.count} element(s) could not be bound", file=sys.stderr)
        return 1

    print(repr(root_object))
    for obj in matched:
        print(repr(obj))
    return 0


if __name__ == "__main__":
    sys.exit(main())
