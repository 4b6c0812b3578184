import os
import sys
import logging
from types import SimpleNamespace
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest
from lxml import etree

from xml_object_binder import (
    BindingRegistry,
    ConstructionCapabilityError,
    ConstructorTable,
    ElementWrapper,
    LxmlNode,
    MaterializeStatus,
    Materializer,
    UnresolvedConstructorError,
    from_string,
)


def make_materializer(policy="error", mapping=None, constructors=None):
    registry = BindingRegistry(mapping or {}, policy)
    return Materializer(registry, constructors or {})


class Recorder:
    """Factory that records how it was called."""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)
        return ("built", args[0].name)


def test_constructor_called_with_element_only_without_container():
    rec = Recorder()
    m = make_materializer(constructors={"Item": rec})
    root = from_string("<Item/>", m)
    assert m.materialize(root) == ("built", "Item")
    assert len(rec.calls) == 1
    assert len(rec.calls[0]) == 1
    assert isinstance(rec.calls[0][0], ElementWrapper)


def test_container_relayed_unchanged():
    rec = Recorder()
    parent = object()
    m = make_materializer(constructors={"Item": rec})
    root = from_string("<Item/>", m)
    root.materialize(container=parent)
    assert rec.calls[0][1] is parent


def test_override_name_takes_precedence():
    m = make_materializer(constructors={"Other": lambda el: "other", "Item": lambda el: "item"})
    root = from_string("<Item/>", m)
    assert root.materialize() == "item"
    assert root.materialize("Other") == "other"


def test_override_name_is_resolved_through_registry():
    m = make_materializer(mapping={"Alias": "Item"}, constructors={"Item": lambda el: "item"})
    root = from_string("<Nothing/>", m)
    assert root.materialize("Alias") == "item"


def test_shared_constructor_for_two_names():
    m = make_materializer(
        mapping={"InternalLink": "Link", "ExternalLink": "Link"},
        constructors={"Link": lambda el: ("Link", el.name, el.attribute("target"))},
    )
    internal = from_string('<InternalLink target="a"/>', m)
    external = from_string('<ExternalLink target="b"/>', m)
    assert internal.materialize() == ("Link", "InternalLink", "a")
    assert external.materialize() == ("Link", "ExternalLink", "b")


def test_null_policy_returns_none_silently(caplog):
    m = make_materializer(policy="null")
    root = from_string("<Unknown/>", m)
    with caplog.at_level(logging.DEBUG):
        assert root.materialize() is None
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_exception_policy_raises_with_identifier():
    m = make_materializer(policy="exception")
    root = from_string("<Unknown/>", m)
    with pytest.raises(UnresolvedConstructorError) as exc_info:
        root.materialize()
    assert exc_info.value.constructor_id == "Unknown"
    assert "Unknown" in str(exc_info.value)


def test_exception_policy_reports_mapped_identifier():
    m = make_materializer(policy="exception", mapping={"InternalLink": "Link"})
    root = from_string("<InternalLink/>", m)
    with pytest.raises(UnresolvedConstructorError) as exc_info:
        root.materialize()
    assert exc_info.value.constructor_id == "Link"
    assert exc_info.value.element_name == "InternalLink"


def test_error_policy_logs_and_returns_none(caplog):
    m = make_materializer(policy="error")
    root = from_string("<Unknown/>", m)
    with caplog.at_level(logging.INFO):
        assert root.materialize() is None
    critical = [r for r in caplog.records if r.levelno == logging.CRITICAL]
    assert len(critical) == 1
    assert "Unknown" in critical[0].getMessage()


def test_object_policy_returns_placeholder():
    m = make_materializer(policy="object")
    root = from_string("<Unknown/>", m)
    first = root.materialize()
    second = root.materialize()
    assert isinstance(first, SimpleNamespace)
    assert vars(first) == {}
    assert first is not second


def test_not_implemented_sentinel_raises(caplog):
    m = make_materializer(policy="null", constructors={"Item": lambda el: NotImplemented})
    root = from_string("<Item/>", m)
    with caplog.at_level(logging.INFO):
        with pytest.raises(ConstructionCapabilityError) as exc_info:
            root.materialize()
    assert exc_info.value.constructor_id == "Item"
    assert any(r.levelno == logging.CRITICAL for r in caplog.records)


def test_non_callable_constructor_raises():
    m = make_materializer(policy="object", constructors={"Item": "not a factory"})
    root = from_string("<Item/>", m)
    with pytest.raises(ConstructionCapabilityError):
        root.materialize()


def test_constructor_errors_propagate():
    def broken(el):
        raise KeyError("boom")

    m = make_materializer(policy="null", constructors={"Item": broken})
    root = from_string("<Item/>", m)
    with pytest.raises(KeyError):
        root.materialize()


def test_try_materialize_reports_status():
    m = make_materializer(
        policy="exception",
        constructors={"A": lambda el: None, "B": lambda el: NotImplemented},
    )
    doc = from_string("<r><A/><B/><C/></r>", m)
    a, b, c = doc.children()
    result = m.try_materialize(a)
    assert result.status is MaterializeStatus.CONSTRUCTED
    assert result.constructed and result.value is None
    assert m.try_materialize(b).status is MaterializeStatus.NOT_IMPLEMENTED
    missing = m.try_materialize(c)
    assert missing.status is MaterializeStatus.NOT_FOUND
    assert missing.constructor_id == "C"


def test_accepts_raw_element_and_node():
    m = make_materializer(constructors={"Item": lambda el: el.name})
    elem = etree.fromstring("<Item/>")
    assert m.materialize(elem) == "Item"
    assert m.materialize(LxmlNode(elem)) == "Item"


def test_rejects_unknown_input():
    m = make_materializer()
    with pytest.raises(TypeError):
        m.materialize("<Item/>")


def test_wrapper_rebound_to_calling_materializer():
    first = make_materializer(constructors={"Item": lambda el: "first"})
    second = make_materializer(constructors={"Item": lambda el: "second"})
    root = from_string("<Item/>", first)
    assert second.materialize(root) == "second"
    assert second.wrap(root).materializer is second


def test_registry_frozen_by_materializer():
    registry = BindingRegistry({"a": "b"})
    Materializer(registry, {})
    assert registry.frozen


def test_independent_materializers_do_not_share_config():
    strict = make_materializer(policy="exception", mapping={"X": "Y"})
    lenient = make_materializer(policy="null")
    assert strict.registry.resolve("X") == "Y"
    assert lenient.registry.resolve("X") == "X"
    assert lenient.materialize(etree.fromstring("<X/>")) is None


def test_constructor_table_instance_used_directly():
    table = ConstructorTable()
    m = Materializer(BindingRegistry(), table)
    table.register("Late", lambda el: "late")
    assert m.materialize(etree.fromstring("<Late/>")) == "late"


def test_materializer_does_not_walk_children():
    seen = []

    def leaf(el):
        seen.append(el.name)
        return el.name

    m = make_materializer(policy="null", constructors={"root": lambda el: "root", "leaf": leaf})
    root = from_string("<root><leaf/><leaf/></root>", m)
    assert root.materialize() == "root"
    assert seen == []


def test_set_logger():
    m = make_materializer(policy="error")
    logger = logging.getLogger("test-binder")
    m.set_logger(logger)
    assert m.logger is logger


def test_injected_logger_keeps_its_level():
    host = logging.getLogger("test-binder-host")
    host.setLevel(logging.CRITICAL)
    m = Materializer(BindingRegistry(), {}, logger=host)
    assert m.logger is host
    assert host.level == logging.CRITICAL


def test_lowercase_log_level_from_config(monkeypatch):
    import config
    monkeypatch.setattr(config, "LOG_LEVEL", "debug")
    m = Materializer(BindingRegistry(), {})
    assert m.logger.level == logging.DEBUG
    monkeypatch.setattr(config, "LOG_LEVEL", "INFO")
    Materializer(BindingRegistry(), {})


def test_none_factory_is_not_implemented():
    m = make_materializer(policy="null", constructors=ConstructorTable({"Item": None}))
    result = m.try_materialize(etree.fromstring("<Item/>"))
    assert result.status is MaterializeStatus.NOT_IMPLEMENTED
    with pytest.raises(ConstructionCapabilityError):
        m.materialize(etree.fromstring("<Item/>"))
