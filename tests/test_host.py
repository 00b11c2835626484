"""Tests for cerus.host: the bootstrap object plugins are added to."""

from __future__ import annotations

import pytest

from cerus import Cerus, create_host
from cerus.core.config import RegistryConfig
from cerus.plugins.errors import MissingDependency, PluginConflict
from cerus.plugins.registry import Registry


def _fresh() -> Cerus:
    return create_host()


class TestHostBootstrap:

    def test_plugins_returns_registry(self):
        host = _fresh()
        assert isinstance(host.plugins(), Registry)
        assert host.plugins() is host.plugins()

    def test_builtins_bound_on_namespace(self):
        host = _fresh()
        assert set(host.namespace) == {"plugins", "use"}
        assert host.plugins().list() == []

    def test_hosts_do_not_share_state(self):
        first, second = _fresh(), _fresh()
        first.use({"name": "only-here", "extra": lambda: 1})
        assert second.plugins().list() == []
        assert "extra" not in second.namespace

    def test_config_reaches_registry(self):
        host = Cerus(config=RegistryConfig(max_clear_passes=2))
        assert host.plugins().config.max_clear_passes == 2


class TestUse:

    def test_use_works_like_add(self):
        host = _fresh()
        host.use({"name": "plugin"})
        assert host.plugins().list() == ["plugin"]

    def test_use_propagates_errors(self):
        host = _fresh()
        host.use({"name": "dup"})
        with pytest.raises(PluginConflict):
            host.use({"name": "dup"})
        with pytest.raises(MissingDependency):
            host.use({"name": "x", "dependencies": ["nope"]})

    def test_capabilities_reachable_as_attributes(self):
        host = _fresh()
        host.use({"name": "entry", "extra": lambda: "should be added"})
        assert host.extra() == "should be added"

    def test_unknown_attribute_raises(self):
        host = _fresh()
        with pytest.raises(AttributeError, match="no capability 'extra'"):
            host.extra  # noqa: B018

    def test_plugins_cannot_shadow_builtins(self):
        host = _fresh()
        descriptor = host.use({"name": "sneaky", "use": lambda b: None, "plugins": list})
        assert dict(descriptor.capabilities) == {}
        assert host.namespace["use"] == host.use

    def test_init_hook_can_call_earlier_capabilities(self):
        host = _fresh()
        seen = []
        host.use({"name": "greeter", "greet": lambda who: f"hi {who}"})
        host.use(
            {
                "name": "caller",
                "dependencies": ["greeter"],
                "_init": lambda ns: seen.append(ns["greet"]("init")),
            }
        )
        assert seen == ["hi init"]

    def test_remove_drops_attribute(self):
        host = _fresh()
        host.use({"name": "entry", "extra": lambda: 1})
        host.plugins().remove("entry")
        assert not hasattr(host, "extra")

    def test_clear_keeps_builtins(self):
        host = _fresh()
        host.use({"name": "core", "base": lambda: 0})
        host.use({"name": "p", "dependencies": ["core"], "top": lambda: 1})

        host.plugins().clear()

        assert host.plugins().list() == []
        assert set(host.namespace) == {"plugins", "use"}

    def test_dir_lists_capabilities(self):
        host = _fresh()
        host.use({"name": "entry", "extra": lambda: 1})
        assert "extra" in dir(host)
