"""Tests for Registry.clear fixed-point elimination."""

from __future__ import annotations

import logging

import pytest

from cerus.core.config import RegistryConfig
from cerus.plugins.errors import UnremovableResidue
from cerus.plugins.registry import Registry
from cerus.plugins.types import PluginDescriptor


def test_clear_empty_registry_is_noop(registry):
    registry.clear()
    registry.clear()
    assert registry.list() == []


def test_clear_removes_everything_and_retracts(registry, namespace):
    registry.add({"name": "a", "fa": lambda: "a"})
    registry.add({"name": "b", "fb": lambda: "b"})

    registry.clear()

    assert registry.list() == []
    assert len(namespace) == 0


def test_clear_handles_dependency_chains(registry, namespace):
    registry.add({"name": "core", "base": lambda: 0})
    registry.add({"name": "mid", "dependencies": ["core"]})
    registry.add({"name": "top", "dependencies": ["mid", "core"]})
    registry.add({"name": "side", "dependencies": ["core"]})

    registry.clear()

    assert registry.list() == []
    assert "base" not in namespace


def test_clear_twice_equals_once(registry):
    registry.add({"name": "core"})
    registry.add({"name": "p", "dependencies": ["core"]})

    registry.clear()
    registry.clear()

    assert registry.list() == []


def test_clear_logs_passes(registry, caplog):
    registry.add({"name": "core"})
    registry.add({"name": "p", "dependencies": ["core"]})

    with caplog.at_level(logging.DEBUG, logger="cerus.plugins.registry"):
        registry.clear()

    assert "clear pass 1: 1 removable, 1 left" in caplog.text
    assert "clear pass 2: 1 removable, 0 left" in caplog.text


def test_pass_bound_raises_residue_without_mutation(namespace):
    registry = Registry(namespace, config=RegistryConfig(max_clear_passes=1))
    registry.add({"name": "core", "base": lambda: 0})
    registry.add({"name": "p", "dependencies": ["core"]})

    with pytest.raises(UnremovableResidue) as excinfo:
        registry.clear()

    assert excinfo.value.residue == ("core",)
    assert excinfo.value.passes == 1
    assert registry.list() == ["core", "p"]
    assert "base" in namespace


def test_cycle_raises_residue(registry):
    # add() can never build a cycle, so plant one directly.
    registry._plugins["a"] = PluginDescriptor(name="a", dependencies=("b",))
    registry._plugins["b"] = PluginDescriptor(name="b", dependencies=("a",))
    registry._plugins["free"] = PluginDescriptor(name="free")

    with pytest.raises(UnremovableResidue) as excinfo:
        registry.clear()

    assert set(excinfo.value.residue) == {"a", "b"}
    assert registry.list() == ["a", "b", "free"]
