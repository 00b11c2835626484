"""Shared pytest fixtures for the cerus test suite."""

from __future__ import annotations

import pytest

from cerus.host import Cerus
from cerus.plugins.namespace import HostNamespace
from cerus.plugins.registry import Registry


@pytest.fixture()
def namespace() -> HostNamespace:
    return HostNamespace()


@pytest.fixture()
def registry(namespace: HostNamespace) -> Registry:
    """A registry with default config bound to the ``namespace`` fixture."""
    return Registry(namespace)


@pytest.fixture()
def host() -> Cerus:
    return Cerus()
