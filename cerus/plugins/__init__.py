"""Plugin registry internals.

This package contains everything the host needs to manage plugins:
- the capability bundle contract and its validation
- the host namespace plugins graft onto
- the registry itself
- module discovery
"""

from __future__ import annotations

from .errors import (
    DependentsExist,
    InitializationFailed,
    InvalidPluginArgument,
    MissingDependency,
    PluginConflict,
    PluginDiscoveryError,
    PluginError,
    PluginNotFound,
    ReentrantOperation,
    UnremovableResidue,
)
from .namespace import HostNamespace
from .registry import Registry
from .types import Capability, PluginDescriptor

__all__ = [
    "Capability",
    "DependentsExist",
    "HostNamespace",
    "InitializationFailed",
    "InvalidPluginArgument",
    "MissingDependency",
    "PluginConflict",
    "PluginDescriptor",
    "PluginDiscoveryError",
    "PluginError",
    "PluginNotFound",
    "ReentrantOperation",
    "Registry",
    "UnremovableResidue",
]
