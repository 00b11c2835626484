"""Plugin registry: validates bundles and grafts their capabilities onto a host namespace.

A ``Registry`` is an explicit value bound to one ``HostNamespace``. It is the
only writer of that namespace. Every public mutation validates completely
before touching anything, so a failing call leaves both the registry and the
namespace as they were.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from cerus.core.config import DEFAULT_CONFIG, RegistryConfig
from cerus.plugins.bundle import (
    PluginBundle,
    is_init_key,
    iter_callables,
    normalize_dependencies,
    normalize_version,
    require_bundle,
    require_name,
)
from cerus.plugins.errors import (
    DependentsExist,
    InitializationFailed,
    InvalidPluginArgument,
    MissingDependency,
    PluginConflict,
    PluginNotFound,
    ReentrantOperation,
    UnremovableResidue,
)
from cerus.plugins.namespace import HostNamespace
from cerus.plugins.policy import LEGACY_INIT_KEY
from cerus.plugins.types import Capability, PluginDescriptor

logger = logging.getLogger(__name__)


class Registry:
    """Name -> descriptor mapping for one host namespace."""

    def __init__(
        self,
        namespace: HostNamespace,
        *,
        config: RegistryConfig | None = None,
    ) -> None:
        self.namespace = namespace
        self.config = config or DEFAULT_CONFIG
        self._plugins: dict[str, PluginDescriptor] = {}
        self._active: str | None = None

    @contextmanager
    def _mutation(self, operation: str):
        if self._active is not None:
            raise ReentrantOperation(operation, self._active)
        self._active = operation
        try:
            yield
        finally:
            self._active = None

    # ── queries ─────────────────────────────────────────────

    def has(self, name: str) -> bool:
        return _require_str(name) in self._plugins

    def list(self) -> list[str]:
        return list(self._plugins)

    def get(self, name: str) -> PluginDescriptor:
        try:
            return self._plugins[_require_str(name)]
        except KeyError:
            raise PluginNotFound(name) from None

    def owner_of(self, key: str) -> PluginDescriptor | None:
        """Return the descriptor that retains namespace ``key``, if any."""
        for descriptor in self._plugins.values():
            if key in descriptor.capabilities:
                return descriptor
        return None

    def dependents_of(self, name: str) -> list[str]:
        return [
            other.name
            for other in self._plugins.values()
            if other.name != name and other.depends_on(name)
        ]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._plugins

    def __iter__(self) -> Iterator[PluginDescriptor]:
        return iter(list(self._plugins.values()))

    def __len__(self) -> int:
        return len(self._plugins)

    # ── add ─────────────────────────────────────────────────

    def add(self, bundle: PluginBundle | Mapping[str, Any]) -> PluginDescriptor:
        """Validate ``bundle``, graft its capabilities and register it."""
        with self._mutation(f"add {_bundle_label(bundle)}"):
            bundle = require_bundle(bundle)
            name = require_name(bundle.get("name"), label="plugin.name")
            if name in self._plugins:
                raise PluginConflict(name)
            dependencies = normalize_dependencies(
                bundle.get("dependencies"),
                name=name,
                strict=self.config.strict_dependencies,
            )
            version = normalize_version(bundle.get("version"), name=name)
            for dep in dependencies:
                if dep not in self._plugins:
                    raise MissingDependency(name, dep)

            hooks: list[tuple[str, Capability]] = []
            granted: dict[str, Capability] = {}
            for key, capability in iter_callables(bundle):
                if is_init_key(key):
                    hooks.append((key, capability))
                elif self.namespace.graft(key, capability):
                    granted[key] = capability
                    logger.debug("Plugin %s grafted '%s'", name, key)
                else:
                    logger.debug(
                        "Plugin %s: '%s' is already bound on the namespace; dropped",
                        name,
                        key,
                    )

            try:
                for key, hook in hooks:
                    self._run_hook(name, key, hook)
            except BaseException:
                for key in granted:
                    self.namespace.retract(key)
                raise

            descriptor = PluginDescriptor(
                name=name,
                dependencies=dependencies,
                capabilities=granted,
                version=version,
            )
            self._plugins[name] = descriptor
            logger.debug(
                "Registered plugin %s (%d capabilities, depends on: %s)",
                name,
                len(granted),
                ", ".join(dependencies) or "-",
            )
            return descriptor

    def _run_hook(self, name: str, key: str, hook: Capability) -> None:
        if key == LEGACY_INIT_KEY and self.config.warn_legacy_init:
            warnings.warn(
                f"plugin '{name}' uses the '{LEGACY_INIT_KEY}' initialization key; "
                "rename it to '_init'",
                DeprecationWarning,
                stacklevel=3,
            )
        logger.debug("Running %s hook of plugin %s", key, name)
        try:
            hook(self.namespace.view())
        except ReentrantOperation:
            raise
        except Exception as exc:
            raise InitializationFailed(name, key) from exc

    # ── remove ──────────────────────────────────────────────

    def remove(self, name: str) -> None:
        """Retract ``name``'s capabilities and unregister it."""
        with self._mutation(f"remove {name!r}"):
            descriptor = self._removable(name)
            self._retract(descriptor)

    def _removable(self, name: str) -> PluginDescriptor:
        name = _require_str(name)
        descriptor = self._plugins.get(name)
        if descriptor is None:
            raise PluginNotFound(name)
        dependents = self.dependents_of(name)
        if dependents:
            raise DependentsExist(name, dependents)
        return descriptor

    def _retract(self, descriptor: PluginDescriptor) -> None:
        for key in descriptor.capabilities:
            self.namespace.retract(key)
        del self._plugins[descriptor.name]
        logger.debug("Removed plugin %s", descriptor.name)

    # ── clear ───────────────────────────────────────────────

    def clear(self) -> None:
        """Remove every plugin, dependents before their dependencies.

        The removal order is planned up front; if some plugins can never be
        removed, ``UnremovableResidue`` is raised and nothing is removed.
        """
        with self._mutation("clear"):
            order = self._clear_order()
            for name in order:
                self._retract(self._plugins[name])

    def _clear_order(self) -> list[str]:
        remaining = list(self._plugins)
        max_passes = self.config.max_clear_passes or len(remaining) + 1
        order: list[str] = []
        passes = 0
        while remaining:
            if passes >= max_passes:
                raise UnremovableResidue(remaining, passes=passes)
            passes += 1
            residue: list[str] = []
            for name in remaining:
                blocked = any(
                    other != name and self._plugins[other].depends_on(name)
                    for other in remaining
                    if other not in order
                )
                if blocked:
                    residue.append(name)
                else:
                    order.append(name)
            logger.debug(
                "clear pass %d: %d removable, %d left",
                passes,
                len(remaining) - len(residue),
                len(residue),
            )
            if len(residue) == len(remaining):
                raise UnremovableResidue(residue, passes=passes)
            remaining = residue
        return order


def _require_str(name: object) -> str:
    if not isinstance(name, str):
        raise InvalidPluginArgument(
            f"the argument name must be a string, got {type(name).__name__}"
        )
    return name


def _bundle_label(bundle: object) -> str:
    if isinstance(bundle, Mapping) and isinstance(bundle.get("name"), str):
        return repr(bundle["name"])
    return "<plugin>"


__all__ = ["Registry"]
