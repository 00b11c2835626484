"""The host object: a namespace plus the registry that manages it."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from cerus.core.config import RegistryConfig
from cerus.plugins.namespace import HostNamespace
from cerus.plugins.policy import HOST_BUILTINS
from cerus.plugins.registry import Registry
from cerus.plugins.types import Capability, PluginDescriptor


class Cerus:
    """Core object plugins are added to.

    ``plugins`` and ``use`` are bound on the namespace before any plugin is
    added, so no plugin can shadow them. Every other attribute read falls back
    to the namespace, which makes ``host.some_capability(...)`` work once a
    plugin has grafted ``some_capability``.
    """

    def __init__(self, config: RegistryConfig | None = None) -> None:
        self.namespace = HostNamespace()
        self._registry = Registry(self.namespace, config=config)
        for key in HOST_BUILTINS:
            self.namespace.graft(key, getattr(self, key))

    def plugins(self) -> Registry:
        """Return the registry managing this host's plugins."""
        return self._registry

    def use(self, bundle: Mapping[str, Any]) -> PluginDescriptor:
        """Shortcut for ``plugins().add(bundle)``."""
        return self._registry.add(bundle)

    def __getattr__(self, key: str) -> Capability:
        # Only reached when normal lookup fails.
        if key.startswith("__"):
            raise AttributeError(key)
        try:
            return self.__dict__["namespace"][key]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__!r} has no capability {key!r}"
            ) from None

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self.namespace))


def create_host(config: RegistryConfig | None = None) -> Cerus:
    return Cerus(config=config)


__all__ = ["Cerus", "create_host"]
