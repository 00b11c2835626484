"""Descriptor and capability types for the plugin registry."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Capability(Protocol):
    """Anything a plugin can graft onto the host namespace."""

    def __call__(self, *args: Any, **kwargs: Any) -> Any: ...


@dataclass(frozen=True)
class PluginDescriptor:
    """Registry record for one plugin.

    ``capabilities`` holds exactly the entries that were grafted onto the host
    namespace when the plugin was added; shadowed and non-callable entries are
    not kept.
    """

    name: str
    dependencies: tuple[str, ...] = ()
    capabilities: Mapping[str, Capability] = field(
        default_factory=lambda: MappingProxyType({})
    )
    version: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.capabilities, MappingProxyType):
            object.__setattr__(
                self, "capabilities", MappingProxyType(dict(self.capabilities))
            )

    def depends_on(self, name: str) -> bool:
        return name in self.dependencies

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "dependencies": list(self.dependencies),
            "capabilities": sorted(self.capabilities),
        }


__all__ = ["Capability", "PluginDescriptor"]
