"""Host namespace: the shared key -> capability mapping plugins graft onto."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from cerus.plugins.types import Capability


@dataclass
class HostNamespace(Mapping[str, Capability]):
    """Read-only mapping for consumers; ``graft``/``retract`` belong to the registry.

    A key is never overwritten: ``graft`` on an occupied key is refused.
    Initialization hooks receive ``view()``, which has no write methods.
    """

    _bindings: dict[str, Capability] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Capability:
        return self._bindings[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return self._bindings == dict(other)
        return False

    def graft(self, key: str, capability: Capability) -> bool:
        """Bind ``key`` if it is free. Returns False when the key is occupied."""
        if key in self._bindings:
            return False
        self._bindings[key] = capability
        return True

    def retract(self, key: str) -> None:
        """Unbind ``key``; unknown keys are ignored."""
        self._bindings.pop(key, None)

    def view(self) -> Mapping[str, Capability]:
        """Live read-only view of the bindings."""
        return MappingProxyType(self._bindings)

    def to_dict(self) -> dict[str, Capability]:
        return dict(self._bindings)


__all__ = ["HostNamespace"]
