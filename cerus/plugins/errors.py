"""Exception types raised by the plugin registry."""

from __future__ import annotations

from collections.abc import Iterable


class PluginError(Exception):
    """Base class for every registry failure."""


class InvalidPluginArgument(PluginError, TypeError):
    """Raised when a bundle, name or dependency list is malformed."""


class PluginConflict(PluginError, ValueError):
    """Raised when a plugin name is already registered."""

    def __init__(self, name: str):
        super().__init__(f"a plugin named '{name}' is already registered")
        self.name = name


class MissingDependency(PluginError, LookupError):
    """Raised when a declared dependency has not been registered yet."""

    def __init__(self, name: str, dependency: str):
        super().__init__(
            f"plugin '{name}' depends on '{dependency}', which has not been loaded yet"
        )
        self.name = name
        self.dependency = dependency


class PluginNotFound(PluginError, LookupError):
    """Raised when a name does not identify a registered plugin."""

    def __init__(self, name: str):
        super().__init__(f"no plugin named '{name}' is registered")
        self.name = name


class DependentsExist(PluginError, ValueError):
    """Raised when removal is blocked by plugins that depend on the target."""

    def __init__(self, name: str, dependents: Iterable[str]):
        self.name = name
        self.dependents = tuple(dependents)
        super().__init__(
            f"cannot remove '{name}': required by {', '.join(self.dependents)}"
        )


class ReentrantOperation(PluginError, RuntimeError):
    """Raised when a mutation starts while another one is still in flight."""

    def __init__(self, operation: str, active: str):
        super().__init__(
            f"cannot {operation} while '{active}' is still in progress "
            "(called from an initialization hook?)"
        )
        self.operation = operation
        self.active = active


class UnremovableResidue(PluginError, RuntimeError):
    """Raised when clear() cannot eliminate the remaining plugins."""

    def __init__(self, residue: Iterable[str], *, passes: int):
        self.residue = tuple(residue)
        self.passes = passes
        super().__init__(
            f"clear() stopped after {passes} pass(es); "
            f"could not remove: {', '.join(self.residue)}"
        )


class InitializationFailed(PluginError, RuntimeError):
    """Raised when a plugin's initialization hook raises; the add is rolled back."""

    def __init__(self, name: str, hook: str):
        super().__init__(f"initialization hook '{hook}' of plugin '{name}' failed")
        self.name = name
        self.hook = hook


class PluginDiscoveryError(PluginError, ImportError):
    """Raised when a module does not export a usable plugin bundle."""


__all__ = [
    "DependentsExist",
    "InitializationFailed",
    "InvalidPluginArgument",
    "MissingDependency",
    "PluginConflict",
    "PluginDiscoveryError",
    "PluginError",
    "PluginNotFound",
    "ReentrantOperation",
    "UnremovableResidue",
]
