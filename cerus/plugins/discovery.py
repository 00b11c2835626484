"""Plugin module discovery and import error surfacing."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable, Mapping
from types import ModuleType
from typing import Any

from cerus.plugins.errors import PluginDiscoveryError
from cerus.plugins.registry import Registry
from cerus.plugins.types import PluginDescriptor

logger = logging.getLogger(__name__)

BUNDLE_ATTR = "PLUGIN"
FACTORY_ATTR = "plugin"

_IMPORT_FAILURES = (
    ImportError,
    SyntaxError,
    ValueError,
    TypeError,
    RuntimeError,
    OSError,
)


def bundle_from_module(module: ModuleType) -> Mapping[str, Any]:
    """Return the bundle a module exports as ``PLUGIN`` or via ``plugin()``."""
    bundle = getattr(module, BUNDLE_ATTR, None)
    if bundle is None:
        factory = getattr(module, FACTORY_ATTR, None)
        if not callable(factory):
            raise PluginDiscoveryError(
                f"{module.__name__} defines neither {BUNDLE_ATTR} nor {FACTORY_ATTR}()"
            )
        bundle = factory()
    if not isinstance(bundle, Mapping):
        raise PluginDiscoveryError(
            f"{module.__name__} exported a {type(bundle).__name__}, expected a mapping"
        )
    return bundle


def raise_load_errors(failures: Mapping[str, BaseException]) -> None:
    if not failures:
        return
    lines = ["Plugin import failures:"]
    for module_name, ex in sorted(failures.items()):
        lines.append(f"  - {module_name}: {type(ex).__name__}: {ex}")
    raise ImportError("\n".join(lines))


def load_bundles(module_names: Iterable[str]) -> list[Mapping[str, Any]]:
    """Import every module and collect its bundle, reporting all failures at once."""
    bundles: list[Mapping[str, Any]] = []
    failures: dict[str, BaseException] = {}
    for module_name in module_names:
        try:
            module = importlib.import_module(module_name)
            bundles.append(bundle_from_module(module))
        except _IMPORT_FAILURES as ex:
            logger.debug("Plugin import failed for %s: %s", module_name, ex)
            failures[module_name] = ex
    raise_load_errors(failures)
    return bundles


def register_modules(
    registry: Registry, module_names: Iterable[str]
) -> list[PluginDescriptor]:
    """Load bundles from ``module_names`` and add them in the given order."""
    return [registry.add(bundle) for bundle in load_bundles(module_names)]


__all__ = [
    "BUNDLE_ATTR",
    "FACTORY_ATTR",
    "bundle_from_module",
    "load_bundles",
    "raise_load_errors",
    "register_modules",
]
