"""Capability bundle contract and input validation."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any, TypedDict

from cerus.plugins.errors import InvalidPluginArgument
from cerus.plugins.policy import INIT_KEYS, RESERVED_KEYS


class PluginBundle(TypedDict, total=False):
    """Documented shape of the mapping passed to ``Registry.add``.

    Any further key whose value is callable is a capability.
    """

    name: str
    version: str
    dependencies: list[str]
    _init: Callable[[Any], None]
    init_: Callable[[Any], None]


def require_bundle(bundle: object) -> Mapping[str, Any]:
    if not isinstance(bundle, Mapping):
        raise InvalidPluginArgument(
            f"the plugin bundle must be a mapping, got {type(bundle).__name__}"
        )
    return bundle


def require_name(value: object, *, label: str = "name") -> str:
    if not isinstance(value, str):
        raise InvalidPluginArgument(
            f"the argument {label} must be a string, got {type(value).__name__}"
        )
    if not value:
        raise InvalidPluginArgument(f"the argument {label} must be a non-empty string")
    return value


def normalize_dependencies(
    raw: object,
    *,
    name: str,
    strict: bool,
) -> tuple[str, ...]:
    """Validate the dependency list of ``name``.

    Only lists and tuples count as dependency lists; anything else (including a
    bare string) is treated as no dependencies. With ``strict`` set,
    self-references and repeated entries are rejected.
    """
    if not isinstance(raw, list | tuple):
        return ()
    seen: set[str] = set()
    for idx, dep in enumerate(raw):
        if not isinstance(dep, str):
            raise InvalidPluginArgument(
                f"dependencies[{idx}] of plugin '{name}' must be a string, "
                f"got {type(dep).__name__}"
            )
        if strict and dep == name:
            raise InvalidPluginArgument(f"plugin '{name}' cannot depend on itself")
        if strict and dep in seen:
            raise InvalidPluginArgument(
                f"plugin '{name}' lists dependency '{dep}' more than once"
            )
        seen.add(dep)
    return tuple(raw)


def normalize_version(raw: object, *, name: str) -> str | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise InvalidPluginArgument(
            f"the version of plugin '{name}' must be a string, got {type(raw).__name__}"
        )
    return raw


def iter_callables(bundle: Mapping[str, Any]) -> Iterator[tuple[str, Any]]:
    """Yield callable non-metadata entries in bundle order."""
    for key, value in bundle.items():
        if not isinstance(key, str) or key in RESERVED_KEYS or not callable(value):
            continue
        yield key, value


def is_init_key(key: str) -> bool:
    return key in INIT_KEYS


__all__ = [
    "PluginBundle",
    "is_init_key",
    "iter_callables",
    "normalize_dependencies",
    "normalize_version",
    "require_bundle",
    "require_name",
]
