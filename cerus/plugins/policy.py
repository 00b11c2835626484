"""Well-known bundle keys."""

from __future__ import annotations

INIT_KEY = "_init"
LEGACY_INIT_KEY = "init_"
INIT_KEYS: tuple[str, ...] = (INIT_KEY, LEGACY_INIT_KEY)

# Metadata keys; never grafted even if a callable is stored under them.
RESERVED_KEYS: frozenset[str] = frozenset({"name", "version", "dependencies"})

# Namespace keys the host occupies before any plugin is added.
HOST_BUILTINS: tuple[str, ...] = ("plugins", "use")
