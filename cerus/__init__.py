"""cerus: a runtime registry that lets plugins graft capabilities onto a shared host."""

from __future__ import annotations

from cerus.host import Cerus, create_host

__version__ = "0.3.0"

__all__ = ["Cerus", "__version__", "create_host"]
