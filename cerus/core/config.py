"""Registry configuration: defaults, JSON loading and value coercion."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from cerus.core._internal.coercions import coerce_bool, coerce_positive_int

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CERUS_CONFIG"
CONFIG_SECTION = "registry"


@dataclass(frozen=True)
class RegistryConfig:
    """Tunables for registry validation and clear() behavior."""

    strict_dependencies: bool = True
    # None means len(registered names) + 1.
    max_clear_passes: int | None = None
    warn_legacy_init: bool = True


DEFAULT_CONFIG = RegistryConfig()


def config_from_mapping(raw: Mapping[str, object] | None) -> RegistryConfig:
    """Build a RegistryConfig from a loosely-typed mapping, ignoring unknown keys."""
    if not raw:
        return DEFAULT_CONFIG
    unknown = sorted(set(raw) - {"strict_dependencies", "max_clear_passes", "warn_legacy_init"})
    if unknown:
        logger.debug("Ignoring unknown registry config keys: %s", ", ".join(unknown))
    return RegistryConfig(
        strict_dependencies=coerce_bool(
            raw.get("strict_dependencies"), default=DEFAULT_CONFIG.strict_dependencies
        ),
        max_clear_passes=coerce_positive_int(
            raw.get("max_clear_passes"), default=DEFAULT_CONFIG.max_clear_passes
        ),
        warn_legacy_init=coerce_bool(
            raw.get("warn_legacy_init"), default=DEFAULT_CONFIG.warn_legacy_init
        ),
    )


def _resolve_config_path(path: str | Path | None) -> Path | None:
    if path is not None:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
    return Path(env_path) if env_path else None


def load_config(path: str | Path | None = None) -> RegistryConfig:
    """Load registry config from a JSON file.

    ``path`` defaults to ``$CERUS_CONFIG``. A missing file yields the defaults;
    malformed JSON or a non-object ``registry`` section raises ``ValueError``.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return DEFAULT_CONFIG
    try:
        text = config_path.read_text()
    except FileNotFoundError:
        logger.debug("Config file %s not found; using defaults", config_path)
        return DEFAULT_CONFIG

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"config file {config_path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"config file {config_path} must contain a JSON object")

    section = payload.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ValueError(
            f"config file {config_path}: '{CONFIG_SECTION}' must be an object"
        )
    return config_from_mapping(section)


__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_SECTION",
    "DEFAULT_CONFIG",
    "RegistryConfig",
    "config_from_mapping",
    "load_config",
]
