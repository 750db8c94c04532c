"""
Configuration Loader (``money_config.loader``).

Responsibility
--------------
Loads a money YAML file, applies environment overrides and parses the
result into a ``MoneyConfig``.  The single public entry point for runtime
configuration is ``money_config.get_active_policy()``.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  It has no dependency on the
kernel except through ``money_config.bridges``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown keys or badly typed values  -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from money_config.schema import MoneyConfig
from money_kernel.logging_config import get_logger

_logger = get_logger("config")

SECTION = "money"
KNOWN_KEYS: frozenset[str] = frozenset({"precision", "rounding_mode", "allow_negative"})

# Environment variable -> config key
ENV_OVERRIDES: dict[str, str] = {
    "MONEY_PRECISION": "precision",
    "MONEY_ROUNDING_MODE": "rounding_mode",
    "MONEY_ALLOW_NEGATIVE": "allow_negative",
}

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


class ConfigurationError(ValueError):
    """Money configuration is structurally invalid.

    Attributes:
        source: File (or other origin) the bad value came from.
        key: Offending key, when one can be named.
    """

    code: str = "CONFIG_INVALID"

    def __init__(self, message: str, source: str = "<unknown>", key: str | None = None):
        self.source = source
        self.key = key
        super().__init__(f"{message} (source: {source})")


def load_yaml_file(path: Path) -> Any:
    """
    Load a single YAML file and return its contents (an empty file is {}).

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        data = yaml.safe_load(f)
    return {} if data is None else data


def compute_checksum(data: Mapping[str, Any]) -> str:
    """SHA-256 over the canonical JSON form of the settings."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def _parse_bool(value: Any, source: str, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _TRUE_WORDS:
        return True
    if isinstance(value, str) and value.strip().lower() in _FALSE_WORDS:
        return False
    raise ConfigurationError(f"'{key}' must be a boolean, got {value!r}", source, key)


def _parse_precision(value: Any, source: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"'precision' must be an integer, got {value!r}", source, "precision")
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    if isinstance(value, int):
        return value
    raise ConfigurationError(f"'precision' must be an integer, got {value!r}", source, "precision")


def _parse_rounding_mode(value: Any, source: str) -> str | int:
    # Legacy integer codes stay ints ("3" from the environment included)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        return value
    raise ConfigurationError(
        f"'rounding_mode' must be a name or code, got {value!r}", source, "rounding_mode"
    )


def extract_section(data: Mapping[str, Any], source: str) -> dict[str, Any]:
    """Return the ``money:`` section (or the whole mapping if it is flat)."""
    if not isinstance(data, Mapping):
        raise ConfigurationError("money configuration must be a mapping", source)
    section = data.get(SECTION, data)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"'{SECTION}' must be a mapping", source, SECTION)
    unknown = sorted(set(section) - KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown money settings: {unknown}", source, unknown[0])
    return dict(section)


def apply_env_overrides(
    settings: Mapping[str, Any],
    environ: Mapping[str, str],
) -> dict[str, Any]:
    """
    Overlay MONEY_* environment variables onto parsed settings.

    Postconditions:
        - Returns a new dict; ``settings`` is not modified.
        - Empty environment values are ignored.
    """
    merged = dict(settings)
    for env_name, key in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None or value.strip() == "":
            continue
        _logger.info(
            "money_config_env_override",
            extra={"env_var": env_name, "setting": key},
        )
        merged[key] = value
    return merged


def parse_money_config(settings: Mapping[str, Any], source: str = "<inline>") -> MoneyConfig:
    """
    Parse a flat settings mapping into a ``MoneyConfig``.

    Missing keys fall back to the schema defaults.

    Raises:
        ConfigurationError: on unknown keys or badly typed values.
    """
    unknown = sorted(set(settings) - KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown money settings: {unknown}", source, unknown[0])

    defaults = MoneyConfig()
    precision = _parse_precision(settings.get("precision", defaults.precision), source)
    rounding_mode = _parse_rounding_mode(
        settings.get("rounding_mode", defaults.rounding_mode), source
    )
    allow_negative = _parse_bool(
        settings.get("allow_negative", defaults.allow_negative), source, "allow_negative"
    )

    resolved = {
        "precision": precision,
        "rounding_mode": rounding_mode,
        "allow_negative": allow_negative,
    }
    return MoneyConfig(
        precision=precision,
        rounding_mode=rounding_mode,
        allow_negative=allow_negative,
        source=source,
        checksum=compute_checksum(resolved),
    )


def load_money_config(
    path: Path,
    environ: Mapping[str, str] | None = None,
) -> MoneyConfig:
    """Load ``path``, overlay ``environ`` (if given) and parse."""
    source = str(path)
    settings = extract_section(load_yaml_file(path), source)
    if environ is not None:
        settings = apply_env_overrides(settings, environ)
    return parse_money_config(settings, source)
