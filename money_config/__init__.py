"""
money_config -- single public entrypoint for money configuration.

Responsibility:
    Provides the ONLY way to obtain the money policy at runtime through
    ``get_active_policy()``.  Reads the YAML file (the shipped defaults
    unless a path is given), overlays MONEY_* environment variables and
    returns a kernel ``MoneyPolicy``.

Architecture position:
    Configuration -- sits above ``money_kernel``.  The kernel MUST NEVER
    import from ``money_config``; ``bridges`` translates the parsed config
    into the kernel's ``MoneyPolicy``.

Failure modes:
    - ``FileNotFoundError`` -- the configuration file does not exist.
    - ``yaml.YAMLError`` -- malformed YAML.
    - ``ConfigurationError`` -- unknown keys, bad types, invalid precision
      or rounding mode.
    - ``FileExistsError`` -- ``publish_config`` target exists and
      ``overwrite`` is False.

Audit relevance:
    Every successful ``get_active_policy()`` call emits a
    ``MONEY_CONFIG_TRACE`` log entry with the source, checksum, precision,
    rounding mode and negative-amount policy in effect.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Mapping
from pathlib import Path

from money_config.bridges import build_money_policy
from money_config.loader import ConfigurationError, load_money_config
from money_config.schema import MoneyConfig
from money_kernel.domain.policy import MoneyPolicy
from money_kernel.logging_config import LogContext, get_logger

_logger = get_logger("config")

# Shipped defaults
DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults" / "money.yaml"


def get_active_policy(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> MoneyPolicy:
    """The ONLY public configuration entrypoint.

    Args:
        config_path: YAML file to read (default: shipped defaults).
        environ: Environment mapping for MONEY_* overrides (default:
            ``os.environ``).

    Returns:
        The MoneyPolicy to pass to ``Money`` factories.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    env = os.environ if environ is None else environ

    with LogContext.bind(config_source=str(path)):
        config = load_money_config(path, env)
        policy = build_money_policy(config)

        with LogContext.bind(config_checksum=config.checksum):
            _logger.info(
                "MONEY_CONFIG_TRACE",
                extra={
                    "trace_type": "MONEY_CONFIG_TRACE",
                    "precision": policy.precision,
                    "rounding_mode": policy.rounding_mode.value,
                    "allow_negative": policy.allow_negative,
                },
            )

    return policy


def publish_config(target_path: Path, overwrite: bool = False) -> Path:
    """Copy the shipped default YAML to ``target_path`` for local editing.

    Creates missing parent directories.  Refuses to replace an existing
    file unless ``overwrite`` is True.
    """
    target = Path(target_path)
    if target.exists() and not overwrite:
        raise FileExistsError(f"Refusing to overwrite existing config: {target}")
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(DEFAULT_CONFIG_PATH, target)
    _logger.info("money_config_published", extra={"target": str(target)})
    return target


__all__ = [
    "ConfigurationError",
    "DEFAULT_CONFIG_PATH",
    "MoneyConfig",
    "get_active_policy",
    "publish_config",
]
