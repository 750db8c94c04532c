"""
Money configuration schema.

MoneyConfig is the source artifact parsed from YAML (plus environment
overrides). It is translated into the kernel's MoneyPolicy by
money_config.bridges; the kernel never sees this type.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MoneyConfig:
    """Parsed money settings and where they came from."""

    precision: int = 2
    rounding_mode: str | int = "half_up"
    allow_negative: bool = False
    source: str = "<defaults>"
    checksum: str = ""
