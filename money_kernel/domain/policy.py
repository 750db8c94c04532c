"""Money policy -- precision, default rounding mode and negative-amount rule."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from money_kernel.domain import bignumber
from money_kernel.domain.rounding import RoundingMode
from money_kernel.exceptions import InvalidPrecisionError

DEFAULT_PRECISION = 2
DEFAULT_ROUNDING_MODE = RoundingMode.HALF_UP
DEFAULT_ALLOW_NEGATIVE = False


@dataclass(frozen=True, slots=True)
class MoneyPolicy:
    """
    Settings carried alongside every Money value.

    Contract:
        Replaces any ambient configuration lookup. Built by the caller (or by
        money_config.build_money_policy) and passed to the Money factories.

    Guarantees:
        - precision is a non-negative int
        - rounding_mode is always a RoundingMode member
        - allow_negative is always a bool
    """

    precision: int = DEFAULT_PRECISION
    rounding_mode: RoundingMode = DEFAULT_ROUNDING_MODE
    allow_negative: bool = DEFAULT_ALLOW_NEGATIVE

    def __post_init__(self) -> None:
        if (
            isinstance(self.precision, bool)
            or not isinstance(self.precision, int)
            or self.precision < 0
        ):
            raise InvalidPrecisionError(self.precision)
        object.__setattr__(self, "rounding_mode", RoundingMode.parse(self.rounding_mode))
        if not isinstance(self.allow_negative, bool):
            raise TypeError(f"allow_negative must be bool, got {type(self.allow_negative)}")

    @property
    def scale_factor(self) -> int:
        """10 ** precision."""
        return bignumber.power(10, self.precision).coefficient

    def with_precision(self, precision: int) -> MoneyPolicy:
        return replace(self, precision=precision)

    def resolve_rounding(self, override: Any = None) -> RoundingMode:
        """Explicit override if given, else this policy's default mode."""
        if override is None:
            return self.rounding_mode
        return RoundingMode.parse(override)


DEFAULT_POLICY = MoneyPolicy()
