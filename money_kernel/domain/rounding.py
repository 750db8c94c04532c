"""
Rounding -- rounding modes and digit-exact rounding of numerals.

Every mode is decided from the decimal digits being dropped, compared as
integers against exactly one half of the dropped unit. Nothing here converts
to a binary floating type, so HALF_EVEN and HALF_ODD ties are detected
exactly.
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Any

from money_kernel.domain.numeral import Numeral
from money_kernel.exceptions import InvalidPrecisionError, InvalidRoundingModeError


@unique
class RoundingMode(str, Enum):
    """Closed set of supported rounding modes."""

    HALF_UP = "half_up"
    """Ties away from zero."""

    HALF_DOWN = "half_down"
    """Ties toward zero."""

    HALF_EVEN = "half_even"
    """Ties to the even neighbour (banker's rounding)."""

    HALF_ODD = "half_odd"
    """Ties to the odd neighbour."""

    UP = "up"
    """Away from zero whenever any dropped digit is nonzero."""

    DOWN = "down"
    """Toward zero (truncate)."""

    @classmethod
    def parse(cls, value: Any) -> RoundingMode:
        """
        Resolve a rounding mode from a member, a name/value or a legacy code.

        Accepts "HALF_EVEN", "half_even", "half-even" and the integer codes
        used by older configuration files (1-4 for the half modes, 10 for UP,
        11 for DOWN).

        Raises:
            InvalidRoundingModeError: If value names no mode.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return _LEGACY_CODES[value]
            except KeyError:
                raise InvalidRoundingModeError(value) from None
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_")
            try:
                return cls(key)
            except ValueError:
                raise InvalidRoundingModeError(value) from None
        raise InvalidRoundingModeError(value)


_LEGACY_CODES: dict[int, RoundingMode] = {
    1: RoundingMode.HALF_UP,
    2: RoundingMode.HALF_DOWN,
    3: RoundingMode.HALF_EVEN,
    4: RoundingMode.HALF_ODD,
    10: RoundingMode.UP,
    11: RoundingMode.DOWN,
}


def round_numeral(value: Numeral, precision: int, mode: RoundingMode) -> Numeral:
    """
    Round `value` to exactly `precision` fractional digits.

    Works on the magnitude and re-applies the sign afterwards, so -0.005
    rounds to -0.01 under HALF_UP. A result of zero carries no sign.

    Raises:
        InvalidPrecisionError: If precision is negative or not an int.
    """
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        raise InvalidPrecisionError(precision)

    if value.scale <= precision:
        return value.with_scale(precision)

    unit = 10 ** (value.scale - precision)
    kept, dropped = divmod(abs(value.coefficient), unit)
    if _rounds_away(mode, kept, dropped, unit):
        kept += 1
    return Numeral(-kept if value.coefficient < 0 else kept, precision)


def _rounds_away(mode: RoundingMode, kept: int, dropped: int, unit: int) -> bool:
    """Decide whether the kept magnitude gains one unit."""
    if dropped == 0 or mode is RoundingMode.DOWN:
        return False
    if mode is RoundingMode.UP:
        return True

    twice = dropped * 2
    if twice != unit:
        return twice > unit

    # Exact tie
    if mode is RoundingMode.HALF_UP:
        return True
    if mode is RoundingMode.HALF_DOWN:
        return False
    if mode is RoundingMode.HALF_EVEN:
        return kept % 2 == 1
    if mode is RoundingMode.HALF_ODD:
        return kept % 2 == 0
    raise InvalidRoundingModeError(mode)
