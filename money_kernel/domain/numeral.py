"""
Numeral -- validated decimal numeral value type.

Responsibility:
    The single place where raw numeric input (str, int, float, Decimal) is
    parsed and validated. A Numeral is an exact scaled integer:
    value = coefficient / 10**scale.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O. Imported by
    domain.rounding, domain.bignumber and domain.values.

Invariants enforced:
    NO_FLOAT -- float input is parsed from its shortest round-trip text,
                never from its binary value.
    scale is always >= 0; coefficient is always a Python int.

Failure modes:
    - InvalidNumericInputError for anything that is not a finite decimal
      numeral (including bool, NaN, infinities and empty strings).
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import NewType, TypeAlias

from money_kernel.exceptions import InvalidNumericInputError

# Scaled integer amount (cents for a 2-decimal currency). Kept distinct from
# Numeral so human and minor amounts are not confused.
MinorUnits = NewType("MinorUnits", int)

# Largest decimal shift an exponent may request ("1e1000" is fine,
# "1e999999999" is rejected before any power of ten is built).
MAX_EXPONENT = 1000

# Longest digit string accepted in text form (below the interpreter's
# int/str conversion limit).
MAX_DIGITS = 4000

_NUMERAL_PATTERN = re.compile(
    r"""
    (?P<sign>[-+])?
    (?:
        (?P<int>[0-9]+)(?:\.(?P<frac>[0-9]*))?
        |
        \.(?P<frac_only>[0-9]+)
    )
    (?:[eE](?P<exp>[-+]?[0-9]+))?
    """,
    re.VERBOSE,
)


@dataclass(frozen=True, slots=True)
class Numeral:
    """
    Exact decimal number as (coefficient, scale).

    Contract:
        Represents coefficient / 10**scale. Two numerals with the same value
        but different scales ("1.0" and "1.00") are different representations;
        use bignumber.compare() for numeric comparison.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - str() renders fixed-point text with exactly `scale` fractional digits
        - zero never renders a sign
    """

    coefficient: int
    scale: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.coefficient, bool) or not isinstance(self.coefficient, int):
            raise TypeError(f"coefficient must be int, got {type(self.coefficient)}")
        if isinstance(self.scale, bool) or not isinstance(self.scale, int) or self.scale < 0:
            raise ValueError(f"scale must be a non-negative int, got {self.scale!r}")

    @classmethod
    def parse(cls, value: NumeralLike) -> Numeral:
        """
        Parse and validate a numeral.

        Preconditions:
            - value is a Numeral, int, finite float, finite Decimal or str.

        Postconditions:
            - Returns an exact Numeral. No digits are dropped.

        Raises:
            InvalidNumericInputError: If value is not a valid decimal numeral.
        """
        if isinstance(value, Numeral):
            return value
        if isinstance(value, bool):
            raise InvalidNumericInputError(value, "booleans are not amounts")
        if isinstance(value, int):
            return cls(value, 0)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise InvalidNumericInputError(value, "not a finite number")
            return cls._parse_text(repr(value), value)
        if isinstance(value, Decimal):
            if not value.is_finite():
                raise InvalidNumericInputError(value, "not a finite number")
            return cls._parse_text(str(value), value)
        if isinstance(value, str):
            return cls._parse_text(value, value)
        raise InvalidNumericInputError(value, f"unsupported type {type(value).__name__}")

    @classmethod
    def _parse_text(cls, text: str, original: object) -> Numeral:
        match = _NUMERAL_PATTERN.fullmatch(text.strip())
        if match is None:
            raise InvalidNumericInputError(original)

        if match.group("frac_only") is not None:
            int_digits, frac_digits = "", match.group("frac_only")
        else:
            int_digits, frac_digits = match.group("int"), match.group("frac") or ""

        exp_text = match.group("exp") or "0"
        exp_digits = exp_text.lstrip("+-").lstrip("0")
        if len(exp_digits) > len(str(MAX_EXPONENT)) or int(exp_digits or "0") > MAX_EXPONENT:
            raise InvalidNumericInputError(original, "exponent out of range")
        exponent = int(exp_text)
        if len(int_digits) + len(frac_digits) > MAX_DIGITS:
            raise InvalidNumericInputError(original, "too many digits")

        coefficient = int(int_digits + frac_digits or "0")
        scale = len(frac_digits) - exponent
        if scale < 0:
            coefficient *= 10 ** (-scale)
            scale = 0
        if match.group("sign") == "-":
            coefficient = -coefficient
        return cls(coefficient, scale)

    @property
    def sign(self) -> int:
        """-1, 0 or 1."""
        return (self.coefficient > 0) - (self.coefficient < 0)

    @property
    def is_zero(self) -> bool:
        return self.coefficient == 0

    @property
    def is_integer(self) -> bool:
        """True if the value has no nonzero fractional digits."""
        return self.coefficient % (10 ** self.scale) == 0

    def with_scale(self, scale: int) -> Numeral:
        """
        Re-express at `scale` fractional digits.

        Widening pads with zeros (exact). Narrowing truncates toward zero.
        """
        if scale < 0:
            raise ValueError(f"scale must be non-negative, got {scale}")
        if scale >= self.scale:
            return Numeral(self.coefficient * 10 ** (scale - self.scale), scale)
        magnitude = abs(self.coefficient) // 10 ** (self.scale - scale)
        return Numeral(-magnitude if self.coefficient < 0 else magnitude, scale)

    def to_decimal(self) -> Decimal:
        """Exact Decimal with the same digits and scale."""
        return Decimal(str(self))

    def __str__(self) -> str:
        digits = str(abs(self.coefficient))
        if self.scale:
            digits = digits.rjust(self.scale + 1, "0")
            digits = f"{digits[:-self.scale]}.{digits[-self.scale:]}"
        return f"-{digits}" if self.coefficient < 0 else digits

    def __repr__(self) -> str:
        return f"Numeral({str(self)!r})"


NumeralLike: TypeAlias = Numeral | Decimal | int | str | float
