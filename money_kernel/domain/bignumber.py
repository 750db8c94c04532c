"""
BigNumber -- stateless arbitrary-precision decimal arithmetic.

Responsibility:
    Exact add / subtract / multiply, truncating divide at an explicit scale,
    compare, integer power and rounding over decimal numerals. Operands may be
    given as anything Numeral.parse accepts; every operand is validated.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O, no shared state.
    All functions are reentrant.

Invariants enforced:
    EXACT_ARITHMETIC -- add, subtract and multiply keep every digit unless a
                        target scale is requested. divide truncates toward
                        zero at the requested scale.

Failure modes:
    - InvalidNumericInputError for an operand that is not a numeral.
    - DivisionByZeroError when the divisor is zero.
"""

from __future__ import annotations

from money_kernel.domain.numeral import Numeral, NumeralLike
from money_kernel.domain.rounding import RoundingMode, round_numeral
from money_kernel.exceptions import DivisionByZeroError, InvalidNumericInputError


def _aligned(a: Numeral, b: Numeral) -> tuple[int, int, int]:
    """Return both coefficients expressed at the larger scale, and that scale."""
    scale = max(a.scale, b.scale)
    return (
        a.coefficient * 10 ** (scale - a.scale),
        b.coefficient * 10 ** (scale - b.scale),
        scale,
    )


def _at_scale(result: Numeral, scale: int | None) -> Numeral:
    return result if scale is None else result.with_scale(scale)


def add(a: NumeralLike, b: NumeralLike, scale: int | None = None) -> Numeral:
    """a + b, exact unless `scale` requests truncation."""
    x, y, common = _aligned(Numeral.parse(a), Numeral.parse(b))
    return _at_scale(Numeral(x + y, common), scale)


def subtract(a: NumeralLike, b: NumeralLike, scale: int | None = None) -> Numeral:
    """a - b, exact unless `scale` requests truncation."""
    x, y, common = _aligned(Numeral.parse(a), Numeral.parse(b))
    return _at_scale(Numeral(x - y, common), scale)


def multiply(a: NumeralLike, b: NumeralLike, scale: int | None = None) -> Numeral:
    """a * b, exact unless `scale` requests truncation."""
    x, y = Numeral.parse(a), Numeral.parse(b)
    return _at_scale(Numeral(x.coefficient * y.coefficient, x.scale + y.scale), scale)


def divide(
    a: NumeralLike,
    b: NumeralLike,
    scale: int = 0,
    *,
    sticky: bool = False,
) -> Numeral:
    """
    a / b truncated toward zero at `scale` fractional digits.

    With sticky=True an inexact quotient gets one extra trailing digit 1.
    The result then sorts strictly between the truncated quotient and the
    next unit, which is all a following rounding step needs to decide every
    mode correctly (ties and "any remainder" included).

    Raises:
        DivisionByZeroError: If b is zero.
    """
    if scale < 0:
        raise ValueError(f"scale must be non-negative, got {scale}")
    x, y = Numeral.parse(a), Numeral.parse(b)
    if y.is_zero:
        raise DivisionByZeroError(x)

    # (x.c / 10^x.s) / (y.c / 10^y.s) * 10^scale, as one integer ratio
    numerator = abs(x.coefficient) * 10 ** (y.scale + scale)
    denominator = abs(y.coefficient) * 10 ** x.scale
    quotient, remainder = divmod(numerator, denominator)

    if sticky and remainder:
        quotient, scale = quotient * 10 + 1, scale + 1
    if x.sign * y.sign < 0:
        quotient = -quotient
    return Numeral(quotient, scale)


def compare(a: NumeralLike, b: NumeralLike) -> int:
    """Return -1, 0 or 1 as a is less than, equal to or greater than b."""
    x, y, _ = _aligned(Numeral.parse(a), Numeral.parse(b))
    return (x > y) - (x < y)


def power(base: NumeralLike, exponent: NumeralLike) -> Numeral:
    """
    base ** exponent for a non-negative integer exponent, exact.

    Used to derive scale factors (10 ** precision).
    """
    b, e = Numeral.parse(base), Numeral.parse(exponent)
    if not e.is_integer or e.sign < 0:
        raise InvalidNumericInputError(exponent, "exponent must be a non-negative integer")
    n = e.with_scale(0).coefficient
    return Numeral(b.coefficient**n, b.scale * n)


def round_to(
    value: NumeralLike,
    precision: int,
    mode: RoundingMode = RoundingMode.HALF_UP,
) -> Numeral:
    """Round to exactly `precision` fractional digits with `mode`."""
    return round_numeral(Numeral.parse(value), precision, mode)
