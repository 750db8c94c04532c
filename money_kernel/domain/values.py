"""
Values -- Immutable, self-validating monetary value object.

Responsibility:
    Provides Money: an exact fixed-point amount stored as an integer count of
    minor units together with the MoneyPolicy that governs it (precision,
    default rounding mode, negative-amount rule).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Depends on domain.numeral, domain.bignumber, domain.rounding and
    domain.policy. Never reads configuration itself.

Invariants enforced:
    EXACT_ARITHMETIC  -- add/subtract are integer arithmetic on minor units
    EXPLICIT_ROUNDING -- multiply/divide/percentage round with the explicit
                         override or the policy default, never implicitly
    IMMUTABILITY      -- frozen dataclass; every operation returns a new Money
    NEGATIVE_GUARD    -- checked in __post_init__, i.e. on every construction
                         path and for every derived value

Rounding location:
    multiply and divide round the minor-unit intermediate to an integer.
    percentage computes (amount * rate) / 100 in human units with two scratch
    digits and rounds to the value's precision. Both land on the same
    integer grid of minor units.

Failure modes:
    - InvalidNumericInputError for unparseable amounts, factors or rates
    - DivisionByZeroError for a zero divisor
    - NegativeAmountRejectedError when the policy forbids a negative result
    - PrecisionMismatchError when two Money operands differ in precision
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from money_kernel.domain import bignumber
from money_kernel.domain.numeral import MinorUnits, Numeral, NumeralLike
from money_kernel.domain.policy import DEFAULT_POLICY, MoneyPolicy
from money_kernel.exceptions import (
    InvalidNumericInputError,
    NegativeAmountRejectedError,
    PrecisionMismatchError,
)

# Extra fractional digits kept on minor-unit quotients before rounding.
DIVISION_SCRATCH_SCALE = 10

# Extra fractional digits kept on human-unit percentages before rounding.
PERCENTAGE_SCRATCH_DIGITS = 2


def _resolve_policy(precision: int | None, policy: MoneyPolicy | None) -> MoneyPolicy:
    resolved = policy if policy is not None else DEFAULT_POLICY
    if precision is not None and precision != resolved.precision:
        resolved = resolved.with_precision(precision)
    return resolved


@dataclass(frozen=True, slots=True, eq=False)
class Money:
    """
    Monetary amount value object.

    Contract:
        Holds an integer number of minor units and the policy they are
        interpreted under. The human amount is minor_amount / 10**precision.

    Guarantees:
        - Immutable and hashable
        - minor_amount is always an int (never float, never fractional)
        - never negative unless policy.allow_negative is True
        - equality and ordering compare minor units at equal precision

    Non-goals:
        - Does NOT know about currencies; mixing units is not detected
        - Does NOT format for a locale
    """

    minor_amount: int
    policy: MoneyPolicy = DEFAULT_POLICY

    def __post_init__(self) -> None:
        if not isinstance(self.policy, MoneyPolicy):
            raise TypeError(f"policy must be MoneyPolicy, got {type(self.policy)}")
        if isinstance(self.minor_amount, bool) or not isinstance(self.minor_amount, int):
            object.__setattr__(self, "minor_amount", _parse_minor(self.minor_amount))

        # INVARIANT: NEGATIVE_GUARD
        if self.minor_amount < 0 and not self.policy.allow_negative:
            raise NegativeAmountRejectedError(self.amount)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def of(
        cls,
        amount: NumeralLike,
        precision: int | None = None,
        policy: MoneyPolicy | None = None,
    ) -> Money:
        """
        Create Money from a human-readable amount ("10.50", 10.5, 1050).

        Preconditions:
            - amount is a valid decimal numeral (str, int, float or Decimal)

        Postconditions:
            - minor_amount = amount * 10**precision, truncated toward zero

        Raises:
            InvalidNumericInputError: If amount is not numeric.
            NegativeAmountRejectedError: If negative and the policy forbids it.

        Args:
            amount: The human-readable amount.
            precision: Overrides the policy's precision when given.
            policy: The MoneyPolicy to carry (default: DEFAULT_POLICY).
        """
        resolved = _resolve_policy(precision, policy)
        minor = bignumber.multiply(amount, resolved.scale_factor, scale=0)
        return cls(minor.coefficient, resolved)

    @classmethod
    def from_minor(
        cls,
        amount: int | str,
        precision: int | None = None,
        policy: MoneyPolicy | None = None,
    ) -> Money:
        """
        Create Money from minor units (1050 for 10.50), e.g. a stored column.

        Raises:
            InvalidNumericInputError: If amount is not an integral numeral.
            NegativeAmountRejectedError: If negative and the policy forbids it.
        """
        return cls(_parse_minor(amount), _resolve_policy(precision, policy))

    @classmethod
    def zero(cls, precision: int | None = None, policy: MoneyPolicy | None = None) -> Money:
        """Create a zero amount."""
        return cls.of("0", precision, policy)

    # ------------------------------------------------------------------
    # Derived attributes
    # ------------------------------------------------------------------

    @property
    def precision(self) -> int:
        return self.policy.precision

    @property
    def scale_factor(self) -> int:
        """10 ** precision."""
        return self.policy.scale_factor

    @property
    def numeral(self) -> Numeral:
        """The human amount as an exact Numeral with `precision` digits."""
        return Numeral(self.minor_amount, self.precision)

    @property
    def amount(self) -> str:
        """The human amount, e.g. "10.50" (exactly `precision` digits)."""
        return str(self.numeral)

    def minor_units(self) -> MinorUnits:
        """The exact integer amount in minor units (for persistence)."""
        return MinorUnits(self.minor_amount)

    def to_decimal(self) -> Decimal:
        """The human amount as an exact Decimal."""
        return self.numeral.to_decimal()

    def format(self) -> str:
        """
        Fixed-point text for display.

        "10.50" at precision 2, "1500" at precision 0.
        """
        return self.amount

    @property
    def is_zero(self) -> bool:
        return self.minor_amount == 0

    @property
    def is_positive(self) -> bool:
        return self.minor_amount > 0

    @property
    def is_negative(self) -> bool:
        return self.minor_amount < 0

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other: Money | NumeralLike) -> Money:
        """Add another amount (Money, or a raw amount at this precision)."""
        result = bignumber.add(self.minor_amount, self._minor_operand(other))
        return self._derive(result)

    def subtract(self, other: Money | NumeralLike) -> Money:
        """Subtract another amount. Crossing below zero is guarded."""
        result = bignumber.subtract(self.minor_amount, self._minor_operand(other))
        return self._derive(result)

    def multiply(self, factor: NumeralLike, rounding: Any = None) -> Money:
        """
        Multiply by an integer or decimal factor.

        The product of minor units and factor is exact; it is then rounded to
        whole minor units with `rounding` (default: the policy's mode).

        Example:
            Money.of("19.99").multiply(3)  -> 59.97
        """
        mode = self.policy.resolve_rounding(rounding)
        product = bignumber.multiply(self.minor_amount, factor)
        return self._derive(bignumber.round_to(product, 0, mode))

    def divide(self, divisor: NumeralLike, rounding: Any = None) -> Money:
        """
        Divide by an integer or decimal divisor.

        Raises:
            DivisionByZeroError: If divisor is zero.

        Example:
            Money.of("100.00").divide(3)                    -> 33.33
            Money.of("100.00").divide(3, RoundingMode.UP)   -> 33.34
        """
        mode = self.policy.resolve_rounding(rounding)
        quotient = bignumber.divide(
            self.minor_amount, divisor, DIVISION_SCRATCH_SCALE, sticky=True
        )
        return self._derive(bignumber.round_to(quotient, 0, mode))

    def percentage(self, rate: NumeralLike, rounding: Any = None) -> Money:
        """
        Compute `rate` percent of this amount (20 for 20%, "5.5" for 5.5%).

        Example:
            Money.of("100.00").percentage(20)  -> 20.00
        """
        mode = self.policy.resolve_rounding(rounding)
        product = bignumber.multiply(self.numeral, rate)
        ratio = bignumber.divide(
            product, 100, self.precision + PERCENTAGE_SCRATCH_DIGITS, sticky=True
        )
        rounded = bignumber.round_to(ratio, self.precision, mode)
        return Money.of(rounded, policy=self.policy)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare(self, other: Money | NumeralLike) -> int:
        """Return -1, 0 or 1 comparing minor units.

        Raw operands are compared as amounts, so a negative raw value is
        simply smaller, whatever the policy says about negative Money.
        """
        return bignumber.compare(self.minor_amount, self._minor_operand(other))

    def equals(self, other: Money | NumeralLike) -> bool:
        return self.compare(other) == 0

    def greater_than(self, other: Money | NumeralLike) -> bool:
        return self.compare(other) > 0

    def greater_than_or_equal(self, other: Money | NumeralLike) -> bool:
        return self.compare(other) >= 0

    def less_than(self, other: Money | NumeralLike) -> bool:
        return self.compare(other) < 0

    def less_than_or_equal(self, other: Money | NumeralLike) -> bool:
        return self.compare(other) <= 0

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: Any) -> Money:
        # sum() starts from int 0
        if isinstance(other, int) and not isinstance(other, bool) and other == 0:
            return self
        return NotImplemented

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, factor: Decimal | int | str) -> Money:
        if isinstance(factor, (Money, float, bool)):
            return NotImplemented
        return self.multiply(factor)

    def __rmul__(self, factor: Decimal | int | str) -> Money:
        return self.__mul__(factor)

    def __truediv__(self, divisor: Decimal | int | str) -> Money:
        if isinstance(divisor, (Money, float, bool)):
            return NotImplemented
        return self.divide(divisor)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.precision == other.precision and self.minor_amount == other.minor_amount

    def __hash__(self) -> int:
        return hash((self.minor_amount, self.precision))

    def __lt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.less_than(other)

    def __le__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.less_than_or_equal(other)

    def __gt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.greater_than(other)

    def __ge__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.greater_than_or_equal(other)

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Money({self.amount!r}, precision={self.precision})"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _minor_operand(self, value: Money | NumeralLike) -> int:
        """Minor units of an operand; raw amounts are truncated like Money.of."""
        if isinstance(value, Money):
            if value.precision != self.precision:
                raise PrecisionMismatchError(self.precision, value.precision)
            return value.minor_amount
        return bignumber.multiply(value, self.scale_factor, scale=0).coefficient

    def _derive(self, result: Numeral) -> Money:
        return Money(result.coefficient, self.policy)


def _parse_minor(amount: Any) -> int:
    numeral = Numeral.parse(amount)
    if not numeral.is_integer:
        raise InvalidNumericInputError(amount, "minor units must be an integer")
    return numeral.with_scale(0).coefficient
