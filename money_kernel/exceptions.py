"""
Typed Exception Hierarchy for the Money Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers at the persistence or application boundary must be able to tell an
unparseable amount from a division by zero from a rejected negative balance
without parsing messages:

    try:
        share = total.divide(parts)
    except DivisionByZeroError as e:
        api_response(code=e.code, dividend=e.dividend)
    except NegativeAmountRejectedError as e:
        api_response(code=e.code, amount=e.amount)

Every exception:
  1. Has its own class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries the offending value as a structured attribute

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    MoneyKernelError (base)
    |
    +-- NumericError
    |   +-- InvalidNumericInputError
    |   +-- DivisionByZeroError
    |
    +-- MoneyError
    |   +-- NegativeAmountRejectedError
    |   +-- PrecisionMismatchError
    |
    +-- PolicyError
        +-- InvalidPrecisionError
        +-- InvalidRoundingModeError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category   | Code                      | When Raised
-----------|---------------------------|------------------------------------------
Numeric    | INVALID_NUMERIC_INPUT     | Amount, factor or rate is not a numeral
           | DIVISION_BY_ZERO          | Divisor is exactly zero
-----------|---------------------------|------------------------------------------
Money      | NEGATIVE_AMOUNT_REJECTED  | Negative value while policy forbids it
           | PRECISION_MISMATCH        | Operands carry different precisions
-----------|---------------------------|------------------------------------------
Policy     | INVALID_PRECISION         | Precision is not a non-negative integer
           | INVALID_ROUNDING_MODE     | Unknown rounding mode name or code

None of these are retried or recovered inside the kernel. The kernel never
logs them; handling is the caller's business.
"""

from typing import Any


class MoneyKernelError(Exception):
    """
    Base exception for all money kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "MONEY_KERNEL_ERROR"


# Numeric exceptions


class NumericError(MoneyKernelError):
    """Base exception for numeral parsing and arithmetic errors."""

    code: str = "NUMERIC_ERROR"


class InvalidNumericInputError(NumericError):
    """A supplied amount, factor or rate is not a valid decimal numeral."""

    code: str = "INVALID_NUMERIC_INPUT"

    def __init__(self, value: Any, reason: str | None = None):
        self.value = value
        self.reason = reason
        message = f"Invalid numeric value: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class DivisionByZeroError(NumericError):
    """Divisor is exactly zero."""

    code: str = "DIVISION_BY_ZERO"

    def __init__(self, dividend: Any):
        self.dividend = str(dividend)
        super().__init__(f"Division by zero (dividend: {self.dividend})")


# Money exceptions


class MoneyError(MoneyKernelError):
    """Base exception for Money value errors."""

    code: str = "MONEY_ERROR"


class NegativeAmountRejectedError(MoneyError):
    """
    A Money value would be negative while the policy forbids it.

    Raised at construction, so no live instance ever violates the policy.
    """

    code: str = "NEGATIVE_AMOUNT_REJECTED"

    def __init__(self, amount: str):
        self.amount = amount
        super().__init__(
            f"Negative money amounts are not allowed: {amount}. "
            f"Set 'allow_negative' to true in the money configuration to enable."
        )


class PrecisionMismatchError(MoneyError):
    """Two Money operands carry different precisions."""

    code: str = "PRECISION_MISMATCH"

    def __init__(self, left: int, right: int):
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot operate on Money with different precisions: {left} and {right}"
        )


# Policy exceptions


class PolicyError(MoneyKernelError):
    """Base exception for policy (precision / rounding) errors."""

    code: str = "POLICY_ERROR"


class InvalidPrecisionError(PolicyError):
    """Precision is not a non-negative integer."""

    code: str = "INVALID_PRECISION"

    def __init__(self, precision: Any):
        self.precision = precision
        super().__init__(
            f"Precision must be a non-negative integer, got {precision!r}"
        )


class InvalidRoundingModeError(PolicyError):
    """Rounding mode name or legacy code is not recognized."""

    code: str = "INVALID_ROUNDING_MODE"

    def __init__(self, mode: Any):
        self.mode = mode
        super().__init__(f"Unknown rounding mode: {mode!r}")
