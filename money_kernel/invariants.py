"""
Kernel Invariants Contract.

These invariants are structural law for every Money value. No MoneyPolicy or
configuration file may override them; configuration only chooses precision,
the default rounding mode and whether negatives are allowed.

This module exists solely to declare these invariants explicitly. The
enforcement is distributed across domain.numeral, domain.rounding and
domain.values.
"""

from enum import Enum, unique


@unique
class KernelInvariant(str, Enum):
    """Non-configurable invariants enforced by the kernel."""

    EXACT_ARITHMETIC = "exact_arithmetic"
    """Add, subtract and multiply never lose digits. Division truncates only
    at an explicit scale. Enforced by domain.bignumber."""

    NO_FLOAT = "no_float"
    """No amount is ever converted to a binary floating type. Float input is
    parsed from its text form. Enforced by domain.numeral and checked by
    tests/architecture/test_kernel_boundary.py."""

    EXPLICIT_ROUNDING = "explicit_rounding"
    """Every lossy step names its rounding mode (explicit override or the
    policy default). Enforced by domain.values."""

    IMMUTABILITY = "immutability"
    """Money, Numeral and MoneyPolicy are frozen. Every operation returns a
    new instance."""

    NEGATIVE_GUARD = "negative_guard"
    """No live Money is negative unless its policy allows it. Enforced in
    Money.__post_init__, so it holds after every operation."""


# All invariants as a frozenset for programmatic checks.
ALL_KERNEL_INVARIANTS: frozenset[KernelInvariant] = frozenset(KernelInvariant)

# The kernel package may not import from these packages.
# This is enforced by tests/architecture/test_kernel_boundary.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = ("money_config",)
