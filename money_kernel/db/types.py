"""
Module: money_kernel.db.types
Responsibility: SQLAlchemy column type that stores Money as an integer count
    of minor units and loads it back as Money.
Architecture position: Kernel > DB.  Imports domain.values and
    domain.policy only.  MUST NOT import money_config; the policy is passed
    in by whoever declares the column.

Invariants enforced:
    EXACT_ARITHMETIC -- the stored value is the exact minor-unit integer, so
        Money.from_minor(x).minor_amount == x for every stored x.
    NO_FLOAT -- raw amounts bound to the column go through Money.of, never
        through float().

Failure modes:
    - InvalidNumericInputError when a bound raw value is not numeric.
    - NegativeAmountRejectedError when a bound or loaded value is negative
      and the column's policy forbids it.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import BigInteger
from sqlalchemy.types import TypeDecorator

from money_kernel.domain.policy import DEFAULT_POLICY, MoneyPolicy
from money_kernel.domain.values import Money


class MoneyType(TypeDecorator):
    """
    Money stored as BigInteger minor units.

    Contract:
        Bind:   Money("10.50") -> 1050, "10.50" -> 1050, None -> 0.
        Result: 1050 -> Money.from_minor(1050), NULL -> None.

    Guarantees:
        - cache_ok=True enables SQLAlchemy statement caching (the policy is
          hashable and part of the cache key).
    """

    impl = BigInteger
    cache_ok = True

    def __init__(self, policy: MoneyPolicy | None = None, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.policy = policy if policy is not None else DEFAULT_POLICY

    def process_bind_param(self, value, dialect) -> int:
        """Convert Money (or a raw numeral) to minor units when storing.

        Preconditions: value is Money, a numeral, or None.
        Postconditions: Returns the exact minor-unit int; None stores 0.
        """
        if value is None:
            return 0
        if not isinstance(value, Money):
            value = Money.of(value, policy=self.policy)
        return value.minor_units()

    def process_result_value(self, value, dialect) -> Money | None:
        """Convert stored minor units back to Money when loading.

        Preconditions: value is an int or None.
        Postconditions: Returns Money.from_minor(value) or None.
        """
        if value is None:
            return None
        return Money.from_minor(value, policy=self.policy)
