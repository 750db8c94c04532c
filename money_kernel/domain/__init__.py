"""
Money kernel domain layer.

Pure value types and arithmetic with zero I/O:
- numeral: validated decimal numerals and the MinorUnits type
- bignumber: exact arithmetic over numerals
- rounding: RoundingMode and digit-exact rounding
- policy: MoneyPolicy (precision, rounding default, negative rule)
- values: the Money value object
"""

from money_kernel.domain.numeral import MinorUnits, Numeral, NumeralLike
from money_kernel.domain.policy import DEFAULT_POLICY, MoneyPolicy
from money_kernel.domain.rounding import RoundingMode, round_numeral
from money_kernel.domain.values import Money

__all__ = [
    "DEFAULT_POLICY",
    "MinorUnits",
    "Money",
    "MoneyPolicy",
    "Numeral",
    "NumeralLike",
    "RoundingMode",
    "round_numeral",
]
