"""
Hypothesis-Based Property Tests for the money kernel.

Property-based testing using Hypothesis to generate amounts, precisions and
rounding modes and verify the kernel invariants hold.

Properties checked here:
- Minor-unit and human-text round trips are lossless
- Addition is exact: identity, commutativity, associativity, inverse
- Rounding agrees with decimal.Decimal.quantize for the modes it supports
- HALF_EVEN and HALF_ODD disagree on exact ties, by one unit
- Integer multiplication never rounds
- Division by zero always raises
"""

from decimal import (
    ROUND_DOWN,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Decimal,
    localcontext,
)

import pytest
from hypothesis import HealthCheck, assume, given, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from money_kernel.domain.numeral import Numeral
from money_kernel.domain.policy import MoneyPolicy
from money_kernel.domain.rounding import RoundingMode, round_numeral
from money_kernel.domain.values import Money
from money_kernel.exceptions import DivisionByZeroError

pytestmark = pytest.mark.property

PROPERTY_SETTINGS = settings(
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)

DECIMAL_ROUNDING = {
    RoundingMode.HALF_UP: ROUND_HALF_UP,
    RoundingMode.HALF_DOWN: ROUND_HALF_DOWN,
    RoundingMode.HALF_EVEN: ROUND_HALF_EVEN,
    RoundingMode.UP: ROUND_UP,
    RoundingMode.DOWN: ROUND_DOWN,
}

minor_amounts = st.integers(min_value=-(10**30), max_value=10**30)
precisions = st.integers(min_value=0, max_value=6)
rounding_modes = st.sampled_from(list(RoundingMode))


@composite
def lenient_money(draw, precision: int = 2):
    """Money under a policy that allows negatives."""
    policy = MoneyPolicy(precision=precision, allow_negative=True)
    return Money.from_minor(draw(minor_amounts), policy=policy)


@composite
def numerals(draw):
    """Numerals with up to 12 fractional digits."""
    return Numeral(draw(minor_amounts), draw(st.integers(min_value=0, max_value=12)))


class TestRoundTrips:
    @given(minor=minor_amounts, precision=precisions)
    @PROPERTY_SETTINGS
    def test_minor_units_round_trip(self, minor, precision):
        policy = MoneyPolicy(precision=precision, allow_negative=True)
        assert Money.from_minor(minor, policy=policy).minor_units() == minor

    @given(minor=minor_amounts, precision=precisions, data=st.data())
    @PROPERTY_SETTINGS
    def test_human_text_round_trip(self, minor, precision, data):
        """Fewer digits than the precision are padded, never altered."""
        digits = data.draw(st.integers(min_value=0, max_value=precision))
        policy = MoneyPolicy(precision=precision, allow_negative=True)

        text = str(Numeral(minor, digits))
        expected = str(Numeral(minor, digits).with_scale(precision))
        assert Money.of(text, policy=policy).format() == expected


class TestAdditionIsExact:
    @given(a=lenient_money())
    @PROPERTY_SETTINGS
    def test_identity(self, a):
        assert a.add(Money.zero(policy=a.policy)) == a

    @given(a=lenient_money(), b=lenient_money())
    @PROPERTY_SETTINGS
    def test_commutative(self, a, b):
        assert a.add(b) == b.add(a)

    @given(a=lenient_money(), b=lenient_money(), c=lenient_money())
    @PROPERTY_SETTINGS
    def test_associative(self, a, b, c):
        assert a.add(b).add(c) == a.add(b.add(c))

    @given(a=lenient_money(), b=lenient_money())
    @PROPERTY_SETTINGS
    def test_subtract_inverts_add(self, a, b):
        assert a.add(b).subtract(b) == a

    @given(a=lenient_money(), b=lenient_money())
    @PROPERTY_SETTINGS
    def test_minor_units_add(self, a, b):
        assert a.add(b).minor_amount == a.minor_amount + b.minor_amount


class TestRoundingAgreesWithDecimal:
    @given(
        value=numerals(),
        precision=precisions,
        mode=st.sampled_from(list(DECIMAL_ROUNDING)),
    )
    @PROPERTY_SETTINGS
    def test_matches_quantize(self, value, precision, mode):
        with localcontext() as ctx:
            ctx.prec = 100
            expected = value.to_decimal().quantize(
                Decimal(1).scaleb(-precision), rounding=DECIMAL_ROUNDING[mode]
            )
        result = round_numeral(value, precision, mode)
        assert result.scale == precision
        assert result.to_decimal() == expected

    @given(kept=st.integers(min_value=-(10**12), max_value=10**12), precision=precisions)
    @PROPERTY_SETTINGS
    def test_half_even_and_half_odd_split_ties(self, kept, precision):
        # kept + 0.5 units at `precision` digits is an exact tie
        tie = Numeral(kept * 10 + (5 if kept >= 0 else -5), precision + 1)
        even = round_numeral(tie, precision, RoundingMode.HALF_EVEN)
        odd = round_numeral(tie, precision, RoundingMode.HALF_ODD)
        assert abs(even.coefficient - odd.coefficient) == 1
        assert even.coefficient % 2 == 0
        assert odd.coefficient % 2 == 1

    @given(value=numerals(), precision=precisions, mode=rounding_modes)
    @PROPERTY_SETTINGS
    def test_within_one_unit(self, value, precision, mode):
        result = round_numeral(value, precision, mode)
        scale = max(value.scale, precision)
        diff = abs(
            result.with_scale(scale).coefficient - value.with_scale(scale).coefficient
        )
        assert diff < 10 ** (scale - precision)


class TestMultiplyDivide:
    @given(a=lenient_money(), factor=st.integers(min_value=-1000, max_value=1000), mode=rounding_modes)
    @PROPERTY_SETTINGS
    def test_integer_factor_is_exact(self, a, factor, mode):
        assert a.multiply(factor, mode).minor_amount == a.minor_amount * factor

    @given(a=lenient_money(), divisor=st.integers(min_value=1, max_value=10**6))
    @PROPERTY_SETTINGS
    def test_down_never_overshoots(self, a, divisor):
        assume(a.minor_amount >= 0)
        share = a.divide(divisor, RoundingMode.DOWN)
        assert share.minor_amount * divisor <= a.minor_amount

    @given(a=lenient_money(), divisor=st.integers(min_value=1, max_value=10**6))
    @PROPERTY_SETTINGS
    def test_up_and_down_differ_only_when_inexact(self, a, divisor):
        up = a.divide(divisor, RoundingMode.UP).minor_amount
        down = a.divide(divisor, RoundingMode.DOWN).minor_amount
        exact = a.minor_amount % divisor == 0
        assert abs(up - down) == (0 if exact else 1)

    @given(a=lenient_money(), zero=st.sampled_from([0, "0", "0.00", Decimal("0")]))
    @PROPERTY_SETTINGS
    def test_division_by_zero(self, a, zero):
        with pytest.raises(DivisionByZeroError):
            a.divide(zero)
