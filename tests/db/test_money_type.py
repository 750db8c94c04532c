"""
Tests for the MoneyType column.

Verifies:
- Bind converts Money and raw amounts to exact minor units
- Result converts stored integers back to Money under the column policy
- A real round trip through an in-memory SQLite database
"""

import pytest
from sqlalchemy import create_engine, select, text
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from money_kernel.db import MoneyType
from money_kernel.domain.policy import MoneyPolicy
from money_kernel.domain.values import Money
from money_kernel.exceptions import InvalidNumericInputError, NegativeAmountRejectedError


class Base(DeclarativeBase):
    pass


class LedgerBalance(Base):
    __tablename__ = "ledger_balance"

    id: Mapped[int] = mapped_column(primary_key=True)
    balance: Mapped[Money] = mapped_column(MoneyType())
    overdraft: Mapped[Money | None] = mapped_column(
        MoneyType(MoneyPolicy(allow_negative=True)), nullable=True
    )


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as s:
        yield s
    engine.dispose()


class TestBind:
    def test_money(self):
        assert MoneyType().process_bind_param(Money.of("10.50"), None) == 1050

    def test_raw_amounts(self):
        column = MoneyType()
        assert column.process_bind_param("10.50", None) == 1050
        assert column.process_bind_param(10, None) == 1000

    def test_none_stores_zero(self):
        assert MoneyType().process_bind_param(None, None) == 0

    def test_column_precision(self):
        column = MoneyType(MoneyPolicy(precision=3))
        assert column.process_bind_param("10.5", None) == 10500

    def test_negative_raw_amount_rejected(self):
        with pytest.raises(NegativeAmountRejectedError):
            MoneyType().process_bind_param("-1.00", None)

    def test_invalid_raw_amount(self):
        with pytest.raises(InvalidNumericInputError):
            MoneyType().process_bind_param("ten", None)

    def test_huge_exponent_rejected(self):
        with pytest.raises(InvalidNumericInputError):
            MoneyType().process_bind_param("1e999999999", None)


class TestResult:
    def test_int(self):
        assert MoneyType().process_result_value(1050, None) == Money.of("10.50")

    def test_null(self):
        assert MoneyType().process_result_value(None, None) is None

    def test_column_precision(self):
        money = MoneyType(MoneyPolicy(precision=3)).process_result_value(10500, None)
        assert money.format() == "10.500"

    def test_huge_value(self):
        assert MoneyType().process_result_value(10**18, None).minor_units() == 10**18


class TestRoundTrip:
    def test_money_survives_storage(self, session):
        session.add(LedgerBalance(id=1, balance=Money.of("19.99")))
        session.commit()
        session.expire_all()

        row = session.get(LedgerBalance, 1)
        assert row.balance == Money.of("19.99")
        assert row.balance.format() == "19.99"

    def test_stored_as_minor_units(self, session):
        session.add(LedgerBalance(id=1, balance=Money.of("19.99")))
        session.commit()
        stored = session.execute(text("SELECT balance FROM ledger_balance")).scalar_one()
        assert stored == 1999

    def test_raw_amount_bound(self, session):
        session.add(LedgerBalance(id=1, balance="5.25"))
        session.commit()
        session.expire_all()
        assert session.get(LedgerBalance, 1).balance == Money.of("5.25")

    def test_negative_column_policy(self, session, lenient_policy):
        overdraft = Money.of("-3.50", policy=lenient_policy)
        session.add(LedgerBalance(id=1, balance=Money.zero(), overdraft=overdraft))
        session.commit()
        session.expire_all()
        assert session.get(LedgerBalance, 1).overdraft.format() == "-3.50"

    def test_query_by_money(self, session):
        session.add_all(
            [
                LedgerBalance(id=1, balance=Money.of("1.00")),
                LedgerBalance(id=2, balance=Money.of("2.00")),
            ]
        )
        session.commit()
        found = session.scalars(
            select(LedgerBalance.id).where(LedgerBalance.balance == Money.of("2.00"))
        ).all()
        assert found == [2]
