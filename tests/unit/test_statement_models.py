"""
Unit tests for statement engine data structures.
"""
from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

import pytest

from finstatements.statement_engine.models import (
    AccountBalance,
    AccountCategory,
    CashFlowAggregates,
    CategoryTotals,
    NormalSide,
    StatementHeader,
)
from finstatements.statement_engine.trial_balance import build_trial_balance


class TestAccountBalance:
    """Tests for the trial balance column split."""

    @pytest.mark.parametrize("side,amount,debit,credit", [
        (NormalSide.DEBIT, "100.00", "100.00", "0"),
        (NormalSide.DEBIT, "-100.00", "0", "100.00"),
        (NormalSide.CREDIT, "100.00", "0", "100.00"),
        (NormalSide.CREDIT, "-100.00", "100.00", "0"),
        (NormalSide.DEBIT, "0.00", "0.00", "0"),
    ])
    def test_debit_credit_split(self, side, amount, debit, credit):
        balance = AccountBalance(
            account_code="1000",
            account_name="Test",
            closing_balance=Decimal(amount),
            normal_side=side,
        )

        assert balance.trial_balance_debit() == Decimal(debit)
        assert balance.trial_balance_credit() == Decimal(credit)

    @pytest.mark.parametrize("side", [NormalSide.DEBIT, NormalSide.CREDIT])
    @pytest.mark.parametrize("amount", ["-12.34", "0", "56.78"])
    def test_never_both_columns(self, side, amount):
        balance = AccountBalance("1000", "Test", Decimal(amount), side)

        assert balance.trial_balance_debit() == 0 or balance.trial_balance_credit() == 0

    def test_frozen(self):
        balance = AccountBalance("1000", "Test", Decimal("1.00"), NormalSide.DEBIT)

        with pytest.raises(FrozenInstanceError):
            balance.closing_balance = Decimal("2.00")


class TestCategoryTotals:
    """Tests for CategoryTotals.add()."""

    def test_add_returns_new_instance(self):
        totals = CategoryTotals()
        updated = totals.add(AccountCategory.ASSET, Decimal("10.00"))

        assert totals.total_assets == Decimal("0")
        assert updated.total_assets == Decimal("10.00")

    def test_add_unclassified_is_noop(self):
        totals = CategoryTotals()

        assert totals.add(AccountCategory.UNCLASSIFIED, Decimal("10.00")) is totals


class TestCashFlowAggregates:

    def test_net_cash_change(self):
        aggregates = CashFlowAggregates(
            operating_cash_flow=Decimal("-200.00"),
            investing_cash_flow=Decimal("-100.00"),
            financing_cash_flow=Decimal("50.00"),
        )

        assert aggregates.net_cash_change == Decimal("-250.00")


class TestToDict:
    """Tests for JSON-friendly serialization."""

    def test_trial_balance_to_dict(self, make_balances):
        header = StatementHeader(
            company_name="Acme",
            registration_number="2020/123456/07",
            period_name="FY2026",
            start_date=date(2026, 1, 1),
            end_date=date(2026, 12, 31),
        )
        tb = build_trial_balance(make_balances(("1100", "300.00"), ("6000", "300.00")), header=header)

        data = tb.to_dict()

        assert data["total_debits"] == "300.00"
        assert data["reconciliation"]["direction"] == "balanced"
        assert data["reconciliation"]["balances"] is True
        assert data["header"]["start_date"] == "2026-01-01"
        assert data["lines"][0] == {
            "account_code": "1100",
            "account_name": "Account 1100",
            "debit": "300.00",
            "credit": "0",
        }
        assert data["unclassified_accounts"] == []
