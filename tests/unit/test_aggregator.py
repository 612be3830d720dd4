"""
Unit tests for the closing-balance aggregator.
"""
from decimal import Decimal

from finstatements.statement_engine.aggregator import aggregate, classify_balances
from finstatements.statement_engine.models import AccountCategory


class TestAggregate:
    """Tests for aggregate()."""

    def test_category_totals(self, make_balances):
        balances = make_balances(
            ("1000", "100.00"), ("1500", "50.00"),
            ("3000", "30.00"),
            ("5000", "20.00"),
            ("6000", "80.00"),
            ("8000", "20.00"),
        )

        totals, derived = aggregate(balances)

        assert totals.total_assets == Decimal("150.00")
        assert totals.total_liabilities == Decimal("30.00")
        assert totals.total_revenue == Decimal("80.00")
        assert totals.total_expenses == Decimal("20.00")
        assert derived.net_profit == Decimal("60.00")
        assert derived.opening_equity == Decimal("20.00")
        assert derived.retained_earnings == Decimal("80.00")

    def test_total_equity_is_retained_earnings(self, make_balances):
        """Equity accounts are folded into retained earnings."""
        totals, derived = aggregate(make_balances(("5000", "20.00"), ("6000", "80.00")))

        assert totals.total_equity == derived.retained_earnings == Decimal("100.00")

    def test_net_loss(self, make_balances):
        totals, derived = aggregate(make_balances(("6000", "10.00"), ("8000", "25.00")))

        assert derived.net_profit == Decimal("-15.00")

    def test_unclassified_excluded(self, make_balances):
        totals, derived = aggregate(make_balances(("1000", "10.00"), ("0500", "99.00")))

        assert totals.total_assets == Decimal("10.00")
        assert derived.net_profit == Decimal("0")

    def test_order_independent(self, make_balance):
        """Permuting the balance set gives identical totals."""
        items = [make_balance(code, amount) for code, amount in [
            ("1000", "1.10"), ("3000", "2.20"), ("6000", "3.30"), ("8000", "0.40"),
        ]]
        forward = {b.account_code: b for b in items}
        backward = {b.account_code: b for b in reversed(items)}

        assert aggregate(forward) == aggregate(backward)

    def test_empty_set(self):
        totals, derived = aggregate({})

        assert totals.total_assets == Decimal("0")
        assert derived.retained_earnings == Decimal("0")

    def test_contra_balance_reduces_total(self, make_balances):
        """A negative closing balance is added, reducing its category."""
        totals, _ = aggregate(make_balances(("1000", "100.00"), ("1900", "-25.00")))

        assert totals.total_assets == Decimal("75.00")


class TestClassifyBalances:
    """Tests for classify_balances()."""

    def test_zero_balances_are_classified(self, make_balances):
        categories = classify_balances(make_balances(("1000", "0.00"), ("8000", "5.00"), ("ABCD", "1.00")))

        assert categories == {
            "1000": AccountCategory.ASSET,
            "8000": AccountCategory.EXPENSE,
            "ABCD": AccountCategory.UNCLASSIFIED,
        }
