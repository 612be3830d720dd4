"""
Unit tests for the reconciliation checker.
"""
from decimal import Decimal

from finstatements.statement_engine.models import ReconciliationDirection
from finstatements.statement_engine.reconciliation import ONE_CENT, reconcile


class TestReconcile:
    """Tests for reconcile()."""

    def test_equal_totals_balance(self):
        result = reconcile(Decimal("500.00"), Decimal("500.00"))

        assert result.balances is True
        assert result.difference == Decimal("0")
        assert result.direction == ReconciliationDirection.BALANCED

    def test_left_exceeds(self):
        """Difference is signed a - b."""
        result = reconcile(Decimal("150.00"), Decimal("110.00"))

        assert result.balances is False
        assert result.difference == Decimal("40.00")
        assert result.direction == ReconciliationDirection.LEFT_EXCEEDS
        assert result.direction.value == "assets_exceed"

    def test_right_exceeds(self):
        result = reconcile(Decimal("100.00"), Decimal("100.01"))

        assert result.balances is False
        assert result.difference == Decimal("-0.01")
        assert result.direction.value == "liabilities_equity_exceed"

    def test_zero_tolerance_is_exact(self):
        """One cent out fails a zero-tolerance check."""
        assert reconcile(Decimal("0.01"), Decimal("0.00")).balances is False

    def test_within_tolerance_balances(self):
        """A difference equal to the tolerance still balances."""
        result = reconcile(Decimal("751.00"), Decimal("750.99"), ONE_CENT)

        assert result.balances is True
        assert result.difference == Decimal("0.01")
        assert result.direction == ReconciliationDirection.BALANCED

    def test_outside_tolerance_fails(self):
        result = reconcile(Decimal("751.00"), Decimal("750.00"), ONE_CENT)

        assert result.balances is False
        assert result.difference == Decimal("1.00")

    def test_operands_recorded(self):
        result = reconcile(Decimal("3"), Decimal("2"), Decimal("0.5"))

        assert result.left == Decimal("3")
        assert result.right == Decimal("2")
        assert result.tolerance == Decimal("0.5")
