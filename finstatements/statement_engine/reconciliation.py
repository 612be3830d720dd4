"""
Reconciliation checker.

Compares two independently derived totals that must agree under correct
data. An imbalance is a reported fact, never an exception.
"""

from decimal import Decimal

import structlog

from finstatements.statement_engine.models import (
    ZERO,
    ReconciliationDirection,
    ReconciliationResult,
)

logger = structlog.get_logger(__name__)

# Tolerance used by the cash flow check
ONE_CENT = Decimal("0.01")


def reconcile(a: Decimal, b: Decimal, tolerance: Decimal = ZERO) -> ReconciliationResult:
    """
    Compare a against b.

    Args:
        a: Left-hand total (assets, debits, actual cash).
        b: Right-hand total (liabilities + equity, credits, calculated cash).
        tolerance: Largest absolute difference still treated as balanced.

    Returns:
        ReconciliationResult with the exact signed difference a - b.
    """
    difference = a - b
    balances = abs(difference) <= tolerance

    if balances:
        direction = ReconciliationDirection.BALANCED
    elif a > b:
        direction = ReconciliationDirection.LEFT_EXCEEDS
    else:
        direction = ReconciliationDirection.RIGHT_EXCEEDS

    return ReconciliationResult(
        balances=balances,
        difference=difference,
        direction=direction,
        left=a,
        right=b,
        tolerance=tolerance,
    )


def log_reconciliation(check_name: str, result: ReconciliationResult, **context) -> None:
    """Log a check outcome; imbalances log at warning."""
    if result.balances:
        logger.info("Reconciliation passed", check=check_name, **context)
    else:
        logger.warning(
            "Reconciliation failed",
            check=check_name,
            difference=str(result.difference),
            direction=result.direction.value,
            left=str(result.left),
            right=str(result.right),
            **context,
        )
