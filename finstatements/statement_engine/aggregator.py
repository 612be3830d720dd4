"""
Closing-balance aggregator.

Folds a set of account closing balances into per-category totals and the
derived profit and retained earnings figures shared by the balance sheet
and income statement.
"""

from functools import reduce
from typing import Dict, Tuple

import structlog

from finstatements.statement_engine.classifier import classify
from finstatements.statement_engine.models import (
    ZERO,
    AccountBalance,
    AccountBalanceSet,
    AccountCategory,
    CategoryTotals,
    DerivedFigures,
)

logger = structlog.get_logger(__name__)


def classify_balances(balances: AccountBalanceSet) -> Dict[str, AccountCategory]:
    """Category of every account in the set, zero balances included."""
    return {code: classify(code) for code in balances}


def _accumulate(totals: CategoryTotals, balance: AccountBalance) -> CategoryTotals:
    if balance.closing_balance == ZERO:
        return totals
    return totals.add(classify(balance.account_code), balance.closing_balance)


def aggregate(balances: AccountBalanceSet) -> Tuple[CategoryTotals, DerivedFigures]:
    """
    Aggregate closing balances by category.

    Opening equity accounts are folded into retained earnings, so the
    returned total_equity equals retained_earnings.

    Args:
        balances: Account code -> AccountBalance for one company and period.

    Returns:
        (CategoryTotals, DerivedFigures)
    """
    raw = reduce(_accumulate, balances.values(), CategoryTotals())

    net_profit = raw.total_revenue - raw.total_expenses
    opening_equity = raw.total_equity
    retained_earnings = opening_equity + net_profit

    derived = DerivedFigures(
        net_profit=net_profit,
        opening_equity=opening_equity,
        retained_earnings=retained_earnings,
    )
    totals = CategoryTotals(
        total_assets=raw.total_assets,
        total_liabilities=raw.total_liabilities,
        total_equity=retained_earnings,
        total_revenue=raw.total_revenue,
        total_expenses=raw.total_expenses,
    )

    logger.debug(
        "Aggregated balances",
        accounts=len(balances),
        total_assets=str(totals.total_assets),
        total_liabilities=str(totals.total_liabilities),
        net_profit=str(net_profit),
    )

    return totals, derived
