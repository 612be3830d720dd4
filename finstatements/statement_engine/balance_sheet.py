"""
Balance sheet builder.

Presents assets, liabilities and equity at period end and checks the
accounting equation: Assets = Liabilities + Equity.
"""

from typing import Optional

from finstatements.statement_engine.aggregator import aggregate
from finstatements.statement_engine.classifier import classify
from finstatements.statement_engine.models import (
    ZERO,
    AccountBalanceSet,
    AccountCategory,
    BalanceSheet,
    StatementHeader,
    StatementLine,
    StatementSection,
)
from finstatements.statement_engine.reconciliation import log_reconciliation, reconcile

RETAINED_EARNINGS_LABEL = "Retained Earnings (Opening + Net Profit)"


def section_lines(balances: AccountBalanceSet, category: AccountCategory) -> tuple:
    """Non-zero lines of one category, ordered by account code."""
    return tuple(
        StatementLine(
            label=balances[code].account_name,
            amount=balances[code].closing_balance,
            code=code,
        )
        for code in sorted(balances)
        if classify(code) == category and balances[code].closing_balance != ZERO
    )


def build_balance_sheet(
    balances: AccountBalanceSet,
    header: Optional[StatementHeader] = None,
) -> BalanceSheet:
    """
    Build a balance sheet from closing balances.

    The equity section lists the equity accounts followed by one
    synthesized retained earnings line (opening equity plus net profit);
    total equity is that retained earnings figure.

    Args:
        balances: Account code -> AccountBalance.
        header: Optional report header metadata.

    Returns:
        BalanceSheet with a zero-tolerance A = L + E reconciliation.
    """
    totals, derived = aggregate(balances)

    assets = StatementSection(
        title="ASSETS",
        lines=section_lines(balances, AccountCategory.ASSET),
        total=totals.total_assets,
    )
    liabilities = StatementSection(
        title="LIABILITIES",
        lines=section_lines(balances, AccountCategory.LIABILITY),
        total=totals.total_liabilities,
    )
    equity_lines = section_lines(balances, AccountCategory.EQUITY) + (
        StatementLine(label=RETAINED_EARNINGS_LABEL, amount=derived.retained_earnings),
    )
    equity = StatementSection(
        title="EQUITY",
        lines=equity_lines,
        total=totals.total_equity,
    )

    total_liabilities_and_equity = totals.total_liabilities + totals.total_equity
    reconciliation = reconcile(totals.total_assets, total_liabilities_and_equity)
    log_reconciliation("balance_sheet", reconciliation)

    return BalanceSheet(
        assets=assets,
        liabilities=liabilities,
        equity=equity,
        totals=totals,
        derived=derived,
        total_liabilities_and_equity=total_liabilities_and_equity,
        reconciliation=reconciliation,
        header=header,
    )
