"""Income statement builder."""

from typing import Optional

from finstatements.statement_engine.aggregator import aggregate
from finstatements.statement_engine.balance_sheet import section_lines
from finstatements.statement_engine.models import (
    AccountBalanceSet,
    AccountCategory,
    IncomeStatement,
    StatementHeader,
    StatementSection,
)


def build_income_statement(
    balances: AccountBalanceSet,
    header: Optional[StatementHeader] = None,
) -> IncomeStatement:
    """Revenue (6000-7999) less expenses (8000-9999) for the period."""
    totals, derived = aggregate(balances)

    return IncomeStatement(
        revenue=StatementSection(
            title="REVENUE",
            lines=section_lines(balances, AccountCategory.REVENUE),
            total=totals.total_revenue,
        ),
        expenses=StatementSection(
            title="EXPENSES",
            lines=section_lines(balances, AccountCategory.EXPENSE),
            total=totals.total_expenses,
        ),
        net_profit=derived.net_profit,
        header=header,
    )
