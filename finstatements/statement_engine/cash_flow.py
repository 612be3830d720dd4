"""
Cash flow statement builder.

Presents extracted cash movements by activity and reconciles the computed
ending cash balance against the balance actually held on the cash account.
"""

from decimal import Decimal
from typing import Optional

from finstatements.statement_engine.models import (
    ZERO,
    CashFlowAggregates,
    CashFlowStatement,
    StatementHeader,
    StatementLine,
    StatementSection,
)
from finstatements.statement_engine.reconciliation import (
    ONE_CENT,
    log_reconciliation,
    reconcile,
)


def _nonzero(*lines: StatementLine) -> tuple:
    return tuple(line for line in lines if line.amount != ZERO)


def build_cash_flow_statement(
    aggregates: CashFlowAggregates,
    opening_cash_balance: Decimal,
    actual_ending_balance: Decimal,
    header: Optional[StatementHeader] = None,
    tolerance: Decimal = ONE_CENT,
) -> CashFlowStatement:
    """
    Build a cash flow statement.

    Args:
        aggregates: Output of CashFlowExtractor.extract_cash_flows.
        opening_cash_balance: Cash held at the start of the period.
        actual_ending_balance: Sum of movements on the cash account.
        header: Optional report header metadata.
        tolerance: Allowed rounding difference, one cent by default.

    Returns:
        CashFlowStatement whose reconciliation difference is actual minus
        calculated ending cash.
    """
    operating = StatementSection(
        title="CASH FLOWS FROM OPERATING ACTIVITIES",
        lines=(
            StatementLine(
                label="Operating Expenses (cash outflows)",
                amount=ZERO - aggregates.operating_expenses,
            ),
        ),
        total=aggregates.operating_cash_flow,
    )
    investing = StatementSection(
        title="CASH FLOWS FROM INVESTING ACTIVITIES",
        lines=_nonzero(
            StatementLine(
                label="Purchase of Property, Plant & Equipment",
                amount=ZERO - aggregates.asset_purchases,
            ),
            StatementLine(label="Purchase of Investments", amount=ZERO - aggregates.investments),
        ),
        total=aggregates.investing_cash_flow,
    )
    financing = StatementSection(
        title="CASH FLOWS FROM FINANCING ACTIVITIES",
        lines=_nonzero(
            StatementLine(label="Proceeds from Long-term Loans", amount=aggregates.loan_proceeds),
            StatementLine(label="Repayment of Long-term Loans", amount=ZERO - aggregates.loan_payments),
        ),
        total=aggregates.financing_cash_flow,
    )

    net_cash_change = aggregates.net_cash_change
    calculated_ending_balance = opening_cash_balance + net_cash_change

    reconciliation = reconcile(actual_ending_balance, calculated_ending_balance, tolerance)
    log_reconciliation("cash_flow", reconciliation)

    return CashFlowStatement(
        operating=operating,
        investing=investing,
        financing=financing,
        aggregates=aggregates,
        net_cash_change=net_cash_change,
        opening_cash_balance=opening_cash_balance,
        calculated_ending_balance=calculated_ending_balance,
        actual_ending_balance=actual_ending_balance,
        reconciliation=reconciliation,
        header=header,
    )
