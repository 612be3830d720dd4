"""
Cash flow extractor.

Buckets per-account period movements (debit minus credit) into operating,
investing and financing activities. Works on movements, not closing
balances: a cash flow is what moved during the period.
"""

from decimal import Decimal
from typing import Mapping, Optional

import structlog

from finstatements.statement_engine.models import ZERO, CashFlowAggregates

logger = structlog.get_logger(__name__)

OPERATING_EXPENSE_PREFIXES = ("8", "9")
ASSET_PURCHASE_ACCOUNT = "2000"
INVESTMENT_ACCOUNT = "2200"
LONG_TERM_LOAN_ACCOUNT = "4000"


class CashFlowExtractor:
    """
    Classifies period movements into cash flow activities.

    Bucketing by account code:
    - 8xxx / 9xxx: operating expenses (positive movement is an outflow)
    - 2000: purchase of property, plant & equipment (investing)
    - 2200: purchase of investments (investing)
    - 4000: long-term loans; a debit movement is a repayment, a credit
      movement is new borrowing (financing)
    Every other account does not move cash in this model.
    """

    def __init__(self, cash_account_code: Optional[str] = None):
        self.cash_account_code = cash_account_code

    def extract_cash_flows(self, movements: Mapping[str, Decimal]) -> CashFlowAggregates:
        """
        Fold movements into cash flow aggregates.

        Args:
            movements: Account code -> net debit-minus-credit for the period,
                excluding the cash account.

        Returns:
            CashFlowAggregates with activity subtotals.
        """
        operating_expenses = ZERO
        asset_purchases = ZERO
        investments = ZERO
        loan_proceeds = ZERO
        loan_payments = ZERO
        ignored = 0

        for account_code, net_amount in movements.items():
            if net_amount == ZERO or account_code == self.cash_account_code:
                continue

            if account_code.startswith(OPERATING_EXPENSE_PREFIXES):
                operating_expenses += net_amount
            elif account_code == ASSET_PURCHASE_ACCOUNT:
                asset_purchases += net_amount
            elif account_code == INVESTMENT_ACCOUNT:
                investments += net_amount
            elif account_code == LONG_TERM_LOAN_ACCOUNT:
                if net_amount > ZERO:
                    loan_payments += net_amount
                else:
                    loan_proceeds += abs(net_amount)
            else:
                ignored += 1

        aggregates = CashFlowAggregates(
            operating_cash_flow=ZERO - operating_expenses,
            investing_cash_flow=ZERO - (asset_purchases + investments),
            financing_cash_flow=loan_proceeds - loan_payments,
            operating_expenses=operating_expenses,
            asset_purchases=asset_purchases,
            investments=investments,
            loan_proceeds=loan_proceeds,
            loan_payments=loan_payments,
        )

        logger.debug(
            "Extracted cash flows",
            accounts=len(movements),
            ignored_accounts=ignored,
            net_cash_change=str(aggregates.net_cash_change),
        )

        return aggregates
