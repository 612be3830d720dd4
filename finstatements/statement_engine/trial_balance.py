"""
Trial balance builder.

Lists every classified account with a balance in its debit or credit
column and checks that the two columns agree exactly.
"""

from typing import List, Optional

import structlog

from finstatements.statement_engine.classifier import classify
from finstatements.statement_engine.models import (
    ZERO,
    AccountBalanceSet,
    AccountCategory,
    StatementHeader,
    TrialBalance,
    TrialBalanceLine,
)
from finstatements.statement_engine.reconciliation import log_reconciliation, reconcile

logger = structlog.get_logger(__name__)


def build_trial_balance(
    balances: AccountBalanceSet,
    header: Optional[StatementHeader] = None,
) -> TrialBalance:
    """
    Build a trial balance from closing balances.

    Unclassified accounts are left out of the lines and the column totals;
    their codes are returned in unclassified_accounts.

    Args:
        balances: Account code -> AccountBalance.
        header: Optional report header metadata.

    Returns:
        TrialBalance with a zero-tolerance debit/credit reconciliation.
    """
    lines: List[TrialBalanceLine] = []
    unclassified: List[str] = []
    total_debits = ZERO
    total_credits = ZERO

    for code in sorted(balances):
        balance = balances[code]
        if classify(code) == AccountCategory.UNCLASSIFIED:
            unclassified.append(code)
            continue

        debit = balance.trial_balance_debit()
        credit = balance.trial_balance_credit()
        if debit == ZERO and credit == ZERO:
            continue

        total_debits += debit
        total_credits += credit
        lines.append(TrialBalanceLine(
            account_code=code,
            account_name=balance.account_name,
            debit=debit,
            credit=credit,
        ))

    if unclassified:
        logger.warning(
            "Unclassified accounts excluded from trial balance",
            account_codes=unclassified,
        )

    reconciliation = reconcile(total_debits, total_credits)
    log_reconciliation("trial_balance", reconciliation)

    return TrialBalance(
        lines=tuple(lines),
        total_debits=total_debits,
        total_credits=total_credits,
        reconciliation=reconciliation,
        unclassified_accounts=tuple(unclassified),
        header=header,
    )
