"""
Statement engine - financial statements derived from General Ledger balances.

Accounting hierarchy followed throughout:
Journal Entries > General Ledger > Trial Balance > Financial Statements

Key principles:
1. Classification by account-code range, never by name
2. Decimal arithmetic only, accumulated by addition
3. Computation returns structured data; presentation is somebody else's job
4. Imbalances are reported on the statement, not raised
"""

from finstatements.statement_engine.aggregator import aggregate, classify_balances
from finstatements.statement_engine.balance_sheet import build_balance_sheet
from finstatements.statement_engine.cash_flow import build_cash_flow_statement
from finstatements.statement_engine.cash_flow_extractor import CashFlowExtractor
from finstatements.statement_engine.classifier import classify, normal_side_for_code
from finstatements.statement_engine.income_statement import build_income_statement
from finstatements.statement_engine.models import (
    AccountBalance,
    AccountCategory,
    NormalSide,
    ReconciliationDirection,
    ReconciliationResult,
)
from finstatements.statement_engine.orchestrator import StatementEngine, get_statement_engine
from finstatements.statement_engine.reconciliation import reconcile
from finstatements.statement_engine.trial_balance import build_trial_balance

__all__ = [
    "AccountBalance",
    "AccountCategory",
    "CashFlowExtractor",
    "NormalSide",
    "ReconciliationDirection",
    "ReconciliationResult",
    "StatementEngine",
    "aggregate",
    "build_balance_sheet",
    "build_cash_flow_statement",
    "build_income_statement",
    "build_trial_balance",
    "classify",
    "classify_balances",
    "get_statement_engine",
    "normal_side_for_code",
    "reconcile",
]
