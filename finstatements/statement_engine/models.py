"""
Data structures for the statement engine.

Implements the values passed between the engine stages:
- AccountBalance snapshots read from the General Ledger
- CategoryTotals / DerivedFigures produced by the aggregator
- CashFlowAggregates produced by the cash flow extractor
- ReconciliationResult produced by every closure check
- The structured TrialBalance, BalanceSheet, CashFlowStatement and
  IncomeStatement results

All money is Decimal. Every value here is frozen; accumulation returns new
instances.
"""

import dataclasses
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

ZERO = Decimal("0")


class AccountCategory(str, Enum):
    """Statement category of a general-ledger account."""
    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"
    UNCLASSIFIED = "unclassified"


class NormalSide(str, Enum):
    """Column in which an account's balance is conventionally shown."""
    DEBIT = "D"
    CREDIT = "C"


NORMAL_SIDE_BY_CATEGORY: Dict[AccountCategory, NormalSide] = {
    AccountCategory.ASSET: NormalSide.DEBIT,
    AccountCategory.EXPENSE: NormalSide.DEBIT,
    AccountCategory.LIABILITY: NormalSide.CREDIT,
    AccountCategory.EQUITY: NormalSide.CREDIT,
    AccountCategory.REVENUE: NormalSide.CREDIT,
    # Raw debit-minus-credit
    AccountCategory.UNCLASSIFIED: NormalSide.DEBIT,
}


class ReconciliationDirection(str, Enum):
    """
    Which side of a comparison is larger.

    The values name the balance sheet sides; for other checks they mean the
    left and right operand respectively.
    """
    LEFT_EXCEEDS = "assets_exceed"
    RIGHT_EXCEEDS = "liabilities_equity_exceed"
    BALANCED = "balanced"


def _plain(value: Any) -> Any:
    """Convert a dataclasses.asdict() tree into JSON-friendly values."""
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


class _Serializable:
    """Mixin giving frozen result dataclasses a deterministic to_dict()."""

    def to_dict(self) -> Dict[str, Any]:
        return _plain(dataclasses.asdict(self))


# =============================================================================
# Ledger Inputs
# =============================================================================

@dataclass(frozen=True)
class AccountBalance(_Serializable):
    """
    Closing balance of one account for one period.

    closing_balance is signed on the account's normal side: a positive value
    on a credit-normal account is a credit balance.
    """
    account_code: str
    account_name: str
    closing_balance: Decimal
    normal_side: NormalSide
    opening_balance: Decimal = ZERO
    period_debits: Decimal = ZERO
    period_credits: Decimal = ZERO

    def trial_balance_debit(self) -> Decimal:
        """Amount shown in the trial balance debit column."""
        if self.normal_side == NormalSide.DEBIT:
            return self.closing_balance if self.closing_balance >= ZERO else ZERO
        return -self.closing_balance if self.closing_balance < ZERO else ZERO

    def trial_balance_credit(self) -> Decimal:
        """Amount shown in the trial balance credit column."""
        if self.normal_side == NormalSide.DEBIT:
            return -self.closing_balance if self.closing_balance < ZERO else ZERO
        return self.closing_balance if self.closing_balance >= ZERO else ZERO


# Account code -> balance, one company and period
AccountBalanceSet = Mapping[str, AccountBalance]


@dataclass(frozen=True)
class StatementHeader(_Serializable):
    """Report header metadata. Not used in any computation."""
    company_name: str
    registration_number: Optional[str]
    period_name: str
    start_date: date
    end_date: date


# =============================================================================
# Aggregation
# =============================================================================

_TOTAL_FIELDS: Dict[AccountCategory, str] = {
    AccountCategory.ASSET: "total_assets",
    AccountCategory.LIABILITY: "total_liabilities",
    AccountCategory.EQUITY: "total_equity",
    AccountCategory.REVENUE: "total_revenue",
    AccountCategory.EXPENSE: "total_expenses",
}


@dataclass(frozen=True)
class CategoryTotals(_Serializable):
    """Per-category sums of closing balances."""
    total_assets: Decimal = ZERO
    total_liabilities: Decimal = ZERO
    total_equity: Decimal = ZERO
    total_revenue: Decimal = ZERO
    total_expenses: Decimal = ZERO

    def add(self, category: AccountCategory, amount: Decimal) -> "CategoryTotals":
        """Return new totals with amount added to category. Unclassified is ignored."""
        field_name = _TOTAL_FIELDS.get(category)
        if field_name is None:
            return self
        return dataclasses.replace(self, **{field_name: getattr(self, field_name) + amount})


@dataclass(frozen=True)
class DerivedFigures(_Serializable):
    """Figures computed from category totals."""
    net_profit: Decimal
    opening_equity: Decimal
    retained_earnings: Decimal


@dataclass(frozen=True)
class CashFlowAggregates(_Serializable):
    """Period cash movements bucketed by activity."""
    operating_cash_flow: Decimal = ZERO
    investing_cash_flow: Decimal = ZERO
    financing_cash_flow: Decimal = ZERO
    operating_expenses: Decimal = ZERO
    asset_purchases: Decimal = ZERO
    investments: Decimal = ZERO
    loan_proceeds: Decimal = ZERO
    loan_payments: Decimal = ZERO

    @property
    def net_cash_change(self) -> Decimal:
        return self.operating_cash_flow + self.investing_cash_flow + self.financing_cash_flow


# =============================================================================
# Reconciliation
# =============================================================================

@dataclass(frozen=True)
class ReconciliationResult(_Serializable):
    """Outcome of comparing two independently derived totals."""
    balances: bool
    difference: Decimal
    direction: ReconciliationDirection
    left: Decimal = ZERO
    right: Decimal = ZERO
    tolerance: Decimal = ZERO


# =============================================================================
# Statements
# =============================================================================

@dataclass(frozen=True)
class StatementLine(_Serializable):
    """A single presented line. code is None for synthesized lines."""
    label: str
    amount: Decimal
    code: Optional[str] = None


@dataclass(frozen=True)
class StatementSection(_Serializable):
    """An ordered group of lines with its subtotal."""
    title: str
    lines: Tuple[StatementLine, ...]
    total: Decimal


@dataclass(frozen=True)
class TrialBalanceLine(_Serializable):
    account_code: str
    account_name: str
    debit: Decimal
    credit: Decimal


@dataclass(frozen=True)
class TrialBalance(_Serializable):
    """Debit/credit listing of every account with a balance."""
    lines: Tuple[TrialBalanceLine, ...]
    total_debits: Decimal
    total_credits: Decimal
    reconciliation: ReconciliationResult
    unclassified_accounts: Tuple[str, ...] = ()
    header: Optional[StatementHeader] = None


@dataclass(frozen=True)
class BalanceSheet(_Serializable):
    """Assets, liabilities and equity at period end."""
    assets: StatementSection
    liabilities: StatementSection
    equity: StatementSection
    totals: CategoryTotals
    derived: DerivedFigures
    total_liabilities_and_equity: Decimal
    reconciliation: ReconciliationResult
    header: Optional[StatementHeader] = None

    @property
    def total_assets(self) -> Decimal:
        return self.totals.total_assets

    @property
    def total_liabilities(self) -> Decimal:
        return self.totals.total_liabilities

    @property
    def total_equity(self) -> Decimal:
        return self.totals.total_equity


@dataclass(frozen=True)
class CashFlowStatement(_Serializable):
    """Cash movements by activity, reconciled against the cash account."""
    operating: StatementSection
    investing: StatementSection
    financing: StatementSection
    aggregates: CashFlowAggregates
    net_cash_change: Decimal
    opening_cash_balance: Decimal
    calculated_ending_balance: Decimal
    actual_ending_balance: Decimal
    reconciliation: ReconciliationResult
    header: Optional[StatementHeader] = None


@dataclass(frozen=True)
class IncomeStatement(_Serializable):
    """Revenue less expenses for the period."""
    revenue: StatementSection
    expenses: StatementSection
    net_profit: Decimal
    header: Optional[StatementHeader] = None


@dataclass(frozen=True)
class FinancialStatements(_Serializable):
    """All statements generated for one company and period."""
    trial_balance: TrialBalance
    balance_sheet: BalanceSheet
    income_statement: IncomeStatement
    cash_flow: CashFlowStatement
    warnings: Tuple[str, ...] = field(default_factory=tuple)
