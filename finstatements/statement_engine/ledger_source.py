"""
Ledger source protocol.

The engine reads its inputs through this interface; the SQLAlchemy-backed
LedgerService is the production implementation, tests use in-memory fakes.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, Optional, Protocol

from finstatements.statement_engine.models import AccountBalanceSet


class CompanyInfo(Protocol):
    name: str
    registration_number: Optional[str]


class FiscalPeriodInfo(Protocol):
    period_name: str
    start_date: date
    end_date: date


class LedgerSource(Protocol):
    """Read-only queries against a posted double-entry ledger."""

    def get_company(self, company_id: int) -> CompanyInfo:
        ...

    def get_fiscal_period(self, company_id: int, fiscal_period_id: int) -> FiscalPeriodInfo:
        """Period metadata; periods of other companies are not found."""
        ...

    def get_closing_balances(self, company_id: int, fiscal_period_id: int) -> AccountBalanceSet:
        ...

    def get_movements_excluding_cash_account(
        self, company_id: int, fiscal_period_id: int
    ) -> Dict[str, Decimal]:
        ...

    def get_opening_cash_balance(self, company_id: int) -> Decimal:
        ...

    def get_actual_ending_cash_balance(self, company_id: int, fiscal_period_id: int) -> Decimal:
        ...
