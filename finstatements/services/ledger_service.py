"""
Ledger service.

SQLAlchemy implementation of the ledger source used by the statement
engine. Reads posted journal entry lines and computes General Ledger
closing balances; never writes.
"""

from contextlib import contextmanager
from decimal import Decimal
from typing import Dict, Iterator, Optional

import structlog
from sqlalchemy import case, func, literal, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finstatements.config import Settings, get_settings
from finstatements.exceptions import (
    CompanyNotFoundError,
    FiscalPeriodNotFoundError,
    LedgerUnavailableError,
)
from finstatements.models.ledger import (
    MONEY,
    Account,
    Company,
    FiscalPeriod,
    JournalEntry,
    JournalEntryLine,
)
from finstatements.statement_engine.classifier import normal_side_for_code
from finstatements.statement_engine.models import ZERO, AccountBalance, NormalSide

logger = structlog.get_logger(__name__)

CENT = Decimal("0.01")


def _money(value) -> Decimal:
    """Normalise a database amount to an exact cent Decimal."""
    if value is None:
        return ZERO.quantize(CENT)
    return Decimal(str(value)).quantize(CENT)


@contextmanager
def _ledger_query(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Ledger query failed", operation=operation, error=str(e))
        raise LedgerUnavailableError(operation, str(e)) from e


class LedgerService:
    """
    Read-only queries over companies, fiscal periods and journal entries.

    Closing balances follow the General Ledger rules: the opening balance
    comes from opening-balance entries posted in the period, the remaining
    lines are period movements, and both are signed on the account's normal
    side (debit-normal: debit minus credit; credit-normal: credit minus debit).
    """

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()

    # =========================================================================
    # Metadata
    # =========================================================================

    def get_company(self, company_id: int) -> Company:
        with _ledger_query("get_company"):
            company = self.db.query(Company).filter(Company.id == company_id).first()
        if company is None:
            raise CompanyNotFoundError(company_id)
        return company

    def get_fiscal_period(self, company_id: int, fiscal_period_id: int) -> FiscalPeriod:
        with _ledger_query("get_fiscal_period"):
            period = (
                self.db.query(FiscalPeriod)
                .filter(
                    FiscalPeriod.id == fiscal_period_id,
                    FiscalPeriod.company_id == company_id,
                )
                .first()
            )
        if period is None:
            raise FiscalPeriodNotFoundError(fiscal_period_id)
        return period

    # =========================================================================
    # General Ledger closing balances
    # =========================================================================

    def _opening_entry_filter(self):
        """Entries that carry opening balances rather than period activity."""
        return or_(
            func.lower(JournalEntry.description).like("%opening%balance%"),
            JournalEntry.reference.like(f"{self.settings.opening_balance_reference_prefix}%"),
        )

    def get_closing_balances(self, company_id: int, fiscal_period_id: int) -> Dict[str, AccountBalance]:
        """
        Closing balance of every account with journal activity in the period.

        Returns:
            Dict of account code -> AccountBalance.
        """
        no_amount = literal(0, type_=MONEY)
        debit = func.coalesce(JournalEntryLine.debit_amount, no_amount)
        credit = func.coalesce(JournalEntryLine.credit_amount, no_amount)
        is_opening = self._opening_entry_filter()

        with _ledger_query("get_closing_balances"):
            rows = (
                self.db.query(
                    Account.account_code,
                    Account.account_name,
                    func.sum(case((is_opening, debit), else_=no_amount)).label("opening_debits"),
                    func.sum(case((is_opening, credit), else_=no_amount)).label("opening_credits"),
                    func.sum(case((is_opening, no_amount), else_=debit)).label("period_debits"),
                    func.sum(case((is_opening, no_amount), else_=credit)).label("period_credits"),
                )
                .join(JournalEntryLine, JournalEntryLine.account_id == Account.id)
                .join(JournalEntry, JournalEntryLine.journal_entry_id == JournalEntry.id)
                .filter(
                    JournalEntry.company_id == company_id,
                    JournalEntry.fiscal_period_id == fiscal_period_id,
                )
                .group_by(Account.account_code, Account.account_name)
                .order_by(Account.account_code)
                .all()
            )

        balances: Dict[str, AccountBalance] = {}
        for row in rows:
            normal_side = normal_side_for_code(row.account_code)
            opening_debits = _money(row.opening_debits)
            opening_credits = _money(row.opening_credits)
            period_debits = _money(row.period_debits)
            period_credits = _money(row.period_credits)

            if normal_side == NormalSide.DEBIT:
                opening_balance = opening_debits - opening_credits
                movement = period_debits - period_credits
            else:
                opening_balance = opening_credits - opening_debits
                movement = period_credits - period_debits

            balances[row.account_code] = AccountBalance(
                account_code=row.account_code,
                account_name=row.account_name,
                closing_balance=opening_balance + movement,
                normal_side=normal_side,
                opening_balance=opening_balance,
                period_debits=period_debits,
                period_credits=period_credits,
            )

        logger.info(
            "Loaded closing balances",
            company_id=company_id,
            fiscal_period_id=fiscal_period_id,
            accounts=len(balances),
        )
        return balances

    # =========================================================================
    # Cash flow inputs
    # =========================================================================

    def get_movements_excluding_cash_account(
        self, company_id: int, fiscal_period_id: int
    ) -> Dict[str, Decimal]:
        """Net debit-minus-credit per account for the period, cash account excluded."""
        net_amount = func.sum(
            func.coalesce(JournalEntryLine.debit_amount, 0)
            - func.coalesce(JournalEntryLine.credit_amount, 0)
        )

        with _ledger_query("get_movements_excluding_cash_account"):
            rows = (
                self.db.query(Account.account_code, net_amount.label("net_amount"))
                .join(JournalEntryLine, JournalEntryLine.account_id == Account.id)
                .join(JournalEntry, JournalEntryLine.journal_entry_id == JournalEntry.id)
                .filter(
                    JournalEntry.company_id == company_id,
                    JournalEntry.fiscal_period_id == fiscal_period_id,
                    Account.account_code != self.settings.cash_account_code,
                )
                .group_by(Account.account_code)
                .having(net_amount != 0)
                .all()
            )

        movements = {row.account_code: _money(row.net_amount) for row in rows}
        return {code: amount for code, amount in movements.items() if amount != ZERO}

    def get_opening_cash_balance(self, company_id: int) -> Decimal:
        """
        Cash held before any period activity.

        Taken from the first cash account line of an entry whose description
        carries the opening balance marker. Zero when there is none.
        """
        marker = self.settings.opening_balance_marker

        with _ledger_query("get_opening_cash_balance"):
            row = (
                self.db.query(
                    JournalEntryLine.debit_amount,
                    JournalEntryLine.credit_amount,
                )
                .join(JournalEntry, JournalEntryLine.journal_entry_id == JournalEntry.id)
                .join(Account, JournalEntryLine.account_id == Account.id)
                .filter(
                    JournalEntry.company_id == company_id,
                    Account.account_code == self.settings.cash_account_code,
                    JournalEntry.description.ilike(f"%{marker}%"),
                )
                .order_by(JournalEntry.entry_date, JournalEntryLine.id)
                .first()
            )

        if row is None:
            return _money(None)
        return _money(row.debit_amount) - _money(row.credit_amount)

    def get_actual_ending_cash_balance(self, company_id: int, fiscal_period_id: int) -> Decimal:
        """
        Balance of the cash account for the period.

        Entries without a fiscal period are included as well.
        """
        with _ledger_query("get_actual_ending_cash_balance"):
            total = (
                self.db.query(
                    func.sum(
                        func.coalesce(JournalEntryLine.debit_amount, 0)
                        - func.coalesce(JournalEntryLine.credit_amount, 0)
                    )
                )
                .join(JournalEntry, JournalEntryLine.journal_entry_id == JournalEntry.id)
                .join(Account, JournalEntryLine.account_id == Account.id)
                .filter(
                    JournalEntry.company_id == company_id,
                    Account.account_code == self.settings.cash_account_code,
                    or_(
                        JournalEntry.fiscal_period_id == fiscal_period_id,
                        JournalEntry.fiscal_period_id.is_(None),
                    ),
                )
                .scalar()
            )

        return _money(total)
