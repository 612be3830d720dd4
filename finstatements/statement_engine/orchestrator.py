"""
Orchestrator for the statement engine.

Main entry point that coordinates one statement generation:
1. Validate the company and fiscal period references
2. Read header metadata and ledger inputs from the ledger source
3. Classify and aggregate
4. Build the statement, reconciliation included

Ledger failures propagate unchanged; no partial statement is returned.
"""

from typing import List, Optional

import structlog

from finstatements.config import Settings, get_settings
from finstatements.exceptions import MissingReferenceError
from finstatements.middleware.logging import log_performance
from finstatements.statement_engine.balance_sheet import build_balance_sheet
from finstatements.statement_engine.cash_flow import build_cash_flow_statement
from finstatements.statement_engine.cash_flow_extractor import CashFlowExtractor
from finstatements.statement_engine.income_statement import build_income_statement
from finstatements.statement_engine.ledger_source import LedgerSource
from finstatements.statement_engine.models import (
    BalanceSheet,
    CashFlowStatement,
    FinancialStatements,
    IncomeStatement,
    StatementHeader,
    TrialBalance,
)
from finstatements.statement_engine.trial_balance import build_trial_balance

logger = structlog.get_logger(__name__)


class StatementEngine:
    """
    Generates financial statements for one company and fiscal period.

    Each call is independent: inputs are read fresh from the ledger source,
    and nothing is written back.
    """

    def __init__(self, ledger: LedgerSource, settings: Optional[Settings] = None):
        self.ledger = ledger
        self.settings = settings or get_settings()
        self.cash_flow_extractor = CashFlowExtractor(
            cash_account_code=self.settings.cash_account_code,
        )

    def _require_references(self, company_id: Optional[int], fiscal_period_id: Optional[int]) -> None:
        if company_id is None:
            raise MissingReferenceError("company_id")
        if fiscal_period_id is None:
            raise MissingReferenceError("fiscal_period_id")

    def _header(self, company_id: int, fiscal_period_id: int) -> StatementHeader:
        company = self.ledger.get_company(company_id)
        period = self.ledger.get_fiscal_period(company_id, fiscal_period_id)
        return StatementHeader(
            company_name=company.name,
            registration_number=company.registration_number,
            period_name=period.period_name,
            start_date=period.start_date,
            end_date=period.end_date,
        )

    @log_performance("trial_balance")
    def generate_trial_balance(self, company_id: int, fiscal_period_id: int) -> TrialBalance:
        """Trial balance from General Ledger closing balances."""
        self._require_references(company_id, fiscal_period_id)
        logger.info("Generating trial balance", company_id=company_id, fiscal_period_id=fiscal_period_id)

        header = self._header(company_id, fiscal_period_id)
        balances = self.ledger.get_closing_balances(company_id, fiscal_period_id)
        return build_trial_balance(balances, header=header)

    @log_performance("balance_sheet")
    def generate_balance_sheet(self, company_id: int, fiscal_period_id: int) -> BalanceSheet:
        """Balance sheet from the same closing balances as the trial balance."""
        self._require_references(company_id, fiscal_period_id)
        logger.info("Generating balance sheet", company_id=company_id, fiscal_period_id=fiscal_period_id)

        header = self._header(company_id, fiscal_period_id)
        balances = self.ledger.get_closing_balances(company_id, fiscal_period_id)
        return build_balance_sheet(balances, header=header)

    @log_performance("income_statement")
    def generate_income_statement(self, company_id: int, fiscal_period_id: int) -> IncomeStatement:
        """Income statement from closing balances."""
        self._require_references(company_id, fiscal_period_id)
        logger.info("Generating income statement", company_id=company_id, fiscal_period_id=fiscal_period_id)

        header = self._header(company_id, fiscal_period_id)
        balances = self.ledger.get_closing_balances(company_id, fiscal_period_id)
        return build_income_statement(balances, header=header)

    @log_performance("cash_flow")
    def generate_cash_flow(self, company_id: int, fiscal_period_id: int) -> CashFlowStatement:
        """Cash flow statement from period movements, not closing balances."""
        self._require_references(company_id, fiscal_period_id)
        logger.info("Generating cash flow statement", company_id=company_id, fiscal_period_id=fiscal_period_id)

        header = self._header(company_id, fiscal_period_id)
        return self._build_cash_flow(company_id, fiscal_period_id, header)

    def _build_cash_flow(self, company_id: int, fiscal_period_id: int, header: StatementHeader) -> CashFlowStatement:
        opening_cash = self.ledger.get_opening_cash_balance(company_id)
        movements = self.ledger.get_movements_excluding_cash_account(company_id, fiscal_period_id)
        actual_ending = self.ledger.get_actual_ending_cash_balance(company_id, fiscal_period_id)

        aggregates = self.cash_flow_extractor.extract_cash_flows(movements)
        return build_cash_flow_statement(
            aggregates,
            opening_cash_balance=opening_cash,
            actual_ending_balance=actual_ending,
            header=header,
            tolerance=self.settings.cash_reconciliation_tolerance,
        )

    @log_performance("all_statements")
    def generate_all(self, company_id: int, fiscal_period_id: int) -> FinancialStatements:
        """
        Generate every statement for the period.

        The trial balance, balance sheet and income statement are built from
        one closing-balance read, so they describe the same ledger state.

        Returns:
            FinancialStatements; warnings names each failed closure check.
        """
        self._require_references(company_id, fiscal_period_id)
        logger.info("Generating all statements", company_id=company_id, fiscal_period_id=fiscal_period_id)

        header = self._header(company_id, fiscal_period_id)
        balances = self.ledger.get_closing_balances(company_id, fiscal_period_id)

        trial_balance = build_trial_balance(balances, header=header)
        balance_sheet = build_balance_sheet(balances, header=header)
        income_statement = build_income_statement(balances, header=header)
        cash_flow = self._build_cash_flow(company_id, fiscal_period_id, header)

        warnings: List[str] = []
        if not trial_balance.reconciliation.balances:
            warnings.append("trial_balance_unbalanced")
        if not balance_sheet.reconciliation.balances:
            warnings.append("balance_sheet_unbalanced")
        if not cash_flow.reconciliation.balances:
            warnings.append("cash_flow_unreconciled")
        if trial_balance.unclassified_accounts:
            warnings.append("unclassified_accounts_excluded")

        return FinancialStatements(
            trial_balance=trial_balance,
            balance_sheet=balance_sheet,
            income_statement=income_statement,
            cash_flow=cash_flow,
            warnings=tuple(warnings),
        )


def get_statement_engine(ledger: LedgerSource) -> StatementEngine:
    """Build a StatementEngine with the application settings."""
    return StatementEngine(ledger, settings=get_settings())
