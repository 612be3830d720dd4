"""
Financial statement API routes.

Each endpoint generates one statement for a company and fiscal period from
the current state of the ledger. Nothing is stored.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finstatements.database import get_db
from finstatements.schemas.statements import (
    BalanceSheetResponse,
    CashFlowStatementResponse,
    ErrorResponse,
    IncomeStatementResponse,
    TrialBalanceResponse,
)
from finstatements.services.ledger_service import LedgerService
from finstatements.statement_engine.orchestrator import StatementEngine, get_statement_engine

router = APIRouter()

STATEMENT_PATH = "/companies/{company_id}/periods/{fiscal_period_id}"

ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Company or fiscal period not found"},
    503: {"model": ErrorResponse, "description": "Ledger store unavailable"},
}


def get_engine(db: Session = Depends(get_db)) -> StatementEngine:
    """FastAPI dependency: statement engine reading from the request's session."""
    return get_statement_engine(LedgerService(db))


# =============================================================================
# Endpoints
# =============================================================================

@router.get(
    f"{STATEMENT_PATH}/trial-balance",
    response_model=TrialBalanceResponse,
    responses=ERROR_RESPONSES,
    summary="Trial balance",
)
def get_trial_balance(
    company_id: int,
    fiscal_period_id: int,
    engine: StatementEngine = Depends(get_engine),
) -> TrialBalanceResponse:
    """Debit/credit listing of every account with a closing balance."""
    statement = engine.generate_trial_balance(company_id, fiscal_period_id)
    return TrialBalanceResponse.model_validate(statement.to_dict())


@router.get(
    f"{STATEMENT_PATH}/balance-sheet",
    response_model=BalanceSheetResponse,
    responses=ERROR_RESPONSES,
    summary="Balance sheet",
)
def get_balance_sheet(
    company_id: int,
    fiscal_period_id: int,
    engine: StatementEngine = Depends(get_engine),
) -> BalanceSheetResponse:
    """
    Assets, liabilities and equity at period end.

    An out-of-balance sheet is still returned with status 200; see the
    reconciliation block.
    """
    statement = engine.generate_balance_sheet(company_id, fiscal_period_id)
    return BalanceSheetResponse.model_validate(statement.to_dict())


@router.get(
    f"{STATEMENT_PATH}/income-statement",
    response_model=IncomeStatementResponse,
    responses=ERROR_RESPONSES,
    summary="Income statement",
)
def get_income_statement(
    company_id: int,
    fiscal_period_id: int,
    engine: StatementEngine = Depends(get_engine),
) -> IncomeStatementResponse:
    statement = engine.generate_income_statement(company_id, fiscal_period_id)
    return IncomeStatementResponse.model_validate(statement.to_dict())


@router.get(
    f"{STATEMENT_PATH}/cash-flow",
    response_model=CashFlowStatementResponse,
    responses=ERROR_RESPONSES,
    summary="Cash flow statement",
)
def get_cash_flow(
    company_id: int,
    fiscal_period_id: int,
    engine: StatementEngine = Depends(get_engine),
) -> CashFlowStatementResponse:
    """Cash movements by activity, reconciled against the cash account."""
    statement = engine.generate_cash_flow(company_id, fiscal_period_id)
    return CashFlowStatementResponse.model_validate(statement.to_dict())
