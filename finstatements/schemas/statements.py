"""
Pydantic schemas for statement API endpoints.

Response models mirror the engine's statement dataclasses. They are
validated from `statement.to_dict()`; Decimal amounts serialize as strings.
"""
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ReconciliationResponse(BaseModel):
    """Outcome of a closure check."""

    balances: bool = Field(..., description="Whether the two sides agree within tolerance")
    difference: Decimal = Field(..., description="Left side minus right side")
    direction: str = Field(..., description="assets_exceed, liabilities_equity_exceed or balanced")
    left: Decimal
    right: Decimal
    tolerance: Decimal


class StatementHeaderResponse(BaseModel):
    """Report header metadata."""

    company_name: str
    registration_number: Optional[str] = None
    period_name: str
    start_date: date
    end_date: date


class StatementLineResponse(BaseModel):
    label: str
    amount: Decimal
    code: Optional[str] = Field(None, description="Account code; null for computed lines")


class StatementSectionResponse(BaseModel):
    title: str
    lines: List[StatementLineResponse]
    total: Decimal


class TrialBalanceLineResponse(BaseModel):
    account_code: str
    account_name: str
    debit: Decimal
    credit: Decimal


class TrialBalanceResponse(BaseModel):
    """Response model for a trial balance."""

    header: Optional[StatementHeaderResponse] = None
    lines: List[TrialBalanceLineResponse]
    total_debits: Decimal
    total_credits: Decimal
    reconciliation: ReconciliationResponse
    unclassified_accounts: List[str] = Field(
        default_factory=list,
        description="Account codes outside every classification range",
    )


class CategoryTotalsResponse(BaseModel):
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    total_revenue: Decimal
    total_expenses: Decimal


class DerivedFiguresResponse(BaseModel):
    net_profit: Decimal
    opening_equity: Decimal
    retained_earnings: Decimal


class BalanceSheetResponse(BaseModel):
    """Response model for a balance sheet."""

    header: Optional[StatementHeaderResponse] = None
    assets: StatementSectionResponse
    liabilities: StatementSectionResponse
    equity: StatementSectionResponse
    totals: CategoryTotalsResponse
    derived: DerivedFiguresResponse
    total_liabilities_and_equity: Decimal
    reconciliation: ReconciliationResponse


class IncomeStatementResponse(BaseModel):
    """Response model for an income statement."""

    header: Optional[StatementHeaderResponse] = None
    revenue: StatementSectionResponse
    expenses: StatementSectionResponse
    net_profit: Decimal


class CashFlowAggregatesResponse(BaseModel):
    operating_cash_flow: Decimal
    investing_cash_flow: Decimal
    financing_cash_flow: Decimal
    operating_expenses: Decimal
    asset_purchases: Decimal
    investments: Decimal
    loan_proceeds: Decimal
    loan_payments: Decimal


class CashFlowStatementResponse(BaseModel):
    """Response model for a cash flow statement."""

    header: Optional[StatementHeaderResponse] = None
    operating: StatementSectionResponse
    investing: StatementSectionResponse
    financing: StatementSectionResponse
    aggregates: CashFlowAggregatesResponse
    net_cash_change: Decimal
    opening_cash_balance: Decimal
    calculated_ending_balance: Decimal
    actual_ending_balance: Decimal
    reconciliation: ReconciliationResponse


class ErrorResponse(BaseModel):
    """Response model for API errors."""

    error: bool = True
    error_code: str = Field(..., description="Error code, e.g. FS-201")
    message: str = Field(..., description="Error message")
    details: Dict[str, Any] = Field(default_factory=dict, description="Additional error details")
