"""
Custom exceptions for finstatements.

Provides a hierarchy of exceptions with error codes for consistent error handling.
An out-of-balance statement is never an exception: it is reported on the
statement's reconciliation result.
"""
from typing import Any, Dict, Optional


class FinStatementsError(Exception):
    """
    Base exception for all finstatements errors.

    Attributes:
        error_code: Unique error code (e.g., FS-001)
        message: Human-readable error message
        details: Additional error context
    """
    error_code: str = "FS-000"
    http_status: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        return {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


# Input Errors (FS-1XX)
class InputError(FinStatementsError):
    """A required company or fiscal period reference is missing."""
    error_code = "FS-100"
    http_status = 400

    def __init__(self, message: str = "Invalid statement request", **kwargs):
        super().__init__(message, **kwargs)


class MissingReferenceError(InputError):
    """A required identifier was not supplied."""
    error_code = "FS-101"

    def __init__(self, field_name: str, **kwargs):
        message = f"{field_name} is required"
        super().__init__(message, details={"field": field_name}, **kwargs)


# Upstream Ledger Errors (FS-2XX)
class UpstreamFailure(FinStatementsError):
    """The ledger store failed; no statement can be produced."""
    error_code = "FS-200"
    http_status = 502

    def __init__(self, message: str = "Ledger store request failed", **kwargs):
        super().__init__(message, **kwargs)


class CompanyNotFoundError(UpstreamFailure):
    """Company row does not exist in the ledger store."""
    error_code = "FS-201"
    http_status = 404

    def __init__(self, company_id: int, **kwargs):
        message = f"Company {company_id} not found"
        super().__init__(message, details={"company_id": company_id}, **kwargs)


class FiscalPeriodNotFoundError(UpstreamFailure):
    """Fiscal period row does not exist in the ledger store."""
    error_code = "FS-202"
    http_status = 404

    def __init__(self, fiscal_period_id: int, **kwargs):
        message = f"Fiscal period {fiscal_period_id} not found"
        super().__init__(message, details={"fiscal_period_id": fiscal_period_id}, **kwargs)


class LedgerUnavailableError(UpstreamFailure):
    """Database connectivity or query failure."""
    error_code = "FS-203"
    http_status = 503

    def __init__(self, operation: str, reason: str, **kwargs):
        message = f"Ledger query '{operation}' failed"
        super().__init__(
            message,
            details={"operation": operation, "reason": reason},
            **kwargs,
        )
