"""
Integration tests for statement API endpoints.

Generates every statement from the seeded ledger through the HTTP API.
"""
from decimal import Decimal
from unittest.mock import patch

from fastapi.testclient import TestClient

from finstatements.exceptions import LedgerUnavailableError
from finstatements.main import app
from finstatements.models import Company


def statement_url(ledger, statement: str) -> str:
    return f"/api/v1/companies/{ledger.company.id}/periods/{ledger.period.id}/{statement}"


class TestTrialBalanceEndpoint:
    """Tests for GET .../trial-balance."""

    def test_trial_balance(self, client: TestClient, ledger):
        response = client.get(statement_url(ledger, "trial-balance"))

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["total_debits"]) == Decimal("1900.00")
        assert Decimal(data["total_credits"]) == Decimal("1900.00")
        assert data["reconciliation"]["balances"] is True
        assert data["reconciliation"]["direction"] == "balanced"
        assert [line["account_code"] for line in data["lines"]] == [
            "1100", "1200", "2000", "4000", "5000", "6000", "8000",
        ]

    def test_header(self, client: TestClient, ledger):
        data = client.get(statement_url(ledger, "trial-balance")).json()

        assert data["header"]["company_name"] == "Acme Trading (Pty) Ltd"
        assert data["header"]["registration_number"] == "2020/123456/07"
        assert data["header"]["period_name"] == "FY2026"
        assert data["header"]["start_date"] == "2026-01-01"
        assert data["header"]["end_date"] == "2026-12-31"


class TestBalanceSheetEndpoint:
    """Tests for GET .../balance-sheet."""

    def test_balance_sheet(self, client: TestClient, ledger):
        response = client.get(statement_url(ledger, "balance-sheet"))

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["totals"]["total_assets"]) == Decimal("1700.00")
        assert Decimal(data["totals"]["total_liabilities"]) == Decimal("400.00")
        assert Decimal(data["derived"]["net_profit"]) == Decimal("300.00")
        assert Decimal(data["derived"]["retained_earnings"]) == Decimal("1300.00")
        assert Decimal(data["total_liabilities_and_equity"]) == Decimal("1700.00")
        assert data["reconciliation"]["balances"] is True
        assert data["equity"]["lines"][-1]["code"] is None

    def test_unbalanced_sheet_still_returned(self, client: TestClient, ledger):
        """A one-sided entry is reported on the statement, not as an error."""
        ledger.post("JE-900", "Suspense", [("1200", "40.00", "")])

        response = client.get(statement_url(ledger, "balance-sheet"))

        assert response.status_code == 200
        reconciliation = response.json()["reconciliation"]
        assert reconciliation["balances"] is False
        assert Decimal(reconciliation["difference"]) == Decimal("40.00")
        assert reconciliation["direction"] == "assets_exceed"


class TestIncomeStatementEndpoint:

    def test_income_statement(self, client: TestClient, ledger):
        response = client.get(statement_url(ledger, "income-statement"))

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["revenue"]["total"]) == Decimal("500.00")
        assert Decimal(data["expenses"]["total"]) == Decimal("200.00")
        assert Decimal(data["net_profit"]) == Decimal("300.00")


class TestCashFlowEndpoint:
    """Tests for GET .../cash-flow."""

    def test_cash_flow_reconciles(self, client: TestClient, ledger):
        response = client.get(statement_url(ledger, "cash-flow"))

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["opening_cash_balance"]) == Decimal("1000.00")
        assert Decimal(data["operating"]["total"]) == Decimal("-200.00")
        assert Decimal(data["investing"]["total"]) == Decimal("-300.00")
        assert Decimal(data["financing"]["total"]) == Decimal("400.00")
        assert Decimal(data["net_cash_change"]) == Decimal("-100.00")
        assert Decimal(data["calculated_ending_balance"]) == Decimal("900.00")
        assert Decimal(data["actual_ending_balance"]) == Decimal("900.00")
        assert data["reconciliation"]["balances"] is True

    def test_cash_sale_is_unreconciled(self, client: TestClient, ledger):
        """Revenue received in cash is not an extracted cash flow."""
        ledger.post("JE-500", "Cash sale", [("1100", "50.00", ""), ("6000", "", "50.00")])

        data = client.get(statement_url(ledger, "cash-flow")).json()

        assert data["reconciliation"]["balances"] is False
        assert Decimal(data["reconciliation"]["difference"]) == Decimal("50.00")


class TestErrorResponses:
    """Tests for error mapping."""

    def test_unknown_company(self, client: TestClient, ledger):
        response = client.get(f"/api/v1/companies/9999/periods/{ledger.period.id}/trial-balance")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] is True
        assert data["error_code"] == "FS-201"
        assert data["details"] == {"company_id": 9999}

    def test_unknown_fiscal_period(self, client: TestClient, ledger):
        response = client.get(f"/api/v1/companies/{ledger.company.id}/periods/9999/balance-sheet")

        assert response.status_code == 404
        assert response.json()["error_code"] == "FS-202"

    def test_period_of_another_company(self, client: TestClient, db_session, ledger):
        other = Company(name="Other Holdings")
        db_session.add(other)
        db_session.commit()

        response = client.get(f"/api/v1/companies/{other.id}/periods/{ledger.period.id}/balance-sheet")

        assert response.status_code == 404
        assert response.json()["error_code"] == "FS-202"

    def test_ledger_unavailable(self, client: TestClient, ledger):
        with patch(
            "finstatements.services.ledger_service.LedgerService.get_closing_balances",
            side_effect=LedgerUnavailableError("get_closing_balances", "timeout"),
        ):
            response = client.get(statement_url(ledger, "balance-sheet"))

        assert response.status_code == 503
        assert response.json()["error_code"] == "FS-203"

    def test_non_integer_identifier(self, client: TestClient):
        response = client.get("/api/v1/companies/abc/periods/1/trial-balance")

        assert response.status_code == 422

    def test_unexpected_error(self, db_session):
        from finstatements.database import get_db

        def override_get_db():
            yield db_session

        app.dependency_overrides[get_db] = override_get_db
        try:
            with TestClient(app, raise_server_exceptions=False) as test_client:
                with patch(
                    "finstatements.services.ledger_service.LedgerService.get_company",
                    side_effect=RuntimeError("boom"),
                ):
                    response = test_client.get("/api/v1/companies/1/periods/1/trial-balance")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json()["error_code"] == "FS-999"
