"""
Pytest configuration and fixtures.
"""
import os

# Keep the application engine off the filesystem during tests
os.environ["FINSTATEMENTS_DATABASE_URL"] = "sqlite:///:memory:"

from datetime import date
from decimal import Decimal
from typing import Callable, Dict, Generator, List, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from finstatements.database import Base, get_db
from finstatements.main import app
from finstatements.models import Account, Company, FiscalPeriod, JournalEntry, JournalEntryLine
from finstatements.statement_engine.classifier import normal_side_for_code
from finstatements.statement_engine.models import AccountBalance


# Create in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Engine inputs
# =============================================================================

@pytest.fixture
def make_balance() -> Callable[..., AccountBalance]:
    """Factory for AccountBalance values signed on the code's normal side."""

    def _make(code: str, amount: str, name: str = None) -> AccountBalance:
        return AccountBalance(
            account_code=code,
            account_name=name or f"Account {code}",
            closing_balance=Decimal(amount),
            normal_side=normal_side_for_code(code),
        )

    return _make


@pytest.fixture
def make_balances(make_balance) -> Callable[..., Dict[str, AccountBalance]]:
    """Factory for a balance set from (code, amount) pairs."""

    def _make(*pairs: Tuple[str, str]) -> Dict[str, AccountBalance]:
        return {code: make_balance(code, amount) for code, amount in pairs}

    return _make


# =============================================================================
# Seeded ledger
# =============================================================================

CHART_OF_ACCOUNTS = {
    "1100": "Bank",
    "1200": "Accounts Receivable",
    "2000": "Property, Plant & Equipment",
    "3100": "Accounts Payable",
    "4000": "Long-term Loan",
    "5000": "Share Capital",
    "6000": "Sales",
    "8000": "Rent Expense",
}


class LedgerBuilder:
    """Posts balanced journal entries into the test database."""

    def __init__(self, db: Session, company: Company, period: FiscalPeriod):
        self.db = db
        self.company = company
        self.period = period
        self.accounts: Dict[str, Account] = {}

    def account(self, code: str, name: str = None) -> Account:
        if code not in self.accounts:
            account = Account(
                company_id=self.company.id,
                account_code=code,
                account_name=name or CHART_OF_ACCOUNTS.get(code, f"Account {code}"),
            )
            self.db.add(account)
            self.db.flush()
            self.accounts[code] = account
        return self.accounts[code]

    def post(
        self,
        reference: str,
        description: str,
        lines: List[Tuple[str, str, str]],
        entry_date: date = date(2026, 1, 15),
        in_period: bool = True,
    ) -> JournalEntry:
        """Post an entry; lines are (account_code, debit, credit) with "" for none."""
        entry = JournalEntry(
            company_id=self.company.id,
            fiscal_period_id=self.period.id if in_period else None,
            reference=reference,
            entry_date=entry_date,
            description=description,
        )
        for code, debit, credit in lines:
            entry.lines.append(JournalEntryLine(
                account_id=self.account(code).id,
                debit_amount=Decimal(debit) if debit else None,
                credit_amount=Decimal(credit) if credit else None,
            ))
        self.db.add(entry)
        self.db.commit()
        return entry


@pytest.fixture
def ledger(db_session: Session) -> LedgerBuilder:
    """
    A small balanced ledger for FY2026.

    Cash: opening 1000.00, rent -200.00, equipment -300.00, loan +400.00,
    so the bank account closes at 900.00 and the cash flow reconciles.
    """
    company = Company(name="Acme Trading (Pty) Ltd", registration_number="2020/123456/07")
    db_session.add(company)
    db_session.flush()
    period = FiscalPeriod(
        company_id=company.id,
        period_name="FY2026",
        start_date=date(2026, 1, 1),
        end_date=date(2026, 12, 31),
    )
    db_session.add(period)
    db_session.commit()

    builder = LedgerBuilder(db_session, company, period)
    builder.post("OB-001", "Opening Balance", [
        ("1100", "1000.00", ""),
        ("5000", "", "1000.00"),
    ], entry_date=date(2026, 1, 1))
    builder.post("JE-001", "Credit sale", [
        ("1200", "500.00", ""),
        ("6000", "", "500.00"),
    ])
    builder.post("JE-002", "Rent paid", [
        ("8000", "200.00", ""),
        ("1100", "", "200.00"),
    ])
    builder.post("JE-003", "Equipment purchase", [
        ("2000", "300.00", ""),
        ("1100", "", "300.00"),
    ])
    builder.post("JE-004", "Loan received", [
        ("1100", "400.00", ""),
        ("4000", "", "400.00"),
    ])
    return builder
