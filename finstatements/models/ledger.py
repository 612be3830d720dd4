"""
Ledger store models.

Companies, fiscal periods, the chart of accounts and posted journal entries.
Statements are derived from these rows; nothing in this package writes them
during statement generation.
"""
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from finstatements.database import Base

# Money columns keep exact cents
MONEY = Numeric(precision=15, scale=2)


class Company(Base):
    """A reporting entity."""

    __tablename__ = "companies"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    registration_number = Column(String(100), nullable=True)
    tax_number = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    fiscal_periods = relationship("FiscalPeriod", back_populates="company", cascade="all, delete-orphan")
    accounts = relationship("Account", back_populates="company", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Company {self.name}>"


class FiscalPeriod(Base):
    """A fiscal period belonging to one company."""

    __tablename__ = "fiscal_periods"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    period_name = Column(String(100), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_closed = Column(Boolean, default=False, nullable=False)

    company = relationship("Company", back_populates="fiscal_periods")

    def __repr__(self) -> str:
        return f"<FiscalPeriod {self.period_name}>"


class Account(Base):
    """A chart-of-accounts entry. Its category follows from the code range."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    account_code = Column(String(20), nullable=False)
    account_name = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    company = relationship("Company", back_populates="accounts")
    lines = relationship("JournalEntryLine", back_populates="account")

    __table_args__ = (
        UniqueConstraint("company_id", "account_code", name="uq_company_account_code"),
    )

    def __repr__(self) -> str:
        return f"<Account {self.account_code} {self.account_name}>"


class JournalEntry(Base):
    """
    A posted journal entry.

    fiscal_period_id may be NULL for entries recorded outside any period
    (for example imported opening balances).
    """

    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    fiscal_period_id = Column(Integer, ForeignKey("fiscal_periods.id"), nullable=True, index=True)
    reference = Column(String(100), nullable=True)
    entry_date = Column(Date, nullable=False)
    description = Column(Text, nullable=True)

    lines = relationship("JournalEntryLine", back_populates="journal_entry", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<JournalEntry {self.reference}>"


class JournalEntryLine(Base):
    """One debit or credit leg of a journal entry."""

    __tablename__ = "journal_entry_lines"

    id = Column(Integer, primary_key=True)
    journal_entry_id = Column(
        Integer,
        ForeignKey("journal_entries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    debit_amount = Column(MONEY, nullable=True)
    credit_amount = Column(MONEY, nullable=True)
    description = Column(Text, nullable=True)

    journal_entry = relationship("JournalEntry", back_populates="lines")
    account = relationship("Account", back_populates="lines")
