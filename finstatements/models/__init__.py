"""Models package."""
from finstatements.models.ledger import (
    Account,
    Company,
    FiscalPeriod,
    JournalEntry,
    JournalEntryLine,
)

__all__ = [
    "Account", "Company", "FiscalPeriod",
    "JournalEntry", "JournalEntryLine",
]
