"""
finstatements - financial statement derivation from a double-entry ledger.

Builds Trial Balance, Balance Sheet, Cash Flow and Income Statement results
for one company and fiscal period, and reports whether they reconcile.
"""

__version__ = "1.0.0"
