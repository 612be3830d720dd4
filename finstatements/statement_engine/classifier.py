"""
Account classifier.

Maps a general-ledger account code to its statement category using the
numeric range of the code. Sub-ledger suffixes ("6100-001") are ignored.
"""

from typing import Optional, Tuple

from finstatements.statement_engine.models import (
    NORMAL_SIDE_BY_CATEGORY,
    AccountCategory,
    NormalSide,
)

ACCOUNT_CODE_MIN_LENGTH = 4

# (lower, upper, category), inclusive, checked in order
CATEGORY_RANGES: Tuple[Tuple[int, int, AccountCategory], ...] = (
    (1000, 2999, AccountCategory.ASSET),
    (3000, 4999, AccountCategory.LIABILITY),
    (5000, 5999, AccountCategory.EQUITY),
    (6000, 7999, AccountCategory.REVENUE),
    (8000, 9999, AccountCategory.EXPENSE),
)


def _numeric_prefix(account_code: Optional[str]) -> Optional[int]:
    if account_code is None or len(account_code) < ACCOUNT_CODE_MIN_LENGTH:
        return None
    prefix = account_code.split("-")[0]
    # int() alone would accept whitespace and underscores
    if not (prefix.isascii() and prefix.isdigit()):
        return None
    return int(prefix)


def classify(account_code: Optional[str]) -> AccountCategory:
    """
    Classify an account code.

    Args:
        account_code: Code such as "1100" or "6100-001".

    Returns:
        The matching AccountCategory, or UNCLASSIFIED for codes that are
        missing, too short, non-numeric or outside every range.
    """
    code = _numeric_prefix(account_code)
    if code is None:
        return AccountCategory.UNCLASSIFIED

    for lower, upper, category in CATEGORY_RANGES:
        if lower <= code <= upper:
            return category

    return AccountCategory.UNCLASSIFIED


def normal_side_for(category: AccountCategory) -> NormalSide:
    """Normal balance side of a category."""
    return NORMAL_SIDE_BY_CATEGORY[category]


def normal_side_for_code(account_code: Optional[str]) -> NormalSide:
    """Normal balance side implied by an account code's range."""
    return normal_side_for(classify(account_code))
