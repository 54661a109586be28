"""Seed values for a fresh install.

The live category list and currency are owned by ``ExpenseConfig``; these
constants are only the first-run defaults (overridable through settings).
"""

from typing import Tuple

DEFAULT_CATEGORIES: Tuple[str, ...] = (
    "Food",
    "Groceries",
    "Travel",
    "Rent",
    "Utilities",
    "Entertainment",
    "Healthcare",
    "Shopping",
    "Miscellaneous",
    "Income",
)
DEFAULT_CURRENCY = "usd"

# Export formats
CSV_HEADER = "ID,Name,Category,Amount,Date"
CSV_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
JSON_EXPORT_INDENT = 4
