"""Process-wide expense configuration: category list and currency.

One ``ExpenseConfig`` is built per application in ``create_app`` and shared
by all requests through ``app.state``. Reads return copies and replacements
happen under a lock, so concurrent requests never observe a half-updated
list. Every replacement is written through to the ``ConfigStore`` before it
becomes visible.

The expense validation rules live here too, because the allowed categories
are part of this configuration:

  1. name must be non-blank
  2. category must be non-blank
  3. category must be one of the configured categories
  4. amount must be greater than zero
"""

from __future__ import annotations

import logging
import threading
from typing import List, Sequence

from expenseowl.models import Expense
from expenseowl.storage import ConfigStore

logger = logging.getLogger(__name__)


class ExpenseValidationError(ValueError):
    """An expense broke one of the validation rules; the message is user-facing."""


class ExpenseConfig:
    def __init__(self, store: ConfigStore, categories: Sequence[str], currency: str):
        self._store = store
        self._lock = threading.Lock()
        self._categories: List[str] = list(categories)
        self._currency = currency

    @classmethod
    def load(
        cls,
        store: ConfigStore,
        default_categories: Sequence[str],
        default_currency: str,
    ) -> "ExpenseConfig":
        """Build from persisted values, seeding the store with defaults on first run."""
        categories, currency = store.load_config()
        if categories is None:
            categories = list(default_categories)
            store.save_categories(categories)
            logger.info("seeded default categories: %s", categories)
        if currency is None:
            currency = default_currency
            store.save_currency(currency)
            logger.info("seeded default currency: %s", currency)
        return cls(store, categories, currency)

    # ------------------------------------------------------------------
    # Readers
    @property
    def categories(self) -> List[str]:
        with self._lock:
            return list(self._categories)

    @property
    def currency(self) -> str:
        with self._lock:
            return self._currency

    def snapshot(self) -> dict:
        with self._lock:
            return {"categories": list(self._categories), "currency": self._currency}

    # ------------------------------------------------------------------
    # Writers
    def update_categories(self, categories: Sequence[str]) -> None:
        new = list(categories)
        with self._lock:
            self._store.save_categories(new)
            self._categories = new

    def update_currency(self, currency: str) -> None:
        with self._lock:
            self._store.save_currency(currency)
            self._currency = currency

    # ------------------------------------------------------------------
    # Validation
    def validate_expense(self, expense: Expense) -> Expense:
        if not expense.name.strip():
            raise ExpenseValidationError("expense name is required")
        if not expense.category.strip():
            raise ExpenseValidationError("category is required")
        if expense.category not in self.categories:
            raise ExpenseValidationError(f"invalid category: {expense.category}")
        if expense.amount <= 0:
            raise ExpenseValidationError("amount must be greater than 0")
        return expense


__all__ = ["ExpenseConfig", "ExpenseValidationError"]
