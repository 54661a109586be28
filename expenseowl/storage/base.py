from __future__ import annotations

"""Storage abstraction.

Route handlers depend only on these interfaces; the concrete backend
(SQLite or a single JSON file) is picked from settings at startup.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Tuple

from expenseowl.models import Expense


class StorageErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    FAILURE = "failure"


class StorageError(Exception):
    """Any storage failure. Callers branch on ``kind``, never on identity."""

    def __init__(self, message: str, kind: StorageErrorKind = StorageErrorKind.FAILURE):
        super().__init__(message)
        self.kind = kind

    @property
    def not_found(self) -> bool:
        return self.kind is StorageErrorKind.NOT_FOUND


class ExpenseNotFoundError(StorageError):
    def __init__(self, expense_id: str):
        super().__init__(f"expense {expense_id!r} not found", StorageErrorKind.NOT_FOUND)
        self.expense_id = expense_id


class ExpenseStorage(ABC):
    @abstractmethod
    def save_expense(self, expense: Expense) -> Expense:
        """Persist ``expense`` and return it carrying its assigned id."""
        raise NotImplementedError

    @abstractmethod
    def get_all_expenses(self) -> List[Expense]:
        """Return every expense in insertion order."""
        raise NotImplementedError

    @abstractmethod
    def delete_expense(self, expense_id: str) -> None:
        """Remove an expense; raises ``ExpenseNotFoundError`` for unknown ids."""
        raise NotImplementedError


class ConfigStore(ABC):
    @abstractmethod
    def load_config(self) -> Tuple[Optional[List[str]], Optional[str]]:
        """Return persisted (categories, currency); ``None`` for unset values."""
        raise NotImplementedError

    @abstractmethod
    def save_categories(self, categories: List[str]) -> None:
        raise NotImplementedError

    @abstractmethod
    def save_currency(self, currency: str) -> None:
        raise NotImplementedError
