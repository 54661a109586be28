"""Single-file JSON storage backend.

Layout::

    {"expenses": [...], "config": {"categories": [...], "currency": "usd"}}

Every mutation rewrites the whole file through a temp file in the same
directory followed by ``os.replace``, so a crash never leaves a truncated
document behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from expenseowl.models import Expense
from .base import ConfigStore, ExpenseNotFoundError, ExpenseStorage, StorageError

logger = logging.getLogger(__name__)


class JSONFileStorage(ExpenseStorage, ConfigStore):
    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()
        if not self.path.exists():
            with self._lock:
                self._write({"expenses": [], "config": {}})

    # ------------------------------------------------------------------
    # File helpers (callers hold the lock)
    def _read(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"failed to read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"unexpected document in {self.path}")
        data.setdefault("expenses", [])
        data.setdefault("config", {})
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        tmp_name: Optional[str] = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                prefix=self.path.name + "-",
                suffix=".tmp",
                dir=self.path.parent,
                delete=False,
            ) as tf:
                tmp_name = tf.name
                json.dump(data, tf, indent=2)
                tf.flush()
                os.fsync(tf.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.exception("failed to remove temp file %s", tmp_name)
            raise StorageError(f"failed to write {self.path}: {e}") from e

    # ------------------------------------------------------------------
    # Expenses
    def save_expense(self, expense: Expense) -> Expense:
        stored = expense.model_copy(update={"id": expense.id or str(uuid.uuid4())})
        with self._lock:
            data = self._read()
            if any(item.get("id") == stored.id for item in data["expenses"]):
                raise StorageError(f"duplicate expense id {stored.id!r}")
            data["expenses"].append(stored.model_dump(mode="json"))
            self._write(data)
        return stored

    def get_all_expenses(self) -> List[Expense]:
        with self._lock:
            items = self._read()["expenses"]
        try:
            return [Expense.model_validate(item) for item in items]
        except ValidationError as e:
            raise StorageError(f"corrupt expense record in {self.path}: {e}") from e

    def delete_expense(self, expense_id: str) -> None:
        with self._lock:
            data = self._read()
            kept = [item for item in data["expenses"] if item.get("id") != expense_id]
            if len(kept) == len(data["expenses"]):
                raise ExpenseNotFoundError(expense_id)
            data["expenses"] = kept
            self._write(data)

    # ------------------------------------------------------------------
    # Config values
    def load_config(self) -> Tuple[Optional[List[str]], Optional[str]]:
        with self._lock:
            config = self._read()["config"]
        categories = config.get("categories")
        if categories is not None and not isinstance(categories, list):
            raise StorageError("corrupt categories value: not a list")
        return categories, config.get("currency")

    def save_categories(self, categories: List[str]) -> None:
        with self._lock:
            data = self._read()
            data["config"]["categories"] = list(categories)
            self._write(data)

    def save_currency(self, currency: str) -> None:
        with self._lock:
            data = self._read()
            data["config"]["currency"] = currency
            self._write(data)
