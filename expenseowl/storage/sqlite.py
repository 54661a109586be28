"""SQLite storage backend.

Each call opens its own connection, so the backend is safe to share across
request threads; sqlite serializes the writers.
"""

from __future__ import annotations

import json
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from expenseowl.db.migrate import SchemaVersionError, apply_migrations
from expenseowl.db.schema import UPSERT_METADATA_SQL
from expenseowl.models import Expense
from .base import ConfigStore, ExpenseNotFoundError, ExpenseStorage, StorageError

CATEGORIES_KEY = "categories"
CURRENCY_KEY = "currency"


class SQLiteStorage(ExpenseStorage, ConfigStore):
    def __init__(self, db_path: Path):
        self.db_path = db_path
        try:
            self.schema_version = apply_migrations(db_path)
        except (sqlite3.Error, SchemaVersionError) as e:
            raise StorageError(f"failed to initialize database {db_path}: {e}") from e

    # ------------------------------------------------------------------
    # Connection helpers
    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageError(f"failed to open {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    @staticmethod
    def _row_to_expense(row: sqlite3.Row) -> Expense:
        return Expense(
            id=row["id"],
            name=row["name"],
            category=row["category"],
            amount=row["amount"],
            date=datetime.fromisoformat(row["date"]) if row["date"] else None,
        )

    # ------------------------------------------------------------------
    # Expenses
    def save_expense(self, expense: Expense) -> Expense:
        stored = expense.model_copy(update={"id": expense.id or str(uuid.uuid4())})
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO expenses (id, name, category, amount, date)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    stored.id,
                    stored.name,
                    stored.category,
                    float(stored.amount),
                    stored.date.isoformat() if stored.date else None,
                ),
            )
        return stored

    def get_all_expenses(self) -> List[Expense]:
        with self._connect() as conn:
            cur = conn.execute(
                "SELECT id, name, category, amount, date FROM expenses ORDER BY seq"
            )
            return [self._row_to_expense(r) for r in cur.fetchall()]

    def delete_expense(self, expense_id: str) -> None:
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
            deleted = cur.rowcount
        if deleted == 0:
            raise ExpenseNotFoundError(expense_id)

    # ------------------------------------------------------------------
    # Config values (metadata table)
    def load_config(self) -> Tuple[Optional[List[str]], Optional[str]]:
        with self._connect() as conn:
            cur = conn.execute(
                "SELECT key, value FROM metadata WHERE key IN (?, ?)",
                (CATEGORIES_KEY, CURRENCY_KEY),
            )
            data = {r["key"]: r["value"] for r in cur.fetchall()}
        categories = None
        if CATEGORIES_KEY in data:
            try:
                parsed = json.loads(data[CATEGORIES_KEY])
            except ValueError as e:
                raise StorageError(f"corrupt categories value: {e}") from e
            if not isinstance(parsed, list):
                raise StorageError("corrupt categories value: not a list")
            categories = [str(c) for c in parsed]
        return categories, data.get(CURRENCY_KEY)

    def save_categories(self, categories: List[str]) -> None:
        with self._connect() as conn:
            conn.execute(UPSERT_METADATA_SQL, (CATEGORIES_KEY, json.dumps(categories)))

    def save_currency(self, currency: str) -> None:
        with self._connect() as conn:
            conn.execute(UPSERT_METADATA_SQL, (CURRENCY_KEY, currency))
