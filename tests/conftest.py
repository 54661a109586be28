import os
import tempfile

# expenseowl.main builds a module-level app on import; keep its data dir out of the cwd
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="expenseowl-tests-"))

from typing import List, Optional, Tuple  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from expenseowl.core.config import Settings  # noqa: E402
from expenseowl.main import create_app  # noqa: E402
from expenseowl.models import Expense  # noqa: E402
from expenseowl.storage import (  # noqa: E402
    ConfigStore,
    ExpenseStorage,
    StorageError,
    StorageErrorKind,
)


class FailingStorage(ExpenseStorage):
    """Every call fails; delete fails with a configurable error kind."""

    def __init__(self, delete_kind: StorageErrorKind = StorageErrorKind.FAILURE):
        self.delete_kind = delete_kind

    def save_expense(self, expense: Expense) -> Expense:
        raise StorageError("disk full: /secret/path")

    def get_all_expenses(self) -> List[Expense]:
        raise StorageError("disk full: /secret/path")

    def delete_expense(self, expense_id: str) -> None:
        raise StorageError("disk full: /secret/path", self.delete_kind)


class MemoryConfigStore(ConfigStore):
    def __init__(self, categories=None, currency=None, fail: bool = False):
        self.categories = categories
        self.currency = currency
        self.fail = fail
        self.writes = 0

    def load_config(self) -> Tuple[Optional[List[str]], Optional[str]]:
        return self.categories, self.currency

    def save_categories(self, categories: List[str]) -> None:
        if self.fail:
            raise StorageError("read-only")
        self.writes += 1
        self.categories = list(categories)

    def save_currency(self, currency: str) -> None:
        if self.fail:
            raise StorageError("read-only")
        self.writes += 1
        self.currency = currency


@pytest.fixture(params=["sqlite", "json"])
def backend(request) -> str:
    return request.param


@pytest.fixture
def settings(tmp_path, backend) -> Settings:
    return Settings(data_dir=tmp_path, storage_backend=backend)


@pytest.fixture
def app(settings):
    return create_app(settings_override=settings)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def add_expense(client):
    def _add(name="Coffee", category="Food", amount=3.5, date="2024-03-01T08:30:00Z"):
        payload = {"name": name, "category": category, "amount": amount}
        if date is not None:
            payload["date"] = date
        resp = client.put("/expense", json=payload)
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _add
