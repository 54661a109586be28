import threading
from datetime import datetime, timezone

import pytest

from conftest import MemoryConfigStore
from expenseowl.models import Expense
from expenseowl.services.app_config import ExpenseConfig, ExpenseValidationError
from expenseowl.storage import StorageError


def _config(categories=("Food", "Rent"), currency="usd") -> ExpenseConfig:
    return ExpenseConfig(MemoryConfigStore(), categories, currency)


def test_load_seeds_defaults_once():
    store = MemoryConfigStore()
    config = ExpenseConfig.load(store, ["A"], "eur")
    assert config.categories == ["A"]
    assert config.currency == "eur"
    assert (store.categories, store.currency) == (["A"], "eur")
    assert store.writes == 2

    again = ExpenseConfig.load(store, ["ignored"], "ignored")
    assert again.categories == ["A"]
    assert store.writes == 2


def test_load_prefers_persisted_values():
    store = MemoryConfigStore(categories=["X"], currency="jpy")
    config = ExpenseConfig.load(store, ["A"], "eur")
    assert config.snapshot() == {"categories": ["X"], "currency": "jpy"}
    assert store.writes == 0


def test_readers_get_copies():
    config = _config()
    config.categories.append("Hacked")
    config.snapshot()["categories"].append("Hacked")
    assert config.categories == ["Food", "Rent"]


def test_updates_write_through():
    store = MemoryConfigStore()
    config = ExpenseConfig(store, ["Food"], "usd")
    config.update_categories(("Books",))
    config.update_currency("eur")
    assert store.categories == ["Books"]
    assert store.currency == "eur"
    assert config.snapshot() == {"categories": ["Books"], "currency": "eur"}


def test_failed_write_keeps_previous_state():
    config = ExpenseConfig(MemoryConfigStore(fail=True), ["Food"], "usd")
    with pytest.raises(StorageError):
        config.update_categories(["Books"])
    with pytest.raises(StorageError):
        config.update_currency("eur")
    assert config.snapshot() == {"categories": ["Food"], "currency": "usd"}


def test_validate_accepts_good_expense():
    expense = Expense(
        name="Tea",
        category="Food",
        amount=0.01,
        date=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    assert _config().validate_expense(expense) is expense


@pytest.mark.parametrize(
    "fields, message",
    [
        ({"name": "", "category": "Food", "amount": 1}, "expense name is required"),
        ({"name": "\t", "category": "Food", "amount": 1}, "expense name is required"),
        ({"name": "Tea", "category": " ", "amount": 1}, "category is required"),
        ({"name": "Tea", "category": "Travel", "amount": 1}, "invalid category: Travel"),
        ({"name": "Tea", "category": "food", "amount": 1}, "invalid category: food"),
        ({"name": "Tea", "category": "Food", "amount": 0}, "amount must be greater than 0"),
        ({"name": "Tea", "category": "Food", "amount": -0.5}, "amount must be greater than 0"),
        ({"name": "", "category": "", "amount": -1}, "expense name is required"),
    ],
)
def test_validate_rejects(fields, message):
    with pytest.raises(ExpenseValidationError) as excinfo:
        _config().validate_expense(Expense(**fields))
    assert str(excinfo.value) == message


def test_concurrent_replacements_are_atomic():
    config = _config()
    candidates = [[f"c{i}-{j}" for j in range(20)] for i in range(8)]
    seen = []
    stop = threading.Event()

    def writer(categories):
        for _ in range(50):
            config.update_categories(categories)

    def reader():
        while not stop.is_set():
            seen.append(config.categories)

    readers = [threading.Thread(target=reader) for _ in range(2)]
    writers = [threading.Thread(target=writer, args=(c,)) for c in candidates]
    for t in readers + writers:
        t.start()
    for t in writers:
        t.join()
    stop.set()
    for t in readers:
        t.join()

    allowed = candidates + [["Food", "Rent"]]
    assert all(s in allowed for s in seen)
    assert config.categories in candidates
