"""Expense and config persistence backends."""

from .base import (
    ConfigStore,
    ExpenseNotFoundError,
    ExpenseStorage,
    StorageError,
    StorageErrorKind,
)
from .json_file import JSONFileStorage
from .sqlite import SQLiteStorage


def build_storage(settings) -> SQLiteStorage | JSONFileStorage:
    """Instantiate the backend selected by ``settings.storage_backend``."""
    if settings.storage_backend == "json":
        return JSONFileStorage(settings.json_path)
    return SQLiteStorage(settings.db_path)


__all__ = [
    "ConfigStore",
    "ExpenseNotFoundError",
    "ExpenseStorage",
    "StorageError",
    "StorageErrorKind",
    "JSONFileStorage",
    "SQLiteStorage",
    "build_storage",
]
