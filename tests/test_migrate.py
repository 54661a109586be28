import sqlite3
from datetime import datetime, timezone

import pytest

from expenseowl.core.config import Settings
from expenseowl.db.migrate import (
    CURRENT_SCHEMA_VERSION,
    SCHEMA_VERSION_KEY,
    SchemaVersionError,
    apply_migrations,
)
from expenseowl.db.schema import UPSERT_METADATA_SQL, init_db
from expenseowl.main import create_app
from expenseowl.models import Expense
from expenseowl.storage import SQLiteStorage, StorageError


def _stored_version(path):
    conn = sqlite3.connect(path)
    try:
        row = conn.execute(
            "SELECT value FROM metadata WHERE key=?", (SCHEMA_VERSION_KEY,)
        ).fetchone()
    finally:
        conn.close()
    return row


def _write_version(path, value):
    init_db(path)
    conn = sqlite3.connect(path)
    try:
        conn.execute(UPSERT_METADATA_SQL, (SCHEMA_VERSION_KEY, value))
        conn.commit()
    finally:
        conn.close()


def test_fresh_database_gets_current_version(tmp_path):
    path = tmp_path / "db.sqlite3"
    assert apply_migrations(path) == CURRENT_SCHEMA_VERSION
    assert _stored_version(path) == (str(CURRENT_SCHEMA_VERSION),)


def test_unversioned_database_is_stamped(tmp_path):
    path = tmp_path / "db.sqlite3"
    init_db(path)
    assert _stored_version(path) is None
    assert apply_migrations(path) == 1
    assert _stored_version(path) == ("1",)


def test_rerun_keeps_data(tmp_path):
    path = tmp_path / "db.sqlite3"
    store = SQLiteStorage(path)
    saved = store.save_expense(
        Expense(
            name="Rent",
            category="Rent",
            amount=900,
            date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
    )
    assert apply_migrations(path) == CURRENT_SCHEMA_VERSION
    assert apply_migrations(path) == CURRENT_SCHEMA_VERSION
    assert SQLiteStorage(path).get_all_expenses() == [saved]


def test_newer_version_is_refused(tmp_path):
    path = tmp_path / "db.sqlite3"
    _write_version(path, str(CURRENT_SCHEMA_VERSION + 1))
    with pytest.raises(SchemaVersionError):
        apply_migrations(path)
    # refusal leaves the stored version alone
    assert _stored_version(path) == (str(CURRENT_SCHEMA_VERSION + 1),)


def test_unreadable_version_is_refused(tmp_path):
    path = tmp_path / "db.sqlite3"
    _write_version(path, "one")
    with pytest.raises(SchemaVersionError):
        apply_migrations(path)


def test_storage_wraps_version_error(tmp_path):
    path = tmp_path / "db.sqlite3"
    _write_version(path, str(CURRENT_SCHEMA_VERSION + 1))
    with pytest.raises(StorageError) as excinfo:
        SQLiteStorage(path)
    assert not excinfo.value.not_found


def test_storage_exposes_schema_version(tmp_path):
    assert SQLiteStorage(tmp_path / "db.sqlite3").schema_version == CURRENT_SCHEMA_VERSION


def test_app_startup_runs_migrations(tmp_path):
    path = tmp_path / "db.sqlite3"
    settings = Settings(data_dir=tmp_path, storage_backend="sqlite", db_path=path)
    create_app(settings_override=settings)
    assert _stored_version(path) == (str(CURRENT_SCHEMA_VERSION),)


def test_app_startup_fails_on_newer_database(tmp_path):
    path = tmp_path / "db.sqlite3"
    _write_version(path, str(CURRENT_SCHEMA_VERSION + 1))
    settings = Settings(data_dir=tmp_path, storage_backend="sqlite", db_path=path)
    with pytest.raises(StorageError):
        create_app(settings_override=settings)
