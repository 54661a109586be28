"""Database migration utilities.

The schema version is an integer stored under ``schema_version`` in the
metadata table. ``apply_migrations`` brings a database file up to
``CURRENT_SCHEMA_VERSION`` in place and refuses files written by a newer
release, since an older binary cannot know what those upgrades changed.
"""

from __future__ import annotations
from pathlib import Path
import sqlite3
from typing import Optional

from .schema import UPSERT_METADATA_SQL, init_db

CURRENT_SCHEMA_VERSION = 1
SCHEMA_VERSION_KEY = "schema_version"


class SchemaVersionError(RuntimeError):
    pass


def _get_schema_version(conn: sqlite3.Connection) -> Optional[int]:
    try:
        cur = conn.cursor()
        cur.execute("SELECT value FROM metadata WHERE key=?", (SCHEMA_VERSION_KEY,))
        row = cur.fetchone()
        if row:
            return int(row[0])
    except sqlite3.OperationalError:
        # metadata table may not exist yet (first run before init_db)
        return None
    except ValueError as e:
        raise SchemaVersionError(f"unreadable schema version: {e}") from e
    return None


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    conn.execute(UPSERT_METADATA_SQL, (SCHEMA_VERSION_KEY, str(version)))


def apply_migrations(db_path: Path) -> int:
    """Apply required migrations and return resulting schema version."""
    init_db(db_path)
    conn = sqlite3.connect(db_path)
    try:
        # Files without a version row are treated as the version 1 baseline
        version = _get_schema_version(conn) or 1
        if version > CURRENT_SCHEMA_VERSION:
            raise SchemaVersionError(
                f"database schema version {version} is newer than supported "
                f"version {CURRENT_SCHEMA_VERSION}"
            )
        _set_schema_version(conn, version)
        conn.commit()
        return version
    finally:
        conn.close()
