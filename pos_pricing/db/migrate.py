"""Database migration utilities.

Handles schema evolution by applying idempotent migrations keyed by an integer
`schema_version` stored in the metadata table.
"""

from __future__ import annotations
from pathlib import Path
import json
import sqlite3
from typing import Optional

from . import schema as schema_def
from .schema import init_db

CURRENT_SCHEMA_VERSION = 2
SCHEMA_VERSION_KEY = "schema_version"
LEGACY_RATE_KEY = "bcvRate"


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
    return None


def apply_migrations(db_path: Path, rate_slot_key: str = "exchange_rate") -> int:
    """Apply required migrations and return resulting schema version."""
    init_db(db_path)
    conn = sqlite3.connect(db_path)
    try:
        version = _get_schema_version(conn) or 1
        if version < 2:
            _migrate_to_v2(conn, rate_slot_key)
            version = 2
        _set_schema_version(conn, version)
        conn.commit()
        return version
    finally:
        conn.close()


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    cur = conn.cursor()
    cur.execute(
        "INSERT INTO metadata (key, value) VALUES (?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value, "
        f"updated_at=({schema_def.BASIC_UTC_NOW})",
        (SCHEMA_VERSION_KEY, str(version)),
    )


def _migrate_to_v2(conn: sqlite3.Connection, rate_slot_key: str) -> None:
    """Rename the legacy ``bcvRate`` slot (``lastUpdated``, ``api`` source)."""
    cur = conn.cursor()
    try:
        cur.execute("SELECT value FROM metadata WHERE key=?", (LEGACY_RATE_KEY,))
        row = cur.fetchone()
        if row is None:
            return
        cur.execute("SELECT 1 FROM metadata WHERE key=?", (rate_slot_key,))
        if cur.fetchone() is None:
            cur.execute(
                "INSERT INTO metadata (key, value) VALUES (?, ?)",
                (rate_slot_key, _upgrade_legacy_rate(row[0])),
            )
        cur.execute("DELETE FROM metadata WHERE key=?", (LEGACY_RATE_KEY,))
        conn.commit()
    except Exception:
        conn.rollback()
        raise


def _upgrade_legacy_rate(raw: str) -> str:
    try:
        data = json.loads(raw)
    except ValueError:
        # Corrupt slots stay corrupt; readers treat them as absent.
        return raw
    if not isinstance(data, dict):
        return raw
    source = data.get("source")
    upgraded = {
        "rate": data.get("rate", 0),
        "source": "fetched" if source in (None, "api") else source,
    }
    captured = data.get("capturedAt") or data.get("lastUpdated")
    if captured:
        upgraded["capturedAt"] = captured
    return json.dumps(upgraded, separators=(",", ":"))
