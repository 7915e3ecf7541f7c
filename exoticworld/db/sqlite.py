from __future__ import annotations

import os
import sqlite3
from typing import Optional

from exoticworld.config import settings

SCHEMA = """
CREATE TABLE IF NOT EXISTS preferences (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


def _connect(db_path: Optional[str] = None) -> sqlite3.Connection:
    path = db_path or settings.prefs_db_path
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: Optional[str] = None) -> None:
    conn = _connect(db_path)
    try:
        conn.executescript(SCHEMA)
        conn.commit()
    finally:
        conn.close()


def get_value(key: str, db_path: Optional[str] = None) -> Optional[str]:
    conn = _connect(db_path)
    try:
        row = conn.execute("SELECT value FROM preferences WHERE key = ?", (key,)).fetchone()
        return str(row["value"]) if row else None
    finally:
        conn.close()


def set_value(key: str, value: str, db_path: Optional[str] = None) -> None:
    conn = _connect(db_path)
    try:
        conn.execute(
            "INSERT INTO preferences(key, value) VALUES(?,?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, value),
        )
        conn.commit()
    finally:
        conn.close()


def clear_values(db_path: Optional[str] = None) -> None:
    conn = _connect(db_path)
    try:
        conn.execute("DELETE FROM preferences")
        conn.commit()
    finally:
        conn.close()
