from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def load_json_block(value: Any) -> Optional[Dict[str, Any]]:
    """Normalize a MySQL JSON column into a dict.

    mysql-connector can return JSON as:
    - str (pure-python connector)
    - bytes/bytearray (C extension)
    - dict (already decoded)
    - None (NULL column, e.g. legacy rows without alt-meal data)
    """

    if value is None:
        return None

    if isinstance(value, dict):
        return value

    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")

    if isinstance(value, str):
        if not value.strip():
            return None
        decoded = json.loads(value)
        return decoded if isinstance(decoded, dict) else None

    raise TypeError(f"Unsupported MySQL JSON value type: {type(value)!r}")
