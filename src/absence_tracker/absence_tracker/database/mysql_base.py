from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection

# MySQL error code for "Cannot add or update a child row: a foreign key constraint fails".
ER_NO_REFERENCED_ROW = 1452


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


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_date(value: Any) -> str:
    """Normalize a DATE column to its ISO ``YYYY-MM-DD`` form.

    mysql-connector returns ``datetime.date`` for DATE columns, but string
    values show up with some drivers/config (``raw=True``, CHAR columns).
    """

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return value.strip()[:10]
    raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")
