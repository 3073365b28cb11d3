from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import PersistenceError
from .connection import DatabaseConnection

SECONDS_PER_DAY = 24 * 60 * 60


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``; commit on success, roll back on error.

    Driver errors surface as PersistenceError so services never depend on
    mysql-connector types.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise PersistenceError(f"Falha ao conectar ao banco: {e}") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise PersistenceError(str(e)) from e
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


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Coerce a TIME column into ``datetime.time``.

    Depending on the cursor, mysql-connector hands back a ``timedelta``
    (seconds since midnight), a ``time`` or an ``HH:MM[:SS]`` string.
    """
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % SECONDS_PER_DAY
        return (datetime.min + timedelta(seconds=seconds)).time()
    if isinstance(value, str):
        return datetime.strptime(value.strip()[:8], "%H:%M:%S" if value.count(":") >= 2 else "%H:%M").time()
    raise TypeError(f"Unsupported TIME value: {value!r}")
