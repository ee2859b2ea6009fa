from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import Conflict, StorageUnavailable, ValidationError
from ..core.logging import get_logger
from .connection import DatabaseConnection

log = get_logger(__name__)

_BUSY_ERRNOS = {errorcode.ER_LOCK_WAIT_TIMEOUT, errorcode.ER_LOCK_DEADLOCK}
_BAD_REFERENCE_ERRNOS = {errorcode.ER_NO_REFERENCED_ROW, errorcode.ER_NO_REFERENCED_ROW_2}


def translate_db_error(exc: mysql.connector.Error) -> Exception:
    """Map connector errors onto domain exceptions."""
    errno = getattr(exc, "errno", None)
    if errno == errorcode.ER_DUP_ENTRY:
        return Conflict("Record already exists")
    if errno in _BAD_REFERENCE_ERRNOS:
        return ValidationError("Invalid organization or user reference")
    if errno in _BUSY_ERRNOS:
        return StorageUnavailable("Database is busy", busy=True)
    return StorageUnavailable()


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        log.error("db_connect_failed", errno=getattr(exc, "errno", None))
        raise StorageUnavailable() from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        raise translate_db_error(exc) from exc
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
