from __future__ import annotations

import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConstraintViolation, StorageUnavailable
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _connect(conn_factory: DatabaseConnection):
    try:
        return conn_factory.connect()
    except mysql.connector.Error as e:
        logger.error("database connection failed: %s", e)
        raise StorageUnavailable("Database is unavailable") from e


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor) inside one transaction.

    Commits on success, rolls back on any error. Driver errors are translated
    to ConstraintViolation (unique/foreign key) or StorageUnavailable.
    """

    conn = _connect(conn_factory)
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as e:
        conn.rollback()
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise ConstraintViolation("Duplicate entry") from e
        raise ConstraintViolation(str(e.msg or e)) from e
    except mysql.connector.Error as e:
        conn.rollback()
        logger.error("database error: %s", e)
        raise StorageUnavailable("Database error") from e
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


def to_float(value: Any) -> Optional[float]:
    """DECIMAL columns come back as Decimal; the domain uses float."""

    if value is None:
        return None
    return float(Decimal(str(value)))
