"""Best-effort diagnostic reads from the PostgreSQL datastore."""
from __future__ import annotations

import sys
from typing import Any, Dict, List

import psycopg2
from psycopg2 import sql
from psycopg2.extras import RealDictCursor

from ..logger import get_logger

logger = get_logger("store")


class RowStore:
    def __init__(self, dsn: str):
        if not dsn:
            raise ValueError("a PostgreSQL connection string is required")
        self.dsn = dsn

    def read_rows(self, table: str, limit: int = 10) -> List[Dict[str, Any]]:
        query = sql.SQL("SELECT * FROM {} LIMIT %s").format(sql.Identifier(table))
        con = psycopg2.connect(self.dsn)
        try:
            with con.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(query, (limit,))
                return [dict(row) for row in cur.fetchall()]
        finally:
            con.close()


def print_rows(dsn: str, table: str, limit: int = 10, out=None) -> List[Dict[str, Any]]:
    """Print up to *limit* rows of *table*. Failures are logged, never raised."""
    out = out or sys.stdout
    if not dsn:
        logger.info("No database configured, skipping datastore read")
        return []
    try:
        rows = RowStore(dsn).read_rows(table, limit)
    except psycopg2.Error as e:
        logger.error(f"Error reading {table} from database: {e}")
        return []
    for row in rows:
        print(row, file=out)
    return rows
