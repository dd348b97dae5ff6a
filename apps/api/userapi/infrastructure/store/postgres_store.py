import logging
from typing import List, Optional, Set

import psycopg
from psycopg import sql
from psycopg.types.json import Json
from psycopg_pool import ConnectionPool

from userapi.core.ports.record_store import Record, StoreError

logger = logging.getLogger("user_store")

TABLE_DDL = """
CREATE TABLE IF NOT EXISTS {table} (
    email TEXT PRIMARY KEY,
    record JSONB NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
);
"""


class PostgresRecordStore:
    """
    Key-value records on PostgreSQL: one table per store table, keyed by email,
    with the record itself in a JSONB column.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self.pool = pool
        self._ready: Set[str] = set()

    def ensure_table(self, table: str) -> None:
        if table in self._ready:
            return
        with self.pool.connection() as conn, conn.cursor() as cur:
            cur.execute(sql.SQL(TABLE_DDL).format(table=sql.Identifier(table)))
            conn.commit()
        self._ready.add(table)

    def get(self, table: str, key: str) -> Optional[Record]:
        try:
            self.ensure_table(table)
            with self.pool.connection() as conn, conn.cursor() as cur:
                cur.execute(
                    sql.SQL("SELECT record FROM {table} WHERE email = %(email)s").format(
                        table=sql.Identifier(table)
                    ),
                    {"email": key},
                )
                row = cur.fetchone()
        except psycopg.Error as exc:
            logger.warning("Postgres get failed: %s", exc.__class__.__name__)
            raise StoreError(str(exc)) from exc
        return row["record"] if row else None

    def scan(self, table: str) -> List[Record]:
        try:
            self.ensure_table(table)
            with self.pool.connection() as conn, conn.cursor() as cur:
                cur.execute(
                    sql.SQL("SELECT record FROM {table}").format(
                        table=sql.Identifier(table)
                    )
                )
                rows = cur.fetchall()
        except psycopg.Error as exc:
            logger.warning("Postgres scan failed: %s", exc.__class__.__name__)
            raise StoreError(str(exc)) from exc
        return [row["record"] for row in rows]

    def put(self, table: str, record: Record) -> None:
        try:
            self.ensure_table(table)
            with self.pool.connection() as conn, conn.cursor() as cur:
                cur.execute(
                    sql.SQL(
                        """
                        INSERT INTO {table} (email, record)
                        VALUES (%(email)s, %(record)s)
                        ON CONFLICT (email) DO UPDATE SET
                            record = EXCLUDED.record,
                            updated_at = now()
                        """
                    ).format(table=sql.Identifier(table)),
                    {"email": record["email"], "record": Json(record)},
                )
                conn.commit()
        except psycopg.Error as exc:
            logger.warning("Postgres put failed: %s", exc.__class__.__name__)
            raise StoreError(str(exc)) from exc

    def delete(self, table: str, key: str) -> None:
        try:
            self.ensure_table(table)
            with self.pool.connection() as conn, conn.cursor() as cur:
                cur.execute(
                    sql.SQL("DELETE FROM {table} WHERE email = %(email)s").format(
                        table=sql.Identifier(table)
                    ),
                    {"email": key},
                )
                conn.commit()
        except psycopg.Error as exc:
            logger.warning("Postgres delete failed: %s", exc.__class__.__name__)
            raise StoreError(str(exc)) from exc
