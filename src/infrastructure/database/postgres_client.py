"""PostgreSQL client for running the portfolio without Supabase.

Enabled with USE_LOCAL_DB=1. The three record collections map to plain
tables; ``ensure_schema`` creates them on first use.
"""
from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Any, Generator

import psycopg2
from psycopg2 import pool
from psycopg2.extras import Json, RealDictCursor

from src.domain.errors import BackendError

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS profile (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    name TEXT NOT NULL DEFAULT '',
    bio TEXT NOT NULL DEFAULT '',
    location TEXT NOT NULL DEFAULT '',
    skills TEXT[] NOT NULL DEFAULT '{}',
    socials JSONB NOT NULL DEFAULT '{}'::jsonb
);
CREATE TABLE IF NOT EXISTS projects (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    title TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    stack TEXT[] NOT NULL DEFAULT '{}',
    github TEXT,
    live TEXT,
    image TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT now()
);
CREATE TABLE IF NOT EXISTS contacts (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    name TEXT NOT NULL,
    email TEXT NOT NULL,
    subject TEXT NOT NULL DEFAULT 'No subject',
    message TEXT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    read BOOLEAN NOT NULL DEFAULT false,
    replied BOOLEAN NOT NULL DEFAULT false
);
"""


def adapt_value(value: Any) -> Any:
    """Wrap dicts so psycopg2 sends them as JSONB."""
    if isinstance(value, dict):
        return Json(value)
    return value


class PostgresClient:
    """Pooled connections with dict rows."""

    def __init__(self) -> None:
        self._pool = pool.SimpleConnectionPool(
            minconn=1,
            maxconn=int(os.getenv("POSTGRES_POOL_SIZE", "5")),
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=int(os.getenv("POSTGRES_PORT", "5432")),
            database=os.getenv("POSTGRES_DB", "portfolio"),
            user=os.getenv("POSTGRES_USER", "portfolio"),
            password=os.getenv("POSTGRES_PASSWORD", "portfolio_dev_password"),
        )
        self._schema_ready = False

    @contextmanager
    def cursor(self) -> Generator[Any, None, None]:
        """Yield a dict cursor; commit on success, roll back on any error."""
        conn = self._pool.getconn()
        try:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                yield cur
            conn.commit()
        except psycopg2.Error as exc:
            conn.rollback()
            raise BackendError(str(exc).strip()) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            self._pool.putconn(conn)

    def ensure_schema(self) -> None:
        if self._schema_ready:
            return
        with self.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        self._schema_ready = True
        logger.info("Local PostgreSQL schema ready")

    def fetch_all(self, query: str, params: tuple = ()) -> list[dict[str, Any]]:
        self.ensure_schema()
        with self.cursor() as cur:
            cur.execute(query, params)
            return [dict(row) for row in cur.fetchall()]

    def fetch_one(self, query: str, params: tuple = ()) -> dict[str, Any] | None:
        self.ensure_schema()
        with self.cursor() as cur:
            cur.execute(query, params)
            row = cur.fetchone()
            return dict(row) if row else None

    def execute(self, query: str, params: tuple = ()) -> int:
        """Run an UPDATE/DELETE and return the affected row count."""
        self.ensure_schema()
        with self.cursor() as cur:
            cur.execute(query, params)
            return cur.rowcount

    def insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        columns = list(data)
        placeholders = ", ".join(["%s"] * len(columns))
        query = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders}) RETURNING *"
        row = self.fetch_one(query, tuple(adapt_value(data[c]) for c in columns))
        if row is None:
            raise BackendError(f"Insert into {table} did not return a row")
        return row

    def update(self, table: str, record_id: str, data: dict[str, Any]) -> int:
        assignments = ", ".join(f"{c} = %s" for c in data)
        query = f"UPDATE {table} SET {assignments} WHERE id = %s"
        params = tuple(adapt_value(v) for v in data.values()) + (record_id,)
        return self.execute(query, params)

    def close(self) -> None:
        self._pool.closeall()


_POSTGRES_CLIENT: PostgresClient | None = None


def get_postgres_client() -> PostgresClient | None:
    global _POSTGRES_CLIENT
    if os.getenv("USE_LOCAL_DB", "0") != "1":
        return None
    if _POSTGRES_CLIENT is None:
        _POSTGRES_CLIENT = PostgresClient()
    return _POSTGRES_CLIENT
