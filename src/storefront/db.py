from __future__ import annotations

import contextlib
from typing import Iterator

import psycopg

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS admins (
        admin_id UUID PRIMARY KEY,
        email TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS products (
        product_id UUID PRIMARY KEY,
        seq BIGSERIAL NOT NULL,
        name TEXT NOT NULL CHECK (name <> ''),
        description TEXT NOT NULL CHECK (description <> ''),
        image TEXT NOT NULL CHECK (image <> ''),
        price DOUBLE PRECISION NOT NULL DEFAULT 0 CHECK (price >= 0),
        category TEXT NOT NULL DEFAULT 'General',
        key_features JSONB NOT NULL DEFAULT '[]'::jsonb,
        material TEXT,
        compatibility TEXT,
        best_for TEXT,
        warranty TEXT,
        created_at TIMESTAMPTZ NOT NULL,
        updated_at TIMESTAMPTZ NOT NULL
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS products_created_at_idx
        ON products (created_at DESC, seq DESC)
    """,
)


@contextlib.contextmanager
def get_connection(database_url: str, autocommit: bool = True) -> Iterator[psycopg.Connection]:
    conn = psycopg.connect(database_url)
    conn.autocommit = autocommit
    try:
        yield conn
    finally:
        conn.close()


def ensure_schema(database_url: str) -> None:
    """Create the storefront tables if they do not exist yet."""
    with get_connection(database_url, autocommit=False) as conn:
        with conn.cursor() as cur:
            for statement in SCHEMA_STATEMENTS:
                cur.execute(statement)
        conn.commit()


def check_connection(database_url: str) -> None:
    with get_connection(database_url) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT 1")
            cur.fetchone()


__all__ = ["check_connection", "ensure_schema", "get_connection"]
