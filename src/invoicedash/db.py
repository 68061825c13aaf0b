"""
Database connection and query utilities.

Provides a small asyncio interface for executing parameterized queries with
psycopg. The process shares one long-lived ``AsyncConnection`` in autocommit
mode: it is opened on first use and closed with ``close_connection()`` at
shutdown. Each statement is independent; there are no multi-statement
transactions here.

Query helpers never raise store failures. They return a ``QueryResult``
that is either a success carrying the rows or a failure carrying the
``psycopg.Error``, and the caller decides what to fall back to.

For testing, use set_connection_override() to inject a connection
that will be used instead of the shared one.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable

import psycopg
import structlog
from psycopg.rows import dict_row

from invoicedash.config import config

logger = structlog.get_logger(__name__)


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class QueryResult:
    """Outcome of a single statement: rows on success, the error on failure."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    rowcount: int = 0
    error: psycopg.Error | None = None

    @classmethod
    def success(cls, rows: list[dict[str, Any]], rowcount: int | None = None) -> "QueryResult":
        return cls(rows=rows, rowcount=len(rows) if rowcount is None else rowcount)

    @classmethod
    def failure(cls, error: psycopg.Error) -> "QueryResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def first(self) -> dict[str, Any] | None:
        """First row, or None when the statement matched nothing."""
        return self.rows[0] if self.rows else None


# =============================================================================
# Connection Override (for testing)
# =============================================================================

_connection_override: psycopg.AsyncConnection | None = None


def set_connection_override(conn: psycopg.AsyncConnection) -> None:
    """
    Set a connection to use instead of the shared one.

    Used by test fixtures so that every query runs on a connection the
    fixture owns and cleans up.
    """
    global _connection_override
    _connection_override = conn


def clear_connection_override() -> None:
    """Clear the connection override, restoring normal behavior."""
    global _connection_override
    _connection_override = None


# =============================================================================
# Connection Management
# =============================================================================

_connection: psycopg.AsyncConnection | None = None
_connection_lock: asyncio.Lock | None = None


def _connect_options() -> str | None:
    if config.statement_timeout_ms is None:
        return None
    return f"-c statement_timeout={config.statement_timeout_ms}"


async def get_connection() -> psycopg.AsyncConnection:
    """
    Return the process-wide connection, opening it on first use.

    A connection found closed (server restart, network loss) is replaced.
    Raises psycopg.OperationalError when the store cannot be reached.
    """
    global _connection, _connection_lock

    if _connection_override is not None:
        return _connection_override

    if _connection is not None and not _connection.closed:
        return _connection

    if _connection_lock is None:
        _connection_lock = asyncio.Lock()

    async with _connection_lock:
        if _connection is None or _connection.closed:
            kwargs: dict[str, Any] = {"autocommit": True}
            options = _connect_options()
            if options:
                kwargs["options"] = options
            _connection = await psycopg.AsyncConnection.connect(config.database_url, **kwargs)
            logger.info("Database connection opened", environment=config.environment)
    return _connection


async def close_connection() -> None:
    """Close the shared connection. Safe to call when none is open."""
    global _connection, _connection_lock

    conn, _connection = _connection, None
    _connection_lock = None
    if conn is not None and not conn.closed:
        await conn.close()
        logger.info("Database connection closed")


# =============================================================================
# Query Helpers
# =============================================================================


def contains_pattern(text: str | None) -> str:
    """
    Build an ILIKE pattern matching ``text`` anywhere in a column.

    LIKE wildcards in the text are escaped so they match literally. The
    pattern is always passed as a bound parameter.
    """
    escaped = (text or "").replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


async def _run(query: str, params: tuple | dict | None, fetch: str) -> QueryResult:
    try:
        conn = await get_connection()
        async with conn.cursor(row_factory=dict_row) as cur:
            await cur.execute(query, params)
            if fetch == "all":
                return QueryResult.success(await cur.fetchall())
            if fetch == "one":
                row = await cur.fetchone()
                return QueryResult.success([row] if row is not None else [])
            return QueryResult.success([], rowcount=cur.rowcount)
    except psycopg.Error as e:
        logger.debug("Query failed", error_type=type(e).__name__, error=str(e))
        return QueryResult.failure(e)


async def execute(query: str, params: tuple | dict | None = None) -> QueryResult:
    """
    Execute a statement without returning rows.

    Use for INSERT, UPDATE, DELETE. The result's rowcount is the number of
    affected rows.
    """
    return await _run(query, params, fetch="none")


async def fetch_one(query: str, params: tuple | dict | None = None) -> QueryResult:
    """
    Execute a query and keep at most its first row.

    Args:
        query: SQL query with %s placeholders
        params: Tuple (or dict, for %(name)s placeholders) of parameter values

    Returns:
        QueryResult whose ``first`` is the row dict, or None if no row found
    """
    return await _run(query, params, fetch="one")


async def fetch_all(query: str, params: tuple | dict | None = None) -> QueryResult:
    """
    Execute a query and return all rows as list of dicts.

    Args:
        query: SQL query with %s placeholders
        params: Tuple (or dict, for %(name)s placeholders) of parameter values

    Returns:
        QueryResult with every row, empty rows if none matched
    """
    return await _run(query, params, fetch="all")


async def gather(*queries: Awaitable[QueryResult]) -> list[QueryResult]:
    """
    Run several queries concurrently and wait for all of them.

    Results come back in argument order. The group is all-or-nothing for
    callers: check ``all(r.ok for r in results)`` before using any of them.
    """
    return list(await asyncio.gather(*queries))
