"""
Async database access (raw SQL) using asyncpg.

`Database` owns the connection pool. The FastAPI lifespan creates one instance
per process, opens it on startup and closes it on shutdown (see `api/main.py`).
Repositories receive the instance through dependencies instead of reaching for
a module-level pool.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Driver errors are translated into `core.errors` types here, so callers never
inspect asyncpg exceptions or message text.
"""

from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

import asyncpg

from .errors import ConflictError, InvalidInputError, UnavailableError

logger = logging.getLogger(__name__)

DEFAULT_POOL_MIN_SIZE = 1
DEFAULT_POOL_MAX_SIZE = 10
DEFAULT_COMMAND_TIMEOUT = 30.0

_CONNECTION_ERRORS = (
    OSError,
    asyncio.TimeoutError,
    asyncpg.PostgresConnectionError,
    asyncpg.InterfaceError,
)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    """
    DSN for the words database.

    DATABASE_URL wins when set; otherwise the DSN is assembled from
    DB_HOST / DB_PORT / DB_USER / DB_PASSWORD / DB_NAME.
    """
    url = os.environ.get("DATABASE_URL", "").strip()
    if url:
        return _sanitize_database_url(url)

    host = os.environ.get("DB_HOST", "").strip() or "localhost"
    port = _env_int("DB_PORT", 5432)
    user = os.environ.get("DB_USER", "").strip() or "postgres"
    password = os.environ.get("DB_PASSWORD", "")
    name = os.environ.get("DB_NAME", "").strip() or "dictionary"

    credentials = quote(user, safe="")
    if password:
        credentials += ":" + quote(password, safe="")
    return f"postgresql://{credentials}@{host}:{port}/{quote(name, safe='')}"


def _translate(exc: Exception) -> Exception:
    if isinstance(exc, asyncpg.UniqueViolationError):
        return ConflictError(getattr(exc, "detail", None) or str(exc))
    # Client-side encoding failures (e.g. an int out of int4 range) are ValueErrors.
    if isinstance(exc, (asyncpg.NotNullViolationError, asyncpg.DataError, ValueError)):
        return InvalidInputError(str(exc))
    if isinstance(exc, _CONNECTION_ERRORS):
        logger.warning("db_unavailable error=%r", exc)
        return UnavailableError(f"Database unavailable: {exc}")
    return exc


@asynccontextmanager
async def _translated_errors() -> AsyncIterator[None]:
    try:
        yield
    except (asyncpg.PostgresError, *_CONNECTION_ERRORS) as exc:
        translated = _translate(exc)
        if translated is exc:
            raise
        raise translated from exc


class Database:
    """
    Handle around one asyncpg pool.
    """

    def __init__(
        self,
        dsn: str,
        *,
        min_size: int = DEFAULT_POOL_MIN_SIZE,
        max_size: int = DEFAULT_POOL_MAX_SIZE,
        command_timeout: float = DEFAULT_COMMAND_TIMEOUT,
    ) -> None:
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    @classmethod
    def from_env(cls) -> "Database":
        return cls(
            database_url(),
            min_size=_env_int("DB_POOL_MIN_SIZE", DEFAULT_POOL_MIN_SIZE),
            max_size=_env_int("DB_POOL_MAX_SIZE", DEFAULT_POOL_MAX_SIZE),
            command_timeout=_env_float("DB_COMMAND_TIMEOUT", DEFAULT_COMMAND_TIMEOUT),
        )

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        self._pool = await asyncpg.create_pool(
            dsn=self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            command_timeout=self.command_timeout,
        )
        logger.info("db_pool_opened min_size=%s max_size=%s", self.min_size, self.max_size)

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None
        logger.info("db_pool_closed")

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        async with _translated_errors():
            row = await self.pool.fetchrow(sql, *args)
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        async with _translated_errors():
            rows = await self.pool.fetch(sql, *args)
        return [dict(r) for r in rows]

