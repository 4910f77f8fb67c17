"""Async engine creation and lifecycle for AddonHub."""

import os

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from addonhub.db.exceptions import ConfigurationError

_engines: dict[str, AsyncEngine] = {}


def _normalize_url(url: str) -> str:
    """Ensure URL uses an async driver (asyncpg for PostgreSQL, aiosqlite for SQLite)."""
    u = url.strip()
    if u.startswith("postgresql://"):
        return "postgresql+asyncpg://" + u[len("postgresql://") :]
    if u.startswith("postgresql+asyncpg://"):
        return u
    if u.startswith("sqlite://"):
        return "sqlite+aiosqlite://" + u[len("sqlite://") :]
    if u.startswith("sqlite+aiosqlite://"):
        return u
    raise ConfigurationError(
        "Database URL must be PostgreSQL (postgresql://, postgresql+asyncpg://) "
        "or SQLite (sqlite://, sqlite+aiosqlite://)."
    )


def _get_url(database_url: str | None) -> str:
    """Resolve database URL from argument or environment."""
    if database_url is not None and database_url != "":
        return _normalize_url(database_url)
    url = os.environ.get("ADDONHUB_DATABASE_URL")
    if not url or not url.strip():
        raise ConfigurationError(
            "Database URL not set. Set ADDONHUB_DATABASE_URL or pass database_url."
        )
    return _normalize_url(url)


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """Create an async engine for a PostgreSQL or SQLite add-on database.

    PostgreSQL connections are pinged before each checkout.

    Raises:
        ConfigurationError: URL missing or invalid.
    """
    url = _get_url(database_url)
    if url.startswith("sqlite+aiosqlite://"):
        return create_async_engine(url)
    return create_async_engine(url, pool_pre_ping=True)


def get_engine(database_url: str | None = None) -> AsyncEngine:
    """Get or create a cached engine for the given URL.

    Same URL returns the same engine instance.

    Raises:
        ConfigurationError: URL missing or invalid.
    """
    url = _get_url(database_url)
    if url not in _engines:
        _engines[url] = create_engine(url)
    return _engines[url]


async def dispose_engine(database_url: str | None = None) -> None:
    """Dispose engine and close all connections.

    Args:
        database_url: Which engine to dispose; if None, disposes all.
    """
    if database_url is None:
        for key in list(_engines.keys()):
            await _engines[key].dispose()
            del _engines[key]
        return
    url = _get_url(database_url)
    if url in _engines:
        await _engines[url].dispose()
        del _engines[url]
