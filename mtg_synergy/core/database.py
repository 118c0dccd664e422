"""
Relational store engine and session management.

Uses SQLModel for ORM with async support. Only built when the relational
collection backend is configured.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from mtg_synergy.models import card  # noqa: F401 - registers collection_cards with SQLModel metadata


def to_async_url(database_url: str) -> str:
    """
    Convert a database URL to its async driver form.

    SQLite: sqlite:/// -> sqlite+aiosqlite:///
    PostgreSQL: postgresql:// -> postgresql+asyncpg://
    """
    if database_url.startswith("sqlite:///"):
        return database_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("postgres://"):
        return database_url.replace("postgres://", "postgresql+asyncpg://", 1)
    return database_url


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the given (sync or async) database URL."""
    return create_async_engine(to_async_url(database_url), echo=echo, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the engine."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize the database by creating all tables.

    Should be called on application startup.
    """
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
