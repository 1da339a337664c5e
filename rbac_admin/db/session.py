"""
Database Session Management

This module handles async database connections using SQLAlchemy's async engine.
Uses a database abstraction layer to support different database backends.

Key Features:
- Database abstraction: Easy to switch between SQLite, PostgreSQL, etc.
- One session per request: services and repositories built on top of it
  never share state across requests
- Error handling: Automatic rollback on exceptions
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from rbac_admin.core.setting import settings
from rbac_admin.db.sqlite_adapter import get_database_adapter

db_adapter = get_database_adapter()

engine = db_adapter.create_engine(
    settings.DATABASE_URL
)

async_session_maker = async_sessionmaker(
    engine,
    class_=SQLModelAsyncSession,
    expire_on_commit=False,  # Entities stay readable after the repository commits
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function for FastAPI to get database session.

    This function:
    - Creates a new async session
    - Yields it to the service dependency
    - Rolls back on exception
    - Closes session automatically (context manager handles it)

    Repositories commit their own writes, so nothing is committed here.
    """
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def create_tables(bind: AsyncEngine = engine) -> None:
    """
    Create every table known to the SQLModel metadata.

    Used on startup when CREATE_TABLES_ON_STARTUP is set and by the test
    suite; production schemas are managed with Alembic.
    """
    from rbac_admin.db import models  # noqa: F401  (registers the tables)

    async with bind.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
