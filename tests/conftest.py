"""
Shared fixtures.

Every test gets its own in-memory SQLite database. StaticPool keeps the
single connection alive for the whole test, otherwise each checkout would
see a fresh, empty database.

SQLite does not enforce foreign keys by default; `fk_session` turns them
on for tests that need a write to fail inside the store.
"""

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from rbac_admin.db.session import create_tables
from rbac_admin.db.sqlite_adapter import SQLiteAdapter
from rbac_admin.services.dtos import PersonDto, UserDto


def make_session_maker(engine):
    return async_sessionmaker(
        engine,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def engine():
    engine = SQLiteAdapter().create_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    async with make_session_maker(engine)() as session:
        yield session


@pytest_asyncio.fixture
async def fk_session():
    engine = SQLiteAdapter().create_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    await create_tables(engine)
    async with make_session_maker(engine)() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def person_dto():
    return PersonDto(
        first_name="Ana",
        last_name="Gomez",
        document_number="1001",
        document_type="CC",
    )


@pytest.fixture
def user_dto():
    """A valid user payload; person_id must be filled in by the test."""
    return UserDto(username="agomez", email="ana@example.com", password="s3cret")
