"""
Database module with abstraction layer.

This module provides:
- DatabaseAdapter interface: Abstract base class for database implementations
- SQLiteAdapter: SQLite-specific implementation (default)
- Session management: Database session creation and management
- Repositories: one data-access object per table, see repositories.py

To add a new database backend:
1. Create a new adapter class inheriting from DatabaseAdapter
2. Implement all abstract methods
3. Update get_database_adapter() in sqlite_adapter.py to return the new adapter
"""

from rbac_admin.db.interface import DatabaseAdapter
from rbac_admin.db.session import async_session_maker, create_tables, engine, get_session

__all__ = [
    "DatabaseAdapter",
    "get_session",
    "async_session_maker",
    "create_tables",
    "engine",
]
