"""Database Infrastructure — SQLAlchemy declarative base.

Invariants:
    - All sessions are async (AsyncSession)
    - asyncpg driver for PostgreSQL, aiosqlite in tests
"""
