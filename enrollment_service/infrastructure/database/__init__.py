# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database package for the enrollment service.

Provides:
- connection: async engine/session management
- models: SQLAlchemy ORM models
- migrations: Alembic migration environment and revisions
"""

from enrollment_service.infrastructure.database.connection import (
    DatabaseError,
    check_database_connection,
    close_database,
    create_tables,
    get_engine,
    get_session,
    init_database,
)

__all__ = [
    "DatabaseError",
    "check_database_connection",
    "close_database",
    "create_tables",
    "get_engine",
    "get_session",
    "init_database",
]
