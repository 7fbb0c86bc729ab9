"""Database package for the roster service.

This package provides:
- Database models (Student, ClassAssignment, GradeLevelRecord)
- Asynchronous engine and session management
- CRUD operations per collection
"""

from roster.app.db.base import Base
from roster.app.db.models import ClassAssignment, GradeLevelRecord, Student
from roster.app.db.async_session import (
    close_async_engine,
    create_session_maker,
    get_async_engine,
    get_async_session_maker,
)
from roster.app.db.init_db import create_all_tables, drop_all_tables, verify_connection

__all__ = [
    # Base
    "Base",
    # Models
    "ClassAssignment",
    "GradeLevelRecord",
    "Student",
    # Session (async)
    "close_async_engine",
    "create_session_maker",
    "get_async_engine",
    "get_async_session_maker",
    # Schema
    "create_all_tables",
    "drop_all_tables",
    "verify_connection",
]
