"""Student (primary record) CRUD operations.

Helpers never commit; transaction boundaries belong to the caller.
"""
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from roster.app.db.models import Student

# Columns searchable through search_students()
SEARCHABLE_FIELDS = ("class_name", "grade_level", "first_name", "last_name")

_LIKE_ESCAPE = "\\"


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


async def insert_student(
    session: AsyncSession,
    student_id: str,
    first_name: str,
    last_name: str,
    address: str,
    grade_level: str,
    class_name: str,
) -> Student:
    """Insert a student and flush so store errors surface immediately.

    Args:
        session: Database session
        student_id: Canonical identifier generated by the caller
        first_name: First name
        last_name: Last name
        address: Postal address
        grade_level: Grade level label
        class_name: Class name label

    Returns:
        The persisted Student
    """
    student = Student(
        id=student_id,
        first_name=first_name,
        last_name=last_name,
        address=address,
        grade_level=grade_level,
        class_name=class_name,
    )
    session.add(student)
    await session.flush()
    return student


async def get_student_by_id(
    session: AsyncSession,
    student_id: str
) -> Optional[Student]:
    """Get a student by ID.

    Returns:
        Student object if found, None otherwise
    """
    result = await session.execute(
        select(Student).where(Student.id == student_id)
    )
    return result.scalar_one_or_none()


async def update_student(
    session: AsyncSession,
    student_id: str,
    **values: str,
) -> int:
    """Overwrite the given columns of one student.

    Returns:
        Number of matched rows (0 or 1)
    """
    result = await session.execute(
        update(Student)
        .where(Student.id == student_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def delete_student(session: AsyncSession, student_id: str) -> int:
    """Delete one student.

    Returns:
        Number of deleted rows; 0 when the student did not exist
    """
    result = await session.execute(
        delete(Student)
        .where(Student.id == student_id)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def search_students(
    session: AsyncSession,
    filters: dict[str, str],
) -> List[Student]:
    """Find students matching every filter.

    Each filter is a case-insensitive substring match on the named column.
    Empty values are skipped; no filters returns every student. No ordering
    is applied.

    On SQLite `ilike` folds case for ASCII letters only; PostgreSQL folds
    every letter (e.g. "Ä" matches "ä" there but not on SQLite).

    Args:
        session: Database session
        filters: Mapping of column name (one of SEARCHABLE_FIELDS) to substring

    Returns:
        Matching students in store order
    """
    stmt = select(Student)
    for field, value in filters.items():
        if field not in SEARCHABLE_FIELDS:
            raise ValueError(f"Unsupported search field: {field}")
        if not value:
            continue
        column = getattr(Student, field)
        stmt = stmt.where(
            column.ilike(f"%{_escape_like(value)}%", escape=_LIKE_ESCAPE)
        )
    result = await session.execute(stmt)
    return list(result.scalars().all())
