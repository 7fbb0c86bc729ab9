"""GradeLevelRecord CRUD operations, keyed by the student foreign reference."""
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from roster.app.db.models import GradeLevelRecord


async def insert_grade_level(
    session: AsyncSession,
    student_id: str,
    level: str,
) -> GradeLevelRecord:
    """Insert the grade level record for a student and flush it."""
    record = GradeLevelRecord(student_id=student_id, level=level)
    session.add(record)
    await session.flush()
    return record


async def get_grade_level_by_student_id(
    session: AsyncSession,
    student_id: str
) -> Optional[GradeLevelRecord]:
    """Get the grade level record referencing a student.

    Under duplicates the record with the lowest store id wins.
    """
    result = await session.execute(
        select(GradeLevelRecord)
        .where(GradeLevelRecord.student_id == student_id)
        .order_by(GradeLevelRecord.id)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def update_grade_levels(
    session: AsyncSession,
    student_id: str,
    level: str,
) -> int:
    result = await session.execute(
        update(GradeLevelRecord)
        .where(GradeLevelRecord.student_id == student_id)
        .values(level=level)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def delete_grade_levels(session: AsyncSession, student_id: str) -> int:
    result = await session.execute(
        delete(GradeLevelRecord)
        .where(GradeLevelRecord.student_id == student_id)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount
