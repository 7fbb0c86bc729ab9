"""ClassAssignment CRUD operations, keyed by the student foreign reference."""
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from roster.app.db.models import ClassAssignment


async def insert_class_assignment(
    session: AsyncSession,
    student_id: str,
    class_name: str,
    grade_level: str,
) -> ClassAssignment:
    """Insert the class record for a student and flush it."""
    record = ClassAssignment(
        student_id=student_id,
        class_name=class_name,
        grade_level=grade_level,
    )
    session.add(record)
    await session.flush()
    return record


async def get_class_by_student_id(
    session: AsyncSession,
    student_id: str
) -> Optional[ClassAssignment]:
    """Get the class record referencing a student.

    Under duplicates the record with the lowest store id wins.
    """
    result = await session.execute(
        select(ClassAssignment)
        .where(ClassAssignment.student_id == student_id)
        .order_by(ClassAssignment.id)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def update_class_assignments(
    session: AsyncSession,
    student_id: str,
    class_name: str,
    grade_level: str,
) -> int:
    """Mirror class name and grade level into the student's class records.

    Returns:
        Number of matched rows
    """
    result = await session.execute(
        update(ClassAssignment)
        .where(ClassAssignment.student_id == student_id)
        .values(class_name=class_name, grade_level=grade_level)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def delete_class_assignments(session: AsyncSession, student_id: str) -> int:
    result = await session.execute(
        delete(ClassAssignment)
        .where(ClassAssignment.student_id == student_id)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount
