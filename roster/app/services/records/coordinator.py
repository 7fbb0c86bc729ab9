"""RecordCoordinator main class.

Keeps the students, grade_levels and classes collections consistent. Every
operation is one store transaction bounded by a time budget; steps always
run in the order students, grade_levels, classes. A failing step rolls the
whole operation back and is reported with the collection that failed.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager, contextmanager
from typing import AsyncIterator, Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from roster.app.core.config import settings
from roster.app.core.logging import get_log_context, get_logger
from roster.app.db import crud
from roster.app.db.async_session import get_async_session_maker
from roster.app.db.models import ClassAssignment, GradeLevelRecord, Student
from roster.app.exceptions import (
    InvalidIdentifierError,
    NotFoundError,
    OperationTimeoutError,
    PartialFailureError,
    PersistenceError,
)
from roster.app.services.records.identifiers import new_student_id, parse_student_id
from roster.app.services.records.models import (
    Collection,
    Operation,
    SearchFilters,
    StudentFields,
)

logger = get_logger(__name__)

# Store-level failures that a step converts into a PersistenceError
STORE_ERRORS = (SQLAlchemyError, OSError)


class RecordCoordinator:
    """Create, read, update, delete and search students across collections."""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        timeout: float | None = None,
    ):
        self._session_maker = session_maker
        self.timeout = timeout if timeout is not None else settings.operation_timeout_seconds

    @asynccontextmanager
    async def _transaction(self, operation: Operation) -> AsyncIterator[AsyncSession]:
        """Open a session and transaction under the operation time budget."""
        try:
            async with asyncio.timeout(self.timeout):
                async with self._session_maker() as session:
                    async with session.begin():
                        yield session
        except TimeoutError as exc:
            logger.error(
                f"{operation.value} timed out after {self.timeout:g}s",
                extra=get_log_context(operation=operation.value),
            )
            raise OperationTimeoutError(operation.value, self.timeout) from exc
        except STORE_ERRORS as exc:
            # begin/commit failures, outside of any single step
            logger.error(
                f"{operation.value} failed to commit: {exc}",
                extra=get_log_context(operation=operation.value),
            )
            raise PersistenceError(operation.value) from exc

    @contextmanager
    def _step(
        self,
        operation: Operation,
        collection: Collection,
        completed: list[Collection],
    ) -> Iterator[None]:
        """Run one store call, classifying failures by collection.

        On success the collection is appended to ``completed``.
        """
        try:
            yield
        except STORE_ERRORS as exc:
            logger.error(
                f"{operation.value} on {collection.value} failed: {exc}",
                extra=get_log_context(
                    operation=operation.value,
                    collection=collection.value,
                    completed=[c.value for c in completed],
                ),
            )
            if completed:
                raise PartialFailureError(
                    operation.value,
                    collection.value,
                    [c.value for c in completed],
                ) from exc
            raise PersistenceError(operation.value, collection.value) from exc
        completed.append(collection)

    async def create_student(self, fields: StudentFields) -> Student:
        """Insert a student with its grade level and class records.

        Returns:
            The created Student, including its generated identifier
        """
        student_id = new_student_id()
        completed: list[Collection] = []
        op = Operation.CREATE

        async with self._transaction(op) as session:
            with self._step(op, Collection.STUDENTS, completed):
                student = await crud.insert_student(
                    session, student_id, **fields.as_dict()
                )
            with self._step(op, Collection.GRADE_LEVELS, completed):
                await crud.insert_grade_level(session, student_id, fields.grade_level)
            with self._step(op, Collection.CLASSES, completed):
                await crud.insert_class_assignment(
                    session, student_id, fields.class_name, fields.grade_level
                )

        logger.info(
            "Student created",
            extra=get_log_context(student_id=student_id, operation=op.value),
        )
        return student

    async def update_student(self, raw_id: str, fields: StudentFields) -> None:
        """Overwrite a student and mirror class/grade into its dependents.

        Dependents that match nothing are logged, not reported.

        Raises:
            InvalidIdentifierError: malformed identifier
            NotFoundError: no primary record with this identifier
        """
        student_id = parse_student_id(raw_id)
        completed: list[Collection] = []
        op = Operation.UPDATE

        async with self._transaction(op) as session:
            with self._step(op, Collection.STUDENTS, completed):
                matched = await crud.update_student(
                    session, student_id, **fields.as_dict()
                )
            if matched == 0:
                raise NotFoundError("Student not found or failed to update")

            with self._step(op, Collection.GRADE_LEVELS, completed):
                grade_matched = await crud.update_grade_levels(
                    session, student_id, fields.grade_level
                )
            with self._step(op, Collection.CLASSES, completed):
                class_matched = await crud.update_class_assignments(
                    session, student_id, fields.class_name, fields.grade_level
                )

        for collection, count in (
            (Collection.GRADE_LEVELS, grade_matched),
            (Collection.CLASSES, class_matched),
        ):
            if count == 0:
                logger.warning(
                    f"No {collection.value} record to update",
                    extra=get_log_context(
                        student_id=student_id,
                        operation=op.value,
                        collection=collection.value,
                    ),
                )
        logger.info(
            "Student updated",
            extra=get_log_context(student_id=student_id, operation=op.value),
        )

    async def delete_student(self, raw_id: str) -> dict[str, int]:
        """Delete a student, then its grade level and class records.

        Deleting a student that does not exist is not an error.

        Returns:
            Number of deleted records per collection
        """
        student_id = parse_student_id(raw_id)
        completed: list[Collection] = []
        deleted: dict[str, int] = {}
        op = Operation.DELETE

        async with self._transaction(op) as session:
            with self._step(op, Collection.STUDENTS, completed):
                deleted[Collection.STUDENTS.value] = await crud.delete_student(
                    session, student_id
                )
            with self._step(op, Collection.GRADE_LEVELS, completed):
                deleted[Collection.GRADE_LEVELS.value] = await crud.delete_grade_levels(
                    session, student_id
                )
            with self._step(op, Collection.CLASSES, completed):
                deleted[Collection.CLASSES.value] = await crud.delete_class_assignments(
                    session, student_id
                )

        logger.info(
            "Student deleted",
            extra=get_log_context(student_id=student_id, operation=op.value, deleted=deleted),
        )
        return deleted

    async def get_student(self, raw_id: str) -> Student:
        """Point lookup of a primary record.

        Raises:
            InvalidIdentifierError: malformed identifier
            NotFoundError: no such student
            PersistenceError: store failure
        """
        student_id = parse_student_id(raw_id)
        op = Operation.READ
        async with self._transaction(op) as session:
            with self._step(op, Collection.STUDENTS, []):
                student = await crud.get_student_by_id(session, student_id)
        if student is None:
            raise NotFoundError("Student not found")
        return student

    async def get_class(self, raw_id: str) -> ClassAssignment:
        """Class record whose foreign reference equals the given identifier."""
        student_id = self._reference_or_not_found(raw_id, "class not found")
        op = Operation.READ
        async with self._transaction(op) as session:
            with self._step(op, Collection.CLASSES, []):
                record = await crud.get_class_by_student_id(session, student_id)
        if record is None:
            raise NotFoundError("class not found")
        return record

    async def get_grade_level(self, raw_id: str) -> GradeLevelRecord:
        """Grade level record whose foreign reference equals the given identifier."""
        student_id = self._reference_or_not_found(raw_id, "grade level not found")
        op = Operation.READ
        async with self._transaction(op) as session:
            with self._step(op, Collection.GRADE_LEVELS, []):
                record = await crud.get_grade_level_by_student_id(session, student_id)
        if record is None:
            raise NotFoundError("grade level not found")
        return record

    async def search_students(self, filters: SearchFilters) -> list[Student]:
        """Students matching every supplied filter (case-insensitive substring).

        Raises:
            NotFoundError: nothing matched
        """
        active = filters.active()
        op = Operation.SEARCH
        logger.debug("Search filter: %s", active, extra=get_log_context(operation=op.value))

        async with self._transaction(op) as session:
            with self._step(op, Collection.STUDENTS, []):
                students = await crud.search_students(session, active)
        if not students:
            raise NotFoundError("No students found")
        return students

    @staticmethod
    def _reference_or_not_found(raw_id: str, detail: str) -> str:
        # A malformed reference cannot match any dependent record
        try:
            return parse_student_id(raw_id)
        except InvalidIdentifierError:
            raise NotFoundError(detail) from None


# Global coordinator instance
_record_coordinator: RecordCoordinator | None = None


def get_record_coordinator() -> RecordCoordinator:
    """Get the global RecordCoordinator instance (singleton).

    Also used as the FastAPI dependency; tests override it.
    """
    global _record_coordinator
    if _record_coordinator is None:
        _record_coordinator = RecordCoordinator(get_async_session_maker())
    return _record_coordinator


def reset_record_coordinator() -> None:
    """Reset the global coordinator instance. Useful for testing."""
    global _record_coordinator
    _record_coordinator = None
