import pytest
from sqlalchemy import inspect

from roster.app.db.base import Base
from roster.app.db import models  # noqa: F401 - import to register models
from roster.app.db.init_db import create_all_tables, drop_all_tables, verify_connection


def test_db_models_register_tables():
    tables = Base.metadata.tables.keys()
    assert "students" in tables
    assert "classes" in tables
    assert "grade_levels" in tables


def test_dependent_tables_reference_student_by_id_column():
    classes = Base.metadata.tables["classes"]
    grade_levels = Base.metadata.tables["grade_levels"]

    assert classes.c.student_id.type.length == models.STUDENT_ID_LENGTH
    assert grade_levels.c.student_id.type.length == models.STUDENT_ID_LENGTH
    assert {ix.name for ix in classes.indexes} == {"idx_classes_student_id"}
    assert {ix.name for ix in grade_levels.indexes} == {"idx_grade_levels_student_id"}


@pytest.mark.asyncio
async def test_create_and_drop_tables(engine):
    assert await verify_connection(engine) is True

    async with engine.connect() as conn:
        names = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    assert {"students", "classes", "grade_levels"} <= set(names)

    await drop_all_tables(engine)
    async with engine.connect() as conn:
        names = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    assert names == []

    await create_all_tables(engine)
