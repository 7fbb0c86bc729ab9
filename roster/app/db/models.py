from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from roster.app.db.base import Base

# Canonical identifier: 32 lowercase hex characters (uuid4().hex)
STUDENT_ID_LENGTH = 32


class Student(Base):
    """Primary record. Authoritative source of class name and grade level."""

    __tablename__ = "students"
    __table_args__ = (
        Index("idx_students_class_name", "class_name"),
        Index("idx_students_grade_level", "grade_level"),
    )

    id: Mapped[str] = mapped_column(String(STUDENT_ID_LENGTH), primary_key=True)
    first_name: Mapped[str] = mapped_column(Text)
    last_name: Mapped[str] = mapped_column(Text)
    address: Mapped[str] = mapped_column(Text)
    grade_level: Mapped[str] = mapped_column(Text)
    class_name: Mapped[str] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, class={self.class_name}, grade={self.grade_level})>"


class ClassAssignment(Base):
    """Denormalized class record linked to a student by foreign reference."""

    __tablename__ = "classes"
    __table_args__ = (Index("idx_classes_student_id", "student_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Same type as students.id; no DB constraint since the primary row is
    # deleted before its dependents.
    student_id: Mapped[str] = mapped_column(String(STUDENT_ID_LENGTH))
    class_name: Mapped[str] = mapped_column(Text)
    grade_level: Mapped[str] = mapped_column(Text)


class GradeLevelRecord(Base):
    """Denormalized grade level record linked to a student by foreign reference."""

    __tablename__ = "grade_levels"
    __table_args__ = (Index("idx_grade_levels_student_id", "student_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[str] = mapped_column(String(STUDENT_ID_LENGTH))
    level: Mapped[str] = mapped_column(Text)
