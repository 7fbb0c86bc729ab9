"""CRUD operations package.

One module per collection:
- student.py: primary Student records
- class_assignment.py: ClassAssignment records keyed by student_id
- grade_level.py: GradeLevelRecord records keyed by student_id
"""

# Student operations
from roster.app.db.crud.student import (
    SEARCHABLE_FIELDS,
    insert_student,
    get_student_by_id,
    update_student,
    delete_student,
    search_students,
)

# Class operations
from roster.app.db.crud.class_assignment import (
    insert_class_assignment,
    get_class_by_student_id,
    update_class_assignments,
    delete_class_assignments,
)

# Grade level operations
from roster.app.db.crud.grade_level import (
    insert_grade_level,
    get_grade_level_by_student_id,
    update_grade_levels,
    delete_grade_levels,
)

__all__ = [
    # Student operations
    "SEARCHABLE_FIELDS",
    "insert_student",
    "get_student_by_id",
    "update_student",
    "delete_student",
    "search_students",
    # Class operations
    "insert_class_assignment",
    "get_class_by_student_id",
    "update_class_assignments",
    "delete_class_assignments",
    # Grade level operations
    "insert_grade_level",
    "get_grade_level_by_student_id",
    "update_grade_levels",
    "delete_grade_levels",
]
