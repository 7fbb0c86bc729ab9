"""Record coordinator models."""
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional


class Operation(str, Enum):
    """Coordinator operations, used in log records and error payloads."""
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    SEARCH = "search"


class Collection(str, Enum):
    """Collections touched by the coordinator."""
    STUDENTS = "students"
    GRADE_LEVELS = "grade_levels"
    CLASSES = "classes"


@dataclass(frozen=True)
class StudentFields:
    """Mutable fields of a student, as submitted on create and update."""
    first_name: str
    last_name: str
    address: str
    grade_level: str
    class_name: str

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class SearchFilters:
    """Substring filters for student search. None or "" means unfiltered."""
    class_name: Optional[str] = None
    grade_level: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    def active(self) -> dict[str, str]:
        """Return only the filters the caller actually supplied."""
        return {k: v for k, v in asdict(self).items() if v}
