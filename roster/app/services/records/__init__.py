"""Record coordinator package.

- models.py: operation/collection enums and input dataclasses
- identifiers.py: canonical student identifier generation and parsing
- coordinator.py: RecordCoordinator and its singleton accessor
"""

from roster.app.services.records.models import (
    Collection,
    Operation,
    SearchFilters,
    StudentFields,
)
from roster.app.services.records.identifiers import new_student_id, parse_student_id
from roster.app.services.records.coordinator import (
    RecordCoordinator,
    get_record_coordinator,
    reset_record_coordinator,
)

__all__ = [
    "Collection",
    "Operation",
    "SearchFilters",
    "StudentFields",
    "new_student_id",
    "parse_student_id",
    "RecordCoordinator",
    "get_record_coordinator",
    "reset_record_coordinator",
]
