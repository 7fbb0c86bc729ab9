"""Student identifier generation and parsing.

Every collection stores the student reference in the same canonical form,
32 lowercase hex characters, so lookups never depend on how a caller
spelled the identifier.
"""
import uuid

from roster.app.exceptions import InvalidIdentifierError, MalformedInputError


def new_student_id() -> str:
    """Generate a fresh canonical student identifier."""
    return uuid.uuid4().hex


def parse_student_id(raw: str | None) -> str:
    """Parse a caller-supplied identifier into canonical form.

    Accepts plain hex, hyphenated and upper-case UUID spellings.

    Raises:
        MalformedInputError: if the identifier is missing
        InvalidIdentifierError: if it is not a valid UUID, blank included
    """
    if not raw:
        raise MalformedInputError("student_id is required")
    try:
        return uuid.UUID(raw.strip()).hex
    except ValueError:
        raise InvalidIdentifierError(raw) from None
