"""Tests for student identifier generation and parsing."""

import uuid

import pytest

from roster.app.exceptions import InvalidIdentifierError, MalformedInputError
from roster.app.services.records.identifiers import new_student_id, parse_student_id


def test_new_student_id_is_canonical():
    student_id = new_student_id()

    assert len(student_id) == 32
    assert student_id == student_id.lower()
    assert parse_student_id(student_id) == student_id


def test_new_student_ids_are_unique():
    assert len({new_student_id() for _ in range(100)}) == 100


@pytest.mark.parametrize(
    "spelling",
    [
        "0af7651916cd43dd8448eb211c80319c",
        "0AF7651916CD43DD8448EB211C80319C",
        "0af76519-16cd-43dd-8448-eb211c80319c",
        "  0af7651916cd43dd8448eb211c80319c ",
    ],
)
def test_parse_accepts_uuid_spellings(spelling):
    assert parse_student_id(spelling) == "0af7651916cd43dd8448eb211c80319c"


@pytest.mark.parametrize(
    "raw", ["not-an-id", "12345", "0af7651916cd43dd8448eb211c80319z", " ", "   "]
)
def test_parse_rejects_malformed(raw):
    with pytest.raises(InvalidIdentifierError) as exc_info:
        parse_student_id(raw)

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Invalid student_id format"


@pytest.mark.parametrize("raw", [None, ""])
def test_parse_requires_value(raw):
    with pytest.raises(MalformedInputError):
        parse_student_id(raw)


def test_parse_round_trips_uuid_object():
    value = uuid.uuid4()

    assert parse_student_id(str(value)) == value.hex
