"""Student record endpoints.

Thin HTTP layer over RecordCoordinator. Coordinator exceptions are turned
into responses by the handlers registered in main.create_app().
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict

from roster.app.services.records import (
    RecordCoordinator,
    SearchFilters,
    StudentFields,
    get_record_coordinator,
)

router = APIRouter(tags=["students"])

CoordinatorDep = Annotated[RecordCoordinator, Depends(get_record_coordinator)]


class StudentPayload(BaseModel):
    """Body of POST /students and PUT /students/{id}.

    Omitted fields are stored as empty strings.
    """

    first_name: str = ""
    last_name: str = ""
    address: str = ""
    class_name: str = ""
    grade_level: str = ""

    def to_fields(self) -> StudentFields:
        return StudentFields(
            first_name=self.first_name,
            last_name=self.last_name,
            address=self.address,
            grade_level=self.grade_level,
            class_name=self.class_name,
        )


class StudentResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    address: str
    grade_level: str
    class_name: str

    model_config = ConfigDict(from_attributes=True)


class ClassResponse(BaseModel):
    id: int
    student_id: str
    class_name: str
    grade_level: str

    model_config = ConfigDict(from_attributes=True)


class GradeLevelResponse(BaseModel):
    id: int
    student_id: str
    level: str

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str


@router.post(
    "/students",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_student(data: StudentPayload, coordinator: CoordinatorDep):
    """Create a student with its class and grade level records."""
    return await coordinator.create_student(data.to_fields())


@router.get("/students/{student_id}", response_model=StudentResponse)
async def get_student(student_id: str, coordinator: CoordinatorDep):
    """Get student by ID."""
    return await coordinator.get_student(student_id)


@router.put("/students/{student_id}", response_model=MessageResponse)
async def update_student(
    student_id: str,
    data: StudentPayload,
    coordinator: CoordinatorDep,
) -> MessageResponse:
    """Update a student and propagate class/grade to its dependents."""
    await coordinator.update_student(student_id, data.to_fields())
    return MessageResponse(message="Student updated successfully")


@router.delete("/students/{student_id}", response_model=MessageResponse)
async def delete_student(student_id: str, coordinator: CoordinatorDep) -> MessageResponse:
    """Delete a student with its class and grade level records."""
    await coordinator.delete_student(student_id)
    return MessageResponse(message="Student deleted successfully")


@router.get("/class/{student_id}", response_model=ClassResponse)
async def get_class(student_id: str, coordinator: CoordinatorDep):
    return await coordinator.get_class(student_id)


@router.get("/grade-level/{student_id}", response_model=GradeLevelResponse)
async def get_grade_level(student_id: str, coordinator: CoordinatorDep):
    return await coordinator.get_grade_level(student_id)


@router.get("/search-students", response_model=List[StudentResponse])
async def search_students(
    coordinator: CoordinatorDep,
    class_name: Optional[str] = Query(None),
    grade_level: Optional[str] = Query(None),
    first_name: Optional[str] = Query(None),
    last_name: Optional[str] = Query(None),
):
    """Search students by case-insensitive substring; omitted filters match all."""
    filters = SearchFilters(
        class_name=class_name,
        grade_level=grade_level,
        first_name=first_name,
        last_name=last_name,
    )
    return await coordinator.search_students(filters)
