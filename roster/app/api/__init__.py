"""API endpoints package for the roster service."""

from roster.app.api.students import router as students_router

__all__ = [
    "students_router",
]
