"""Custom exceptions for the roster application."""


class RosterException(Exception):
    """Base class for roster exceptions with HTTP status code.

    All custom exceptions inherit from this class and define their
    specific status_code and error code for consistent HTTP response
    handling.
    """
    status_code: int = 500
    error: str = "internal_error"

    def __init__(self, message: str = "Roster error"):
        self.message = message
        super().__init__(message)

    def to_response(self) -> dict:
        """Convert to API response body."""
        return {"error": self.error, "message": self.message}


class MalformedInputError(RosterException):
    """Raised for unparseable request bodies or missing required parameters.

    Maps to HTTP 400 Bad Request.
    """
    status_code = 400
    error = "malformed_input"

    def __init__(self, detail: str = "Invalid JSON data"):
        super().__init__(detail)


class InvalidIdentifierError(RosterException):
    """Raised when an identifier does not parse into the store's key format.

    Maps to HTTP 400 Bad Request.
    """
    status_code = 400
    error = "invalid_identifier"

    def __init__(self, value: str, detail: str = "Invalid student_id format"):
        self.value = value
        super().__init__(detail)


class NotFoundError(RosterException):
    """Raised when a primary or dependent lookup/update matched nothing.

    Maps to HTTP 404 Not Found.
    """
    status_code = 404
    error = "not_found"

    def __init__(self, detail: str = "Student not found"):
        super().__init__(detail)


class PersistenceError(RosterException):
    """Raised when a store operation fails.

    Carries the coordinator operation and the collection whose step failed.
    Maps to HTTP 500 Internal Server Error.
    """
    status_code = 500
    error = "persistence_failure"

    def __init__(
        self,
        operation: str,
        collection: str | None = None,
        detail: str | None = None,
    ):
        self.operation = operation
        self.collection = collection
        message = detail or (
            f"Failed to {operation} {collection}" if collection
            else f"Failed to {operation} student"
        )
        super().__init__(message)

    def to_response(self) -> dict:
        body = super().to_response()
        body["operation"] = self.operation
        if self.collection:
            body["collection"] = self.collection
        return body


class PartialFailureError(PersistenceError):
    """Raised when a dependent step fails after the primary step succeeded.

    The surrounding transaction is rolled back, so nothing from the
    operation is committed.
    """
    error = "partial_failure"

    def __init__(self, operation: str, collection: str, completed: list[str]):
        self.completed = list(completed)
        detail = (
            f"Failed to {operation} {collection} after "
            f"{', '.join(self.completed)} succeeded; changes were rolled back"
        )
        super().__init__(operation, collection, detail)

    def to_response(self) -> dict:
        body = super().to_response()
        body["completed"] = self.completed
        return body


class OperationTimeoutError(PersistenceError):
    """Raised when an operation exceeds its time budget."""
    error = "operation_timeout"

    def __init__(self, operation: str, timeout: float):
        self.timeout = timeout
        super().__init__(
            operation, detail=f"Operation {operation} timed out after {timeout:g}s"
        )
