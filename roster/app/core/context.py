"""Per-request context shared between middleware and logging."""

from contextvars import ContextVar
from typing import Optional

# Context variable for storing the request ID in async context
_request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_current_request_id() -> Optional[str]:
    """Get the request ID bound to the current async context.

    Returns:
        Request ID or None outside of a request
    """
    return _request_id_var.get()


def set_current_request_id(request_id: Optional[str]) -> None:
    """Bind a request ID to the current async context.

    Args:
        request_id: Request ID to set, or None to clear
    """
    _request_id_var.set(request_id)
