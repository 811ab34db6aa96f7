from typing import Optional

from .base import RemoteRejected


class TasksNotFoundError(RemoteRejected):
    """Raised when a task or task list is not found."""
    pass


class TasksPermissionError(RemoteRejected):
    """Raised when the user lacks permission for a tasks operation."""
    pass


_STATUS_ERRORS = {
    403: TasksPermissionError,
    404: TasksNotFoundError,
}


def rejection_for_status(status: int, body: str, content: Optional[bytes] = None) -> RemoteRejected:
    """
    Build the RemoteRejected error matching an HTTP status.

    Args:
        status: HTTP status code of the rejected response.
        body: Response body text.
        content: Response body bytes, if available.

    Returns:
        A RemoteRejected instance, specialised for 403 and 404.
    """
    error_class = _STATUS_ERRORS.get(status, RemoteRejected)
    return error_class(status, body, content=content)
