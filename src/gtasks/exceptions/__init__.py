from .base import (
    TasksClientError, TransportError, AuthenticationError, APIError,
    ValidationError, InvalidArgument, DecodeError, RemoteRejected
)
from .auth import CredentialError, InvalidCredentialsError
from .tasks import TasksNotFoundError, TasksPermissionError, rejection_for_status

__all__ = [
    "TasksClientError",
    "TransportError",
    "AuthenticationError",
    "APIError",
    "ValidationError",
    "InvalidArgument",
    "DecodeError",
    "RemoteRejected",
    "CredentialError",
    "InvalidCredentialsError",
    "TasksNotFoundError",
    "TasksPermissionError",
    "rejection_for_status",
]
