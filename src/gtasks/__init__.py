"""
gtasks: async client for the Google Tasks API v1.

Usage:
    from gtasks import TasksService, Task

    async with TasksService.from_file() as service:
        outcome = await service.insert_task("@default", Task(title="Buy milk"))
        print(outcome.payload.id)
"""

from .config import ClientConfig
from .exceptions import (
    TasksClientError, TransportError, CredentialError, DecodeError,
    RemoteRejected, InvalidArgument, TasksNotFoundError, TasksPermissionError
)
from .http import BearerTokenAuth
from .outcome import Success, Unchanged, Failed, UNCHANGED, classify
from .resources import (
    Task, TaskLink, TaskList, TaskLists, Tasks,
    TaskListsOptions, TasksOptions, TaskInsertOptions, TaskQueryBuilder
)
from .service import TasksService

__version__ = "0.5.0"

__all__ = [
    # Service
    "TasksService",
    "ClientConfig",
    "BearerTokenAuth",

    # Outcomes
    "Success",
    "Unchanged",
    "Failed",
    "UNCHANGED",
    "classify",

    # Data types
    "Task",
    "TaskLink",
    "TaskList",
    "TaskLists",
    "Tasks",
    "TaskListsOptions",
    "TasksOptions",
    "TaskInsertOptions",
    "TaskQueryBuilder",

    # Errors
    "TasksClientError",
    "TransportError",
    "CredentialError",
    "DecodeError",
    "RemoteRejected",
    "InvalidArgument",
    "TasksNotFoundError",
    "TasksPermissionError",
]
