"""Google Tasks API resources: task lists and tasks."""

from .types import (
    Task, TaskLink, TaskList, TaskLists, Tasks,
    TaskListsOptions, TasksOptions, TaskInsertOptions
)
from .query_builder import TaskQueryBuilder

__all__ = [
    # Data types
    "Task",
    "TaskLink",
    "TaskList",
    "TaskLists",
    "Tasks",

    # Request options
    "TaskListsOptions",
    "TasksOptions",
    "TaskInsertOptions",

    # Query builder
    "TaskQueryBuilder",
]
