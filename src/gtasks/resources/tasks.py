"""Task operations (``/lists/{tasklist}/tasks``)."""

from typing import Optional, Union
import logging

import httpx

from ..exceptions import InvalidArgument
from ..outcome import Success, Unchanged
from ..utils.log_sanitizer import sanitize_for_logging
from . import utils
from .base import execute, path_param
from .constants import TASKS_PATH, TASK_PATH, TASK_MOVE_PATH, TASKS_CLEAR_PATH
from .types import Task, TasksOptions, TaskInsertOptions

logger = logging.getLogger(__name__)


def _tasks_path(template: str, tasklist_id: str) -> str:
    return template.format(tasklist_id=path_param(tasklist_id, "tasklist_id"))


def _task_path(template: str, tasklist_id: str, task_id: str) -> str:
    return template.format(
        tasklist_id=path_param(tasklist_id, "tasklist_id"),
        task_id=path_param(task_id, "task_id"),
    )


async def list_tasks(
        client: httpx.AsyncClient,
        tasklist_id: str,
        options: Optional[TasksOptions] = None,
        etag: Optional[str] = None
) -> Union[Success, Unchanged]:
    """Returns the tasks of the specified task list (one page)."""
    path = _tasks_path(TASKS_PATH, tasklist_id)
    params = options.to_params() if options else None

    sanitized = sanitize_for_logging(tasklist_id=tasklist_id, etag=etag)
    logger.info(
        "Fetching tasks from tasklist_id=%s, etag=%s",
        sanitized['tasklist_id'], sanitized['etag']
    )
    return await execute(
        client, 'GET', path, params=params, etag=etag, decoder=utils.from_api_tasks
    )


async def get_task(
        client: httpx.AsyncClient,
        tasklist_id: str,
        task_id: str,
        etag: Optional[str] = None
) -> Union[Success, Unchanged]:
    """Returns the specified task."""
    path = _task_path(TASK_PATH, tasklist_id, task_id)
    logger.info("Retrieving task with ID: %s from task list: %s", task_id, tasklist_id)
    return await execute(client, 'GET', path, etag=etag, decoder=utils.from_api_task)


async def insert_task(
        client: httpx.AsyncClient,
        tasklist_id: str,
        task: Task,
        options: Optional[TaskInsertOptions] = None
) -> Success:
    """Creates a new task on the specified task list, optionally under a parent or after a sibling."""
    path = _tasks_path(TASKS_PATH, tasklist_id)
    params = options.to_params() if options else None

    sanitized = sanitize_for_logging(title=task.title, tasklist_id=tasklist_id)
    logger.info(
        "Creating task with title=%s in tasklist_id=%s",
        sanitized['title'], sanitized['tasklist_id']
    )
    return await execute(
        client, 'POST', path, params=params, body=task.to_dict(), decoder=utils.from_api_task
    )


async def update_task(client: httpx.AsyncClient, tasklist_id: str, task: Task) -> Success:
    """
    Updates the specified task. The server-assigned ``updated`` field is not sent.

    Raises:
        InvalidArgument: If the task has no id. Nothing is sent.
    """
    if not task.id:
        raise InvalidArgument("task id cannot be None")

    path = _task_path(TASK_PATH, tasklist_id, task.id)
    logger.info("Updating task with ID: %s in task list: %s", task.id, tasklist_id)
    return await execute(
        client, 'PUT', path, body=utils.create_update_body(task), decoder=utils.from_api_task
    )


async def delete_task(client: httpx.AsyncClient, tasklist_id: str, task_id: str) -> Success:
    """Deletes the specified task from the task list."""
    path = _task_path(TASK_PATH, tasklist_id, task_id)
    logger.info("Deleting task with ID: %s from task list: %s", task_id, tasklist_id)
    return await execute(client, 'DELETE', path)


async def clear_tasks(client: httpx.AsyncClient, tasklist_id: str) -> Success:
    """
    Clears all completed tasks from the specified task list.
    The affected tasks are marked hidden and no longer returned by default.
    """
    path = _tasks_path(TASKS_CLEAR_PATH, tasklist_id)
    logger.info("Clearing completed tasks from task list: %s", tasklist_id)
    return await execute(client, 'POST', path)


async def move_task(
        client: httpx.AsyncClient,
        tasklist_id: str,
        task_id: str,
        options: Optional[TaskInsertOptions] = None
) -> Success:
    """
    Moves the specified task to another position in the task list.
    This can put it under a new parent and/or at a different position among its siblings.
    Without options the task moves to the first top-level position.
    """
    path = _task_path(TASK_MOVE_PATH, tasklist_id, task_id)
    params = options.to_params() if options else None
    logger.info("Moving task with ID: %s in task list: %s", task_id, tasklist_id)
    return await execute(client, 'POST', path, params=params, decoder=utils.from_api_task)


async def patch_task(
        client: httpx.AsyncClient,
        tasklist_id: str,
        task_id: str,
        task: Task
) -> Success:
    """Updates the specified task with patch semantics: only set fields are sent."""
    path = _task_path(TASK_PATH, tasklist_id, task_id)
    logger.info("Patching task with ID: %s in task list: %s", task_id, tasklist_id)
    return await execute(
        client, 'PATCH', path, body=task.to_dict(), decoder=utils.from_api_task
    )
