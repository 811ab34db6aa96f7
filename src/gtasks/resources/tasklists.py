"""Task list operations (``/users/@me/lists``)."""

from typing import Optional, Union
import logging

import httpx

from ..exceptions import InvalidArgument
from ..outcome import Success, Unchanged
from ..utils.log_sanitizer import sanitize_for_logging
from . import utils
from .base import execute, path_param
from .constants import TASKLISTS_PATH, TASKLIST_PATH
from .types import TaskList, TaskListsOptions

logger = logging.getLogger(__name__)


def _tasklist_path(tasklist_id: str) -> str:
    return TASKLIST_PATH.format(tasklist_id=path_param(tasklist_id, "tasklist_id"))


async def list_tasklists(
        client: httpx.AsyncClient,
        options: Optional[TaskListsOptions] = None,
        etag: Optional[str] = None
) -> Union[Success, Unchanged]:
    """Returns all the authenticated user's task lists (one page)."""
    params = options.to_params() if options else None
    logger.info("Listing task lists")
    return await execute(
        client, 'GET', TASKLISTS_PATH,
        params=params, etag=etag, decoder=utils.from_api_task_lists
    )


async def get_tasklist(
        client: httpx.AsyncClient,
        tasklist_id: str,
        etag: Optional[str] = None
) -> Union[Success, Unchanged]:
    """Returns the authenticated user's specified task list."""
    path = _tasklist_path(tasklist_id)
    logger.info("Retrieving task list with ID: %s", tasklist_id)
    return await execute(client, 'GET', path, etag=etag, decoder=utils.from_api_task_list)


async def insert_tasklist(client: httpx.AsyncClient, tasklist: TaskList) -> Success:
    """Creates a new task list and adds it to the authenticated user's task lists."""
    sanitized = sanitize_for_logging(title=tasklist.title)
    logger.info("Creating task list with title=%s", sanitized['title'])
    return await execute(
        client, 'POST', TASKLISTS_PATH,
        body=tasklist.to_dict(), decoder=utils.from_api_task_list
    )


async def update_tasklist(client: httpx.AsyncClient, tasklist: TaskList) -> Success:
    """
    Updates the authenticated user's specified task list.

    Raises:
        InvalidArgument: If the task list has no id. Nothing is sent.
    """
    if not tasklist.id:
        raise InvalidArgument("tasklist id cannot be None")

    path = _tasklist_path(tasklist.id)
    logger.info("Updating task list with ID: %s", tasklist.id)
    return await execute(
        client, 'PUT', path,
        body=utils.create_update_body(tasklist), decoder=utils.from_api_task_list
    )


async def delete_tasklist(client: httpx.AsyncClient, tasklist_id: str) -> Success:
    """Deletes the authenticated user's specified task list."""
    path = _tasklist_path(tasklist_id)
    logger.info("Deleting task list with ID: %s", tasklist_id)
    return await execute(client, 'DELETE', path)


async def patch_tasklist(
        client: httpx.AsyncClient,
        tasklist_id: str,
        tasklist: TaskList
) -> Success:
    """Updates the specified task list with patch semantics: only set fields are sent."""
    path = _tasklist_path(tasklist_id)
    logger.info("Patching task list with ID: %s", tasklist_id)
    return await execute(
        client, 'PATCH', path,
        body=tasklist.to_dict(), decoder=utils.from_api_task_list
    )
