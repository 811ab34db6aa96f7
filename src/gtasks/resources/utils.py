"""
Mapping between Tasks API JSON documents and the resource dataclasses.

Parsing is strict about types: a field that is present with the wrong JSON
type raises ValueError, which the response classifier reports as a
DecodeError. Unknown fields are ignored and absent fields map to None.
"""

from dataclasses import replace
from datetime import datetime
from typing import Optional, Dict, Any, List
import logging

from ..utils.datetime import parse_rfc3339
from .types import Task, TaskList, TaskLists, Tasks, TaskLink

logger = logging.getLogger(__name__)


def _require_object(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _get_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string, got {type(value).__name__}")
    return value


def _get_bool(data: Dict[str, Any], key: str) -> Optional[bool]:
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        raise ValueError(f"field '{key}' must be a boolean, got {type(value).__name__}")
    return value


def _get_datetime(data: Dict[str, Any], key: str) -> Optional[datetime]:
    value = _get_str(data, key)
    if value is None:
        return None
    try:
        return parse_rfc3339(value)
    except ValueError as e:
        raise ValueError(f"field '{key}': {e}") from None


def _get_list(data: Dict[str, Any], key: str) -> Optional[List[Any]]:
    value = data.get(key)
    if value is not None and not isinstance(value, list):
        raise ValueError(f"field '{key}' must be an array, got {type(value).__name__}")
    return value


def from_api_task_link(data: Any) -> TaskLink:
    """Create a TaskLink from one entry of a task's 'links' array."""
    data = _require_object(data, "task link")
    return TaskLink(
        type=_get_str(data, 'type'),
        description=_get_str(data, 'description'),
        link=_get_str(data, 'link'),
    )


def from_api_task(data: Any) -> Task:
    """
    Create a Task instance from a Tasks API response.

    Args:
        data: Decoded JSON document of a task resource.

    Returns:
        Task instance populated with the data from the document.

    Raises:
        ValueError: If the document does not match the task schema.
    """
    data = _require_object(data, "task")

    links = _get_list(data, 'links')
    if links is not None:
        links = [from_api_task_link(link) for link in links]

    return Task(
        kind=_get_str(data, 'kind'),
        id=_get_str(data, 'id'),
        etag=_get_str(data, 'etag'),
        title=_get_str(data, 'title'),
        updated=_get_datetime(data, 'updated'),
        self_link=_get_str(data, 'selfLink'),
        parent=_get_str(data, 'parent'),
        position=_get_str(data, 'position'),
        notes=_get_str(data, 'notes'),
        status=_get_str(data, 'status'),
        due=_get_datetime(data, 'due'),
        completed=_get_datetime(data, 'completed'),
        deleted=_get_bool(data, 'deleted'),
        hidden=_get_bool(data, 'hidden'),
        links=links,
    )


def from_api_task_list(data: Any) -> TaskList:
    """
    Create a TaskList instance from a Tasks API response.

    Args:
        data: Decoded JSON document of a task list resource.

    Returns:
        TaskList instance populated with the data from the document.
    """
    data = _require_object(data, "task list")
    return TaskList(
        kind=_get_str(data, 'kind'),
        id=_get_str(data, 'id'),
        etag=_get_str(data, 'etag'),
        title=_get_str(data, 'title'),
        updated=_get_datetime(data, 'updated'),
        self_link=_get_str(data, 'selfLink'),
    )


def from_api_tasks(data: Any) -> Tasks:
    """Create a page of tasks. A missing 'items' field means an empty page."""
    data = _require_object(data, "tasks collection")
    items = _get_list(data, 'items') or []
    return Tasks(
        kind=_get_str(data, 'kind'),
        etag=_get_str(data, 'etag'),
        next_page_token=_get_str(data, 'nextPageToken'),
        items=[from_api_task(item) for item in items],
    )


def from_api_task_lists(data: Any) -> TaskLists:
    """Create a page of task lists. A missing 'items' field means an empty page."""
    data = _require_object(data, "task lists collection")
    items = _get_list(data, 'items') or []
    return TaskLists(
        kind=_get_str(data, 'kind'),
        etag=_get_str(data, 'etag'),
        next_page_token=_get_str(data, 'nextPageToken'),
        items=[from_api_task_list(item) for item in items],
    )


def create_update_body(resource) -> Dict[str, Any]:
    """
    Create the body of a full update (PUT) request.

    The last modification time is server-assigned, so it is never sent.
    The caller's object is left untouched.

    Args:
        resource: The Task or TaskList being updated.

    Returns:
        Dictionary suitable for Tasks API update requests.
    """
    if resource.updated is not None:
        logger.debug("Dropping server-assigned 'updated' field from update body")
    return replace(resource, updated=None).to_dict()
