from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Dict, Any

from ..exceptions import InvalidArgument
from ..utils.datetime import format_rfc3339
from .constants import MAX_RESULTS_LIMIT, TASK_STATUS_COMPLETED


def _drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def _format_bool(value: Optional[bool]) -> Optional[str]:
    if value is None:
        return None
    return 'true' if value else 'false'


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return format_rfc3339(value)


def _validate_max_results(max_results: Optional[int]) -> None:
    if max_results is not None and not 1 <= max_results <= MAX_RESULTS_LIMIT:
        raise InvalidArgument(f"max_results must be between 1 and {MAX_RESULTS_LIMIT}")


@dataclass
class TaskLink:
    """
    A link attached to a task.
    Args:
        type: Type of the link, e.g. "email".
        description: The link description.
        link: The URL.
    """
    type: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None

    def to_dict(self) -> dict:
        return _drop_none({
            'type': self.type,
            'description': self.description,
            'link': self.link,
        })


@dataclass
class TaskList:
    """
    A Google Tasks task list.
    Args:
        kind: Type of the resource, always "tasks#taskList".
        id: Task list identifier.
        etag: ETag of the resource.
        title: Title of the task list.
        updated: Last modification time of the task list.
        self_link: URL pointing to this task list.
    """
    kind: Optional[str] = None
    id: Optional[str] = None
    etag: Optional[str] = None
    title: Optional[str] = None
    updated: Optional[datetime] = None
    self_link: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert TaskList to the API representation, omitting unset fields."""
        return _drop_none({
            'kind': self.kind,
            'id': self.id,
            'etag': self.etag,
            'title': self.title,
            'updated': _format_datetime(self.updated),
            'selfLink': self.self_link,
        })


@dataclass
class TaskLists:
    """One page of task lists."""
    kind: Optional[str] = None
    etag: Optional[str] = None
    next_page_token: Optional[str] = None
    items: List[TaskList] = field(default_factory=list)


@dataclass
class Task:
    """
    A Google Tasks task.
    Args:
        kind: Type of the resource, always "tasks#task".
        id: Task identifier.
        etag: ETag of the resource.
        title: Title of the task.
        updated: Last modification time of the task. Server-assigned.
        self_link: URL pointing to this task.
        parent: Parent task identifier. Read-only; use move to change it.
        position: Position among sibling tasks. Read-only; use move to change it.
        notes: Notes describing the task.
        status: Either "needsAction" or "completed".
        due: Due date of the task. The API keeps only the date portion.
        completed: Completion time of the task.
        deleted: Whether the task has been deleted.
        hidden: Whether the task is hidden (completed when the list was last cleared).
        links: Collection of links. Read-only.
    """
    kind: Optional[str] = None
    id: Optional[str] = None
    etag: Optional[str] = None
    title: Optional[str] = None
    updated: Optional[datetime] = None
    self_link: Optional[str] = None
    parent: Optional[str] = None
    position: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None
    due: Optional[datetime] = None
    completed: Optional[datetime] = None
    deleted: Optional[bool] = None
    hidden: Optional[bool] = None
    links: Optional[List[TaskLink]] = None

    @property
    def is_completed(self) -> bool:
        """Check if task is completed."""
        return self.status == TASK_STATUS_COMPLETED

    def to_dict(self) -> dict:
        """Convert Task to the API representation, omitting unset fields."""
        links = None
        if self.links is not None:
            links = [link.to_dict() for link in self.links]

        return _drop_none({
            'kind': self.kind,
            'id': self.id,
            'etag': self.etag,
            'title': self.title,
            'updated': _format_datetime(self.updated),
            'selfLink': self.self_link,
            'parent': self.parent,
            'position': self.position,
            'notes': self.notes,
            'status': self.status,
            'due': _format_datetime(self.due),
            'completed': _format_datetime(self.completed),
            'deleted': self.deleted,
            'hidden': self.hidden,
            'links': links,
        })


@dataclass
class Tasks:
    """One page of tasks."""
    kind: Optional[str] = None
    etag: Optional[str] = None
    next_page_token: Optional[str] = None
    items: List[Task] = field(default_factory=list)


@dataclass
class TaskListsOptions:
    """
    Query parameters for listing task lists.
    Args:
        max_results: Maximum number of task lists on one page (1-100, server default 20).
        page_token: Token of the result page to return.
    """
    max_results: Optional[int] = None
    page_token: Optional[str] = None

    def to_params(self) -> Dict[str, str]:
        _validate_max_results(self.max_results)
        return _drop_none({
            'maxResults': str(self.max_results) if self.max_results is not None else None,
            'pageToken': self.page_token,
        })


@dataclass
class TasksOptions:
    """
    Query parameters for listing the tasks of a task list.
    Datetime bounds are sent as RFC 3339; naive values are taken as local time.
    """
    completed_max: Optional[datetime] = None
    completed_min: Optional[datetime] = None
    due_max: Optional[datetime] = None
    due_min: Optional[datetime] = None
    max_results: Optional[int] = None
    page_token: Optional[str] = None
    show_completed: Optional[bool] = None
    show_deleted: Optional[bool] = None
    show_hidden: Optional[bool] = None
    updated_min: Optional[datetime] = None

    def to_params(self) -> Dict[str, str]:
        _validate_max_results(self.max_results)
        return _drop_none({
            'completedMax': _format_datetime(self.completed_max),
            'completedMin': _format_datetime(self.completed_min),
            'dueMax': _format_datetime(self.due_max),
            'dueMin': _format_datetime(self.due_min),
            'maxResults': str(self.max_results) if self.max_results is not None else None,
            'pageToken': self.page_token,
            'showCompleted': _format_bool(self.show_completed),
            'showDeleted': _format_bool(self.show_deleted),
            'showHidden': _format_bool(self.show_hidden),
            'updatedMin': _format_datetime(self.updated_min),
        })


@dataclass
class TaskInsertOptions:
    """
    Placement of a task when inserting or moving it.
    Args:
        parent: Parent task identifier. Omit to place the task at the top level.
        previous: Previous sibling identifier. Omit to place the task first among its siblings.
    """
    parent: Optional[str] = None
    previous: Optional[str] = None

    def to_params(self) -> Dict[str, str]:
        return _drop_none({
            'parent': self.parent,
            'previous': self.previous,
        })
