import asyncio
import copy
from datetime import datetime, date, timedelta
from typing import Optional, List, Dict, TYPE_CHECKING
import logging

from ..exceptions import InvalidArgument
from .constants import DEFAULT_TASK_LIST_ID, MAX_RESULTS_LIMIT
from .types import Task, TasksOptions

if TYPE_CHECKING:
    from ..service import TasksService

logger = logging.getLogger(__name__)


class TaskQueryBuilder:
    """
    Builder for task list queries with a fluent API.
    Naive datetimes are interpreted in the local timezone.

    Example usage:
        tasks = await (service.query("my_list_id")
            .limit(50)
            .due_before(end_date)
            .show_completed(False)
            .execute())
    """

    def __init__(self, service: "TasksService", tasklist_id: str = DEFAULT_TASK_LIST_ID):
        self._service = service
        self._tasklist_id = tasklist_id
        self._max_results: Optional[int] = None
        self._completed_max: Optional[datetime] = None
        self._completed_min: Optional[datetime] = None
        self._due_max: Optional[datetime] = None
        self._due_min: Optional[datetime] = None
        self._updated_min: Optional[datetime] = None
        self._show_completed: Optional[bool] = None
        self._show_deleted: Optional[bool] = None
        self._show_hidden: Optional[bool] = None

    def limit(self, count: int) -> "TaskQueryBuilder":
        """
        Set the maximum number of tasks to retrieve.
        Args:
            count: Maximum number of tasks (1-100)
        Returns:
            Self for method chaining
        """
        if count < 1 or count > MAX_RESULTS_LIMIT:
            raise InvalidArgument(f"Limit must be between 1 and {MAX_RESULTS_LIMIT}")
        self._max_results = count
        return self

    def completed_after(self, min_date: datetime) -> "TaskQueryBuilder":
        """Filter tasks completed after the specified time."""
        self._completed_min = min_date
        return self

    def completed_before(self, max_date: datetime) -> "TaskQueryBuilder":
        """Filter tasks completed before the specified time."""
        self._completed_max = max_date
        return self

    def completed_in_range(self, min_date: datetime, max_date: datetime) -> "TaskQueryBuilder":
        """
        Filter tasks completed within the specified range.
        Args:
            min_date: Minimum completion time
            max_date: Maximum completion time
        Returns:
            Self for method chaining
        """
        if min_date >= max_date:
            raise InvalidArgument("Start date must be before end date")
        self._completed_min = min_date
        self._completed_max = max_date
        return self

    def due_after(self, min_date: datetime) -> "TaskQueryBuilder":
        """Filter tasks due after the specified time."""
        self._due_min = min_date
        return self

    def due_before(self, max_date: datetime) -> "TaskQueryBuilder":
        """Filter tasks due before the specified time."""
        self._due_max = max_date
        return self

    def due_in_range(self, min_date: datetime, max_date: datetime) -> "TaskQueryBuilder":
        """
        Filter tasks due within the specified range.
        Args:
            min_date: Minimum due time
            max_date: Maximum due time
        Returns:
            Self for method chaining
        """
        if min_date >= max_date:
            raise InvalidArgument("Start date must be before end date")
        self._due_min = min_date
        self._due_max = max_date
        return self

    def updated_after(self, min_date: datetime) -> "TaskQueryBuilder":
        """Filter tasks modified after the specified time."""
        self._updated_min = min_date
        return self

    def show_completed(self, show: bool = True) -> "TaskQueryBuilder":
        """Include or exclude completed tasks in results."""
        self._show_completed = show
        return self

    def show_deleted(self, show: bool = True) -> "TaskQueryBuilder":
        """Include or exclude deleted tasks in results."""
        self._show_deleted = show
        return self

    def show_hidden(self, show: bool = True) -> "TaskQueryBuilder":
        """Include or exclude hidden tasks in results."""
        self._show_hidden = show
        return self

    def in_task_list(self, tasklist_id: str) -> "TaskQueryBuilder":
        """Specify which task list to query."""
        self._tasklist_id = tasklist_id
        return self

    # Convenience date methods
    def due_today(self) -> "TaskQueryBuilder":
        """Filter to tasks due today."""
        start_of_day = datetime.combine(date.today(), datetime.min.time())
        return self.due_in_range(start_of_day, start_of_day + timedelta(days=1))

    def due_tomorrow(self) -> "TaskQueryBuilder":
        """Filter to tasks due tomorrow."""
        tomorrow = date.today() + timedelta(days=1)
        start_of_day = datetime.combine(tomorrow, datetime.min.time())
        return self.due_in_range(start_of_day, start_of_day + timedelta(days=1))

    def due_this_week(self) -> "TaskQueryBuilder":
        """Filter to tasks due this week (Monday to Sunday)."""
        today = date.today()
        monday = today - timedelta(days=today.weekday())
        start_of_week = datetime.combine(monday, datetime.min.time())
        return self.due_in_range(start_of_week, start_of_week + timedelta(days=7))

    def due_next_days(self, days: int) -> "TaskQueryBuilder":
        """
        Filter to tasks due in the next N days, today included.
        Args:
            days: Number of days from today
        Returns:
            Self for method chaining
        """
        if days < 1:
            raise InvalidArgument("Days must be positive")

        start = datetime.combine(date.today(), datetime.min.time())
        return self.due_in_range(start, start + timedelta(days=days + 1))

    def overdue(self) -> "TaskQueryBuilder":
        """Filter to tasks that are overdue (due before today and not completed)."""
        today = datetime.combine(date.today(), datetime.min.time())
        return self.due_before(today).show_completed(False)

    def completed_today(self) -> "TaskQueryBuilder":
        """Filter to tasks completed today."""
        start_of_day = datetime.combine(date.today(), datetime.min.time())
        return self.completed_in_range(start_of_day, start_of_day + timedelta(days=1))

    def completed_last_days(self, days: int) -> "TaskQueryBuilder":
        """
        Filter to tasks completed in the last N days.
        Args:
            days: Number of days back to search
        Returns:
            Self for method chaining
        """
        if days < 1:
            raise InvalidArgument("Days must be positive")

        today = date.today()
        start = datetime.combine(today - timedelta(days=days), datetime.min.time())
        end = datetime.combine(today + timedelta(days=1), datetime.min.time())
        return self.completed_in_range(start, end)

    def build_options(self) -> TasksOptions:
        """Return the list options described by this builder."""
        return TasksOptions(
            completed_max=self._completed_max,
            completed_min=self._completed_min,
            due_max=self._due_max,
            due_min=self._due_min,
            max_results=self._max_results,
            show_completed=self._show_completed,
            show_deleted=self._show_deleted,
            show_hidden=self._show_hidden,
            updated_min=self._updated_min,
        )

    async def execute(self) -> List[Task]:
        """
        Execute the query and return the first page of matching tasks.
        Returns:
            List of Task objects matching the criteria
        Raises:
            RemoteRejected: If the API rejects the query
        """
        logger.info("Executing task query on task list: %s", self._tasklist_id)
        outcome = await self._service.list_tasks(self._tasklist_id, self.build_options())
        tasks = outcome.payload.items

        logger.info("Task query returned %d tasks", len(tasks))
        return tasks

    async def count(self) -> int:
        """Execute the query and return the number of matching tasks on the first page."""
        return len(await self.execute())

    async def first(self) -> Optional[Task]:
        """Execute the query and return only the first matching task, or None."""
        tasks = await self.limit(1).execute()
        return tasks[0] if tasks else None

    async def exists(self) -> bool:
        """Check if any tasks match the criteria."""
        return await self.first() is not None

    async def execute_multiple_task_lists(self, tasklist_ids: List[str]) -> Dict[str, List[Task]]:
        """
        Execute the same query across multiple task lists concurrently.
        Args:
            tasklist_ids: Task list IDs to query
        Returns:
            Dictionary mapping tasklist_id to its list of tasks
        Raises:
            The first error raised by any of the queries
        """
        logger.info("Executing task query across %d task lists", len(tasklist_ids))

        async def query_task_list(tasklist_id: str) -> List[Task]:
            builder = copy.copy(self)
            builder._tasklist_id = tasklist_id
            return await builder.execute()

        results = await asyncio.gather(*[query_task_list(tid) for tid in tasklist_ids])
        return dict(zip(tasklist_ids, results))
