"""
Async client for the Google Tasks API.

Each TasksService owns one authenticated httpx client. Every operation is a
single request: the credential supplier is asked for a token, the request is
sent, and the response is classified into Success or Unchanged, or raised as
an error. Nothing is retried.

Usage:
    async with TasksService.from_file() as service:
        outcome = await service.list_tasks("@default")
        for task in outcome.payload.items:
            print(task.title)

        # Conditional read: Unchanged when the list has not changed
        outcome = await service.list_tasks("@default", etag=outcome.payload.etag)
"""

from dataclasses import replace
from typing import AsyncIterator, Callable, Optional, Union
import logging

import httpx
from google.oauth2.credentials import Credentials

from .auth.credentials import (
    StaticTokenSupplier, GoogleCredentialsSupplier, save_token_to_file, report_token_data
)
from .auth.oauth import TokenDataCallback, get_credentials_from_file, get_credentials_from_info
from .config import ClientConfig, TOKEN_PATH
from .http import TokenSupplier, build_http_client
from .outcome import Success, Unchanged
from .resources import tasklists, tasks
from .resources.constants import DEFAULT_TASK_LIST_ID
from .resources.query_builder import TaskQueryBuilder
from .resources.types import (
    Task, TaskList, TaskListsOptions, TasksOptions, TaskInsertOptions
)

logger = logging.getLogger(__name__)


class TasksService:
    """
    Facade over the task list and task operations.

    Args:
        token_supplier: Credential supplier called before every request.
        config: Client settings (base URL, timeout, user agent).
        transport: httpx transport to send requests through. Defaults to the network.
    """

    def __init__(
            self,
            token_supplier: TokenSupplier,
            config: Optional[ClientConfig] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._config = config or ClientConfig()
        self._client = build_http_client(token_supplier, self._config, transport)

    @classmethod
    def from_access_token(cls, access_token: str, **kwargs) -> "TasksService":
        """Create a service sending the same access token with every request."""
        return cls(StaticTokenSupplier(access_token), **kwargs)

    @classmethod
    def from_credentials(
            cls,
            credentials: Credentials,
            token_path: Optional[str] = None,
            on_refresh: Optional[Callable[[Credentials], None]] = None,
            **kwargs
    ) -> "TasksService":
        """
        Create a service from Google OAuth2 credentials, refreshed on demand.

        Args:
            credentials: Google OAuth2 credentials for the user.
            token_path: If given, refreshed credentials are written there.
            on_refresh: Called with the credentials after each refresh.
                Takes precedence over token_path.
        """
        if on_refresh is None and token_path:
            on_refresh = save_token_to_file(token_path)
        return cls(GoogleCredentialsSupplier(credentials, on_refresh=on_refresh), **kwargs)

    @classmethod
    def from_file(
            cls,
            credentials_path: Optional[str] = None,
            token_path: Optional[str] = None,
            scopes: Optional[list] = None,
            **kwargs
    ) -> "TasksService":
        """
        Create a service from credential files (single user scenario).

        Args:
            credentials_path: Path to credentials.json file
            token_path: Path to token.json file
            scopes: List of OAuth scopes to request
        """
        token_path = token_path or TOKEN_PATH
        credentials = get_credentials_from_file(credentials_path, token_path, scopes)
        return cls.from_credentials(credentials, token_path=token_path, **kwargs)

    @classmethod
    def from_credentials_info(
            cls,
            app_credentials: dict,
            user_token_data: Optional[dict] = None,
            scopes: Optional[list] = None,
            on_token_update: Optional[TokenDataCallback] = None,
            **kwargs
    ) -> "TasksService":
        """
        Create a service from credential data (multi-user scenario).

        Args:
            app_credentials: OAuth client configuration dict
            user_token_data: Previously stored user token data dict
            scopes: List of OAuth scopes to request
            on_token_update: Called with new token data to store, both when the
                credentials are refreshed or authorized here and on every
                later refresh made while the service is in use.
        """
        credentials, _ = get_credentials_from_info(
            app_credentials, user_token_data, scopes, on_token_update
        )
        on_refresh = report_token_data(on_token_update) if on_token_update else None
        return cls.from_credentials(credentials, on_refresh=on_refresh, **kwargs)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "TasksService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    # Task list operations
    async def list_tasklists(
            self,
            options: Optional[TaskListsOptions] = None,
            etag: Optional[str] = None
    ) -> Union[Success, Unchanged]:
        """Returns all the authenticated user's task lists. Payload: TaskLists."""
        return await tasklists.list_tasklists(self._client, options, etag)

    async def get_tasklist(self, tasklist_id: str, etag: Optional[str] = None) -> Union[Success, Unchanged]:
        """Returns the authenticated user's specified task list. Payload: TaskList."""
        return await tasklists.get_tasklist(self._client, tasklist_id, etag)

    async def insert_tasklist(self, tasklist: TaskList) -> Success:
        """Creates a new task list and adds it to the authenticated user's task lists."""
        return await tasklists.insert_tasklist(self._client, tasklist)

    async def update_tasklist(self, tasklist: TaskList) -> Success:
        """Updates the authenticated user's specified task list."""
        return await tasklists.update_tasklist(self._client, tasklist)

    async def delete_tasklist(self, tasklist_id: str) -> Success:
        """Deletes the authenticated user's specified task list."""
        return await tasklists.delete_tasklist(self._client, tasklist_id)

    async def patch_tasklist(self, tasklist_id: str, tasklist: TaskList) -> Success:
        """Updates the authenticated user's specified task list. This method supports patch semantics."""
        return await tasklists.patch_tasklist(self._client, tasklist_id, tasklist)

    # Task operations
    async def list_tasks(
            self,
            tasklist_id: str = DEFAULT_TASK_LIST_ID,
            options: Optional[TasksOptions] = None,
            etag: Optional[str] = None
    ) -> Union[Success, Unchanged]:
        """Returns all tasks in the specified task list. Payload: Tasks."""
        return await tasks.list_tasks(self._client, tasklist_id, options, etag)

    async def get_task(
            self,
            tasklist_id: str,
            task_id: str,
            etag: Optional[str] = None
    ) -> Union[Success, Unchanged]:
        """Returns the specified task. Payload: Task."""
        return await tasks.get_task(self._client, tasklist_id, task_id, etag)

    async def insert_task(
            self,
            tasklist_id: str,
            task: Task,
            options: Optional[TaskInsertOptions] = None
    ) -> Success:
        """Creates a new task on the specified task list."""
        return await tasks.insert_task(self._client, tasklist_id, task, options)

    async def update_task(self, tasklist_id: str, task: Task) -> Success:
        """Updates the specified task."""
        return await tasks.update_task(self._client, tasklist_id, task)

    async def delete_task(self, tasklist_id: str, task_id: str) -> Success:
        """Deletes the specified task from the task list."""
        return await tasks.delete_task(self._client, tasklist_id, task_id)

    async def clear_tasks(self, tasklist_id: str) -> Success:
        """
        Clears all completed tasks from the specified task list.
        The affected tasks will be marked as 'hidden' and no longer be returned by default.
        """
        return await tasks.clear_tasks(self._client, tasklist_id)

    async def move_task(
            self,
            tasklist_id: str,
            task_id: str,
            options: Optional[TaskInsertOptions] = None
    ) -> Success:
        """
        Moves the specified task to another position in the task list.
        This can include putting it as a child task under a new parent and/or
        moving it to a different position among its sibling tasks.
        """
        return await tasks.move_task(self._client, tasklist_id, task_id, options)

    async def patch_task(self, tasklist_id: str, task_id: str, task: Task) -> Success:
        """Updates the specified task. This method supports patch semantics."""
        return await tasks.patch_task(self._client, tasklist_id, task_id, task)

    # Paging and queries
    async def iter_tasklists(self, options: Optional[TaskListsOptions] = None) -> AsyncIterator[TaskList]:
        """Yield every task list, following nextPageToken across pages."""
        options = options or TaskListsOptions()
        while True:
            page = (await self.list_tasklists(options)).payload
            for tasklist in page.items:
                yield tasklist
            if not page.next_page_token:
                return
            options = replace(options, page_token=page.next_page_token)

    async def iter_tasks(
            self,
            tasklist_id: str = DEFAULT_TASK_LIST_ID,
            options: Optional[TasksOptions] = None
    ) -> AsyncIterator[Task]:
        """Yield every task of a task list, following nextPageToken across pages."""
        options = options or TasksOptions()
        while True:
            page = (await self.list_tasks(tasklist_id, options)).payload
            for task in page.items:
                yield task
            if not page.next_page_token:
                return
            options = replace(options, page_token=page.next_page_token)

    def query(self, tasklist_id: str = DEFAULT_TASK_LIST_ID) -> TaskQueryBuilder:
        """
        Create a TaskQueryBuilder for building task queries with a fluent API.

        Example:
            tasks = await (service.query("my_list_id")
                .limit(50)
                .due_today()
                .show_completed(False)
                .execute())
        """
        return TaskQueryBuilder(self, tasklist_id)
