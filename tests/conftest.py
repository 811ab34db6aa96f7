import pytest
from typing import Any, List, Optional
from unittest.mock import Mock

import httpx

from gtasks import TasksService, ClientConfig

BASE_URL = "https://tasks.example.test/tasks/v1"


class FakeTasksApi:
    """
    Serves queued responses through an httpx.MockTransport and records every
    request that reaches the transport.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._responses: List[Any] = []

    def add_response(
            self,
            status_code: int = 200,
            json: Any = None,
            text: Optional[str] = None,
            content: Optional[bytes] = None,
            headers: Optional[dict] = None
    ) -> None:
        kwargs = {'headers': headers}
        if json is not None:
            kwargs['json'] = json
        elif text is not None:
            kwargs['text'] = text
        elif content is not None:
            kwargs['content'] = content
        self._responses.append((status_code, kwargs))

    def add_error(self, error: Exception) -> None:
        self._responses.append(error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        queued = self._responses.pop(0)
        if isinstance(queued, Exception):
            raise queued
        status_code, kwargs = queued
        return httpx.Response(status_code, **kwargs)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def fake_api():
    """Fake Tasks API behind a mock transport."""
    return FakeTasksApi()


@pytest.fixture
def token_supplier():
    """Credential supplier returning a fixed token."""
    return Mock(return_value="test-token")


@pytest.fixture
def client_config():
    return ClientConfig(base_url=BASE_URL)


@pytest.fixture
def service(fake_api, token_supplier, client_config):
    """TasksService wired to the fake API."""
    return TasksService(token_supplier, config=client_config, transport=fake_api.transport)


@pytest.fixture
def http_client(fake_api, token_supplier, client_config):
    """Authenticated httpx client wired to the fake API."""
    from gtasks.http import build_http_client
    return build_http_client(token_supplier, client_config, fake_api.transport)


# Tasks-specific fixtures
@pytest.fixture
def sample_task_response():
    """Sample Google Tasks API task response."""
    return {
        "kind": "tasks#task",
        "id": "task_123",
        "etag": "\"LTEyMzQ1Njc4OQ\"",
        "title": "Sample Task",
        "notes": "This is a sample task for testing",
        "status": "needsAction",
        "due": "2025-01-20T00:00:00.000Z",
        "updated": "2025-01-15T10:00:00.000Z",
        "selfLink": "https://www.googleapis.com/tasks/v1/lists/list_123/tasks/task_123",
        "position": "00000000000000000000",
        "links": [
            {"type": "email", "description": "Original email", "link": "https://mail.google.com/mail/#all/123"}
        ]
    }


@pytest.fixture
def sample_task_list_response():
    """Sample Google Tasks API task list response."""
    return {
        "kind": "tasks#taskList",
        "id": "list_123",
        "etag": "\"LTk4NzY1NDMyMQ\"",
        "title": "Sample Task List",
        "updated": "2025-01-15T10:00:00.000Z",
        "selfLink": "https://www.googleapis.com/tasks/v1/users/@me/lists/list_123"
    }
