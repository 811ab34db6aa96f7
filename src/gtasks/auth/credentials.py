"""
Credential suppliers.

A credential supplier is any callable returning a bearer token, directly or
as an awaitable. TasksService calls it before every request, possibly from
several tasks or threads at once, so suppliers must be safe to call
concurrently.
"""

import asyncio
import logging
import threading
from typing import Callable, Optional

from google.auth import exceptions as google_auth_exceptions
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from ..exceptions import InvalidCredentialsError
from .oauth import credentials_to_token_data

logger = logging.getLogger(__name__)


class StaticTokenSupplier:
    """Supplies the same access token for every request."""

    def __init__(self, access_token: str):
        if not access_token:
            raise ValueError("access_token cannot be empty")
        self._access_token = access_token

    def __call__(self) -> str:
        return self._access_token

    def __repr__(self):
        return "StaticTokenSupplier(access_token=***redacted***)"


class GoogleCredentialsSupplier:
    """
    Supplies the access token of Google OAuth2 credentials, refreshing them
    when they are missing a token or expired.

    Refreshes run in a worker thread so the event loop is not blocked, and are
    serialized by a lock: concurrent callers wait for one refresh instead of
    each starting their own. google-auth credentials are not thread-safe.

    Args:
        credentials: Google OAuth2 credentials.
        on_refresh: Called with the credentials after each successful refresh,
            e.g. to persist the new token.
        request_factory: Builds the google-auth transport used for refreshes.
    """

    def __init__(
            self,
            credentials: Credentials,
            on_refresh: Optional[Callable[[Credentials], None]] = None,
            request_factory: Callable[[], Request] = Request
    ):
        self._credentials = credentials
        self._on_refresh = on_refresh
        self._request_factory = request_factory
        self._lock = threading.Lock()

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def get_token(self) -> str:
        """
        Return a valid access token, refreshing the credentials if needed. Blocking.

        Raises:
            InvalidCredentialsError: If the credentials cannot be refreshed.
        """
        with self._lock:
            # Another caller may have refreshed while we waited for the lock
            if not self._credentials.valid:
                self._refresh()
            return self._credentials.token

    def _refresh(self) -> None:
        logger.info("Refreshing expired credentials")
        try:
            self._credentials.refresh(self._request_factory())
        except google_auth_exceptions.GoogleAuthError as e:
            raise InvalidCredentialsError(f"Failed to refresh credentials: {e}") from e

        if self._on_refresh is not None:
            self._on_refresh(self._credentials)

    async def __call__(self) -> str:
        if self._credentials.valid:
            return self._credentials.token
        return await asyncio.to_thread(self.get_token)


def save_token_to_file(token_path: str) -> Callable[[Credentials], None]:
    """
    Build an on_refresh callback writing refreshed credentials to token_path.
    A failed write is logged and does not fail the request that triggered the refresh.
    """
    def save(credentials: Credentials) -> None:
        try:
            with open(token_path, "w") as token:
                token.write(credentials.to_json())
            logger.info("Credentials saved to token file")
        except OSError as e:
            logger.error("Failed to save credentials: %s", e)

    return save


def report_token_data(on_token_update: Callable[[dict], None]) -> Callable[[Credentials], None]:
    """
    Build an on_refresh callback handing the refreshed token data to on_token_update,
    for callers storing tokens themselves (e.g. one row per user in a database).
    """
    def report(credentials: Credentials) -> None:
        on_token_update(credentials_to_token_data(credentials))

    return report
