"""
Authenticated HTTP pipeline.

BearerTokenAuth is an httpx auth flow: httpx runs it for every request sent
through the client, before the request reaches the transport. It asks the
credential supplier for a fresh token each time and sets the Authorization
header. A supplier failure aborts the request before anything is sent.
"""

import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

import httpx

from .config import ClientConfig
from .exceptions import CredentialError
from .utils.log_sanitizer import sanitize_token

logger = logging.getLogger(__name__)

# A callable returning a bearer token, either directly or as an awaitable.
# It is called once per request and may be called concurrently.
TokenSupplier = Callable[[], Union[str, Awaitable[str]]]


def _validate_token(token) -> str:
    if not isinstance(token, str):
        raise CredentialError(f"Credential supplier returned {type(token).__name__}, expected str")
    if not token:
        raise CredentialError("Credential supplier returned an empty token")
    if not token.isascii() or any(ord(ch) < 0x20 or ord(ch) == 0x7f for ch in token):
        raise CredentialError("Credential supplier returned a token that is not a valid header value")
    return token


class BearerTokenAuth(httpx.Auth):
    """
    Injects ``Authorization: Bearer <token>`` into every outgoing request.

    The supplier is invoked anew for each request and must tolerate concurrent
    calls; this class does no locking. Exceptions raised by the supplier are
    re-raised as CredentialError (CredentialError itself passes through).
    """

    def __init__(self, token_supplier: TokenSupplier):
        if not callable(token_supplier):
            raise TypeError("token_supplier must be callable")
        self._token_supplier = token_supplier

    def _call_supplier(self):
        try:
            return self._token_supplier()
        except CredentialError:
            raise
        except Exception as e:
            raise CredentialError(f"Credential supplier failed: {e}") from e

    async def _fetch_token_async(self) -> str:
        token = self._call_supplier()
        if inspect.isawaitable(token):
            try:
                token = await token
            except CredentialError:
                raise
            except Exception as e:
                raise CredentialError(f"Credential supplier failed: {e}") from e
        return _validate_token(token)

    def _fetch_token_sync(self) -> str:
        token = self._call_supplier()
        if inspect.isawaitable(token):
            # Avoid "coroutine was never awaited" warnings
            if inspect.iscoroutine(token):
                token.close()
            raise CredentialError("An async credential supplier cannot be used with a synchronous client")
        return _validate_token(token)

    def _authorize(self, request: httpx.Request, token: str) -> None:
        request.headers['Authorization'] = f"Bearer {token}"
        logger.debug(
            "Authorized %s %s with %s",
            request.method, request.url.path, sanitize_token(token)
        )

    async def async_auth_flow(self, request: httpx.Request):
        self._authorize(request, await self._fetch_token_async())
        yield request

    def sync_auth_flow(self, request: httpx.Request):
        self._authorize(request, self._fetch_token_sync())
        yield request


def build_http_client(
        token_supplier: TokenSupplier,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.AsyncClient:
    """
    Build the async HTTP client used by TasksService.

    Args:
        token_supplier: Credential supplier invoked before every request.
        config: Client settings. Defaults to ClientConfig().
        transport: Transport to send requests through. Defaults to httpx's
            network transport; tests pass an httpx.MockTransport.

    Returns:
        An httpx.AsyncClient with JSON defaults and bearer authentication.
    """
    config = config or ClientConfig()
    headers = {
        'Content-Type': 'application/json',
        'User-Agent': config.user_agent,
    }
    return httpx.AsyncClient(
        base_url=config.base_url,
        headers=headers,
        auth=BearerTokenAuth(token_supplier),
        timeout=config.timeout,
        transport=transport,
    )
