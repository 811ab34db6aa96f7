"""Request execution shared by the task list and task operations."""

from typing import Any, Callable, Dict, Optional, Union
from urllib.parse import quote
import logging

import httpx

from ..exceptions import InvalidArgument, TransportError
from ..outcome import Failed, Success, Unchanged, classify
from ..utils.log_sanitizer import sanitize_etag

logger = logging.getLogger(__name__)


def path_param(value: Optional[str], name: str) -> str:
    """
    Validate and percent-encode a path identifier.

    Raises:
        InvalidArgument: If the identifier is missing or empty.
    """
    if not value:
        raise InvalidArgument(f"{name} cannot be empty")
    if not isinstance(value, str):
        raise InvalidArgument(f"{name} must be a string")
    return quote(value, safe='@')


async def execute(
        client: httpx.AsyncClient,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        body: Optional[Dict[str, Any]] = None,
        etag: Optional[str] = None,
        decoder: Optional[Callable[[Any], Any]] = None
) -> Union[Success, Unchanged]:
    """
    Send one request through the authenticated client and classify the response.

    Args:
        client: Client built by build_http_client.
        method: HTTP method.
        path: Path relative to the API base URL, already encoded.
        params: Query parameters.
        body: JSON body. POST requests without a body are sent with an
            explicit zero content length.
        etag: Previously seen ETag, sent as If-None-Match.
        decoder: Maps the response document into a resource; None when no
            body is expected.

    Returns:
        Success or Unchanged.

    Raises:
        RemoteRejected: If the API answers with a non-2xx status.
        DecodeError: If a successful response body cannot be decoded.
        CredentialError: If the credential supplier fails.
        TransportError: If the request could not be completed.
    """
    headers = {}
    content = None
    if etag is not None:
        headers['If-None-Match'] = etag
    if body is None and method in ('POST', 'PUT', 'PATCH'):
        content = b''
        headers['Content-Length'] = '0'

    logger.debug(
        "Sending %s %s params=%s etag=%s",
        method, path, sorted(params) if params else None, sanitize_etag(etag)
    )

    try:
        response = await client.request(
            method, path, params=params, json=body, content=content, headers=headers
        )
    except httpx.RequestError as e:
        raise TransportError(f"{method} {path} failed: {e}") from e

    outcome = await classify(response, decoder, conditional=etag is not None)
    if isinstance(outcome, Failed):
        outcome.raise_for_status()
    return outcome
