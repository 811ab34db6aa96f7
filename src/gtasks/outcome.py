"""
Request outcomes and the response classifier.

Every completed HTTP response is classified exactly once into one of:

* ``Success(payload)``: 2xx, with the decoded resource when a body is expected;
* ``Unchanged``: 304 on a conditional read, nothing decoded;
* ``Failed(status, body)``: any other status, with the server's text verbatim
  and its raw bytes in ``content``.

A 2xx response whose body cannot be decoded raises DecodeError rather than
producing any outcome, so "the server said no" stays distinct from "the server
said yes but sent garbage".
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Optional, TypeVar, Union
import logging

import httpx

from .exceptions import DecodeError, TransportError, rejection_for_status

logger = logging.getLogger(__name__)

T = TypeVar("T")

HTTP_NOT_MODIFIED = 304


@dataclass(frozen=True)
class Success(Generic[T]):
    """The request succeeded. ``payload`` is None when no body was expected."""
    payload: Optional[T] = None


@dataclass(frozen=True)
class Unchanged:
    """The resource matched the ETag sent with a conditional read."""


UNCHANGED = Unchanged()


@dataclass(frozen=True)
class Failed:
    """
    The API rejected the request.

    ``body`` is the response decoded as text, with undecodable bytes replaced.
    ``content`` holds the body bytes exactly as received.
    """
    status: int
    body: str
    content: Optional[bytes] = field(default=None, compare=False, repr=False)

    def raise_for_status(self):
        """Raise the RemoteRejected error for this outcome."""
        raise rejection_for_status(self.status, self.body, self.content)


Outcome = Union[Success, Unchanged, Failed]


async def _read_body(response: httpx.Response) -> str:
    try:
        await response.aread()
    except (httpx.HTTPError, httpx.StreamError) as e:
        raise TransportError(f"Failed to read response body: {e}") from e
    return response.text


async def classify(
        response: httpx.Response,
        decoder: Optional[Callable[[Any], T]] = None,
        conditional: bool = False
) -> Outcome:
    """
    Classify a completed response into a request outcome.

    Args:
        response: The response returned by the transport.
        decoder: Maps the decoded JSON document into the expected resource.
            None when the operation expects no body.
        conditional: Whether the request carried an If-None-Match header.

    Returns:
        Success, Unchanged or Failed.

    Raises:
        DecodeError: If a 2xx body is empty, not JSON, or does not match the resource.
        TransportError: If the body could not be read.
    """
    status = response.status_code

    if conditional and status == HTTP_NOT_MODIFIED:
        logger.debug("Conditional read matched, resource unchanged")
        return UNCHANGED

    if not response.is_success:
        body = await _read_body(response)
        logger.debug("Request rejected with status %d", status)
        return Failed(status=status, body=body, content=response.content)

    if decoder is None:
        return Success()

    body = await _read_body(response)
    if not response.content:
        raise DecodeError(body, "empty response body")

    try:
        document = response.json()
    except ValueError as e:
        raise DecodeError(body, f"invalid JSON: {e}") from e

    try:
        payload = decoder(document)
    except ValueError as e:
        raise DecodeError(body, str(e)) from e

    return Success(payload)
