from typing import Optional


class TasksClientError(Exception):
    """Base exception for all Google Tasks client errors."""
    pass


class TransportError(TasksClientError):
    """Raised when a request could not be sent or its response could not be read."""
    pass


class AuthenticationError(TasksClientError):
    """Raised when authentication fails."""
    pass


class APIError(TasksClientError):
    """Raised when API calls fail."""
    pass


class ValidationError(TasksClientError):
    """Raised when input validation fails."""
    pass


class InvalidArgument(ValidationError, ValueError):
    """Raised when a caller-supplied precondition is violated, before any network call."""
    pass


class DecodeError(TasksClientError):
    """
    Raised when a successful response carries a body that cannot be decoded
    into the expected resource.

    Attributes:
        body: The raw response body text.
        diagnostic: Description of the parse or schema failure.
    """

    def __init__(self, body: str, diagnostic: str):
        super().__init__(f"Failed to decode response body: {diagnostic}")
        self.body = body
        self.diagnostic = diagnostic


class RemoteRejected(APIError):
    """
    Raised when the API answers with a non-2xx status.

    Attributes:
        status: HTTP status code of the response.
        body: Response body decoded as text.
        content: Response body bytes as received.
    """

    def __init__(
            self,
            status: int,
            body: str,
            message: Optional[str] = None,
            content: Optional[bytes] = None
    ):
        super().__init__(message or f"Request rejected with status {status}: {body}")
        self.status = status
        self.body = body
        self.content = body.encode() if content is None else content

    def __eq__(self, other):
        if not isinstance(other, RemoteRejected):
            return NotImplemented
        return (self.status, self.body) == (other.status, other.body)

    def __hash__(self):
        return hash((self.status, self.body))
