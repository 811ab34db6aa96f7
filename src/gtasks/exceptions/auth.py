from .base import AuthenticationError


class CredentialError(AuthenticationError):
    """Raised when the credential supplier fails to produce a bearer token."""
    pass


class InvalidCredentialsError(CredentialError):
    """Raised when credentials are invalid or expired and cannot be refreshed."""
    pass
