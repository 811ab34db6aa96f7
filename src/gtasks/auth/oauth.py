"""
OAuth2 helpers for obtaining Google user credentials for the Tasks API.

Credentials are loaded from a stored token when one is available, refreshed
when expired, and otherwise obtained through the installed-app flow, which
opens a browser on the local machine.
"""

import os
import logging
from typing import Callable, Optional, Tuple

from google.auth import exceptions as google_auth_exceptions
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from ..config import SCOPES, TOKEN_PATH, CREDENTIALS_PATH
from ..exceptions import InvalidCredentialsError

logger = logging.getLogger(__name__)

OAUTH_CALLBACK_PORT = 8080

TokenDataCallback = Callable[[dict], None]


def credentials_to_token_data(creds: Credentials) -> dict:
    """Token data to store for a user, loadable by Credentials.from_authorized_user_info."""
    return {
        'token': creds.token,
        'refresh_token': creds.refresh_token,
        'token_uri': creds.token_uri,
        'client_id': creds.client_id,
        'client_secret': creds.client_secret,
        'scopes': creds.scopes
    }


def _ensure_valid(
        creds: Optional[Credentials],
        start_flow: Callable[[], InstalledAppFlow]
) -> Tuple[Credentials, bool]:
    """
    Return usable credentials and whether they differ from the stored ones.

    Expired credentials with a refresh token are refreshed; anything else
    unusable goes through the installed-app flow built by start_flow.
    """
    if creds is not None and creds.valid:
        return creds, False

    if creds is not None and creds.expired and creds.refresh_token:
        logger.info("Refreshing expired credentials")
        try:
            creds.refresh(Request())
        except google_auth_exceptions.GoogleAuthError as e:
            raise InvalidCredentialsError(f"Failed to refresh credentials: {e}") from e
        return creds, True

    logger.info("Starting OAuth2 flow")
    return start_flow().run_local_server(port=OAUTH_CALLBACK_PORT), True


def get_credentials_from_info(
        app_credentials: dict,
        user_token_data: Optional[dict] = None,
        scopes: Optional[list] = None,
        on_token_update: Optional[TokenDataCallback] = None
) -> Tuple[Credentials, dict]:
    """
    Obtain credentials for one user from in-memory data (multi-user setups).

    Args:
        app_credentials: OAuth client configuration (contents of credentials.json)
        user_token_data: Previously stored token data, if any.
        scopes: List of scopes to request
        on_token_update: Called with the new token data when the credentials
            were refreshed or newly authorized, so the caller can store it.

    Returns:
        tuple: (credentials, token data to store)

    Raises:
        InvalidCredentialsError: If stored credentials cannot be refreshed.
    """
    scopes = scopes or SCOPES
    creds = None
    if user_token_data:
        creds = Credentials.from_authorized_user_info(user_token_data, scopes)

    creds, changed = _ensure_valid(
        creds, lambda: InstalledAppFlow.from_client_config(app_credentials, scopes)
    )
    token_data = credentials_to_token_data(creds)
    if changed and on_token_update is not None:
        on_token_update(token_data)
    return creds, token_data


def get_credentials_from_file(
        credentials_path: Optional[str] = None,
        token_path: Optional[str] = None,
        scopes: Optional[list] = None
) -> Credentials:
    """
    Load, refresh or obtain credentials, storing the token file.

    Args:
        credentials_path: Path to the OAuth client configuration (credentials.json)
        token_path: Path to the stored user token (token.json)
        scopes: List of scopes to request

    Returns:
        Google OAuth2 Credentials object

    Raises:
        FileNotFoundError: If the OAuth flow is needed and credentials_path does not exist
        InvalidCredentialsError: If the stored token cannot be refreshed.
    """
    token_path = token_path or TOKEN_PATH
    credentials_path = credentials_path or CREDENTIALS_PATH
    scopes = scopes or SCOPES

    def start_flow() -> InstalledAppFlow:
        if not os.path.exists(credentials_path):
            raise FileNotFoundError(
                f"Credentials file not found at {credentials_path}. "
                "Please download it from Google Cloud Console."
            )
        return InstalledAppFlow.from_client_secrets_file(credentials_path, scopes)

    creds = None
    if os.path.exists(token_path):
        creds = Credentials.from_authorized_user_file(token_path, scopes)
        logger.info("Loaded credentials from token file")

    creds, changed = _ensure_valid(creds, start_flow)
    if changed:
        with open(token_path, "w") as token:
            token.write(creds.to_json())
        logger.info("Credentials saved to token file")

    return creds
