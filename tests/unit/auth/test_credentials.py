"""
Unit tests for the credential suppliers.

Tests cover static tokens, refresh of Google OAuth2 credentials and
persistence of refreshed tokens.
"""

import asyncio
import json
import threading
import pytest
from unittest.mock import Mock, patch, mock_open

from google.auth.exceptions import RefreshError
from google.oauth2.credentials import Credentials

from gtasks import TasksService, ClientConfig
from gtasks.auth.credentials import (
    StaticTokenSupplier, GoogleCredentialsSupplier, save_token_to_file, report_token_data
)
from gtasks.exceptions import CredentialError, InvalidCredentialsError


@pytest.fixture
def mock_credentials():
    """Create mock OAuth2 credentials."""
    creds = Mock(spec=Credentials)
    creds.valid = True
    creds.expired = False
    creds.token = "mock_token"
    creds.refresh_token = "mock_refresh_token"
    creds.to_json.return_value = json.dumps({"token": "mock_token", "refresh_token": "mock_refresh_token"})
    return creds


@pytest.fixture
def expired_credentials():
    """Create expired credentials that become valid when refreshed."""
    creds = Mock(spec=Credentials)
    creds.valid = False
    creds.expired = True
    creds.token = "old_token"
    creds.refresh_token = "mock_refresh_token"
    creds.to_json.return_value = '{"token": "new_token"}'

    def refresh_side_effect(request):
        creds.valid = True
        creds.expired = False
        creds.token = "new_token"

    creds.refresh.side_effect = refresh_side_effect
    return creds


@pytest.mark.unit
class TestStaticTokenSupplier:
    """Test cases for StaticTokenSupplier."""

    def test_returns_token(self):
        assert StaticTokenSupplier("ya29.token")() == "ya29.token"

    def test_empty_token_rejected(self):
        with pytest.raises(ValueError):
            StaticTokenSupplier("")

    def test_repr_hides_token(self):
        assert "ya29" not in repr(StaticTokenSupplier("ya29.token"))


@pytest.mark.unit
class TestGoogleCredentialsSupplier:
    """Test cases for GoogleCredentialsSupplier."""

    @pytest.mark.asyncio
    async def test_valid_credentials_not_refreshed(self, mock_credentials):
        """Test that valid credentials are used as they are."""
        supplier = GoogleCredentialsSupplier(mock_credentials)

        assert await supplier() == "mock_token"
        mock_credentials.refresh.assert_not_called()

    @pytest.mark.asyncio
    async def test_expired_credentials_refreshed(self, expired_credentials):
        """Test refreshing expired credentials before supplying the token."""
        request = Mock()
        on_refresh = Mock()
        supplier = GoogleCredentialsSupplier(
            expired_credentials, on_refresh=on_refresh, request_factory=Mock(return_value=request)
        )

        token = await supplier()

        assert token == "new_token"
        expired_credentials.refresh.assert_called_once_with(request)
        on_refresh.assert_called_once_with(expired_credentials)

    @pytest.mark.asyncio
    async def test_refresh_failure(self, expired_credentials):
        """Test that a failed refresh raises InvalidCredentialsError."""
        expired_credentials.refresh.side_effect = RefreshError("invalid_grant: Token has been revoked")
        on_refresh = Mock()
        supplier = GoogleCredentialsSupplier(expired_credentials, on_refresh=on_refresh, request_factory=Mock())

        with pytest.raises(InvalidCredentialsError, match="invalid_grant") as exc_info:
            await supplier()

        assert isinstance(exc_info.value, CredentialError)
        on_refresh.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_refresh(self, expired_credentials):
        """Test that concurrent callers wait for a single refresh."""
        started = threading.Event()
        release = threading.Event()
        original = expired_credentials.refresh.side_effect

        def slow_refresh(request):
            started.set()
            release.wait(timeout=5)
            original(request)

        expired_credentials.refresh.side_effect = slow_refresh
        supplier = GoogleCredentialsSupplier(expired_credentials, request_factory=Mock())

        first = asyncio.create_task(supplier())
        await asyncio.to_thread(started.wait, 5)
        second = asyncio.create_task(supplier())
        await asyncio.sleep(0.05)
        release.set()

        assert await asyncio.gather(first, second) == ["new_token", "new_token"]
        assert expired_credentials.refresh.call_count == 1

    @pytest.mark.asyncio
    async def test_service_from_credentials(self, expired_credentials, fake_api, client_config):
        """Test that a service built from credentials sends the refreshed token."""
        fake_api.add_response(200, json={"items": []})
        service = TasksService.from_credentials(
            expired_credentials, config=client_config, transport=fake_api.transport
        )
        await service.list_tasklists()

        assert fake_api.last_request.headers["Authorization"] == "Bearer new_token"

    @pytest.mark.asyncio
    async def test_refresh_failure_aborts_request(self, expired_credentials, fake_api):
        """Test that a failed refresh stops the request before it is sent."""
        expired_credentials.refresh.side_effect = RefreshError("invalid_grant")
        service = TasksService(
            GoogleCredentialsSupplier(expired_credentials, request_factory=Mock()),
            config=ClientConfig(base_url="https://tasks.example.test/tasks/v1"),
            transport=fake_api.transport
        )

        with pytest.raises(CredentialError):
            await service.get_task("@default", "t1")

        assert fake_api.call_count == 0


@pytest.mark.unit
class TestSaveTokenToFile:
    """Test cases for save_token_to_file."""

    @patch("builtins.open", new_callable=mock_open)
    def test_writes_token(self, mock_file, mock_credentials):
        save_token_to_file("token.json")(mock_credentials)

        mock_file.assert_called_once_with("token.json", "w")
        mock_file().write.assert_called_once_with(mock_credentials.to_json.return_value)

    @patch("builtins.open", side_effect=PermissionError("read-only file system"))
    def test_write_failure_is_logged(self, mock_file, mock_credentials, caplog):
        """Test that a failed write does not fail the refresh."""
        save_token_to_file("/readonly/token.json")(mock_credentials)

        assert "Failed to save credentials" in caplog.text


@pytest.mark.unit
class TestReportTokenData:
    """Test cases for report_token_data."""

    def test_reports_token_data(self, mock_credentials):
        mock_credentials.token_uri = "https://oauth2.googleapis.com/token"
        mock_credentials.client_id = "mock_client_id"
        mock_credentials.client_secret = "mock_client_secret"
        mock_credentials.scopes = ["https://www.googleapis.com/auth/tasks"]
        on_token_update = Mock()

        report_token_data(on_token_update)(mock_credentials)

        on_token_update.assert_called_once_with({
            'token': "mock_token",
            'refresh_token': "mock_refresh_token",
            'token_uri': "https://oauth2.googleapis.com/token",
            'client_id': "mock_client_id",
            'client_secret': "mock_client_secret",
            'scopes': ["https://www.googleapis.com/auth/tasks"]
        })

    @pytest.mark.asyncio
    @patch("gtasks.auth.oauth.Request")
    @patch("gtasks.auth.oauth.Credentials.from_authorized_user_info")
    async def test_service_reports_every_refresh(
            self, mock_from_info, mock_request, expired_credentials, fake_api, client_config
    ):
        """Test that a multi-user service hands refreshed token data back to the caller."""
        mock_from_info.return_value = expired_credentials
        on_token_update = Mock()

        service = TasksService.from_credentials_info(
            {"installed": {}},
            {"token": "old_token"},
            on_token_update=on_token_update,
            config=client_config,
            transport=fake_api.transport
        )

        # Refreshed once while building the service
        on_token_update.assert_called_once()
        assert on_token_update.call_args.args[0]["token"] == "new_token"

        # Expires again while the service is in use
        expired_credentials.valid = False
        expired_credentials.expired = True
        fake_api.add_response(200, json={"items": []})
        await service.list_tasklists()

        assert on_token_update.call_count == 2
        assert on_token_update.call_args.args[0]["token"] == "new_token"
        assert fake_api.last_request.headers["Authorization"] == "Bearer new_token"
