"""
Unit tests for the bearer-token auth middleware.

Every request must carry the token the supplier returned for that request,
and a failing supplier must stop the request before it reaches the transport.
"""

import asyncio
import itertools
import pytest
from unittest.mock import Mock, AsyncMock

import httpx

from gtasks.exceptions import CredentialError
from gtasks.http import BearerTokenAuth, build_http_client


@pytest.mark.unit
class TestBearerTokenAuth:
    """Test cases for BearerTokenAuth on the async client."""

    @pytest.mark.asyncio
    async def test_sets_bearer_header(self, http_client, fake_api):
        """Test that the supplier's token is sent as a bearer credential."""
        fake_api.add_response(200, json={})

        await http_client.get("/users/@me/lists")

        assert fake_api.last_request.headers["Authorization"] == "Bearer test-token"

    @pytest.mark.asyncio
    async def test_supplier_called_for_every_request(self, fake_api, client_config):
        """Test that each request uses the token returned for that request."""
        supplier = Mock(side_effect=["token-1", "token-2", "token-3"])
        client = build_http_client(supplier, client_config, fake_api.transport)
        for _ in range(3):
            fake_api.add_response(200, json={})

        for _ in range(3):
            await client.get("/users/@me/lists")

        assert supplier.call_count == 3
        assert [r.headers["Authorization"] for r in fake_api.requests] == [
            "Bearer token-1", "Bearer token-2", "Bearer token-3"
        ]

    @pytest.mark.asyncio
    async def test_overwrites_existing_authorization(self, http_client, fake_api):
        """Test that a caller-supplied Authorization header is replaced."""
        fake_api.add_response(200, json={})

        await http_client.get("/users/@me/lists", headers={"Authorization": "Basic dXNlcjpwYXNz"})

        assert fake_api.last_request.headers.get_list("Authorization") == ["Bearer test-token"]

    @pytest.mark.asyncio
    async def test_async_supplier(self, fake_api, client_config):
        """Test that an async supplier is awaited."""
        supplier = AsyncMock(return_value="async-token")
        client = build_http_client(supplier, client_config, fake_api.transport)
        fake_api.add_response(200, json={})

        await client.get("/users/@me/lists")

        supplier.assert_awaited_once()
        assert fake_api.last_request.headers["Authorization"] == "Bearer async-token"

    @pytest.mark.asyncio
    async def test_supplier_failure_aborts_request(self, fake_api, client_config):
        """Test that a failing supplier raises CredentialError and sends nothing."""
        cause = RuntimeError("refresh token revoked")
        client = build_http_client(Mock(side_effect=cause), client_config, fake_api.transport)

        with pytest.raises(CredentialError, match="refresh token revoked") as exc_info:
            await client.get("/users/@me/lists")

        assert exc_info.value.__cause__ is cause
        assert fake_api.call_count == 0

    @pytest.mark.asyncio
    async def test_async_supplier_failure_aborts_request(self, fake_api, client_config):
        """Test that an async supplier failure is surfaced the same way."""
        supplier = AsyncMock(side_effect=OSError("token endpoint unreachable"))
        client = build_http_client(supplier, client_config, fake_api.transport)

        with pytest.raises(CredentialError):
            await client.get("/users/@me/lists")

        assert fake_api.call_count == 0

    @pytest.mark.asyncio
    async def test_credential_error_passes_through(self, fake_api, client_config):
        """Test that a CredentialError raised by the supplier is not re-wrapped."""
        error = CredentialError("no credentials configured")
        client = build_http_client(Mock(side_effect=error), client_config, fake_api.transport)

        with pytest.raises(CredentialError) as exc_info:
            await client.get("/users/@me/lists")

        assert exc_info.value is error

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", None, 42, "bad\r\ntoken", "jeton-é"])
    async def test_invalid_tokens_rejected(self, fake_api, client_config, token):
        """Test that unusable tokens are credential failures."""
        client = build_http_client(Mock(return_value=token), client_config, fake_api.transport)

        with pytest.raises(CredentialError):
            await client.get("/users/@me/lists")

        assert fake_api.call_count == 0

    @pytest.mark.asyncio
    async def test_concurrent_requests_get_their_own_token(self, fake_api, client_config):
        """Test that concurrent requests each carry the token supplied for them."""
        counter = itertools.count(1)
        supplied = []

        def supplier():
            token = f"token-{next(counter)}"
            supplied.append(token)
            return token

        client = build_http_client(supplier, client_config, fake_api.transport)
        for _ in range(10):
            fake_api.add_response(200, json={})

        await asyncio.gather(*[client.get("/users/@me/lists") for _ in range(10)])

        sent = sorted(r.headers["Authorization"] for r in fake_api.requests)
        assert sent == sorted(f"Bearer {token}" for token in supplied)
        assert len(set(sent)) == 10

    def test_requires_callable_supplier(self):
        """Test that a non-callable supplier is rejected at construction."""
        with pytest.raises(TypeError):
            BearerTokenAuth("not-a-callable")


@pytest.mark.unit
class TestBearerTokenAuthSync:
    """Test cases for BearerTokenAuth on a synchronous httpx client."""

    def test_sync_client(self):
        """Test that a synchronous client is authorized too."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(204)

        client = httpx.Client(auth=BearerTokenAuth(lambda: "sync-token"), transport=httpx.MockTransport(handler))
        client.get("https://tasks.example.test/")

        assert seen[0].headers["Authorization"] == "Bearer sync-token"

    def test_async_supplier_on_sync_client(self):
        """Test that an async supplier cannot be used from a synchronous client."""
        async def supplier():
            return "async-token"

        handler = Mock()
        client = httpx.Client(auth=BearerTokenAuth(supplier), transport=httpx.MockTransport(handler))

        with pytest.raises(CredentialError):
            client.get("https://tasks.example.test/")

        handler.assert_not_called()


@pytest.mark.unit
class TestBuildHttpClient:
    """Test cases for build_http_client."""

    @pytest.mark.asyncio
    async def test_default_headers(self, http_client, fake_api):
        """Test that JSON content type and user agent are sent by default."""
        fake_api.add_response(200, json={})

        await http_client.get("/users/@me/lists")

        request = fake_api.last_request
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["User-Agent"] == "gtasks-python"

    @pytest.mark.asyncio
    async def test_paths_are_relative_to_base_url(self, http_client, fake_api):
        """Test that the versioned prefix of the base URL is kept."""
        fake_api.add_response(200, json={})

        await http_client.get("/users/@me/lists")

        assert str(fake_api.last_request.url) == "https://tasks.example.test/tasks/v1/users/@me/lists"
