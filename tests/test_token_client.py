"""
Tests for the OAuth2 client-credentials token client
"""

import base64
import json

import httpx
import pytest

from eureka_discovery.errors import (
    AuthServerError,
    DecodeError,
    TransportError,
    UnexpectedStatus,
)
from eureka_discovery.token_client import TokenClient

TOKEN_URL = "https://uaa.example.com/oauth/token"


def make_token_client(handler) -> TokenClient:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return TokenClient(TOKEN_URL, "my-client", "my-secret", http_client=http_client)


class TestGetToken:
    """Test cases for TokenClient.get_token"""

    def test_returns_access_token(self):
        """Test that the access_token field of a 200 response is returned"""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"access_token": "abc123", "expires_in": 43199})

        assert make_token_client(handler).get_token() == "abc123"

    def test_request_shape(self):
        """Test method, URL, headers and body of the token request"""
        captured = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json={"access_token": "abc123"})

        make_token_client(handler).get_token()

        assert len(captured) == 1
        request = captured[0]
        assert request.method == "POST"
        assert str(request.url) == TOKEN_URL
        assert request.content == b"grant_type=client_credentials"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        expected_auth = base64.b64encode(b"my-client:my-secret").decode()
        assert request.headers["Authorization"] == f"Basic {expected_auth}"

    def test_every_call_fetches_a_new_token(self):
        """Test that tokens are never cached between calls"""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"access_token": f"token-{len(calls)}"})

        client = make_token_client(handler)
        assert client.get_token() == "token-1"
        assert client.get_token() == "token-2"
        assert len(calls) == 2

    def test_unauthorized_raises_auth_server_error(self):
        """Test that a 401 yields AuthServerError carrying code and body"""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, text='{"error":"unauthorized"}')

        with pytest.raises(AuthServerError) as exc_info:
            make_token_client(handler).get_token()

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == '{"error":"unauthorized"}'
        assert isinstance(exc_info.value, UnexpectedStatus)
        assert "code 401" in str(exc_info.value)

    def test_non_200_success_code_is_rejected(self):
        """Test that only 200 counts as success"""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(201, json={"access_token": "abc123"})

        with pytest.raises(AuthServerError) as exc_info:
            make_token_client(handler).get_token()
        assert exc_info.value.status_code == 201

    @pytest.mark.parametrize(
        "body",
        [
            b"not json",
            json.dumps({"token": "abc123"}).encode(),
            json.dumps(["abc123"]).encode(),
        ],
    )
    def test_malformed_body_raises_decode_error(self, body):
        """Test invalid JSON and missing access_token"""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=body)

        with pytest.raises(DecodeError):
            make_token_client(handler).get_token()

    def test_connection_failure_raises_transport_error(self):
        """Test that httpx connection errors are wrapped"""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            make_token_client(handler).get_token()
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


class TestTokenClientLifecycle:
    """Test cases for HTTP client ownership"""

    def test_injected_client_is_not_closed(self):
        """Test that an injected HTTP client survives close()"""
        http_client = httpx.Client(
            transport=httpx.MockTransport(lambda request: httpx.Response(200))
        )
        with TokenClient(TOKEN_URL, "a", "b", http_client=http_client):
            pass
        assert not http_client.is_closed

    def test_owned_client_is_closed(self):
        """Test that a client created internally is closed on exit"""
        with TokenClient(TOKEN_URL, "a", "b") as client:
            pass
        assert client._http_client.is_closed
