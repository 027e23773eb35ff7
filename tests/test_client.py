import json

import httpx
import pytest

from tokenrefresh.auth.claude.client import exchange_refresh_token
from tokenrefresh.auth.claude.constants import CLIENT_ID, TOKEN_URL
from tokenrefresh.auth.claude.errors import RefreshError


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_exchange_posts_refresh_grant_as_json() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["url"] = str(request.url)
        captured["content_type"] = request.headers["content-type"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"access_token": "A2", "refresh_token": "R2", "expires_in": 3600})

    exchange_refresh_token("R1", client=_client(handler), clock=lambda: 1_000.9)

    assert captured["method"] == "POST"
    assert captured["url"] == TOKEN_URL
    assert captured["content_type"] == "application/json"
    assert captured["body"] == {
        "grant_type": "refresh_token",
        "refresh_token": "R1",
        "client_id": CLIENT_ID,
    }


def test_exchange_success_defaults_scopes() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"access_token": "A2", "refresh_token": "R2", "expires_in": 3600})

    pair = exchange_refresh_token("R1", client=_client(handler), clock=lambda: 1_000.9)

    assert pair.access_token == "A2"
    assert pair.refresh_token == "R2"
    assert pair.expires_at == (1_000 + 3600) * 1000
    assert pair.scopes == ["user:inference", "user:profile"]
    assert pair.is_max is True


def test_exchange_splits_scope_string() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "access_token": "A2",
                "refresh_token": "R2",
                "expires_in": 60,
                "scope": "user:profile user:inference org:create_api_key",
            },
        )

    pair = exchange_refresh_token("R1", client=_client(handler))

    assert pair.scopes == ["user:profile", "user:inference", "org:create_api_key"]


def test_exchange_non_2xx_keeps_body() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text='{"error": "invalid_grant"}')

    with pytest.raises(RefreshError) as excinfo:
        exchange_refresh_token("R1", client=_client(handler))

    err = excinfo.value
    assert err.status_code == 401
    assert err.body == '{"error": "invalid_grant"}'
    assert err.transport is False
    assert err.kind == "http_status"
    assert "401" in str(err)


def test_exchange_transport_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection reset", request=request)

    with pytest.raises(RefreshError) as excinfo:
        exchange_refresh_token("R1", client=_client(handler))

    err = excinfo.value
    assert err.transport is True
    assert err.kind == "transport"
    assert isinstance(err.cause, httpx.ConnectError)
    assert err.status_code is None


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        json.dumps({"access_token": "A2", "expires_in": 3600}),
        json.dumps({"access_token": "A2", "refresh_token": "R2", "expires_in": "3600"}),
        json.dumps(["A2", "R2"]),
    ],
)
def test_exchange_malformed_success_body(content: str) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=content)

    with pytest.raises(RefreshError) as excinfo:
        exchange_refresh_token("R1", client=_client(handler))

    assert excinfo.value.kind == "malformed"
    assert excinfo.value.body == content


def test_exchange_sends_single_request() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503, text="unavailable")

    with pytest.raises(RefreshError):
        exchange_refresh_token("R1", client=_client(handler))

    assert len(calls) == 1


def test_exchange_undecodable_body_is_refresh_error() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip")

    with pytest.raises(RefreshError) as excinfo:
        exchange_refresh_token("R1", client=_client(handler))

    assert excinfo.value.transport is True
    assert isinstance(excinfo.value.cause, httpx.DecodingError)
