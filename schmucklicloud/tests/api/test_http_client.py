"""Tests for AsyncHttpClient."""

import httpx
import pytest

from schmucklicloud.api.http_client import (
    OK,
    OK_OR_NOT_FOUND,
    AsyncHttpClient,
    sanitize_for_log,
)
from schmucklicloud.config import SchmuckliCloudConfig
from schmucklicloud.exceptions import APIError, NotFoundError, ServerError
from schmucklicloud.models.session import Credentials
from schmucklicloud.tests.constants import API_URL, APP_ID, APP_SECRET
from schmucklicloud.tests.utils.mock_transport import MockTransport, request_json

BASE_URL = f"{API_URL}/data/"


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(app_id=APP_ID, app_secret=APP_SECRET)


@pytest.fixture
def client(
    credentials: Credentials, config: SchmuckliCloudConfig, mock_transport: MockTransport
) -> AsyncHttpClient:
    return AsyncHttpClient(BASE_URL, credentials, config, transport=mock_transport)


# Header tests


@pytest.mark.asyncio
async def test_request_always_includes_app_credentials(
    client: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_reply()

    async with client:
        await client.request("GET", "")

    request = mock_transport.last_request
    assert request.headers["appid"] == APP_ID
    assert request.headers["appsecret"] == APP_SECRET
    assert "authtoken" not in request.headers


@pytest.mark.asyncio
async def test_request_includes_auth_token_when_given(
    client: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_reply()

    async with client:
        await client.request("GET", "", auth_token="tok-1")

    assert mock_transport.last_request.headers["authtoken"] == "tok-1"


@pytest.mark.asyncio
async def test_request_resolves_endpoint_against_base_url(
    client: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_reply()
    mock_transport.add_reply()

    async with client:
        await client.request("GET", "")
        await client.request("GET", "metadata.php", params={"container": "a b"})

    assert str(mock_transport.requests[0].url) == BASE_URL
    assert mock_transport.requests[1].url.path == "/client_api/v1/data/metadata.php"
    assert mock_transport.requests[1].url.params["container"] == "a b"


@pytest.mark.asyncio
async def test_request_sends_json_body(
    client: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_reply()

    async with client:
        await client.request("DELETE", "", json={"row": 4})

    assert mock_transport.last_request.method == "DELETE"
    assert request_json(mock_transport.last_request) == {"row": 4}


@pytest.mark.asyncio
async def test_request_opens_client_lazily_and_reopens_after_close(
    client: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_reply()
    mock_transport.add_reply()

    await client.request("GET", "")
    await client.aclose()
    await client.request("GET", "")
    await client.aclose()

    assert len(mock_transport.requests) == 2


# Response mapping tests


@pytest.mark.asyncio
async def test_200_maps_backend_envelope_to_result(
    client: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_reply(status=201, message="Created", body={"id": 7})

    async with client:
        result = await client.request("POST", "", json={})

    assert result.status_code == 201
    assert result.message == "Created"
    assert result.data == {"id": 7}
    assert result.is_success


@pytest.mark.asyncio
async def test_missing_envelope_status_falls_back_to_http_status(
    client: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(json_data={"body": [1, 2]})

    async with client:
        result = await client.request("GET", "")

    assert result.status_code == 200
    assert result.message == ""
    assert result.data == [1, 2]


@pytest.mark.asyncio
@pytest.mark.parametrize("envelope_status", [None, "201", True])
async def test_non_integer_envelope_status_falls_back_to_http_status(
    client: AsyncHttpClient, mock_transport: MockTransport, envelope_status
) -> None:
    mock_transport.add_response(
        json_data={"status": envelope_status, "message": "OK", "body": None}
    )

    async with client:
        result = await client.request("GET", "")

    assert result.status_code == 200
    assert result.is_success


@pytest.mark.asyncio
async def test_404_rejects_by_default(
    client: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_reply(404, message="Container not found")

    async with client:
        with pytest.raises(NotFoundError) as exc_info:
            await client.request("GET", "", accept=OK)

    assert exc_info.value.backend_message == "Container not found"
    assert "Container not found" in str(exc_info.value)


@pytest.mark.asyncio
async def test_404_resolves_when_accepted(
    client: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_reply(404, message="Session not found")

    async with client:
        result = await client.request("GET", "session.php", accept=OK_OR_NOT_FOUND)

    assert result.status_code == 404
    assert result.message == "Session not found"
    assert result.is_success is False


@pytest.mark.asyncio
async def test_accepted_404_without_json_body_still_resolves(
    client: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(404, content=b"<html>Not Found</html>")

    async with client:
        result = await client.request("GET", "session.php", accept=OK_OR_NOT_FOUND)

    assert result.status_code == 404
    assert result.message == "Not Found"
    assert result.data is None


@pytest.mark.asyncio
async def test_5xx_raises_server_error(
    client: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_reply(502, message="Upstream down")

    async with client:
        with pytest.raises(ServerError) as exc_info:
            await client.request("GET", "", accept=OK_OR_NOT_FOUND)

    assert exc_info.value.code == 502


@pytest.mark.asyncio
async def test_other_status_raises_api_error_with_backend_message(
    client: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_reply(401, message="Wrong credentials")

    async with client:
        with pytest.raises(APIError) as exc_info:
            await client.request("PUT", "emailpassword.php", json={})

    assert type(exc_info.value) is APIError
    assert exc_info.value.code == 401
    assert exc_info.value.endpoint == "emailpassword.php"
    assert "Wrong credentials" in exc_info.value.message


@pytest.mark.asyncio
async def test_non_json_error_body_raises_api_error(
    client: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(403, content=b"Forbidden")

    async with client:
        with pytest.raises(APIError) as exc_info:
            await client.request("GET", "")

    assert exc_info.value.code == 403
    assert "Unknown error" in exc_info.value.message


@pytest.mark.asyncio
async def test_invalid_json_on_accepted_status_raises_api_error(
    client: AsyncHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(200, content=b"not json")

    async with client:
        with pytest.raises(APIError, match="Invalid JSON"):
            await client.request("GET", "")


@pytest.mark.asyncio
async def test_transport_errors_propagate_unchanged(
    credentials: Credentials, config: SchmuckliCloudConfig
) -> None:
    class FailingTransport(httpx.AsyncBaseTransport):
        async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

    client = AsyncHttpClient(BASE_URL, credentials, config, transport=FailingTransport())

    async with client:
        with pytest.raises(httpx.ConnectTimeout):
            await client.request("GET", "")


# Log sanitizing tests


def test_sanitize_for_log_masks_sensitive_keys_recursively() -> None:
    data = {
        "email": "a@b.com",
        "password": "hunter2",
        "nested": {"token": "abc", "container": "c"},
        "items": [{"OTP": "123456"}, "plain"],
    }

    assert sanitize_for_log(data) == {
        "email": "a@b.com",
        "password": "***",
        "nested": {"token": "***", "container": "c"},
        "items": [{"OTP": "***"}, "plain"],
    }
