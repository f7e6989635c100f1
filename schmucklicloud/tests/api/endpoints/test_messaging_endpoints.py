import json
from unittest.mock import Mock

import pytest

from schmucklicloud.api.endpoints.messaging import (
    assign_token_to_user,
    send_request_later,
    send_request_now,
)

FCM_BODY = {"notification": {"title": "Hi", "body": "New message"}}


@pytest.mark.asyncio
async def test_assign_token_to_user(mock_http: Mock) -> None:
    await assign_token_to_user(mock_http, "fcm-device-token", 12)

    mock_http.request.assert_awaited_once_with(
        "POST", "device.php", json={"device_token": "fcm-device-token", "user_id": 12}
    )


@pytest.mark.asyncio
async def test_send_request_now_encodes_body(mock_http: Mock) -> None:
    await send_request_now(mock_http, 12, FCM_BODY)

    body = mock_http.request.call_args.kwargs["json"]
    assert body["function"] == "send_now"
    assert body["user_id"] == 12
    assert json.loads(body["body"]) == FCM_BODY


@pytest.mark.asyncio
async def test_send_request_later_includes_timestamp(mock_http: Mock) -> None:
    await send_request_later(mock_http, 12, FCM_BODY, 1700000000)

    body = mock_http.request.call_args.kwargs["json"]
    assert body["function"] == "send_later"
    assert body["timestamp"] == 1700000000
