"""Messaging API endpoints (push notifications through FCM)."""

import json
from collections.abc import Mapping
from typing import Any

from schmucklicloud.api.http_client import AsyncHttpClient
from schmucklicloud.models.result import Result

DEVICE = "device.php"


async def assign_token_to_user(http: AsyncHttpClient, device_token: str, user_id: int) -> Result:
    """Link a Firebase Cloud Messaging device token to a user."""
    return await http.request(
        "POST",
        DEVICE,
        json={"device_token": device_token, "user_id": user_id},
    )


async def send_request_now(
    http: AsyncHttpClient, user_id: int, body: Mapping[str, Any]
) -> Result:
    """Queue an FCM request for immediate delivery."""
    return await http.request(
        "POST",
        "",
        json={"function": "send_now", "user_id": user_id, "body": json.dumps(body)},
    )


async def send_request_later(
    http: AsyncHttpClient, user_id: int, body: Mapping[str, Any], timestamp: int
) -> Result:
    """Queue an FCM request for delivery at ``timestamp`` (epoch seconds)."""
    return await http.request(
        "POST",
        "",
        json={
            "function": "send_later",
            "user_id": user_id,
            "body": json.dumps(body),
            "timestamp": timestamp,
        },
    )
