"""
Messaging service for schmuckliCloud.

Sends Firebase Cloud Messaging requests to users of the project.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

import structlog

from schmucklicloud.api.endpoints import messaging as messaging_api
from schmucklicloud.models.result import Result
from schmucklicloud.services.base import (
    BaseService,
    require_int,
    require_mapping,
    require_text,
    to_epoch,
)

logger = structlog.get_logger(__name__)

_USER_ID_MSG = "Please provide the user id as a number."
_BODY_MSG = "Please provide the body of the FCM request."


class MessagingService(BaseService):
    """Wraps the schmuckliCloud Messaging API."""

    SEGMENT = "messaging/"

    async def assign_token_to_user(self, device_token: str, user_id: int) -> Result:
        """
        Assign a Firebase Cloud Messaging device token to a user.

        Args:
            device_token: Device token received from the Firebase SDK.
            user_id: User id from the Auth API.
        """
        require_text(device_token, "device_token", "Please provide a device token.")
        require_int(user_id, "user_id", _USER_ID_MSG)
        request = messaging_api.assign_token_to_user(self._http, device_token, user_id)
        return await self._send("assign_token_to_user", request)

    async def send_request_now(self, user_id: int, body: Mapping[str, Any]) -> Result:
        """
        Send a request to FCM instantly.

        Args:
            user_id: Id of the user to notify.
            body: FCM HTTP request body.
        """
        require_int(user_id, "user_id", _USER_ID_MSG)
        require_mapping(body, "body", _BODY_MSG)
        request = messaging_api.send_request_now(self._http, user_id, body)
        return await self._send("send_request_now", request)

    async def send_request_later(
        self, user_id: int, body: Mapping[str, Any], timestamp: int | datetime
    ) -> Result:
        """
        Send a request to FCM at the given time.

        Args:
            user_id: Id of the user to notify.
            body: FCM HTTP request body.
            timestamp: When to send, as unix timestamp or datetime.
        """
        require_int(user_id, "user_id", _USER_ID_MSG)
        require_mapping(body, "body", _BODY_MSG)
        epoch = to_epoch(timestamp, "timestamp")
        logger.debug("Scheduling push request", user_id=user_id, timestamp=epoch)
        request = messaging_api.send_request_later(self._http, user_id, body, epoch)
        return await self._send("send_request_later", request)
