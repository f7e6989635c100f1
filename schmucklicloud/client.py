"""
schmuckliCloud client facade.

Bundles the four services of one app behind a single object that shares the
credentials, configuration and transport.
"""

import asyncio
from typing import Self

import httpx
import structlog

from schmucklicloud.config import SchmuckliCloudConfig
from schmucklicloud.services.auth_service import AuthService
from schmucklicloud.services.files_service import FilesService
from schmucklicloud.services.messaging_service import MessagingService
from schmucklicloud.services.storage_service import StorageService

logger = structlog.get_logger(__name__)


class SchmuckliCloudClient:
    """
    Async client for all schmuckliCloud services of one app.

    Example:
        ```python
        async with SchmuckliCloudClient(app_id, app_secret) as cloud:
            result = await cloud.auth.authorize_email_password("a@b.com", "pw")
            if result.status_code == 300:
                result = await cloud.auth.authorize_email_password(
                    "a@b.com", "pw", otp_code=input("OTP: ")
                )
            cloud.set_auth_token(result.data)

            cloud.storage.set_bucket(23)
            rows = await cloud.storage.get_all("customers")
        ```

    Args:
        app_id: APP ID created for the client app in the schmuckliCloud console.
        app_secret: APP secret belonging to the APP ID.
        config: Client configuration. Uses defaults if not provided.
        transport: Optional httpx transport for testing.
    """

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        *,
        config: SchmuckliCloudConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or SchmuckliCloudConfig()
        options = {"config": self._config, "transport": transport}

        self.auth = AuthService(app_id, app_secret, **options)
        self.storage = StorageService(app_id, app_secret, **options)
        self.files = FilesService(app_id, app_secret, **options)
        self.messaging = MessagingService(app_id, app_secret, **options)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        await self.aclose()

    @property
    def config(self) -> SchmuckliCloudConfig:
        return self._config

    def set_auth_token(self, auth_token: str | None) -> None:
        """Set the signed-in user on the storage and files services."""
        self.storage.set_auth_token(auth_token)
        self.files.set_auth_token(auth_token)

    async def aclose(self) -> None:
        """Close the connection pools of all services."""
        await asyncio.gather(
            self.auth.aclose(),
            self.storage.aclose(),
            self.files.aclose(),
            self.messaging.aclose(),
        )
        logger.debug("Client closed")
