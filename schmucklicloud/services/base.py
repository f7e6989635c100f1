"""
Shared plumbing for the service wrappers.

Holds the app credentials, the session snapshot and the signed HTTP client,
plus the argument checks every service runs before building a request.
"""

from collections.abc import Awaitable, Mapping, Sequence
from dataclasses import replace
from datetime import datetime
from typing import Any, ClassVar, Self

import httpx
import structlog

from schmucklicloud.api.http_client import AsyncHttpClient
from schmucklicloud.config import SchmuckliCloudConfig
from schmucklicloud.exceptions import APIError, CredentialsMissingError, ValidationError
from schmucklicloud.models.result import Result
from schmucklicloud.models.session import Credentials, SessionState

logger = structlog.get_logger(__name__)


class BaseService:
    """
    Base class of the Auth, Storage, Files and Messaging services.

    Args:
        app_id: APP ID created for the client app in the schmuckliCloud console.
        app_secret: APP secret belonging to the APP ID.
        service_url: Full base URL of the service. Defaults to the configured
            API URL joined with the service segment.
        config: Client configuration. Uses defaults if not provided.
        transport: Optional httpx transport for testing.
    """

    SEGMENT: ClassVar[str]

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        service_url: str | None = None,
        *,
        config: SchmuckliCloudConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not app_id or not app_secret:
            msg = "Please provide the APP ID and the APP secret."
            raise ValidationError(msg, argument="app_id" if not app_id else "app_secret")

        self._config = config or SchmuckliCloudConfig()
        self._credentials = Credentials(app_id=app_id, app_secret=app_secret)
        self._session = SessionState()
        self._http = AsyncHttpClient(
            service_url or self._config.service_url(self.SEGMENT),
            self._credentials,
            self._config,
            transport=transport,
        )

    async def __aenter__(self) -> Self:
        await self._http.__aenter__()
        return self

    async def __aexit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the HTTP connection pool."""
        await self._http.aclose()

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def session(self) -> SessionState:
        """Current session snapshot. Requests capture it when they are built."""
        return self._session

    @property
    def service_url(self) -> str:
        return self._http.base_url

    def _update_session(self, **changes: Any) -> None:
        self._session = replace(self._session, **changes)

    def _require_auth_token(self, session: SessionState) -> str:
        if not session.auth_token:
            raise CredentialsMissingError
        return session.auth_token

    async def _send(self, operation: str, request: Awaitable[Result]) -> Result:
        """Await a built request, logging replies the backend rejected."""
        try:
            return await request
        except APIError as e:
            logger.warning(
                "Request rejected",
                service=type(self).__name__,
                operation=operation,
                code=e.code,
                backend_message=e.backend_message,
            )
            raise


def require_text(value: Any, argument: str, message: str) -> str:
    """Reject anything that is not a non-empty string."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message, argument=argument)
    return value


def require_int(value: Any, argument: str, message: str, *, minimum: int | None = None) -> int:
    """Reject non-integers (bools included) and values below ``minimum``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(message, argument=argument)
    if minimum is not None and value < minimum:
        raise ValidationError(message, argument=argument)
    return value


def optional_int(value: Any, argument: str) -> int | None:
    if value is None:
        return None
    return require_int(value, argument, f"'{argument}' must be a non-negative integer.", minimum=0)


def require_mapping(value: Any, argument: str, message: str) -> Mapping[str, Any]:
    """Reject anything that is not a non-empty mapping."""
    if not isinstance(value, Mapping) or not value:
        raise ValidationError(message, argument=argument)
    return value


def require_sequence(value: Any, argument: str, message: str) -> Sequence[Any]:
    """Reject strings, bytes and empty or non-sequence values."""
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or not value:
        raise ValidationError(message, argument=argument)
    return value


def to_epoch(value: Any, argument: str) -> int:
    """Accept an epoch in seconds or a datetime."""
    if isinstance(value, datetime):
        return int(value.timestamp())
    return require_int(
        value, argument, f"'{argument}' must be a unix timestamp or a datetime.", minimum=0
    )
