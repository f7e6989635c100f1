"""
Async HTTP client for the schmuckliCloud API.

Every backend call goes through ``AsyncHttpClient.request``: it signs the
request with the app credentials, sends it once and maps the reply to a
``Result`` or an ``APIError``.
"""

import asyncio
from collections.abc import Collection, Mapping
from typing import Any

import httpx
import structlog

from schmucklicloud.config import SchmuckliCloudConfig
from schmucklicloud.exceptions import APIError, NotFoundError, ServerError
from schmucklicloud.models.result import Result
from schmucklicloud.models.session import Credentials

logger = structlog.get_logger(__name__)

SENSITIVE_KEYS = frozenset(
    {
        "appsecret",
        "authtoken",
        "password",
        "token",
        "otp",
        "share_password",
    }
)

OK = frozenset({httpx.codes.OK})
OK_OR_NOT_FOUND = frozenset({httpx.codes.OK, httpx.codes.NOT_FOUND})


def sanitize_for_log(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive fields from a mapping before logging.

    Recursively sanitizes nested dictionaries and lists.

    Args:
        data: Mapping that may contain sensitive values.

    Returns:
        Copy with sensitive values replaced by "***".
    """
    result = {}
    for key, value in data.items():
        if key.lower() in SENSITIVE_KEYS:
            result[key] = "***"
        elif isinstance(value, Mapping):
            result[key] = sanitize_for_log(value)
        elif isinstance(value, list):
            result[key] = [
                sanitize_for_log(item) if isinstance(item, Mapping) else item for item in value
            ]
        else:
            result[key] = value
    return result


class AsyncHttpClient:
    """Signed async HTTP client bound to one service base URL."""

    def __init__(
        self,
        base_url: str,
        credentials: Credentials,
        config: SchmuckliCloudConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: Service base URL; endpoints are resolved relative to it.
            credentials: App credentials sent as headers on every request.
            config: Client configuration.
            transport: Optional transport for testing (mock transport).
        """
        self._base_url = base_url
        self._credentials = credentials
        self._config = config
        self._transport = transport

        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> "AsyncHttpClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                kwargs: dict[str, Any] = {}
                if self._config.timeout is not None:
                    kwargs["timeout"] = self._config.timeout
                self._client = httpx.AsyncClient(
                    base_url=self._base_url,
                    transport=self._transport,
                    headers={
                        "Accept": "application/json",
                        "User-Agent": self._config.user_agent,
                        **self._credentials.as_headers(),
                    },
                    **kwargs,
                )
            return self._client

    async def aclose(self) -> None:
        """Close the underlying httpx client. A later request reopens it."""
        async with self._client_lock:
            if self._client is None:
                logger.debug("Client not open.")
                return
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
        auth_token: str | None = None,
        accept: Collection[int] = OK,
    ) -> Result:
        """
        Send one signed request and map the reply to a Result.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE).
            endpoint: Path relative to the service base URL ("" for the root).
            json: JSON body.
            params: Query parameters.
            files: Multipart files, keyed by form field name.
            auth_token: Session token sent as the ``authtoken`` header.
            accept: HTTP statuses that resolve to a Result.

        Returns:
            Result built from the backend's ``status``, ``message`` and ``body``.

        Raises:
            APIError: If the backend replies with a status outside ``accept``.
            httpx.HTTPError: If the request fails due to network issues.
        """
        headers = {}
        if auth_token:
            headers["authtoken"] = auth_token

        logger.debug(
            "Sending request",
            method=method,
            endpoint=endpoint,
            params=sanitize_for_log(params) if params else None,
            json=sanitize_for_log(json) if json else None,
            files=sorted(files) if files else None,
        )

        client = await self._ensure_client()
        response = await client.request(
            method=method,
            url=endpoint,
            json=json,
            params=params,
            files=files,
            headers=headers,
        )
        logger.debug("Received response", endpoint=endpoint, status=response.status_code)

        return self._to_result(response, endpoint, accept)

    @staticmethod
    def _to_result(response: httpx.Response, endpoint: str, accept: Collection[int]) -> Result:
        status = response.status_code
        try:
            payload = response.json()
        except ValueError as e:
            if status == httpx.codes.NOT_FOUND and status in accept:
                return Result(status_code=status, message=response.reason_phrase)
            if status in accept:
                raise APIError(
                    "Invalid JSON response from API", code=status, endpoint=endpoint
                ) from e
            payload = {}

        if not isinstance(payload, dict):
            payload = {"body": payload}

        if status in accept:
            code = payload.get("status")
            if isinstance(code, bool) or not isinstance(code, int):
                code = status
            return Result(
                status_code=code,
                message=payload.get("message") or "",
                data=payload.get("body"),
            )

        raise AsyncHttpClient._api_error(status, payload.get("message"), endpoint)

    @staticmethod
    def _api_error(status: int, backend_message: str | None, endpoint: str) -> APIError:
        msg = (
            "There was a problem with the API endpoint. "
            f"Following error message was sent: {backend_message or 'Unknown error'}"
        )

        if status == httpx.codes.NOT_FOUND:
            return NotFoundError(msg, endpoint=endpoint, backend_message=backend_message)
        if status >= httpx.codes.INTERNAL_SERVER_ERROR:
            return ServerError(msg, code=status, endpoint=endpoint, backend_message=backend_message)
        return APIError(msg, code=status, endpoint=endpoint, backend_message=backend_message)
