"""Files API endpoints."""

from collections.abc import Sequence
from typing import Any

from schmucklicloud.api.http_client import AsyncHttpClient
from schmucklicloud.models.result import Result


def build_multipart(files: Sequence[Any]) -> dict[str, Any]:
    """
    Name each file by its position: ``file_0``, ``file_1``, ...

    httpx only takes ``bytes`` as raw content, so bytearrays are copied.
    """
    return {
        f"file_{i}": bytes(f) if isinstance(f, bytearray) else f for i, f in enumerate(files)
    }


async def upload(http: AsyncHttpClient, auth_token: str, files: Sequence[Any]) -> Result:
    """
    Upload files as one multipart request.

    Args:
        http: Signed client for the files service.
        auth_token: Token of the user owning the files.
        files: Bytes, binary file objects or ``(filename, content[, content_type])`` tuples.

    Returns:
        Result with the token and location of each stored file.
    """
    return await http.request(
        "POST",
        "",
        files=build_multipart(files),
        auth_token=auth_token,
    )


async def reset_token(http: AsyncHttpClient, auth_token: str, filename: str) -> Result:
    """Replace the access token of a file. The new token is in ``data``."""
    return await http.request(
        "PUT",
        "",
        json={"function": "reset_token", "filename": filename},
        auth_token=auth_token,
    )


async def delete(http: AsyncHttpClient, auth_token: str, filename: str) -> Result:
    """Delete a file."""
    return await http.request(
        "DELETE",
        "",
        json={"filename": filename},
        auth_token=auth_token,
    )
