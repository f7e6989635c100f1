"""Storage API endpoints (rows, metadata, share links)."""

import json
from collections.abc import Mapping, Sequence
from typing import Any

from schmucklicloud.api.http_client import AsyncHttpClient
from schmucklicloud.models.result import Result
from schmucklicloud.models.session import SessionState

METADATA = "metadata.php"
SHARE = "share.php"


def _blank(value: Any) -> Any:
    return "" if value is None else value


def _scope(session: SessionState) -> dict[str, Any]:
    """Bucket and dataset fields every data-scoped request carries."""
    return {"bucket": _blank(session.bucket_id), "dataset": _blank(session.dataset)}


async def get_all(
    http: AsyncHttpClient,
    session: SessionState,
    container: str,
    *,
    order: str = "",
    start: int | None = None,
    limit: int | None = None,
) -> Result:
    """
    Get all rows of a container.

    Args:
        http: Signed client for the storage service.
        session: Session snapshot the request is built from.
        container: Container name.
        order: JSON-encoded sort expression, or "".
        start: Offset of the first row.
        limit: Maximum number of rows.
    """
    return await http.request(
        "GET",
        "",
        params={
            **_scope(session),
            "container": container,
            "order": order,
            "start": _blank(start),
            "limit": _blank(limit),
        },
        auth_token=session.auth_token,
    )


async def get(
    http: AsyncHttpClient,
    session: SessionState,
    container: str,
    conditions: str,
    *,
    order: str = "",
    start: int | None = None,
    limit: int | None = None,
) -> Result:
    """Get the rows of a container matching the JSON-encoded conditions."""
    return await http.request(
        "GET",
        "",
        params={
            **_scope(session),
            "container": container,
            "filter": conditions,
            "order": order,
            "start": _blank(start),
            "limit": _blank(limit),
        },
        auth_token=session.auth_token,
    )


async def get_by_id(
    http: AsyncHttpClient, session: SessionState, container: str, row_id: int
) -> Result:
    """
    Get a single row.

    The backend answers with a list of rows; the returned Result carries the
    first one, or None if the list is empty.
    """
    result = await http.request(
        "GET",
        "",
        params={**_scope(session), "container": container, "row": row_id},
        auth_token=session.auth_token,
    )
    row = result.data
    if isinstance(row, list):
        row = row[0] if row else None
    return Result(status_code=result.status_code, message=result.message, data=row)


async def insert(
    http: AsyncHttpClient, session: SessionState, container: str, data: Mapping[str, Any]
) -> Result:
    """Insert a new row. The backend returns the new row id."""
    return await http.request(
        "POST",
        "",
        json={**_scope(session), "container": container, "data": json.dumps(data)},
        auth_token=session.auth_token,
    )


async def update(
    http: AsyncHttpClient,
    session: SessionState,
    container: str,
    row_id: int,
    data: Mapping[str, Any],
) -> Result:
    """Replace the given columns of a row."""
    return await http.request(
        "PUT",
        "",
        json={
            **_scope(session),
            "container": container,
            "row": row_id,
            "data": json.dumps(data),
        },
        auth_token=session.auth_token,
    )


async def delete(
    http: AsyncHttpClient,
    session: SessionState,
    container: str,
    row_id: int,
    column: str | None = None,
) -> Result:
    """Delete a row, or only clear one column of it when ``column`` is set."""
    return await http.request(
        "DELETE",
        "",
        json={
            **_scope(session),
            "container": container,
            "row": row_id,
            "col": _blank(column),
        },
        auth_token=session.auth_token,
    )


async def metadata(http: AsyncHttpClient, session: SessionState, container: str) -> Result:
    """Get the column definitions of a container."""
    return await http.request(
        "GET",
        METADATA,
        params={"bucket": _blank(session.bucket_id), "container": container},
        auth_token=session.auth_token,
    )


async def create_share_link(
    http: AsyncHttpClient,
    session: SessionState,
    container: str,
    row_ids: Sequence[int],
    *,
    password: str | None = None,
    expires: int | None = None,
    custom_alias: str | None = None,
) -> Result:
    """
    Create a share link for the given rows.

    Row ids are sent comma-separated; unset options are sent as "".
    """
    return await http.request(
        "POST",
        SHARE,
        json={
            **_scope(session),
            "container": container,
            "rows": ",".join(str(r) for r in row_ids),
            "password": _blank(password),
            "expires": _blank(expires),
            "alias": _blank(custom_alias),
        },
        auth_token=session.auth_token,
    )


async def update_share_link(
    http: AsyncHttpClient,
    session: SessionState,
    share_id: str,
    row_ids: Sequence[int],
    *,
    password: str | None = None,
    expires: int | None = None,
    custom_alias: str | None = None,
) -> Result:
    """Replace the rows and options of an existing share link."""
    return await http.request(
        "PUT",
        SHARE,
        json={
            "bucket": _blank(session.bucket_id),
            "share": share_id,
            "rows": ",".join(str(r) for r in row_ids),
            "password": _blank(password),
            "expires": _blank(expires),
            "alias": _blank(custom_alias),
        },
        auth_token=session.auth_token,
    )


async def get_share_link(http: AsyncHttpClient, session: SessionState, share_id: str) -> Result:
    """Open a share link, using the session's share password if it is protected."""
    return await http.request(
        "GET",
        SHARE,
        params={"share": share_id, "password": _blank(session.share_password)},
        auth_token=session.auth_token,
    )


async def delete_share_link(
    http: AsyncHttpClient, session: SessionState, share_id: str
) -> Result:
    """Revoke a share link."""
    return await http.request(
        "DELETE",
        SHARE,
        json={"bucket": _blank(session.bucket_id), "share": share_id},
        auth_token=session.auth_token,
    )
