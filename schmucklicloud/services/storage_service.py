"""
Storage service for schmuckliCloud.

Reads and writes rows of containers inside a bucket/dataset scope, and manages
share links to rows.
"""

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

import structlog

from schmucklicloud.api.endpoints import storage as storage_api
from schmucklicloud.exceptions import ValidationError
from schmucklicloud.models.query import (
    Condition,
    FilterExpression,
    Order,
    OrderExpression,
    encode_conditions,
    encode_order,
)
from schmucklicloud.models.result import Result
from schmucklicloud.services.base import (
    BaseService,
    optional_int,
    require_int,
    require_mapping,
    require_sequence,
    require_text,
    to_epoch,
)

logger = structlog.get_logger(__name__)


def _require_container(container: object) -> str:
    return require_text(container, "container", "Please define a container.")


def _require_row_id(row_id: object) -> int:
    return require_int(
        row_id, "row_id", "Please provide a row id and make sure it is a number."
    )


def _require_row_ids(row_ids: object) -> Sequence[int]:
    msg = "Please provide at least one row id."
    rows = require_sequence(row_ids, "row_ids", msg)
    for row_id in rows:
        require_int(row_id, "row_ids", "All row ids must be numbers.")
    return rows


def _require_conditions(conditions: object) -> Sequence[FilterExpression]:
    msg = (
        "Please define at least one condition. "
        "If you want to show all entries, please use the method 'get_all'."
    )
    items = require_sequence(conditions, "conditions", msg)
    for item in items:
        if not isinstance(item, (Condition, Mapping)):
            msg = "Please provide a list of Condition objects or mappings."
            raise ValidationError(msg, argument="conditions")
    return items


def _require_order(order: object) -> OrderExpression | None:
    if order is None or isinstance(order, (str, Order, Mapping)):
        return order
    if isinstance(order, Sequence) and all(isinstance(o, (Order, Mapping)) for o in order):
        return order
    msg = "Please provide the order as Order objects, mappings or an encoded string."
    raise ValidationError(msg, argument="order")


class StorageService(BaseService):
    """
    Wraps the schmuckliCloud Storage API.

    Requests are scoped by the session's bucket and dataset. The setters swap
    in a new session snapshot; requests already in flight keep the snapshot
    they were built from.

    Example:
        ```python
        async with StorageService(app_id, app_secret) as storage:
            storage.set_bucket(23)
            storage.set_dataset("production")
            result = await storage.get_all("customers", limit=10)
        ```
    """

    SEGMENT = "data/"

    def set_auth_token(self, auth_token: str | None, keep_dataset: bool = False) -> None:
        """
        Set the signed-in user for further operations.

        Args:
            auth_token: Session token from the Auth API.
            keep_dataset: Keep the current dataset. By default the dataset is
                reset so requests target the user's private space.
        """
        if keep_dataset:
            self._update_session(auth_token=auth_token)
        else:
            self._update_session(auth_token=auth_token, dataset=None)

    def set_dataset(self, dataset: str | None) -> None:
        self._update_session(dataset=dataset)

    def set_bucket(self, bucket_id: int | str | None) -> None:
        self._update_session(bucket_id=bucket_id)

    def set_share_password(self, password: str | None) -> None:
        """Password used by ``get_share_link`` to open protected links."""
        self._update_session(share_password=password)

    async def get_all(
        self,
        container: str,
        order: OrderExpression | None = None,
        start: int | None = None,
        limit: int | None = None,
    ) -> Result:
        """
        Get all rows of a container.

        Args:
            container: Container name.
            order: Order, mapping, list of them or an encoded string.
            start: Offset of the first row.
            limit: Maximum number of rows.

        Raises:
            ValidationError: If the container is missing or paging is invalid.
            APIError: If the backend rejects the query.
        """
        session = self._session
        _require_container(container)
        request = storage_api.get_all(
            self._http,
            session,
            container,
            order=encode_order(_require_order(order)),
            start=optional_int(start, "start"),
            limit=optional_int(limit, "limit"),
        )
        return await self._send("get_all", request)

    async def get(
        self,
        container: str,
        conditions: Sequence[FilterExpression],
        order: OrderExpression | None = None,
        start: int | None = None,
        limit: int | None = None,
    ) -> Result:
        """
        Get the rows matching all conditions.

        Args:
            container: Container name.
            conditions: Non-empty list of Condition objects or raw mappings.
            order: Order, mapping, list of them or an encoded string.
            start: Offset of the first row.
            limit: Maximum number of rows.
        """
        session = self._session
        _require_container(container)
        _require_conditions(conditions)
        request = storage_api.get(
            self._http,
            session,
            container,
            encode_conditions(conditions),
            order=encode_order(_require_order(order)),
            start=optional_int(start, "start"),
            limit=optional_int(limit, "limit"),
        )
        return await self._send("get", request)

    async def get_by_id(self, container: str, row_id: int) -> Result:
        """Get a single row. ``data`` is the row, or None if it does not exist."""
        session = self._session
        _require_container(container)
        _require_row_id(row_id)
        request = storage_api.get_by_id(self._http, session, container, row_id)
        return await self._send("get_by_id", request)

    async def insert(self, container: str, data: Mapping[str, Any]) -> Result:
        """Insert a row built from ``data`` (column name to value)."""
        session = self._session
        _require_container(container)
        require_mapping(data, "data", "Please provide a data object.")
        request = storage_api.insert(self._http, session, container, data)
        return await self._send("insert", request)

    async def update(self, container: str, row_id: int, data: Mapping[str, Any]) -> Result:
        """Overwrite the given columns of a row."""
        session = self._session
        _require_container(container)
        _require_row_id(row_id)
        require_mapping(
            data, "data", "Please provide a data object, with data which should be updated."
        )
        request = storage_api.update(self._http, session, container, row_id, data)
        return await self._send("update", request)

    async def delete(self, container: str, row_id: int, column: str | None = None) -> Result:
        """Delete a row, or clear a single column of it."""
        session = self._session
        _require_container(container)
        _require_row_id(row_id)
        if column is not None:
            require_text(column, "column", "Please provide a valid column name.")
        request = storage_api.delete(self._http, session, container, row_id, column)
        return await self._send("delete", request)

    async def metadata(self, container: str) -> Result:
        """Get the column definitions of a container."""
        session = self._session
        _require_container(container)
        request = storage_api.metadata(self._http, session, container)
        return await self._send("metadata", request)

    async def create_share_link(
        self,
        container: str,
        row_ids: Sequence[int],
        password: str | None = None,
        expires: int | datetime | None = None,
        custom_alias: str | None = None,
    ) -> Result:
        """
        Create a share link for rows of a container.

        Args:
            container: Container name.
            row_ids: Ids of the shared rows.
            password: Password protecting the link.
            expires: Expiry as unix timestamp or datetime.
            custom_alias: Custom name used in the link instead of the generated id.

        Returns:
            Result with the share id in ``data``.
        """
        session = self._session
        _require_container(container)
        _require_row_ids(row_ids)
        request = storage_api.create_share_link(
            self._http,
            session,
            container,
            row_ids,
            password=password,
            expires=None if expires is None else to_epoch(expires, "expires"),
            custom_alias=custom_alias,
        )
        return await self._send("create_share_link", request)

    async def update_share_link(
        self,
        share_id: str,
        row_ids: Sequence[int],
        password: str | None = None,
        expires: int | datetime | None = None,
        custom_alias: str | None = None,
    ) -> Result:
        """Replace rows and options of an existing share link."""
        session = self._session
        require_text(share_id, "share_id", "Please provide the id of the share link.")
        _require_row_ids(row_ids)
        request = storage_api.update_share_link(
            self._http,
            session,
            share_id,
            row_ids,
            password=password,
            expires=None if expires is None else to_epoch(expires, "expires"),
            custom_alias=custom_alias,
        )
        return await self._send("update_share_link", request)

    async def get_share_link(self, share_id: str) -> Result:
        """Open a share link with the password set by ``set_share_password``."""
        session = self._session
        require_text(share_id, "share_id", "Please provide the id of the share link.")
        request = storage_api.get_share_link(self._http, session, share_id)
        return await self._send("get_share_link", request)

    async def delete_share_link(self, share_id: str) -> Result:
        session = self._session
        require_text(share_id, "share_id", "Please provide the id of the share link.")
        logger.info("Deleting share link", share_id=share_id)
        request = storage_api.delete_share_link(self._http, session, share_id)
        return await self._send("delete_share_link", request)
