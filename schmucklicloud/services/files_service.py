"""
Files service for schmuckliCloud.

Uploads, re-tokenizes and deletes files owned by the signed-in user.
"""

from collections.abc import Sequence
from typing import Any

import structlog

from schmucklicloud.api.endpoints import files as files_api
from schmucklicloud.exceptions import ValidationError
from schmucklicloud.models.result import Result
from schmucklicloud.services.base import BaseService, require_sequence, require_text

logger = structlog.get_logger(__name__)


def _is_file_like(item: Any) -> bool:
    if isinstance(item, (bytes, bytearray)):
        return True
    if isinstance(item, tuple):
        return 2 <= len(item) <= 4 and isinstance(item[0], str)
    return hasattr(item, "read")


class FilesService(BaseService):
    """
    Wraps the schmuckliCloud Files API.

    Every operation needs the auth token of the user owning the files; call
    ``set_auth_token`` first.
    """

    SEGMENT = "files/"

    def set_auth_token(self, auth_token: str | None) -> None:
        self._update_session(auth_token=auth_token)

    async def upload(self, files: Sequence[Any]) -> Result:
        """
        Upload files and return their tokens and locations.

        Args:
            files: Bytes, binary file objects or httpx-style
                ``(filename, content[, content_type])`` tuples. They are sent
                as ``file_0``, ``file_1``, ... in the given order.

        Raises:
            ValidationError: If no file is given or an item is not file-like.
            CredentialsMissingError: If no auth token is set.
        """
        session = self._session
        require_sequence(files, "files", "Please provide at least one file.")
        for item in files:
            if not _is_file_like(item):
                msg = "Files must be bytes, binary file objects or (filename, content) tuples."
                raise ValidationError(msg, argument="files")
        auth_token = self._require_auth_token(session)

        logger.debug("Uploading files", count=len(files))
        request = files_api.upload(self._http, auth_token, files)
        return await self._send("upload", request)

    async def reset_token(self, filename: str) -> Result:
        """
        Replace the active token of a file with a new one.

        Returns:
            Result with the new token in ``data``.
        """
        session = self._session
        require_text(filename, "filename", "Please provide a valid filename.")
        auth_token = self._require_auth_token(session)
        request = files_api.reset_token(self._http, auth_token, filename)
        return await self._send("reset_token", request)

    async def delete(self, filename: str) -> Result:
        """Delete the file with the given name."""
        session = self._session
        require_text(filename, "filename", "Please provide a valid filename.")
        auth_token = self._require_auth_token(session)
        request = files_api.delete(self._http, auth_token, filename)
        return await self._send("delete", request)
