"""
schmuckliCloud exception hierarchy.

All SDK exceptions inherit from SchmuckliCloudError. Transport failures are
not wrapped: they surface as the ``httpx.HTTPError`` raised by httpx.
"""

from typing import Any


class SchmuckliCloudError(Exception):
    """Base exception for all schmucklicloud errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class ValidationError(SchmuckliCloudError):
    """An argument was missing or malformed. Raised before any request is sent."""

    def __init__(self, message: str, *, argument: str | None = None) -> None:
        super().__init__(message, argument=argument)
        self.argument = argument


class CredentialsMissingError(ValidationError):
    """The operation needs an auth token but none is set."""

    def __init__(
        self, message: str = "Please provide an auth token before you do this request."
    ) -> None:
        super().__init__(message, argument="auth_token")


class APIError(SchmuckliCloudError):
    """The backend answered with a status the operation does not accept."""

    def __init__(
        self,
        message: str,
        *,
        code: int,
        endpoint: str | None = None,
        backend_message: str | None = None,
    ) -> None:
        super().__init__(message, code=code, endpoint=endpoint)
        self.code = code
        self.endpoint = endpoint
        self.backend_message = backend_message


class NotFoundError(APIError):
    """Backend returned 404 for an operation that does not tolerate it."""

    def __init__(
        self,
        message: str,
        *,
        endpoint: str | None = None,
        backend_message: str | None = None,
    ) -> None:
        super().__init__(message, code=404, endpoint=endpoint, backend_message=backend_message)


class ServerError(APIError):
    """Server-side error (5xx)."""
