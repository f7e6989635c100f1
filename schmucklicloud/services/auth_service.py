"""
Authentication service for schmuckliCloud.

Handles the email/password provider, password resets and session queries.
"""

import re

import structlog

from schmucklicloud.api.endpoints import auth as auth_api
from schmucklicloud.exceptions import APIError, ValidationError
from schmucklicloud.models.result import Result
from schmucklicloud.services.base import BaseService, require_text

logger = structlog.get_logger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")
_LANGUAGE_RE = re.compile(r"^[a-z]{2}$")


def _require_email(email: object) -> str:
    if not isinstance(email, str) or not _EMAIL_RE.match(email):
        msg = "Please provide a valid email address."
        raise ValidationError(msg, argument="email")
    return email


class AuthService(BaseService):
    """
    Wraps the schmuckliCloud Auth API.

    Session tokens are passed explicitly to the session operations, so one
    service instance can serve several users.

    Two-factor flow:
        ``authorize_email_password`` returns a Result with status 300 when the
        account has OTP enabled. Prompt the user for the code and call it again
        with ``otp_code``.
    """

    SEGMENT = "auth/"

    async def register_email_password(self, email: str, password: str, language: str) -> Result:
        """
        Add a new user to the email/password provider.

        Args:
            email: Email of the new user.
            password: Password of the new user.
            language: Two letter language code (ex. de, en).

        Raises:
            ValidationError: If an argument is missing or malformed.
            APIError: If the backend rejects the registration.
        """
        _require_email(email)
        require_text(password, "password", "Please provide a password.")
        if not isinstance(language, str) or not _LANGUAGE_RE.match(language):
            msg = "Please provide a two letter language code (ex. de, en)."
            raise ValidationError(msg, argument="language")

        request = auth_api.register_email_password(self._http, email, password, language)
        return await self._send("register_email_password", request)

    async def authorize_email_password(
        self, email: str, password: str, otp_code: str | None = None
    ) -> Result:
        """
        Authorize the user with email and password.

        Args:
            email: Email of the user.
            password: Password of the user.
            otp_code: One-time password, required after a 300 challenge.

        Returns:
            Result with the session token in ``data`` on success. Status 300
            means an OTP code is required.

        Raises:
            ValidationError: If an argument is missing or malformed.
            APIError: If the credentials are rejected.
        """
        _require_email(email)
        require_text(password, "password", "Please provide a password.")
        if otp_code is not None and (not isinstance(otp_code, str) or not otp_code.isdigit()):
            msg = "The OTP code must only contain digits."
            raise ValidationError(msg, argument="otp_code")

        logger.info("Authorizing user", with_otp=otp_code is not None)
        try:
            result = await auth_api.authorize_email_password(
                self._http, email, password, otp_code
            )
        except APIError as e:
            logger.warning("Authorization rejected", code=e.code)
            raise

        if result.status_code == auth_api.OTP_REQUIRED:
            logger.info("OTP code required")
        return result

    async def request_reset_password(self, email: str) -> Result:
        """Send a mail with a password change link to the given address."""
        _require_email(email)
        request = auth_api.request_reset_password(self._http, email)
        return await self._send("request_reset_password", request)

    async def update_reset_password(self, reset_token: str, password: str) -> Result:
        """
        Set the new password after the user followed the link in the reset mail.

        Args:
            reset_token: Token from the reset mail.
            password: New password.
        """
        require_text(reset_token, "reset_token", "Please provide the reset token.")
        require_text(password, "password", "Please provide a password.")
        request = auth_api.update_reset_password(self._http, reset_token, password)
        return await self._send("update_reset_password", request)

    async def check_session(self, session_token: str) -> Result:
        """Check a session token. A 404 Result means the session does not exist."""
        self._require_session_token(session_token)
        request = auth_api.check_session(self._http, session_token)
        return await self._send("check_session", request)

    async def get_user_details(self, session_token: str) -> Result:
        """Get the details of the user owning the session."""
        self._require_session_token(session_token)
        request = auth_api.get_user_details(self._http, session_token)
        return await self._send("get_user_details", request)

    async def get_active_sessions(self, session_token: str) -> Result:
        """List the active sessions of the user owning the session."""
        self._require_session_token(session_token)
        request = auth_api.get_active_sessions(self._http, session_token)
        return await self._send("get_active_sessions", request)

    async def logout(self, session_token: str) -> Result:
        """Invalidate the session token. Unknown tokens yield a 404 Result."""
        self._require_session_token(session_token)
        logger.info("Logging out session")
        request = auth_api.logout(self._http, session_token)
        return await self._send("logout", request)

    @staticmethod
    def _require_session_token(session_token: object) -> None:
        require_text(session_token, "session_token", "Please provide a session token.")
