"""Authentication-related API endpoints."""

import httpx

from schmucklicloud.api.http_client import OK, OK_OR_NOT_FOUND, AsyncHttpClient
from schmucklicloud.models.result import Result

EMAIL_PASSWORD = "emailpassword.php"
SESSION = "session.php"
SESSIONS = "sessions.php"
USER = "user.php"

# 300 means the account has two-factor auth enabled and an OTP code is needed.
OTP_REQUIRED = httpx.codes.MULTIPLE_CHOICES


async def register_email_password(
    http: AsyncHttpClient, email: str, password: str, language: str
) -> Result:
    """
    Add a new user to the email/password provider.

    Args:
        http: Signed client for the auth service.
        email: Email of the new user.
        password: Password of the new user.
        language: Two letter language code used for the confirmation mail.
    """
    return await http.request(
        "POST",
        EMAIL_PASSWORD,
        json={"email": email, "password": password, "lang": language},
    )


async def authorize_email_password(
    http: AsyncHttpClient, email: str, password: str, otp_code: str | None = None
) -> Result:
    """
    Sign in with email and password.

    Returns:
        Result holding the session token in ``data`` on success, or a Result
        with status 300 when the backend asks for an OTP code.
    """
    body = {"email": email, "password": password}
    if otp_code is not None:
        body["otp"] = otp_code
    return await http.request(
        "PUT",
        EMAIL_PASSWORD,
        json=body,
        accept=OK | {OTP_REQUIRED},
    )


async def request_reset_password(http: AsyncHttpClient, email: str) -> Result:
    """Send a password reset mail to the given address."""
    return await http.request(
        "PUT",
        "",
        json={"function": "request_reset_password", "email": email},
    )


async def update_reset_password(http: AsyncHttpClient, reset_token: str, password: str) -> Result:
    """Set a new password using the token from the reset mail."""
    return await http.request(
        "PUT",
        "",
        json={"function": "update_reset_password", "token": reset_token, "password": password},
    )


async def check_session(http: AsyncHttpClient, session_token: str) -> Result:
    """Check whether a session token is still valid. 404 means it is not."""
    return await http.request(
        "GET", SESSION, auth_token=session_token, accept=OK_OR_NOT_FOUND
    )


async def get_user_details(http: AsyncHttpClient, session_token: str) -> Result:
    """Get the profile of the user owning the session."""
    return await http.request("GET", USER, auth_token=session_token, accept=OK_OR_NOT_FOUND)


async def get_active_sessions(http: AsyncHttpClient, session_token: str) -> Result:
    """List all active sessions of the user owning the session."""
    return await http.request("GET", SESSIONS, auth_token=session_token, accept=OK_OR_NOT_FOUND)


async def logout(http: AsyncHttpClient, session_token: str) -> Result:
    """Invalidate the session token."""
    return await http.request(
        "DELETE", SESSION, auth_token=session_token, accept=OK_OR_NOT_FOUND
    )
