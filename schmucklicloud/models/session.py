"""
Credential and session models.

Both are frozen: services swap in a new SessionState on every setter call, so
a request built from one snapshot never sees a later mutation.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class Credentials:
    """
    Application identity sent with every request.

    Attributes:
        app_id: APP ID created for the client app in the schmuckliCloud console.
        app_secret: APP secret belonging to the APP ID.
    """

    app_id: str
    app_secret: str = field(repr=False)

    def as_headers(self) -> dict[str, str]:
        return {"appid": self.app_id, "appsecret": self.app_secret}


@dataclass(frozen=True, kw_only=True)
class SessionState:
    """
    Mutable-by-replacement session context of a service.

    Attributes:
        auth_token: Token of the signed-in user, if any.
        dataset: Dataset namespace. None targets the user's private space.
        bucket_id: Bucket partition identifier.
        share_password: Password used to open protected share links.
    """

    auth_token: str | None = field(default=None, repr=False)
    dataset: str | None = None
    bucket_id: int | str | None = None
    share_password: str | None = field(default=None, repr=False)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.auth_token)
