"""
schmuckliCloud client configuration.
"""

from dataclasses import dataclass

DEFAULT_API_URL = "https://api.schmuckli.cloud/client_api/v1"


@dataclass(frozen=True, kw_only=True)
class SchmuckliCloudConfig:
    """
    Attributes:
        api_url: Root URL of the client API. Each service appends its own segment.
        user_agent: User-Agent header value.
        timeout: Request timeout in seconds. None keeps the httpx default.
    """

    api_url: str = DEFAULT_API_URL
    user_agent: str = "schmucklicloud-python/0.1.0"
    timeout: float | None = None

    def __post_init__(self) -> None:
        if not self.api_url.startswith(("http://", "https://")):
            msg = "api_url must be an http(s) URL"
            raise ValueError(msg)
        if self.timeout is not None and self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)

    def service_url(self, segment: str) -> str:
        """Base URL for a service segment such as ``data/``."""
        return f"{self.api_url.rstrip('/')}/{segment.strip('/')}/"
