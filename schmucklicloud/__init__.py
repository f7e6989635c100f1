"""
schmuckliCloud Python Client.

An async Python client for the schmuckliCloud Auth, Storage, Files and
Messaging APIs.

Example:
    ```python
    from schmucklicloud import StorageService

    async with StorageService("app-id", "app-secret") as storage:
        storage.set_bucket(23)
        result = await storage.insert("customers", {"name": "Ada"})

        if result.is_success:
            print(result.data)
    ```
"""

from schmucklicloud.client import SchmuckliCloudClient
from schmucklicloud.config import SchmuckliCloudConfig
from schmucklicloud.exceptions import (
    APIError,
    CredentialsMissingError,
    NotFoundError,
    SchmuckliCloudError,
    ServerError,
    ValidationError,
)
from schmucklicloud.models import (
    Condition,
    ConditionOperator,
    Credentials,
    Order,
    Result,
    SessionState,
    SortDirection,
)
from schmucklicloud.services import (
    AuthService,
    FilesService,
    MessagingService,
    StorageService,
)

__version__ = "0.1.0"

__all__ = [
    # Main client
    "SchmuckliCloudClient",
    "SchmuckliCloudConfig",
    # Services
    "AuthService",
    "StorageService",
    "FilesService",
    "MessagingService",
    # Models
    "Result",
    "Credentials",
    "SessionState",
    "Condition",
    "ConditionOperator",
    "Order",
    "SortDirection",
    # Exceptions
    "SchmuckliCloudError",
    "ValidationError",
    "CredentialsMissingError",
    "APIError",
    "NotFoundError",
    "ServerError",
]
