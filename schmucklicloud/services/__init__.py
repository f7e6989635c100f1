"""
Service wrappers for the schmuckliCloud APIs.
"""

from schmucklicloud.services.auth_service import AuthService
from schmucklicloud.services.files_service import FilesService
from schmucklicloud.services.messaging_service import MessagingService
from schmucklicloud.services.storage_service import StorageService

__all__ = [
    "AuthService",
    "FilesService",
    "MessagingService",
    "StorageService",
]
