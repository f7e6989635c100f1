"""
schmuckliCloud API client layer.

Provides signed async HTTP communication with the schmuckliCloud API.
"""

from schmucklicloud.api.http_client import (
    OK,
    OK_OR_NOT_FOUND,
    AsyncHttpClient,
    sanitize_for_log,
)

__all__ = ["OK", "OK_OR_NOT_FOUND", "AsyncHttpClient", "sanitize_for_log"]
