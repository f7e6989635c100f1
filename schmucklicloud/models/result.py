"""
Uniform result of a backend call.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Result:
    """
    Normalized backend response.

    Attributes:
        status_code: Status reported by the backend.
        message: Human-readable message from the backend.
        data: Response payload (any JSON value, or None).
    """

    status_code: int
    message: str = ""
    data: Any = None

    @property
    def is_success(self) -> bool:
        """True if the status code is in the 2xx range."""
        return 200 <= self.status_code <= 299
