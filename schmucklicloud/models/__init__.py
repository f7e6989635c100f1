"""
Domain models for schmucklicloud.

These are immutable (frozen) dataclasses shared by all services.
"""

from schmucklicloud.models.query import (
    Condition,
    ConditionOperator,
    Order,
    SortDirection,
    encode_conditions,
    encode_order,
)
from schmucklicloud.models.result import Result
from schmucklicloud.models.session import Credentials, SessionState

__all__ = [
    # Result
    "Result",
    # Session
    "Credentials",
    "SessionState",
    # Query
    "Condition",
    "ConditionOperator",
    "Order",
    "SortDirection",
    "encode_conditions",
    "encode_order",
]
