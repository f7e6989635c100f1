"""
Filter and sort expressions for storage queries.
"""

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class ConditionOperator(StrEnum):
    """Comparison operators understood by the storage backend."""

    EQUALS = "="
    NOT_EQUALS = "!="
    GREATER = ">"
    GREATER_OR_EQUAL = ">="
    LESS = "<"
    LESS_OR_EQUAL = "<="
    LIKE = "LIKE"


class SortDirection(StrEnum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True, kw_only=True)
class Condition:
    """Single row filter: ``column operator value``."""

    column: str
    value: Any
    operator: ConditionOperator = ConditionOperator.EQUALS

    def to_wire(self) -> dict[str, Any]:
        return {"column": self.column, "operator": str(self.operator), "value": self.value}


@dataclass(frozen=True, kw_only=True)
class Order:
    """Sort instruction for a column."""

    column: str
    direction: SortDirection = SortDirection.ASC

    def to_wire(self) -> dict[str, Any]:
        return {"column": self.column, "direction": str(self.direction)}


FilterExpression = Condition | Mapping[str, Any]
OrderExpression = str | Order | Mapping[str, Any] | Sequence[Order | Mapping[str, Any]]


def _wire(item: Any) -> Any:
    if isinstance(item, (Condition, Order)):
        return item.to_wire()
    if isinstance(item, Mapping):
        return dict(item)
    return item


def encode_conditions(conditions: Sequence[FilterExpression]) -> str:
    """Serialize conditions to the JSON array sent as ``filter``."""
    return json.dumps([_wire(c) for c in conditions])


def encode_order(order: OrderExpression | None) -> str:
    """
    Serialize a sort expression to its JSON form.

    Returns an empty string when no order is given, which the backend reads
    as "unsorted". A string is taken as already encoded and sent unchanged.
    """
    if order is None:
        return ""
    if isinstance(order, str):
        return order
    if isinstance(order, (Order, Mapping)):
        return json.dumps(_wire(order))
    return json.dumps([_wire(o) for o in order])
