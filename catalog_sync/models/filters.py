"""
Collection filter models.

Declarative query filters handed to catalog stores. Stores translate them
into their own query language; the in-memory store evaluates them directly.
"""

from dataclasses import dataclass
from typing import Any, Tuple

OPERATORS = ('eq', 'in')


@dataclass(frozen=True)
class FieldCondition:
    """Single attribute condition (equality or inclusion)."""
    field: str
    operator: str
    value: Any

    def __post_init__(self):
        if self.operator not in OPERATORS:
            raise ValueError(f"Unsupported operator: {self.operator}")

    def matches(self, item) -> bool:
        actual = item.get_data(self.field)
        if self.operator == 'in':
            return actual in self.value
        return actual == self.value


@dataclass(frozen=True)
class CollectionFilter:
    """All conditions must hold (logical AND)."""
    conditions: Tuple[FieldCondition, ...] = ()

    def with_condition(self, condition: FieldCondition) -> 'CollectionFilter':
        return CollectionFilter(conditions=self.conditions + (condition,))

    def matches(self, item) -> bool:
        return all(condition.matches(item) for condition in self.conditions)

    def get(self, field: str):
        """Return the condition on a field, or None."""
        for condition in self.conditions:
            if condition.field == field:
                return condition
        return None
