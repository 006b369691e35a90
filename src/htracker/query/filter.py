# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from typing import Any, Callable, TypeAlias, cast

from htracker.model.filter import (
    BooleanFilter,
    Filters,
    FilterType,
    PropertyFilter,
    ValueFilter,
)

Item: TypeAlias = dict[str, Any]

STR_OPERATORS: dict[str, Callable[[str, str], bool]] = {
    "equals": lambda actual, expected: actual == expected,
    "equals_no_case": lambda actual, expected: actual.lower() == expected.lower(),
    "contains": lambda actual, expected: expected in actual,
    "contains_no_case": lambda actual, expected: expected.lower() in actual.lower(),
}


def split_instruction(instruction: str) -> tuple[str, str]:
    """Split "<operator> <value>" at the first space. The value may contain spaces."""
    operator, _, value = instruction.strip().partition(" ")
    return operator, value.strip()


def generate_filter(filter: Filters) -> "Predicate":
    """Build a predicate tree from a (possibly nested) filter description."""
    match filter["filter_type"]:
        case FilterType.AND | FilterType.OR:
            boolean_filter = cast(BooleanFilter, filter)
            children = [generate_filter(child) for child in boolean_filter["predicates"]]
            if filter["filter_type"] == FilterType.AND:
                return And(children)
            return Or(children)
        case FilterType.STR:
            return Str(cast(PropertyFilter, filter))
        case FilterType.TAG:
            return Tag(cast(ValueFilter, filter))
    raise ValueError(f"Unknown filter type: {filter['filter_type']}")


class Predicate(ABC):
    @abstractmethod
    def matches(self, item: Item) -> bool: ...

    def filter(self, items: list[Item]) -> list[Item]:
        """Matching items in input order."""
        return [item for item in items if self.matches(item)]


class And(Predicate):
    def __init__(self, predicates: list[Predicate]) -> None:
        self.predicates = predicates

    def matches(self, item: Item) -> bool:
        return all(predicate.matches(item) for predicate in self.predicates)


class Or(Predicate):
    def __init__(self, predicates: list[Predicate]) -> None:
        self.predicates = predicates

    def matches(self, item: Item) -> bool:
        return any(predicate.matches(item) for predicate in self.predicates)


class Str(Predicate):
    def __init__(self, property_filter: PropertyFilter) -> None:
        self.property = property_filter["property"]
        operator, self.value = split_instruction(property_filter["filter"])
        if operator not in STR_OPERATORS:
            raise ValueError(f"Unknown string operator: {operator}")
        self.compare = STR_OPERATORS[operator]

    def matches(self, item: Item) -> bool:
        actual = item.get(self.property)
        if actual is None:
            return False
        return self.compare(str(actual), self.value)


class Tag(Predicate):
    def __init__(self, tag_filter: ValueFilter) -> None:
        self.tag = tag_filter["filter"]

    def matches(self, item: Item) -> bool:
        return self.tag in (item.get("tags") or [])
