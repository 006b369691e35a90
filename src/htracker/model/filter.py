# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import TypedDict


class FilterType(StrEnum):
    AND = "and"  # every child predicate matches
    OR = "or"  # any child predicate matches
    STR = "str"  # string comparison on one property
    TAG = "tag"  # exact tag membership


class Filter(TypedDict):
    filter_type: FilterType


class BooleanFilter(Filter):
    predicates: list["Filters"]


class PropertyFilter(Filter):
    """`filter` holds "<operator> <value>", e.g. "contains_no_case run"."""

    property: str
    filter: str


class ValueFilter(Filter):
    filter: str


Filters = BooleanFilter | PropertyFilter | ValueFilter
