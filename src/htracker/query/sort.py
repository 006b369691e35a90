# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any


def parse_sort_instruction(instruction: str) -> tuple[str, bool]:
    """Parse "column" or "asc|desc column" into (column, descending)."""
    direction, _, column = instruction.strip().rpartition(" ")
    return column, direction == "desc"


def sort_items(
    items: list[dict[str, Any]], sort_instructions: list[str]
) -> list[dict[str, Any]]:
    """
    Sort copies of items by several columns, the first instruction taking
    precedence. Items missing a value for a column go last for that column.
    """
    sorted_items = deepcopy(items)

    # Stable sorts applied from the least to the most significant column
    for instruction in reversed(sort_instructions):
        column, descending = parse_sort_instruction(instruction)
        present = [item for item in sorted_items if item.get(column) is not None]
        missing = [item for item in sorted_items if item.get(column) is None]
        present.sort(key=lambda item: item[column], reverse=descending)
        sorted_items = present + missing

    return sorted_items
