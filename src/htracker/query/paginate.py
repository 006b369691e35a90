# SPDX-License-Identifier: MIT

import math
from typing import TypeVar

T = TypeVar("T")


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)


def paginate(items: list[T], page: int, limit: int) -> list[T]:
    """Return the 1-based page of items."""
    skip = (page - 1) * limit
    return items[skip : skip + limit]
