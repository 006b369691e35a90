# SPDX-License-Identifier: MIT

import re
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from htracker.model.tracker import TrackerStatus, TrackerType

COLOR_PATTERN = re.compile(r"^#([0-9A-F]{3}){1,2}$", re.IGNORECASE)

TrackerSort = Literal["name", "created", "recent"]


class StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")


def _validate_color(color: Optional[str]) -> Optional[str]:
    if color is not None and not COLOR_PATTERN.match(color):
        raise ValueError("Invalid color format")
    return color


class TrackerInput(StrictModel):
    name: str = Field(min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)
    type: TrackerType
    status: Optional[TrackerStatus] = None
    tags: list[str] = Field(default_factory=list)
    color: Optional[str] = None
    icon: Optional[str] = None

    @field_validator("color")
    @classmethod
    def check_color(cls, color: Optional[str]) -> Optional[str]:
        return _validate_color(color)


class TrackerUpdate(StrictModel):
    """Partial tracker update. Fields explicitly set to None are cleared."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)
    type: Optional[TrackerType] = None
    status: Optional[TrackerStatus] = None
    tags: Optional[list[str]] = None
    color: Optional[str] = None
    icon: Optional[str] = None

    @field_validator("color")
    @classmethod
    def check_color(cls, color: Optional[str]) -> Optional[str]:
        return _validate_color(color)


class TrackerFilters(StrictModel):
    status: Optional[TrackerStatus] = None
    type: Optional[TrackerType] = None
    search: Optional[str] = None
    sort: Optional[TrackerSort] = None
    page: Optional[int] = None
    limit: Optional[int] = None
