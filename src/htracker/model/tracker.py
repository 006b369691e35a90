# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import Optional, TypedDict

import pendulum

from htracker.model.entity import EntityId


class TrackerType(StrEnum):
    TIMER = "TIMER"  # start/stop sessions, duration in seconds
    COUNTER = "COUNTER"  # increments and decrements
    AMOUNT = "AMOUNT"  # numeric amounts, e.g. money
    OCCURRENCE = "OCCURRENCE"  # dated events
    CUSTOM = "CUSTOM"  # user-defined


class TrackerStatus(StrEnum):
    ACTIVE = "ACTIVE"  # a timer is running
    INACTIVE = "INACTIVE"
    ARCHIVED = "ARCHIVED"


class Statistics(TypedDict):
    total_entries: int
    total_time: int  # seconds, TIMER only
    total_value: float  # COUNTER and AMOUNT only
    total_custom: Optional[str]  # OCCURRENCE and CUSTOM only, never computed


class Tracker(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "tracker"
    user_id: EntityId  # Owning user
    name: str
    description: Optional[str]
    type: TrackerType  # Immutable after creation
    status: TrackerStatus
    tags: list[str]
    color: Optional[str]  # "#RGB" or "#RRGGBB"
    icon: Optional[str]
    statistics: Statistics  # Denormalized, rebuildable from entries
    created: pendulum.DateTime
    updated: pendulum.DateTime


class TrackerWithEntriesCount(Tracker):
    entries_count: int


class TrackerPage(TypedDict):
    trackers: list[TrackerWithEntriesCount]
    total: int
    total_pages: int
    page: int


class PeriodTotals(TypedDict):
    today: float
    week: float
    month: float
