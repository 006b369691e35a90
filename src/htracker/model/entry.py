# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from htracker.model.entity import EntityId


class Entry(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "entry"
    tracker_id: EntityId  # Reference to parent tracker

    # Timer sessions only. start_time == end_time, or a missing end_time,
    # marks a session that is still running.
    start_time: Optional[pendulum.DateTime]
    end_time: Optional[pendulum.DateTime]

    # Counter/amount value, custom rating, or the duration in seconds of a
    # completed timer session
    value: Optional[float]

    date: pendulum.DateTime  # Logical timestamp of the entry
    note: Optional[str]
    tags: list[str]
    created: pendulum.DateTime
    updated: pendulum.DateTime


class EntryAggregate(TypedDict):
    count: int
    sum: float


class EntryPage(TypedDict):
    entries: list[Entry]
    total: int
