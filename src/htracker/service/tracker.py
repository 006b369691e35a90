# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from htracker.model.entity import EntityId
from htracker.model.entry import Entry
from htracker.model.tracker import PeriodTotals, Statistics, Tracker
from htracker.repository.entry import ENTRY_REPO
from htracker.repository.tracker import TRACKER_REPO
from htracker.service.statistics import (
    COUNT_TYPES,
    accumulate_entry,
    recompute_statistics,
    rollup_filter_for,
)
from htracker.time import now_utc


class TrackerValidationError(Exception):
    """Raised when a tracker operation does not fit the tracker."""

    pass


class PeriodWindows(TypedDict):
    today: pendulum.DateTime
    week: pendulum.DateTime
    month: pendulum.DateTime


def get_period_window_starts(
    now: Optional[pendulum.DateTime] = None,
) -> PeriodWindows:
    """
    Get the start of the today, week and month windows ending at now.

    Windows start at local midnight: today, the most recent Sunday (today
    when it is Sunday) and the first of the month. Returned in UTC.
    """
    if now is None:
        now = now_utc()

    local_time = now.in_tz("local")
    today_start = local_time.start_of("day")
    # isoweekday() is 1 for Monday through 7 for Sunday
    week_start = today_start.subtract(days=today_start.isoweekday() % 7)
    month_start = local_time.start_of("month")

    return {
        "today": today_start.in_tz("UTC"),
        "week": week_start.in_tz("UTC"),
        "month": month_start.in_tz("UTC"),
    }


def get_tracker_period_total(
    tracker: Tracker,
    since: pendulum.DateTime,
) -> float:
    """
    Sum a tracker's activity dated at or after since.

    Timers sum the durations of completed sessions, counters and amounts sum
    their values, occurrence and custom trackers count entries.
    """
    if tracker["id"] is None:
        raise ValueError("Tracker must have an ID")

    completed_only, with_value = rollup_filter_for(tracker["type"])
    aggregate = ENTRY_REPO.aggregate(
        tracker["id"],
        completed_only=completed_only,
        with_value=with_value,
        since=since,
    )

    if tracker["type"] in COUNT_TYPES:
        return aggregate["count"]
    return aggregate["sum"]


def get_tracker_period_totals(
    tracker: Tracker,
    now: Optional[pendulum.DateTime] = None,
) -> PeriodTotals:
    windows = get_period_window_starts(now)
    return {
        "today": get_tracker_period_total(tracker, windows["today"]),
        "week": get_tracker_period_total(tracker, windows["week"]),
        "month": get_tracker_period_total(tracker, windows["month"]),
    }


def record_entry_created(tracker_id: EntityId, entry: Entry) -> Statistics:
    """Fold a new entry into its tracker's stored statistics."""
    tracker = TRACKER_REPO.get_tracker(tracker_id)
    statistics = accumulate_entry(tracker["statistics"], tracker["type"], entry)
    TRACKER_REPO.update_statistics(tracker_id, statistics)
    return statistics


def refresh_tracker_statistics(tracker_id: EntityId) -> Statistics:
    """Rebuild a tracker's stored statistics from its entries."""
    tracker = TRACKER_REPO.get_tracker(tracker_id)
    completed_only, with_value = rollup_filter_for(tracker["type"])
    aggregate = ENTRY_REPO.aggregate(
        tracker_id, completed_only=completed_only, with_value=with_value
    )
    statistics = recompute_statistics(tracker, aggregate)
    TRACKER_REPO.update_statistics(tracker_id, statistics)
    return statistics
