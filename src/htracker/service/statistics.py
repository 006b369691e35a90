# SPDX-License-Identifier: MIT

"""
Bookkeeping for the statistics rollup embedded in every tracker.

Creating an entry adjusts the rollup incrementally. Updating or deleting an
entry rebuilds it from an aggregate over the tracker's entries, which is
also the repair path when a rollup has drifted.
"""

from copy import deepcopy
from typing import Optional

from htracker.model.entry import Entry, EntryAggregate
from htracker.model.tracker import Statistics, Tracker, TrackerType
from htracker.template.statistics import get_statistics_template
from htracker.time import seconds_between

TIME_TYPES = (TrackerType.TIMER,)
VALUE_TYPES = (TrackerType.COUNTER, TrackerType.AMOUNT)
COUNT_TYPES = (TrackerType.OCCURRENCE, TrackerType.CUSTOM)


def entry_duration_seconds(entry: Entry) -> Optional[int]:
    if entry["start_time"] is None or entry["end_time"] is None:
        return None
    return seconds_between(entry["start_time"], entry["end_time"])


def is_completed_timer_entry(entry: Entry) -> bool:
    return (
        entry["start_time"] is not None
        and entry["end_time"] is not None
        and entry["start_time"] != entry["end_time"]
    )


def rollup_filter_for(tracker_type: TrackerType) -> tuple[bool, bool]:
    """Return (completed_only, with_value) for the entries a type counts."""
    if tracker_type in TIME_TYPES:
        return True, False
    if tracker_type in VALUE_TYPES:
        return False, True
    return False, False


def accumulate_entry(
    statistics: Statistics,
    tracker_type: TrackerType,
    entry: Entry,
) -> Statistics:
    """Fold a newly created entry into a tracker's statistics."""
    updated = deepcopy(statistics)

    if tracker_type in TIME_TYPES:
        # Running sessions are counted once they are stopped
        if is_completed_timer_entry(entry):
            duration = entry_duration_seconds(entry) or 0
            updated["total_entries"] += 1
            updated["total_time"] += duration
    elif tracker_type in VALUE_TYPES:
        if entry["value"] is not None:
            updated["total_entries"] += 1
            updated["total_value"] += entry["value"]
    elif tracker_type in COUNT_TYPES:
        updated["total_entries"] += 1

    return updated


def recompute_statistics(tracker: Tracker, aggregate: EntryAggregate) -> Statistics:
    """
    Build a tracker's statistics from an aggregate over its entries.

    The aggregate must have been taken with the filter returned by
    rollup_filter_for() for the tracker's type. total_custom is carried over
    unchanged.
    """
    statistics = get_statistics_template(tracker["statistics"]["total_custom"])
    statistics["total_entries"] = max(0, aggregate["count"])

    if tracker["type"] in TIME_TYPES:
        statistics["total_time"] = max(0, round(aggregate["sum"]))
    elif tracker["type"] in VALUE_TYPES:
        statistics["total_value"] = aggregate["sum"]

    return statistics
