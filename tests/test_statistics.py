"""Tests for the statistics rollup kept on every tracker."""

from typing import Any, Optional

import pendulum

from htracker.model.entry import Entry
from htracker.model.tracker import TrackerType
from htracker.service.statistics import (
    accumulate_entry,
    is_completed_timer_entry,
    recompute_statistics,
    rollup_filter_for,
)
from htracker.template.entry import get_entry_template
from htracker.template.statistics import get_statistics_template
from htracker.template.tracker import get_tracker_template


def _entry(
    value: Optional[float] = None,
    start_time: Optional[pendulum.DateTime] = None,
    end_time: Optional[pendulum.DateTime] = None,
) -> Entry:
    entry = get_entry_template()
    entry["tracker_id"] = "tracker"
    entry["value"] = value
    entry["start_time"] = start_time
    entry["end_time"] = end_time
    return entry


START = pendulum.datetime(2024, 5, 15, 9, 0, 0, tz="UTC")


class TestAccumulateEntry:
    """Incremental folding of a new entry into the rollup."""

    def test_completed_timer_session_adds_duration(self) -> None:
        statistics = accumulate_entry(
            get_statistics_template(),
            TrackerType.TIMER,
            _entry(start_time=START, end_time=START.add(minutes=30)),
        )

        assert statistics["total_entries"] == 1
        assert statistics["total_time"] == 1800

    def test_running_timer_session_is_not_counted(self) -> None:
        statistics = accumulate_entry(
            get_statistics_template(),
            TrackerType.TIMER,
            _entry(start_time=START, end_time=START),
        )

        assert statistics["total_entries"] == 0
        assert statistics["total_time"] == 0

    def test_timer_session_without_end_is_not_counted(self) -> None:
        statistics = accumulate_entry(
            get_statistics_template(), TrackerType.TIMER, _entry(start_time=START)
        )

        assert statistics["total_entries"] == 0

    def test_counter_without_value_is_not_counted(self) -> None:
        statistics = accumulate_entry(
            get_statistics_template(), TrackerType.COUNTER, _entry()
        )

        assert statistics["total_entries"] == 0
        assert statistics["total_value"] == 0

    def test_amount_adds_value(self) -> None:
        statistics = accumulate_entry(
            get_statistics_template(), TrackerType.AMOUNT, _entry(value=12.5)
        )

        assert statistics["total_entries"] == 1
        assert statistics["total_value"] == 12.5

    def test_occurrence_counts_every_entry(self) -> None:
        statistics = get_statistics_template()
        for _ in range(3):
            statistics = accumulate_entry(
                statistics, TrackerType.OCCURRENCE, _entry(value=7)
            )

        assert statistics["total_entries"] == 3
        assert statistics["total_value"] == 0

    def test_input_statistics_are_not_mutated(self) -> None:
        statistics = get_statistics_template()

        accumulate_entry(statistics, TrackerType.CUSTOM, _entry())

        assert statistics["total_entries"] == 0


class TestRecomputeStatistics:
    """Rebuilding the rollup from an entry aggregate."""

    def _tracker(self, tracker_type: TrackerType, total_custom: Any = None) -> Any:
        tracker = get_tracker_template()
        tracker["id"] = "tracker"
        tracker["type"] = tracker_type
        tracker["statistics"] = get_statistics_template(total_custom)
        tracker["statistics"]["total_entries"] = 99
        return tracker

    def test_timer_rounds_and_floors_time(self) -> None:
        tracker = self._tracker(TrackerType.TIMER)

        statistics = recompute_statistics(tracker, {"count": 2, "sum": 90.4})
        assert statistics["total_entries"] == 2
        assert statistics["total_time"] == 90

        statistics = recompute_statistics(tracker, {"count": 0, "sum": -5.0})
        assert statistics["total_time"] == 0

    def test_counter_keeps_net_value(self) -> None:
        tracker = self._tracker(TrackerType.COUNTER)

        statistics = recompute_statistics(tracker, {"count": 2, "sum": -3.0})

        assert statistics["total_entries"] == 2
        assert statistics["total_value"] == -3.0
        assert statistics["total_time"] == 0

    def test_total_custom_is_preserved(self) -> None:
        tracker = self._tracker(TrackerType.CUSTOM, total_custom="free text")

        statistics = recompute_statistics(tracker, {"count": 1, "sum": 0.0})

        assert statistics["total_custom"] == "free text"
        assert statistics["total_entries"] == 1


class TestRollupFilter:
    def test_filters_by_type(self) -> None:
        assert rollup_filter_for(TrackerType.TIMER) == (True, False)
        assert rollup_filter_for(TrackerType.COUNTER) == (False, True)
        assert rollup_filter_for(TrackerType.AMOUNT) == (False, True)
        assert rollup_filter_for(TrackerType.OCCURRENCE) == (False, False)
        assert rollup_filter_for(TrackerType.CUSTOM) == (False, False)

    def test_completed_timer_entry(self) -> None:
        assert is_completed_timer_entry(
            _entry(start_time=START, end_time=START.add(seconds=1))
        )
        assert not is_completed_timer_entry(_entry(start_time=START, end_time=START))
        assert not is_completed_timer_entry(_entry(start_time=START))
        assert not is_completed_timer_entry(_entry())
