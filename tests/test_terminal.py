"""Tests for the command line interface."""

from typing import Callable

import pendulum
import pytest
import typer
from typer.testing import CliRunner

from htracker.model.tracker import Tracker, TrackerStatus, TrackerType
from htracker.repository.configuration import CONFIGURATION_REPO
from htracker.repository.entry import ENTRY_REPO
from htracker.repository.tracker import TRACKER_REPO
from htracker.terminal.app import app
from htracker.terminal.parse import parse_datetime

runner = CliRunner(env={"COLUMNS": "200"})


def _own_trackers() -> list[Tracker]:
    return TRACKER_REPO.get_trackers_for_user(CONFIGURATION_REPO.get_config()["user_id"])


class TestTrackerCommands:
    def test_add(self) -> None:
        result = runner.invoke(
            app, ["tracker", "add", "Reading", "--type", "timer", "-tg", "books"]
        )

        assert result.exit_code == 0, result.output
        assert "Reading" in result.output
        [tracker] = _own_trackers()
        assert tracker["type"] == TrackerType.TIMER
        assert tracker["tags"] == ["books"]

    def test_add_invalid_color_exits_with_error(self) -> None:
        result = runner.invoke(
            app, ["tr", "a", "Reading", "--type", "TIMER", "--color", "blue"]
        )

        assert result.exit_code == 1
        assert _own_trackers() == []

    def test_list_and_show(self, make_tracker: Callable[..., str]) -> None:
        tracker_id = make_tracker("COUNTER", name="Water")

        result = runner.invoke(app, ["tracker", "ls"])
        assert result.exit_code == 0, result.output
        assert "Water" in result.output

        result = runner.invoke(app, ["tracker", "show", tracker_id])
        assert result.exit_code == 0, result.output
        assert "COUNTER" in result.output

    def test_modify_and_archive(self, make_tracker: Callable[..., str]) -> None:
        tracker_id = make_tracker("COUNTER", name="Water", description="glasses")

        result = runner.invoke(
            app, ["tracker", "modify", tracker_id, "--name", "Tea", "-rd"]
        )
        assert result.exit_code == 0, result.output

        result = runner.invoke(app, ["tracker", "archive", tracker_id])
        assert result.exit_code == 0, result.output

        tracker = TRACKER_REPO.get_tracker(tracker_id)
        assert tracker["name"] == "Tea"
        assert tracker["description"] is None
        assert tracker["status"] == TrackerStatus.ARCHIVED

    def test_delete(
        self,
        make_tracker: Callable[..., str],
        make_entry: Callable[..., str],
    ) -> None:
        tracker_id = make_tracker()
        make_entry(tracker_id)

        result = runner.invoke(app, ["tracker", "delete", tracker_id, "--yes"])

        assert result.exit_code == 0, result.output
        assert _own_trackers() == []
        assert ENTRY_REPO.count_entries_for_tracker(tracker_id) == 0

    def test_show_missing(self) -> None:
        result = runner.invoke(app, ["tracker", "show", "missing"])

        assert result.exit_code == 1

    def test_stats_and_rebuild(
        self,
        make_tracker: Callable[..., str],
        make_entry: Callable[..., str],
    ) -> None:
        tracker_id = make_tracker("AMOUNT", name="Spend")
        make_entry(tracker_id, value=12)

        result = runner.invoke(app, ["tracker", "stats", tracker_id])
        assert result.exit_code == 0, result.output
        assert "today" in result.output
        assert "12" in result.output

        result = runner.invoke(app, ["tracker", "rebuild", tracker_id])
        assert result.exit_code == 0, result.output


class TestEntryCommands:
    def test_count(self, make_tracker: Callable[..., str]) -> None:
        tracker_id = make_tracker("COUNTER")

        for args in ([], ["--value=-2"], ["-v", "5", "-n", "afternoon"]):
            result = runner.invoke(app, ["entry", "count", tracker_id, *args])
            assert result.exit_code == 0, result.output

        statistics = TRACKER_REPO.get_tracker(tracker_id)["statistics"]
        assert statistics["total_value"] == 4
        assert statistics["total_entries"] == 3

    def test_add_with_session(self, make_tracker: Callable[..., str]) -> None:
        tracker_id = make_tracker("TIMER")

        result = runner.invoke(
            app,
            [
                "e",
                "add",
                tracker_id,
                "--start",
                "2024-05-15T09:00:00",
                "--end",
                "2024-05-15T10:30:00",
            ],
        )

        assert result.exit_code == 0, result.output
        assert TRACKER_REPO.get_tracker(tracker_id)["statistics"]["total_time"] == 5400

    def test_start_and_stop(self, make_tracker: Callable[..., str]) -> None:
        tracker_id = make_tracker("TIMER")

        result = runner.invoke(app, ["entry", "start", tracker_id])
        assert result.exit_code == 0, result.output
        [entry] = ENTRY_REPO.get_entries_for_tracker(tracker_id)

        result = runner.invoke(app, ["entry", "stop", str(entry["id"])])
        assert result.exit_code == 0, result.output
        assert "Stopped after" in result.output

        result = runner.invoke(app, ["entry", "stop", str(entry["id"])])
        assert result.exit_code == 1

    def test_list_modify_delete(
        self,
        make_tracker: Callable[..., str],
        make_entry: Callable[..., str],
    ) -> None:
        tracker_id = make_tracker("AMOUNT")
        entry_id = make_entry(tracker_id, value=10, note="groceries")

        result = runner.invoke(app, ["entry", "ls", tracker_id])
        assert result.exit_code == 0, result.output
        assert "groceries" in result.output

        result = runner.invoke(app, ["entry", "modify", entry_id, "--value", "15"])
        assert result.exit_code == 0, result.output
        assert TRACKER_REPO.get_tracker(tracker_id)["statistics"]["total_value"] == 15

        result = runner.invoke(app, ["entry", "delete", entry_id])
        assert result.exit_code == 0, result.output
        assert TRACKER_REPO.get_tracker(tracker_id)["statistics"]["total_value"] == 0


class TestConfigCommands:
    def test_show(self) -> None:
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0, result.output
        assert "page_limit" in result.output

    def test_set(self) -> None:
        result = runner.invoke(
            app, ["config", "set", "--page-limit", "25", "--log-level", "debug"]
        )

        assert result.exit_code == 0, result.output
        CONFIGURATION_REPO._config = None
        config = CONFIGURATION_REPO.get_config()
        assert config["page_limit"] == 25
        assert config["log_level"] == "DEBUG"


class TestParseDatetime:
    def test_date_is_local(self) -> None:
        parsed = parse_datetime("2024-05-15")

        assert parsed == pendulum.datetime(2024, 5, 15, tz="local")
        assert parsed is not None and parsed.timezone_name == "UTC"

    def test_keywords(self) -> None:
        assert parse_datetime("today") == pendulum.today("local")
        assert parse_datetime("Y") == pendulum.yesterday("local")
        assert parse_datetime(None) is None

    def test_clock_time(self) -> None:
        parsed = parse_datetime("7:05")

        assert parsed is not None
        assert parsed.in_tz("local").hour == 7
        assert parsed.in_tz("local").minute == 5

    @pytest.mark.parametrize("value", ["25:00", "12:75", "soon", "2024-13-45"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(typer.BadParameter):
            parse_datetime(value)
