"""Tests for tracker actions."""

from typing import Callable

from htracker.action.tracker import (
    create_tracker,
    delete_tracker,
    delete_user_data,
    get_tracker,
    get_trackers,
    rebuild_tracker_statistics,
    update_tracker,
)
from htracker.model.context import RequestContext
from htracker.model.tracker import TrackerStatus, TrackerType
from htracker.repository.entry import ENTRY_REPO
from htracker.repository.tracker import TRACKER_REPO


class TestCreateTracker:
    def test_defaults(self, context: RequestContext) -> None:
        response = create_tracker({"name": "Reading", "type": "TIMER"}, context)

        assert response["success"]
        tracker = TRACKER_REPO.get_tracker(response["data"]["id"])
        assert tracker["user_id"] == context["user_id"]
        assert tracker["type"] == TrackerType.TIMER
        assert tracker["status"] == TrackerStatus.INACTIVE
        assert tracker["statistics"] == {
            "total_entries": 0,
            "total_time": 0,
            "total_value": 0.0,
            "total_custom": None,
        }

    def test_invalid_color(self, context: RequestContext) -> None:
        response = create_tracker(
            {"name": "Reading", "type": "TIMER", "color": "blue"}, context
        )

        assert response == {
            "success": False,
            "error": "Validation failed: color: Invalid color format",
        }
        assert TRACKER_REPO.get_trackers_for_user(context["user_id"]) == []

    def test_name_is_required(self, context: RequestContext) -> None:
        response = create_tracker({"name": "", "type": "TIMER"}, context)

        assert not response["success"]
        assert response["error"].startswith("Validation failed: name")

    def test_unknown_type(self, context: RequestContext) -> None:
        response = create_tracker({"name": "Reading", "type": "MOOD"}, context)

        assert not response["success"]
        assert "type" in response["error"]

    def test_short_color_is_accepted(self, context: RequestContext) -> None:
        response = create_tracker(
            {"name": "Water", "type": "COUNTER", "color": "#0af", "tags": ["a", "a"]},
            context,
        )

        tracker = TRACKER_REPO.get_tracker(response["data"]["id"])
        assert tracker["color"] == "#0af"
        assert tracker["tags"] == ["a"]


class TestGetTracker:
    def test_includes_recent_entries(
        self,
        make_tracker: Callable[..., str],
        make_entry: Callable[..., str],
        context: RequestContext,
    ) -> None:
        tracker_id = make_tracker("OCCURRENCE")
        for _ in range(7):
            make_entry(tracker_id)

        response = get_tracker(tracker_id, context)

        assert response["success"]
        assert response["data"]["id"] == tracker_id
        assert len(response["data"]["recent_entries"]) == 5

    def test_other_user(
        self, make_tracker: Callable[..., str], other_context: RequestContext
    ) -> None:
        tracker_id = make_tracker("OCCURRENCE")

        assert get_tracker(tracker_id, other_context) == {
            "success": False,
            "error": "Tracker not found",
        }


class TestUpdateTracker:
    def test_partial_update(
        self, make_tracker: Callable[..., str], context: RequestContext
    ) -> None:
        tracker_id = make_tracker(
            "AMOUNT", name="Coffee", description="cups", color="#fff"
        )

        response = update_tracker(
            tracker_id, {"name": "Espresso", "color": None}, context
        )

        assert response["success"]
        tracker = TRACKER_REPO.get_tracker(tracker_id)
        assert tracker["name"] == "Espresso"
        assert tracker["description"] == "cups"
        assert tracker["color"] is None

    def test_type_cannot_change(
        self, make_tracker: Callable[..., str], context: RequestContext
    ) -> None:
        tracker_id = make_tracker("AMOUNT")

        response = update_tracker(tracker_id, {"type": "TIMER"}, context)

        assert response == {
            "success": False,
            "error": "Tracker type cannot be changed after creation.",
        }
        assert TRACKER_REPO.get_tracker(tracker_id)["type"] == TrackerType.AMOUNT

    def test_null_tags_clears_them(
        self, make_tracker: Callable[..., str], context: RequestContext
    ) -> None:
        tracker_id = make_tracker("AMOUNT", tags=["health"])

        update_tracker(tracker_id, {"tags": None}, context)

        assert TRACKER_REPO.get_tracker(tracker_id)["tags"] == []

    def test_archive(
        self, make_tracker: Callable[..., str], context: RequestContext
    ) -> None:
        tracker_id = make_tracker("AMOUNT")

        update_tracker(tracker_id, {"status": "ARCHIVED"}, context)

        assert TRACKER_REPO.get_tracker(tracker_id)["status"] == TrackerStatus.ARCHIVED


class TestGetTrackers:
    def test_filters_by_status_and_type(
        self, make_tracker: Callable[..., str], context: RequestContext
    ) -> None:
        make_tracker("TIMER", name="Work")
        make_tracker("TIMER", name="Study", status="ARCHIVED")
        make_tracker("COUNTER", name="Water")

        response = get_trackers({"type": "TIMER", "status": "INACTIVE"}, context)

        assert response["success"]
        assert [t["name"] for t in response["data"]["trackers"]] == ["Work"]
        assert response["data"]["total"] == 1

    def test_search_matches_name_description_or_tag(
        self, make_tracker: Callable[..., str], context: RequestContext
    ) -> None:
        make_tracker(name="Morning run")
        make_tracker(name="Stretch", description="after the RUN")
        make_tracker(name="Swim", tags=["run"])
        make_tracker(name="Read")

        response = get_trackers({"search": "run", "sort": "name"}, context)

        assert [t["name"] for t in response["data"]["trackers"]] == [
            "Morning run",
            "Stretch",
            "Swim",
        ]

    def test_pagination_and_counts(
        self,
        make_tracker: Callable[..., str],
        make_entry: Callable[..., str],
        context: RequestContext,
    ) -> None:
        ids = [make_tracker(name=f"Tracker {index}") for index in range(5)]
        make_entry(ids[0])
        make_entry(ids[0])

        response = get_trackers({"sort": "name", "page": 1, "limit": 2}, context)

        data = response["data"]
        assert data["total"] == 5
        assert data["total_pages"] == 3
        assert data["page"] == 1
        assert [t["name"] for t in data["trackers"]] == ["Tracker 0", "Tracker 1"]
        assert data["trackers"][0]["entries_count"] == 2

    def test_non_positive_page_falls_back(
        self, make_tracker: Callable[..., str], context: RequestContext
    ) -> None:
        make_tracker()

        response = get_trackers({"page": 0, "limit": -1}, context)

        assert response["data"]["page"] == 1
        assert response["data"]["total_pages"] == 1

    def test_invalid_sort(self, context: RequestContext) -> None:
        response = get_trackers({"sort": "color"}, context)

        assert not response["success"]
        assert response["error"].startswith("Validation failed: sort")

    def test_only_own_trackers(
        self,
        make_tracker: Callable[..., str],
        other_context: RequestContext,
    ) -> None:
        make_tracker()

        response = get_trackers(None, other_context)

        assert response["data"]["total"] == 0
        assert response["data"]["trackers"] == []


class TestDeleteTracker:
    def test_cascades_to_entries(
        self,
        make_tracker: Callable[..., str],
        make_entry: Callable[..., str],
        context: RequestContext,
        data_path,
    ) -> None:
        tracker_id = make_tracker()
        make_entry(tracker_id)

        response = delete_tracker(tracker_id, context)

        assert response == {"success": True, "data": {"id": tracker_id}}
        assert list((data_path / "trackers").iterdir()) == []
        assert list((data_path / "entries").iterdir()) == []

    def test_other_user_cannot_delete(
        self,
        make_tracker: Callable[..., str],
        other_context: RequestContext,
    ) -> None:
        tracker_id = make_tracker()

        response = delete_tracker(tracker_id, other_context)

        assert response == {"success": False, "error": "Tracker not found"}
        assert TRACKER_REPO.get_tracker(tracker_id)["id"] == tracker_id


class TestRepairActions:
    def test_rebuild_statistics(
        self,
        make_tracker: Callable[..., str],
        make_entry: Callable[..., str],
        context: RequestContext,
    ) -> None:
        tracker_id = make_tracker("COUNTER")
        make_entry(tracker_id, value=2)
        make_entry(tracker_id, value=3)
        drifted = TRACKER_REPO.get_tracker(tracker_id)["statistics"]
        drifted["total_entries"] = 40
        drifted["total_value"] = -7
        TRACKER_REPO.update_statistics(tracker_id, drifted)

        response = rebuild_tracker_statistics(tracker_id, context)

        assert response["success"]
        assert response["data"]["total_entries"] == 2
        assert response["data"]["total_value"] == 5
        assert TRACKER_REPO.get_tracker(tracker_id)["statistics"] == response["data"]

    def test_delete_user_data(
        self,
        make_tracker: Callable[..., str],
        make_entry: Callable[..., str],
        context: RequestContext,
        other_context: RequestContext,
    ) -> None:
        first_id = make_tracker()
        second_id = make_tracker()
        make_entry(first_id)
        make_entry(second_id)
        create_tracker({"name": "Theirs", "type": "TIMER"}, other_context)

        response = delete_user_data(context)

        assert response == {"success": True, "data": {"deleted_trackers": 2}}
        assert ENTRY_REPO.count_entries_for_tracker(first_id) == 0
        assert TRACKER_REPO.get_trackers_for_user(context["user_id"]) == []
        assert [
            t["name"] for t in TRACKER_REPO.get_trackers_for_user(other_context["user_id"])
        ] == ["Theirs"]
