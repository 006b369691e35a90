# SPDX-License-Identifier: MIT

import logging
from typing import Any

from htracker import configuration
from htracker.action.boundary import action, get_owned_tracker
from htracker.model.context import RequestContext
from htracker.model.entry import Entry, EntryPage
from htracker.model.tracker import PeriodTotals, TrackerStatus, TrackerType
from htracker.query.paginate import paginate
from htracker.repository.entry import ENTRY_REPO, EntryNotFoundError
from htracker.repository.tracker import TRACKER_REPO, TrackerNotFoundError
from htracker.repository.transaction import transaction
from htracker.schema.entry import EntryInput, EntryUpdate
from htracker.service.entry import (
    EntryValidationError,
    append_note,
    apply_timer_duration,
    create_entry_for_tracker,
    find_running_timer_entry,
    validate_entry_for_tracker,
)
from htracker.service.statistics import VALUE_TYPES, is_completed_timer_entry
from htracker.service.tracker import (
    TrackerValidationError,
    get_tracker_period_totals,
    record_entry_created,
    refresh_tracker_statistics,
)
from htracker.time import now_utc, python_to_pendulum_utc_optional, seconds_between

logger = logging.getLogger(__name__)


def _get_owned_entry(id: str, context: RequestContext) -> Entry:
    entry = ENTRY_REPO.get_entry(id)
    try:
        get_owned_tracker(entry["tracker_id"], context)
    except TrackerNotFoundError:
        raise EntryNotFoundError(id) from None
    return entry


def _create_entry(entry_input: EntryInput, context: RequestContext) -> str:
    with transaction():
        tracker = get_owned_tracker(entry_input.tracker_id, context)
        entry = create_entry_for_tracker(tracker, entry_input)
        entry_id = ENTRY_REPO.save_new_entry(entry)
        record_entry_created(entry_input.tracker_id, entry)

    logger.debug("created entry %s for tracker %s", entry_id, entry_input.tracker_id)
    return entry_id


def _store_timer_duration(entry_id: str, tracker_id: str) -> None:
    tracker = TRACKER_REPO.get_tracker(tracker_id)
    entry = ENTRY_REPO.get_entry(entry_id)
    apply_timer_duration(tracker, entry)
    if tracker["type"] == TrackerType.TIMER:
        ENTRY_REPO.modify_entry(
            entry_id, value=entry["value"], remove_value=entry["value"] is None
        )


@action("create entry")
def create_entry(data: dict[str, Any], context: RequestContext) -> dict[str, str]:
    entry_input = EntryInput.model_validate(data)
    return {"id": _create_entry(entry_input, context)}


@action("retrieve entry")
def get_entry(id: str, context: RequestContext) -> Entry:
    return _get_owned_entry(id, context)


@action("update entry")
def update_entry(
    id: str, data: dict[str, Any], context: RequestContext
) -> dict[str, str]:
    """
    Apply a partial update to an entry and rebuild the affected statistics.

    Moving an entry to another tracker rebuilds both trackers.
    """
    entry_update = EntryUpdate.model_validate(data)
    fields = entry_update.model_dump(exclude_unset=True)

    with transaction():
        entry = _get_owned_entry(id, context)
        previous_tracker_id = entry["tracker_id"]
        tracker_id = fields.get("tracker_id") or previous_tracker_id
        tracker = get_owned_tracker(tracker_id, context)

        start_time = (
            python_to_pendulum_utc_optional(fields["start_time"])
            if "start_time" in fields
            else entry["start_time"]
        )
        end_time = (
            python_to_pendulum_utc_optional(fields["end_time"])
            if "end_time" in fields
            else entry["end_time"]
        )
        validate_entry_for_tracker(tracker, start_time, end_time)

        ENTRY_REPO.modify_entry(
            id,
            tracker_id=tracker_id,
            start_time=start_time,
            end_time=end_time,
            value=fields.get("value"),
            date=python_to_pendulum_utc_optional(fields.get("date")),
            note=fields.get("note"),
            tags=fields.get("tags"),
            remove_start_time=start_time is None,
            remove_end_time=end_time is None,
            remove_value="value" in fields and fields["value"] is None,
            remove_note="note" in fields and fields["note"] is None,
        )
        _store_timer_duration(id, tracker_id)

        refresh_tracker_statistics(tracker_id)
        if previous_tracker_id != tracker_id:
            refresh_tracker_statistics(previous_tracker_id)

    logger.debug("updated entry %s", id)
    return {"id": id}


@action("delete entry")
def delete_entry(id: str, context: RequestContext) -> dict[str, str]:
    with transaction():
        entry = _get_owned_entry(id, context)
        ENTRY_REPO.delete_entry(id)
        refresh_tracker_statistics(entry["tracker_id"])

    logger.debug("deleted entry %s", id)
    return {"id": id}


@action("retrieve entries")
def get_entries_by_tracker(
    tracker_id: str,
    context: RequestContext,
    limit: int = configuration.DEFAULT_ENTRY_LIMIT,
    page: int = 1,
) -> EntryPage:
    """Entries of a tracker, newest date first. Pages are 1-based."""
    get_owned_tracker(tracker_id, context)

    if limit <= 0:
        limit = configuration.DEFAULT_ENTRY_LIMIT
    if page <= 0:
        page = 1

    entries = ENTRY_REPO.get_entries_for_tracker(tracker_id)
    return {"entries": paginate(entries, page, limit), "total": len(entries)}


@action("start timer")
def start_timer_entry(
    tracker_id: str, context: RequestContext, note: str = ""
) -> dict[str, str]:
    tracker = get_owned_tracker(tracker_id, context)
    if tracker["type"] != TrackerType.TIMER:
        raise TrackerValidationError(
            f"Tracker '{tracker['name']}' is not a timer tracker."
        )
    if find_running_timer_entry(ENTRY_REPO.get_entries_for_tracker(tracker_id)):
        raise TrackerValidationError(
            f"A timer is already running for tracker '{tracker['name']}'."
        )

    now = now_utc()
    entry_input = EntryInput(
        tracker_id=tracker_id,
        start_time=now,
        date=now,
        note=note or None,
    )

    with transaction():
        entry_id = _create_entry(entry_input, context)
        TRACKER_REPO.modify_tracker(tracker_id, status=TrackerStatus.ACTIVE)

    return {"id": entry_id}


@action("stop timer")
def stop_timer_entry(
    entry_id: str, context: RequestContext, additional_note: str = ""
) -> dict[str, Any]:
    with transaction():
        entry = _get_owned_entry(entry_id, context)
        if entry["start_time"] is None or is_completed_timer_entry(entry):
            raise EntryValidationError("This timer entry is not running.")

        end_time = now_utc()
        ENTRY_REPO.modify_entry(
            entry_id,
            end_time=end_time,
            note=append_note(entry["note"], additional_note),
        )
        _store_timer_duration(entry_id, entry["tracker_id"])
        TRACKER_REPO.modify_tracker(entry["tracker_id"], status=TrackerStatus.INACTIVE)
        refresh_tracker_statistics(entry["tracker_id"])

    duration = seconds_between(entry["start_time"], end_time)
    logger.debug("stopped timer entry %s after %d seconds", entry_id, duration)
    return {"id": entry_id, "duration": duration}


@action("add counter entry")
def add_counter_entry(
    tracker_id: str,
    context: RequestContext,
    value: float = 1,
    note: str = "",
) -> dict[str, str]:
    tracker = get_owned_tracker(tracker_id, context)
    if tracker["type"] not in VALUE_TYPES:
        raise TrackerValidationError(
            f"Tracker '{tracker['name']}' is not a counter or amount tracker."
        )

    entry_input = EntryInput(tracker_id=tracker_id, value=value, note=note or None)
    return {"id": _create_entry(entry_input, context)}


@action("retrieve tracker stats")
def get_tracker_stats(tracker_id: str, context: RequestContext) -> PeriodTotals:
    tracker = get_owned_tracker(tracker_id, context)
    return get_tracker_period_totals(tracker)
