# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from htracker.model.entry import Entry
from htracker.model.tracker import Tracker, TrackerType
from htracker.schema.entry import EntryInput
from htracker.service.statistics import entry_duration_seconds, is_completed_timer_entry
from htracker.template.entry import get_entry_template
from htracker.time import python_to_pendulum_utc, python_to_pendulum_utc_optional


class EntryValidationError(Exception):
    """Raised when an entry does not fit its tracker."""

    pass


def validate_entry_for_tracker(
    tracker: Tracker,
    start_time: Optional[pendulum.DateTime],
    end_time: Optional[pendulum.DateTime],
) -> bool:
    """
    Check the session fields of an entry against its tracker's type.

    - start_time/end_time are only valid on timer trackers
    - end_time requires start_time

    Returns True if valid, raises EntryValidationError if not.
    """
    has_session = start_time is not None or end_time is not None

    if has_session and tracker["type"] != TrackerType.TIMER:
        raise EntryValidationError(
            f"Start and end times are only allowed on timer trackers. "
            f"Tracker '{tracker['name']}' is a {tracker['type'].lower()} tracker."
        )
    if end_time is not None and start_time is None:
        raise EntryValidationError("An end time requires a start time.")
    if start_time is not None and end_time is not None and end_time < start_time:
        raise EntryValidationError("End time cannot be before start time.")

    return True


def apply_timer_duration(tracker: Tracker, entry: Entry) -> None:
    """
    Store the session duration of a timer entry in its value.

    Completed sessions carry their duration in seconds, running sessions
    carry no value. Entries of other tracker types are left unchanged.
    """
    if tracker["type"] != TrackerType.TIMER:
        return

    if is_completed_timer_entry(entry):
        entry["value"] = entry_duration_seconds(entry)
    else:
        entry["value"] = None


def create_entry_for_tracker(tracker: Tracker, entry_input: EntryInput) -> Entry:
    """Create an entry from validated input."""
    if tracker["id"] is None:
        raise ValueError("Tracker must have an ID")

    start_time = python_to_pendulum_utc_optional(entry_input.start_time)
    end_time = python_to_pendulum_utc_optional(entry_input.end_time)
    validate_entry_for_tracker(tracker, start_time, end_time)

    entry = get_entry_template()
    entry["tracker_id"] = tracker["id"]
    entry["start_time"] = start_time
    entry["end_time"] = end_time
    entry["value"] = entry_input.value
    entry["date"] = python_to_pendulum_utc(entry_input.date)
    entry["note"] = entry_input.note
    entry["tags"] = list(entry_input.tags)

    apply_timer_duration(tracker, entry)

    return entry


def find_running_timer_entry(entries: list[Entry]) -> Optional[Entry]:
    """Return the session of a timer that has been started but not stopped."""
    for entry in entries:
        if entry["start_time"] is not None and not is_completed_timer_entry(entry):
            return entry
    return None


def append_note(note: Optional[str], additional_note: str) -> Optional[str]:
    if not additional_note:
        return note
    return f"{note or ''} {additional_note}".strip()
