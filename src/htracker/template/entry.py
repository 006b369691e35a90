# SPDX-License-Identifier: MIT

from htracker.model.entity import UNSET_ENTITY_ID, EntityType
from htracker.model.entry import Entry
from htracker.time import now_utc


def get_entry_template() -> Entry:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.ENTRY,
        "tracker_id": UNSET_ENTITY_ID,  # Must be set
        "start_time": None,
        "end_time": None,
        "value": None,
        "date": now,
        "note": None,
        "tags": [],
        "created": now,
        "updated": now,
    }
