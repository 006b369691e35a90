# SPDX-License-Identifier: MIT

from htracker.model.entity import UNSET_ENTITY_ID, EntityType
from htracker.model.tracker import Tracker, TrackerStatus, TrackerType
from htracker.template.statistics import get_statistics_template
from htracker.time import now_utc


def get_tracker_template() -> Tracker:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.TRACKER,
        "user_id": UNSET_ENTITY_ID,  # Must be set
        "name": "",
        "description": None,
        "type": TrackerType.OCCURRENCE,
        "status": TrackerStatus.INACTIVE,
        "tags": [],
        "color": None,
        "icon": None,
        "statistics": get_statistics_template(),
        "created": now,
        "updated": now,
    }
