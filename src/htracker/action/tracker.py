# SPDX-License-Identifier: MIT

import logging
from typing import Any, Optional, cast

from htracker import configuration
from htracker.action.boundary import action, get_owned_tracker
from htracker.model.context import RequestContext
from htracker.model.filter import Filters, FilterType
from htracker.model.tracker import Tracker, TrackerPage, TrackerStatus
from htracker.query.filter import generate_filter
from htracker.query.paginate import paginate, total_pages
from htracker.query.sort import sort_items
from htracker.repository.entry import ENTRY_REPO
from htracker.repository.tracker import TRACKER_REPO
from htracker.repository.transaction import transaction
from htracker.schema.tracker import TrackerFilters, TrackerInput, TrackerUpdate
from htracker.service.tracker import TrackerValidationError, refresh_tracker_statistics
from htracker.template.tracker import get_tracker_template

logger = logging.getLogger(__name__)

RECENT_ENTRIES = 5

SORT_INSTRUCTIONS = {
    "name": ["name"],
    "created": ["desc created"],
    "recent": ["desc updated"],
}


@action("create tracker")
def create_tracker(data: dict[str, Any], context: RequestContext) -> dict[str, str]:
    tracker_input = TrackerInput.model_validate(data)

    tracker = get_tracker_template()
    tracker["user_id"] = context["user_id"]
    tracker["name"] = tracker_input.name
    tracker["description"] = tracker_input.description
    tracker["type"] = tracker_input.type
    tracker["status"] = tracker_input.status or TrackerStatus.INACTIVE
    tracker["tags"] = tracker_input.tags
    tracker["color"] = tracker_input.color
    tracker["icon"] = tracker_input.icon

    with transaction():
        id = TRACKER_REPO.save_new_tracker(tracker)

    logger.debug("created %s tracker %s", tracker["type"], id)
    return {"id": id}


@action("retrieve tracker")
def get_tracker(id: str, context: RequestContext) -> dict[str, Any]:
    tracker = get_owned_tracker(id, context)
    recent_entries = ENTRY_REPO.get_entries_for_tracker(id)[:RECENT_ENTRIES]
    return {**tracker, "recent_entries": recent_entries}


@action("update tracker")
def update_tracker(
    id: str, data: dict[str, Any], context: RequestContext
) -> dict[str, str]:
    tracker_update = TrackerUpdate.model_validate(data)
    fields = tracker_update.model_dump(exclude_unset=True)

    # An explicit null clears the tag list
    tags: Optional[list[str]] = None
    if "tags" in fields:
        tags = fields["tags"] if fields["tags"] is not None else []

    with transaction():
        tracker = get_owned_tracker(id, context)

        if fields.get("type") is not None and fields["type"] != tracker["type"]:
            raise TrackerValidationError(
                "Tracker type cannot be changed after creation."
            )

        TRACKER_REPO.modify_tracker(
            id,
            name=fields.get("name"),
            description=fields.get("description"),
            status=fields.get("status"),
            tags=tags,
            color=fields.get("color"),
            icon=fields.get("icon"),
            remove_description="description" in fields
            and fields["description"] is None,
            remove_color="color" in fields and fields["color"] is None,
            remove_icon="icon" in fields and fields["icon"] is None,
        )

    logger.debug("updated tracker %s", id)
    return {"id": id}


@action("delete tracker")
def delete_tracker(id: str, context: RequestContext) -> dict[str, str]:
    with transaction():
        get_owned_tracker(id, context)
        deleted_entries = ENTRY_REPO.delete_entries_for_tracker(id)
        TRACKER_REPO.delete_tracker(id)

    logger.debug("deleted tracker %s with %d entries", id, deleted_entries)
    return {"id": id}


def _tracker_filter(tracker_filters: TrackerFilters) -> Optional[Filters]:
    predicates: list[Filters] = []

    if tracker_filters.status is not None:
        predicates.append(
            {
                "filter_type": FilterType.STR,
                "property": "status",
                "filter": f"equals {tracker_filters.status}",
            }
        )
    if tracker_filters.type is not None:
        predicates.append(
            {
                "filter_type": FilterType.STR,
                "property": "type",
                "filter": f"equals {tracker_filters.type}",
            }
        )
    if tracker_filters.search:
        search = tracker_filters.search
        predicates.append(
            {
                "filter_type": FilterType.OR,
                "predicates": [
                    {
                        "filter_type": FilterType.STR,
                        "property": "name",
                        "filter": f"contains_no_case {search}",
                    },
                    {
                        "filter_type": FilterType.STR,
                        "property": "description",
                        "filter": f"contains_no_case {search}",
                    },
                    {"filter_type": FilterType.TAG, "filter": search},
                ],
            }
        )

    if len(predicates) == 0:
        return None
    return {"filter_type": FilterType.AND, "predicates": predicates}


@action("retrieve trackers")
def get_trackers(
    filters: Optional[dict[str, Any]], context: RequestContext
) -> TrackerPage:
    """
    List the caller's trackers.

    Filters: status, type, search (name, description or tag), sort ("name",
    "created" or "recent"), page and limit. Pages are 1-based.
    """
    tracker_filters = TrackerFilters.model_validate(filters or {})

    items = cast(
        list[dict[str, Any]], TRACKER_REPO.get_trackers_for_user(context["user_id"])
    )

    filter = _tracker_filter(tracker_filters)
    if filter is not None:
        items = generate_filter(filter).filter(items)

    items = sort_items(items, SORT_INSTRUCTIONS[tracker_filters.sort or "recent"])

    page = (
        tracker_filters.page
        if tracker_filters.page is not None and tracker_filters.page > 0
        else 1
    )
    limit = (
        tracker_filters.limit
        if tracker_filters.limit is not None and tracker_filters.limit > 0
        else configuration.DEFAULT_PAGE_LIMIT
    )

    trackers = []
    for item in paginate(items, page, limit):
        tracker = cast(Tracker, item)
        trackers.append(
            {
                **tracker,
                "entries_count": ENTRY_REPO.count_entries_for_tracker(
                    cast(str, tracker["id"])
                ),
            }
        )

    return {
        "trackers": trackers,  # type: ignore[typeddict-item]
        "total": len(items),
        "total_pages": total_pages(len(items), limit),
        "page": page,
    }


@action("rebuild tracker statistics")
def rebuild_tracker_statistics(id: str, context: RequestContext) -> dict[str, Any]:
    with transaction():
        get_owned_tracker(id, context)
        statistics = refresh_tracker_statistics(id)

    logger.debug("rebuilt statistics of tracker %s", id)
    return dict(statistics)


@action("delete user data")
def delete_user_data(context: RequestContext) -> dict[str, int]:
    with transaction():
        trackers = TRACKER_REPO.get_trackers_for_user(context["user_id"])
        for tracker in trackers:
            tracker_id = cast(str, tracker["id"])
            ENTRY_REPO.delete_entries_for_tracker(tracker_id)
            TRACKER_REPO.delete_tracker(tracker_id)

    logger.debug("deleted %d trackers of user %s", len(trackers), context["user_id"])
    return {"deleted_trackers": len(trackers)}
