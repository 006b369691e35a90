# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper  # noqa: F401
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from htracker import configuration, time
from htracker.model.entity import EntityId, generate_entity_id
from htracker.model.tracker import Statistics, Tracker, TrackerStatus, TrackerType


class TrackerNotFoundError(Exception):
    """Raised when no tracker has the requested id."""

    pass


class TrackerRepository:
    def __init__(self) -> None:
        self._trackers: Optional[list[Tracker]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def trackers(self) -> list[Tracker]:
        if self._trackers is None:
            self.__load_data()
        if self._trackers is None:
            raise ValueError()
        return self._trackers

    def __load_data(self) -> None:
        self._trackers = []
        for file_path in configuration.DATA_TRACKERS_DIR.iterdir():
            if file_path.suffix != ".yaml":
                continue
            raw_tracker = load(file_path.read_text(), Loader=Loader)
            if raw_tracker is not None:
                self._trackers.append(
                    self.__convert_tracker_for_deserialization(raw_tracker)
                )

    def __save_data(self) -> None:
        # Write dirty documents
        for tracker in self.trackers:
            if tracker["id"] in self._dirty_ids:
                serializable_tracker = self.__convert_tracker_for_serialization(
                    deepcopy(tracker)
                )
                file_path = configuration.DATA_TRACKERS_DIR / f"{tracker['id']}.yaml"
                file_path.write_text(dump(serializable_tracker, Dumper=Dumper))

        # Remove deleted document files
        for entity_id in self._deleted_ids:
            file_path = configuration.DATA_TRACKERS_DIR / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._trackers is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def snapshot(self) -> dict[str, Any]:
        return {
            "trackers": deepcopy(self._trackers),
            "is_dirty": self.is_dirty,
            "dirty_ids": set(self._dirty_ids),
            "deleted_ids": set(self._deleted_ids),
        }

    def restore(self, snapshot: dict[str, Any]) -> None:
        self._trackers = snapshot["trackers"]
        self.is_dirty = snapshot["is_dirty"]
        self._dirty_ids = snapshot["dirty_ids"]
        self._deleted_ids = snapshot["deleted_ids"]

    def __convert_tracker_for_serialization(self, tracker: Tracker) -> dict[str, Any]:
        serializable_tracker = cast(dict[str, Any], tracker)
        serializable_tracker["type"] = str(serializable_tracker["type"])
        serializable_tracker["status"] = str(serializable_tracker["status"])
        serializable_tracker["created"] = time.datetime_to_iso_str(
            serializable_tracker["created"]
        )
        serializable_tracker["updated"] = time.datetime_to_iso_str(
            serializable_tracker["updated"]
        )
        return serializable_tracker

    def __convert_tracker_for_deserialization(self, tracker: dict[str, Any]) -> Tracker:
        deserializable_tracker = tracker
        deserializable_tracker["type"] = TrackerType(deserializable_tracker["type"])
        deserializable_tracker["status"] = TrackerStatus(
            deserializable_tracker["status"]
        )
        deserializable_tracker["created"] = time.datetime_from_str(
            deserializable_tracker["created"]
        )
        deserializable_tracker["updated"] = time.datetime_from_str(
            deserializable_tracker["updated"]
        )
        return cast(Tracker, deserializable_tracker)

    def __find(self, id: EntityId) -> Tracker:
        for tracker in self.trackers:
            if tracker["id"] == id:
                return tracker
        raise TrackerNotFoundError(id)

    def save_new_tracker(self, tracker: Tracker) -> EntityId:
        self.is_dirty = True

        tracker["id"] = generate_entity_id()

        # Deduplicate tags
        tracker["tags"] = list(dict.fromkeys(tracker["tags"]))

        self.trackers.append(tracker)
        self._dirty_ids.add(tracker["id"])

        return tracker["id"]

    def modify_tracker(
        self,
        id: EntityId,
        name: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[TrackerStatus] = None,
        tags: Optional[list[str]] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
        remove_description: bool = False,
        remove_color: bool = False,
        remove_icon: bool = False,
    ) -> None:
        tracker = self.__find(id)

        self.is_dirty = True
        self._dirty_ids.add(id)

        # Set updated timestamp to current moment
        tracker["updated"] = time.now_utc()
        if name is not None:
            tracker["name"] = name
        if description is not None:
            tracker["description"] = description
        if status is not None:
            tracker["status"] = status
        if tags is not None:
            # Deduplicate tags
            tracker["tags"] = list(dict.fromkeys(tags))
        if color is not None:
            tracker["color"] = color
        if icon is not None:
            tracker["icon"] = icon

        if remove_description:
            tracker["description"] = None
        if remove_color:
            tracker["color"] = None
        if remove_icon:
            tracker["icon"] = None

    def update_statistics(self, id: EntityId, statistics: Statistics) -> None:
        tracker = self.__find(id)

        self.is_dirty = True
        self._dirty_ids.add(id)

        tracker["statistics"] = deepcopy(statistics)
        tracker["updated"] = time.now_utc()

    def delete_tracker(self, id: EntityId) -> None:
        tracker = self.__find(id)

        self.is_dirty = True
        self.trackers.remove(tracker)
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

    def get_trackers_for_user(self, user_id: EntityId) -> list[Tracker]:
        return deepcopy(
            [tracker for tracker in self.trackers if tracker["user_id"] == user_id]
        )

    def get_tracker(self, id: EntityId) -> Tracker:
        return deepcopy(self.__find(id))


TRACKER_REPO = TrackerRepository()
