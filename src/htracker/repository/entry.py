# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper  # noqa: F401
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from htracker import configuration, time
from htracker.model.entity import EntityId, generate_entity_id
from htracker.model.entry import Entry, EntryAggregate


class EntryNotFoundError(Exception):
    """Raised when no entry has the requested id."""

    pass


class EntryRepository:
    def __init__(self) -> None:
        self._entries: Optional[list[Entry]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def entries(self) -> list[Entry]:
        if self._entries is None:
            self.__load_data()
        if self._entries is None:
            raise ValueError()
        return self._entries

    def __load_data(self) -> None:
        self._entries = []
        for file_path in configuration.DATA_ENTRIES_DIR.iterdir():
            if file_path.suffix != ".yaml":
                continue
            raw_entry = load(file_path.read_text(), Loader=Loader)
            if raw_entry is not None:
                self._entries.append(
                    self.__convert_entry_for_deserialization(raw_entry)
                )

    def __save_data(self) -> None:
        # Write dirty documents
        for entry in self.entries:
            if entry["id"] in self._dirty_ids:
                serializable_entry = self.__convert_entry_for_serialization(
                    deepcopy(entry)
                )
                file_path = configuration.DATA_ENTRIES_DIR / f"{entry['id']}.yaml"
                file_path.write_text(dump(serializable_entry, Dumper=Dumper))

        # Remove deleted document files
        for entity_id in self._deleted_ids:
            file_path = configuration.DATA_ENTRIES_DIR / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._entries is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def snapshot(self) -> dict[str, Any]:
        return {
            "entries": deepcopy(self._entries),
            "is_dirty": self.is_dirty,
            "dirty_ids": set(self._dirty_ids),
            "deleted_ids": set(self._deleted_ids),
        }

    def restore(self, snapshot: dict[str, Any]) -> None:
        self._entries = snapshot["entries"]
        self.is_dirty = snapshot["is_dirty"]
        self._dirty_ids = snapshot["dirty_ids"]
        self._deleted_ids = snapshot["deleted_ids"]

    def __convert_entry_for_serialization(self, entry: Entry) -> dict[str, Any]:
        serializable_entry = cast(dict[str, Any], entry)
        serializable_entry["start_time"] = time.datetime_to_iso_str_optional(
            serializable_entry["start_time"]
        )
        serializable_entry["end_time"] = time.datetime_to_iso_str_optional(
            serializable_entry["end_time"]
        )
        serializable_entry["date"] = time.datetime_to_iso_str(
            serializable_entry["date"]
        )
        serializable_entry["created"] = time.datetime_to_iso_str(
            serializable_entry["created"]
        )
        serializable_entry["updated"] = time.datetime_to_iso_str(
            serializable_entry["updated"]
        )
        return serializable_entry

    def __convert_entry_for_deserialization(self, entry: dict[str, Any]) -> Entry:
        deserializable_entry = entry
        deserializable_entry["start_time"] = time.datetime_from_str_optional(
            deserializable_entry["start_time"]
        )
        deserializable_entry["end_time"] = time.datetime_from_str_optional(
            deserializable_entry["end_time"]
        )
        deserializable_entry["date"] = time.datetime_from_str(
            deserializable_entry["date"]
        )
        deserializable_entry["created"] = time.datetime_from_str(
            deserializable_entry["created"]
        )
        deserializable_entry["updated"] = time.datetime_from_str(
            deserializable_entry["updated"]
        )
        return cast(Entry, deserializable_entry)

    def __find(self, id: EntityId) -> Entry:
        for entry in self.entries:
            if entry["id"] == id:
                return entry
        raise EntryNotFoundError(id)

    def save_new_entry(self, entry: Entry) -> EntityId:
        self.is_dirty = True

        entry["id"] = generate_entity_id()

        # Deduplicate tags
        entry["tags"] = list(dict.fromkeys(entry["tags"]))

        self.entries.append(entry)
        self._dirty_ids.add(entry["id"])

        return entry["id"]

    def modify_entry(
        self,
        id: EntityId,
        tracker_id: Optional[EntityId] = None,
        start_time: Optional[pendulum.DateTime] = None,
        end_time: Optional[pendulum.DateTime] = None,
        value: Optional[float] = None,
        date: Optional[pendulum.DateTime] = None,
        note: Optional[str] = None,
        tags: Optional[list[str]] = None,
        remove_start_time: bool = False,
        remove_end_time: bool = False,
        remove_value: bool = False,
        remove_note: bool = False,
    ) -> None:
        entry = self.__find(id)

        self.is_dirty = True
        self._dirty_ids.add(id)

        # Set updated timestamp to current moment
        entry["updated"] = time.now_utc()
        if tracker_id is not None:
            entry["tracker_id"] = tracker_id
        if start_time is not None:
            entry["start_time"] = start_time
        if end_time is not None:
            entry["end_time"] = end_time
        if value is not None:
            entry["value"] = value
        if date is not None:
            entry["date"] = date
        if note is not None:
            entry["note"] = note
        if tags is not None:
            # Deduplicate tags
            entry["tags"] = list(dict.fromkeys(tags))

        if remove_start_time:
            entry["start_time"] = None
        if remove_end_time:
            entry["end_time"] = None
        if remove_value:
            entry["value"] = None
        if remove_note:
            entry["note"] = None

    def delete_entry(self, id: EntityId) -> None:
        entry = self.__find(id)

        self.is_dirty = True
        self.entries.remove(entry)
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

    def delete_entries_for_tracker(self, tracker_id: EntityId) -> int:
        tracker_entry_ids = [
            cast(EntityId, entry["id"])
            for entry in self.entries
            if entry["tracker_id"] == tracker_id
        ]
        for entry_id in tracker_entry_ids:
            self.delete_entry(entry_id)
        return len(tracker_entry_ids)

    def get_entry(self, id: EntityId) -> Entry:
        return deepcopy(self.__find(id))

    def get_entries_for_tracker(self, tracker_id: EntityId) -> list[Entry]:
        """Entries of a tracker, newest date first."""
        tracker_entries = [
            entry for entry in self.entries if entry["tracker_id"] == tracker_id
        ]
        tracker_entries.sort(key=lambda entry: entry["date"], reverse=True)
        return deepcopy(tracker_entries)

    def count_entries_for_tracker(self, tracker_id: EntityId) -> int:
        return sum(1 for entry in self.entries if entry["tracker_id"] == tracker_id)

    def aggregate(
        self,
        tracker_id: EntityId,
        completed_only: bool = False,
        with_value: bool = False,
        since: Optional[pendulum.DateTime] = None,
    ) -> EntryAggregate:
        """
        Count and sum the values of a tracker's entries.

        Args:
            tracker_id: The owning tracker
            completed_only: Only timer sessions with distinct start and end times
            with_value: Only entries that carry a value
            since: Only entries dated at or after this moment

        Returns:
            {"count": int, "sum": float}, sum over non-null values
        """
        count = 0
        total = 0.0
        # Creation order, so the sum matches the incrementally kept total
        for entry in sorted(self.entries, key=lambda entry: entry["created"]):
            if entry["tracker_id"] != tracker_id:
                continue
            if completed_only and (
                entry["start_time"] is None
                or entry["end_time"] is None
                or entry["start_time"] == entry["end_time"]
            ):
                continue
            if with_value and entry["value"] is None:
                continue
            if since is not None and entry["date"] < since:
                continue
            count += 1
            if entry["value"] is not None:
                total += entry["value"]
        return {"count": count, "sum": total}


ENTRY_REPO = EntryRepository()
