"""Pytest fixtures for htracker tests.

Every test runs against its own config file and data directory under
tmp_path, with the repository singletons emptied.
"""

from pathlib import Path
from typing import Any, Callable, Iterator

import pendulum
import pytest
from yaml import dump

from htracker import configuration
from htracker.model.context import RequestContext
from htracker.repository.configuration import CONFIGURATION_REPO, get_default_config
from htracker.repository.entry import ENTRY_REPO
from htracker.repository.tracker import TRACKER_REPO

TEST_USER_ID = "test-user"
OTHER_USER_ID = "other-user"


def _reset_repositories() -> None:
    for repo in (TRACKER_REPO, ENTRY_REPO):
        repo.is_dirty = False
        repo._dirty_ids = set()
        repo._deleted_ids = set()
    TRACKER_REPO._trackers = None
    ENTRY_REPO._entries = None
    CONFIGURATION_REPO._config = None
    CONFIGURATION_REPO.is_dirty = False


@pytest.fixture(autouse=True)
def data_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point configuration and storage at a temporary directory."""
    config_path = tmp_path / "config"
    config_path.mkdir()
    app_config_path = config_path / "config.yaml"

    config = get_default_config()
    config["user_id"] = TEST_USER_ID
    app_config_path.write_text(dump(config))

    data_path = tmp_path / "data"
    (data_path / "trackers").mkdir(parents=True)
    (data_path / "entries").mkdir(parents=True)

    monkeypatch.setattr(configuration, "CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", app_config_path)
    monkeypatch.setattr(configuration, "DATA_PATH", data_path)
    monkeypatch.setattr(configuration, "DATA_TRACKERS_DIR", data_path / "trackers")
    monkeypatch.setattr(configuration, "DATA_ENTRIES_DIR", data_path / "entries")

    _reset_repositories()
    yield data_path
    _reset_repositories()


@pytest.fixture
def context() -> RequestContext:
    return {"user_id": TEST_USER_ID}


@pytest.fixture
def other_context() -> RequestContext:
    return {"user_id": OTHER_USER_ID}


@pytest.fixture
def make_tracker(context: RequestContext) -> Callable[..., str]:
    """Create a tracker through the action layer and return its id."""
    from htracker.action.tracker import create_tracker

    def _make_tracker(
        tracker_type: str = "OCCURRENCE", name: str = "Tracker", **fields: Any
    ) -> str:
        response = create_tracker(
            {"name": name, "type": tracker_type, **fields}, context
        )
        assert response["success"], response.get("error")
        return response["data"]["id"]

    return _make_tracker


@pytest.fixture
def make_entry(context: RequestContext) -> Callable[..., str]:
    """Create an entry through the action layer and return its id."""
    from htracker.action.entry import create_entry

    def _make_entry(tracker_id: str, **fields: Any) -> str:
        response = create_entry({"tracker_id": tracker_id, **fields}, context)
        assert response["success"], response.get("error")
        return response["data"]["id"]

    return _make_entry


@pytest.fixture
def session_start() -> pendulum.DateTime:
    return pendulum.datetime(2024, 5, 15, 9, 0, 0, tz="UTC")
