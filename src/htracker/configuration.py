# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "htracker"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_TRACKERS_DIR: Path = DATA_PATH / "trackers"
DATA_ENTRIES_DIR: Path = DATA_PATH / "entries"

DEFAULT_PAGE_LIMIT = 10
DEFAULT_ENTRY_LIMIT = 50
DEFAULT_LOG_LEVEL = "WARNING"


class Configuration(TypedDict):
    data_path: Optional[str]
    user_id: str
    page_limit: int
    entry_limit: int
    log_level: str
    log_file: Optional[str]


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_TRACKERS_DIR, DATA_ENTRIES_DIR

    DATA_PATH = data_path
    DATA_TRACKERS_DIR = DATA_PATH / "trackers"
    DATA_ENTRIES_DIR = DATA_PATH / "entries"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories load their documents.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))
