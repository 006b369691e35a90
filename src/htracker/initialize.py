# SPDX-License-Identifier: MIT

import logging
from pathlib import Path

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from htracker import configuration
from htracker.repository.configuration import CONFIGURATION_REPO, get_default_config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_files()
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_data_dirs()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(config["log_level"], config["log_file"])
    CONFIGURATION_REPO.flush()


def configure_logging(log_level: str, log_file: str | None = None) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config = get_default_config()
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))


def __ensure_data_dirs() -> None:
    # One directory per collection, one file per document
    configuration.DATA_TRACKERS_DIR.mkdir(parents=True, exist_ok=True)
    configuration.DATA_ENTRIES_DIR.mkdir(parents=True, exist_ok=True)
