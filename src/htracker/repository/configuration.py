# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from htracker import configuration
from htracker.model.entity import generate_entity_id


def get_default_config() -> configuration.Configuration:
    return {
        "data_path": None,
        "user_id": generate_entity_id(),
        "page_limit": configuration.DEFAULT_PAGE_LIMIT,
        "entry_limit": configuration.DEFAULT_ENTRY_LIMIT,
        "log_level": configuration.DEFAULT_LOG_LEVEL,
        "log_file": None,
    }


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        if self._config is None:
            raise ValueError()

        # Fill in any keys missing from older config files
        for key, value in get_default_config().items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]
                self.is_dirty = True

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        page_limit: Optional[int] = None,
        entry_limit: Optional[int] = None,
        log_level: Optional[str] = None,
        log_file: Optional[str] = None,
        remove_log_file: bool = False,
    ) -> None:
        self.is_dirty = True

        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if page_limit is not None:
            self.config["page_limit"] = page_limit
        if entry_limit is not None:
            self.config["entry_limit"] = entry_limit
        if log_level is not None:
            self.config["log_level"] = log_level.upper()
        if log_file is not None:
            self.config["log_file"] = log_file
        if remove_log_file:
            self.config["log_file"] = None


CONFIGURATION_REPO = ConfigurationRepository()
