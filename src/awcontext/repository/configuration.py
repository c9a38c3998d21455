# SPDX-License-Identifier: MIT

import logging
import os
from copy import deepcopy
from typing import Any, Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from awcontext import configuration

logger = logging.getLogger(__name__)


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
        loaded: Optional[dict[str, Any]] = None
        if configuration.APP_CONFIG_PATH.is_file():
            loaded = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)
        else:
            logger.debug(
                "No config file at %s, using defaults", configuration.APP_CONFIG_PATH
            )

        # Back-fill any field missing from older config files
        config: dict[str, Any] = dict(configuration.get_default_configuration())
        if loaded is not None:
            config.update(loaded)
        self._config = config  # type: ignore[assignment]

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def reset(self) -> None:
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        config = deepcopy(self.config)
        env_url = os.environ.get(configuration.ACTIVITYWATCH_URL_ENV)
        if env_url:
            config["activitywatch_url"] = env_url
        return config

    def update_config(
        self,
        activitywatch_url: Optional[str] = None,
        request_timeout: Optional[float] = None,
        query_timeout: Optional[float] = None,
        default_window: Optional[int] = None,
        event_limit: Optional[int] = None,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
    ) -> None:
        self.is_dirty = True

        if activitywatch_url is not None:
            self.config["activitywatch_url"] = activitywatch_url
        if request_timeout is not None:
            self.config["request_timeout"] = request_timeout
        if query_timeout is not None:
            self.config["query_timeout"] = query_timeout
        if default_window is not None:
            self.config["default_window"] = default_window
        if event_limit is not None:
            self.config["event_limit"] = event_limit
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None


CONFIGURATION_REPO = ConfigurationRepository()
