# SPDX-License-Identifier: MIT

import os
from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "aw-context"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

DATA_PATH_ENV = "AW_CONTEXT_DATA_PATH"
ACTIVITYWATCH_URL_ENV = "AW_CONTEXT_URL"

DEFAULT_DATA_DIR_NAME = ".aw-context"
DEFAULT_ACTIVITYWATCH_URL = "http://localhost:5600"

DAY_FILE_PREFIX = "context-"
DAY_FILE_SUFFIX = ".json"

# Set dynamically by load_data_path_configuration()
DATA_PATH: Optional[Path] = None


class Configuration(TypedDict):
    data_path: Optional[str]
    activitywatch_url: str
    request_timeout: float
    query_timeout: float
    default_window: int
    event_limit: int


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "activitywatch_url": DEFAULT_ACTIVITYWATCH_URL,
        "request_timeout": 30.0,
        "query_timeout": 60.0,
        "default_window": 30,
        "event_limit": 1000,
    }


def default_data_path() -> Path:
    """The dotfile directory under the user's home, e.g. ~/.aw-context."""
    return Path.home() / DEFAULT_DATA_DIR_NAME


def load_data_path_configuration() -> None:
    """
    Resolve DATA_PATH from the environment, then the config file, then the
    default home directory location.

    Path.home() raises RuntimeError when the home directory cannot be
    determined; callers that create the store translate that into a
    StorageError.
    """
    global DATA_PATH

    env_path = os.environ.get(DATA_PATH_ENV)
    if env_path:
        DATA_PATH = Path(env_path).expanduser()
        return

    if APP_CONFIG_PATH.is_file():
        config: Optional[Configuration] = load(
            APP_CONFIG_PATH.read_text(), Loader=Loader
        )
        if config is not None and config.get("data_path") is not None:
            DATA_PATH = Path(str(config["data_path"])).expanduser()
            return

    DATA_PATH = default_data_path()


def get_data_path() -> Path:
    if DATA_PATH is None:
        load_data_path_configuration()
    if DATA_PATH is None:
        raise ValueError()
    return DATA_PATH
