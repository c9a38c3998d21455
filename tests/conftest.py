"""
Shared pytest fixtures for aw-context tests.

Every test gets its own data and config directories, and can freeze the
clock through awcontext.time.now_local.
"""

from pathlib import Path
from typing import Callable, Iterator

import pendulum
import pytest

from awcontext import configuration, time
from awcontext.repository.configuration import CONFIGURATION_REPO
from awcontext.repository.context import ContextStore


@pytest.fixture(autouse=True)
def isolated_paths(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Path]:
    """Point the data and config locations at a temporary directory."""
    data_path = tmp_path / "data"
    config_path = tmp_path / "config"
    monkeypatch.setenv(configuration.DATA_PATH_ENV, str(data_path))
    monkeypatch.delenv(configuration.ACTIVITYWATCH_URL_ENV, raising=False)
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", None)
    CONFIGURATION_REPO.reset()
    yield data_path
    CONFIGURATION_REPO.reset()


@pytest.fixture
def store(isolated_paths: Path) -> ContextStore:
    return ContextStore(isolated_paths)


@pytest.fixture
def freeze(monkeypatch: pytest.MonkeyPatch) -> Callable[[pendulum.DateTime], None]:
    """Return a function that pins the current local time to a given instant."""

    def _freeze(moment: pendulum.DateTime) -> None:
        monkeypatch.setattr(time, "now_local", lambda: moment.in_tz("local"))

    return _freeze


def local(*args: int) -> pendulum.DateTime:
    """A local-time instant, e.g. local(2024, 6, 15, 12, 30)."""
    return pendulum.datetime(*args, tz="local")
