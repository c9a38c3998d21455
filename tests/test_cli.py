"""
End-to-end tests of the aw-context command line, run through typer's
CliRunner against a temporary data directory.
"""

import tempfile

import httpx
import pendulum
import pytest
from typer.testing import CliRunner
from yaml import safe_load

from awcontext import configuration
from awcontext.client.activitywatch import ActivityWatchClient
from awcontext.repository.configuration import CONFIGURATION_REPO
from awcontext.terminal import activity
from awcontext.terminal.app import app
from awcontext.version import __version__
from conftest import local

runner = CliRunner()

# Keeps rich tables from folding long values
WIDE = {"COLUMNS": "250"}

EVENTS = [
    {
        "id": 1,
        "timestamp": "2024-06-15T12:05:00+00:00",
        "duration": 1500.0,
        "data": {"app": "Code", "title": "parse.py"},
    },
    {
        "id": 2,
        "timestamp": "2024-06-15T12:00:00+00:00",
        "duration": 300.0,
        "data": {"app": "Firefox", "title": "Docs"},
    },
]


def activitywatch_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/0/buckets":
        return httpx.Response(
            200,
            json={
                "aw-watcher-window_host": {
                    "id": "aw-watcher-window_host",
                    "type": "currentwindow",
                    "created": "2024-01-01T00:00:00+00:00",
                }
            },
        )
    if request.url.path.endswith("/events"):
        return httpx.Response(200, json=EVENTS)
    return httpx.Response(404)


def unreachable_handler(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


@pytest.fixture
def activitywatch(monkeypatch: pytest.MonkeyPatch):
    def _use(handler) -> None:
        monkeypatch.setattr(
            activity,
            "activitywatch_client",
            lambda: ActivityWatchClient(
                "http://aw.test:5600", transport=httpx.MockTransport(handler)
            ),
        )

    return _use


def display_time(moment: pendulum.DateTime) -> str:
    return moment.in_tz("local").format("HH:mm:ss")


class TestAdd:
    def test_add_then_query_today(self, freeze):
        freeze(local(2024, 6, 15, 14, 30))

        added = runner.invoke(app, ["add", "Writing docs", "--tags", "work,doc"])
        assert added.exit_code == 0, added.output
        assert "✓ Context added at" in added.output
        assert "  Tags: work, doc" in added.output

        queried = runner.invoke(app, ["query", "today"])
        assert queried.exit_code == 0, queried.output
        assert "Found 1 context(s):" in queried.output
        assert "Context: Writing docs | Tags: work, doc" in queried.output

    def test_alias(self, freeze):
        freeze(local(2024, 6, 15, 14, 30))

        result = runner.invoke(app, ["a", "Short form", "-t", " work , "])

        assert result.exit_code == 0, result.output
        assert "  Tags: work" in result.output

    def test_without_tags(self, freeze):
        freeze(local(2024, 6, 15, 14, 30))

        result = runner.invoke(app, ["add", "No tags"])

        assert result.exit_code == 0
        assert "Tags:" not in result.output

    def test_unwritable_data_directory_is_reported(self, monkeypatch):
        def refuse(*args, **kwargs):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(tempfile, "mkstemp", refuse)

        result = runner.invoke(app, ["add", "Nowhere to go"])

        assert result.exit_code == 1
        assert "Error: Could not write" in result.output
        assert not isinstance(result.exception, PermissionError)


class TestQuery:
    def test_empty_range(self, freeze):
        freeze(local(2024, 6, 15, 14, 30))

        result = runner.invoke(app, ["query", "yesterday"])

        assert result.exit_code == 0
        assert "No contexts found in the specified date range." in result.output

    def test_invalid_date(self):
        result = runner.invoke(app, ["query", "2024/06/15"])

        assert result.exit_code == 1
        assert "Error: Invalid date format '2024/06/15'" in result.output

    def test_time_range(self, freeze):
        freeze(local(2024, 6, 15, 9, 0))
        runner.invoke(app, ["add", "Morning"])
        freeze(local(2024, 6, 15, 15, 0))
        runner.invoke(app, ["add", "Afternoon"])

        result = runner.invoke(
            app, ["query", "--start", "2024-06-15 12:00", "--end", "2024-06-15 16:00"]
        )

        assert result.exit_code == 0, result.output
        assert "Afternoon" in result.output
        assert "Morning" not in result.output

    def test_table(self, freeze):
        freeze(local(2024, 6, 15, 9, 0))
        runner.invoke(app, ["add", "Morning", "-t", "plan"])

        result = runner.invoke(app, ["query", "--table"], env=WIDE)

        assert result.exit_code == 0, result.output
        assert "1 context(s)" in result.output
        assert "Morning" in result.output

    def test_date_and_start_are_exclusive(self):
        result = runner.invoke(app, ["query", "yesterday", "--start", "09:00"])

        assert result.exit_code == 1
        assert "Error: Cannot combine the date 'yesterday' with --start" in result.output


class TestSearch:
    def test_finds_tagged_entries(self, freeze):
        freeze(local(2024, 6, 14, 9, 0))
        runner.invoke(app, ["add", "Planning", "-t", "work"])
        freeze(local(2024, 6, 15, 9, 0))
        runner.invoke(app, ["add", "Gym", "-t", "health"])

        result = runner.invoke(app, ["search", "work"])

        assert result.exit_code == 0
        assert "Found 1 context(s) with tag 'work':" in result.output
        assert "Planning" in result.output

    def test_no_results(self):
        result = runner.invoke(app, ["search", "nothing"])

        assert result.exit_code == 0
        assert "No contexts found with tag 'nothing'." in result.output


class TestEnrich:
    def test_lines_are_sorted_and_annotated(self, freeze, activitywatch):
        activitywatch(activitywatch_handler)
        freeze(pendulum.datetime(2024, 6, 15, 12, 2, tz="UTC"))
        runner.invoke(app, ["add", "Reading docs"])

        result = runner.invoke(app, ["enrich", "2024-06-15"])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        firefox_time = display_time(pendulum.datetime(2024, 6, 15, 12, 0, tz="UTC"))
        code_time = display_time(pendulum.datetime(2024, 6, 15, 12, 5, tz="UTC"))
        assert lines == [
            f"{firefox_time} | Firefox - Docs | Context: Reading docs",
            f"{code_time} | Code - parse.py | Context: Reading docs",
        ]

    def test_outside_window_has_no_context(self, freeze, activitywatch):
        activitywatch(activitywatch_handler)
        freeze(pendulum.datetime(2024, 6, 15, 10, 0, tz="UTC"))
        runner.invoke(app, ["add", "Too early"])

        result = runner.invoke(app, ["enrich", "2024-06-15", "--window", "5"])

        assert result.exit_code == 0, result.output
        assert "Context:" not in result.output

    def test_date_and_start_are_exclusive(self, activitywatch):
        activitywatch(activitywatch_handler)

        result = runner.invoke(app, ["enrich", "2024-06-15", "--start", "09:00"])

        assert result.exit_code == 1
        assert "Cannot combine the date" in result.output

    def test_remote_failure_exits_with_error(self, activitywatch):
        activitywatch(unreachable_handler)

        result = runner.invoke(app, ["enrich", "2024-06-15"])

        assert result.exit_code == 1
        assert "Error: Could not reach ActivityWatch" in result.output


class TestSummary:
    def test_summary_with_activity(self, freeze, activitywatch):
        activitywatch(activitywatch_handler)
        freeze(pendulum.datetime(2024, 6, 15, 12, 3, tz="UTC"))
        runner.invoke(app, ["add", "Parser work", "-t", "dev"])

        result = runner.invoke(app, ["summary", "--date", "2024-06-15"])

        assert result.exit_code == 0, result.output
        assert "=== Summary for 2024-06-15 ===" in result.output
        assert "Contexts (1):" in result.output
        assert "         Tags: dev" in result.output
        assert "Top Applications:" in result.output
        assert "Code: 25 minutes" in result.output
        assert "Firefox: 5 minutes" in result.output
        assert result.output.index("Code: 25") < result.output.index("Firefox: 5")
        assert "  Contexts: Parser work" in result.output

    def test_summary_survives_unreachable_server(self, activitywatch):
        activitywatch(unreachable_handler)

        result = runner.invoke(app, ["summary", "--date", "2024-06-15"])

        assert result.exit_code == 0, result.output
        assert "No contexts recorded for this day." in result.output
        assert "Error fetching activity data:" in result.output

    def test_invalid_date(self):
        result = runner.invoke(app, ["summary", "--date", "someday"])

        assert result.exit_code == 1
        assert "Error:" in result.output


class TestConfig:
    def test_set_writes_config_file(self):
        result = runner.invoke(
            app, ["config", "set", "--activitywatch-url", "http://aw.test:9999"]
        )

        assert result.exit_code == 0, result.output
        saved = safe_load(configuration.APP_CONFIG_PATH.read_text())
        assert saved["activitywatch_url"] == "http://aw.test:9999"

        CONFIGURATION_REPO.reset()
        assert CONFIGURATION_REPO.get_config()["activitywatch_url"] == "http://aw.test:9999"

    def test_environment_overrides_url(self, monkeypatch):
        monkeypatch.setenv(configuration.ACTIVITYWATCH_URL_ENV, "http://elsewhere:5600")

        assert CONFIGURATION_REPO.get_config()["activitywatch_url"] == "http://elsewhere:5600"

    def test_view(self):
        result = runner.invoke(app, ["config", "view"], env=WIDE)

        assert result.exit_code == 0, result.output
        assert "activitywatch_url" in result.output
        assert "default_window" in result.output


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert f"aw-context {__version__}" in result.output


def test_repeated_invocations_in_one_process(freeze):
    freeze(local(2024, 6, 15, 14, 30))

    for verbose in ([], ["--verbose"], []):
        result = runner.invoke(app, [*verbose, "version"])
        assert result.exit_code == 0, result.exception
        assert f"aw-context {__version__}" in result.output

    result = runner.invoke(app, ["-v", "add", "Third call"])
    assert result.exit_code == 0, result.exception
