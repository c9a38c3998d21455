# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from awcontext import configuration
from awcontext.repository.configuration import CONFIGURATION_REPO
from awcontext.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("config_path", str(configuration.APP_CONFIG_PATH))
    table.add_row("data_path", str(configuration.get_data_path()))
    table.add_row("activitywatch_url", config["activitywatch_url"])
    table.add_row("request_timeout", f"{config['request_timeout']}s")
    table.add_row("query_timeout", f"{config['query_timeout']}s")
    table.add_row("default_window", f"{config['default_window']} minutes")
    table.add_row("event_limit", str(config["event_limit"]))

    console.print(table)


@app.command("set, s")
def set(
    activitywatch_url: Annotated[
        Optional[str],
        typer.Option("--activitywatch-url", "-u", help="ActivityWatch server URL"),
    ] = None,
    request_timeout: Annotated[
        Optional[float],
        typer.Option("--request-timeout", min=0.1, help="Request timeout in seconds"),
    ] = None,
    query_timeout: Annotated[
        Optional[float],
        typer.Option("--query-timeout", min=0.1, help="Query timeout in seconds"),
    ] = None,
    default_window: Annotated[
        Optional[int],
        typer.Option("--default-window", "-w", min=0, help="Context window in minutes"),
    ] = None,
    event_limit: Annotated[
        Optional[int],
        typer.Option("--event-limit", min=1, help="Maximum events fetched per request"),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory holding the day files"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option("--remove-data-path", help="Use the default ~/.aw-context"),
    ] = False,
) -> None:
    """Update configuration settings."""
    CONFIGURATION_REPO.update_config(
        activitywatch_url=activitywatch_url,
        request_timeout=request_timeout,
        query_timeout=query_timeout,
        default_window=default_window,
        event_limit=event_limit,
        data_path=data_path,
        remove_data_path=remove_data_path,
    )
    CONFIGURATION_REPO.flush()
    configuration.load_data_path_configuration()
    view()
