# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from awcontext.logging_config import configure_logging
from awcontext.terminal import configuration
from awcontext.terminal.activity import enrich, summary
from awcontext.terminal.context import add, query, search
from awcontext.terminal.custom_typer import AliasedTyperGroup
from awcontext.terminal.version import version

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="aw-context - Add context annotations to ActivityWatch data",
    no_args_is_help=True,
)
app.command(name="add, a")(add)
app.command(name="query, q")(query)
app.command(name="search, s")(search)
app.command(name="summary, su")(summary)
app.command(name="enrich, e")(enrich)
app.add_typer(configuration.app, name="config, c")
app.command(name="version, ve")(version)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log debug output to stderr",
        ),
    ] = False,
) -> None:
    """
    aw-context - Add context annotations to ActivityWatch data

    Global options that apply to all commands.
    """
    configure_logging(verbose)


def run() -> None:
    app()
