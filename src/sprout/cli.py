"""Typer entry point for the ``sprout`` command."""

from enum import Enum
from typing import Annotated, Optional

import typer

from . import __version__
from . import log as sprout_log
from .commands.create import create_project as create_cmd
from .models import InvocationArgs


class LogLevelName(str, Enum):
    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    help="Create a new React app with no build configuration.",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.command()
def create(
    project_directory: Annotated[
        Optional[str],
        typer.Argument(
            metavar="<project-directory>",
            help="Directory to create, or '.' for the current directory.",
            show_default=False,
        ),
    ] = None,
    use_npm: Annotated[
        bool, typer.Option("--use-npm", help="Install dependencies with npm instead of yarn.")
    ] = False,
    template: Annotated[
        Optional[str],
        typer.Option("--template", metavar="<name>", help="Starter template to use."),
    ] = None,
    scripts_version: Annotated[
        Optional[str],
        typer.Option(
            "--scripts-version",
            metavar="<package>",
            help="Use a non-standard scripts package.",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Print additional package-manager logs.")
    ] = False,
    log_level: Annotated[
        Optional[LogLevelName],
        typer.Option("--log-level", case_sensitive=False, help="Terminal log level."),
    ] = None,
    no_color: Annotated[
        bool, typer.Option("--no-color", help="Disable colorized output.")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """Create a project in <project-directory>."""
    if log_level is not None:
        sprout_log.set_level(log_level.value)
    if no_color:
        sprout_log.set_no_color(True)
    create_cmd(
        InvocationArgs(
            project_directory=project_directory,
            use_npm=use_npm,
            template=template,
            verbose=verbose,
            scripts_package=scripts_version,
        )
    )


def main() -> None:
    app(prog_name="sprout")
