from __future__ import annotations

from collections.abc import Callable

import typer

from . import __version__
from .logging import setup_logging
from .project_info import (
    ProjectInfo,
    ProjectInfoError,
    current_dir,
    resolve_project_info,
)
from .settings import ConfigError, load_settings
from .utils.git import GitRevisionSource


def _print_version_and_exit() -> None:
    typer.echo(__version__)
    raise typer.Exit()


def _version_callback(value: bool) -> None:
    if value:
        _print_version_and_exit()


def print_project_info(
    info: ProjectInfo, *, echo: Callable[[str], object] = typer.echo
) -> None:
    echo(f"Name: {info.name}")
    echo(f"Version: {info.version}")
    echo(f"Owner: {info.owner}")
    echo(f"Repo: {info.repo}")
    echo(f"Branch: {info.branch}")
    echo(f"Revision: {info.revision}")


def app_main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Log git queries and fallbacks.",
    ),
) -> None:
    """Utilities for inspecting the current project."""
    setup_logging(debug=debug)


def info() -> None:
    """Print info about current project and exit."""
    try:
        settings = load_settings()
        cwd = current_dir()
        project = resolve_project_info(
            GitRevisionSource(cwd), cwd=cwd, settings=settings
        )
    except (ConfigError, ProjectInfoError) as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    print_project_info(project)


def create_app() -> typer.Typer:
    app = typer.Typer(
        add_completion=False,
        no_args_is_help=True,
        help="Utilities for inspecting the current project.",
    )
    app.callback()(app_main)
    app.command(name="info")(info)
    return app


def main() -> None:
    app = create_app()
    app()


if __name__ == "__main__":
    main()
