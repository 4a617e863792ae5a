# npmrange/cli.py
"""
Main CLI entry point for npmrange.

This module sets up the Typer application and registers all commands.
"""
import typer
from rich.console import Console

from npmrange.commands import (
    check,
    normalize,
    filter,
    config,
)

import importlib.metadata
import pathlib
import sys
import tomllib

app = typer.Typer(
    name="npmrange",
    help="npmrange - test semantic versions against npm-style ranges",
    add_completion=False,
    no_args_is_help=True,
)

# Register commands
check.register(app)
normalize.register(app)
filter.register(app)
config.register(app)

# Auxiliary function to get the version of the package
def get_package_version():
    package_name = "npmrange"

    # 1. Try to get the version from an installed package
    try:
        return importlib.metadata.version(package_name)
    except importlib.metadata.PackageNotFoundError:
        pass # The package is not installed, try reading from pyproject.toml

    # 2. If not installed, try reading directly from pyproject.toml
    project_root = pathlib.Path(__file__).parent.parent
    pyproject_path = project_root / "pyproject.toml"

    if pyproject_path.exists():
        try:
            with open(pyproject_path, "rb") as f: # "rb" for tomllib
                pyproject_data = tomllib.load(f)
            return pyproject_data.get("project", {}).get("version", "unknown")
        except (OSError, tomllib.TOMLDecodeError) as e:
            print(f"Warning: Could not read version from pyproject.toml: {e}", file=sys.stderr)
            return "unknown"

    return "unknown" # Final fallback if nothing works

@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show the version of npmrange and exit.",
        callback=lambda value: _version_callback(value),
        is_eager=True,
    )
):
    """
    npmrange CLI.
    """
    pass

def _version_callback(value: bool):
    if value:
        console = Console(log_path=False)
        current_version = get_package_version()
        console.print(f"[bold green]npmrange[/] version [cyan]{current_version}[/]")
        raise typer.Exit()

if __name__ == "__main__":
    app()
