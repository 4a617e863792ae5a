# npmrange/commands/check.py

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from npmrange.core.console import ConsoleAware
from npmrange.core.exceptions import NpmRangeError, RangeSyntaxError
from npmrange.core.global_config import get_default_parse_options
from npmrange.core.versions import parse_version
from npmrange.npm.range import NpmRange

EXIT_SATISFIED = 0
EXIT_NOT_SATISFIED = 1
EXIT_ERROR = 2

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def check_command(console_awr: ConsoleAware, version_text: str, range_text: str,
                  include_prerelease: Optional[bool]) -> bool:
    """Command wrapper for check command."""
    options = get_default_parse_options(Path.cwd())
    if include_prerelease is not None:
        options = options.model_copy(update={"include_prerelease": include_prerelease})

    version = parse_version(version_text)
    npm_range = NpmRange.parse(range_text, options,
                               console=console_awr.console, verbose=console_awr.verbose)
    console_awr.log(f"Canonical range: [cyan]{npm_range}[/cyan]")

    satisfied = npm_range.contains(version)
    if satisfied:
        console_awr.print(
            f"✅ [bold green]{version}[/bold green] satisfies [cyan]{npm_range}[/cyan]"
        )
    else:
        console_awr.print(
            f"✖️  [bold yellow]{version}[/bold yellow] does not satisfy [cyan]{npm_range}[/cyan]"
        )
    return satisfied


def register(app):
    """Register the check command with the Typer app."""

    @app.command()
    def check(
        version: str = typer.Argument(..., help="Version to test, e.g. 1.2.3-beta.1"),
        range_text: str = typer.Argument(..., metavar="RANGE", help="npm range, e.g. '^1.2 || >=2.5.0 <3'"),
        include_prerelease: Optional[bool] = typer.Option(
            None,
            "--include-prerelease/--no-include-prerelease",
            help="Treat every pre-release between the bounds as a member (overrides settings)"
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            help="Show how each range segment expands"
        )
    ):
        """Check whether VERSION satisfies RANGE. Exits 0 if it does, 1 if not, 2 on error."""
        console = Console(log_path=False)
        console_awr = ConsoleAware(console=console, verbose=verbose)
        try:
            satisfied = check_command(console_awr, version, range_text, include_prerelease)

        except RangeSyntaxError as e:
            console_awr.fail("Invalid range", e.reason)
            if verbose:
                console_awr.log(f"  Range: {escape(repr(e.text))}")
                console_awr.log(f"  Column: {e.position + 1}")
            raise typer.Exit(code=EXIT_ERROR)

        except NpmRangeError as e:
            console_awr.fail("Check failed", e)
            raise typer.Exit(code=EXIT_ERROR)

        raise typer.Exit(code=EXIT_SATISFIED if satisfied else EXIT_NOT_SATISFIED)
