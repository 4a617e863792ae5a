# npmrange/commands/normalize.py

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from npmrange.core.console import ConsoleAware
from npmrange.core.exceptions import NpmRangeError
from npmrange.core.global_config import get_default_parse_options
from npmrange.npm.range import NpmRange

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def normalize_command(console_awr: ConsoleAware, range_text: str,
                      include_prerelease: Optional[bool]) -> NpmRange:
    """Command wrapper for normalize command."""
    options = get_default_parse_options(Path.cwd())
    if include_prerelease is not None:
        options = options.model_copy(update={"include_prerelease": include_prerelease})

    npm_range = NpmRange.parse(range_text, options,
                               console=console_awr.console, verbose=console_awr.verbose)
    # Plain output so the result can be piped
    console_awr.print(str(npm_range))
    return npm_range


def register(app):
    """Register the normalize command with the Typer app."""

    @app.command()
    def normalize(
        range_text: str = typer.Argument(..., metavar="RANGE", help="npm range to rewrite"),
        include_prerelease: Optional[bool] = typer.Option(
            None,
            "--include-prerelease/--no-include-prerelease",
            help="Compile wildcards with -0 lower bounds (overrides settings)"
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            help="Show how each range segment expands"
        )
    ):
        """Print the canonical comparator form of RANGE."""
        console = Console(log_path=False, highlight=False)
        console_awr = ConsoleAware(console=console, verbose=verbose)
        try:
            normalize_command(console_awr, range_text, include_prerelease)

        except NpmRangeError as e:
            console_awr.fail("Normalize failed", e)
            raise typer.Exit(code=1)
