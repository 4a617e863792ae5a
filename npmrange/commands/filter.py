# npmrange/commands/filter.py

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from npmrange.core.console import ConsoleAware
from npmrange.core.exceptions import InvalidVersionError, NpmRangeError
from npmrange.core.global_config import get_default_parse_options
from npmrange.core.versions import parse_version
from npmrange.npm.range import NpmRange

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def filter_command(console_awr: ConsoleAware, range_text: str, versions: List[str],
                   include_prerelease: Optional[bool], strict: bool) -> List[str]:
    """
    Command wrapper for filter command.

    Returns the given version strings that satisfy the range, in input order.
    Invalid versions are skipped with a warning unless strict is set.
    """
    options = get_default_parse_options(Path.cwd())
    if include_prerelease is not None:
        options = options.model_copy(update={"include_prerelease": include_prerelease})

    npm_range = NpmRange.parse(range_text, options,
                               console=console_awr.console, verbose=console_awr.verbose)

    matching = []
    for text in versions:
        try:
            version = parse_version(text)
        except InvalidVersionError:
            if strict:
                raise
            console_awr.warn(f"Skipping invalid version '{escape(text)}'")
            continue

        if npm_range.contains(version):
            matching.append(text)
            console_awr.print(text)
        else:
            console_awr.log(f"[dim]{escape(text)} does not satisfy {npm_range}[/dim]")

    return matching


def register(app):
    """Register the filter command with the Typer app."""

    @app.command()
    def filter(
        range_text: str = typer.Argument(..., metavar="RANGE", help="npm range to filter with"),
        versions: List[str] = typer.Argument(..., metavar="VERSION...", help="Candidate versions"),
        include_prerelease: Optional[bool] = typer.Option(
            None,
            "--include-prerelease/--no-include-prerelease",
            help="Treat every pre-release between the bounds as a member (overrides settings)"
        ),
        strict: bool = typer.Option(
            False,
            "--strict",
            help="Fail on invalid versions instead of skipping them"
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            help="Show detailed output"
        )
    ):
        """Print the VERSIONs that satisfy RANGE, one per line, in input order."""
        console = Console(log_path=False, highlight=False)
        console_awr = ConsoleAware(console=console, verbose=verbose)
        try:
            matching = filter_command(console_awr, range_text, versions, include_prerelease, strict)

        except NpmRangeError as e:
            console_awr.fail("Filter failed", e)
            raise typer.Exit(code=2)

        if not matching:
            raise typer.Exit(code=1)
