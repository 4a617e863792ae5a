# npmrange/commands/config.py

"""
npmrange config command: view and change the default parse options.

Project settings live in .npmrange/settings.yaml; with --global they are
written to ~/.npmrange/config.yaml instead.
"""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from npmrange.core.console import ConsoleAware
from npmrange.core.exceptions import NpmRangeError
from npmrange.core.global_config import (
    ENV_INCLUDE_PRERELEASE,
    get_default_parse_options,
    set_global,
)
from npmrange.core.settings import (
    INCLUDE_PRERELEASE_KEY,
    MAX_STEPS_KEY,
    Settings,
    coerce_positive_int,
)

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def config_command(
    project_dir: Optional[Path],
    include_prerelease: Optional[bool],
    max_steps: Optional[int],
    use_global: bool,
    console: Console
):
    """Command wrapper for config command."""

    if project_dir is None:
        project_path = Path.cwd()
    else:
        project_path = Path(project_dir).resolve()

    console_awr = ConsoleAware(console=console, verbose=False)
    settings = Settings(project_path)
    scope = "global" if use_global else "project"

    if include_prerelease is not None:
        if use_global:
            set_global(INCLUDE_PRERELEASE_KEY, include_prerelease)
        else:
            settings.set_include_prerelease(include_prerelease)
        console_awr.print(
            f"🔧 [green]include-prerelease set ({scope})[/green] → [cyan]{include_prerelease}[/cyan]"
        )

    if max_steps is not None:
        if use_global:
            set_global(MAX_STEPS_KEY, coerce_positive_int(MAX_STEPS_KEY, max_steps))
        else:
            settings.set_max_steps(max_steps)
        console_awr.print(
            f"🔧 [green]max-steps set ({scope})[/green] → [cyan]{max_steps}[/cyan]"
        )

    options = get_default_parse_options(project_path)
    console_awr.print("📋 [bold cyan]Parse options in use:[/]")
    console_awr.print(f"   → include-prerelease: [cyan]{options.include_prerelease}[/cyan]")
    console_awr.print(f"   → max-steps: [cyan]{options.max_steps}[/cyan]")
    console_awr.print(f"   → max-length: [cyan]{options.max_length}[/cyan]")
    console_awr.print(
        f"[dim]{ENV_INCLUDE_PRERELEASE} overrides include-prerelease when set.[/dim]"
    )


def register(app: typer.Typer):

    @app.command()
    def config(
        project_dir: Optional[Path] = typer.Option(
            None,
            "--project-dir",
            "-d",
            help="Project directory holding .npmrange/settings.yaml (default: current directory)"
        ),
        include_prerelease: Optional[bool] = typer.Option(
            None,
            "--include-prerelease/--no-include-prerelease",
            help="Set whether ranges admit every pre-release between their bounds"
        ),
        max_steps: Optional[int] = typer.Option(
            None,
            "--max-steps",
            help="Set the parser step budget"
        ),
        use_global: bool = typer.Option(
            False,
            "--global",
            help="Write to ~/.npmrange/config.yaml instead of the project settings"
        )
    ):
        """Show or change the default range parse options."""
        console = Console(log_path=False)
        try:
            config_command(project_dir, include_prerelease, max_steps, use_global, console)

        except NpmRangeError as e:
            ConsoleAware(console=console).fail("Config failed", e)
            raise typer.Exit(code=1)
