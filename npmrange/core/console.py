# npmrange/core/console.py

from typing import Optional, Protocol, Any

from rich.markup import escape

class Console(Protocol):
    """Output sink accepted by the library; ``rich.console.Console`` satisfies it."""
    def print(self, *objects: Any) -> None:
        ...

    def log(self, *objects: Any) -> None:
        ...

class ConsoleAware:
    """
    Mixin for library objects that report what they do.

    Nothing is written without a console. ``log`` output additionally
    requires ``verbose``.
    """
    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console
        self.verbose = verbose

    def print(self, msg: str) -> None:
        if self.console:
            self.console.print(msg)

    def log(self, msg: str) -> None:
        if self.console and self.verbose:
            self.console.log(msg)

    def warn(self, msg: str) -> None:
        self.print(f"[bold yellow]⚠️  {msg}[/bold yellow]")

    def fail(self, title: str, details: object) -> None:
        self.print(f"\n[bold red]❌ {title}:[/bold red] {escape(str(details))}")
