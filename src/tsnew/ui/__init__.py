"""tsnew UI components."""

from rich.console import Console
from rich.markup import escape

from tsnew.ui.theme import Palette, THEME, Symbols


def make_console(**kwargs) -> Console:
    """Console using the tsnew theme."""
    return Console(theme=THEME, **kwargs)


class ConsoleReporter:
    """Prints scaffold progress lines."""

    def __init__(self, console: Console):
        self.console = console

    def step(self, message: str) -> None:
        self.console.print(f"  [step]{Symbols.ARROW_RIGHT} {escape(message)}[/]")


__all__ = [
    "Palette",
    "THEME",
    "Symbols",
    "make_console",
    "ConsoleReporter",
]
