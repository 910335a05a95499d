"""Console theme for tsnew."""

from dataclasses import dataclass
from rich.style import Style
from rich.theme import Theme


@dataclass
class Palette:
    """tsnew color palette."""

    PRIMARY = "#3178C6"      # TypeScript blue
    ACCENT = "#00BFFF"

    SUCCESS = "#00C853"
    WARNING = "#FFB000"
    ERROR = "#FF1744"

    TEXT = "#FFFFFF"
    TEXT_DIM = "#808080"


THEME = Theme({
    "status.ok": Style(color=Palette.SUCCESS, bold=True),
    "status.warn": Style(color=Palette.WARNING, bold=True),
    "status.error": Style(color=Palette.ERROR, bold=True),

    "title": Style(color=Palette.PRIMARY, bold=True),
    "accent": Style(color=Palette.ACCENT),
    "step": Style(color=Palette.TEXT_DIM),
    "command": Style(color=Palette.ACCENT, bold=True),
})


class Symbols:
    """Terminal symbols for status display."""

    COMPLETE = "✓"
    FAILED = "✗"
    ARROW_RIGHT = "▸"
    NEXT = "👉"
