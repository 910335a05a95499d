"""Exceptions raised by tsnew.

Every error a scaffold run can hit derives from ScaffoldError. The CLI
catches it at the top level and prints a single-line message.
"""

from pathlib import Path
from typing import List, Optional, Sequence


class ScaffoldError(Exception):
    """Base exception for tsnew."""
    pass


# =============================================================================
# Validation
# =============================================================================

class ValidationError(ScaffoldError):
    """Invalid input detected before anything is written."""
    pass


class TargetExistsError(ValidationError):
    """The target directory is already on disk."""

    def __init__(self, path: Path):
        super().__init__(f"A directory already exists at {path}")
        self.path = path


class TemplateNotFoundError(ValidationError):
    """A bundled template directory or file is missing."""

    def __init__(self, path: Path, preset: Optional[str] = None):
        if preset:
            message = f"Template not found for preset '{preset}': {path}"
        else:
            message = f"Template not found: {path}"
        super().__init__(message)
        self.path = path
        self.preset = preset


# =============================================================================
# Collaborators
# =============================================================================

class FilesystemError(ScaffoldError):
    """A filesystem operation failed."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class CommandError(ScaffoldError):
    """Base exception for external commands."""

    def __init__(self, message: str, command: Sequence[str]):
        super().__init__(message)
        self.command: List[str] = list(command)


class CommandNotFoundError(CommandError):
    """The executable is not installed or not in PATH."""
    pass


class CommandFailedError(CommandError):
    """Command exited with a non-zero status."""

    def __init__(self, message: str, command: Sequence[str], returncode: int):
        super().__init__(message, command)
        self.returncode = returncode
