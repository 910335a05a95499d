"""Running external commands (npm, pnpm, bun, git).

Output is streamed straight to the terminal so the user sees installer
progress as it happens. Failures surface as CommandError subclasses.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Protocol, Sequence

from tsnew.errors import CommandFailedError, CommandNotFoundError

logger = logging.getLogger(__name__)


class ProcessRunner(Protocol):
    """Anything that can run a command in a working directory."""

    def run(self, command: str, args: Sequence[str], cwd: Path) -> None:
        ...


def format_command(command: str, args: Sequence[str]) -> str:
    """Render a command line for display."""
    return " ".join([command, *args])


def run_command(command: str, args: Sequence[str], cwd: Path) -> None:
    """Run a command, inheriting stdout/stderr.

    Args:
        command: Executable name
        args: Command arguments
        cwd: Working directory

    Raises:
        CommandNotFoundError: If the executable is not installed
        CommandFailedError: If the command exits non-zero
    """
    cmd: List[str] = [command, *args]
    cmd_str = format_command(command, args)
    logger.debug("Running %s in %s", cmd_str, cwd)

    try:
        result = subprocess.run(cmd, cwd=cwd)
    except FileNotFoundError:
        raise CommandNotFoundError(
            f"'{command}' is not installed or not in PATH",
            command=cmd,
        )

    if result.returncode != 0:
        raise CommandFailedError(
            f"Command failed with exit code {result.returncode}: {cmd_str}",
            command=cmd,
            returncode=result.returncode,
        )


class SubprocessRunner:
    """ProcessRunner backed by subprocess."""

    def run(self, command: str, args: Sequence[str], cwd: Path) -> None:
        run_command(command, args, cwd)
