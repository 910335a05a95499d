"""Shared test fixtures for tsnew.

Provides:
- isolated_env: HOME and TSNEW_* variables isolated per test (autouse)
- runner: RecordingRunner that fakes npm/pnpm/bun/git
- spy_fs: LocalFilesystem that records every call
- scaffolder: Scaffolder wired to the real filesystem and the fake runner
- cli_runner: Click CliRunner
"""

import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pytest
from click.testing import CliRunner

from tsnew.errors import CommandFailedError
from tsnew.fs import LocalFilesystem
from tsnew.options import QUESTIONS
from tsnew.scaffold import Scaffolder

# Question text for each option, as asked by OptionResolver
QUESTION_FOR = {option: question for option, _, question in QUESTIONS}
QUESTION_FOR["name"] = "Project name"


def npm_init_package(name: str) -> dict:
    """package.json as written by `npm init -y`."""
    return {
        "name": name,
        "version": "1.0.0",
        "description": "",
        "main": "index.js",
        "scripts": {
            "test": "echo \"Error: no test specified\" && exit 1",
        },
        "keywords": [],
        "author": "",
        "license": "ISC",
    }


class RecordingRunner:
    """ProcessRunner fake.

    Records every call. `npm init -y` writes a package.json like the real
    command does. Calls whose command line contains `fail_on` raise
    CommandFailedError.
    """

    def __init__(self, fail_on: Optional[str] = None):
        self.calls: List[Tuple[str, List[str], Path]] = []
        self.fail_on = fail_on

    def run(self, command: str, args: Sequence[str], cwd: Path) -> None:
        cmd = [command, *args]
        self.calls.append((command, list(args), cwd))
        if self.fail_on and self.fail_on in " ".join(cmd):
            raise CommandFailedError(f"Command failed: {' '.join(cmd)}", command=cmd, returncode=1)
        if cmd == ["npm", "init", "-y"]:
            (cwd / "package.json").write_text(json.dumps(npm_init_package(cwd.name), indent=2))
        if cmd == ["git", "init"]:
            (cwd / ".git").mkdir()

    @property
    def command_lines(self) -> List[str]:
        return [" ".join([command, *args]) for command, args, _ in self.calls]


class ScriptedPrompter:
    """Prompter fake answering from a {question: answer} mapping.

    Unscripted questions get their default (or fail for free text).
    """

    def __init__(self, answers: Optional[Dict[str, object]] = None):
        self.answers = answers or {}
        self.asked: List[str] = []

    def _answer(self, question: str, default):
        self.asked.append(question)
        if question in self.answers:
            return self.answers[question]
        if default is None:
            raise AssertionError(f"Unscripted free-text question: {question}")
        return default

    def ask_text(self, question: str) -> str:
        return self._answer(question, None)

    def ask_yes_no(self, question: str, default: bool) -> bool:
        return self._answer(question, default)

    def ask_choice(self, question: str, choices: Sequence[str], default: str) -> str:
        return self._answer(question, default)


class SpyFilesystem(LocalFilesystem):
    """LocalFilesystem that records the operations called on it."""

    MUTATING = {"make_dir", "copy_tree", "copy_file", "write_json"}

    def __init__(self):
        super().__init__()
        self.operations: List[Tuple[str, Path]] = []

    def make_dir(self, path):
        self.operations.append(("make_dir", path))
        super().make_dir(path)

    def copy_tree(self, src, dst):
        self.operations.append(("copy_tree", dst))
        super().copy_tree(src, dst)

    def copy_file(self, src, dst):
        self.operations.append(("copy_file", dst))
        super().copy_file(src, dst)

    def write_json(self, path, value):
        self.operations.append(("write_json", path))
        super().write_json(path, value)

    @property
    def mutations(self) -> List[Tuple[str, Path]]:
        return [op for op in self.operations if op[0] in self.MUTATING]


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep user settings and TSNEW_* variables out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("TSNEW_CONFIG", "TSNEW_TEMPLATES_DIR", "TSNEW_PRESET", "TSNEW_PACKAGE_MANAGER",
                "TSNEW_ESM", "TSNEW_ESLINT", "TSNEW_PRETTIER", "TSNEW_SKIP_INSTALL",
                "TSNEW_GIT", "TSNEW_YES", "TSNEW_INTERACTIVE", "TSNEW_VERBOSE",
                "TSNEW_LIST_PRESETS"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def workspace(tmp_path):
    """Empty directory projects are created in."""
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def spy_fs():
    return SpyFilesystem()


@pytest.fixture
def scaffolder(spy_fs, runner):
    return Scaffolder(fs=spy_fs, runner=runner)


@pytest.fixture
def cli_runner():
    """Click CliRunner for testing the CLI."""
    return CliRunner()
