"""Filesystem access used by the scaffolder.

The scaffolder only talks to the Filesystem protocol below, so tests can
swap in a recording implementation. LocalFilesystem is the real one and
wraps OS errors in FilesystemError.
"""

import json
import logging
import shutil
from pathlib import Path
from typing import Any, List, Protocol

from tsnew.errors import FilesystemError

logger = logging.getLogger(__name__)


class Filesystem(Protocol):
    """Operations the scaffolder needs from the filesystem."""

    def exists(self, path: Path) -> bool:
        ...

    def make_dir(self, path: Path) -> None:
        ...

    def copy_tree(self, src: Path, dst: Path) -> None:
        ...

    def copy_file(self, src: Path, dst: Path) -> None:
        ...

    def read_json(self, path: Path) -> Any:
        ...

    def write_json(self, path: Path, value: Any) -> None:
        ...

    def glob(self, root: Path, pattern: str) -> List[Path]:
        ...


class LocalFilesystem:
    """Filesystem backed by pathlib and shutil."""

    def __init__(self, json_indent: int = 2):
        self.json_indent = json_indent

    def exists(self, path: Path) -> bool:
        return path.exists()

    def make_dir(self, path: Path) -> None:
        try:
            path.mkdir(parents=True)
        except OSError as e:
            raise FilesystemError(f"Cannot create directory {path}: {e}", path=path) from e

    def copy_tree(self, src: Path, dst: Path) -> None:
        """Copy the contents of src into dst (dst may already exist)."""
        logger.debug("Copying tree %s -> %s", src, dst)
        try:
            shutil.copytree(src, dst, dirs_exist_ok=True)
        except (OSError, shutil.Error) as e:
            raise FilesystemError(f"Cannot copy {src} to {dst}: {e}", path=src) from e

    def copy_file(self, src: Path, dst: Path) -> None:
        logger.debug("Copying file %s -> %s", src, dst)
        try:
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(src, dst)
        except OSError as e:
            raise FilesystemError(f"Cannot copy {src} to {dst}: {e}", path=src) from e

    def read_json(self, path: Path) -> Any:
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise FilesystemError(f"Cannot read {path}: {e}", path=path) from e
        except json.JSONDecodeError as e:
            raise FilesystemError(f"Invalid JSON in {path}: {e}", path=path) from e

    def write_json(self, path: Path, value: Any) -> None:
        content = json.dumps(value, indent=self.json_indent, ensure_ascii=False) + "\n"
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise FilesystemError(f"Cannot write {path}: {e}", path=path) from e

    def glob(self, root: Path, pattern: str) -> List[Path]:
        return sorted(root.glob(pattern))
