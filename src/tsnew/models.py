"""Core data types shared by the resolver, registry and scaffolder."""

from dataclasses import dataclass, asdict
from enum import Enum


class Preset(str, Enum):
    """Project shapes tsnew can generate."""
    BASE = "base"
    CLI = "cli"
    LIBRARY = "library"
    BACKEND = "backend"
    MONOREPO = "monorepo"
    NESTJS = "nestjs"
    MOLECULER = "moleculer"


class PackageManager(str, Enum):
    """Supported package managers (npm is the default)."""
    NPM = "npm"
    PNPM = "pnpm"
    BUN = "bun"


@dataclass(frozen=True)
class ResolvedConfig:
    """Fully resolved and validated options for one scaffold run."""
    name: str
    preset: Preset = Preset.BASE
    esm: bool = False
    eslint: bool = False
    prettier: bool = False
    package_manager: PackageManager = PackageManager.NPM
    skip_install: bool = False
    git: bool = False

    def to_dict(self) -> dict:
        data = asdict(self)
        data["preset"] = self.preset.value
        data["package_manager"] = self.package_manager.value
        return data
