"""Install command shapes for each supported package manager."""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from tsnew.models import PackageManager


@dataclass(frozen=True)
class PackageManagerSpec:
    """How to drive one package manager."""
    executable: str
    dev_install: Tuple[str, ...]
    install: Tuple[str, ...]
    run_script: Tuple[str, ...]

    def dev_install_args(self, packages: Sequence[str]) -> List[str]:
        return [*self.dev_install, *packages]

    def install_args(self, packages: Sequence[str]) -> List[str]:
        return [*self.install, *packages]

    def run_command(self, script: str) -> str:
        return " ".join([self.executable, *self.run_script, script])


PACKAGE_MANAGERS: Dict[PackageManager, PackageManagerSpec] = {
    PackageManager.NPM: PackageManagerSpec(
        executable="npm",
        dev_install=("install", "-D"),
        install=("install",),
        run_script=("run",),
    ),
    PackageManager.PNPM: PackageManagerSpec(
        executable="pnpm",
        dev_install=("add", "-D"),
        install=("add",),
        run_script=("run",),
    ),
    PackageManager.BUN: PackageManagerSpec(
        executable="bun",
        dev_install=("add", "-d"),
        install=("add",),
        run_script=("run",),
    ),
}


def get_package_manager(package_manager: PackageManager) -> PackageManagerSpec:
    return PACKAGE_MANAGERS[package_manager]
