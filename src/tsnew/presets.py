"""Preset registry.

Each preset is one row in PRESETS. A row names the template directory,
the framework packages installed at runtime, and a pure function that
patches the generated package.json. Adding a preset means adding a row
(and its template directory); nothing else branches on preset.
"""

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from tsnew.fs import Filesystem
from tsnew.models import Preset, ResolvedConfig

PackageJson = Dict[str, Any]
Mutation = Callable[[PackageJson, ResolvedConfig], PackageJson]
PostCopyPatch = Callable[[Path, ResolvedConfig, Filesystem], None]

BUILD_SCRIPT = "tsc"
DEV_SCRIPT = "tsx watch src/index.ts"
START_SCRIPT = "node dist/index.js"
ENTRY_POINT = "dist/index.js"
TYPES_ENTRY = "dist/index.d.ts"

LINT_SCRIPT = "eslint ."
FORMAT_SCRIPT = "prettier --write ."

MONOREPO_APP_DIR = "packages/app"


@dataclass(frozen=True)
class PresetSpec:
    """Static description of one preset."""
    preset: Preset
    description: str
    template: str
    mutate: Mutation
    dependencies: Tuple[str, ...] = ()
    post_copy: Optional[PostCopyPatch] = None
    lint_template: Optional[str] = None
    workspace_globs: Tuple[str, ...] = ()


# =============================================================================
# package.json mutations
# =============================================================================

def _with_scripts(pkg: PackageJson, **scripts: str) -> PackageJson:
    patched = copy.deepcopy(pkg)
    patched["scripts"] = {**(patched.get("scripts") or {}), **scripts}
    return patched


def mutate_base(pkg: PackageJson, config: ResolvedConfig) -> PackageJson:
    return _with_scripts(pkg, build=BUILD_SCRIPT, dev=DEV_SCRIPT)


def mutate_library(pkg: PackageJson, config: ResolvedConfig) -> PackageJson:
    patched = _with_scripts(pkg, build=BUILD_SCRIPT)
    patched["main"] = ENTRY_POINT
    patched["types"] = TYPES_ENTRY
    return patched


def mutate_service(pkg: PackageJson, config: ResolvedConfig) -> PackageJson:
    """Shared by backend-style presets: build, watch and run."""
    return _with_scripts(pkg, build=BUILD_SCRIPT, dev=DEV_SCRIPT, start=START_SCRIPT)


def mutate_cli(pkg: PackageJson, config: ResolvedConfig) -> PackageJson:
    patched = _with_scripts(pkg, build=BUILD_SCRIPT)
    patched["bin"] = {**(patched.get("bin") or {}), config.name: ENTRY_POINT}
    return patched


def mutate_monorepo(pkg: PackageJson, config: ResolvedConfig) -> PackageJson:
    patched = copy.deepcopy(pkg)
    patched["private"] = True
    patched["workspaces"] = ["packages/*"]
    return patched


def mutate_monorepo_app(pkg: PackageJson, config: ResolvedConfig) -> PackageJson:
    """Patch for the workspace package shipped in the monorepo template."""
    patched = _with_scripts(pkg, build=BUILD_SCRIPT, dev=DEV_SCRIPT, start=START_SCRIPT)
    patched["name"] = f"{config.name}-app"
    if config.esm:
        patched["type"] = "module"
    return patched


def apply_tooling_scripts(pkg: PackageJson, config: ResolvedConfig) -> PackageJson:
    """Add lint/format scripts; independent of the preset."""
    scripts: Dict[str, str] = {}
    if config.eslint:
        scripts["lint"] = LINT_SCRIPT
    if config.prettier:
        scripts["format"] = FORMAT_SCRIPT
    return _with_scripts(pkg, **scripts)


def apply_module_format(pkg: PackageJson, config: ResolvedConfig) -> PackageJson:
    patched = copy.deepcopy(pkg)
    if config.esm:
        patched["type"] = "module"
    return patched


# =============================================================================
# Post-copy patches
# =============================================================================

def patch_monorepo_app(target_dir: Path, config: ResolvedConfig, fs: Filesystem) -> None:
    """Rename and script the workspace package copied from the template."""
    pkg_path = target_dir / MONOREPO_APP_DIR / "package.json"
    pkg = fs.read_json(pkg_path)
    fs.write_json(pkg_path, mutate_monorepo_app(pkg, config))


# =============================================================================
# Registry
# =============================================================================

PRESETS: Dict[Preset, PresetSpec] = {
    Preset.BASE: PresetSpec(
        preset=Preset.BASE,
        description="Minimal TypeScript project",
        template="base",
        mutate=mutate_base,
    ),
    Preset.CLI: PresetSpec(
        preset=Preset.CLI,
        description="Command-line tool with a bin entry",
        template="cli",
        mutate=mutate_cli,
    ),
    Preset.LIBRARY: PresetSpec(
        preset=Preset.LIBRARY,
        description="Publishable library with type declarations",
        template="library",
        mutate=mutate_library,
    ),
    Preset.BACKEND: PresetSpec(
        preset=Preset.BACKEND,
        description="Node.js backend service",
        template="backend",
        mutate=mutate_service,
    ),
    Preset.MONOREPO: PresetSpec(
        preset=Preset.MONOREPO,
        description="Workspaces monorepo with one app package",
        template="monorepo",
        mutate=mutate_monorepo,
        post_copy=patch_monorepo_app,
        workspace_globs=("packages/*",),
    ),
    Preset.NESTJS: PresetSpec(
        preset=Preset.NESTJS,
        description="NestJS HTTP service",
        template="nestjs",
        mutate=mutate_service,
        dependencies=(
            "@nestjs/common",
            "@nestjs/core",
            "@nestjs/platform-express",
            "reflect-metadata",
            "rxjs",
        ),
        lint_template="nestjs",
    ),
    Preset.MOLECULER: PresetSpec(
        preset=Preset.MOLECULER,
        description="Moleculer microservices broker",
        template="moleculer",
        mutate=mutate_service,
        dependencies=("moleculer",),
    ),
}


def get_preset(preset: Preset) -> PresetSpec:
    """Look up a preset's registry row."""
    return PRESETS[preset]
