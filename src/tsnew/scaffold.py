"""Scaffold orchestration.

A run is a fixed sequence of steps:

1. Reject an existing target directory (and missing templates)
2. Create the target directory
3. Copy the preset template, then run the preset's post-copy patch
4. ESM: patch root and workspace tsconfig.json files
5. ESLint: copy the lint config as eslint.config.js
6. Prettier: copy .prettierrc.json
7. npm init -y
8. Install dev tooling, lint/format tooling, framework packages
9. Patch package.json (module type, preset fields, lint/format scripts)
10. git init
11. Return a summary with next steps

Steps run one after another. The first error aborts the run and nothing
already written is rolled back.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from tsnew.config import Settings
from tsnew.errors import TargetExistsError, TemplateNotFoundError
from tsnew.fs import Filesystem
from tsnew.models import ResolvedConfig
from tsnew.package_managers import get_package_manager
from tsnew.presets import PresetSpec, apply_module_format, apply_tooling_scripts, get_preset
from tsnew.process import ProcessRunner, format_command
from tsnew.templates import (
    ESLINT_CONFIG,
    PRETTIER_CONFIG,
    eslint_template_name,
    lint_templates_dir,
    templates_root,
)

logger = logging.getLogger(__name__)

DEV_DEPENDENCIES = ("typescript", "tsx", "@types/node")
ESLINT_DEPENDENCIES = ("eslint", "@typescript-eslint/parser", "@typescript-eslint/eslint-plugin")
PRETTIER_DEPENDENCIES = ("prettier", "eslint-config-prettier")

INIT_COMMAND = ("npm", ("init", "-y"))
GIT_INIT_COMMAND = ("git", ("init",))

ESM_COMPILER_OPTIONS = {
    "module": "ES2022",
    "moduleResolution": "Bundler",
}


class Reporter(Protocol):
    def step(self, message: str) -> None:
        ...


class _SilentReporter:
    def step(self, message: str) -> None:
        pass


@dataclass
class ScaffoldResult:
    """Outcome of a successful scaffold run."""
    target_dir: Path
    config: ResolvedConfig
    commands: List[str] = field(default_factory=list)
    scripts: Dict[str, str] = field(default_factory=dict)
    next_steps: List[str] = field(default_factory=list)


class Scaffolder:
    """Creates a project directory from a ResolvedConfig."""

    def __init__(
        self,
        fs: Filesystem,
        runner: ProcessRunner,
        settings: Optional[Settings] = None,
        reporter: Optional[Reporter] = None,
    ):
        self.fs = fs
        self.runner = runner
        self.settings = settings or Settings()
        self.reporter = reporter or _SilentReporter()

    def scaffold(self, config: ResolvedConfig, cwd: Path) -> ScaffoldResult:
        """Run the full pipeline for one project.

        Args:
            config: Resolved options
            cwd: Directory the project is created in

        Returns:
            ScaffoldResult for the new project

        Raises:
            TargetExistsError: If cwd/name already exists
            TemplateNotFoundError: If a required template is missing
            FilesystemError: If a file operation fails
            CommandError: If an external command fails
        """
        spec = get_preset(config.preset)
        target = cwd / config.name

        if self.fs.exists(target):
            raise TargetExistsError(target)

        root = templates_root(self.settings)
        template_dir = root / spec.template
        if not self.fs.exists(template_dir):
            raise TemplateNotFoundError(template_dir, spec.preset.value)
        extra_files = self._config_files(config, spec, root)

        result = ScaffoldResult(target_dir=target, config=config)

        self._step(f"Creating {target}")
        self.fs.make_dir(target)

        self._step(f"Copying {spec.template} template")
        self.fs.copy_tree(template_dir, target)
        if spec.post_copy is not None:
            spec.post_copy(target, config, self.fs)

        if config.esm:
            self._step("Configuring ES modules")
            self._patch_tsconfigs(target, spec)

        for src, name in extra_files:
            self._step(f"Adding {name}")
            self.fs.copy_file(src, target / name)

        self._run(result, *INIT_COMMAND)

        if not config.skip_install:
            self._install(result, config, spec)

        result.scripts = self._patch_package_json(target, config, spec)

        if config.git:
            self._step("Initializing git repository")
            self._run(result, *GIT_INIT_COMMAND)

        result.next_steps = self._next_steps(config, result.scripts)
        logger.debug("Scaffolded %s (%d commands)", target, len(result.commands))
        return result

    def _step(self, message: str) -> None:
        logger.debug(message)
        self.reporter.step(message)

    def _config_files(self, config: ResolvedConfig, spec: PresetSpec, root: Path) -> List[Tuple[Path, str]]:
        """Lint/format config files to copy, as (source, destination name)."""
        files: List[Tuple[Path, str]] = []
        if config.eslint:
            src = lint_templates_dir(root, spec.lint_template) / eslint_template_name(config.prettier)
            files.append((src, ESLINT_CONFIG))
        if config.prettier:
            files.append((lint_templates_dir(root) / PRETTIER_CONFIG, PRETTIER_CONFIG))

        for src, _ in files:
            if not self.fs.exists(src):
                raise TemplateNotFoundError(src, spec.preset.value)
        return files

    def _patch_tsconfigs(self, target: Path, spec: PresetSpec) -> None:
        paths = [target / "tsconfig.json"]
        for pattern in spec.workspace_globs:
            paths.extend(self.fs.glob(target, f"{pattern}/tsconfig.json"))

        for path in paths:
            if not self.fs.exists(path):
                continue
            tsconfig = self.fs.read_json(path)
            compiler_options = tsconfig.setdefault("compilerOptions", {})
            compiler_options.update(ESM_COMPILER_OPTIONS)
            self.fs.write_json(path, tsconfig)
            logger.debug("Patched %s for ES modules", path)

    def _install(self, result: ScaffoldResult, config: ResolvedConfig, spec: PresetSpec) -> None:
        pm = get_package_manager(config.package_manager)

        self._step("Installing TypeScript tooling")
        self._run(result, pm.executable, pm.dev_install_args(DEV_DEPENDENCIES))

        if config.eslint:
            self._step("Installing ESLint")
            self._run(result, pm.executable, pm.dev_install_args(ESLINT_DEPENDENCIES))

        if config.prettier:
            self._step("Installing Prettier")
            self._run(result, pm.executable, pm.dev_install_args(PRETTIER_DEPENDENCIES))

        if spec.dependencies:
            self._step(f"Installing {spec.preset.value} dependencies")
            self._run(result, pm.executable, pm.install_args(spec.dependencies))

    def _patch_package_json(self, target: Path, config: ResolvedConfig, spec: PresetSpec) -> Dict[str, str]:
        self._step("Updating package.json")
        pkg_path = target / "package.json"
        pkg = self.fs.read_json(pkg_path)
        pkg["scripts"] = pkg.get("scripts") or {}

        pkg = apply_module_format(pkg, config)
        pkg = spec.mutate(pkg, config)
        pkg = apply_tooling_scripts(pkg, config)

        self.fs.write_json(pkg_path, pkg)
        return dict(pkg["scripts"])

    def _run(self, result: ScaffoldResult, command: str, args: Sequence[str]) -> None:
        result.commands.append(format_command(command, args))
        self.runner.run(command, list(args), result.target_dir)

    def _next_steps(self, config: ResolvedConfig, scripts: Dict[str, str]) -> List[str]:
        pm = get_package_manager(config.package_manager)
        steps = [f"cd {config.name}"]
        if config.skip_install:
            steps.append(f"{pm.executable} install")
        if "build" in scripts:
            steps.append(pm.run_command("build"))
        if "dev" in scripts:
            steps.append(pm.run_command("dev"))
        return steps
