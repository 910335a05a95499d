"""Main CLI entry point for tsnew."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click
from click.core import ParameterSource
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tsnew import __version__
from tsnew.config import load_settings
from tsnew.errors import ScaffoldError
from tsnew.fs import LocalFilesystem
from tsnew.options import OptionResolver
from tsnew.presets import PRESETS
from tsnew.process import SubprocessRunner
from tsnew.prompts import TerminalPrompter
from tsnew.scaffold import ScaffoldResult, Scaffolder
from tsnew.ui import ConsoleReporter, Symbols, make_console

console = make_console()
err_console = make_console(stderr=True)

# Options forwarded to the resolver when the user supplied them
RESOLVABLE_OPTIONS = (
    "preset",
    "esm",
    "eslint",
    "prettier",
    "package_manager",
    "skip_install",
    "git",
    "yes",
)

# Command line and TSNEW_* environment variables count as explicit
EXPLICIT_SOURCES = (ParameterSource.COMMANDLINE, ParameterSource.ENVIRONMENT)


@click.command(context_settings={"auto_envvar_prefix": "TSNEW"})
@click.version_option(version=__version__, prog_name="tsnew")
@click.argument("name", required=False)
@click.option("--preset", default="base", show_default=True, help="Project preset")
@click.option("--esm/--no-esm", default=False, help="Use ES modules")
@click.option("--eslint/--no-eslint", default=False, help="Add ESLint config and tooling")
@click.option("--prettier/--no-prettier", default=False, help="Add Prettier (implies --eslint)")
@click.option(
    "--package-manager",
    "-p",
    default="npm",
    show_default=True,
    help="Package manager: npm, pnpm or bun",
)
@click.option("--skip-install/--no-skip-install", default=False, help="Do not install dependencies")
@click.option("--git/--no-git", default=False, help="Initialize a git repository")
@click.option("--yes", "-y", is_flag=True, help="Accept defaults, never prompt")
@click.option("--interactive", "-i", is_flag=True, help="Prompt for options not given on the command line")
@click.option("--list-presets", is_flag=True, help="List available presets")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, name: Optional[str], interactive: bool, list_presets: bool, verbose: bool, **options):
    """Create a new TypeScript project.

    NAME is the project directory name.

    \b
    Examples:
      tsnew my-app
      tsnew my-lib --preset library --esm --prettier
      tsnew my-api --preset nestjs -p pnpm --git
      tsnew -i
    """
    _configure_logging(verbose)

    if list_presets:
        _show_presets()
        return

    raw = _collect_raw_options(ctx, name, options)

    try:
        settings = load_settings()
        resolver = OptionResolver(TerminalPrompter())
        config = resolver.resolve(raw, interactive=interactive)

        console.print(Panel.fit(
            f"[title]tsnew[/] - Creating [accent]{escape(config.name)}[/] ({config.preset.value})",
            border_style="title",
        ))

        scaffolder = Scaffolder(
            fs=LocalFilesystem(json_indent=settings.json_indent),
            runner=SubprocessRunner(),
            settings=settings,
            reporter=ConsoleReporter(console),
        )
        result = scaffolder.scaffold(config, Path.cwd())
        _print_summary(result)
    except ScaffoldError as e:
        _fail(e)


def _collect_raw_options(ctx: click.Context, name: Optional[str], options: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only the options the user actually supplied."""
    raw: Dict[str, Any] = {}
    if name is not None:
        raw["name"] = name
    for option in RESOLVABLE_OPTIONS:
        if ctx.get_parameter_source(option) in EXPLICIT_SOURCES:
            raw[option] = options[option]
    return raw


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(error: Exception) -> None:
    message = " ".join(str(error).split())
    err_console.print(
        f"[status.error]{Symbols.FAILED} Error:[/] {escape(message)}",
        soft_wrap=True,
    )
    raise SystemExit(1)


def _show_presets() -> None:
    console.print("\n[bold]Available Presets[/]\n")

    table = Table()
    table.add_column("Preset", style="accent")
    table.add_column("Description")
    table.add_column("Framework packages")

    for spec in PRESETS.values():
        table.add_row(
            spec.preset.value,
            spec.description,
            ", ".join(spec.dependencies) or "-",
        )

    console.print(table)

    console.print("\n[bold]Usage:[/]")
    console.print("  tsnew my-lib --preset library")
    console.print("  tsnew my-api --preset nestjs --eslint")


def _print_summary(result: ScaffoldResult) -> None:
    console.print(
        f"\n[status.ok]{Symbols.COMPLETE} Done![/] Project created at [accent]{escape(str(result.target_dir))}[/]",
        soft_wrap=True,
    )
    for step in result.next_steps:
        console.print(f"  {Symbols.NEXT} [command]{escape(step)}[/]")


if __name__ == "__main__":
    main()
