"""Bundled project templates.

Each preset has a directory here that is copied verbatim into the new
project. Lint and formatter configs live under eslint/, with optional
preset-specific variants in eslint/<preset>/.
"""

from pathlib import Path
from typing import Optional

from tsnew.config import Settings

BUNDLED_TEMPLATES = Path(__file__).parent

LINT_TEMPLATES = "eslint"
ESLINT_CONFIG = "eslint.config.js"
ESLINT_PRETTIER_CONFIG = "eslint.prettier.config.js"
PRETTIER_CONFIG = ".prettierrc.json"


def templates_root(settings: Optional[Settings] = None) -> Path:
    """Root directory holding all templates."""
    if settings is not None and settings.templates_dir:
        return Path(settings.templates_dir).expanduser()
    return BUNDLED_TEMPLATES


def eslint_template_name(with_prettier: bool) -> str:
    """Template file for the ESLint config (always installed as eslint.config.js)."""
    return ESLINT_PRETTIER_CONFIG if with_prettier else ESLINT_CONFIG


def lint_templates_dir(root: Path, variant: Optional[str] = None) -> Path:
    """Generic lint template dir, or a preset-specific variant."""
    base = root / LINT_TEMPLATES
    return base / variant if variant else base
