"""User settings for tsnew.

Settings are read from a JSON file:
- $TSNEW_CONFIG if set
- ~/.config/tsnew/config.json otherwise (optional)

TSNEW_TEMPLATES_DIR overrides the templates_dir setting. Option defaults
(preset, package manager, ...) are fixed and not configurable here.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, Mapping

from tsnew.errors import FilesystemError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TSNEW_CONFIG"
TEMPLATES_DIR_ENV_VAR = "TSNEW_TEMPLATES_DIR"
DEFAULT_CONFIG_PATH = Path("~/.config/tsnew/config.json")


@dataclass
class Settings:
    """tsnew settings."""
    # Root containing one directory per template; None = bundled templates
    templates_dir: Optional[str] = None

    # Indentation used when writing package.json / tsconfig.json
    json_indent: int = 2

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        return cls(**{
            k: v for k, v in data.items()
            if k in cls.__dataclass_fields__
        })


def _config_path(environ: Mapping[str, str]) -> Optional[Path]:
    explicit = environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit).expanduser()
    default = DEFAULT_CONFIG_PATH.expanduser()
    return default if default.exists() else None


def _check_types(settings: Settings, path: Path) -> None:
    """Reject setting values of the wrong JSON type."""
    indent = settings.json_indent
    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
        raise FilesystemError(
            f"Invalid settings file {path}: json_indent must be a non-negative integer, got {indent!r}",
            path=path,
        )
    if settings.templates_dir is not None and not isinstance(settings.templates_dir, str):
        raise FilesystemError(
            f"Invalid settings file {path}: templates_dir must be a string, got {settings.templates_dir!r}",
            path=path,
        )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Load settings from the config file and environment.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Settings instance

    Raises:
        FilesystemError: If the config file cannot be read or parsed,
            or holds a value of the wrong type
    """
    env = os.environ if environ is None else environ
    settings = Settings()

    path = _config_path(env)
    if path is not None:
        logger.debug("Loading settings from %s", path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise FilesystemError(f"Cannot read settings file {path}: {e}", path=path) from e
        except json.JSONDecodeError as e:
            raise FilesystemError(f"Invalid settings file {path}: {e}", path=path) from e
        if not isinstance(data, dict):
            raise FilesystemError(f"Settings file {path} must contain a JSON object", path=path)
        settings = Settings.from_dict(data)
        _check_types(settings, path)

    templates_dir = env.get(TEMPLATES_DIR_ENV_VAR)
    if templates_dir:
        settings.templates_dir = templates_dir

    return settings
