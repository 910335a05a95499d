"""Option resolution: flags + interactive answers + defaults.

Raw input is a mapping from option name to the value the user supplied.
A missing key means "not supplied", which is different from a supplied
False. Only missing options are ever prompted for.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from tsnew.errors import ValidationError
from tsnew.models import PackageManager, Preset, ResolvedConfig
from tsnew.prompts import Prompter

logger = logging.getLogger(__name__)

RawOptions = Mapping[str, Any]

# Fixed defaults for every option except the project name
DEFAULTS: Dict[str, Any] = {
    "preset": Preset.BASE.value,
    "esm": False,
    "eslint": False,
    "prettier": False,
    "package_manager": PackageManager.NPM.value,
    "skip_install": False,
    "git": False,
}

BOOLEAN_OPTIONS = ("esm", "eslint", "prettier", "skip_install", "git", "yes")

# (option, kind, question) in the order they are asked
QUESTIONS: List[Tuple[str, str, str]] = [
    ("preset", "choice", "Project preset"),
    ("esm", "yes_no", "Use ES modules?"),
    ("eslint", "yes_no", "Add ESLint?"),
    ("prettier", "yes_no", "Add Prettier?"),
    ("package_manager", "choice", "Package manager"),
    ("skip_install", "yes_no", "Skip dependency installation?"),
    ("git", "yes_no", "Initialize a git repository?"),
]

CHOICES: Dict[str, List[str]] = {
    "preset": [p.value for p in Preset],
    "package_manager": [pm.value for pm in PackageManager],
}

_TRUE_STRINGS = {"true", "1", "yes", "y", "on"}
_FALSE_STRINGS = {"false", "0", "no", "n", "off"}


def parse_bool(option: str, value: Any) -> bool:
    """Interpret a raw boolean option value."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ValidationError(f"Invalid value for --{option.replace('_', '-')}: {value}")


def parse_preset(value: Any) -> Preset:
    try:
        return Preset(value)
    except ValueError:
        available = ", ".join(CHOICES["preset"])
        raise ValidationError(f"Invalid preset: {value}. Available: {available}")


def normalize_package_manager(value: Any) -> str:
    return str(value).strip().lower()


def parse_package_manager(value: Any) -> PackageManager:
    try:
        return PackageManager(normalize_package_manager(value))
    except ValueError:
        available = ", ".join(CHOICES["package_manager"])
        raise ValidationError(f"Invalid package manager: {value}. Available: {available}")


class OptionResolver:
    """Turns raw options into a ResolvedConfig."""

    def __init__(self, prompter: Optional[Prompter] = None):
        self.prompter = prompter

    def resolve(self, raw: RawOptions, interactive: bool = False) -> ResolvedConfig:
        """Resolve raw options.

        Args:
            raw: Supplied options; absent keys were not supplied
            interactive: Ask for options that were not supplied

        Returns:
            Validated ResolvedConfig

        Raises:
            ValidationError: On missing name, unknown preset or
                package manager, or a malformed boolean
        """
        values: Dict[str, Any] = dict(raw)
        suppress = parse_bool("yes", values.pop("yes", False))

        if interactive and not suppress:
            self._ask_missing(values)

        for option, default in DEFAULTS.items():
            values.setdefault(option, default)

        config = self._validate(values)
        logger.debug("Resolved options: %s", config.to_dict())
        return config

    def _ask_missing(self, values: Dict[str, Any]) -> None:
        if self.prompter is None:
            raise ValidationError("Interactive mode requires a terminal prompt")

        if "name" not in values or values["name"] is None:
            values["name"] = self.prompter.ask_text("Project name")

        for option, kind, question in QUESTIONS:
            if option in values:
                continue
            # Explicit Prettier already forces ESLint on
            if option == "eslint" and parse_bool("prettier", values.get("prettier", False)):
                continue
            default = DEFAULTS[option]
            if kind == "choice":
                values[option] = self.prompter.ask_choice(question, CHOICES[option], default)
            else:
                values[option] = self.prompter.ask_yes_no(question, default)

    def _validate(self, values: Dict[str, Any]) -> ResolvedConfig:
        name = str(values.get("name") or "").strip()
        if not name:
            raise ValidationError("Please provide a project name")

        preset = parse_preset(values["preset"])
        package_manager = parse_package_manager(values["package_manager"])
        flags = {option: parse_bool(option, values[option]) for option in BOOLEAN_OPTIONS if option != "yes"}

        # Prettier config ships alongside the ESLint config
        if flags["prettier"]:
            flags["eslint"] = True

        return ResolvedConfig(
            name=name,
            preset=preset,
            package_manager=package_manager,
            **flags,
        )
