"""Tests for tsnew.options module."""

import dataclasses

import pytest

from conftest import QUESTION_FOR, ScriptedPrompter
from tsnew.errors import ValidationError
from tsnew.models import PackageManager, Preset, ResolvedConfig
from tsnew.options import OptionResolver, normalize_package_manager, parse_bool


class TestDefaults:
    """Resolution with nothing but a name."""

    @pytest.mark.parametrize("preset", [p.value for p in Preset])
    def test_defaults_for_every_preset(self, preset):
        config = OptionResolver().resolve({"name": "app", "preset": preset})
        assert config.preset == Preset(preset)
        assert config.package_manager == PackageManager.NPM
        assert config.esm is False
        assert config.eslint is False
        assert config.prettier is False
        assert config.skip_install is False
        assert config.git is False

    def test_default_preset_is_base(self):
        config = OptionResolver().resolve({"name": "app"})
        assert config.preset == Preset.BASE

    def test_name_is_trimmed(self):
        config = OptionResolver().resolve({"name": "  app  "})
        assert config.name == "app"

    def test_result_is_frozen(self):
        config = OptionResolver().resolve({"name": "app"})
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.esm = True


class TestImplications:
    """Tests for flags that turn on other flags."""

    def test_prettier_implies_eslint(self):
        config = OptionResolver().resolve({"name": "app", "prettier": True})
        assert config.prettier is True
        assert config.eslint is True

    def test_explicit_no_eslint_with_prettier_still_lints(self):
        config = OptionResolver().resolve({"name": "app", "prettier": True, "eslint": False})
        assert config.eslint is True

    def test_eslint_does_not_imply_prettier(self):
        config = OptionResolver().resolve({"name": "app", "eslint": True})
        assert config.eslint is True
        assert config.prettier is False


class TestValidation:
    """Tests for rejected input."""

    def test_missing_name(self):
        with pytest.raises(ValidationError, match="project name"):
            OptionResolver().resolve({})

    def test_blank_name(self):
        with pytest.raises(ValidationError, match="project name"):
            OptionResolver().resolve({"name": "   "})

    def test_unknown_preset(self):
        with pytest.raises(ValidationError, match="Invalid preset: react"):
            OptionResolver().resolve({"name": "app", "preset": "react"})

    def test_preset_is_case_sensitive(self):
        with pytest.raises(ValidationError):
            OptionResolver().resolve({"name": "app", "preset": "Library"})

    @pytest.mark.parametrize("value,expected", [
        ("pnpm", PackageManager.PNPM),
        ("PNPM", PackageManager.PNPM),
        (" Bun ", PackageManager.BUN),
        ("Npm", PackageManager.NPM),
    ])
    def test_package_manager_normalized(self, value, expected):
        config = OptionResolver().resolve({"name": "app", "package_manager": value})
        assert config.package_manager == expected

    @pytest.mark.parametrize("value", ["yarn", "YARN", "npm7", ""])
    def test_unknown_package_manager(self, value):
        with pytest.raises(ValidationError, match="Invalid package manager"):
            OptionResolver().resolve({"name": "app", "package_manager": value})

    def test_invalid_boolean(self):
        with pytest.raises(ValidationError, match="--skip-install"):
            OptionResolver().resolve({"name": "app", "skip_install": "sometimes"})


class TestParseBool:
    """Tests for parse_bool()."""

    @pytest.mark.parametrize("value", [True, "true", "TRUE", "1", "yes", "on"])
    def test_true_values(self, value):
        assert parse_bool("esm", value) is True

    @pytest.mark.parametrize("value", [False, "false", "0", "No", "off"])
    def test_false_values(self, value):
        assert parse_bool("esm", value) is False

    def test_string_false_is_respected(self):
        config = OptionResolver().resolve({"name": "app", "esm": "false"})
        assert config.esm is False


class TestInteractive:
    """Tests for prompting."""

    def test_non_interactive_never_prompts(self):
        prompter = ScriptedPrompter()
        OptionResolver(prompter).resolve({"name": "app"}, interactive=False)
        assert prompter.asked == []

    def test_prompts_for_every_missing_option(self):
        prompter = ScriptedPrompter({
            QUESTION_FOR["name"]: "my-app",
            QUESTION_FOR["preset"]: "backend",
            QUESTION_FOR["esm"]: True,
            QUESTION_FOR["package_manager"]: "bun",
            QUESTION_FOR["git"]: True,
        })
        config = OptionResolver(prompter).resolve({}, interactive=True)

        assert prompter.asked == [
            QUESTION_FOR[option]
            for option in ("name", "preset", "esm", "eslint", "prettier",
                           "package_manager", "skip_install", "git")
        ]
        assert config == ResolvedConfig(
            name="my-app",
            preset=Preset.BACKEND,
            esm=True,
            package_manager=PackageManager.BUN,
            git=True,
        )

    def test_unanswered_prompts_take_defaults(self):
        prompter = ScriptedPrompter()
        config = OptionResolver(prompter).resolve({"name": "app"}, interactive=True)
        assert config == ResolvedConfig(name="app")
        assert QUESTION_FOR["name"] not in prompter.asked

    def test_explicit_false_is_not_prompted(self):
        prompter = ScriptedPrompter({QUESTION_FOR["eslint"]: True})
        config = OptionResolver(prompter).resolve(
            {"name": "app", "eslint": False}, interactive=True
        )
        assert QUESTION_FOR["eslint"] not in prompter.asked
        assert config.eslint is False

    def test_explicit_values_are_never_prompted(self):
        prompter = ScriptedPrompter()
        OptionResolver(prompter).resolve(
            {"name": "app", "preset": "cli", "package_manager": "pnpm", "git": True},
            interactive=True,
        )
        for option in ("preset", "package_manager", "git"):
            assert QUESTION_FOR[option] not in prompter.asked

    def test_yes_suppresses_prompts(self):
        prompter = ScriptedPrompter()
        config = OptionResolver(prompter).resolve({"name": "app", "yes": True}, interactive=True)
        assert prompter.asked == []
        assert config == ResolvedConfig(name="app")

    def test_yes_false_still_prompts(self):
        prompter = ScriptedPrompter()
        OptionResolver(prompter).resolve({"name": "app", "yes": False}, interactive=True)
        assert len(prompter.asked) == 7

    def test_prompted_prettier_implies_eslint(self):
        prompter = ScriptedPrompter({QUESTION_FOR["prettier"]: True})
        config = OptionResolver(prompter).resolve({"name": "app"}, interactive=True)
        assert config.eslint is True
        assert config.prettier is True

    def test_explicit_prettier_skips_eslint_question(self):
        prompter = ScriptedPrompter({QUESTION_FOR["eslint"]: False})
        config = OptionResolver(prompter).resolve(
            {"name": "app", "prettier": True}, interactive=True
        )
        assert QUESTION_FOR["eslint"] not in prompter.asked
        assert len(prompter.asked) == 5
        assert config.eslint is True

    def test_explicit_no_prettier_still_asks_eslint(self):
        prompter = ScriptedPrompter()
        OptionResolver(prompter).resolve({"name": "app", "prettier": False}, interactive=True)
        assert QUESTION_FOR["eslint"] in prompter.asked

    def test_interactive_without_prompter(self):
        with pytest.raises(ValidationError):
            OptionResolver().resolve({"name": "app"}, interactive=True)


def test_normalize_package_manager():
    assert normalize_package_manager("  PnPm ") == "pnpm"
