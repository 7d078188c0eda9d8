"""Tests for YAML command presets."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from easy_command import (
    CommandConfigError,
    CommandSpec,
    EasyCommand,
    load_command,
    load_command_specs,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadCommandSpecs:
    def test_missing_file_has_no_presets(self, tmp_path: Path):
        assert load_command_specs(tmp_path / "commands.yaml") == {}

    def test_empty_file_has_no_presets(self, tmp_path: Path):
        assert load_command_specs(_write(tmp_path / "commands.yaml", "")) == {}

    def test_loads_all_fields(self, tmp_path: Path):
        config = _write(
            tmp_path / "commands.yaml",
            "commands:\n"
            "  lint:\n"
            "    program: ruff\n"
            "    args: [check, src]\n"
            "    env:\n"
            "      RUFF_CACHE_DIR: /tmp/ruff\n"
            "    env_remove: [VIRTUAL_ENV]\n"
            "    cwd: packages/core\n"
            "  bare:\n"
            "    program: make\n",
        )

        specs = load_command_specs(config)

        assert set(specs) == {"lint", "bare"}
        lint = specs["lint"]
        assert lint.program == "ruff"
        assert lint.args == ["check", "src"]
        assert lint.env == {"RUFF_CACHE_DIR": "/tmp/ruff"}
        assert lint.env_remove == ["VIRTUAL_ENV"]
        assert lint.env_clear is False
        assert lint.cwd == "packages/core"
        assert specs["bare"].args == []

    def test_invalid_yaml(self, tmp_path: Path):
        config = _write(tmp_path / "commands.yaml", "commands: [unclosed\n")
        with pytest.raises(CommandConfigError, match="Failed to parse"):
            load_command_specs(config)

    def test_top_level_must_be_mapping(self, tmp_path: Path):
        config = _write(tmp_path / "commands.yaml", "- just\n- a list\n")
        with pytest.raises(CommandConfigError, match="mapping at the top level"):
            load_command_specs(config)

    def test_commands_must_be_mapping(self, tmp_path: Path):
        config = _write(tmp_path / "commands.yaml", "commands:\n  - ruff\n")
        with pytest.raises(CommandConfigError, match="mapping of names"):
            load_command_specs(config)

    def test_blank_program_is_rejected(self, tmp_path: Path):
        config = _write(tmp_path / "commands.yaml", "commands:\n  broken:\n    program: '  '\n")
        with pytest.raises(CommandConfigError, match="Invalid command 'broken'") as excinfo:
            load_command_specs(config)
        assert excinfo.value.__cause__ is not None


class TestCommandSpec:
    def test_to_easy_command_applies_configuration(self, tmp_path: Path):
        spec = CommandSpec(
            program="tool",
            args=["--flag", "value with space"],
            env={"A": "1"},
            env_remove=["B"],
            env_clear=True,
            cwd=str(tmp_path),
        )

        easy = spec.to_easy_command()

        assert isinstance(easy, EasyCommand)
        assert easy.shell_words == "tool --flag 'value with space'"
        assert easy.command.get_envs() == {"A": "1", "B": None}
        assert easy.command.get_current_dir() == str(tmp_path)

    def test_preset_runs(self, tmp_path: Path):
        spec = CommandSpec(program=sys.executable, args=["-c", "import os; print(os.environ['PRESET'])"], env={"PRESET": "yes"})
        output = spec.to_easy_command().output()
        assert output.stdout.strip() == b"yes"


def test_load_command_by_name(tmp_path: Path):
    config = _write(tmp_path / "commands.yaml", "commands:\n  hello:\n    program: echo\n    args: [hi]\n")
    assert load_command(config, "hello").shell_words == "echo hi"


def test_load_command_unknown_name(tmp_path: Path):
    config = _write(tmp_path / "commands.yaml", "commands:\n  hello:\n    program: echo\n")
    with pytest.raises(CommandConfigError, match=r"No command named 'bye'.*known: hello"):
        load_command(config, "bye")
