"""Named command presets stored in YAML.

A presets file looks like::

    commands:
      lint:
        program: ruff
        args: [check, src]
        env:
          RUFF_CACHE_DIR: /tmp/ruff
      build:
        program: python
        args: [-m, build]
        cwd: packages/core
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .command import EasyCommand
from .process import Command

__all__ = [
    "CommandConfigError",
    "CommandSpec",
    "load_command",
    "load_command_specs",
]


class CommandConfigError(RuntimeError):
    """Raised when a command presets file is invalid."""


class CommandSpec(BaseModel):
    """A single configured command."""

    program: str
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)
    env_remove: list[str] = Field(default_factory=list)
    env_clear: bool = False
    cwd: str | None = None

    @field_validator("program")
    @classmethod
    def validate_program(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("program must not be empty")
        return value

    def _configure(self, command: Command) -> Command:
        # Clearing first so explicit env entries survive it.
        if self.env_clear:
            command.env_clear()
        command.args(self.args).envs(self.env)
        for key in self.env_remove:
            command.env_remove(key)
        if self.cwd is not None:
            command.current_dir(self.cwd)
        return command

    def to_easy_command(self, logger: logging.Logger | None = None) -> EasyCommand:
        return EasyCommand.new_with(self.program, self._configure, logger=logger)


def load_command_specs(path: Path) -> dict[str, CommandSpec]:
    """Load every preset from ``path``; a missing file has no presets."""
    if not path.exists():
        return {}

    yaml = YAML(typ="safe")
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle) or {}
    except YAMLError as exc:
        raise CommandConfigError(f"Failed to parse {path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise CommandConfigError(f"{path} must contain a mapping at the top level")

    commands = payload.get("commands") or {}
    if not isinstance(commands, dict):
        raise CommandConfigError(f"'commands' in {path} must be a mapping of names to commands")

    specs: dict[str, CommandSpec] = {}
    for name, data in commands.items():
        try:
            specs[str(name)] = CommandSpec.model_validate(data)
        except ValidationError as exc:
            raise CommandConfigError(f"Invalid command '{name}' in {path}: {exc}") from exc
    return specs


def load_command(path: Path, name: str, logger: logging.Logger | None = None) -> EasyCommand:
    """Build the :class:`EasyCommand` for preset ``name``."""
    specs = load_command_specs(path)
    try:
        spec = specs[name]
    except KeyError:
        known = ", ".join(sorted(specs)) or "none"
        raise CommandConfigError(f"No command named '{name}' in {path} (known: {known})") from None
    return spec.to_easy_command(logger=logger)
