"""Easy child process execution with errors that say which command failed.

Usage:
    from easy_command import EasyCommand

    EasyCommand.simple("git", ["status", "--short"]).run()
"""

from __future__ import annotations

from .command import EasyCommand
from .config import CommandConfigError, CommandSpec, load_command, load_command_specs
from .errors import (
    ExecuteError,
    Invocation,
    RunError,
    SpawnAndWaitError,
    SpawnAndWaitFailed,
    SpawnError,
    UnsuccessfulExitCodeError,
    WaitForExitCodeError,
)
from .log import TRACE
from .process import Child, Command, ExitStatus, Output, Stdio
from .report import format_error, format_error_chain, iter_error_chain, print_error, render_error

__version__ = "0.1.0"

__all__ = [
    "Child",
    "Command",
    "CommandConfigError",
    "CommandSpec",
    "EasyCommand",
    "ExecuteError",
    "ExitStatus",
    "Invocation",
    "Output",
    "RunError",
    "SpawnAndWaitError",
    "SpawnAndWaitFailed",
    "SpawnError",
    "Stdio",
    "TRACE",
    "UnsuccessfulExitCodeError",
    "WaitForExitCodeError",
    "format_error",
    "format_error_chain",
    "iter_error_chain",
    "load_command",
    "load_command_specs",
    "print_error",
    "render_error",
    "__version__",
]
