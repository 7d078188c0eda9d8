"""Process configuration and spawning primitives.

This module holds the thin layer over :mod:`subprocess` that the rest of the
package builds on:
    - Command: fluent process configuration (program, args, env, cwd, stdio)
    - Child: handle to a spawned process
    - ExitStatus / Output: results of waiting on a child

Nothing here adds context to errors; failures surface as plain ``OSError``.
"""

from __future__ import annotations

import errno
import os
import signal as _signal
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import IO, Iterable, Mapping, Union

__all__ = [
    "ArgLike",
    "Child",
    "Command",
    "ExitStatus",
    "Output",
    "Stdio",
    "StdioConfig",
]

ArgLike = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]


class Stdio(Enum):
    """How a standard stream of the child is wired."""

    INHERIT = "inherit"
    PIPED = "piped"
    NULL = "null"


StdioConfig = Union[Stdio, int, IO]

_STDIO_TO_SUBPROCESS = {
    Stdio.INHERIT: None,
    Stdio.PIPED: subprocess.PIPE,
    Stdio.NULL: subprocess.DEVNULL,
}


def _invalid_input(exc: ValueError) -> OSError:
    # Embedded NUL bytes and "=" in env names never reach the OS.
    return OSError(errno.EINVAL, str(exc))


def _to_popen_stdio(value: StdioConfig | None, default: StdioConfig) -> object:
    if value is None:
        value = default
    if isinstance(value, Stdio):
        return _STDIO_TO_SUBPROCESS[value]
    return value


@dataclass(frozen=True)
class ExitStatus:
    """Termination outcome of a child process.

    ``returncode`` follows :class:`subprocess.Popen` conventions: a negative
    value ``-N`` means the child was killed by signal ``N``.
    """

    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def code(self) -> int | None:
        """Exit code, or ``None`` if the process was terminated by a signal."""
        if self.returncode < 0:
            return None
        return self.returncode

    @property
    def signal(self) -> int | None:
        if self.returncode < 0:
            return -self.returncode
        return None

    def __str__(self) -> str:
        signum = self.signal
        if signum is None:
            return f"exit status: {self.returncode}"
        try:
            name = _signal.Signals(signum).name
        except ValueError:
            return f"signal: {signum}"
        return f"signal: {signum} ({name})"


@dataclass(frozen=True)
class Output:
    """Exit status plus the captured standard streams of a finished child."""

    status: ExitStatus
    stdout: bytes
    stderr: bytes


class Child:
    """A running (or finished) child process spawned from a :class:`Command`."""

    def __init__(self, popen: subprocess.Popen):
        self._popen = popen

    @property
    def pid(self) -> int:
        return self._popen.pid

    @property
    def stdin(self) -> IO[bytes] | None:
        return self._popen.stdin

    @property
    def stdout(self) -> IO[bytes] | None:
        return self._popen.stdout

    @property
    def stderr(self) -> IO[bytes] | None:
        return self._popen.stderr

    def wait(self) -> ExitStatus:
        """Block until the child exits.

        Raises:
            OSError: If the OS refused to report the child's termination.
        """
        returncode = self._popen.wait()
        return ExitStatus(returncode)

    def close(self) -> None:
        """Release pipe handles held for the child. Does not wait or kill."""
        for stream in (self._popen.stdin, self._popen.stdout, self._popen.stderr):
            if stream is not None:
                stream.close()

    def __enter__(self) -> "Child":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Child(pid={self.pid})"


class Command:
    """Fluent configuration for a process to be spawned.

    Every mutator returns ``self`` so calls can be chained::

        Command("git").args(["status", "--short"]).current_dir(repo)
    """

    def __init__(self, program: ArgLike):
        self._program: str | bytes = os.fspath(program)
        self._args: list[str | bytes] = []
        self._env_changes: dict[str, str | None] = {}
        self._env_clear = False
        self._cwd: str | bytes | None = None
        self._stdin: StdioConfig | None = None
        self._stdout: StdioConfig | None = None
        self._stderr: StdioConfig | None = None

    # Configuration

    def arg(self, value: ArgLike) -> "Command":
        self._args.append(os.fspath(value))
        return self

    def args(self, values: Iterable[ArgLike]) -> "Command":
        if isinstance(values, (str, bytes)):
            raise TypeError("args() expects an iterable of arguments, not a single string; use arg()")
        for value in values:
            self.arg(value)
        return self

    def env(self, key: str, value: str) -> "Command":
        self._env_changes[key] = value
        return self

    def envs(self, values: Mapping[str, str]) -> "Command":
        for key, value in values.items():
            self.env(key, value)
        return self

    def env_remove(self, key: str) -> "Command":
        self._env_changes[key] = None
        return self

    def env_clear(self) -> "Command":
        self._env_changes.clear()
        self._env_clear = True
        return self

    def current_dir(self, path: ArgLike) -> "Command":
        self._cwd = os.fspath(path)
        return self

    def stdin(self, cfg: StdioConfig) -> "Command":
        self._stdin = cfg
        return self

    def stdout(self, cfg: StdioConfig) -> "Command":
        self._stdout = cfg
        return self

    def stderr(self, cfg: StdioConfig) -> "Command":
        self._stderr = cfg
        return self

    # Inspection

    def get_program(self) -> str | bytes:
        return self._program

    def get_args(self) -> tuple[str | bytes, ...]:
        return tuple(self._args)

    def get_envs(self) -> dict[str, str | None]:
        return dict(self._env_changes)

    def get_current_dir(self) -> str | bytes | None:
        return self._cwd

    # Execution

    def _resolve_env(self) -> dict[str, str] | None:
        if not self._env_clear and not self._env_changes:
            return None
        env = {} if self._env_clear else dict(os.environ)
        for key, value in self._env_changes.items():
            if value is None:
                env.pop(key, None)
            else:
                env[key] = value
        return env

    def _popen_kwargs(self, default_stdin: StdioConfig, default_out: StdioConfig) -> dict[str, object]:
        return {
            "env": self._resolve_env(),
            "cwd": self._cwd,
            "stdin": _to_popen_stdio(self._stdin, default_stdin),
            "stdout": _to_popen_stdio(self._stdout, default_out),
            "stderr": _to_popen_stdio(self._stderr, default_out),
        }

    def spawn(self) -> Child:
        """Start the process, inheriting any stream not configured otherwise.

        Raises:
            OSError: If the process could not be started.
        """
        try:
            popen = subprocess.Popen(
                [self._program, *self._args],
                **self._popen_kwargs(Stdio.INHERIT, Stdio.INHERIT),
            )
        except ValueError as exc:
            raise _invalid_input(exc) from exc
        return Child(popen)

    def output(self) -> Output:
        """Run the process to completion, capturing stdout and stderr.

        Stdin reads from ``/dev/null`` unless configured otherwise.

        Raises:
            OSError: If the process could not be started or its output collected.
        """
        try:
            completed = subprocess.run(
                [self._program, *self._args],
                check=False,
                **self._popen_kwargs(Stdio.NULL, Stdio.PIPED),
            )
        except ValueError as exc:
            raise _invalid_input(exc) from exc
        return Output(
            status=ExitStatus(completed.returncode),
            stdout=completed.stdout or b"",
            stderr=completed.stderr or b"",
        )

    def __repr__(self) -> str:
        parts = [repr(self._program), *(repr(a) for a in self._args)]
        text = f"Command([{', '.join(parts)}]"
        if self._cwd is not None:
            text += f", cwd={self._cwd!r}"
        if self._env_clear or self._env_changes:
            text += f", env_clear={self._env_clear}, env={self._env_changes!r}"
        return text + ")"
