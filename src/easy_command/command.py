"""EasyCommand: a convenience wrapper around :class:`~easy_command.process.Command`.

EasyCommand offers:
    - A readable ``str()`` showing the shell-quoted command line
    - Errors that always say which command failed and at which stage
    - Logging of every spawn and exit through :mod:`logging`
"""

from __future__ import annotations

import logging
import shlex
from typing import Callable, Iterable

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
from .process import ArgLike, Command, ExitStatus, Output

__all__ = ["EasyCommand"]

_logger = logging.getLogger(__name__)


def _lossy_text(value: str | bytes) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


class EasyCommand:
    """A convenience API around :class:`Command`.

    The wrapped command is reachable through :attr:`command` for any
    configuration the constructors do not cover.
    """

    def __init__(self, command: Command, *, logger: logging.Logger | None = None):
        self._inner = command
        self._logger = logger if logger is not None else _logger

    @classmethod
    def new(cls, program: ArgLike, *, logger: logging.Logger | None = None) -> "EasyCommand":
        """Wrap a command running ``program`` with no arguments."""
        return cls.new_with(program, lambda cmd: cmd, logger=logger)

    @classmethod
    def new_with(
        cls,
        program: ArgLike,
        customize: Callable[[Command], Command],
        *,
        logger: logging.Logger | None = None,
    ) -> "EasyCommand":
        """Build a command and let ``customize`` configure it before wrapping.

        ``customize`` receives the fresh :class:`Command` and is expected to
        return it, which allows chaining::

            EasyCommand.new_with("git", lambda c: c.arg("status").current_dir(repo))
        """
        command = Command(program)
        customize(command)
        return cls(command, logger=logger)

    @classmethod
    def simple(
        cls,
        program: ArgLike,
        args: Iterable[ArgLike],
        *,
        logger: logging.Logger | None = None,
    ) -> "EasyCommand":
        """Like :meth:`new_with`, but only appends ``args`` in order."""
        return cls.new_with(program, lambda cmd: cmd.args(args), logger=logger)

    @property
    def command(self) -> Command:
        return self._inner

    @property
    def shell_words(self) -> str:
        """Program and arguments joined with shell quoting."""
        tokens = [self._inner.get_program(), *self._inner.get_args()]
        return shlex.join(_lossy_text(token) for token in tokens)

    def invocation(self) -> Invocation:
        return Invocation(self.shell_words)

    # Spawn and wait

    def _spawn_and_wait(self) -> ExitStatus:
        self._logger.debug("spawning child process with %s...", self)
        try:
            child = self._inner.spawn()
        except OSError as exc:
            raise SpawnError(exc) from exc

        with child:
            self._logger.log(TRACE, "waiting for exit from %s...", self)
            try:
                status = child.wait()
            except OSError as exc:
                raise WaitForExitCodeError(exc) from exc
        self._logger.debug("received exit code %r from %s", status.code, self)
        return status

    def spawn_and_wait(self) -> ExitStatus:
        """Execute this command and return its exit status.

        Standard streams are inherited from the parent unless configured
        otherwise on :attr:`command`. The status is returned as-is, whether
        or not it indicates success.

        If waiting fails, the child's pipes are closed but the child is
        neither killed nor reaped, so :mod:`subprocess` may later emit a
        ``ResourceWarning`` for it.

        Raises:
            ExecuteError: With a :class:`SpawnError` or
                :class:`WaitForExitCodeError` as its source.
        """
        invocation = self.invocation()
        try:
            return self._spawn_and_wait()
        except SpawnAndWaitError as exc:
            raise ExecuteError(invocation, exc) from exc

    # Run

    def _run(self) -> None:
        try:
            status = self._spawn_and_wait()
        except SpawnAndWaitError as exc:
            raise SpawnAndWaitFailed(exc) from exc

        if not status.success:
            raise UnsuccessfulExitCodeError(status.code)

    def run(self) -> None:
        """Execute this command, failing unless it exits successfully.

        Raises:
            ExecuteError: With a :class:`SpawnAndWaitFailed` or
                :class:`UnsuccessfulExitCodeError` as its source.
        """
        invocation = self.invocation()
        try:
            self._run()
        except RunError as exc:
            raise ExecuteError(invocation, exc) from exc

    # Output

    def _output(self) -> Output:
        self._logger.debug("getting output from %s...", self)
        output = self._inner.output()
        self._logger.debug("received exit code %r from %s", output.status.code, self)
        return output

    def output(self) -> Output:
        """Execute this command, capturing its stdout and stderr.

        Raises:
            ExecuteError: With the ``OSError`` raised while starting the
                process or collecting its output as its source.
        """
        invocation = self.invocation()
        try:
            return self._output()
        except OSError as exc:
            raise ExecuteError(invocation, exc) from exc

    def __repr__(self) -> str:
        return repr(self._inner)

    def __str__(self) -> str:
        return f"`{self.shell_words}`"
