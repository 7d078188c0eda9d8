"""Exception hierarchy for command execution.

Each execution mode of :class:`~easy_command.command.EasyCommand` has its own
closed set of error kinds. Whatever the mode, the error that reaches the
caller is an :class:`ExecuteError` naming the invocation, with the kind as
its ``source`` (and ``__cause__``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

__all__ = [
    "ExecuteError",
    "Invocation",
    "RunError",
    "SpawnAndWaitError",
    "SpawnAndWaitFailed",
    "SpawnError",
    "UnsuccessfulExitCodeError",
    "WaitForExitCodeError",
]

E = TypeVar("E", bound=BaseException)


@dataclass(frozen=True)
class Invocation:
    """Shell-quoted command line captured when an execution method is called."""

    shell_words: str

    def __str__(self) -> str:
        return self.shell_words


class ExecuteError(Exception, Generic[E]):
    """Raised by every execution method of ``EasyCommand``."""

    __match_args__ = ("source",)

    def __init__(self, invocation: Invocation, source: E):
        self.invocation = invocation
        self.source = source
        super().__init__(f"failed to execute `{invocation.shell_words}`")


# Spawn-and-wait kinds


class SpawnAndWaitError(Exception):
    """Base exception for ``EasyCommand.spawn_and_wait`` failures."""

    __match_args__ = ("source",)
    message = "spawn-and-wait failed"

    def __init__(self, source: OSError):
        self.source = source
        super().__init__(self.message)


class SpawnError(SpawnAndWaitError):
    """The process could not be started."""

    message = "failed to spawn"


class WaitForExitCodeError(SpawnAndWaitError):
    """The process started, but waiting for it to exit failed."""

    message = "failed to wait for exit code"


# Run kinds


class RunError(Exception):
    """Base exception for ``EasyCommand.run`` failures."""


class SpawnAndWaitFailed(RunError):
    """The underlying spawn-and-wait stage failed.

    Displays exactly like the wrapped error.
    """

    __match_args__ = ("source",)
    transparent = True

    def __init__(self, source: SpawnAndWaitError):
        self.source = source
        super().__init__(str(source))


class UnsuccessfulExitCodeError(RunError):
    """The process ran but did not exit successfully."""

    __match_args__ = ("code",)

    def __init__(self, code: int | None):
        self.code = code
        if code is None:
            message = "returned no exit code"
        else:
            message = f"returned exit code {code}"
        super().__init__(message)
