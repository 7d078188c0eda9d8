from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

from easy_command import EasyCommand


@pytest.fixture()
def python_command() -> Callable[..., EasyCommand]:
    """Factory for commands running an inline Python snippet in a fresh interpreter."""

    def _build(code: str, *extra_args: str) -> EasyCommand:
        return EasyCommand.simple(sys.executable, ["-c", code, *extra_args])

    return _build


@pytest.fixture()
def missing_program(tmp_path: Path) -> str:
    return str(tmp_path / "no such dir" / "definitely-not-a-program")
