"""Logging helpers shared by the package."""

from __future__ import annotations

import logging

__all__ = ["TRACE"]

# Finer than DEBUG; used for messages emitted while blocking on a child.
TRACE = 5

logging.addLevelName(TRACE, "TRACE")
