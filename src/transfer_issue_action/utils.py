"""
Logging setup for the issue transfer action.
"""

from __future__ import annotations

import logging
from typing import Final, TypeAlias

RUN_LOGGER_NAME: Final[str] = "transfer_issue_action.run"


def setup_logging(*, verbose: bool = False) -> None:
    """Configure process logging for the action."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


class RunLogger(logging.LoggerAdapter[logging.Logger]):
    """Adapter over the shared run logger that carries its own level.

    Each workflow gets its own adapter, so the level chosen for one run never
    leaks into another run in the same process.
    """

    def __init__(self, logger: logging.Logger, level: int = logging.INFO) -> None:
        super().__init__(logger, {})
        self.level: int = level

    def setLevel(self, level: int) -> None:  # noqa: N802
        self.level = level

    def getEffectiveLevel(self) -> int:  # noqa: N802
        return self.level

    def isEnabledFor(self, level: int) -> bool:  # noqa: N802
        return level >= self.level


# Anything a workflow step accepts as its logger
StepLogger: TypeAlias = logging.Logger | RunLogger


def make_run_logger(*, debug: bool = False) -> RunLogger:
    """Return a fresh logger for one workflow run.

    Its level follows the ``debug`` input of the run instead of a process-wide
    switch. The shared logger underneath stays at DEBUG and the adapter does
    the filtering.
    """
    base = logging.getLogger(RUN_LOGGER_NAME)
    base.setLevel(logging.DEBUG)
    return RunLogger(base, logging.DEBUG if debug else logging.INFO)
