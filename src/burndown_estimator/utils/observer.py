"""Progress and message reporting for the burndown pipeline.

Nodes never print. They report through a ``BurndownObserver`` that the caller
injects; the default routes everything to the package logger.
"""

from __future__ import annotations

import logging
from typing import Protocol

from burndown_estimator import config


class BurndownObserver(Protocol):
    def message(self, text: str) -> None: ...

    def progress(self, done: int, total: int) -> None: ...


class LoggingObserver:
    """Observer backed by the standard ``logging`` module."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(config.LOGGER_NAME)

    def message(self, text: str) -> None:
        self.logger.info(text)

    def progress(self, done: int, total: int) -> None:
        self.logger.debug("interpolated %d/%d age bands", done, total)


class NullObserver:
    def message(self, text: str) -> None:
        pass

    def progress(self, done: int, total: int) -> None:
        pass


class RecordingObserver:
    """Keeps every message and progress tick in memory."""

    def __init__(self) -> None:
        self.messages: list[str] = []
        self.ticks: list[tuple[int, int]] = []

    def message(self, text: str) -> None:
        self.messages.append(text)

    def progress(self, done: int, total: int) -> None:
        self.ticks.append((done, total))


def default_observer() -> BurndownObserver:
    return LoggingObserver()
