"""Failure events and the observers that receive them.

The strip pipeline never lets a rule fault escape to its caller. Instead it
builds a :class:`FailureEvent` and hands it to the observer held by the
config. The default observer logs through structlog.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog

log = structlog.get_logger()

# Longest input prefix carried in the default log line.
_LOG_INPUT_CHARS = 500


@dataclass(frozen=True)
class FailureEvent:
    error: BaseException
    input: str
    rule: str | None = None


FailureObserver = Callable[[FailureEvent], None]


def log_failure(event: FailureEvent) -> None:
    """Default observer: log the error, then the offending input."""
    log.error("strip_failed",
              rule=event.rule,
              error=repr(event.error),
              input_len=len(event.input) if isinstance(event.input, str) else None)
    log.info("strip_failed_input", input=str(event.input)[:_LOG_INPUT_CHARS])


def ignore_failure(event: FailureEvent) -> None:  # noqa: ARG001
    """No-op observer for callers that only care about the return value."""


def logger_observer(logger: Any) -> FailureObserver:
    """Observer for callers still passing a ``logger`` option.

    Reports the way those callers expect: ``logger.error(error)`` followed
    by ``logger.info(input)``.
    """
    def _observe(event: FailureEvent) -> None:
        logger.error(event.error)
        logger.info(event.input)

    return _observe
