"""Strip pipeline — runs RULES in order over one private buffer.

Faults inside a rule never reach the caller as an exception (unless
``strict=True``): the pipeline reports a FailureEvent to the configured
observer and returns ``None``, which no successful strip can produce.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from src.shared.config import StripConfig, get_config
from src.shared.failure import FailureEvent
from src.strip.layout import compact_newlines
from src.strip.rules import RULES, Rule

log = structlog.get_logger()


class StripError(RuntimeError):
    """Raised in strict mode; the original fault is ``__cause__``."""

    def __init__(self, rule: str | None, error: BaseException) -> None:
        super().__init__(f"strip failed in {rule or 'pipeline'}: {error!r}")
        self.rule = rule


def _rule_name(rule: Any) -> str:
    return getattr(rule, "__name__", repr(rule))


class MarkdownStripper:
    """Reusable stripper bound to one immutable config.

    Safe to share between threads: neither the config nor the rule tuple
    is mutated after construction.
    """

    def __init__(
        self,
        config: StripConfig | None = None,
        rules: Sequence[Rule] = RULES,
    ) -> None:
        self.config = config if config is not None else StripConfig()
        self.rules = tuple(rules)

    def __call__(self, text: str, *, strict: bool = False) -> str | None:
        buffer = text
        current: str | None = None
        try:
            for rule in self.rules:
                current = _rule_name(rule)
                buffer = rule(buffer, self.config)
            if self.config.compact_output:
                current = _rule_name(compact_newlines)
                buffer = compact_newlines(buffer)
        except Exception as exc:
            self._report(FailureEvent(error=exc, input=text, rule=current))
            if strict:
                raise StripError(current, exc) from exc
            return None
        return buffer

    def _report(self, event: FailureEvent) -> None:
        try:
            self.config.failure_observer(event)
        except Exception as exc:
            log.warning("failure_observer_failed", rule=event.rule, error=str(exc))


def strip_markdown(
    text: str,
    config: StripConfig | None = None,
    *,
    strict: bool = False,
    **options: Any,
) -> str | None:
    """Strip markdown from *text*, keeping its layout.

    Args:
        text:    Markdown source.
        config:  Prebuilt config; when omitted one is built from *options*
                 (and env) via :func:`get_config`.
        strict:  Raise :class:`StripError` instead of returning ``None``.

    Returns:
        The stripped text, or ``None`` if a rule faulted.
    """
    if config is None:
        config = get_config(options)
    return MarkdownStripper(config)(text, strict=strict)
