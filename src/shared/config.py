"""Strip configuration — one immutable value shared by every rewrite rule.

Callers build it once and reuse it across documents. get_config(options)
layers explicit options over environment overrides over defaults, and never
rejects a bad option: unknown keys are ignored and keys with invalid values
fall back to their default.

Env overrides:
  STRIP_FILLER          — filler string (default one space)
  STRIP_COMPACT_OUTPUT  — delete markup instead of blanking it
  STRIP_CODE            — blank code spans and blocks
  STRIP_LIST_MARKERS    — blank list bullets
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, ValidationError

from src.shared.failure import FailureObserver, log_failure, logger_observer

log = structlog.get_logger()

_ENV_KEYS: dict[str, str] = {
    "filler": "STRIP_FILLER",
    "compact_output": "STRIP_COMPACT_OUTPUT",
    "strip_code": "STRIP_CODE",
    "strip_list_markers": "STRIP_LIST_MARKERS",
}

# Option names used by older callers.
_LEGACY_KEYS: dict[str, str] = {
    "separator": "filler",
    "prettify": "compact_output",
    "strip_code_blocks": "strip_code",
    "strip_list_leaders": "strip_list_markers",
}


class StripConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    filler: str = " "
    compact_output: bool = False
    strip_code: bool = True
    strip_list_markers: bool = True
    failure_observer: FailureObserver = log_failure

    @property
    def separator(self) -> str:
        """Filler actually written by the rules: empty in compact mode."""
        return "" if self.compact_output else self.filler


def _env_options() -> dict[str, Any]:
    return {key: os.environ[env] for key, env in _ENV_KEYS.items() if env in os.environ}


def get_config(options: Mapping[str, Any] | None = None, **overrides: Any) -> StripConfig:
    """Build a StripConfig from env, *options* and *overrides* (last wins).

    A legacy ``logger`` option becomes the failure observer unless
    ``failure_observer`` is given too.
    """
    values = _env_options()
    merged = {**(options or {}), **overrides}
    logger = merged.pop("logger", None)
    for key, value in merged.items():
        values[_LEGACY_KEYS.get(key, key)] = value
    if logger is not None and "failure_observer" not in values:
        values["failure_observer"] = logger_observer(logger)

    try:
        return StripConfig.model_validate(values)
    except ValidationError as exc:
        bad = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
        log.warning("config_invalid_keys", keys=sorted(bad), using="defaults")
        return StripConfig.model_validate({k: v for k, v in values.items() if k not in bad})
