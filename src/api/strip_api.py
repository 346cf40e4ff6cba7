"""POST /strip — strip markdown from a JSON payload, layout preserved.

Options are the same keys get_config() accepts (filler, compact_output,
strip_code, strip_list_markers); unknown or invalid ones fall back to the
defaults.
"""
from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from src.shared.config import get_config
from src.strip.pipeline import MarkdownStripper

log = structlog.get_logger()

router = APIRouter()

_LOCAL_ONLY = frozenset({"failure_observer", "logger"})


class StripRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=500_000)
    options: dict[str, Any] = Field(default_factory=dict)


class StripResponse(BaseModel):
    text: str
    line_count: int


@router.post("/strip", response_model=StripResponse)
async def strip_text(body: StripRequest) -> StripResponse:
    """Return the plain-text rendition of ``body.text``."""
    # Observers and loggers can't travel over JSON; the default (structlog) one is used.
    options = {k: v for k, v in body.options.items() if k not in _LOCAL_ONLY}
    config = get_config(options)
    result = MarkdownStripper(config)(body.text)
    if result is None:
        raise HTTPException(status_code=500, detail="strip failed")

    log.info("strip_text_done", text_len=len(body.text), compact=config.compact_output)
    return StripResponse(text=result, line_count=result.count("\n") + 1)
