"""Markdown file reader — strips markup from a file, layout intact."""
from __future__ import annotations

from pathlib import Path

import structlog

from src.shared.config import StripConfig
from src.strip.pipeline import strip_markdown

log = structlog.get_logger()


def strip_markdown_file(path: str | Path, config: StripConfig | None = None) -> str | None:
    """Read a markdown file and return its stripped text (None on strip failure)."""
    raw = Path(path).read_text(encoding="utf-8", errors="replace")
    result = strip_markdown(raw, config)
    if result is None:
        log.warning("strip_file_failed", path=str(path))
    return result
