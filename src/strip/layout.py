"""Blank-line compaction for compact output."""
from __future__ import annotations

import re

_NEWLINE_RUN = re.compile(r"\n{2,}")


def compact_newlines(text: str) -> str:
    """Collapse every run of 2+ newlines into a single blank line."""
    return _NEWLINE_RUN.sub("\n\n", text)
