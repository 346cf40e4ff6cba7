"""Blanking — replace a captured span with same-width filler."""
from __future__ import annotations


def blank(capture: str | None, filler: str) -> str:
    """Return *capture* with every character except newlines replaced by *filler*.

    Each line is blanked on its own and re-joined with ``"\\n"``, so the
    result has the same rows as the capture and, for a one-character
    filler, the same width on every row.  With an empty filler (compact
    mode) only the newlines survive.

    >>> blank("**", ".")
    '..'
    >>> blank("ab\\ncde", ".")
    '..\\n...'
    """
    if not capture:
        return ""
    return "\n".join(filler * len(line) for line in capture.split("\n"))
