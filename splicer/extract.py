# splicer/extract.py
from __future__ import annotations

from typing import Sequence

from .contracts import LINE_TERMINATOR


class RangeError(ValueError):
    """Requested line range does not fit the document. Never clamped."""


def extract_range(lines: Sequence[str], start: int, end: int) -> str:
    """
    Return lines start..end (1-based, inclusive) joined with the line terminator.

    Fails closed if start < 1, end > len(lines) or start > end.
    """
    total = len(lines)
    if start < 1 or end > total or start > end:
        raise RangeError(f"Invalid line range: {start}-{end} (document has {total} lines)")

    return LINE_TERMINATOR.join(lines[start - 1:end])
