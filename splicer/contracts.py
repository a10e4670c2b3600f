# splicer/contracts.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


# ---- Canonical delimiters ----
# Executable regions of the output are wrapped in these.
SCRIPT_OPEN = "<script"
SCRIPT_CLOSE = "</script>"
LINE_TERMINATOR = "\n"


@dataclass(frozen=True)
class SourceDocument:
    """Raw document text plus its 1-based line index. Lines are never mutated."""
    text: str
    lines: Tuple[str, ...]

    @property
    def line_count(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class ExtractionSpec:
    """One requested line range. Constructed per output segment, consumed once."""
    name: str
    start_line: int
    end_line: int
    sanitize: bool = False


class SegmentKind(str, Enum):
    EXTRACTED_RAW = "extracted_raw"
    EXTRACTED_SANITIZED = "extracted_sanitized"
    LITERAL_TEMPLATE = "literal_template"


@dataclass(frozen=True)
class Segment:
    kind: SegmentKind
    name: str
    text: str


@dataclass(frozen=True)
class OutputDocument:
    """Concatenation of segments, in exactly the order they were declared."""
    text: str
    segments: Tuple[Segment, ...]

    @property
    def line_count(self) -> int:
        return self.text.count(LINE_TERMINATOR) + 1


@dataclass(frozen=True)
class CodeBlock:
    """
    A <script> block discovered by re-scanning the output.

    index is the 1-based discovery ordinal; it is unrelated to segment order.
    """
    index: int
    start_offset: int
    attributes: str
    raw_content: str
    executable: bool = True
    # type="module": import/export allowed
    module: bool = False
