# splicer/assemble.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

from .contracts import (
    SCRIPT_CLOSE,
    SCRIPT_OPEN,
    ExtractionSpec,
    OutputDocument,
    Segment,
    SegmentKind,
)
from .extract import RangeError, extract_range
from .sanitize import sanitize

logger = logging.getLogger(__name__)


class AssemblyError(ValueError):
    """Fatal: a segment could not be built. Names the segment and its range."""


def wrap_script(code: str, attributes: str = "") -> str:
    attrs = f" {attributes.strip()}" if attributes.strip() else ""
    return f"{SCRIPT_OPEN}{attrs}>\n{code}\n{SCRIPT_CLOSE}\n"


# ---- Segment builders ----
# Each builder is consumed exactly once by assemble().

@dataclass(frozen=True)
class LiteralBuilder:
    name: str
    text: str

    def build(self) -> Segment:
        return Segment(kind=SegmentKind.LITERAL_TEMPLATE, name=self.name, text=self.text)


@dataclass(frozen=True)
class RawBuilder:
    lines: Sequence[str]
    spec: ExtractionSpec

    def build(self) -> Segment:
        text = _extract(self.lines, self.spec)
        return Segment(kind=SegmentKind.EXTRACTED_RAW, name=self.spec.name, text=text)


@dataclass(frozen=True)
class CodeBuilder:
    lines: Sequence[str]
    spec: ExtractionSpec
    attributes: str = ""
    # Literal code appended inside the same block, after the extracted range.
    suffix: str = ""

    def build(self) -> Segment:
        code = sanitize(_extract(self.lines, self.spec))
        if self.suffix:
            code = f"{code}\n{self.suffix}"
        return Segment(
            kind=SegmentKind.EXTRACTED_SANITIZED,
            name=self.spec.name,
            text=wrap_script(code, self.attributes),
        )


SegmentBuilder = Union[LiteralBuilder, RawBuilder, CodeBuilder]


def _extract(lines: Sequence[str], spec: ExtractionSpec) -> str:
    try:
        return extract_range(lines, spec.start_line, spec.end_line)
    except RangeError as e:
        raise AssemblyError(
            f"Segment {spec.name!r} (lines {spec.start_line}-{spec.end_line}): {e}"
        ) from e


def literal(text: str, name: str = "literal") -> LiteralBuilder:
    return LiteralBuilder(name=name, text=text)


def extracted_raw(lines: Sequence[str], start: int, end: int, name: str = "raw") -> RawBuilder:
    return RawBuilder(lines=lines, spec=ExtractionSpec(name=name, start_line=start, end_line=end))


def extracted_code(
    lines: Sequence[str],
    start: int,
    end: int,
    name: str = "code",
    attributes: str = "",
    suffix: str = "",
) -> CodeBuilder:
    return CodeBuilder(
        lines=lines,
        spec=ExtractionSpec(name=name, start_line=start, end_line=end, sanitize=True),
        attributes=attributes,
        suffix=suffix,
    )


def assemble(builders: Iterable[SegmentBuilder]) -> OutputDocument:
    """
    Build every segment and concatenate them in declared order.

    No separators are inserted and nothing is reordered, merged or
    deduplicated. The first failing segment aborts the whole assembly.
    """
    segments: List[Segment] = []
    for b in builders:
        seg = b.build()
        logger.debug("segment %d %s (%s): %d chars", len(segments) + 1, seg.name, seg.kind.value, len(seg.text))
        segments.append(seg)

    return OutputDocument(text="".join(s.text for s in segments), segments=tuple(segments))
