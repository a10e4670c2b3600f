# splicer/ingest.py
from __future__ import annotations

from pathlib import Path
from typing import Tuple, Union

from .contracts import LINE_TERMINATOR, SourceDocument
from .io_utils import read_text


def index_lines(text: str) -> Tuple[str, ...]:
    """
    Split on the line terminator exactly.

    Nothing is trimmed or collapsed, so joining the result with the same
    terminator gives back the original text. A trailing "\\r" from CRLF input
    stays on its line.
    """
    return tuple(text.split(LINE_TERMINATOR))


def build_source(text: str) -> SourceDocument:
    return SourceDocument(text=text, lines=index_lines(text))


def load_source(path: Union[str, Path]) -> SourceDocument:
    return build_source(read_text(path))
