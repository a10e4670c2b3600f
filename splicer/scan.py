# splicer/scan.py
from __future__ import annotations

import re
from typing import Iterator, Optional

from .contracts import CodeBlock

_SCRIPT_BLOCK_RE = re.compile(r"<script\b([^>]*)>(.*?)</script\s*>", re.IGNORECASE | re.DOTALL)
_TYPE_ATTR_RE = re.compile(r"""\btype\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))""", re.IGNORECASE)

# Anything else in a type attribute (application/json, text/template, ...) is data.
EXECUTABLE_TYPES = frozenset({
    "",
    "module",
    "text/javascript",
    "application/javascript",
    "text/ecmascript",
    "application/ecmascript",
})


def block_type(attributes: str) -> Optional[str]:
    m = _TYPE_ATTR_RE.search(attributes)
    if not m:
        return None
    value = next(g for g in m.groups() if g is not None)
    return value.strip().lower()


def is_executable(attributes: str) -> bool:
    t = block_type(attributes)
    return t is None or t in EXECUTABLE_TYPES


def scan_blocks(text: str) -> Iterator[CodeBlock]:
    """
    Lazily yield every <script>...</script> pair in text, in document order.

    This re-derives block boundaries from the output itself rather than
    trusting the assembler. Each search starts at the previous match's end;
    nesting is not tracked. Calling it again restarts from the beginning.
    """
    for index, m in enumerate(_SCRIPT_BLOCK_RE.finditer(text), start=1):
        attributes = m.group(1)
        yield CodeBlock(
            index=index,
            start_offset=m.start(),
            attributes=attributes.strip(),
            raw_content=m.group(2),
            executable=is_executable(attributes),
            module=block_type(attributes) == "module",
        )
