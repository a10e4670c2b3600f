# splicer/report.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from schemas.schemas_report import Report, ValidationResult


def summarize(results: Sequence[ValidationResult], meta: Optional[Dict[str, Any]] = None) -> Report:
    """Pure aggregation; same results in, same report out."""
    return Report(
        total_blocks=len(results),
        total_errors=sum(1 for r in results if not r.ok),
        results=list(results),
        meta=dict(meta or {}),
    )


def render_report(report: Report) -> List[str]:
    lines: List[str] = []
    for r in report.failures:
        err = r.error
        where = f"line ~{err.approximate_line}" if err else "line ?"
        msg = err.message if err else ""
        lines.append(f"  Syntax error in block #{r.block_index} ({where}): {msg}")

    skipped = sum(1 for r in report.results if r.skipped)
    lines.append(
        f"Total script blocks: {report.total_blocks} ({skipped} data), Syntax errors: {report.total_errors}"
    )
    return lines
