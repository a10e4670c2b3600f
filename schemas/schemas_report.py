# schemas/schemas_report.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ConfigDict


class BlockError(BaseModel):
    model_config = ConfigDict(extra="forbid")

    message: str  # truncated for log brevity; no ellipsis marker
    approximate_line: int = Field(..., ge=1, description="1-based line of the opening <script> tag in the output")


class ValidationResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    block_index: int = Field(..., ge=1)
    ok: bool
    # Data blocks (e.g. type="application/json") are recorded but never checked.
    skipped: bool = False
    error: Optional[BlockError] = None


class Report(BaseModel):
    model_config = ConfigDict(extra="forbid")

    total_blocks: int = Field(..., ge=0)
    total_errors: int = Field(..., ge=0)
    results: List[ValidationResult] = Field(default_factory=list)

    # run metadata (layout id, output line count, sha256, ...)
    meta: Dict[str, Any] = Field(default_factory=dict)

    @property
    def failures(self) -> List[ValidationResult]:
        return [r for r in self.results if not r.ok]
