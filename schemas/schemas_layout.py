# schemas/schemas_layout.py
from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, ConfigDict, model_validator


class _RangeSegment(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    start_line: int = Field(..., ge=1, description="1-based, inclusive")
    end_line: int = Field(..., ge=1, description="1-based, inclusive")

    @model_validator(mode="after")
    def _check_order(self):
        if self.end_line < self.start_line:
            raise ValueError(
                f"segment {self.name!r}: end_line {self.end_line} < start_line {self.start_line}"
            )
        return self


class RawSegment(_RangeSegment):
    """Copied verbatim. Only for ranges known to hold no <script> tags."""
    kind: Literal["raw"] = "raw"


class CodeSegment(_RangeSegment):
    """Sanitized and wrapped in its own <script> block."""
    kind: Literal["code"] = "code"

    attributes: str = ""  # e.g. 'type="module"'
    suffix: str = ""      # literal code appended inside the same block


class LiteralSegment(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["literal"] = "literal"
    name: str = Field(..., min_length=1)
    text: str


class TemplateSegment(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["template"] = "template"
    name: str = Field(..., min_length=1)
    template: str = Field(..., min_length=1, description="built-in template name")
    params: Dict[str, str] = Field(default_factory=dict)


LayoutSegment = Annotated[
    Union[RawSegment, CodeSegment, LiteralSegment, TemplateSegment],
    Field(discriminator="kind"),
]


class LayoutPlan(BaseModel):
    model_config = ConfigDict(extra="forbid")

    layout_id: str = Field(..., min_length=1)
    segments: List[LayoutSegment] = Field(..., min_length=1)

    # Append the document_close template (</body></html>) after the last segment.
    close_document: bool = True

    description: Optional[str] = None

    @model_validator(mode="after")
    def _unique_names(self):
        seen = set()
        for s in self.segments:
            if s.name in seen:
                raise ValueError(f"Duplicate segment name: {s.name!r}")
            seen.add(s.name)
        return self
