# splicer/layout.py
from __future__ import annotations

from typing import Any, List

from pydantic import ValidationError

from schemas.schemas_layout import CodeSegment, LayoutPlan, LiteralSegment, RawSegment, TemplateSegment

from .assemble import SegmentBuilder, extracted_code, extracted_raw, literal
from .contracts import SourceDocument
from .io_utils import PathLike, read_json
from .templates import TemplateError, render_template


class LayoutError(ValueError):
    pass


def parse_layout(obj: Any) -> LayoutPlan:
    try:
        return LayoutPlan.model_validate(obj)
    except ValidationError as e:
        raise LayoutError(f"Invalid layout: {e}") from e


def load_layout(path: PathLike) -> LayoutPlan:
    return parse_layout(read_json(path))


def builders_from_layout(plan: LayoutPlan, source: SourceDocument) -> List[SegmentBuilder]:
    """
    Translate a layout plan into segment builders, keeping declared order.

    Templates are rendered here, so a bad template name or param fails
    before any range is extracted.
    """
    builders: List[SegmentBuilder] = []
    for seg in plan.segments:
        if isinstance(seg, RawSegment):
            builders.append(extracted_raw(source.lines, seg.start_line, seg.end_line, name=seg.name))
        elif isinstance(seg, CodeSegment):
            builders.append(
                extracted_code(
                    source.lines,
                    seg.start_line,
                    seg.end_line,
                    name=seg.name,
                    attributes=seg.attributes,
                    suffix=seg.suffix,
                )
            )
        elif isinstance(seg, LiteralSegment):
            builders.append(literal(seg.text, name=seg.name))
        elif isinstance(seg, TemplateSegment):
            try:
                text = render_template(seg.template, seg.params)
            except TemplateError as e:
                raise LayoutError(f"Segment {seg.name!r}: {e}") from e
            builders.append(literal(text, name=seg.name))
        else:
            raise LayoutError(f"Unsupported segment kind: {type(seg).__name__}")

    if plan.close_document:
        builders.append(literal(render_template("document_close"), name="document_close"))

    return builders
