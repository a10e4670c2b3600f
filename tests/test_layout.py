"""Tests for layout loading, templates and layout -> builders translation."""

import json

import pytest

from splicer.assemble import assemble
from splicer.contracts import SegmentKind
from splicer.ingest import build_source
from splicer.layout import LayoutError, builders_from_layout, load_layout, parse_layout
from splicer.templates import BUILTIN_TEMPLATES, TemplateError, render_template


SOURCE = build_source("<html>\n<head>\nvar x = 1;\n</head>\n<body>")


def _plan(segments, **extra):
    return {"layout_id": "test", "segments": segments, **extra}


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

def test_builtin_templates_present():
    assert {"error_tracker", "bootstrap", "teardown", "document_close"} <= set(BUILTIN_TEMPLATES)


def test_render_with_defaults():
    text = render_template("bootstrap")
    assert "new App()" in text
    assert "{{" not in text


def test_render_with_params():
    text = render_template("error_tracker", {"namespace": "TU", "max_errors": "5"})
    assert "window.TU.errors" in text
    assert "max: 5," in text
    assert "install()" in text and "uninstall()" in text


def test_unknown_template():
    with pytest.raises(TemplateError):
        render_template("nope")


def test_unknown_param():
    with pytest.raises(TemplateError):
        render_template("bootstrap", {"entry": "Game"})


def test_document_close():
    assert render_template("document_close") == "\n</body>\n</html>\n"


# ---------------------------------------------------------------------------
# Layout schema
# ---------------------------------------------------------------------------

def test_load_layout_from_file(tmp_path):
    p = tmp_path / "layout.json"
    p.write_text(json.dumps(_plan([{"kind": "raw", "name": "head", "start_line": 1, "end_line": 2}])))
    plan = load_layout(p)
    assert plan.layout_id == "test"
    assert plan.close_document is True


def test_end_before_start_rejected():
    with pytest.raises(LayoutError, match="end_line"):
        parse_layout(_plan([{"kind": "code", "name": "x", "start_line": 5, "end_line": 4}]))


def test_zero_start_rejected():
    with pytest.raises(LayoutError):
        parse_layout(_plan([{"kind": "raw", "name": "x", "start_line": 0, "end_line": 4}]))


def test_duplicate_names_rejected():
    seg = {"kind": "literal", "name": "same", "text": "a"}
    with pytest.raises(LayoutError, match="Duplicate"):
        parse_layout(_plan([seg, dict(seg)]))


def test_unknown_kind_rejected():
    with pytest.raises(LayoutError):
        parse_layout(_plan([{"kind": "mystery", "name": "x"}]))


def test_extra_fields_rejected():
    with pytest.raises(LayoutError):
        parse_layout(_plan([{"kind": "literal", "name": "x", "text": "a", "sanitize": True}]))


def test_empty_segments_rejected():
    with pytest.raises(LayoutError):
        parse_layout(_plan([]))


# ---------------------------------------------------------------------------
# builders_from_layout
# ---------------------------------------------------------------------------

def test_builders_follow_declared_order():
    plan = parse_layout(_plan([
        {"kind": "raw", "name": "head", "start_line": 1, "end_line": 2},
        {"kind": "code", "name": "js", "start_line": 3, "end_line": 3, "suffix": "init();"},
        {"kind": "literal", "name": "close-head", "text": "\n</head>\n"},
        {"kind": "template", "name": "boot", "template": "bootstrap", "params": {"entry_class": "Game"}},
    ]))
    out = assemble(builders_from_layout(plan, SOURCE))

    assert [s.name for s in out.segments] == ["head", "js", "close-head", "boot", "document_close"]
    assert [s.kind for s in out.segments] == [
        SegmentKind.EXTRACTED_RAW,
        SegmentKind.EXTRACTED_SANITIZED,
        SegmentKind.LITERAL_TEMPLATE,
        SegmentKind.LITERAL_TEMPLATE,
        SegmentKind.LITERAL_TEMPLATE,
    ]
    assert out.text.startswith("<html>\n<head><script>\nvar x = 1;\ninit();\n</script>\n\n</head>\n")
    assert "new Game()" in out.text
    assert out.text.endswith("</html>\n")


def test_close_document_can_be_disabled():
    plan = parse_layout(_plan([{"kind": "literal", "name": "only", "text": "X"}], close_document=False))
    assert assemble(builders_from_layout(plan, SOURCE)).text == "X"


def test_bad_template_param_is_layout_error():
    plan = parse_layout(_plan([
        {"kind": "template", "name": "boot", "template": "bootstrap", "params": {"bogus": "1"}},
    ]))
    with pytest.raises(LayoutError, match="'boot'"):
        builders_from_layout(plan, SOURCE)
