"""Tests for assemble.py: ordered concatenation of literal and extracted segments."""

import pytest

from splicer.assemble import (
    AssemblyError,
    assemble,
    extracted_code,
    extracted_raw,
    literal,
    wrap_script,
)
from splicer.contracts import SegmentKind
from splicer.ingest import index_lines


SOURCE = "\n".join([
    "<html>",                       # 1
    "<head><title>t</title>",       # 2
    "<script>",                     # 3
    "var a = 1; <!-- note -->",     # 4
    "</script>",                    # 5
    "<body>",                       # 6
    "<p>hello</p>",                 # 7
])


@pytest.fixture
def lines():
    return index_lines(SOURCE)


def test_literals_concatenate_without_separators():
    out = assemble([literal("A"), literal("B")])
    assert out.text == "AB"
    assert [s.kind for s in out.segments] == [SegmentKind.LITERAL_TEMPLATE] * 2


def test_empty_assembly():
    out = assemble([])
    assert out.text == ""
    assert out.segments == ()
    assert out.line_count == 1


def test_order_is_declared_order(lines):
    out = assemble([
        literal("Z", name="z"),
        extracted_raw(lines, 7, 7, name="para"),
        literal("A", name="a"),
        extracted_raw(lines, 1, 1, name="open"),
    ])
    assert out.text == "Z<p>hello</p>A<html>"
    assert [s.name for s in out.segments] == ["z", "para", "a", "open"]


def test_duplicates_are_kept(lines):
    out = assemble([extracted_raw(lines, 7, 7), extracted_raw(lines, 7, 7)])
    assert out.text == "<p>hello</p><p>hello</p>"


def test_raw_segment_is_verbatim(lines):
    out = assemble([extracted_raw(lines, 3, 5, name="inline")])
    assert out.text == "<script>\nvar a = 1; <!-- note -->\n</script>"
    assert out.segments[0].kind == SegmentKind.EXTRACTED_RAW


def test_code_segment_is_sanitized_and_wrapped(lines):
    out = assemble([extracted_code(lines, 3, 5, name="inline")])
    assert out.text == "<script>\n\nvar a = 1; \n\n</script>\n"
    seg = out.segments[0]
    assert seg.kind == SegmentKind.EXTRACTED_SANITIZED
    assert seg.name == "inline"


def test_code_segment_attributes_and_suffix(lines):
    out = assemble([
        extracted_code(lines, 4, 4, attributes='type="module"', suffix="export {};"),
    ])
    assert out.text == '<script type="module">\nvar a = 1; \nexport {};\n</script>\n'


def test_wrap_script_ignores_blank_attributes():
    assert wrap_script("x", "   ") == "<script>\nx\n</script>\n"


def test_bad_range_is_fatal_and_names_segment(lines):
    with pytest.raises(AssemblyError) as exc:
        assemble([
            literal("before"),
            extracted_code(lines, 5, 99, name="engine"),
        ])
    msg = str(exc.value)
    assert "'engine'" in msg
    assert "5-99" in msg
    assert exc.value.__cause__ is not None


def test_output_line_count(lines):
    out = assemble([extracted_raw(lines, 1, 3), literal("\n")])
    assert out.line_count == 4
