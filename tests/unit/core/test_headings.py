"""Unit tests for core/headings.py"""

from cdnpub.core.blocks import render_blocks
from cdnpub.core.headings import extract_headings, strip_tags


def test_extract_single_heading():
    headings = extract_headings("<h1>Hi</h1>\n<p>Hello</p>")
    assert [h.model_dump() for h in headings] == [{"id": "hi", "text": "Hi", "level": 1}]


def test_extract_is_case_insensitive_and_allows_attributes():
    headings = extract_headings('<H2 class="x">Title</H2><h3 id="a">Sub</h3>')
    assert [(h.text, h.level) for h in headings] == [("Title", 2), ("Sub", 3)]


def test_nested_markup_is_stripped():
    headings = extract_headings("<h2>Das <em>ist</em> gut</h2>")
    assert headings[0].text == "Das  ist  gut"
    assert headings[0].id == "das-ist-gut"


def test_empty_slug_gets_positional_id():
    headings = extract_headings("<h1>Intro</h1><h2>!!!</h2><h2></h2>")
    assert [h.id for h in headings] == ["intro", "h-2", "h-3"]


def test_identical_headings_share_an_id():
    headings = extract_headings("<h2>Same</h2><h2>Same</h2>")
    assert [h.id for h in headings] == ["same", "same"]


def test_mismatched_close_tag_is_not_a_heading():
    assert extract_headings("<h1>open</h2>") == []


def test_headings_do_not_span_lines():
    assert extract_headings("<h1>line one\nline two</h1>") == []


def test_no_headings_in_plain_html():
    assert extract_headings("<p>plain text</p>") == []


def test_strip_tags_replaces_tags_with_spaces():
    assert strip_tags("<p>a</p><p>b</p>") == " a  b "


def test_roundtrip_with_renderer_keeps_count_levels_and_order():
    """N heading blocks rendered then extracted give N headings in source order."""
    blocks = [
        {"type": "heading", "level": 3, "text": "Third"},
        {"type": "paragraph", "text": "filler"},
        {"type": "heading", "level": 1, "text": "First"},
        {"type": "heading", "level": 6, "text": "Sixth"},
    ]
    headings = extract_headings(render_blocks(blocks))
    assert [(h.text, h.level) for h in headings] == [("Third", 3), ("First", 1), ("Sixth", 6)]
