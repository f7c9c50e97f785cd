"""Unit tests for core/headings.py"""

import pytest

from mdremark.core.ast import Node
from mdremark.core.headings import filter_headings, find_headings
from mdremark.core.models import Heading


def _root(*children):
    return Node("root", children=list(children))


def test_heading_text_only():
    """heading(depth=2){text("Intro")} yields value with an empty anchor."""
    ast = _root(Node("heading", depth=2, children=[Node("text", value="Intro")]))
    assert find_headings(ast) == [Heading(depth=2, value="Intro", anchor="")]


def test_heading_with_link():
    """heading(depth=1){link(url="#x"){text("Title")}} yields the link url as anchor."""
    ast = _root(Node("heading", depth=1, children=[
        Node("link", url="#x", children=[Node("text", value="Title")]),
    ]))
    assert find_headings(ast) == [Heading(depth=1, value="Title", anchor="#x")]


def test_first_link_and_first_text_win():
    """Ties resolve to the first link and the first text node in document order."""
    ast = _root(Node("heading", depth=3, children=[
        Node("link", url="#first", children=[]),
        Node("emphasis", children=[Node("text", value="One")]),
        Node("link", url="#second", children=[Node("text", value="Two")]),
    ]))
    assert find_headings(ast) == [Heading(depth=3, value="One", anchor="#first")]


def test_heading_without_text():
    """A heading holding only an image still produces a record."""
    ast = _root(Node("heading", depth=4, children=[Node("image", url="/a.png", alt="a")]))
    assert find_headings(ast) == [Heading(depth=4, value="", anchor="")]


def test_document_order_and_nesting():
    """Headings are collected in document order, including nested ones."""
    ast = _root(
        Node("heading", depth=1, children=[Node("text", value="A")]),
        Node("blockquote", children=[Node("heading", depth=2, children=[Node("text", value="B")])]),
        Node("heading", depth=3, children=[Node("text", value="C")]),
    )
    assert [h.value for h in find_headings(ast)] == ["A", "B", "C"]


def test_from_parsed_markdown(sample_ast):
    headings = find_headings(sample_ast)
    assert [(h.depth, h.value) for h in headings] == [(1, "Heading 1"), (2, "Heading 2"), (2, "Heading 2")]


@pytest.fixture(name="outline")
def outline_fixture():
    return [
        Heading(depth=1, value="a"),
        Heading(depth=2, value="b"),
        Heading(depth=2, value="c"),
        Heading(depth=3, value="d"),
    ]


def test_filter_by_depth(outline):
    """Only matching depths are kept, in their original order."""
    assert [h.value for h in filter_headings(outline, 2)] == ["b", "c"]


def test_filter_none_returns_all(outline):
    result = filter_headings(outline)
    assert [h.value for h in result] == ["a", "b", "c", "d"]
    assert result is not outline


def test_filter_no_match(outline):
    assert filter_headings(outline, 6) == []


def test_heading_depth_bounds():
    with pytest.raises(ValueError):
        Heading(depth=7)


def test_heading_is_frozen():
    heading = Heading(depth=1, value="a")
    with pytest.raises(ValueError):
        heading.anchor = "#a"
    assert heading.model_dump() == {"depth": 1, "value": "a", "anchor": ""}
