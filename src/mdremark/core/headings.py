"""Heading outline extraction from a transformed AST"""

from typing import Optional

from mdremark.core.ast import Node, find_first, walk
from mdremark.core.models import Heading


def find_headings(ast: Node) -> list[Heading]:
    """Collect one Heading per heading node, in document order.

    The anchor is the URL of the first link inside the heading and the value
    is the literal of its first text node; either stays empty when absent.
    """
    headings = []
    for node in walk(ast):
        if node.type != "heading":
            continue
        link = find_first(node, "link")
        text = find_first(node, "text")
        headings.append(Heading(
            depth=node.depth,
            value=text.value if text is not None else "",
            anchor=link.url if link is not None else "",
        ))
    return headings


def filter_headings(headings: list[Heading], depth: Optional[int] = None) -> list[Heading]:
    """Keep only headings at depth, preserving order; None keeps all."""
    if depth is None:
        return list(headings)
    return [h for h in headings if h.depth == int(depth)]
