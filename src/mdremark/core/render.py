"""Lowering of the transformed AST into a generic element tree"""

import copy
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from mdremark.core.ast import Node
from mdremark.errors import UnmappedNodeError


@dataclass
class Text:
    value: str


@dataclass
class Raw:
    """Markup emitted verbatim; never escaped."""
    value: str


@dataclass
class Element:
    tag_name:   str
    properties: dict[str, Any] = field(default_factory=dict)
    children:   list["Child"] = field(default_factory=list)


@dataclass
class Root:
    children: list["Child"] = field(default_factory=list)


Child = Union[Element, Text, Raw]
Handler = Callable[["RenderTreeBuilder", Node], list[Child]]

_LINE_TRIM_RE = re.compile(r'[ \t]*\n[ \t]*')


def wrap(nodes: list[Child], loose: bool = False) -> list[Child]:
    """Interleave newline text between nodes, and around them when loose."""
    result: list[Child] = [Text("\n")] if loose else []
    for i, n in enumerate(nodes):
        if i:
            result.append(Text("\n"))
        result.append(n)
    if loose and nodes:
        result.append(Text("\n"))
    return result


def _is_p(child: Child) -> bool:
    return isinstance(child, Element) and child.tag_name == "p"


# --- handlers: one per AST node type ---

def _simple(tag: str) -> Handler:
    return lambda b, node: [Element(tag, {}, b.all(node))]


def _text(b, node: Node) -> list[Child]:
    return [Text(_LINE_TRIM_RE.sub("\n", node.value or ""))]


def _heading(b, node: Node) -> list[Child]:
    return [Element(f"h{node.depth}", {}, b.all(node))]


def _blockquote(b, node: Node) -> list[Child]:
    return [Element("blockquote", {}, wrap(b.all(node), True))]


def _break(b, node: Node) -> list[Child]:
    return [Element("br"), Text("\n")]


def _inline_code(b, node: Node) -> list[Child]:
    return [Element("code", {}, [Text(_LINE_TRIM_RE.sub(" ", node.value or ""))])]


def _code(b, node: Node) -> list[Child]:
    props = {"className": [f"language-{node.lang}"]} if node.lang else {}
    value = f"{node.value}\n" if node.value else ""
    return [Element("pre", {}, [Element("code", props, [Text(value)])])]


def _html(b, node: Node) -> list[Child]:
    return [Raw(node.value or "")]


def _link(b, node: Node) -> list[Child]:
    props: dict[str, Any] = {"href": node.url or ""}
    if node.title is not None:
        props["title"] = node.title
    return [Element("a", props, b.all(node))]


def _image(b, node: Node) -> list[Child]:
    props: dict[str, Any] = {"src": node.url or "", "alt": node.alt or ""}
    if node.title is not None:
        props["title"] = node.title
    return [Element("img", props)]


def _list(b, node: Node) -> list[Child]:
    props: dict[str, Any] = {}
    if node.ordered and node.start not in (None, 1):
        props["start"] = node.start
    return [Element("ol" if node.ordered else "ul", props, wrap(b.all(node), True))]


def _list_item(b, node: Node) -> list[Child]:
    results = b.all(node)
    loose = bool(node.spread)
    children: list[Child] = []
    for i, child in enumerate(results):
        if loose or i != 0 or not _is_p(child):
            children.append(Text("\n"))
        if _is_p(child) and not loose:
            children.extend(child.children)
        else:
            children.append(child)
    if results and (loose or not _is_p(results[-1])):
        children.append(Text("\n"))
    return [Element("li", {}, children)]


def _table(b, node: Node) -> list[Child]:
    align = node.align or []

    def row(tr: Node, tag: str) -> Element:
        cells = []
        for i, cell in enumerate(tr.children):
            props = {"align": align[i]} if i < len(align) and align[i] else {}
            cells.append(b.augment(cell, Element(tag, props, b.all(cell))))
        return b.augment(tr, Element("tr", {}, wrap(cells, True)))

    rows = node.children
    sections: list[Child] = []
    if rows:
        sections.append(Element("thead", {}, wrap([row(rows[0], "th")], True)))
    if len(rows) > 1:
        sections.append(Element("tbody", {}, wrap([row(r, "td") for r in rows[1:]], True)))
    return [Element("table", {}, wrap(sections, True))]


def _root(b, node: Node) -> list[Child]:
    return wrap(b.all(node))


HANDLERS: dict[str, Handler] = {
    "root":          _root,
    "paragraph":     _simple("p"),
    "heading":       _heading,
    "text":          _text,
    "emphasis":      _simple("em"),
    "strong":        _simple("strong"),
    "delete":        _simple("del"),
    "inlineCode":    _inline_code,
    "break":         _break,
    "link":          _link,
    "image":         _image,
    "html":          _html,
    "code":          _code,
    "blockquote":    _blockquote,
    "thematicBreak": lambda b, node: [Element("hr")],
    "list":          _list,
    "listItem":      _list_item,
    "table":         _table,
}


class RenderTreeBuilder:
    """Lowers AST nodes through a type -> handler mapping.

    Raw HTML nodes always pass through as Raw leaves; there is no
    sanitization at this layer.
    """

    def __init__(self, handlers: Optional[dict[str, Handler]] = None):
        self.handlers = {**HANDLERS, **(handlers or {})}

    def augment(self, node: Node, element: Element) -> Element:
        """Apply hName/hProperties/hChildren that transform steps attached to node."""
        data = node.data
        if data.get("hName"):
            element.tag_name = data["hName"]
        if data.get("hProperties"):
            element.properties.update(copy.deepcopy(data["hProperties"]))
        if "hChildren" in data:
            element.children = copy.deepcopy(data["hChildren"])
        return element

    def one(self, node: Node) -> list[Child]:
        handler = self.handlers.get(node.type)
        if handler is None:
            raise UnmappedNodeError(node.type)
        result = handler(self, node)
        if len(result) == 1 and isinstance(result[0], Element):
            self.augment(node, result[0])
        return result

    def all(self, parent: Node) -> list[Child]:
        out: list[Child] = []
        for child in parent.children:
            out.extend(self.one(child))
        return out

    def build(self, ast: Node) -> Root:
        return Root(self.one(ast))


def to_render_tree(ast: Node, handlers: Optional[dict[str, Handler]] = None) -> Root:
    """Lower a transformed AST to a fresh render tree."""
    return RenderTreeBuilder(handlers).build(ast)
