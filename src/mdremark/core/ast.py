"""Markdown-it tokenization and lowering to an mdast-shaped syntax tree"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from mdremark.errors import ConfigError, ParseError


@dataclass
class Node:
    """A syntax node; fields beyond type/children are set only where the type uses them."""
    type:     str
    children: list["Node"] = field(default_factory=list)
    value:    Optional[str] = None      # text, inlineCode, code, html
    depth:    Optional[int] = None      # heading level 1-6
    url:      Optional[str] = None      # link, image
    title:    Optional[str] = None
    alt:      Optional[str] = None
    lang:     Optional[str] = None      # fenced code info word
    meta:     Optional[str] = None      # fenced code info remainder
    ordered:  Optional[bool] = None
    start:    Optional[int] = None
    spread:   Optional[bool] = None     # loose list
    align:    Optional[list[Optional[str]]] = None
    data:     dict[str, Any] = field(default_factory=dict)   # id, hProperties, hChildren


def walk(node: Node) -> Iterator[Node]:
    """Yield node and all descendants in document (pre-)order."""
    yield node
    for child in node.children:
        yield from walk(child)


def find_first(node: Node, node_type: str) -> Optional[Node]:
    """Return the first descendant of node_type below node, else None."""
    for child in node.children:
        for n in walk(child):
            if n.type == node_type:
                return n
    return None


def to_string(node: Node) -> str:
    """Concatenated literal text of a subtree."""
    if node.value is not None and node.type in ("text", "inlineCode"):
        return node.value
    if node.type == "image":
        return node.alt or ""
    return "".join(to_string(c) for c in node.children)


def make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    try:
        return MarkdownIt(preset, options_update={"linkify": False})
    except KeyError as e:
        raise ConfigError(f"Unknown markdown-it preset: {preset}") from e


# --- token tree lowering ---

def _strip_newline(text: str) -> str:
    return text[:-1] if text.endswith("\n") else text


def _cell_align(sn: SyntaxTreeNode) -> Optional[str]:
    style = sn.attrs.get("style") or ""
    if style.startswith("text-align:"):
        return style.split(":", 1)[1].strip()
    return None


def _merge_text(nodes: list[Node]) -> list[Node]:
    """Join adjacent text nodes so each run of literal text is a single node."""
    merged: list[Node] = []
    for n in nodes:
        if n.type == "text" and merged and merged[-1].type == "text":
            merged[-1].value += n.value
        else:
            merged.append(n)
    return merged


def _lower_children(sn: SyntaxTreeNode) -> list[Node]:
    out: list[Node] = []
    for child in sn.children:
        out.extend(_lower(child))
    return _merge_text(out)


def _lower_table(sn: SyntaxTreeNode) -> Node:
    rows: list[Node] = []
    for section in sn.children:          # thead, tbody
        for tr in section.children:
            rows.append(Node("tableRow", children=[
                Node("tableCell", children=_lower_children(cell)) for cell in tr.children
            ]))
    align: list[Optional[str]] = []
    if sn.children and sn.children[0].children:
        align = [_cell_align(cell) for cell in sn.children[0].children[0].children]
    return Node("table", children=rows, align=align)


def _lower(sn: SyntaxTreeNode) -> list[Node]:
    t = sn.type
    if t == "inline":
        return _lower_children(sn)
    if t in ("text", "text_special"):
        return [Node("text", value=sn.content)]
    if t == "softbreak":
        return [Node("text", value="\n")]
    if t == "hardbreak":
        return [Node("break")]
    if t == "paragraph":
        data = {"tight": True} if sn.hidden else {}
        return [Node("paragraph", children=_lower_children(sn), data=data)]
    if t == "heading":
        return [Node("heading", depth=int(sn.tag[1:]), children=_lower_children(sn))]
    if t == "blockquote":
        return [Node("blockquote", children=_lower_children(sn))]
    if t in ("bullet_list", "ordered_list"):
        items = _lower_children(sn)
        paragraphs = [p for item in items for p in item.children if p.type == "paragraph"]
        tight = all([p.data.pop("tight", False) for p in paragraphs])
        for item in items:
            item.spread = not tight
        start = sn.attrs.get("start")
        return [Node(
            "list", children=items, ordered=t == "ordered_list", spread=not tight,
            start=int(start) if start is not None else (1 if t == "ordered_list" else None),
        )]
    if t == "list_item":
        return [Node("listItem", children=_lower_children(sn))]
    if t == "fence":
        info = (sn.info or "").strip()
        lang, _, meta = info.partition(" ")
        return [Node("code", value=_strip_newline(sn.content), lang=lang or None, meta=meta.strip() or None)]
    if t == "code_block":
        return [Node("code", value=_strip_newline(sn.content))]
    if t == "hr":
        return [Node("thematicBreak")]
    if t == "html_block":
        return [Node("html", value=_strip_newline(sn.content))]
    if t == "html_inline":
        return [Node("html", value=sn.content)]
    if t == "code_inline":
        return [Node("inlineCode", value=sn.content)]
    if t == "em":
        return [Node("emphasis", children=_lower_children(sn))]
    if t == "strong":
        return [Node("strong", children=_lower_children(sn))]
    if t == "s":
        return [Node("delete", children=_lower_children(sn))]
    if t == "link":
        return [Node("link", url=sn.attrs.get("href", ""), title=sn.attrs.get("title"),
                     children=_lower_children(sn))]
    if t == "image":
        return [Node("image", url=sn.attrs.get("src", ""), title=sn.attrs.get("title"), alt=sn.content)]
    if t == "table":
        return [_lower_table(sn)]
    # Unknown token types survive under their own name; rendering reports them.
    return [Node(t, value=sn.content or None, children=_lower_children(sn))]


def from_tokens(tokens: list) -> Node:
    """Lower a markdown-it token stream into a root Node."""
    tree = SyntaxTreeNode(tokens)
    return Node("root", children=_lower_children(tree))


def parse_markdown(text: str, parser: MarkdownIt) -> Node:
    """Parse markdown text into a fresh, untransformed root Node."""
    if not isinstance(text, str):
        raise ParseError(f"Expected markdown text, got {type(text).__name__}")
    try:
        tokens = parser.parse(text)
        return from_tokens(tokens)
    except Exception as e:
        raise ParseError(f"Could not parse markdown: {e}") from e
