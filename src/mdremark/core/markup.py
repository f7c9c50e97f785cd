"""Serialization of a render tree to HTML markup"""

from typing import Any, Union

from markdown_it.common.utils import escapeHtml

from mdremark.core.render import Child, Element, Raw, Root, Text
from mdremark.errors import RenderError


VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

ATTRIBUTE_NAMES = {
    "className": "class",
    "htmlFor":   "for",
    "ariaHidden": "aria-hidden",
    "tabIndex":  "tabindex",
}


def attribute_name(prop: str) -> str:
    return ATTRIBUTE_NAMES.get(prop, prop)


def _attribute(prop: str, value: Any) -> str:
    name = attribute_name(prop)
    if value is True:
        return f" {name}"
    if isinstance(value, (list, tuple)):
        value = " ".join(str(v) for v in value)
    return f' {name}="{escapeHtml(str(value))}"'


def _serialize(node: Union[Root, Child], out: list[str]) -> None:
    if isinstance(node, Text):
        out.append(escapeHtml(node.value))
    elif isinstance(node, Raw):
        out.append(node.value)
    elif isinstance(node, Element):
        attrs = "".join(
            _attribute(k, v) for k, v in node.properties.items() if v is not None and v is not False
        )
        out.append(f"<{node.tag_name}{attrs}>")
        if node.tag_name in VOID_ELEMENTS:
            return
        for child in node.children:
            _serialize(child, out)
        out.append(f"</{node.tag_name}>")
    elif isinstance(node, Root):
        for child in node.children:
            _serialize(child, out)
    else:
        raise RenderError(f"Cannot serialize render node of type {type(node).__name__}")


def to_html(tree: Root) -> str:
    """Serialize depth-first; attributes keep their stored order."""
    out: list[str] = []
    _serialize(tree, out)
    return "".join(out)
