"""Wrap or decorate headings with a link to their own anchor"""

import copy
from typing import Any, Literal, Union

from pydantic import BaseModel

from mdremark.core.ast import Node, walk
from mdremark.core.plugins.base import TransformStep
from mdremark.core.render import Element


class AutolinkHeadingsOptions(BaseModel):
    behavior:        Literal["prepend", "append", "wrap"] = "prepend"
    link_properties: dict[str, Any] = {"ariaHidden": "true", "tabIndex": -1}
    class_name:      Union[str, list[str]] = "icon icon-link"   # on the generated span


class AutolinkHeadingsStep(TransformStep[AutolinkHeadingsOptions]):
    """Links each heading to ``#<id>``; headings without an id are skipped."""

    name = "autolink-headings"
    options_model = AutolinkHeadingsOptions

    def _link(self, anchor: str, options: AutolinkHeadingsOptions, children: list[Node]) -> Node:
        data: dict[str, Any] = {"hProperties": dict(options.link_properties)}
        if options.behavior != "wrap":
            data["hChildren"] = [Element("span", {"className": copy.copy(options.class_name)})]
        return Node("link", url=f"#{anchor}", children=children, data=data)

    def apply(self, ast: Node, options: AutolinkHeadingsOptions) -> Node:
        for node in walk(ast):
            if node.type != "heading":
                continue
            anchor = node.data.get("id")
            if not anchor:
                continue
            if options.behavior == "wrap":
                node.children = [self._link(anchor, options, node.children)]
            elif options.behavior == "append":
                node.children.append(self._link(anchor, options, []))
            else:
                node.children.insert(0, self._link(anchor, options, []))
        return ast
