"""Remove empty and whitespace-only paragraphs"""

from mdremark.core.ast import Node
from mdremark.core.plugins.base import TransformStep


def is_blank_paragraph(node: Node) -> bool:
    return node.type == "paragraph" and all(
        c.type == "text" and not (c.value or "").strip() for c in node.children
    )


class SqueezeParagraphsStep(TransformStep[None]):
    name = "squeeze-paragraphs"

    def apply(self, ast: Node, options: None) -> Node:
        ast.children = [c for c in ast.children if not is_blank_paragraph(c)]
        for child in ast.children:
            self.apply(child, options)
        return ast
