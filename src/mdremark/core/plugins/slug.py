"""Assign GitHub-style anchor ids to headings"""

from pydantic import BaseModel

from mdremark.core.ast import Node, to_string, walk
from mdremark.core.plugins.base import TransformStep
from mdremark.util.slug import Slugger


class SlugOptions(BaseModel):
    prefix: str = ""


class SlugStep(TransformStep[SlugOptions]):
    """Sets ``data.id`` and the rendered ``id`` attribute on every heading."""

    name = "slug"
    options_model = SlugOptions

    def apply(self, ast: Node, options: SlugOptions) -> Node:
        slugger = Slugger()
        for node in walk(ast):
            if node.type != "heading":
                continue
            props = node.data.setdefault("hProperties", {})
            # An explicit id (set by an earlier step) wins over the generated slug.
            slug_id = props.get("id")
            if slug_id:
                slugger.occurrences.setdefault(slug_id, 0)
            else:
                slug_id = options.prefix + slugger.slug(to_string(node))
            node.data["id"] = props["id"] = slug_id
        return ast
