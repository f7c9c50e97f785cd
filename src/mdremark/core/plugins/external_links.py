"""Annotate links to other sites with target and rel attributes"""

import re
from typing import Optional, Union

from pydantic import BaseModel

from mdremark.core.ast import Node, walk
from mdremark.core.plugins.base import TransformStep


SCHEME_RE = re.compile(r'^([a-zA-Z][a-zA-Z0-9+.-]*):')


class ExternalLinksOptions(BaseModel):
    target:    Optional[str] = "_blank"                                     # "" or None omits it
    rel:       Union[str, list[str], None] = ["nofollow", "noopener", "noreferrer"]
    protocols: list[str] = ["http", "https"]


def is_external(url: str, protocols: list[str]) -> bool:
    """True for protocol-relative URLs and absolute URLs using one of protocols."""
    if url.startswith("//"):
        return True
    m = SCHEME_RE.match(url)
    return bool(m) and m.group(1).lower() in protocols


class ExternalLinksStep(TransformStep[ExternalLinksOptions]):
    name = "external-links"
    options_model = ExternalLinksOptions

    def apply(self, ast: Node, options: ExternalLinksOptions) -> Node:
        rel = options.rel.split() if isinstance(options.rel, str) else list(options.rel or [])
        for node in walk(ast):
            if node.type != "link" or not is_external(node.url or "", options.protocols):
                continue
            props = node.data.setdefault("hProperties", {})
            if options.target:
                props["target"] = options.target
            if rel:
                props["rel"] = list(rel)
        return ast
