"""Markdown transformer: cached derivations of a content node"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

from mdremark.config import Settings
from mdremark.core.ast import Node, make_parser
from mdremark.core.cache import NodeCache
from mdremark.core.frontmatter import parse_source
from mdremark.core.headings import filter_headings, find_headings
from mdremark.core.markup import to_html
from mdremark.core.models import ContentNode, DerivationKey, Heading, HeadingLevel, ParsedSource
from mdremark.core.plugins.base import TransformStep, build_ast
from mdremark.core.plugins.registry import build_chain
from mdremark.core.render import Handler, Root, to_render_tree


@dataclass
class NodeField:
    """A computed field the host schema exposes on markdown nodes."""
    type:    str
    resolve: Callable[..., Any]
    args:    dict[str, Any] = field(default_factory=dict)


class MarkdownTransformer:
    """Derives AST, render tree, markup, and headings for content nodes.

    Every derivation goes through the shared NodeCache, so each
    representation of a node is computed once per node lifetime no matter
    how many fields or threads ask for it.
    """

    @staticmethod
    def mime_types() -> list[str]:
        return ["text/markdown", "text/x-markdown"]

    def __init__(
        self,
        settings: Optional[Settings] = None,
        plugins: Optional[Sequence[TransformStep]] = None,
        cache: Optional[NodeCache] = None,
        handlers: Optional[dict[str, Handler]] = None,
        ):
        self.settings = settings or Settings()
        self.cache = cache if cache is not None else NodeCache()
        self.plugins = list(plugins) if plugins is not None else build_chain(self.settings)
        self.handlers = handlers
        self._parser = make_parser(self.settings.parser_config)

    def parse(self, source: str) -> ParsedSource:
        """Split raw source into front matter fields, content and excerpt."""
        return parse_source(source, self.settings.frontmatter)

    def create_node(self, node_id: str, source: str) -> ContentNode:
        """Parse source and wrap its content in a new ContentNode."""
        parsed = self.parse(source)
        return ContentNode(id=node_id, raw_content=parsed.content, fields=parsed.fields, excerpt=parsed.excerpt)

    def to_ast(self, node: ContentNode) -> Node:
        return self.cache.get_or_compute(
            node, DerivationKey.ast, lambda: build_ast(node.raw_content, self._parser, self.plugins)
        )

    def to_render_tree(self, node: ContentNode) -> Root:
        return self.cache.get_or_compute(
            node, DerivationKey.render_tree, lambda: to_render_tree(self.to_ast(node), self.handlers)
        )

    def to_markup(self, node: ContentNode) -> str:
        return self.cache.get_or_compute(
            node, DerivationKey.markup, lambda: to_html(self.to_render_tree(node))
        )

    def find_headings(self, node: ContentNode) -> list[Heading]:
        return self.cache.get_or_compute(
            node, DerivationKey.headings, lambda: find_headings(self.to_ast(node))
        )

    def headings(self, node: ContentNode, depth: Optional[int] = None) -> list[Heading]:
        """Headings of node in document order, optionally only those at depth."""
        return filter_headings(self.find_headings(node), depth)

    def node_fields(self) -> dict[str, NodeField]:
        return {
            "content": NodeField(
                type="String",
                resolve=lambda node, **_: self.to_markup(node),
            ),
            "headings": NodeField(
                type="[Heading]",
                args={"depth": HeadingLevel},
                resolve=lambda node, depth=None, **_: self.headings(node, depth),
            ),
        }
