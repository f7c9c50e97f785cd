"""Transform step interface and ordered chain execution"""

from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Generic, Optional, Sequence, TypeVar

from markdown_it import MarkdownIt
from pydantic import BaseModel

from mdremark.core.ast import Node, parse_markdown
from mdremark.errors import PluginError
from mdremark.util.logging import get_logger


logger = get_logger(__name__)

O = TypeVar("O")


class TransformStep(ABC, Generic[O]):
    """One AST rewrite in the chain.

    A step takes ownership of the AST, may mutate it or build a new one, and
    returns the tree handed to the next step. Options are shared across all
    documents and must be treated as read-only.
    """

    name: ClassVar[str] = "step"
    options_model: ClassVar[Optional[type[BaseModel]]] = None

    def __init__(self, options: Optional[O] = None, **kwargs: Any):
        if options is None and self.options_model is not None:
            options = self.options_model(**kwargs)
        self.options = options

    @abstractmethod
    def apply(self, ast: Node, options: O) -> Node:
        ...

    def __call__(self, ast: Node) -> Node:
        return self.apply(ast, self.options)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.options!r})"


class FunctionStep(TransformStep[Any]):
    """Adapts a plain ``fn(ast, options)`` into a step; returning None means "mutated in place"."""

    def __init__(self, fn: Callable[[Node, Any], Optional[Node]], options: Any = None, name: str = None):
        super().__init__(options)
        self.fn = fn
        self.name = name or getattr(fn, "__name__", "function")

    def apply(self, ast: Node, options: Any) -> Node:
        result = self.fn(ast, options)
        return ast if result is None else result


def run_chain(ast: Node, chain: Sequence[TransformStep]) -> Node:
    """Apply each step in registration order; the first failure stops the chain."""
    for step in chain:
        try:
            result = step(ast)
        except Exception as e:
            logger.warning("plugin_failed", step=step.name, error=str(e))
            raise PluginError(step.name, e) from e
        if not isinstance(result, Node):
            raise PluginError(step.name, TypeError(f"returned {type(result).__name__}, expected Node"))
        ast = result
    return ast


def build_ast(text: str, parser: MarkdownIt, chain: Sequence[TransformStep]) -> Node:
    """Parse text into a fresh AST and run it through the chain."""
    return run_chain(parse_markdown(text, parser), chain)
