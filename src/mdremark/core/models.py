"""Content node, derivation keys, and heading records"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class DerivationKey(str, Enum):
    """Representation identifiers cached per content node."""
    ast = "ast"
    render_tree = "render_tree"
    markup = "markup"
    headings = "headings"


class HeadingLevel(IntEnum):
    """Enumerated depth argument accepted by the headings field."""
    H1 = 1
    H2 = 2
    H3 = 3
    H4 = 4
    H5 = 5
    H6 = 6


class Heading(BaseModel):
    """One heading of a document, in document order."""
    model_config = ConfigDict(frozen=True)

    depth:  int = Field(ge=1, le=6)
    value:  str = ""
    anchor: str = ""


class ParsedSource(BaseModel):
    """Front matter split result handed back to the host graph."""
    fields:  dict[str, Any] = {}
    content: str                    # markdown body, becomes ContentNode.raw_content
    excerpt: Optional[str] = None


@dataclass(eq=False)
class ContentNode:
    """A host-owned content node; hashed by identity so equal text never shares a cache slot."""
    id:          str
    raw_content: str
    fields:      dict[str, Any] = field(default_factory=dict)
    excerpt:     Optional[str] = None
