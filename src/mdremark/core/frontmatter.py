"""File discovery and YAML front matter splitting"""

import re
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel

from mdremark.core.models import ParsedSource
from mdremark.errors import FrontmatterError


MD_EXTENSIONS = {'.md', '.mdx'}


class FrontmatterOptions(BaseModel):
    delimiters:        str = "---"
    excerpt:           bool = False
    excerpt_separator: Optional[str] = None     # defaults to the delimiter line


def _block_re(delimiter: str) -> re.Pattern:
    d = re.escape(delimiter)
    return re.compile(rf'^{d}[ \t]*\r?\n(.*?)\r?\n?^{d}[ \t]*(?:\r?\n|$)', re.DOTALL | re.MULTILINE)


def _strip_frontmatter(text: str, delimiter: str = "---") -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with the YAML header removed."""
    m = _block_re(delimiter).match(text)
    if not m:
        return {}, text
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Invalid YAML frontmatter: {e}") from e
    if not isinstance(fm, dict):
        raise FrontmatterError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
    return fm, text[m.end():]


def _excerpt(body: str, separator: str) -> Optional[str]:
    """Text before the first line equal to separator, or None when it never appears."""
    lines = body.splitlines(keepends=True)
    for i, line in enumerate(lines):
        if line.strip() == separator:
            return ''.join(lines[:i])
    return None


def parse_source(source: str, options: Optional[FrontmatterOptions] = None) -> ParsedSource:
    """Split raw source into front matter fields, markdown content and optional excerpt."""
    options = options or FrontmatterOptions()
    fields, content = _strip_frontmatter(source, options.delimiters)
    excerpt = None
    if options.excerpt:
        excerpt = _excerpt(content, options.excerpt_separator or options.delimiters)
    return ParsedSource(fields=fields, content=content, excerpt=excerpt)


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)
