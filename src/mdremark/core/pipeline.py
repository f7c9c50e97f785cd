"""Bulk build: load markdown files as nodes and render them in parallel"""

import json
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path


from mdremark.core.frontmatter import discover_files
from mdremark.core.models import ContentNode
from mdremark.core.transformer import MarkdownTransformer
from mdremark.util.logging import get_logger
from mdremark.util.slug import slugify


logger = get_logger(__name__)


def load_node(path: Path, transformer: MarkdownTransformer) -> ContentNode:
    """Read a markdown file into a ContentNode keyed by its slug."""
    raw = path.read_text(encoding='utf-8')
    parsed = transformer.parse(raw)
    slug = str(parsed.fields.get('slug') or slugify(path.stem))
    return ContentNode(id=slug, raw_content=parsed.content, fields=parsed.fields, excerpt=parsed.excerpt)


def write_node(node: ContentNode, transformer: MarkdownTransformer, output_dir: Path) -> Path:
    """Write <slug>.html and its <slug>.json sidecar; returns the HTML path."""
    html_path = output_dir / f"{node.id}.html"
    html_path.write_text(transformer.to_markup(node), encoding='utf-8')
    sidecar = {
        "fields": node.fields,
        "excerpt": node.excerpt,
        "headings": [h.model_dump() for h in transformer.headings(node)],
    }
    (output_dir / f"{node.id}.json").write_text(json.dumps(sidecar, indent=2, default=str), encoding='utf-8')
    return html_path


def run_render(
    path: str,
    transformer: MarkdownTransformer,
    output_dir: Path,
    workers: int = 4,
    ) -> list[tuple[Path, Path]]:
    """Render every .md/.mdx file under path. Returns (source_path, html_path) pairs in source order."""
    output_dir.mkdir(parents=True, exist_ok=True)
    sources = discover_files(Path(path))
    nodes = {}
    for p in sources:
        try:
            nodes[p] = load_node(p, transformer)
        except Exception as e:
            raise RuntimeError(f"Failed to load {p}: {e}") from e

    results: dict[Path, Path] = {}
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(write_node, node, transformer, output_dir): p for p, node in nodes.items()}
        for future in as_completed(futures):
            p = futures[future]
            try:
                results[p] = future.result()
            except Exception as e:
                logger.error("render_failed", source=str(p), error=str(e))
                raise RuntimeError(f"Failed to render {p}: {e}") from e
            logger.info("document_rendered", source=str(p), output=str(results[p]))
    return [(p, results[p]) for p in sources]
