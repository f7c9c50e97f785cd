"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdremark.config import Settings, load_config
from mdremark.core.pipeline import load_node, run_render
from mdremark.core.transformer import MarkdownTransformer
from mdremark.errors import MdRemarkError
from mdremark.util.logging import configure_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    configure_logging(settings.log_level)
    return settings


def _transformer(settings: Settings) -> MarkdownTransformer:
    try:
        return MarkdownTransformer(settings)
    except MdRemarkError as e:
        _fail("Invalid transformer configuration", e)


def render_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to render")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Documents rendered in parallel")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    ):
    """Render markdown files to HTML plus a JSON sidecar of fields, excerpt and headings."""
    settings = _settings(overrides={"output_dir": out, "workers": workers, "parser_config": parser})
    transformer = _transformer(settings)
    output_dir = Path(settings.output_dir)
    try:
        results = run_render(path, transformer, output_dir, settings.workers)
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo(f"No .md/.mdx files found under {path}.")
        raise typer.Exit(1)
    for src, html_path in results:
        typer.echo(f"  {src} -> {html_path}")
    typer.echo(f"Rendered {len(results)} document(s) to {output_dir}/")


def headings_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown file", exists=True, dir_okay=False, readable=True)],
    depth: Annotated[Optional[int], typer.Option("--depth", min=1, max=6, help="Only headings at this depth")] = None,
    ):
    """Print the heading outline of a markdown file as JSON."""
    settings = _settings()
    transformer = _transformer(settings)
    try:
        node = load_node(path, transformer)
        headings = transformer.headings(node, depth)
    except MdRemarkError as e:
        _fail(f"Could not read headings from {path}", e)
    typer.echo(json.dumps([h.model_dump() for h in headings], indent=2))
