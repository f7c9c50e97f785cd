"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdremark.cli.commands import headings_cmd, render_cmd


app = typer.Typer(name="mdremark", no_args_is_help=True, help="Cached markdown to HTML and heading outlines")

app.command(name="render")(render_cmd)
app.command(name="headings")(headings_cmd)
