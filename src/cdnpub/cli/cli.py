"""CLI entrypoint: Typer app definition and command registration"""

import typer

from cdnpub.cli.commands import build_cmd, render_cmd


app = typer.Typer(name="cdnpub", no_args_is_help=True, help="Curated content to versioned CDN artifacts")

app.command(name="build")(build_cmd)
app.command(name="render")(render_cmd)
