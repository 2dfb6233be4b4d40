"""CLI entrypoint: Typer app definition and command registration"""

import typer

from statscribe.cli.commands import build_cmd, init_cmd, parse_cmd, scan_cmd


app = typer.Typer(name="statscribe", no_args_is_help=True, help="Detect and parse tabletop RPG content blocks from extracted text")

app.command(name="build")(build_cmd)
app.command(name="init")(init_cmd)
app.command(name="parse")(parse_cmd)
app.command(name="scan")(scan_cmd)
