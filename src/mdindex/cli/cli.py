"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdindex.cli.commands import (
    featured_cmd,
    ingest_cmd,
    init_cmd,
    list_cmd,
    show_cmd,
    tag_cmd,
    tags_cmd,
)


app = typer.Typer(name="mdindex", no_args_is_help=True, help="Index markdown blog posts by date, tag and featured flag")

app.command(name="init")(init_cmd)
app.command(name="ingest")(ingest_cmd)
app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
app.command(name="tag")(tag_cmd)
app.command(name="featured")(featured_cmd)
app.command(name="tags")(tags_cmd)
