"""CLI entrypoint: Typer app definition and command registration"""

import typer

from blogpub.cli.commands import (
    add_cmd,
    build_cmd,
    delete_cmd,
    init_cmd,
    list_cmd,
    main_callback,
    render_cmd,
    toc_cmd,
)


app = typer.Typer(name="blogpub", no_args_is_help=True, help="Static blog post manager and builder")

app.callback()(main_callback)
app.command(name="init")(init_cmd)
app.command(name="list")(list_cmd)
app.command(name="render")(render_cmd)
app.command(name="toc")(toc_cmd)
app.command(name="add")(add_cmd)
app.command(name="delete")(delete_cmd)
app.command(name="build")(build_cmd)
