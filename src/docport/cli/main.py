import typer

from docport.common import bus, needle
from docport.needle import L
from .rendering import CliRenderer
from .commands.port import port_command
from .commands.undoc import undoc_command

app = typer.Typer(
    name="docport",
    help=needle.get(L.cli.app.description),
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help=needle.get(L.cli.option.verbose.help)
    ),
):
    bus.set_renderer(CliRenderer(verbose=verbose))


app.command(name="port", help=needle.get(L.cli.command.port.help))(port_command)
app.command(name="undoc", help=needle.get(L.cli.command.undoc.help))(undoc_command)


if __name__ == "__main__":
    app()
