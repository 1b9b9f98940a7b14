import typer

from structnav import __version__
from structnav.logging_config import logger, setup_logging
from structnav.cli import scope, bracket, sexp, config_cmd
from structnav.cli.config import CLIConfig

app = typer.Typer()


# Global CLI callback for flags that apply to all commands
@app.callback()
def global_options(
    human: bool = typer.Option(
        False,
        "--human",
        "-H",
        help="Enable human mode: tables, panels and colors (also via STRUCTNAV_HUMAN_MODE env var)"
    ),
):
    """
    structnav: structural navigation and editing for source files.

    Machine mode is the default (plain text or minified JSON).
    Use --human/-H for pretty output.
    """
    if human:
        CLIConfig.set_machine_mode(False)
    else:
        CLIConfig.set_machine_mode(None)
        if CLIConfig.is_machine_mode():
            setup_logging(suppress_console=True, force=True)


app.add_typer(scope.app, name="scope", help="Function/class scopes (select, delete, list, next, previous)")
app.add_typer(bracket.app, name="bracket", help="Curly-brace scopes (select, delete)")
app.add_typer(sexp.app, name="sexp", help="Balanced expressions (forward, backward, mark, parent, expand, transpose, up, down)")
app.add_typer(config_cmd.app, name="config", help="User configuration (show, set)")


@app.command()
def version():
    """
    Prints the current version of structnav.
    """
    logger.debug("version requested")
    typer.echo(f"structnav v{__version__}")


if __name__ == "__main__":
    app()
