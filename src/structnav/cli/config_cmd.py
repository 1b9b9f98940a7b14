"""
CLI Config Commands

show, set
"""

import json
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from structnav.user_config import parse_config_value
from .common import load_config
from .config import CLIConfig
from .output import echo, get_console, print_error, print_json

app = typer.Typer()
console = get_console()


def _flatten(config: dict, prefix: str = ""):
    for key, value in config.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict) and value:
            yield from _flatten(value, f"{dotted}.")
        else:
            yield dotted, value


@app.command("show")
def show_cmd(
    key: Optional[str] = typer.Argument(None, help="Dot-separated key (e.g. navigation.wrap_around)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the merged configuration, or a single key.
    """
    config = load_config()

    if key is not None:
        value = config.get(key)
        if value is None:
            print_error("UNKNOWN_KEY", f"No configuration value for '{key}'", json_output=json_output, input_value=key)
            raise typer.Exit(code=1)
        if json_output:
            print_json({"key": key, "value": value})
        else:
            echo(json.dumps(value))
        return

    data = config.get_all()
    if json_output or CLIConfig.is_machine_mode():
        print_json(data)
        return

    table = Table(title="structnav configuration")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for dotted, value in _flatten(data):
        table.add_row(dotted, escape(json.dumps(value)))
    console.print(table)
    console.print(f"[dim]Global: {config.global_config_path}[/dim]")
    console.print(f"[dim]Local: {config.local_config_path}[/dim]")


@app.command("set")
def set_cmd(
    key: str = typer.Argument(..., help="Dot-separated key"),
    value: str = typer.Argument(..., help="Value (JSON literals such as true or 3 are decoded)"),
    global_scope: bool = typer.Option(False, "--global", "-g", help="Write ~/.structnav/config.json instead of the project config"),
):
    """
    Set a configuration value.
    """
    config = load_config()
    parsed = parse_config_value(value)

    if global_scope:
        saved = config.set_global(key, parsed)
    else:
        saved = config.set_local(key, parsed)

    if not saved:
        print_error("CONFIG_WRITE_FAILED", f"Failed to save '{key}'", input_value=key)
        raise typer.Exit(code=1)

    where = "global" if global_scope else "local"
    if CLIConfig.is_machine_mode():
        echo(f"{key}={json.dumps(parsed)}")
    else:
        console.print(f"[green]Saved {where} config:[/green] {escape(key)} = {escape(json.dumps(parsed))}")
