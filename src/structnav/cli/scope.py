"""
CLI Scope Commands

select, delete, list, next, previous
"""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from structnav.schemas import Direction, Position
from .common import (
    COLUMN_OPTION,
    DRY_RUN_OPTION,
    FILE_ARGUMENT,
    JSON_OPTION,
    LANGUAGE_OPTION,
    LINE_OPTION,
    YES_OPTION,
    commit_edit,
    confirm_delete,
    emit_navigation,
    emit_selection,
    load_config,
    make_facade,
    open_buffer,
)
from .config import CLIConfig
from .output import echo, get_console, print_json

app = typer.Typer()
console = get_console()

TARGETS = ("function", "class", "any")


def _check_target(target: str) -> str:
    if target not in TARGETS:
        raise typer.BadParameter(f"must be one of: {', '.join(TARGETS)}")
    return target


TARGET_OPTION = typer.Option("any", "--target", "-t", callback=_check_target, help="function, class or any")


@app.command("select")
def select_cmd(
    file: Path = FILE_ARGUMENT,
    line: int = LINE_OPTION,
    column: int = COLUMN_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Select the function (or class, interface, enum) around the cursor.
    """
    config = load_config()
    _, buffer, language_id = open_buffer(file, language, config)
    result = make_facade().select_scope(buffer, Position(line=line, column=column), language_id)
    emit_selection(result, json_output)


@app.command("delete")
def delete_cmd(
    file: Path = FILE_ARGUMENT,
    line: int = LINE_OPTION,
    column: int = COLUMN_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    yes: bool = YES_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Delete the function (or class, interface, enum) around the cursor.
    """
    config = load_config()
    writer, buffer, language_id = open_buffer(file, language, config)
    facade = make_facade()
    cursor = Position(line=line, column=column)

    scope = facade.find_scope(buffer, cursor, language_id)
    if scope is not None:
        confirm_delete(
            f"{scope.kind.value} '{scope.name}' ({scope.line_count} lines)",
            yes, dry_run, config,
        )

    result = facade.delete_scope(buffer, cursor, language_id)
    commit_edit(writer, buffer, result, dry_run, json_output)


@app.command("list")
def list_cmd(
    file: Path = FILE_ARGUMENT,
    target: str = TARGET_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    List scope declarations in a file.
    """
    config = load_config()
    _, buffer, language_id = open_buffer(file, language, config)
    scopes = make_facade().list_scopes(buffer, language_id, target)

    if json_output:
        print_json({
            "file": str(file),
            "language": language_id,
            "scopes": [scope.model_dump(mode="json") for scope in scopes],
        })
    elif CLIConfig.is_machine_mode():
        for scope in scopes:
            echo(f"{scope.kind.value}\t{scope.name}\t{scope.start_line}-{scope.end_line}")
    else:
        table = Table(title=f"Scopes in {file} ({language_id})")
        table.add_column("Kind", style="cyan")
        table.add_column("Name", style="magenta")
        table.add_column("Lines", justify="right")
        for scope in scopes:
            table.add_row(scope.kind.value, scope.name, f"{scope.start_line}-{scope.end_line}")
        console.print(table)


def _navigate(file, line, column, language, target, wrap, json_output, direction):
    config = load_config()
    _, buffer, language_id = open_buffer(file, language, config)
    wrap_around = config.wrap_around if wrap is None else wrap
    result = make_facade().navigate_scope(
        buffer,
        Position(line=line, column=column),
        language_id,
        target=target,
        direction=direction,
        wrap_around=wrap_around,
    )
    emit_navigation(result, json_output)


WRAP_OPTION = typer.Option(
    None,
    "--wrap/--no-wrap",
    help="Wrap around at the ends of the file (default from navigation.wrap_around)",
)


@app.command("next")
def next_cmd(
    file: Path = FILE_ARGUMENT,
    line: int = LINE_OPTION,
    column: int = COLUMN_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    target: str = TARGET_OPTION,
    wrap: Optional[bool] = WRAP_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Move to the next scope declaration.
    """
    _navigate(file, line, column, language, target, wrap, json_output, Direction.FORWARD)


@app.command("previous")
def previous_cmd(
    file: Path = FILE_ARGUMENT,
    line: int = LINE_OPTION,
    column: int = COLUMN_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    target: str = TARGET_OPTION,
    wrap: Optional[bool] = WRAP_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Move to the previous scope declaration.
    """
    _navigate(file, line, column, language, target, wrap, json_output, Direction.BACKWARD)
