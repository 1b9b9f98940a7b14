"""
CLI Bracket Commands

select, delete
"""

from pathlib import Path
from typing import Optional

import typer

from structnav.schemas import Position
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
    emit_selection,
    load_config,
    make_facade,
    open_buffer,
)

app = typer.Typer()


@app.command("select")
def select_cmd(
    file: Path = FILE_ARGUMENT,
    line: int = LINE_OPTION,
    column: int = COLUMN_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Select the content of the curly braces around (or after) the cursor.
    """
    config = load_config()
    _, buffer, language_id = open_buffer(file, language, config)
    result = make_facade().select_bracket_scope(buffer, Position(line=line, column=column), language_id)
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
    Delete the content of the curly braces around (or after) the cursor.

    The braces themselves are kept.
    """
    config = load_config()
    writer, buffer, language_id = open_buffer(file, language, config)
    facade = make_facade()
    cursor = Position(line=line, column=column)

    pair, used_next = facade.find_bracket_scope(buffer, cursor, language_id)
    if pair is not None:
        which = "next bracket pair" if used_next else "bracket content"
        confirm_delete(
            f"{which} at lines {pair.open_line}-{pair.close_line}",
            yes, dry_run, config,
        )

    result = facade.delete_bracket_scope(buffer, cursor, language_id)
    commit_edit(writer, buffer, result, dry_run, json_output)
