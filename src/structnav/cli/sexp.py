"""
CLI Sexp Commands

forward, backward, mark, parent, expand, transpose, up, down
"""

from pathlib import Path
from typing import Optional

import typer

from structnav.schemas import Boundary, Position
from .common import (
    COLUMN_OPTION,
    DRY_RUN_OPTION,
    FILE_ARGUMENT,
    JSON_OPTION,
    LANGUAGE_OPTION,
    LINE_OPTION,
    commit_edit,
    emit_navigation,
    emit_selection,
    load_config,
    make_facade,
    open_buffer,
)

app = typer.Typer()


@app.command("forward")
def forward_cmd(
    file: Path = FILE_ARGUMENT,
    line: int = LINE_OPTION,
    column: int = COLUMN_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Move past the next S-expression.
    """
    config = load_config()
    _, buffer, language_id = open_buffer(file, language, config)
    result = make_facade().forward_sexp(buffer, Position(line=line, column=column), language_id)
    emit_navigation(result, json_output)


@app.command("backward")
def backward_cmd(
    file: Path = FILE_ARGUMENT,
    line: int = LINE_OPTION,
    column: int = COLUMN_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Move to the start of the previous S-expression.
    """
    config = load_config()
    _, buffer, language_id = open_buffer(file, language, config)
    result = make_facade().backward_sexp(buffer, Position(line=line, column=column), language_id)
    emit_navigation(result, json_output)


@app.command("mark")
def mark_cmd(
    file: Path = FILE_ARGUMENT,
    line: int = LINE_OPTION,
    column: int = COLUMN_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Select the S-expression at or after the cursor.
    """
    config = load_config()
    _, buffer, language_id = open_buffer(file, language, config)
    result = make_facade().mark_sexp(buffer, Position(line=line, column=column), language_id)
    emit_selection(result, json_output)


@app.command("parent")
def parent_cmd(
    file: Path = FILE_ARGUMENT,
    line: int = LINE_OPTION,
    column: int = COLUMN_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Select the smallest bracketed expression around the cursor.
    """
    config = load_config()
    _, buffer, language_id = open_buffer(file, language, config)
    result = make_facade().mark_parent_sexp(buffer, Position(line=line, column=column), language_id)
    emit_selection(result, json_output)


@app.command("expand")
def expand_cmd(
    file: Path = FILE_ARGUMENT,
    line: int = LINE_OPTION,
    column: int = COLUMN_OPTION,
    end_line: Optional[int] = typer.Option(None, "--end-line", min=0, help="Selection end line (defaults to --line)"),
    end_column: Optional[int] = typer.Option(None, "--end-column", min=0, help="Selection end column (defaults to --column)"),
    language: Optional[str] = LANGUAGE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Grow a selection to the enclosing bracketed expression.
    """
    config = load_config()
    _, buffer, language_id = open_buffer(file, language, config)

    start = Position(line=line, column=column)
    end = Position(
        line=line if end_line is None else end_line,
        column=column if end_column is None else end_column,
    )
    if end < start:
        raise typer.BadParameter("selection end precedes its start")

    result = make_facade().expand_selection(buffer, Boundary.between(start, end), language_id)
    emit_selection(result, json_output)


@app.command("transpose")
def transpose_cmd(
    file: Path = FILE_ARGUMENT,
    line: int = LINE_OPTION,
    column: int = COLUMN_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Swap the S-expression at the cursor with the next one.
    """
    config = load_config()
    writer, buffer, language_id = open_buffer(file, language, config)
    result = make_facade().transpose_sexp(buffer, Position(line=line, column=column), language_id)
    commit_edit(writer, buffer, result, dry_run, json_output)


@app.command("up")
def up_cmd(
    file: Path = FILE_ARGUMENT,
    line: int = LINE_OPTION,
    column: int = COLUMN_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Move the S-expression at the cursor before its previous sibling.
    """
    config = load_config()
    writer, buffer, language_id = open_buffer(file, language, config)
    result = make_facade().move_sexp_up(buffer, Position(line=line, column=column), language_id)
    commit_edit(writer, buffer, result, dry_run, json_output)


@app.command("down")
def down_cmd(
    file: Path = FILE_ARGUMENT,
    line: int = LINE_OPTION,
    column: int = COLUMN_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Move the S-expression at the cursor after its next sibling.
    """
    config = load_config()
    writer, buffer, language_id = open_buffer(file, language, config)
    result = make_facade().move_sexp_down(buffer, Position(line=line, column=column), language_id)
    commit_edit(writer, buffer, result, dry_run, json_output)
