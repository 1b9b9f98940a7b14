"""
Common CLI helpers shared by the command modules.

Loading a file into a buffer, turning results into output, and writing
edited buffers back through FileWriter.
"""

from pathlib import Path
from typing import Optional, Tuple

import typer
from rich.markup import escape
from rich.panel import Panel

from structnav.buffer import TextBuffer
from structnav.editing import FileWriter
from structnav.exceptions import ConfigError, FileChangedError
from structnav.facade import NavigationFacade
from structnav.languages import default_registry, detect_language
from structnav.logging_config import logger
from structnav.schemas import EditResult, NavigationResult, Position, SelectionResult
from structnav.user_config import UserConfig
from .config import CLIConfig
from .output import echo, get_console, print_error, print_json

console = get_console()

# Shared options
FILE_ARGUMENT = typer.Argument(..., help="Source file", exists=True, dir_okay=False, readable=True)
LINE_OPTION = typer.Option(0, "--line", "-l", min=0, help="Cursor line (zero-based)")
COLUMN_OPTION = typer.Option(0, "--column", "-c", min=0, help="Cursor column (zero-based)")
LANGUAGE_OPTION = typer.Option(None, "--language", help="Language id (detected from the extension by default)")
JSON_OPTION = typer.Option(False, "--json", help="Output the full result as JSON")
DRY_RUN_OPTION = typer.Option(False, "--dry-run", help="Print the edited text instead of writing the file")
YES_OPTION = typer.Option(False, "--yes", "-y", help="Delete without asking for confirmation")


def load_config() -> UserConfig:
    """User configuration for the current directory, or exit on a bad config."""
    try:
        return UserConfig(Path.cwd())
    except ConfigError as e:
        print_error("CONFIG_ERROR", str(e))
        raise typer.Exit(code=1)


def open_buffer(
    file: Path,
    language: Optional[str],
    config: UserConfig,
) -> Tuple[FileWriter, TextBuffer, str]:
    """
    Load a file for a command.

    Returns:
        (writer, buffer, language id)

    Raises:
        typer.Exit: If the file cannot be read as UTF-8 text
    """
    writer = FileWriter(backup_enabled=config.backup_enabled)
    try:
        buffer = writer.load(file)
    except (OSError, UnicodeDecodeError) as e:
        print_error("FILE_READ_ERROR", f"Failed to read {file}: {e}", input_value=str(file))
        raise typer.Exit(code=1)

    try:
        language_id = language or detect_language(file, config.extension_overrides)
    except ConfigError as e:
        print_error("CONFIG_ERROR", str(e))
        raise typer.Exit(code=1)

    logger.debug(f"Opened {file} as {language_id}")
    return writer, buffer, language_id


def make_facade() -> NavigationFacade:
    return NavigationFacade(default_registry())


def position_text(position: Optional[Position]) -> str:
    if position is None:
        return ""
    return f"{position.line}:{position.column}"


def fail(result, json_output: bool) -> None:
    """Report a failed result and exit with code 1."""
    code = (result.reason or "error").upper()
    if json_output:
        print_json({"status": "error", "code": code, **result.model_dump(mode="json")})
    else:
        print_error(code, result.message)
    raise typer.Exit(code=1)


def emit_navigation(result: NavigationResult, json_output: bool) -> None:
    """Machine mode prints the new cursor as line:column."""
    if not result.success:
        fail(result, json_output)
    if json_output:
        print_json(result.model_dump(mode="json"))
    elif CLIConfig.is_machine_mode():
        echo(position_text(result.target))
    else:
        if result.message:
            console.print(f"[green]{escape(result.message)}[/green]")
        console.print(f"[dim]Cursor:[/dim] [bold]{position_text(result.target)}[/bold]")


def emit_selection(result: SelectionResult, json_output: bool) -> None:
    """Machine mode prints the selected text."""
    if not result.success:
        fail(result, json_output)
    if json_output:
        print_json(result.model_dump(mode="json"))
    elif CLIConfig.is_machine_mode():
        echo(result.text)
    else:
        selection = result.selection
        subtitle = f"{position_text(selection.start)} - {position_text(selection.end)}" if selection else None
        console.print(Panel(escape(result.text), title=escape(result.message), subtitle=subtitle))


def commit_edit(
    writer: FileWriter,
    buffer: TextBuffer,
    result: EditResult,
    dry_run: bool,
    json_output: bool,
) -> None:
    """
    Write an edited buffer back (or print it for --dry-run) and report.

    Raises:
        typer.Exit: On a failed result or a failed write
    """
    if not result.success:
        fail(result, json_output)

    if dry_run:
        if json_output:
            print_json({**result.model_dump(mode="json"), "new_text": buffer.text, "written": False})
        else:
            echo(buffer.text, nl=False)
        return

    try:
        success, backup_path = writer.save(buffer)
    except FileChangedError as e:
        print_error("FILE_CHANGED", str(e), json_output=json_output, input_value=e.file_path)
        raise typer.Exit(code=1)

    if not success:
        print_error("WRITE_FAILED", f"Failed to write {buffer.path}", json_output=json_output)
        raise typer.Exit(code=1)

    if json_output:
        print_json({**result.model_dump(mode="json"), "written": True, "backup": backup_path})
    elif CLIConfig.is_machine_mode():
        echo(result.message)
    else:
        console.print(f"[green]{escape(result.message)}[/green]")
        detail = result.details.get("detail")
        if detail:
            console.print(f"[dim]{escape(detail)}[/dim]")
        if backup_path:
            console.print(f"[dim]Backup: {escape(backup_path)}[/dim]")


def confirm_delete(description: str, yes: bool, dry_run: bool, config: UserConfig) -> None:
    """
    Ask before deleting unless --yes, --dry-run or configuration says not to.

    Raises:
        typer.Abort: If the user declines
    """
    if yes or dry_run or not config.confirm_before_deleting:
        return
    typer.confirm(f"Delete {description}?", abort=True)
