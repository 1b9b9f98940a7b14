"""
CLI Output Utilities

Machine-aware output functions that adapt based on machine mode.
"""

import json
import re
from typing import Any, Optional

import typer
from rich.console import Console as RichConsole
from rich.table import Table

from structnav.cli.config import CLIConfig

_MARKUP = re.compile(r"\[/?[a-z ]+\]")


class MachineAwareConsole:
    """
    A Console wrapper that automatically adapts output based on machine mode.
    Acts as a drop-in replacement for rich.console.Console.
    """

    def __init__(self):
        self._rich_console = RichConsole()

    def print(self, *args, **kwargs):
        """Print that respects machine mode."""
        if not CLIConfig.is_machine_mode():
            self._rich_console.print(*args, **kwargs)
            return

        for arg in args:
            if isinstance(arg, str):
                # Strip rich markup tags
                plain = _MARKUP.sub("", arg).strip()
                if plain:
                    typer.echo(plain)
            elif isinstance(arg, Table) or hasattr(arg, "__rich__") or hasattr(arg, "__rich_console__"):
                # Rich renderables have no plain form; callers use --json instead
                continue
            elif arg:
                typer.echo(arg)

    def __getattr__(self, name):
        """Delegate all other attributes to the rich console."""
        return getattr(self._rich_console, name)


_console = MachineAwareConsole()


def echo(message: str = "", **kwargs) -> None:
    """Print a plain message."""
    typer.echo(message, **kwargs)


def print_json(data: Any, minified: Optional[bool] = None) -> None:
    """
    Print JSON data respecting machine mode.
    In machine mode, always minifies. In human mode, pretty prints.
    """
    if minified is None:
        minified = CLIConfig.is_machine_mode()

    if minified:
        echo(json.dumps(data, separators=(",", ":")))
    else:
        echo(json.dumps(data, indent=2))


def structured_error(code: str, message: str, input_value: Optional[str] = None,
                     suggestions: Optional[list] = None) -> dict:
    """
    Create a structured error object for machine mode.

    Args:
        code: Error code (e.g., "NOT_FOUND", "FILE_CHANGED")
        message: Human-readable error message
        input_value: The input that caused the error
        suggestions: List of alternative suggestions
    """
    error_obj = {
        "status": "error",
        "code": code,
        "message": message,
    }
    if input_value:
        error_obj["input"] = input_value
    if suggestions:
        error_obj["suggestions"] = suggestions
    return error_obj


def print_error(code: str, message: str, json_output: bool = False,
                input_value: Optional[str] = None, suggestions: Optional[list] = None) -> None:
    """
    Report an error: structured JSON in machine mode or with --json,
    red text otherwise.
    """
    if CLIConfig.is_machine_mode() or json_output:
        print_json(structured_error(code, message, input_value, suggestions))
    else:
        _console.print(f"[red]Error: {message}[/red]")
        if suggestions:
            _console.print(f"[dim]Suggestions: {', '.join(suggestions)}[/dim]")


def get_console() -> MachineAwareConsole:
    """
    Get the console instance for advanced usage.
    Note: Direct console usage should check machine mode.
    """
    return _console
