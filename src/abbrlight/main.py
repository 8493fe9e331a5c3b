"""abbrlight CLI entry point.

Provides the Typer CLI interface: highlight one buffer and print its
region entries, one ``start end style`` line per span.
"""

import logging
import os
import sys
from typing import List, Optional

import typer

from abbrlight import __version__
from abbrlight.config import get_user_abbreviations_file
from abbrlight.fallback import BashlexHighlighter
from abbrlight.highlighter import AbbrHighlighter
from abbrlight.registry import (
    AbbreviationTable,
    CommandRegistry,
    FunctionRegistry,
    load_user_abbreviations,
)
from abbrlight.styles import StyleResolver

app = typer.Typer(
    name="abbrlight",
    help="Highlight shell abbreviations in a command line"
)


def version_callback(value: bool) -> None:
    """Display version, then exit."""
    if value:
        print(f"abbrlight version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    buffer: str = typer.Argument(..., help="Command line to highlight"),
    abbr: List[str] = typer.Option(
        [], "--abbr", "-a", help="Register a session regular abbreviation",
    ),
    global_abbr: List[str] = typer.Option(
        [], "--global-abbr", "-g", help="Register a session global abbreviation",
    ),
    function: List[str] = typer.Option(
        [], "--function", "-f", help="Treat NAME as a user function",
    ),
    command: List[str] = typer.Option(
        [], "--command", "-c", help="Treat NAME as an invokable command",
    ),
    prefix: Optional[List[str]] = typer.Option(
        None, "--prefix", help="Literal prefix (replaces configured prefixes)",
    ),
    glob_prefix: Optional[List[str]] = typer.Option(
        None, "--glob-prefix", help="Glob prefix (replaces configured prefixes)",
    ),
    user_file: Optional[str] = typer.Option(
        None, "--user-file", help="User abbreviation file to load",
    ),
    theme: Optional[str] = typer.Option(None, "--theme", help="Theme name"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Print the highlight regions of BUFFER."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    table = AbbreviationTable()
    if user_file is not None:
        if not os.path.exists(user_file):
            print(f"\nError: abbreviation file not found: {user_file}\n", file=sys.stderr)
            raise typer.Exit(1)
        load_user_abbreviations(user_file, table)
    elif os.path.exists(get_user_abbreviations_file()):
        load_user_abbreviations(get_user_abbreviations_file(), table)
    for key in abbr:
        table.add(key, session=True)
    for key in global_abbr:
        table.add(key, global_=True, session=True)

    functions = FunctionRegistry(function)
    commands = CommandRegistry(command)
    resolve_style = StyleResolver(theme_name=theme)

    highlighter = AbbrHighlighter(
        table,
        functions,
        commands,
        resolve_style,
        scalar_prefixes=prefix or None,
        glob_prefixes=glob_prefix or None,
        fallback=BashlexHighlighter(functions, commands, resolve_style),
    )
    for span in highlighter.highlight(buffer):
        print(span.to_region())


if __name__ == "__main__":
    app()
