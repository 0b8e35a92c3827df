"""tweakscript CLI

Usage:
    tweakscript compile linux.yaml                    # all scripts
    tweakscript compile linux.yaml -l standard        # recommended scripts
    tweakscript compile linux.yaml -s "Disable X"     # selected scripts
    tweakscript compile linux.yaml --revert -o undo.sh
    tweakscript list linux.yaml                       # list scripts
    tweakscript -v                                    # show version
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from tweakscript._version import __version__
from tweakscript.definitions import load_collection
from tweakscript.exceptions import TweakScriptError
from tweakscript.generation import ScriptGenerator
from tweakscript.parser import (
    CategoryCollection,
    ProjectDetails,
    RecommendationLevel,
    Script,
    SelectedScript,
    parse_collection,
)

log = logging.getLogger(__name__)

console = Console()

app = typer.Typer(help="Compile category/script definitions into scripts.")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the tweakscript CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (--verbose): INFO level
    - Debug (TWEAKSCRIPT_DEBUG=1): DEBUG level
    """
    debug = bool(os.environ.get("TWEAKSCRIPT_DEBUG"))
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("tweakscript")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tweakscript {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "-v",
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show progress logs."),
) -> None:
    """tweakscript - compiles category/script definitions into scripts."""
    setup_logging(verbose)


def _load(path: Path, homepage: str) -> CategoryCollection:
    definition = load_collection(path)
    project = ProjectDetails(version=__version__, homepage=homepage)
    return parse_collection(definition, project)


def _select_scripts(
    collection: CategoryCollection,
    names: List[str],
    level: Optional[RecommendationLevel],
) -> list[Script]:
    if names:
        scripts = []
        for name in names:
            script = collection.find_script(name)
            if script is None:
                raise typer.BadParameter(
                    f"Script not found: {name}", param_hint="--script"
                )
            scripts.append(script)
        return scripts
    if level is not None:
        return list(collection.get_scripts_by_level(level))
    return list(collection.all_scripts())


@app.command("compile")
def compile_command(
    collection_file: Path = typer.Argument(..., help="Collection YAML file."),
    script_names: Optional[List[str]] = typer.Option(
        None, "-s", "--script", help="Script to include (repeatable)."
    ),
    level: Optional[RecommendationLevel] = typer.Option(
        None, "-l", "--level", help="Include scripts recommended at this level."
    ),
    revert: bool = typer.Option(False, "--revert", help="Emit revert code instead."),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the script to a file instead of stdout."
    ),
    homepage: str = typer.Option(
        "", "--homepage", help="Value of {{ $homepage }}."
    ),
) -> None:
    """Compile a collection into a single script."""
    try:
        collection = _load(collection_file, homepage)
        scripts = _select_scripts(collection, script_names or [], level)

        if revert:
            skipped = [s.name for s in scripts if not s.can_revert]
            for name in skipped:
                log.warning("Skipping %r: no revert code", name)
            scripts = [s for s in scripts if s.can_revert]

        selection = [SelectedScript(script=s, revert=revert) for s in scripts]
        generated = ScriptGenerator().build_script(selection, collection.scripting)
    except TweakScriptError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps batch \r\n line endings untouched
        with open(output, "w", encoding="utf-8", newline="") as f:
            f.write(generated.code)
        typer.echo(f"Wrote {len(selection)} script(s) to {output}")
    else:
        typer.echo(generated.code)


@app.command("list")
def list_command(
    collection_file: Path = typer.Argument(..., help="Collection YAML file."),
) -> None:
    """List the scripts of a collection."""
    try:
        collection = _load(collection_file, "")
    except TweakScriptError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    language = collection.scripting.language.value
    table = Table(title=f"{collection.os or 'collection'} ({language})")
    table.add_column("Category", style="cyan")
    table.add_column("Script")
    table.add_column("Level")
    table.add_column("Revert")

    for category in collection.actions:
        for script in category.all_scripts():
            table.add_row(
                category.name,
                script.name,
                script.level.value if script.level else "",
                "yes" if script.can_revert else "",
            )

    console.print(table)


if __name__ == "__main__":
    app()
