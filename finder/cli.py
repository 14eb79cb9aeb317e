"""CLI interface for fuzzy path search."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import typer

from finder import __version__
from finder.config import build_config, load_config, save_config
from finder.logging_config import setup_logging
from finder.output import OutputFormat, format_skipped, render
from shodh_core.pipeline import search
from shodh_core.schemas import CaseSensitivity
from traversal import TraversalError

EPILOG = """
Examples:

  shodh kilo src --files-only -n 20

  shodh resume ~/Documents --dirs-only
"""

app = typer.Typer(
    help="shodh - fast, smart, fuzzy file finder",
    epilog=EPILOG,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"shodh v{__version__}")
        raise typer.Exit()


def _fail(message: str) -> NoReturn:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, bold=True, err=True)
    raise typer.Exit(1)


@app.command()
def find(
    query: Optional[str] = typer.Argument(None, help="Text to match against file and directory names"),
    root: Optional[str] = typer.Argument(None, help="Directory to search (default: current directory)"),
    num: Optional[int] = typer.Option(None, "--num", "-n", min=0, help="Limit number of results (default: 10)"),
    files_only: bool = typer.Option(False, "--files-only", help="Only show files"),
    dirs_only: bool = typer.Option(False, "--dirs-only", help="Only show directories"),
    ignore_case: bool = typer.Option(False, "--ignore-case", "-i", help="Case-insensitive search (default)"),
    case_sensitive: bool = typer.Option(False, "--case-sensitive", "-s", help="Case-sensitive search"),
    no_parallel: bool = typer.Option(False, "--no-parallel", help="Disable parallel scoring"),
    jobs: Optional[int] = typer.Option(None, "--jobs", "-j", min=1, help="Worker count for parallel scoring"),
    no_follow_symlinks: bool = typer.Option(
        False, "--no-follow-symlinks", help="Do not descend into symlinked directories"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML file with default options"),
    save_path: Optional[Path] = typer.Option(None, "--save-config", help="Write the resolved options to a YAML file"),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT, "--format", "-f", case_sensitive=False, help="Output format"
    ),
    progress: bool = typer.Option(False, "--progress", help="Show a progress bar while scoring"),
    verbose: bool = typer.Option(False, "--verbose", help="Log skipped entries"),
    version: bool = typer.Option(
        False, "--version", "-v", callback=_version_callback, is_eager=True, help="Show version info"
    ),
) -> None:
    """Fuzzy-find files and directories below ROOT whose names match QUERY."""
    setup_logging("DEBUG" if verbose else "WARNING")

    if case_sensitive:
        case: CaseSensitivity | None = CaseSensitivity.SENSITIVE
    elif ignore_case:
        case = CaseSensitivity.INSENSITIVE
    else:
        case = None

    # Flags left at their defaults defer to the config file
    overrides = {
        "query": query,
        "root": root,
        "num": num,
        "files_only": files_only or None,
        "dirs_only": dirs_only or None,
        "case": case,
        "parallel": False if no_parallel else None,
        "max_workers": jobs,
        "follow_symlinks": False if no_follow_symlinks else None,
        "show_progress": progress or None,
    }

    file_values = None
    if config_path is not None:
        try:
            file_values = load_config(config_path)
        except (FileNotFoundError, ValueError) as e:
            _fail(str(e))

    if query is None and not (file_values and "query" in file_values):
        _fail("Missing query argument. Use -h for help.")

    try:
        config = build_config(overrides, file_values)
    except ValueError as e:
        _fail(str(e))

    if save_path is not None:
        try:
            save_config(config, save_path)
        except OSError as e:
            _fail(f"Could not save config to {save_path}: {e.strerror or e}")
        typer.secho(f"Saved configuration to {save_path}", fg=typer.colors.GREEN, err=True)

    try:
        outcome = search(config)
    except TraversalError as e:
        typer.secho(f"Error traversing directory: {e}", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(1)

    render(outcome.results, output_format)

    if outcome.summary.total:
        typer.secho(format_skipped(outcome.summary), fg=typer.colors.YELLOW, err=True)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
