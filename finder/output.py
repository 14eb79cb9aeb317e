"""Rendering of ranked results for the terminal and for export."""

from __future__ import annotations

import csv
import io
import json
from enum import Enum
from typing import Any

import typer

from shodh_core.schemas import RankedResult, ScoredCandidate
from traversal import DiagnosticsSummary

NO_RESULTS_MESSAGE = "No results found."


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    CSV = "csv"


def entry_type(is_dir: bool) -> str:
    return "DIR " if is_dir else "FILE"


def format_entry(scored: ScoredCandidate) -> str:
    return f"[{scored.score:5}] {entry_type(scored.is_dir)}  {scored.path}"


def format_skipped(summary: DiagnosticsSummary) -> str:
    """One-line note on what the walk skipped, grouped by failure kind."""
    kinds = ", ".join(f"{kind}: {count}" for kind, count in summary.top_failures(len(summary.failures)))
    return f"Skipped {summary.total} unreadable entries ({kinds}); use --verbose for details"


def to_records(results: RankedResult) -> list[dict[str, Any]]:
    return [
        {"score": score, "path": path, "type": entry_type(is_dir).strip()}
        for score, path, is_dir in results.entries()
    ]


def render_json(results: RankedResult) -> str:
    return json.dumps(to_records(results), indent=2)


def render_csv(results: RankedResult) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=["score", "type", "path"], lineterminator="\n")
    writer.writeheader()
    writer.writerows(to_records(results))
    return buffer.getvalue()


def render_text(results: RankedResult) -> None:
    """Print the results table, or the no-results line when empty."""
    typer.secho("\nResults:", fg=typer.colors.GREEN, bold=True)
    if len(results) == 0:
        typer.secho(NO_RESULTS_MESSAGE, fg=typer.colors.RED, bold=True)
        return
    for scored in results:
        color = typer.colors.BLUE if scored.is_dir else typer.colors.YELLOW
        typer.secho(format_entry(scored), fg=color)


def render(results: RankedResult, output_format: OutputFormat) -> None:
    if output_format is OutputFormat.JSON:
        typer.echo(render_json(results))
    elif output_format is OutputFormat.CSV:
        typer.echo(render_csv(results), nl=False)
    else:
        render_text(results)
