"""CLI entrypoints for ddgtool."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from ddgtool.config import load_settings
from ddgtool.errors import SerializationError, ToolError, ValidationError
from ddgtool.logging import configure_logging, get_logger
from ddgtool.serialization import deserialize, serialize
from ddgtool.tools.base import SearchToolOutput
from ddgtool.tools.duckduckgo import DuckDuckGoSearchTool

app = typer.Typer(add_completion=False, help="Rate-limited DuckDuckGo search tool CLI")
logger = get_logger(__name__)


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query (1-128 characters)."),
    page: int = typer.Option(1, "--page", "-p", help="Result page, 1-10."),
    max_results: int | None = typer.Option(
        None,
        "--max-results",
        help="Results per page (overrides DDGTOOL_MAX_RESULTS_PER_PAGE)",
    ),
    no_throttle: bool = typer.Option(False, "--no-throttle", help="Disable request throttling"),
    proxy: str | None = typer.Option(None, "--proxy", help="HTTP(S) or SOCKS proxy URL"),
    region: str | None = typer.Option(None, "--region", help="DuckDuckGo region, e.g. us-en"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the result snapshot to this JSON file"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
) -> None:
    """Search DuckDuckGo and print one page of results."""

    settings = load_settings()
    configure_logging(settings.log_level)

    overrides: dict[str, Any] = {}
    if max_results is not None:
        overrides["max_results_per_page"] = max_results
    if no_throttle:
        overrides["throttle"] = False
    if proxy:
        overrides["http_proxy_url"] = proxy

    run_options = {"search": {"region": region}} if region else None

    try:
        tool = DuckDuckGoSearchTool(settings.to_tool_options(**overrides))
        result = asyncio.run(tool.run({"query": query, "page": page}, run_options))
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from e
    except ToolError as e:
        typer.echo(f"Search failed: {e}", err=True)
        raise typer.Exit(code=1) from e

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(serialize(result, indent=2), encoding="utf-8")
        logger.info("Snapshot written", extra={"path": str(output)})

    _print_output(result, as_json=as_json)


@app.command()
def show(
    snapshot_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Snapshot JSON file"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
) -> None:
    """Print results restored from a snapshot written by ``search --output``."""

    try:
        restored = deserialize(snapshot_file.read_text(encoding="utf-8"))
    except SerializationError as e:
        typer.echo(f"Cannot load snapshot: {e}", err=True)
        raise typer.Exit(code=1) from e

    if not isinstance(restored, SearchToolOutput):
        typer.echo(f"Snapshot holds {type(restored).__name__}, not search results", err=True)
        raise typer.Exit(code=1)

    _print_output(restored, as_json=as_json)


def _print_output(result: SearchToolOutput, *, as_json: bool) -> None:
    if as_json:
        typer.echo(result.get_text_content())
        return

    if result.is_empty():
        typer.echo("No results.")
        return

    table = Table(show_lines=True)
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Description")
    table.add_column("URL", overflow="fold")
    for i, item in enumerate(result, start=1):
        table.add_row(str(i), item.title, item.description, item.url)
    Console().print(table)


if __name__ == "__main__":
    app()
