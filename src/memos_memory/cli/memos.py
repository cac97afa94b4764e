"""MemOS CLI - poke the memory backend from a shell.

Goes through the same operations the agent tools use, so what you see here
is what the agent sees (including degraded results when MemOS is down).

Usage:
    memos save "I take my coffee black."
    memos search "coffee"
    memos get --filter coffee
    memos forget 3f2a9c
"""

import asyncio
import sys
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from ..api import MemosApi
from ..config import MemosConfig
from ..memories import Envelope, forget, get_all, save, search
from ..memories.normalize import record_content
from ..memories.operations import GET_CONTENT_ALIASES

app = typer.Typer(help="MemOS - semantic memory CLI")
console = Console()


def _api() -> MemosApi:
    return MemosApi(MemosConfig.load())


def run_async(coro):
    """Run an async function synchronously."""
    return asyncio.run(coro)


def _format_date(created_at) -> str:
    if not created_at:
        return "unknown"
    try:
        if isinstance(created_at, (int, float)):
            dt = pendulum.from_timestamp(created_at)
        else:
            dt = pendulum.parse(str(created_at))
        return dt.in_tz(pendulum.local_timezone()).format("YYYY-MM-DD HH:mm")
    except (ValueError, TypeError):  # pendulum ParserError is a ValueError
        return str(created_at)


def _exit_if_degraded(envelope: Envelope) -> None:
    if envelope.fallback:
        console.print(f"[red]MemOS unavailable: {envelope.error}[/red]")
        raise typer.Exit(1)


@app.command(name="search")
def search_cmd(
    query: Annotated[str, typer.Argument(help="Search query")],
    limit: Annotated[int, typer.Option("--limit", "-l", help="Max results")] = 10,
    min_score: Annotated[
        float, typer.Option("--min-score", "-m", help="Minimum relevance score (0-1)")
    ] = 0.0,
):
    """Search memories."""
    envelope = run_async(search(_api(), query, max_results=limit, min_score=min_score))
    _exit_if_degraded(envelope)

    results = envelope.data["results"]
    if not results:
        console.print("[dim]No memories found[/dim]")
        return

    for mem in results:
        date_str = _format_date(mem["metadata"].get("created_at"))
        console.print(
            f"[cyan][{mem['score']:.2f}][/cyan] [dim]{mem['category']} #{mem['id']}[/dim] ({date_str})"
        )
        console.print(mem["content"])
        console.print()


@app.command(name="get")
def get_cmd(
    filter: Annotated[
        Optional[str], typer.Option("--filter", "-f", help="Only memories containing this text")
    ] = None,
):
    """List stored textual memories."""
    envelope = run_async(get_all(_api(), filter=filter))
    _exit_if_degraded(envelope)

    memories = envelope.data["memories"]
    if not memories:
        console.print("[dim]No memories[/dim]")
        return

    for mem in memories:
        mem_id = "?"
        if isinstance(mem, dict):
            mem_id = mem.get("id") or mem.get("memory_id") or "?"
        console.print(f"[dim]#{mem_id}[/dim]")
        console.print(record_content(mem, GET_CONTENT_ALIASES))
        console.print()

    console.print(f"[dim]{envelope.data['total']:,} memories[/dim]")


@app.command(name="save")
def save_cmd(
    content: Annotated[
        Optional[str],
        typer.Argument(help="Memory content (use - for stdin)")
    ] = None,
):
    """Save a new memory."""
    # Read content from stdin if "-" or no argument
    if content == "-" or (content is None and not sys.stdin.isatty()):
        content = sys.stdin.read().strip()

    if not content:
        console.print("[red]Error: No content provided[/red]")
        raise typer.Exit(1)

    envelope = run_async(save(_api(), content))
    _exit_if_degraded(envelope)
    console.print("[green]✓ Memory saved[/green]")


@app.command(name="forget")
def forget_cmd(
    memory_ids: Annotated[list[str], typer.Argument(help="Memory IDs to delete")],
):
    """Delete memories by id."""
    envelope = run_async(forget(_api(), memory_ids))
    _exit_if_degraded(envelope)
    count = len(envelope.data["deleted"])
    console.print(f"[green]✓ Forgot {count} memor{'y' if count == 1 else 'ies'}[/green]")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
