"""
CrateDocs CLI - Rust crate documentation from the command line

Runs the MCP server, or calls any of its operations directly:
1. Crate and item documentation from docs.rs
2. crates.io search
3. Usage examples and type-relationship reports for items
"""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

from cratedocs import __version__
from cratedocs.config import load_settings
from cratedocs.service import CrateDocsService

app = typer.Typer(
    name="cratedocs",
    help="Rust crate documentation lookups (docs.rs and crates.io)",
    add_completion=False,
)

console = Console()


def _run_operation(operation: str, *args, raw: bool = False):
    """Create a service, run one operation on it and print the payload."""

    async def _call() -> str:
        service = CrateDocsService(load_settings())
        try:
            return await getattr(service, operation)(*args)
        finally:
            await service.aclose()

    try:
        text = asyncio.run(_call())
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  Interrupted by user[/yellow]")
        raise typer.Exit(1)

    if raw:
        console.print(text, markup=False, highlight=False, soft_wrap=True)
    else:
        console.print(Markdown(text))


@app.command()
def serve():
    """
    Start the CrateDocs MCP server (stdio mode).

    Tools:
    - lookup_crate: Crate overview documentation
    - lookup_item: Item documentation (struct, enum, trait, function, macro)
    - search_crates: crates.io keyword search
    - lookup_item_examples: Usage examples for an item
    - analyze_item_relationships: Type relationships for an item

    Logs go to CRATEDOCS_LOG_FILE because stdout carries the MCP stream.
    """
    from cratedocs.mcp_servers.docs_server import main as server_main

    server_main()


@app.command("crate")
def lookup_crate(
    crate_name: str = typer.Argument(..., help="Crate name (e.g., serde)"),
    version: Optional[str] = typer.Option(None, "--version", "-v", help="Crate version (default: latest)"),
    raw: bool = typer.Option(False, "--raw", help="Print the Markdown source instead of rendering it"),
):
    """Show documentation for a crate."""
    _run_operation("lookup_crate", crate_name, version, raw=raw)


@app.command("item")
def lookup_item(
    crate_name: str = typer.Argument(..., help="Crate name (e.g., tokio)"),
    item_path: str = typer.Argument(..., help="Item path (e.g., io::AsyncRead)"),
    version: Optional[str] = typer.Option(None, "--version", "-v", help="Crate version (default: latest)"),
    raw: bool = typer.Option(False, "--raw", help="Print the Markdown source instead of rendering it"),
):
    """
    Show documentation for an item in a crate.

    Example:
        cratedocs item tokio io::AsyncRead --version 1.28.0
    """
    _run_operation("lookup_item", crate_name, item_path, version, raw=raw)


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query (e.g., 'http client')"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum results (default: 10, max: 100)"),
):
    """Search crates.io. Prints the registry's JSON response."""
    _run_operation("search_crates", query, limit, raw=True)


@app.command()
def examples(
    crate_name: str = typer.Argument(..., help="Crate name"),
    item_path: str = typer.Argument(..., help="Item path (e.g., core::Lumin)"),
    version: Optional[str] = typer.Option(None, "--version", "-v", help="Crate version (default: latest)"),
    raw: bool = typer.Option(False, "--raw", help="Print the Markdown source instead of rendering it"),
):
    """Show usage examples for an item."""
    _run_operation("lookup_item_examples", crate_name, item_path, version, raw=raw)


@app.command()
def relationships(
    crate_name: str = typer.Argument(..., help="Crate name"),
    item_path: str = typer.Argument(..., help="Item path (e.g., result::Result)"),
    version: Optional[str] = typer.Option(None, "--version", "-v", help="Crate version (default: latest)"),
    raw: bool = typer.Option(False, "--raw", help="Print the Markdown source instead of rendering it"),
):
    """Show how an item's methods relate to other types."""
    _run_operation("analyze_item_relationships", crate_name, item_path, version, raw=raw)


@app.command()
def config():
    """Show the effective settings."""
    settings = load_settings()
    console.print(Panel.fit(
        "[bold cyan]CrateDocs Settings[/bold cyan]\n\n"
        f"Docs host: [yellow]{settings.docs_host}[/yellow]\n"
        f"Registry host: [yellow]{settings.registry_host}[/yellow]\n"
        f"User-Agent: [yellow]{settings.user_agent}[/yellow]\n"
        f"Timeout: [yellow]{settings.timeout if settings.timeout is not None else 'client default'}[/yellow]\n"
        f"Log file: [yellow]{settings.log_file}[/yellow] ({settings.log_level})",
        border_style="cyan"
    ))


@app.command()
def version():
    """Show the version of cratedocs."""
    console.print(f"[bold cyan]CrateDocs[/bold cyan] v{__version__}")
    console.print("Rust crate documentation lookups")


if __name__ == "__main__":
    app()
