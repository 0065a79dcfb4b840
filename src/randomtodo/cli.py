"""Command line interface for randomtodo."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from randomtodo.config import AppConfig
from randomtodo.index.pattern import InvalidPatternError
from randomtodo.ingestion.vault import FileSystemDocumentStore
from randomtodo.navigation import ConsoleNavigator, SystemNavigator
from randomtodo.plugin import RandomTodoPlugin
from randomtodo.web.app import app as web_app


console = Console()
app = typer.Typer(help="randomtodo - jump to a random to-do item in your notes")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_plugin(vault: Path | None, settings: Path | None, open_files: bool = False) -> RandomTodoPlugin:
    config = AppConfig(vault_path=vault, settings_path=settings)
    if not config.vault_path.is_dir():
        raise typer.BadParameter(f"Vault directory not found: {config.vault_path}")

    store = FileSystemDocumentStore(config.vault_path, extensions=config.extensions)
    navigator = SystemNavigator() if open_files else ConsoleNavigator(console)
    plugin = RandomTodoPlugin(config, store, navigator)
    plugin.load()
    return plugin


@app.command()
def file(
    vault: Path = typer.Option(None, "--vault", help="Vault directory (defaults to cwd)"),
    settings: Path = typer.Option(None, "--settings", help="Settings JSON path"),
    open_file: bool = typer.Option(False, "--open", help="Open the file instead of printing it"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Pick a random document that contains a to-do item."""
    _setup_logging(verbose)
    plugin = _build_plugin(vault, settings, open_file)
    if plugin.open_random_file() is None:
        console.print("[yellow]No to-do items found.[/yellow]")


@app.command()
def item(
    vault: Path = typer.Option(None, "--vault", help="Vault directory (defaults to cwd)"),
    settings: Path = typer.Option(None, "--settings", help="Settings JSON path"),
    open_file: bool = typer.Option(False, "--open", help="Open the file at the item instead of printing it"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Pick a random to-do item across all documents."""
    _setup_logging(verbose)
    plugin = _build_plugin(vault, settings, open_file)
    if plugin.open_random_item() is None:
        console.print("[yellow]No to-do items found.[/yellow]")


@app.command("list")
def list_todos(
    vault: Path = typer.Option(None, "--vault", help="Vault directory (defaults to cwd)"),
    settings: Path = typer.Option(None, "--settings", help="Settings JSON path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List every to-do item in the vault."""
    _setup_logging(verbose)
    plugin = _build_plugin(vault, settings)
    collected = plugin.index.collect_todos()
    if not collected:
        console.print("[yellow]No to-do items found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Document")
    table.add_column("Line")
    table.add_column("Column")

    for document_id, positions in collected.items():
        for position in positions:
            table.add_row(document_id, str(position.line + 1), str(position.column + 1))

    console.print(table)
    total = sum(len(positions) for positions in collected.values())
    console.print(f"{total} to-do items in {len(collected)} documents")


@app.command()
def status(
    document: str = typer.Argument(..., help="Vault-relative document path"),
    vault: Path = typer.Option(None, "--vault", help="Vault directory (defaults to cwd)"),
    settings: Path = typer.Option(None, "--settings", help="Settings JSON path"),
) -> None:
    """Show the status-bar to-do count for one document."""
    plugin = _build_plugin(vault, settings)
    if not plugin.settings.show_status_bar:
        console.print("[yellow]Status bar count is disabled (see 'config --status-bar').[/yellow]")
        return
    text = plugin.on_document_opened(document)
    if text is None:
        console.print(f"[red]Cannot read {escape(document)}[/red]")
        raise typer.Exit(code=1)
    console.print(text or "No to-do items.")


@app.command()
def config(
    pattern: Optional[str] = typer.Option(None, "--pattern", help="Regular expression a to-do item should match"),
    status_bar: Optional[bool] = typer.Option(
        None, "--status-bar/--no-status-bar", help="Show/hide the to-do count in the status bar"
    ),
    vault: Path = typer.Option(None, "--vault", help="Vault directory (defaults to cwd)"),
    settings: Path = typer.Option(None, "--settings", help="Settings JSON path"),
) -> None:
    """Show or change the plugin settings."""
    plugin = _build_plugin(vault, settings)
    if pattern is not None or status_bar is not None:
        try:
            plugin.update_settings(todo_pattern=pattern, show_status_bar=status_bar)
        except InvalidPatternError as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")
            raise typer.Exit(code=1)
        console.print(f"Saved settings to [bold]{plugin.settings_path}[/bold]")

    console.print(f"To-do item pattern: {plugin.settings.todo_pattern}", markup=False)
    console.print(f"Status bar count: {'on' if plugin.settings.show_status_bar else 'off'}")


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the web interface."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    console.print(f"Starting web interface on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":  # pragma: no cover
    app()
