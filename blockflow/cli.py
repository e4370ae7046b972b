"""CLI entry point: `blockflow new`, `blockflow run`, and friends."""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console
from rich.table import Table

from blockflow.config import ensure_dirs, load_config, notebooks_dir
from blockflow.core import BlockflowError, Severity
from blockflow.flow import DirtyNotifier
from blockflow.functions import register_builtins
from blockflow.notebook.meta import BlockType
from blockflow.notebook.notebook import Notebook
from blockflow.notebook.registry import FunctionRegistry, get_registry
from blockflow.notebook.store import NotebookStore, get_store

app = typer.Typer(name="blockflow", help="Persisted block pipelines.")
console = Console()


@app.callback()
def _setup() -> None:
    config = load_config()
    logging.basicConfig(level=config.settings.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")


def _registry() -> FunctionRegistry:
    return register_builtins(get_registry())


def _store() -> NotebookStore:
    config = load_config()
    ensure_dirs(config)
    return get_store(notebooks_dir(config))


def _open(notebook_id: str) -> Notebook:
    store = _store()
    result = store.load(notebook_id)
    for d in result.diagnostics:
        label = "[red]Error:[/red]" if d.severity == Severity.ERROR else "[yellow]Warning:[/yellow]"
        console.print(f"{label} {d.message}")
        if d.hint:
            console.print(f"  Hint: {d.hint}")
    if not result.ok or result.data is None:
        raise typer.Exit(1)
    try:
        return Notebook(result.data, registry=_registry(), notifier=DirtyNotifier(), store=store)
    except BlockflowError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


@app.command()
def new(name: str = typer.Argument(help="Notebook name")) -> None:
    """Create a named notebook and save it."""
    if not name:
        console.print("[red]Error:[/red] unnamed notebooks are never saved")
        raise typer.Exit(1)
    notebook = Notebook.create(name, registry=_registry(), notifier=DirtyNotifier(), store=_store())
    notebook.flag_dirty()
    console.print(f"[green]Created notebook [bold]{notebook.name}[/bold][/green] ({notebook.id})")


@app.command("list")
def list_notebooks(
    all_: bool = typer.Option(False, "--all", "-a", help="Include soft-deleted notebooks"),
) -> None:
    """List saved notebooks."""
    t = Table(show_lines=False)
    t.add_column("ID", style="cyan")
    t.add_column("Name")
    t.add_column("Blocks", justify="right")
    for meta in _store().list_notebooks(include_deleted=all_):
        name = meta.name or "[dim]<unnamed>[/dim]"
        if meta.is_deleted:
            name += " [red](deleted)[/red]"
        t.add_row(meta.id, name, str(len(meta.blocks)))
    console.print(t)


@app.command()
def show(notebook_id: str = typer.Argument(help="Notebook ID")) -> None:
    """Show a notebook's blocks in pipeline order."""
    notebook = _open(notebook_id)
    t = Table(title=f"{notebook.name} ({notebook.id})", show_lines=False)
    t.add_column("#", justify="right")
    t.add_column("Block", style="cyan")
    t.add_column("Type")
    t.add_column("Function", style="green")
    for i, block in enumerate(notebook.blocks):
        t.add_row(str(i), block.id, block.type.label, block.function_key or "")
    console.print(t)


@app.command()
def rename(
    notebook_id: str = typer.Argument(help="Notebook ID"),
    name: str = typer.Argument(help="New name; empty makes the notebook transient"),
) -> None:
    """Rename a notebook."""
    notebook = _open(notebook_id)
    notebook.name = name
    if notebook.permanent:
        console.print(f"[green]Renamed to [bold]{notebook.name}[/bold][/green]")
    else:
        console.print("[yellow]Name cleared; further changes will not be saved[/yellow]")


@app.command()
def delete(notebook_id: str = typer.Argument(help="Notebook ID")) -> None:
    """Soft-delete a notebook."""
    notebook = _open(notebook_id)
    notebook.is_deleted = True
    console.print(f"[green]Deleted {notebook.id}[/green]")


@app.command("add-block")
def add_block(
    notebook_id: str = typer.Argument(help="Notebook ID"),
    function: str | None = typer.Option(None, "--function", "-f", help="Make a Function block with this key"),
    index: int | None = typer.Option(None, "--index", "-i", help="Insert position; out of range appends"),
) -> None:
    """Add a block to a notebook."""
    notebook = _open(notebook_id)
    block = notebook.create_block(index)
    if function:
        block.type = BlockType.FUNCTION
        block.function_key = function
    console.print(f"[green]Added {block.type.label} block {block.id} at {notebook.index_of(block)}[/green]")


@app.command("delete-block")
def delete_block(
    notebook_id: str = typer.Argument(help="Notebook ID"),
    block_id: str = typer.Argument(help="Block ID"),
) -> None:
    """Remove a block from a notebook."""
    notebook = _open(notebook_id)
    try:
        notebook.delete_block(notebook.get_block(block_id))
    except BlockflowError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    console.print(f"[green]Deleted block {block_id}[/green]")


@app.command()
def run(
    notebook_id: str = typer.Argument(help="Notebook ID"),
    block_id: str = typer.Argument(help="Block ID"),
) -> None:
    """Run a single block and print its output."""
    notebook = _open(notebook_id)
    try:
        block = notebook.get_block(block_id)
        output = asyncio.run(notebook.run_block(block))
    except BlockflowError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    console.print(f"[bold]{block.id}[/bold] -> {output!r}")


@app.command()
def functions() -> None:
    """List registered functions."""
    t = Table(show_lines=False)
    t.add_column("Key", style="cyan")
    t.add_column("Inputs")
    for key in _registry().keys():
        spec = _registry().lookup(key)
        inputs = ", ".join(f"{k}: {v}" for k, v in spec.inputs.items()) if spec else ""
        t.add_row(key, inputs)
    console.print(t)


def main() -> None:
    app()
