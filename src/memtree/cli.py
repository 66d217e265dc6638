"""Command-line interface for memtree."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from memtree import __version__
from memtree.config import Settings, get_settings
from memtree.store import TreeStore, TreeStoreError, load_seed

app = typer.Typer(
    name="memtree",
    help="In-memory hierarchical file store",
    no_args_is_help=True,
)

console = Console()

SeedArgument = Annotated[
    Path,
    typer.Argument(help="YAML seed document to load into a fresh store"),
]
ConfigOption = Annotated[
    str | None,
    typer.Option(
        "--config",
        "-f",
        help="Path to a YAML config file (overrides default config locations).",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"memtree version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """memtree - in-memory hierarchical file store."""
    pass


def _load_settings(config_file: str | None) -> Settings:
    try:
        settings = get_settings(config_file=config_file)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
    )
    return settings


def _open_store(seed: Path, settings: Settings) -> TreeStore:
    """Create a store and populate it from a seed document."""
    store = TreeStore(thread_safe=settings.thread_safe)
    try:
        load_seed(store, seed)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except (TreeStoreError, ValueError) as e:
        console.print(f"[red]Invalid seed:[/red] {e}")
        raise typer.Exit(1)
    return store


@app.command()
def serve(
    config_file: ConfigOption = None,
    seed: Annotated[
        Path | None,
        typer.Option(
            "--seed",
            "-s",
            help="YAML seed document loaded into the store at startup (overrides config).",
        ),
    ] = None,
) -> None:
    """Start the memtree MCP server over stdin/stdout.

    Exposes the store operations (create_file, read_file, list_directory,
    search_file, move_file, ...) as MCP tools so an agent can work in a
    scratch filesystem that never touches disk.

    Examples:
        memtree serve
        memtree serve --seed fixtures/project.yaml
    """
    try:
        settings = get_settings(config_file=config_file)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    seed = seed or settings.seed_file
    store = _open_store(seed, settings) if seed is not None else None

    from memtree.store.server import run_server

    run_server(settings=settings, store=store)


@app.command()
def config(config_file: ConfigOption = None) -> None:
    """Show current configuration."""
    settings = _load_settings(config_file)

    console.print(Panel("[bold]Current Configuration[/bold]", title="memtree"))
    console.print(f"[bold]Log Level:[/bold] {settings.log_level}")
    console.print(f"[bold]Thread Safe:[/bold] {settings.thread_safe}")
    console.print(f"[bold]Seed File:[/bold] {settings.seed_file or '[dim]not set[/dim]'}")
    console.print(f"[bold]Tree Max Depth:[/bold] {settings.tree_max_depth}")
    console.print(f"[bold]Output Format:[/bold] {settings.output_format}")


@app.command()
def tree(
    seed: SeedArgument,
    path: Annotated[str, typer.Argument(help="Directory to render")] = "/",
    depth: Annotated[
        int | None,
        typer.Option("--depth", "-d", help="Maximum depth (overrides config)"),
    ] = None,
    config_file: ConfigOption = None,
) -> None:
    """Render the directory tree of a seeded store.

    Examples:
        memtree tree project.yaml
        memtree tree project.yaml src --depth 1
    """
    settings = _load_settings(config_file)
    store = _open_store(seed, settings)
    max_depth = depth if depth is not None else settings.tree_max_depth

    try:
        if settings.output_format == "json":
            console.print_json(store.get_tree(path, max_depth).model_dump_json())
        else:
            console.print(store.get_tree_string(path, max_depth), end="", markup=False, highlight=False)
    except TreeStoreError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def search(
    seed: SeedArgument,
    name: Annotated[str, typer.Argument(help="Exact file name to find")],
    config_file: ConfigOption = None,
) -> None:
    """Find every file with the given name in a seeded store."""
    settings = _load_settings(config_file)
    store = _open_store(seed, settings)

    try:
        matches = store.search_file(name)
    except TreeStoreError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if settings.output_format == "json":
        console.print_json(json.dumps(matches))
        return
    if not matches:
        console.print(f"[dim]No files named {name}[/dim]")
        raise typer.Exit(1)
    for match in matches:
        console.print(match, markup=False, highlight=False)


@app.command()
def cat(
    seed: SeedArgument,
    path: Annotated[str, typer.Argument(help="File to print")],
    config_file: ConfigOption = None,
) -> None:
    """Print a file from a seeded store."""
    settings = _load_settings(config_file)
    store = _open_store(seed, settings)

    try:
        content = store.read_file(path)
    except TreeStoreError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if content is None:
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)
    console.print(content, markup=False, highlight=False, end="")


if __name__ == "__main__":
    app()
