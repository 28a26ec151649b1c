import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import load_config
from . import decorators
from .decorators import handle_repository_errors
from .manifest import load_manifest
from .repository.json_repository import OptimizedJsonRepository
from .resources import DirectoryResource, FileResource, ResourceCollection

# Initialize Rich Console
console = Console()

# Configure logging to use Rich's RichHandler
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger(__name__)

app = typer.Typer(help="Query and edit virtual resource repositories")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose mode"),
):
    """
    vres - uniform path-based access to indexed files and mounted repositories.
    """
    config = load_config()

    console.no_color = not config.cli.color
    decorators.console.no_color = not config.cli.color

    if verbose or config.cli.verbose:
        logging.getLogger("vresource").setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)


def _open_index(index: Optional[Path], base_directory: Optional[Path] = None) -> OptimizedJsonRepository:
    config = load_config()
    if index is None:
        index = Path(config.index.filename)
    if base_directory is None and config.index.base_directory:
        base_directory = Path(config.index.base_directory)

    return OptimizedJsonRepository(
        str(index),
        str(base_directory) if base_directory is not None else None,
    )


def _print_resources(resources: ResourceCollection, as_json: bool, title: str) -> None:
    if as_json:
        console.print_json(json.dumps(resources.to_list()))
        return

    if resources.is_empty():
        console.print("[dim]No resources[/dim]")
        return

    table = Table(title=title)
    table.add_column("Path", style="cyan")
    table.add_column("Type")
    table.add_column("Source", style="dim")

    for resource in resources:
        info = resource.get_info()
        source = info.get("filesystem_path") or info.get("target") or ""
        table.add_row(resource.path, info["type"], source)

    console.print(table)


@app.command()
@handle_repository_errors
def add(
    repository_path: str = typer.Argument(..., help="Path in the repository, e.g. /css"),
    disk_path: Path = typer.Argument(..., help="File or directory to register"),
    index: Optional[Path] = typer.Option(None, "--index", "-i", help="JSON index file"),
    base_directory: Optional[Path] = typer.Option(None, "--base-dir", help="Base directory for relative references"),
):
    """Register a file or a whole directory tree in an index."""
    repo = _open_index(index, base_directory)
    before = len(repo.index)

    if disk_path.is_dir():
        repo.add(repository_path, DirectoryResource(str(disk_path)))
    else:
        repo.add(repository_path, FileResource(str(disk_path)))

    console.print(f"[green]✓[/green] Added {len(repo.index) - before} entries to {repo.path}")


@app.command()
@handle_repository_errors
def rm(
    glob: str = typer.Argument(..., help="Path or glob to remove, including descendants"),
    index: Optional[Path] = typer.Option(None, "--index", "-i", help="JSON index file"),
):
    """Remove entries from an index."""
    repo = _open_index(index)
    removed = repo.remove(glob)
    console.print(f"[green]✓[/green] Removed {removed} entries")


@app.command()
@handle_repository_errors
def ls(
    path: str = typer.Argument("/", help="Directory to list"),
    index: Optional[Path] = typer.Option(None, "--index", "-i", help="JSON index file"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """List the children of a path."""
    repo = _open_index(index)
    _print_resources(repo.list_children(path), as_json, path)


@app.command()
@handle_repository_errors
def find(
    glob: str = typer.Argument(..., help="Glob, e.g. /css/**/*.css"),
    index: Optional[Path] = typer.Option(None, "--index", "-i", help="JSON index file"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """Find resources matching a glob."""
    repo = _open_index(index)
    _print_resources(repo.find(glob), as_json, glob)


@app.command()
@handle_repository_errors
def cat(
    path: str = typer.Argument(..., help="File to print"),
    index: Optional[Path] = typer.Option(None, "--index", "-i", help="JSON index file"),
):
    """Print the content of a file resource."""
    resource = _open_index(index).get(path)

    if not isinstance(resource, FileResource):
        console.print(f"[bold red]Error:[/bold red] {path}: Is not a file")
        raise typer.Exit(code=1)

    console.print(resource.read(), end="", markup=False, highlight=False)


@app.command()
@handle_repository_errors
def mounts(
    path: str = typer.Argument("/", help="Path to list"),
    manifest: Optional[Path] = typer.Option(None, "--manifest", "-m", help="YAML mount manifest"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """List a path of the composite repository described by a manifest."""
    if manifest is None:
        manifest = Path(load_config().manifest.filename)

    composite = load_manifest(manifest)
    _print_resources(composite.list_children(path), as_json, path)


if __name__ == "__main__":
    app()
