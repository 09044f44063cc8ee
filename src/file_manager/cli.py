"""CLI for file-manager."""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import FileManagerConfig, load_config
from .constants import CONFIG_FILE
from .errors import FileManagerError
from .manager import FileManager
from .models import total_size
from .utils import humanize_size


app = typer.Typer(help="""\
Filtered copy of a file tree. Reads every non-ignored file under a source
directory and writes it to a destination directory, optionally cleaning
the destination first.""")

console = Console()


def _configure_logging(verbose: bool) -> None:
    """Route library logging through rich; DEBUG with --verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_base_config(config_path: Optional[Path]) -> FileManagerConfig:
    """Load --config, else ./file-manager.yaml if present, else defaults.

    Raises:
        typer.Exit: If the config file is missing or invalid
    """
    if config_path is None:
        default = Path.cwd() / CONFIG_FILE
        if not default.is_file():
            return FileManagerConfig()
        config_path = default

    try:
        return load_config(config_path)
    except FileManagerError as e:
        _fail(e)


def _build_manager(
    config: FileManagerConfig,
    source: Optional[Path],
    dest: Optional[Path] = None,
    clean: Optional[bool] = None,
    ignore: Optional[List[str]] = None,
    max_concurrency: Optional[int] = None,
) -> FileManager:
    """Apply command-line overrides on top of a loaded config."""
    manager = FileManager(config)
    if source is not None:
        manager.set_source_dir(source)
    if dest is not None:
        manager.set_dest_dir(dest)
    if clean is not None:
        manager.set_should_clean(clean)
    if ignore:
        manager.set_ignore_patterns(config.user_patterns + list(ignore))
    if max_concurrency is not None:
        manager.set_max_concurrency(max_concurrency)
    return manager


def _fail(error: FileManagerError) -> None:
    """Print a file-manager error and exit with status 1."""
    console.print(f"[red]✗[/red] {error.kind.value}: {escape(str(error))}")
    raise typer.Exit(1)


@app.command()
def copy(
    source: Optional[Path] = typer.Argument(None, help="Source directory (or source_dir in config)"),
    dest: Optional[Path] = typer.Argument(None, help="Destination directory (or dest_dir in config)"),
    clean: Optional[bool] = typer.Option(None, "--clean/--no-clean", help="Empty the destination before writing"),
    ignore: Optional[List[str]] = typer.Option(None, "--ignore", "-i", help="Glob pattern to exclude (repeatable)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=f"YAML config file (default: ./{CONFIG_FILE})"),
    max_concurrency: Optional[int] = typer.Option(None, "--max-concurrency", min=1, help="Limit concurrent file operations"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Copy a directory tree, skipping ignored files.

    Examples:
        file-manager copy content/ dist/                 # Mirror content/ into dist/
        file-manager copy content/ dist/ --clean         # Empty dist/ first
        file-manager copy content/ dist/ -i '*.tmp'      # Skip temp files
        file-manager copy -c build.yaml                  # Directories from config
    """
    _configure_logging(verbose)
    manager = _build_manager(_load_base_config(config), source, dest, clean, ignore, max_concurrency)

    try:
        files = asyncio.run(manager.copy())
    except FileManagerError as e:
        _fail(e)

    console.print(
        f"[green]✓[/green] Copied {len(files)} files ({humanize_size(total_size(files))}) "
        f"to {manager.get_dest_dir()}"
    )


@app.command()
def ls(
    source: Optional[Path] = typer.Argument(None, help="Source directory (or source_dir in config)"),
    ignore: Optional[List[str]] = typer.Option(None, "--ignore", "-i", help="Glob pattern to exclude (repeatable)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=f"YAML config file (default: ./{CONFIG_FILE})"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """List the files a copy would include.

    Examples:
        file-manager ls content/                  # Everything not ignored
        file-manager ls content/ -i '*.md'        # Also skip markdown
    """
    _configure_logging(verbose)
    manager = _build_manager(_load_base_config(config), source, ignore=ignore)

    try:
        entries = asyncio.run(manager.list_files())
    except FileManagerError as e:
        _fail(e)

    if not entries:
        console.print("[yellow]No files found[/yellow]")
        return

    table = Table(title=f"Files in {manager.get_source_dir()}")
    table.add_column("Path", style="cyan", overflow="fold")
    table.add_column("Size", justify="right")
    for entry in entries:
        table.add_row(escape(entry.relative_path), humanize_size(entry.size))
    console.print(table)
    console.print(f"[dim]{len(entries)} files, {humanize_size(sum(e.size for e in entries))}[/dim]")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
