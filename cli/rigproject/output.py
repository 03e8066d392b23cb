"""Rich console output utilities for the rig project CLI."""

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from schemas.project import Example
from schemas.workflow_state import WorkflowState


console = Console()
error_console = Console(stderr=True)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]→[/blue] {message}")


def print_json(data: Any) -> None:
    """Print formatted JSON."""
    console.print_json(json.dumps(data, indent=2, default=str))


def print_examples(examples: list[Example], selected: int | float | None = None) -> None:
    """Print the example catalog as a table."""
    if not examples:
        print_info("No examples available.")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Description")
    table.add_column("Frontend", style="dim")

    for index, example in enumerate(examples):
        marker = "[green]*[/green] " if index == selected else ""
        table.add_row(
            f"{marker}{index}",
            example.title,
            example.description,
            example.frontend_folder_name or "-",
        )

    console.print(table)


def print_manifest(state: WorkflowState) -> None:
    """Print the loaded manifest or the reason it is missing."""
    if state.manifest_error:
        print_error(f"Manifest: {state.manifest_error.message}")
        return
    manifest = state.project.manifest
    if not manifest.is_loaded:
        print_warning("No extension manifest loaded")
        return
    print_success(f"Extension [bold]{manifest.name or manifest.id}[/bold] ({manifest.id})")
