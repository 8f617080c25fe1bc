"""Rich formatting utilities for CLI output.

This module provides reusable Rich components for consistent visual
formatting across CLI commands: panels for errors, warnings and success
messages, a table of template sets, and a file tree for
generated projects.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

console = Console()


def create_example_panel(
    title: str,
    examples: Sequence[tuple[str, str]],
    width: int = 78,
) -> Panel:
    """Create panel with command examples.

    Args:
        title: Panel title
        examples: Sequence of (description, command) tuples
        width: Panel width in characters

    Returns:
        Panel containing formatted examples
    """
    content_lines: list[str] = []

    for i, (description, command) in enumerate(examples):
        content_lines.append(f"[bold cyan]{escape(description)}:[/bold cyan]")
        content_lines.append(f"  [green]$ {escape(command)}[/green]")

        if i < len(examples) - 1:
            content_lines.append("")

    return Panel(
        "\n".join(content_lines),
        title=title,
        border_style="blue",
        width=width,
        expand=False,
    )


def create_templates_table(sets: Sequence[tuple[str, int, bool]]) -> Table:
    """Create table listing template sets.

    Args:
        sets: Sequence of (set_id, file_count, selectable) tuples, where
            selectable means the configured wizard options can reach the set

    Returns:
        Table with one row per template set
    """
    table = Table(title="Template sets", border_style="blue", show_header=True)
    table.add_column("Template", style="cyan")
    table.add_column("Files", justify="right")
    table.add_column("In wizard")

    for set_id, file_count, selectable in sets:
        table.add_row(
            set_id,
            str(file_count),
            Text("yes", style="green") if selectable else Text("no", style="dim"),
        )

    return table


def build_file_tree(files: Sequence[Path], project_path: Path) -> Tree:
    """Build a Rich Tree from generated file paths.

    Args:
        files: File paths to display
        project_path: Base project path for relative path calculation

    Returns:
        Rich Tree object for display
    """
    root = project_path.resolve()
    tree = Tree(f"[bold]{escape(root.name)}/[/bold]")
    nodes: dict[str, Tree] = {}

    for f in sorted(files):
        try:
            rel = f.resolve().relative_to(root)
        except ValueError:
            continue

        parts = rel.parts
        parent = tree

        for i, part in enumerate(parts[:-1]):
            key = "/".join(parts[: i + 1])
            if key not in nodes:
                nodes[key] = parent.add(f"[blue]{escape(part)}/[/blue]")
            parent = nodes[key]

        fname = parts[-1]
        if fname.endswith(".go"):
            parent.add(f"[yellow]{escape(fname)}[/yellow]")
        else:
            parent.add(f"[green]{escape(fname)}[/green]")

    return tree


def format_error(message: str, context: str | None = None) -> Panel:
    """Create formatted error panel.

    Args:
        message: Error message
        context: Optional context hint for resolution

    Returns:
        Panel with error formatting
    """
    content = f"[bold red]{escape(message)}[/bold red]"
    if context:
        content += f"\n\n[dim]{escape(context)}[/dim]"

    return Panel(
        content,
        title="[bold red]Error[/bold red]",
        border_style="red",
        width=78,
        expand=False,
    )


def format_warning(message: str, context: str | None = None) -> Panel:
    """Create formatted warning panel.

    Args:
        message: Warning message
        context: Optional additional information

    Returns:
        Panel with warning formatting
    """
    content = f"[bold yellow]{escape(message)}[/bold yellow]"
    if context:
        content += f"\n\n[dim]{escape(context)}[/dim]"

    return Panel(
        content,
        title="[bold yellow]Warning[/bold yellow]",
        border_style="yellow",
        width=78,
        expand=False,
    )


def format_success(message: str, details: str | None = None) -> Panel:
    """Create formatted success panel.

    Args:
        message: Success message
        details: Optional details about the result

    Returns:
        Panel with success formatting
    """
    content = f"[bold green]✓ {escape(message)}[/bold green]"
    if details:
        content += f"\n\n[dim]{escape(details)}[/dim]"

    return Panel(
        content,
        title="[bold green]Success[/bold green]",
        border_style="green",
        width=78,
        expand=False,
    )
