"""Pure renderers for wizard stages.

``render`` turns a ``WizardState`` into Rich markup. It never changes the
state: showing ``last_error`` once is the driver's job, via
``acknowledge_error`` after the text has been displayed.
"""

from __future__ import annotations

from rich.markup import escape

from go_ten.wizard.machine import target_directory_for
from go_ten.wizard.state import (
    NameInput,
    PackageSelect,
    Success,
    TypeSelect,
    WizardState,
)
from go_ten.wizard.types import Option

CURSOR = "|"


def render(state: WizardState) -> str:
    """Render the current stage. Terminated sessions render as empty text."""
    if state.terminated:
        return ""

    step = state.step
    if isinstance(step, NameInput):
        return render_name_input(state, step)
    if isinstance(step, TypeSelect):
        return render_options(
            "Select application type:", state.type_options, step.cursor, state.last_error
        )
    if isinstance(step, PackageSelect):
        return render_options(
            "Select package:", state.package_options, step.cursor, state.last_error
        )
    if isinstance(step, Success):
        return render_success(step)
    return render_summary(state)


def _error_line(error: str | None) -> str:
    if not error:
        return ""
    return f"\n\n[bold red]Error:[/bold red] {escape(error)}"


def render_name_input(state: WizardState, step: NameInput) -> str:
    """Render the name prompt with a ``|`` cursor inside the buffer."""
    before, after = step.buffer[: step.cursor], step.buffer[step.cursor :]
    text = escape(before) + CURSOR + escape(after)
    return (
        "[bold cyan]Enter your project name "
        "(or '.' for current directory):[/bold cyan]\n\n"
        f"> {text}"
        f"{_error_line(state.last_error)}"
        "\n\n[dim](Enter to submit, Esc to quit)[/dim]"
    )


def render_options(
    title: str,
    options: tuple[Option, ...],
    cursor: int,
    error: str | None = None,
) -> str:
    """Render a single-choice list with a ``>`` marker on the cursor row."""
    lines = [f"[bold cyan]{escape(title)}[/bold cyan]", ""]
    for i, option in enumerate(options):
        if i == cursor:
            lines.append(f"> [bold]{escape(option.label)}[/bold]")
        else:
            lines.append(f"  {escape(option.label)}")

    return (
        "\n".join(lines)
        + _error_line(error)
        + "\n\n[dim](Use arrow keys to navigate, Enter to continue, q to quit)[/dim]"
    )


def render_summary(state: WizardState) -> str:
    """Render the collected choices and the confirmation hint."""
    name = state.selected_name or ""
    app_type = state.selected_type.label if state.selected_type else ""
    package = state.selected_package.label if state.selected_package else ""
    lines = [
        "[bold cyan]Project Configuration Summary[/bold cyan]",
        "",
        f"Name: [bold]{escape(name)}[/bold]",
        f"Type: [bold]{escape(app_type)}[/bold]",
        f"Package: [bold]{escape(package)}[/bold]",
        f"Location: [bold]{escape(target_directory_for(name))}[/bold]",
    ]

    if state.last_error:
        lines.append("")
        lines.append(f"[bold red]Error:[/bold red] {escape(state.last_error)}")
        lines.append("")
        lines.append("[dim]Press Enter to retry or 'q' to quit[/dim]")
    else:
        lines.append("")
        lines.append("[dim]Press Enter to generate or 'q' to quit[/dim]")

    return "\n".join(lines)


def render_success(step: Success) -> str:
    """Render the completion screen with next steps."""
    config = step.config
    location = "./" if config.use_current_directory else config.target_directory
    lines = ["[bold green]✓ Project created successfully![/bold green]", "", "Next steps:"]

    if not config.use_current_directory:
        lines.append(f"  cd {escape(config.target_directory)}")
    lines.append("  go mod tidy")
    lines.append("  go run ./cmd/api")
    lines.append("")
    name = escape(config.project_name)
    lines.append(f"Your project [bold]{name}[/bold] is ready at: {escape(location)}")
    lines.append(f"[dim]{len(step.result.written)} file(s) written")
    if step.result.skipped:
        lines[-1] += f", {len(step.result.skipped)} existing file(s) kept"
    lines[-1] += "[/dim]"
    lines.append("")
    lines.append("[dim]Press any key to exit[/dim]")
    return "\n".join(lines)
