"""Command-line interface for go-ten."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from go_ten.cli.formatting import (
    build_file_tree,
    create_templates_table,
    format_error,
    format_success,
    format_warning,
)
from go_ten.cli.help_formatter import RichCommand
from go_ten.config import GoTenConfig, load_config
from go_ten.generator.errors import ConfigError, GoTenError, TargetExistsError
from go_ten.generator.materializer import (
    MaterializationResult,
    Materializer,
    OverwritePolicy,
)
from go_ten.generator.project import TEMPLATE_ID_SEPARATOR, ProjectConfig
from go_ten.generator.sources import PackageTemplateSource

console = Console()


def _load_settings(config_path: Path | None) -> GoTenConfig:
    """Load go-ten.yml, turning errors into a CLI failure."""
    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print(format_error(str(e)))
        raise click.ClickException("Invalid configuration") from e


def _overwrite_policy(
    force: bool, skip_existing: bool, default: OverwritePolicy
) -> OverwritePolicy:
    """Resolve the overwrite policy from flags, falling back to the config."""
    if force and skip_existing:
        raise click.UsageError("--force and --skip-existing are mutually exclusive")
    if force:
        return OverwritePolicy.OVERWRITE
    if skip_existing:
        return OverwritePolicy.SKIP
    return default


def _report_success(config: ProjectConfig, result: MaterializationResult) -> None:
    """Print the success panel, the generated file tree and next steps."""
    details = f"{len(result.written)} file(s) written to {result.target}"
    if result.skipped:
        details += f", {len(result.skipped)} existing file(s) kept"
    console.print(format_success(f"Project {config.project_name} created", details))
    console.print(build_file_tree(result.written + result.skipped, result.target))

    console.print("\n[bold]Next steps:[/bold]")
    if not config.use_current_directory:
        console.print(f"  cd {config.target_directory}", markup=False)
    console.print("  go mod tidy")
    console.print("  go run ./cmd/api")


@click.group()
@click.version_option(package_name="go-ten")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool) -> None:
    """Create new Go projects from bundled templates.

    Quick Start:

      1. Run the interactive wizard:
         $ go-ten new

      2. Or generate directly:
         $ go-ten generate my-api

      3. List available templates:
         $ go-ten templates

    For more information on a specific command:
      $ go-ten COMMAND --help
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )


@cli.command(
    cls=RichCommand,
    examples=[
        ("Full-screen wizard", "go-ten new"),
        ("Sequential prompts", "go-ten new --prompt"),
        ("Regenerate into an existing directory", "go-ten new --force"),
    ],
)
@click.option(
    "--prompt",
    "use_prompt",
    is_flag=True,
    help="Use sequential prompts instead of the full-screen TUI",
)
@click.option("--force", is_flag=True, help="Overwrite files that already exist")
@click.option("--skip-existing", is_flag=True, help="Keep files that already exist")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to go-ten.yml (default: search current and parent directories)",
)
def new(
    use_prompt: bool,
    force: bool,
    skip_existing: bool,
    config_path: Path | None,
) -> None:
    """Interactive wizard for creating a new project.

    The wizard guides you through:
    - Project name ('.' generates into the current directory)
    - Application type
    - Package variant
    - Summary and confirmation

    Press Esc (or q on selection screens) to quit at any time.
    """
    from go_ten.wizard import run_wizard
    from go_ten.wizard.state import Success
    from go_ten.wizard.types import SessionOutcome, WizardMode

    settings = _load_settings(config_path)
    policy = _overwrite_policy(force, skip_existing, settings.overwrite)
    mode = WizardMode.PROMPT if use_prompt else WizardMode.TUI

    state = run_wizard(settings, Materializer(overwrite=policy), mode=mode)

    if isinstance(state.step, Success):
        _report_success(state.step.config, state.step.result)
    elif state.outcome is SessionOutcome.FAILED:
        console.print(format_error(state.last_failure or "Project generation failed"))
        raise click.ClickException("Project was not generated")
    else:
        console.print("[yellow]Wizard cancelled, no project generated[/yellow]")


@cli.command(
    cls=RichCommand,
    examples=[
        ("Web API with the standard library", "go-ten generate my-api"),
        ("Into the current directory", "go-ten generate ."),
        ("Explicit template", "go-ten generate my-api -t web-api -p stdlib"),
    ],
)
@click.argument("name")
@click.option(
    "--app-type", "-t", default=None, help="Application type (default: first configured)"
)
@click.option(
    "--package", "-p", default=None, help="Package variant (default: first configured)"
)
@click.option("--force", is_flag=True, help="Overwrite files that already exist")
@click.option("--skip-existing", is_flag=True, help="Keep files that already exist")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to go-ten.yml (default: search current and parent directories)",
)
def generate(
    name: str,
    app_type: str | None,
    package: str | None,
    force: bool,
    skip_existing: bool,
    config_path: Path | None,
) -> None:
    """Generate a project without the interactive wizard.

    NAME follows the wizard rules: letters, numbers, hyphens and
    underscores, or '.' for the current directory.
    """
    from go_ten.wizard.machine import build_project_config

    settings = _load_settings(config_path)
    policy = _overwrite_policy(force, skip_existing, settings.overwrite)

    try:
        config = build_project_config(
            name,
            app_type or settings.app_types[0].value,
            package or settings.packages[0].value,
        )
        result = Materializer(overwrite=policy, verbose=True).materialize(config)
    except TargetExistsError as e:
        console.print(format_warning(str(e)))
        raise click.ClickException("Project was not generated") from e
    except GoTenError as e:
        console.print(format_error(str(e)))
        raise click.ClickException("Project was not generated") from e

    _report_success(config, result)


@cli.command(cls=RichCommand)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to go-ten.yml (default: search current and parent directories)",
)
def templates(config_path: Path | None) -> None:
    """List the bundled template sets."""
    settings = _load_settings(config_path)
    selectable = {
        f"{t.value}{TEMPLATE_ID_SEPARATOR}{p.value}"
        for t in settings.app_types
        for p in settings.packages
    }

    source = PackageTemplateSource()
    rows = []
    for set_id in source.available_sets():
        count = sum(1 for entry in source.list_files(set_id) if not entry.is_dir)
        rows.append((set_id, count, set_id in selectable))

    if not rows:
        console.print("[yellow]No template sets found[/yellow]")
        return

    console.print(create_templates_table(rows))


def main() -> None:
    """Entry point for the go-ten console script."""
    cli()


if __name__ == "__main__":
    main()
