"""Interactive wizard system for go-ten.

This module provides the stage state machine plus prompt-based and TUI-based
drivers that collect a project name, application type and package variant
before generating the project.
"""

from __future__ import annotations

from go_ten.config import GoTenConfig
from go_ten.generator.materializer import Materializer
from go_ten.wizard.base import BaseWizard
from go_ten.wizard.machine import (
    WizardMachine,
    acknowledge_error,
    derive_project_config,
    options_from_config,
    validate_project_name,
)
from go_ten.wizard.render import render
from go_ten.wizard.state import WizardState
from go_ten.wizard.types import InputEvent, Key, SessionOutcome, Stage, WizardMode

__all__ = [
    "BaseWizard",
    "InputEvent",
    "Key",
    "SessionOutcome",
    "Stage",
    "WizardMachine",
    "WizardMode",
    "WizardState",
    "acknowledge_error",
    "derive_project_config",
    "render",
    "run_wizard",
    "validate_project_name",
]


def run_wizard(
    config: GoTenConfig,
    materializer: Materializer,
    mode: WizardMode = WizardMode.TUI,
) -> WizardState:
    """Run a wizard session with options from ``config``.

    Args:
        config: Option lists for the selection stages
        materializer: Generates the project at the summary stage
        mode: TUI (key by key) or PROMPT (questionary prompts)

    Returns:
        The final session state.
    """
    machine = WizardMachine(materializer=materializer)
    type_options, package_options = options_from_config(config)
    state = machine.initial_state(type_options, package_options)

    if mode is WizardMode.PROMPT:
        from go_ten.wizard.prompt import PromptWizard

        return PromptWizard(machine, state).run()

    from go_ten.wizard.tui import launch_tui_wizard

    return launch_tui_wizard(machine, state)
