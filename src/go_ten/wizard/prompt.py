"""Prompt-based wizard driver built on questionary.

Each questionary answer is translated into the same input events the TUI
produces, so validation, derivation and generation all go through
``WizardMachine`` and behave identically in both modes.
"""

from __future__ import annotations

from typing import Any, cast

import questionary
from questionary import ValidationError, Validator
from rich.console import Console

from go_ten.generator.errors import ProjectNameError
from go_ten.wizard.base import BaseWizard
from go_ten.wizard.machine import WizardMachine, validate_project_name
from go_ten.wizard.state import NameInput, PackageSelect, TypeSelect, WizardState
from go_ten.wizard.types import (
    BACKSPACE,
    CANCEL,
    CONFIRM,
    DOWN,
    RIGHT,
    UP,
    InputEvent,
    Option,
    SessionOutcome,
    Stage,
    WizardMode,
)

console = Console()


class ProjectNameValidator(Validator):
    """Validator for project names.

    Applies the same allow-list as the state machine so invalid names are
    rejected while the user is still typing.
    """

    def validate(self, document: Any) -> None:
        """Validate project name.

        Args:
            document: Prompt document with user input (from questionary).

        Raises:
            ValidationError: If the name is invalid.
        """
        try:
            validate_project_name(document.text)
        except ProjectNameError as e:
            raise ValidationError(
                message=str(e).capitalize(),
                cursor_position=len(document.text),
            ) from e


class PromptWizard(BaseWizard):
    """Sequential prompt wizard.

    Stages map to prompts:
    - NameInput: ``questionary.text`` with ``ProjectNameValidator``
    - TypeSelect / PackageSelect: ``questionary.select``
    - Summary: ``questionary.confirm`` (declining cancels the session)
    - Success: the screen is printed and the session ends
    """

    def __init__(self, machine: WizardMachine, state: WizardState) -> None:
        super().__init__(machine, state, mode=WizardMode.PROMPT)

    def run(self) -> WizardState:
        console.print("\n[bold cyan]New Go Project Wizard[/bold cyan]")
        console.print("[dim]Press Ctrl-C to cancel at any time[/dim]\n")

        try:
            while not self.state.terminated:
                self._step()
        except KeyboardInterrupt:
            self.send(CANCEL)

        if self.state.outcome is SessionOutcome.CANCELLED:
            console.print()
            console.print(self.get_summary())

        return self.state

    def _step(self) -> None:
        stage = self.state.stage
        if stage is Stage.NAME_INPUT:
            self._prompt_name()
        elif stage is Stage.TYPE_SELECT:
            self._prompt_choice("Application type:", self.state.type_options)
        elif stage is Stage.PACKAGE_SELECT:
            self._prompt_choice("Package:", self.state.package_options)
        elif stage is Stage.SUMMARY:
            self._prompt_summary()
        else:
            console.print(self.view())
            self.send(CONFIRM)

    def _prompt_name(self) -> None:
        """Prompt for the project name and submit it."""
        result = questionary.text(
            "Project name (or '.' for current directory):",
            validate=ProjectNameValidator(),
        ).ask()

        if result is None:
            self.send(CANCEL)
            return

        self._clear_name_buffer()
        self.send(InputEvent.char(cast(str, result)))
        text = self.send(CONFIRM)
        if self.state.stage is Stage.NAME_INPUT:
            console.print(text)

    def _clear_name_buffer(self) -> None:
        """Empty the name buffer left over from a rejected submission."""
        step = self.state.step
        if not isinstance(step, NameInput):
            return
        for _ in range(len(step.buffer) - step.cursor):
            self.send(RIGHT)
        for _ in range(len(step.buffer)):
            self.send(BACKSPACE)

    def _prompt_choice(self, message: str, options: tuple[Option, ...]) -> None:
        """Prompt for one option and move the stage cursor onto it."""
        step = self.state.step
        if not isinstance(step, (TypeSelect, PackageSelect)):
            return

        result = questionary.select(
            message,
            choices=[questionary.Choice(title=o.label, value=i) for i, o in enumerate(options)],
        ).ask()

        if result is None:
            self.send(CANCEL)
            return

        target = cast(int, result)
        move = DOWN if target > step.cursor else UP
        for _ in range(abs(target - step.cursor)):
            self.send(move)
        self.send(CONFIRM)

    def _prompt_summary(self) -> None:
        """Show the summary and ask for confirmation."""
        retry = self.state.last_failure is not None
        if not retry:
            console.print()
            console.print(self.view())

        confirmed = questionary.confirm(
            "Retry generation?" if retry else "Generate project?",
            default=True,
        ).ask()

        if not confirmed:
            self.send(CANCEL)
            return

        text = self.send(CONFIRM)
        if self.state.stage is Stage.SUMMARY:
            console.print(text)
