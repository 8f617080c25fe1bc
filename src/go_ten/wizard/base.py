"""Base wizard class shared by the prompt and TUI drivers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rich.markup import escape

from go_ten.wizard.machine import WizardMachine, acknowledge_error
from go_ten.wizard.render import render
from go_ten.wizard.state import WizardState
from go_ten.wizard.types import InputEvent, WizardMode


class BaseWizard(ABC):
    """Base class for all wizard drivers.

    A driver turns terminal input into ``InputEvent`` values and shows the
    rendered stage. ``send`` implements the display protocol: advance the
    state, render it, then acknowledge any error so it is shown only once.
    """

    def __init__(
        self,
        machine: WizardMachine,
        state: WizardState,
        mode: WizardMode = WizardMode.TUI,
    ) -> None:
        """Initialize the wizard.

        Args:
            machine: Transition function and its collaborators
            state: Initial session state
            mode: Wizard interaction mode (prompt or TUI)
        """
        self.machine = machine
        self.state = state
        self.mode = mode

    @abstractmethod
    def run(self) -> WizardState:
        """Drive the session until it terminates.

        Returns:
            The final state. Its ``outcome`` tells the caller whether a
            project was generated.
        """
        pass

    def send(self, event: InputEvent) -> str:
        """Apply ``event`` and return the text to display for the new state."""
        self.state = self.machine.advance(self.state, event)
        return self.view()

    def view(self) -> str:
        """Render the current state and acknowledge its error, if any."""
        text = render(self.state)
        self.state = acknowledge_error(self.state)
        return text

    def get_summary(self) -> str:
        """Get summary of the choices confirmed so far.

        Returns:
            Human-readable summary with Rich markup.
        """
        confirmed = [
            ("name", self.state.selected_name),
            ("type", self.state.selected_type.label if self.state.selected_type else None),
            (
                "package",
                self.state.selected_package.label if self.state.selected_package else None,
            ),
        ]
        lines = [f"  {key}: {escape(value)}" for key, value in confirmed if value is not None]
        if not lines:
            return "[dim]No configuration collected yet[/dim]"
        return "\n".join(["[bold]Wizard Configuration:[/bold]", *lines])
