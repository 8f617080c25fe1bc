"""TUI wizard driver built on Textual.

Every key press is mapped to an ``InputEvent`` by ``key_to_event`` and fed
to the state machine; the stage view is re-rendered after each event.
"""

from __future__ import annotations

from typing import Any

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Footer, Header, Static

from go_ten.wizard.base import BaseWizard
from go_ten.wizard.machine import WizardMachine
from go_ten.wizard.state import WizardState
from go_ten.wizard.types import (
    BACKSPACE,
    CANCEL,
    CONFIRM,
    DOWN,
    LEFT,
    RIGHT,
    SPACE,
    UP,
    InputEvent,
    Stage,
    WizardMode,
)

CANCEL_KEYS = frozenset({"escape", "ctrl+c"})


def key_to_event(key: str, character: str | None, stage: Stage) -> InputEvent | None:
    """Map a Textual key to a wizard input event.

    Args:
        key: Textual key name, e.g. "enter", "left", "a"
        character: Printable character for the key, if any
        stage: Current stage; "q", "j" and "k" are text in the name stage

    Returns:
        The input event, or None if the key means nothing in this stage.
    """
    if key in CANCEL_KEYS:
        return CANCEL
    if stage is Stage.SUCCESS:
        return CONFIRM
    if key == "enter":
        return CONFIRM

    if stage is Stage.NAME_INPUT:
        if key == "backspace":
            return BACKSPACE
        if key == "left":
            return LEFT
        if key == "right":
            return RIGHT
        if character is not None and character.isprintable():
            return InputEvent.char(character)
        return None

    if key == "q":
        return CANCEL
    if stage in (Stage.TYPE_SELECT, Stage.PACKAGE_SELECT):
        if key in ("up", "k"):
            return UP
        if key in ("down", "j"):
            return DOWN
        if key == "space":
            return SPACE
    return None


class WizardApp(App[WizardState]):
    """Textual app for the new-project wizard.

    The app exits with the final ``WizardState`` once the session terminates.
    """

    TITLE = "go-ten"
    SUB_TITLE = "New Go project"

    CSS = """
    Screen {
        background: $surface;
    }

    Header {
        background: $primary;
        color: $text;
        text-style: bold;
    }

    #stage-container {
        padding: 1 2;
        height: 100%;
    }

    #stage-view {
        width: 100%;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "cancel", "Quit", priority=True),
    ]

    def __init__(self, machine: WizardMachine, state: WizardState, **kwargs: Any) -> None:
        """Initialize TUI wizard.

        Args:
            machine: Transition function and its collaborators
            state: Initial session state
            **kwargs: Additional App arguments
        """
        super().__init__(**kwargs)
        self.wizard = TuiWizard(machine, state)

    @property
    def wizard_state(self) -> WizardState:
        return self.wizard.state

    def compose(self) -> ComposeResult:
        """Compose TUI layout."""
        yield Header(show_clock=False)
        with Container(id="stage-container"):
            yield Static(id="stage-view")
        yield Footer()

    def on_mount(self) -> None:
        """Show the first stage."""
        self._show(self.wizard.view())

    def on_key(self, event: events.Key) -> None:
        """Translate a key press into a state transition."""
        input_event = key_to_event(event.key, event.character, self.wizard_state.stage)
        if input_event is None:
            return
        event.stop()
        self._dispatch(input_event)

    def action_cancel(self) -> None:
        """Cancel the session from the priority binding."""
        self._dispatch(CANCEL)

    def _dispatch(self, event: InputEvent) -> None:
        text = self.wizard.send(event)
        if self.wizard_state.terminated:
            self.exit(self.wizard_state)
            return
        self._show(text)

    def _show(self, text: str) -> None:
        self.query_one("#stage-view", expect_type=Static).update(text)


class TuiWizard(BaseWizard):
    """Wizard driver whose input loop is a Textual app."""

    def __init__(self, machine: WizardMachine, state: WizardState) -> None:
        super().__init__(machine, state, mode=WizardMode.TUI)

    def run(self) -> WizardState:
        app = WizardApp(self.machine, self.state)
        result = app.run()
        self.state = result if result is not None else app.wizard_state
        return self.state


def launch_tui_wizard(machine: WizardMachine, state: WizardState) -> WizardState:
    """Launch the TUI wizard and return the final state.

    A session closed without a terminal event (e.g. Ctrl+Q) returns the last
    state, whose outcome is still RUNNING; callers treat that as cancelled.
    """
    return TuiWizard(machine, state).run()
