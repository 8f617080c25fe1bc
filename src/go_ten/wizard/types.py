"""Type definitions for the wizard system."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class WizardMode(Enum):
    """Wizard interaction modes."""

    PROMPT = "prompt"  # Sequential questionary prompts
    TUI = "tui"  # Full-screen Textual TUI, key by key


class Stage(Enum):
    """Wizard stages, in the order they are visited."""

    NAME_INPUT = "name_input"
    TYPE_SELECT = "type_select"
    PACKAGE_SELECT = "package_select"
    SUMMARY = "summary"
    SUCCESS = "success"


class Key(Enum):
    """Discrete input events understood by the state machine."""

    CHAR = "char"
    BACKSPACE = "backspace"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    SPACE = "space"
    CONFIRM = "confirm"
    CANCEL = "cancel"


@dataclass(frozen=True)
class InputEvent:
    """A single input event.

    Attributes:
        key: Event kind
        text: Typed characters (CHAR events only)
    """

    key: Key
    text: str = ""

    @classmethod
    def char(cls, text: str) -> InputEvent:
        return cls(Key.CHAR, text)


BACKSPACE = InputEvent(Key.BACKSPACE)
LEFT = InputEvent(Key.LEFT)
RIGHT = InputEvent(Key.RIGHT)
UP = InputEvent(Key.UP)
DOWN = InputEvent(Key.DOWN)
SPACE = InputEvent(Key.SPACE)
CONFIRM = InputEvent(Key.CONFIRM)
CANCEL = InputEvent(Key.CANCEL)


@dataclass(frozen=True)
class Option:
    """A selectable option: what the user sees and the identifier behind it."""

    label: str
    value: str


class SessionOutcome(Enum):
    """How a wizard session ended, reported to the entry point."""

    RUNNING = "running"
    GENERATED = "generated"  # Project materialized
    CANCELLED = "cancelled"  # User quit before generating
    FAILED = "failed"  # User quit after a failed generation
