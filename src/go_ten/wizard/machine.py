"""Transition function for the project wizard.

``WizardMachine.advance`` maps ``(state, event)`` to a new state. It has no
side effects except at the Summary confirmation, where it calls the
materializer synchronously and turns the outcome into either the Success
stage or a ``last_error`` on the Summary stage.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import replace
from pathlib import Path

from go_ten.config import GoTenConfig
from go_ten.generator.errors import GoTenError, ProjectNameError
from go_ten.generator.materializer import Materializer
from go_ten.generator.project import (
    PROJECT_NAME_PATTERN,
    ProjectConfig,
    current_directory_name,
)
from go_ten.wizard.state import (
    NameInput,
    PackageSelect,
    Success,
    Summary,
    TypeSelect,
    WizardState,
)
from go_ten.wizard.types import InputEvent, Key, Option

logger = logging.getLogger(__name__)

CURRENT_DIRECTORY = "."


def validate_project_name(name: str) -> None:
    """Check a project name against the allow-list.

    Accepts "." (generate into the current directory) or one or more
    letters, digits, hyphens and underscores. Path separators, whitespace and
    shell metacharacters are rejected.

    Raises:
        ProjectNameError: If the name is not acceptable.
    """
    if not name.strip():
        raise ProjectNameError("project name cannot be empty")

    if name == CURRENT_DIRECTORY:
        return

    if not PROJECT_NAME_PATTERN.fullmatch(name):
        raise ProjectNameError(
            "project name must contain only letters, numbers, hyphens, and underscores"
        )


def is_valid_project_name(name: str) -> bool:
    try:
        validate_project_name(name)
    except ProjectNameError:
        return False
    return True


def target_directory_for(name: str) -> str:
    """Display form of the directory a name generates into."""
    if name == CURRENT_DIRECTORY:
        return "./"
    return f"./{name}/"


def build_project_config(
    name: str,
    app_type: str,
    package_variant: str,
    cwd: Path | None = None,
) -> ProjectConfig:
    """Derive the ProjectConfig for a validated name and selections.

    "." resolves to the base name of ``cwd`` (default: the working directory)
    and generates in place.

    Raises:
        ProjectNameError: If the name is invalid, or "." is used at the
            filesystem root.
    """
    validate_project_name(name)
    if name == CURRENT_DIRECTORY:
        return ProjectConfig.in_place(current_directory_name(cwd), app_type, package_variant)
    return ProjectConfig.for_name(name, app_type, package_variant)


def derive_project_config(state: WizardState, cwd: Path | None = None) -> ProjectConfig:
    """Build the ProjectConfig from the confirmed selections of ``state``.

    Raises:
        ValueError: If a selection has not been confirmed yet.
        ProjectNameError: See ``build_project_config``.
    """
    if state.selected_name is None or state.selected_type is None or state.selected_package is None:
        raise ValueError("wizard selections are incomplete")
    return build_project_config(
        state.selected_name,
        state.selected_type.value,
        state.selected_package.value,
        cwd,
    )


def acknowledge_error(state: WizardState) -> WizardState:
    """Clear ``last_error`` after the driver has displayed it."""
    if state.last_error is None:
        return state
    return replace(state, last_error=None)


def options_from_config(config: GoTenConfig) -> tuple[tuple[Option, ...], tuple[Option, ...]]:
    """Convert configured option lists to wizard options."""
    return (
        tuple(Option(o.label, o.value) for o in config.app_types),
        tuple(Option(o.label, o.value) for o in config.packages),
    )


class WizardMachine:
    """Applies input events to wizard states.

    Attributes:
        materializer: Used at the Summary confirmation
        cwd: Returns the directory "." refers to
    """

    def __init__(
        self,
        materializer: Materializer | None = None,
        cwd: Callable[[], Path] | None = None,
    ) -> None:
        self.materializer = materializer if materializer is not None else Materializer()
        self.cwd = cwd if cwd is not None else Path.cwd

    def initial_state(
        self,
        type_options: Sequence[Option],
        package_options: Sequence[Option],
    ) -> WizardState:
        """Create the state a new session starts in."""
        return WizardState(
            type_options=tuple(type_options),
            package_options=tuple(package_options),
        )

    def advance(self, state: WizardState, event: InputEvent) -> WizardState:
        """Apply one input event.

        Args:
            state: Current state
            event: Input event

        Returns:
            The next state. Terminated states are returned unchanged.
        """
        if state.terminated:
            return state

        step = state.step

        if isinstance(step, Success):
            # Any key leaves the success screen
            return replace(state, terminated=True)

        if event.key is Key.CANCEL:
            return replace(state, terminated=True)

        if isinstance(step, NameInput):
            return self._advance_name(state, step, event)
        if isinstance(step, TypeSelect):
            return self._advance_type(state, step, event)
        if isinstance(step, PackageSelect):
            return self._advance_package(state, step, event)
        return self._advance_summary(state, event)

    def _advance_name(self, state: WizardState, step: NameInput, event: InputEvent) -> WizardState:
        buffer, cursor = step.buffer, step.cursor

        if event.key is Key.CHAR:
            buffer = buffer[:cursor] + event.text + buffer[cursor:]
            cursor += len(event.text)
        elif event.key is Key.BACKSPACE:
            if cursor > 0:
                buffer = buffer[: cursor - 1] + buffer[cursor:]
                cursor -= 1
        elif event.key is Key.LEFT:
            cursor = max(0, cursor - 1)
        elif event.key is Key.RIGHT:
            cursor = min(len(buffer), cursor + 1)
        elif event.key is Key.CONFIRM:
            try:
                validate_project_name(buffer)
            except ProjectNameError as e:
                return replace(state, last_error=str(e))
            return replace(
                state,
                step=TypeSelect(),
                selected_name=buffer,
                last_error=None,
            )
        else:
            return state

        return replace(state, step=NameInput(buffer=buffer, cursor=cursor))

    def _advance_type(self, state: WizardState, step: TypeSelect, event: InputEvent) -> WizardState:
        options = state.type_options
        if event.key is Key.CONFIRM:
            return replace(
                state,
                step=PackageSelect(),
                selected_type=options[step.cursor],
                last_error=None,
            )
        cursor = _move_cursor(step.cursor, len(options), event)
        if cursor == step.cursor:
            return state
        return replace(state, step=TypeSelect(cursor=cursor))

    def _advance_package(
        self, state: WizardState, step: PackageSelect, event: InputEvent
    ) -> WizardState:
        options = state.package_options
        if event.key is Key.CONFIRM:
            return replace(
                state,
                step=Summary(),
                selected_package=options[step.cursor],
                last_error=None,
            )
        cursor = _move_cursor(step.cursor, len(options), event)
        if cursor == step.cursor:
            return state
        return replace(state, step=PackageSelect(cursor=cursor))

    def _advance_summary(self, state: WizardState, event: InputEvent) -> WizardState:
        if event.key is not Key.CONFIRM:
            return state

        try:
            config = derive_project_config(state, self.cwd())
            result = self.materializer.materialize(config)
        except (GoTenError, OSError) as e:
            message = f"Generation failed: {e}"
            logger.debug("Summary confirmation failed: %s", e)
            return replace(state, last_error=message, last_failure=message)

        return replace(
            state,
            step=Success(config=config, result=result),
            last_error=None,
            last_failure=None,
        )


def _move_cursor(cursor: int, count: int, event: InputEvent) -> int:
    """Move a list cursor one step, clamped to ``[0, count - 1]``."""
    if event.key is Key.UP:
        return max(0, cursor - 1)
    if event.key is Key.DOWN:
        return min(count - 1, cursor + 1)
    return cursor
