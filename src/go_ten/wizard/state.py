"""Wizard state as a tagged union of per-stage records.

``WizardState.step`` holds exactly one of ``NameInput``, ``TypeSelect``,
``PackageSelect``, ``Summary`` or ``Success``. Each carries only the fields
that are meaningful in that stage (e.g. only ``NameInput`` owns a text
buffer), so combinations such as "typing a name while on the summary" cannot
be represented. All records are frozen; transitions build new values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

from go_ten.generator.materializer import MaterializationResult
from go_ten.generator.project import ProjectConfig
from go_ten.wizard.types import Option, SessionOutcome, Stage


@dataclass(frozen=True)
class NameInput:
    """Project name entry: an editable buffer with a cursor."""

    buffer: str = ""
    cursor: int = 0

    stage: ClassVar[Stage] = Stage.NAME_INPUT

    def __post_init__(self) -> None:
        if not 0 <= self.cursor <= len(self.buffer):
            raise ValueError(
                f"cursor {self.cursor} out of range for buffer of length {len(self.buffer)}"
            )


@dataclass(frozen=True)
class TypeSelect:
    """Application type selection."""

    cursor: int = 0

    stage: ClassVar[Stage] = Stage.TYPE_SELECT


@dataclass(frozen=True)
class PackageSelect:
    """Package variant selection."""

    cursor: int = 0

    stage: ClassVar[Stage] = Stage.PACKAGE_SELECT


@dataclass(frozen=True)
class Summary:
    """Review of the collected choices before generation."""

    stage: ClassVar[Stage] = Stage.SUMMARY


@dataclass(frozen=True)
class Success:
    """Project generated."""

    config: ProjectConfig
    result: MaterializationResult

    stage: ClassVar[Stage] = Stage.SUCCESS


StageState = Union[NameInput, TypeSelect, PackageSelect, Summary, Success]


@dataclass(frozen=True)
class WizardState:
    """Complete state of one wizard session.

    Attributes:
        step: Current stage record
        type_options: Selectable application types, in display order
        package_options: Selectable package variants, in display order
        selected_name: Confirmed project name ("." for the current directory)
        selected_type: Confirmed application type
        selected_package: Confirmed package variant
        last_error: Error to show once; cleared with ``acknowledge_error``
        last_failure: Message of the most recent failed generation
        terminated: True once the session should stop
    """

    type_options: tuple[Option, ...]
    package_options: tuple[Option, ...]
    step: StageState = field(default_factory=NameInput)
    selected_name: str | None = None
    selected_type: Option | None = None
    selected_package: Option | None = None
    last_error: str | None = None
    last_failure: str | None = None
    terminated: bool = False

    def __post_init__(self) -> None:
        if not self.type_options:
            raise ValueError("at least one application type is required")
        if not self.package_options:
            raise ValueError("at least one package variant is required")
        if isinstance(self.step, TypeSelect):
            _check_cursor(self.step.cursor, self.type_options)
        elif isinstance(self.step, PackageSelect):
            _check_cursor(self.step.cursor, self.package_options)

    @property
    def stage(self) -> Stage:
        return self.step.stage

    @property
    def completed(self) -> bool:
        """True if the project was generated."""
        return isinstance(self.step, Success)

    @property
    def outcome(self) -> SessionOutcome:
        if self.completed:
            return SessionOutcome.GENERATED
        if not self.terminated:
            return SessionOutcome.RUNNING
        if self.last_failure is not None:
            return SessionOutcome.FAILED
        return SessionOutcome.CANCELLED


def _check_cursor(cursor: int, options: tuple[Option, ...]) -> None:
    if not 0 <= cursor < len(options):
        raise ValueError(f"cursor {cursor} out of range for {len(options)} option(s)")
