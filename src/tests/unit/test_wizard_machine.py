"""Unit tests for the wizard state machine."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from go_ten.generator.errors import ProjectNameError
from go_ten.generator.materializer import Materializer
from go_ten.generator.project import current_directory_name
from go_ten.generator.sources import InMemoryTemplateSource
from go_ten.wizard.machine import (
    WizardMachine,
    acknowledge_error,
    build_project_config,
    derive_project_config,
    is_valid_project_name,
    validate_project_name,
)
from go_ten.wizard.state import (
    NameInput,
    PackageSelect,
    Success,
    Summary,
    TypeSelect,
    WizardState,
)
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
    Option,
    SessionOutcome,
    Stage,
)


def type_text(machine: WizardMachine, state: WizardState, text: str) -> WizardState:
    for char in text:
        state = machine.advance(state, InputEvent.char(char))
    return state


def to_summary(
    machine: WizardMachine,
    state: WizardState,
    name: str = "demo",
    type_moves: int = 0,
    package_moves: int = 0,
) -> WizardState:
    state = type_text(machine, state, name)
    state = machine.advance(state, CONFIRM)
    for _ in range(type_moves):
        state = machine.advance(state, DOWN)
    state = machine.advance(state, CONFIRM)
    for _ in range(package_moves):
        state = machine.advance(state, DOWN)
    return machine.advance(state, CONFIRM)


@pytest.mark.unit
class TestProjectNameValidation:
    """Allow-list validation of project names."""

    @pytest.mark.parametrize(
        "name",
        ["demo", "my-api", "my_api", "API2", "a", "-", "_x_", "0123", "."],
    )
    def test_accepts(self, name: str) -> None:
        """Test names made of allowed characters pass."""
        validate_project_name(name)
        assert is_valid_project_name(name)

    @pytest.mark.parametrize(
        "name",
        [
            "my api",
            "a/b",
            "../evil",
            "user@host",
            "name!",
            "$(rm)",
            "a;b",
            "..",
            "./demo",
            "demo\n",
            "café",
            " demo",
        ],
    )
    def test_rejects_invalid_characters(self, name: str) -> None:
        """Test separators, whitespace and shell characters are rejected."""
        with pytest.raises(ProjectNameError, match="letters, numbers"):
            validate_project_name(name)
        assert not is_valid_project_name(name)

    @pytest.mark.parametrize("name", ["", " ", "   ", "\t"])
    def test_rejects_empty(self, name: str) -> None:
        """Test empty and whitespace-only names are rejected."""
        with pytest.raises(ProjectNameError, match="cannot be empty"):
            validate_project_name(name)


@pytest.mark.unit
@pytest.mark.wizard
class TestNameInputStage:
    """Text editing in the name input stage."""

    def test_initial_state(self, initial_state: WizardState) -> None:
        """Test a session starts on an empty name input."""
        assert initial_state.stage is Stage.NAME_INPUT
        assert initial_state.step == NameInput(buffer="", cursor=0)
        assert initial_state.selected_name is None
        assert initial_state.last_error is None
        assert not initial_state.terminated
        assert initial_state.outcome is SessionOutcome.RUNNING

    def test_typing_inserts_at_cursor(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        """Test characters are inserted at the cursor, not appended."""
        state = type_text(machine, initial_state, "dmo")
        state = machine.advance(state, LEFT)
        state = machine.advance(state, LEFT)
        state = machine.advance(state, InputEvent.char("e"))

        assert state.step == NameInput(buffer="demo", cursor=2)

    def test_multi_character_input_advances_cursor_by_length(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        state = machine.advance(initial_state, InputEvent.char("my-"))
        state = machine.advance(state, InputEvent.char("api"))

        assert state.step == NameInput(buffer="my-api", cursor=6)

    @pytest.mark.parametrize(("inserted", "deleted"), [(1, 0), (1, 1), (5, 2), (5, 5), (8, 3)])
    def test_cursor_after_insertions_and_backspaces(
        self,
        machine: WizardMachine,
        initial_state: WizardState,
        inserted: int,
        deleted: int,
    ) -> None:
        """Test N insertions and M backspaces leave the cursor at N - M."""
        state = type_text(machine, initial_state, "x" * inserted)
        for _ in range(deleted):
            state = machine.advance(state, BACKSPACE)

        assert isinstance(state.step, NameInput)
        assert state.step.cursor == inserted - deleted
        assert len(state.step.buffer) == inserted - deleted

    def test_backspace_at_start_does_nothing(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        state = type_text(machine, initial_state, "ab")
        state = machine.advance(state, LEFT)
        state = machine.advance(state, LEFT)
        state = machine.advance(state, BACKSPACE)

        assert state.step == NameInput(buffer="ab", cursor=0)

    def test_backspace_deletes_before_cursor(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        state = type_text(machine, initial_state, "abc")
        state = machine.advance(state, LEFT)
        state = machine.advance(state, BACKSPACE)

        assert state.step == NameInput(buffer="ac", cursor=1)

    def test_cursor_movement_is_clamped(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        """Test left and right stop at the buffer edges."""
        state = machine.advance(initial_state, LEFT)
        assert state.step == NameInput(buffer="", cursor=0)

        state = type_text(machine, state, "ab")
        for _ in range(3):
            state = machine.advance(state, RIGHT)
        assert state.step == NameInput(buffer="ab", cursor=2)

        for _ in range(5):
            state = machine.advance(state, LEFT)
        assert state.step == NameInput(buffer="ab", cursor=0)

    def test_navigation_keys_without_meaning_are_ignored(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        state = type_text(machine, initial_state, "ab")

        assert machine.advance(state, UP) == state
        assert machine.advance(state, DOWN) == state
        assert machine.advance(state, SPACE) == state

    def test_confirm_valid_name_moves_to_type_select(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        """Test a valid name advances to type selection."""
        state = type_text(machine, initial_state, "demo")
        state = machine.advance(state, CONFIRM)

        assert state.stage is Stage.TYPE_SELECT
        assert state.step == TypeSelect(cursor=0)
        assert state.selected_name == "demo"
        assert state.last_error is None

    def test_confirm_empty_name_sets_error(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        state = machine.advance(initial_state, CONFIRM)

        assert state.stage is Stage.NAME_INPUT
        assert state.last_error == "project name cannot be empty"
        assert state.selected_name is None

    def test_confirm_invalid_name_keeps_buffer(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        """Test an invalid name keeps the buffer for correction."""
        state = type_text(machine, initial_state, "my api")
        state = machine.advance(state, CONFIRM)

        assert state.stage is Stage.NAME_INPUT
        assert state.step == NameInput(buffer="my api", cursor=6)
        assert state.last_error is not None
        assert "letters, numbers" in state.last_error

    def test_error_then_correction(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        state = type_text(machine, initial_state, "a/b")
        state = machine.advance(state, CONFIRM)
        state = acknowledge_error(state)
        state = machine.advance(state, LEFT)
        state = machine.advance(state, BACKSPACE)
        state = machine.advance(state, InputEvent.char("-"))
        state = machine.advance(state, CONFIRM)

        assert state.stage is Stage.TYPE_SELECT
        assert state.selected_name == "a-b"

    def test_dot_is_accepted(self, machine: WizardMachine, initial_state: WizardState) -> None:
        state = type_text(machine, initial_state, ".")
        state = machine.advance(state, CONFIRM)

        assert state.stage is Stage.TYPE_SELECT
        assert state.selected_name == "."


@pytest.mark.unit
@pytest.mark.wizard
class TestSelectionStages:
    """Application type and package selection."""

    def test_up_from_first_option_stays(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        state = machine.advance(type_text(machine, initial_state, "demo"), CONFIRM)
        state = machine.advance(state, UP)

        assert state.step == TypeSelect(cursor=0)

    def test_down_from_last_option_stays(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        """Test the cursor does not wrap past the last option."""
        state = machine.advance(type_text(machine, initial_state, "demo"), CONFIRM)
        last = len(state.type_options) - 1
        for _ in range(last + 3):
            state = machine.advance(state, DOWN)

        assert state.step == TypeSelect(cursor=last)

    def test_down_then_up(self, machine: WizardMachine, initial_state: WizardState) -> None:
        state = machine.advance(type_text(machine, initial_state, "demo"), CONFIRM)
        state = machine.advance(state, DOWN)
        state = machine.advance(state, DOWN)
        state = machine.advance(state, UP)

        assert state.step == TypeSelect(cursor=1)

    def test_confirm_type_records_selection(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        state = machine.advance(type_text(machine, initial_state, "demo"), CONFIRM)
        state = machine.advance(state, DOWN)
        state = machine.advance(state, CONFIRM)

        assert state.stage is Stage.PACKAGE_SELECT
        assert state.step == PackageSelect(cursor=0)
        assert state.selected_type == Option("CLI", "cli")

    def test_package_cursor_is_clamped(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        state = machine.advance(type_text(machine, initial_state, "demo"), CONFIRM)
        state = machine.advance(state, CONFIRM)
        state = machine.advance(state, UP)
        assert state.step == PackageSelect(cursor=0)

        for _ in range(5):
            state = machine.advance(state, DOWN)
        assert state.step == PackageSelect(cursor=len(state.package_options) - 1)

    def test_confirm_package_moves_to_summary(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        """Test confirming a package shows the summary."""
        state = to_summary(machine, initial_state, package_moves=1)

        assert state.stage is Stage.SUMMARY
        assert state.step == Summary()
        assert state.selected_name == "demo"
        assert state.selected_type == Option("Web API", "web-api")
        assert state.selected_package == Option("chi", "chi")

    def test_single_option_list(self, machine: WizardMachine) -> None:
        state = machine.initial_state([Option("Web API", "web-api")], [Option("stdlib", "stdlib")])
        state = machine.advance(type_text(machine, state, "demo"), CONFIRM)
        state = machine.advance(state, DOWN)
        assert state.step == TypeSelect(cursor=0)

        state = machine.advance(state, CONFIRM)
        state = machine.advance(state, UP)
        assert state.step == PackageSelect(cursor=0)

    def test_empty_option_lists_are_rejected(self, machine: WizardMachine) -> None:
        with pytest.raises(ValueError, match="application type"):
            machine.initial_state([], [Option("stdlib", "stdlib")])
        with pytest.raises(ValueError, match="package variant"):
            machine.initial_state([Option("Web API", "web-api")], [])


@pytest.mark.unit
@pytest.mark.wizard
class TestSummaryStage:
    """Generation at the summary stage."""

    def test_confirm_generates_project(
        self,
        machine: WizardMachine,
        initial_state: WizardState,
        project_root: Path,
    ) -> None:
        """Test confirming the summary writes the project."""
        state = to_summary(machine, initial_state)
        state = machine.advance(state, CONFIRM)

        assert state.stage is Stage.SUCCESS
        assert isinstance(state.step, Success)
        assert state.step.config.project_name == "demo"
        assert state.step.config.target_directory == "./demo/"
        assert (project_root / "demo" / "go.mod").read_text() == "module demo\n"
        assert state.outcome is SessionOutcome.GENERATED
        assert not state.terminated

    def test_unknown_template_stays_in_summary(
        self,
        machine: WizardMachine,
        initial_state: WizardState,
        project_root: Path,
    ) -> None:
        """Test a missing template set keeps the summary and creates nothing."""
        # web-api-chi does not exist in the in-memory source
        state = to_summary(machine, initial_state, package_moves=1)
        state = machine.advance(state, CONFIRM)

        assert state.stage is Stage.SUMMARY
        assert state.last_error
        assert "web-api-chi" in state.last_error
        assert state.last_failure == state.last_error
        assert list(project_root.iterdir()) == []

    def test_empty_template_set_stays_in_summary(
        self,
        machine: WizardMachine,
        initial_state: WizardState,
        project_root: Path,
    ) -> None:
        state = to_summary(machine, initial_state, type_moves=2)
        state = machine.advance(state, CONFIRM)

        assert state.stage is Stage.SUMMARY
        assert state.last_error is not None
        assert "empty" in state.last_error
        assert list(project_root.iterdir()) == []

    def test_retry_after_failure(
        self,
        machine: WizardMachine,
        initial_state: WizardState,
        project_root: Path,
    ) -> None:
        """Test generation can be retried after the obstacle is removed."""
        (project_root / "demo").write_text("not a directory")

        state = to_summary(machine, initial_state)
        state = machine.advance(state, CONFIRM)
        assert state.stage is Stage.SUMMARY
        assert state.last_error is not None

        (project_root / "demo").unlink()
        state = machine.advance(acknowledge_error(state), CONFIRM)

        assert state.stage is Stage.SUCCESS
        assert state.last_failure is None

    def test_cancel_after_failure_reports_failed(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        state = to_summary(machine, initial_state, package_moves=1)
        state = machine.advance(state, CONFIRM)
        state = machine.advance(state, CANCEL)

        assert state.terminated
        assert state.outcome is SessionOutcome.FAILED

    def test_other_keys_do_nothing(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        state = to_summary(machine, initial_state)

        for event in (UP, DOWN, LEFT, RIGHT, BACKSPACE, SPACE, InputEvent.char("x")):
            assert machine.advance(state, event) == state

    def test_current_directory_scenario(self, tmp_path: Path) -> None:
        """Test '.' generates into the working directory under its name."""
        sandbox = tmp_path / "sandbox"
        sandbox.mkdir()
        source = InMemoryTemplateSource(
            {"web-api-stdlib": {"go.mod.tmpl": "module {{ProjectName}}"}}
        )
        machine = WizardMachine(
            materializer=Materializer(source=source, base_dir=sandbox),
            cwd=lambda: sandbox,
        )
        state = machine.initial_state([Option("Web API", "web-api")], [Option("stdlib", "stdlib")])

        state = to_summary(machine, state, name=".")
        config = derive_project_config(state, sandbox)
        assert config.project_name == "sandbox"
        assert config.module_name == "sandbox"
        assert config.use_current_directory is True
        assert config.target_directory == "."

        state = machine.advance(state, CONFIRM)
        assert isinstance(state.step, Success)
        assert state.step.config.project_name == "sandbox"
        assert (sandbox / "go.mod").read_text() == "module sandbox"

    @pytest.mark.skipif(
        sys.platform in ("darwin", "win32"), reason="filesystem requires UTF-8 names"
    )
    def test_current_directory_with_undecodable_name(self, tmp_path: Path) -> None:
        """Test '.' in a directory whose name is not UTF-8 stays in Summary."""
        workdir = tmp_path / os.fsdecode(b"proj\xff")
        workdir.mkdir()
        source = InMemoryTemplateSource(
            {"web-api-stdlib": {"go.mod.tmpl": "module {{ProjectName}}"}}
        )
        machine = WizardMachine(
            materializer=Materializer(source=source, base_dir=workdir),
            cwd=lambda: workdir,
        )
        state = machine.initial_state([Option("Web API", "web-api")], [Option("stdlib", "stdlib")])

        state = machine.advance(to_summary(machine, state, name="."), CONFIRM)

        assert isinstance(state.step, Summary)
        assert not state.terminated
        assert state.last_error is not None
        assert state.last_error.startswith("Generation failed: ")
        assert "not a valid project name" in state.last_error
        assert list(workdir.iterdir()) == []

    def test_current_directory_with_space_in_name(self, tmp_path: Path) -> None:
        workdir = tmp_path / "my project"
        workdir.mkdir()
        source = InMemoryTemplateSource(
            {"web-api-stdlib": {"go.mod.tmpl": "module {{ProjectName}}"}}
        )
        machine = WizardMachine(
            materializer=Materializer(source=source, base_dir=workdir),
            cwd=lambda: workdir,
        )
        state = machine.initial_state([Option("Web API", "web-api")], [Option("stdlib", "stdlib")])

        state = machine.advance(to_summary(machine, state, name="."), CONFIRM)

        assert isinstance(state.step, Summary)
        assert "'my project'" in (state.last_error or "")
        assert not (workdir / "go.mod").exists()


@pytest.mark.unit
@pytest.mark.wizard
class TestTermination:
    """Cancel and success-exit semantics."""

    @pytest.mark.parametrize("moves", [0, 1, 2, 3])
    def test_cancel_terminates_in_any_stage(
        self, machine: WizardMachine, initial_state: WizardState, moves: int
    ) -> None:
        """Test cancel ends the session without generating."""
        state = type_text(machine, initial_state, "demo")
        for _ in range(moves):
            state = machine.advance(state, CONFIRM)
        stage = state.stage

        state = machine.advance(state, CANCEL)

        assert state.terminated
        assert state.stage is stage
        assert state.outcome is SessionOutcome.CANCELLED

    @pytest.mark.parametrize("event", [CONFIRM, CANCEL, UP, InputEvent.char("q")])
    def test_any_key_on_success_terminates(
        self, machine: WizardMachine, initial_state: WizardState, event: InputEvent
    ) -> None:
        """Test the success screen closes on any key."""
        state = machine.advance(to_summary(machine, initial_state), CONFIRM)
        state = machine.advance(state, event)

        assert state.terminated
        assert state.stage is Stage.SUCCESS
        assert state.outcome is SessionOutcome.GENERATED

    def test_terminated_state_ignores_events(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        state = machine.advance(initial_state, CANCEL)

        assert machine.advance(state, InputEvent.char("a")) is state
        assert machine.advance(state, CONFIRM) is state


@pytest.mark.unit
class TestDerivation:
    """ProjectConfig derivation from names."""

    def test_named_project(self) -> None:
        config = build_project_config("demo", "web-api", "stdlib")

        assert config.project_name == "demo"
        assert config.module_name == "demo"
        assert config.target_directory == "./demo/"
        assert config.use_current_directory is False
        assert config.template_id == "web-api-stdlib"

    def test_current_directory_at_root_fails(self) -> None:
        """Test '.' at the filesystem root has no usable name."""
        with pytest.raises(ProjectNameError, match="root directory"):
            build_project_config(".", "web-api", "stdlib", cwd=Path("/"))

    @pytest.mark.parametrize("dirname", ["my project", "semi;colon", "new\nline"])
    def test_current_directory_with_invalid_name_fails(
        self, tmp_path: Path, dirname: str
    ) -> None:
        """Test '.' applies the project-name rules to the directory name."""
        workdir = tmp_path / dirname
        workdir.mkdir()

        with pytest.raises(ProjectNameError, match="not a valid project name"):
            current_directory_name(workdir)
        with pytest.raises(ProjectNameError):
            build_project_config(".", "web-api", "stdlib", cwd=workdir)

    def test_current_directory_with_valid_name(self, tmp_path: Path) -> None:
        workdir = tmp_path / "my_api-2"
        workdir.mkdir()

        assert current_directory_name(workdir) == "my_api-2"

    def test_incomplete_selections(self, initial_state: WizardState) -> None:
        with pytest.raises(ValueError, match="incomplete"):
            derive_project_config(initial_state)

    def test_acknowledge_error_clears_only_error(
        self, machine: WizardMachine, initial_state: WizardState
    ) -> None:
        state = machine.advance(initial_state, CONFIRM)
        cleared = acknowledge_error(state)

        assert state.last_error is not None
        assert cleared.last_error is None
        assert cleared.step == state.step
        assert acknowledge_error(cleared) is cleared
