"""Shared pytest fixtures for the go-ten test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from go_ten.generator.materializer import Materializer, OverwritePolicy
from go_ten.generator.sources import InMemoryTemplateSource
from go_ten.wizard.machine import WizardMachine
from go_ten.wizard.state import WizardState
from go_ten.wizard.types import Option

TYPE_OPTIONS = (
    Option("Web API", "web-api"),
    Option("CLI", "cli"),
    Option("Worker", "worker"),
)
PACKAGE_OPTIONS = (
    Option("stdlib", "stdlib"),
    Option("chi", "chi"),
)


@pytest.fixture
def template_source() -> InMemoryTemplateSource:
    """In-memory template sets covering templated, literal and nested files."""
    return InMemoryTemplateSource(
        {
            "web-api-stdlib": {
                "go.mod.tmpl": "module {{ProjectName}}\n",
                "README.md.tmpl": "# {{ProjectName}}\n\nType: {{AppType}}\n",
                "cmd/api/main.go": "package main\n\nfunc main() {}\n",
            },
            "cli-stdlib": {
                "main.go": "package main\n",
            },
            "worker-stdlib": {},
        }
    )


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Directory generated projects are written under."""
    root = tmp_path / "work"
    root.mkdir()
    return root


@pytest.fixture
def materializer(template_source: InMemoryTemplateSource, project_root: Path) -> Materializer:
    return Materializer(
        source=template_source,
        overwrite=OverwritePolicy.FAIL,
        base_dir=project_root,
    )


@pytest.fixture
def machine(materializer: Materializer, project_root: Path) -> WizardMachine:
    return WizardMachine(materializer=materializer, cwd=lambda: project_root)


@pytest.fixture
def initial_state(machine: WizardMachine) -> WizardState:
    return machine.initial_state(TYPE_OPTIONS, PACKAGE_OPTIONS)
