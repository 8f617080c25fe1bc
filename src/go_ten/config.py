"""Configuration schema for go-ten.

Defines the optional go-ten.yml file using Pydantic models. The option lists
shown by the wizard live here, so new application types or package variants
only need a config entry and a matching template set.

Example:
    app_types:
      - label: Web API
        value: web-api
    packages:
      - label: stdlib
        value: stdlib
      - label: chi
        value: chi
    overwrite: fail  # or 'skip' or 'overwrite'
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from go_ten.generator.errors import ConfigError
from go_ten.generator.materializer import OverwritePolicy

CONFIG_ENV_VAR = "GO_TEN_CONFIG"
CONFIG_FILENAMES = ["go-ten.yml", "go-ten.yaml", ".go-ten.yml", ".go-ten.yaml"]

_IDENTIFIER = re.compile(r"^[A-Za-z0-9_-]+$")


class OptionConfig(BaseModel):
    """A selectable wizard option: display label and identifier."""

    label: str
    value: str

    model_config = {"frozen": True}

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        """Values form template set ids, so they share the name character set."""
        if not _IDENTIFIER.match(v):
            raise ValueError(
                f"Invalid option value '{v}'. Use letters, numbers, hyphens and underscores"
            )
        return v


def _default_app_types() -> list[OptionConfig]:
    return [OptionConfig(label="Web API", value="web-api")]


def _default_packages() -> list[OptionConfig]:
    return [OptionConfig(label="stdlib", value="stdlib")]


class GoTenConfig(BaseModel):
    """Root configuration for go-ten."""

    app_types: list[OptionConfig] = Field(default_factory=_default_app_types, min_length=1)
    packages: list[OptionConfig] = Field(default_factory=_default_packages, min_length=1)
    overwrite: OverwritePolicy = OverwritePolicy.FAIL

    model_config = {"frozen": True}

    @field_validator("overwrite", mode="before")
    @classmethod
    def parse_overwrite(cls, v: Any) -> Any:
        """Accept the policy name in any case."""
        if isinstance(v, str):
            return v.lower()
        return v

    @classmethod
    def from_yaml(cls, content: str) -> GoTenConfig:
        """Parse config from a YAML string. An empty document means defaults."""
        data = yaml.safe_load(content)
        return cls.model_validate(data or {})

    @classmethod
    def from_file(cls, path: Path | str) -> GoTenConfig:
        """Load config from a YAML file.

        Raises:
            ConfigError: If the file cannot be read, parsed or validated.
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
            return cls.from_yaml(content)
        except OSError as e:
            raise ConfigError(f"Cannot read config {path}: {e.strerror or e}", path) from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}", path) from e
        except ValidationError as e:
            raise ConfigError(f"Invalid config {path}:\n{e}", path) from e


def find_config(start_dir: Path | str | None = None) -> Path | None:
    """
    Find a go-ten config file.

    Searches in:
    1. start_dir (if provided), otherwise the current working directory
    2. Parent directories up to root

    Args:
        start_dir: Directory to start search from

    Returns:
        Path to config file, or None if not found
    """
    current = Path(start_dir).resolve() if start_dir is not None else Path.cwd().resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(path: Path | str | None = None) -> GoTenConfig:
    """
    Load configuration.

    Resolution order: explicit path, the GO_TEN_CONFIG environment variable,
    a go-ten.yml found by ``find_config``, then built-in defaults.

    Args:
        path: Explicit path to config file

    Returns:
        Parsed GoTenConfig

    Raises:
        ConfigError: If an explicit or discovered config file is invalid
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = env_path
        else:
            path = find_config()

    if path is None:
        return GoTenConfig()

    return GoTenConfig.from_file(path)
