"""Project configuration handed from the wizard to the materializer."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from go_ten.generator.errors import ProjectNameError

TEMPLATE_ID_SEPARATOR = "-"
PROJECT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass(frozen=True)
class ProjectConfig:
    """Immutable description of the project to generate.

    Attributes:
        project_name: Name of the project, e.g. "my-api" or the name of the
            current directory when generating in place
        module_name: Go module name (same as project_name for now)
        app_type: Application type identifier, e.g. "web-api"
        package_variant: Package variant identifier, e.g. "stdlib"
        target_directory: "./my-api/" or "." when generating in place
        use_current_directory: True if the user entered "."
    """

    project_name: str
    module_name: str
    app_type: str
    package_variant: str
    target_directory: str
    use_current_directory: bool = False

    @classmethod
    def for_name(
        cls,
        project_name: str,
        app_type: str,
        package_variant: str,
    ) -> ProjectConfig:
        """Build a config that generates into ``./<project_name>/``."""
        return cls(
            project_name=project_name,
            module_name=project_name,
            app_type=app_type,
            package_variant=package_variant,
            target_directory=f"./{project_name}/",
            use_current_directory=False,
        )

    @classmethod
    def in_place(
        cls,
        project_name: str,
        app_type: str,
        package_variant: str,
    ) -> ProjectConfig:
        """Build a config that generates into the current directory."""
        return cls(
            project_name=project_name,
            module_name=project_name,
            app_type=app_type,
            package_variant=package_variant,
            target_directory=".",
            use_current_directory=True,
        )

    @property
    def template_id(self) -> str:
        """Identifier of the template set, e.g. "web-api-stdlib"."""
        return f"{self.app_type}{TEMPLATE_ID_SEPARATOR}{self.package_variant}"

    def target_path(self, base_dir: Path | None = None) -> Path:
        """Resolve the target directory against ``base_dir`` (default: cwd)."""
        base = base_dir if base_dir is not None else Path.cwd()
        return base / self.target_directory

    def placeholder_values(self) -> dict[str, str]:
        """Values available to ``{{Name}}`` placeholders in template files."""
        return {
            "ProjectName": self.project_name,
            "ModuleName": self.module_name,
            "AppType": self.app_type,
            "Package": self.package_variant,
            "PackageVariant": self.package_variant,
            "TargetDir": self.target_directory,
            "UseCurrentDir": "true" if self.use_current_directory else "false",
        }


def current_directory_name(cwd: Path | None = None) -> str:
    """Return the base name of the working directory.

    Args:
        cwd: Directory to inspect (defaults to the process working directory)

    Returns:
        The last path component, used as the project name for in-place
        generation.

    Raises:
        ProjectNameError: If the directory is the filesystem root, or its
            name is not a valid project name.
    """
    path = (cwd if cwd is not None else Path.cwd()).resolve()
    name = path.name
    if not name or name in (".", "/"):
        raise ProjectNameError("cannot determine project name from root directory")
    if not PROJECT_NAME_PATTERN.fullmatch(name):
        raise ProjectNameError(
            f"current directory name {name!r} is not a valid project name; "
            "use letters, numbers, hyphens, and underscores only"
        )
    return name
