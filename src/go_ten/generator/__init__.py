"""Template resolution and project materialization."""

from go_ten.generator.errors import (
    EmptyTemplateSetError,
    FilesystemError,
    GoTenError,
    MaterializationError,
    PlaceholderResolutionError,
    ProjectNameError,
    TargetExistsError,
    TemplateNotFoundError,
    TemplateResolutionError,
)
from go_ten.generator.materializer import (
    MaterializationResult,
    Materializer,
    OverwritePolicy,
)
from go_ten.generator.project import ProjectConfig, current_directory_name
from go_ten.generator.sources import (
    InMemoryTemplateSource,
    PackageTemplateSource,
    TemplateEntry,
    TemplateSource,
)

__all__ = [
    "EmptyTemplateSetError",
    "FilesystemError",
    "GoTenError",
    "InMemoryTemplateSource",
    "MaterializationError",
    "MaterializationResult",
    "Materializer",
    "OverwritePolicy",
    "PackageTemplateSource",
    "PlaceholderResolutionError",
    "ProjectConfig",
    "ProjectNameError",
    "TargetExistsError",
    "TemplateEntry",
    "TemplateNotFoundError",
    "TemplateResolutionError",
    "TemplateSource",
    "current_directory_name",
]
