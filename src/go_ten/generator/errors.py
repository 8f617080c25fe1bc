"""Exception hierarchy for project generation.

Every failure raised while validating input or materializing a template set
derives from ``GoTenError`` so callers can catch one type. Materialization
failures additionally carry the files already written, since generation is
not transactional.
"""

from __future__ import annotations

from pathlib import Path


class GoTenError(Exception):
    """Base class for all go-ten errors."""

    pass


class ProjectNameError(GoTenError):
    """Raised when a project name fails validation."""

    pass


class ConfigError(GoTenError):
    """Raised when a configuration file cannot be loaded."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class MaterializationError(GoTenError):
    """Raised when a template set cannot be written to disk.

    Attributes:
        written: Files written before the failure. They are not rolled back.
    """

    def __init__(self, message: str, written: list[Path] | None = None) -> None:
        super().__init__(message)
        self.written: list[Path] = list(written or [])

    def __str__(self) -> str:
        message = super().__str__()
        if self.written:
            message += f" ({len(self.written)} file(s) already written)"
        return message


class TemplateResolutionError(MaterializationError):
    """Raised when a template set cannot be resolved."""

    pass


class TemplateNotFoundError(TemplateResolutionError):
    """Raised when no template set matches the requested identifier."""

    def __init__(self, set_id: str, available: list[str] | None = None) -> None:
        self.set_id = set_id
        self.available = sorted(available or [])
        hint = ", ".join(self.available) if self.available else "none"
        super().__init__(f"Template not found: {set_id} (available: {hint})")


class EmptyTemplateSetError(TemplateResolutionError):
    """Raised when a template set exists but contains no files."""

    def __init__(self, set_id: str) -> None:
        self.set_id = set_id
        super().__init__(f"Template set is empty or invalid: {set_id}")


class FilesystemError(MaterializationError):
    """Raised when a directory or file cannot be created or written."""

    pass


class TargetExistsError(FilesystemError):
    """Raised when output files already exist and overwriting is not allowed."""

    def __init__(self, conflicts: list[Path]) -> None:
        self.conflicts = list(conflicts)
        shown = ", ".join(str(p) for p in self.conflicts[:5])
        if len(self.conflicts) > 5:
            shown += f", ... ({len(self.conflicts) - 5} more)"
        super().__init__(
            f"Refusing to overwrite existing file(s): {shown}. "
            "Use --force to overwrite or --skip-existing to keep them."
        )


class PlaceholderResolutionError(MaterializationError):
    """Raised when a template references a field that does not exist.

    Also raised when a template file is not valid template syntax. Both
    indicate a defect in the template set rather than bad user input.
    """

    def __init__(
        self,
        template: str,
        token: str,
        line: int,
        written: list[Path] | None = None,
        invalid: bool = False,
    ) -> None:
        self.template = template
        self.token = token
        self.line = line
        if invalid:
            message = f"Invalid template {template} (line {line}): {token}"
        else:
            message = f"Unknown placeholder {token} in {template} (line {line})"
        super().__init__(message, written=written)
