"""Write a template set to disk for a project configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from rich.console import Console

from go_ten.generator.errors import (
    EmptyTemplateSetError,
    FilesystemError,
    MaterializationError,
    PlaceholderResolutionError,
    TargetExistsError,
)
from go_ten.generator.placeholders import render_template, strip_template_suffix
from go_ten.generator.project import ProjectConfig
from go_ten.generator.sources import (
    PackageTemplateSource,
    TemplateEntry,
    TemplateSource,
)

logger = logging.getLogger(__name__)
console = Console()


class OverwritePolicy(Enum):
    """What to do when an output file already exists."""

    FAIL = "fail"  # Abort before writing anything
    SKIP = "skip"  # Keep the existing file
    OVERWRITE = "overwrite"  # Replace the existing file


@dataclass
class MaterializationResult:
    """Outcome of a successful materialization.

    Attributes:
        target: Resolved target directory
        written: Files written, in write order
        skipped: Existing files left untouched (SKIP policy only)
        created_dirs: Directories that did not exist before
    """

    target: Path
    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    created_dirs: list[Path] = field(default_factory=list)


@dataclass(frozen=True)
class _PlannedFile:
    entry: TemplateEntry
    path: Path
    content: bytes


class Materializer:
    """Resolve a template set and write it into the target directory.

    Rendering happens before anything touches the filesystem, so unknown
    template sets and placeholder errors never leave partial output. A
    failure while writing aborts the run; files already written stay on disk
    and are reported on the raised ``MaterializationError``.
    """

    def __init__(
        self,
        source: TemplateSource | None = None,
        overwrite: OverwritePolicy = OverwritePolicy.FAIL,
        base_dir: Path | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize the materializer.

        Args:
            source: Template source (defaults to the bundled templates)
            overwrite: Policy for output files that already exist
            base_dir: Directory that relative target directories resolve
                against (defaults to the working directory at call time)
            verbose: Print a line per written file to the console
        """
        self.source = source if source is not None else PackageTemplateSource()
        self.overwrite = overwrite
        self.base_dir = base_dir
        self.verbose = verbose

    def resolve(self, config: ProjectConfig) -> list[TemplateEntry]:
        """Return the entries of the template set for ``config``.

        Raises:
            TemplateNotFoundError: If the set does not exist.
            EmptyTemplateSetError: If the set contains no files.
        """
        entries = self.source.list_files(config.template_id)
        if not any(not entry.is_dir for entry in entries):
            raise EmptyTemplateSetError(config.template_id)
        return entries

    def materialize(self, config: ProjectConfig) -> MaterializationResult:
        """Generate the project described by ``config``.

        Args:
            config: Finished project configuration

        Returns:
            MaterializationResult listing written and skipped files.

        Raises:
            TemplateResolutionError: Unknown or empty template set.
            PlaceholderResolutionError: A template uses an unknown placeholder.
            FilesystemError: A directory or file could not be written, or
                output files exist under the FAIL policy.
        """
        try:
            entries = self.resolve(config)
            target = config.target_path(self.base_dir)
            directories, files = self._plan(entries, target, config)
        except PlaceholderResolutionError as e:
            logger.error("Template defect in %s: %s", config.template_id, e)
            raise
        except MaterializationError as e:
            logger.warning("Cannot generate %s: %s", config.project_name, e)
            raise

        if self.overwrite is OverwritePolicy.FAIL:
            conflicts = [f.path for f in files if f.path.exists()]
            if conflicts:
                logger.warning("Output files already exist: %s", conflicts)
                raise TargetExistsError(conflicts)

        result = MaterializationResult(target=target)

        if not config.use_current_directory:
            self._ensure_directory(target, result)

        for directory in directories:
            self._ensure_directory(directory, result)

        for planned in files:
            self._write(planned, result)

        logger.debug(
            "Generated %s into %s (%d written, %d skipped)",
            config.template_id,
            target,
            len(result.written),
            len(result.skipped),
        )
        return result

    def _plan(
        self,
        entries: list[TemplateEntry],
        target: Path,
        config: ProjectConfig,
    ) -> tuple[list[Path], list[_PlannedFile]]:
        """Map entries to output paths and render template contents."""
        values = config.placeholder_values()
        root = target.resolve()
        directories: list[Path] = []
        files: list[_PlannedFile] = []

        for entry in entries:
            relative = strip_template_suffix(entry.path) if entry.is_template else entry.path
            path = target / relative
            if not path.resolve().is_relative_to(root):
                raise FilesystemError(f"Template path escapes target directory: {entry.path}")

            if entry.is_dir:
                directories.append(path)
                continue

            content = entry.content
            if entry.is_template:
                try:
                    text = content.decode("utf-8")
                except UnicodeDecodeError as e:
                    raise MaterializationError(
                        f"Template {entry.path} is not valid UTF-8: {e}"
                    ) from e
                rendered = render_template(text, values, template=entry.path)
                try:
                    content = rendered.encode("utf-8")
                except UnicodeEncodeError as e:
                    raise MaterializationError(
                        f"Rendered {entry.path} is not encodable as UTF-8: {e.reason}"
                    ) from e

            files.append(_PlannedFile(entry=entry, path=path, content=content))

        return directories, files

    def _ensure_directory(self, path: Path, result: MaterializationResult) -> None:
        """Create ``path`` and its parents; an existing directory is fine."""
        if path.is_dir():
            return
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Cannot create directory %s: %s", path, e)
            raise FilesystemError(
                f"Failed to create directory {path}: {e.strerror or e}",
                written=result.written,
            ) from e
        result.created_dirs.append(path)

    def _write(self, planned: _PlannedFile, result: MaterializationResult) -> None:
        """Write one planned file according to the overwrite policy."""
        path = planned.path
        if path.exists() and self.overwrite is OverwritePolicy.SKIP:
            result.skipped.append(path)
            if self.verbose:
                console.print(f"    [yellow]-[/yellow] Skipped existing {path}")
            return

        self._ensure_directory(path.parent, result)
        try:
            path.write_bytes(planned.content)
        except OSError as e:
            logger.warning("Cannot write %s: %s", path, e)
            raise FilesystemError(
                f"Failed to write {planned.entry.path} to {path}: {e.strerror or e}",
                written=result.written,
            ) from e

        result.written.append(path)
        logger.debug("Wrote %s", path)
        if self.verbose:
            console.print(f"    [green]✓[/green] Created {path}")
